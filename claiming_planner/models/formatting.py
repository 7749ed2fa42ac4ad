"""
Formatting and parsing utilities for ages, dates and dollar amounts.

Ages are carried through the engine as fractional years, where ``year:month``
text means ``year + month / 12``. This module converts between the two
representations and produces the calendar labels used by the reports.
"""

import math
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

FIRST_CLAIMING_AGE = 62
LAST_CLAIMING_AGE = 70
CLAIMING_MONTHS = (LAST_CLAIMING_AGE - FIRST_CLAIMING_AGE) * 12  # 96
MIN_RANGE_STEP = 1 / 12

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


class AgeFormat(str, Enum):
    """Textual representations of an age in years and months."""

    SHORT = "short"  # "64 y,  5 m"
    LONG = "long"  # "64 years, 5 months"
    COLON = "colon"  # "64:5"
    COMPACT = "compact"  # "64:5", or "64" on a whole year
    WORDS = "words"  # "64 years  5 months", or "64 years" on a whole year


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, so 4.5 -> 5."""
    return math.floor(value + 0.5)


def split_years_months(age: float) -> Tuple[int, int]:
    """
    Split a fractional age into whole years and the nearest month.

    A month that rounds up to 12 carries into the next year.
    """
    years = math.floor(age)
    months = round_half_up((age - years) * 12)
    if months == 12:
        years += 1
        months = 0
    return years, months


def to_years_months(age: float, fmt: AgeFormat = AgeFormat.SHORT) -> str:
    """
    Format a fractional age.

    Args:
        age: Age in fractional years
        fmt: Output representation

    Returns:
        Formatted age string
    """
    years, months = split_years_months(age)

    if fmt == AgeFormat.SHORT:
        return f"{years} y" if months == 0 else f"{years} y,  {months} m"
    if fmt == AgeFormat.LONG:
        return f"{years} years, {months} months"
    if fmt == AgeFormat.COLON:
        return f"{years}:{months}"
    if fmt == AgeFormat.COMPACT:
        return f"{years}" if months == 0 else f"{years}:{months}"
    if fmt == AgeFormat.WORDS:
        return f"{years} years" if months == 0 else f"{years} years  {months} months"
    raise ValueError(f"Unknown age format: {fmt}")


def parse_age(text: str) -> float:
    """
    Parse ``year`` or ``year:month`` text into fractional years.

    "67" -> 67.0, "72.5" -> 72.5, "64:5" -> 64 + 5/12, ":6" -> 0.5.

    Raises:
        ValueError: If either part is not a number
    """
    parts = text.strip().split(":")
    years = float(parts[0]) if parts[0].strip() else 0.0
    if len(parts) > 1:
        return years + (float(parts[1]) if parts[1].strip() else 0.0) / 12
    return years


def parse_claiming_ages(text: str) -> List[float]:
    """
    Parse a whitespace-separated list of claiming ages.

    Exactly three values ``start stop step`` with ``start < stop`` and
    ``1/12 <= step < stop`` expand into a range, so "62 64 :6" means
    62, 62:6, 63, 63:6, 64. A range longer than the 97 claiming months is
    left unexpanded.
    """
    values = [parse_age(token) for token in text.split()]

    if len(values) == 3 and all(math.isfinite(value) for value in values):
        start, stop, step = values
        if start < stop and MIN_RANGE_STEP - 1e-9 <= step < stop:
            count = math.floor((stop - start) / step + 1e-9) + 1
            if count <= CLAIMING_MONTHS + 1:
                return [start + index * step for index in range(count)]

    return values


def claiming_age_from_index(index: int) -> float:
    """Claiming age for a month index counted from 62 years 0 months."""
    return FIRST_CLAIMING_AGE + index / 12


def format_date(start_year: int, num_months: int) -> str:
    """
    Calendar label for a number of months after January of ``start_year``.

    ``num_months`` may exceed 12; e.g. (2022, 14) -> "March 2023".
    """
    year = math.floor(start_year + num_months / 12)
    return f"{MONTH_NAMES[num_months % 12]} {year}"


def format_rate(rate: float) -> str:
    """Percent label such as "3%" or "2.5%"."""
    return f"{rate:g}%"


class CurrencyFormatter(BaseModel):
    """Formats dollar values for report descriptions."""

    currency_symbol: str = Field(default="$", description="Currency symbol")
    decimal_places: int = Field(
        default=2, ge=0, le=10, description="Number of decimal places"
    )
    show_currency_symbol: bool = Field(
        default=True, description="Whether to show currency symbol"
    )

    def format_currency(self, amount: float, show_symbol: Optional[bool] = None) -> str:
        """
        Format a currency amount for display.

        Args:
            amount: The amount to format
            show_symbol: Override the default symbol display setting

        Returns:
            Formatted currency string, negative amounts in parentheses
        """
        show_symbol = (
            show_symbol if show_symbol is not None else self.show_currency_symbol
        )

        formatted = f"{abs(amount):,.{self.decimal_places}f}"
        if show_symbol:
            formatted = f"{self.currency_symbol}{formatted}"

        if amount < 0:
            return f"({formatted})"
        return formatted
