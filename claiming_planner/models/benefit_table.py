"""
Month-indexed benefit table.

One table holds the benefit factor (fraction of PIA) for each of the 97
claiming months from 62 years 0 months through 70 years 0 months. Tables depend
only on birth year, so a caller-owned single-slot cache keeps the most recently
used one.
"""

import logging
import threading
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .benefit_formula import benefit_factor
from .formatting import (
    CLAIMING_MONTHS,
    FIRST_CLAIMING_AGE,
    claiming_age_from_index,
    round_half_up,
)
from .retirement_age import full_retirement_age

logger = logging.getLogger(__name__)


class MonthlyBenefitEntry(BaseModel):
    """Benefit factor for claiming at an exact age in years and months."""

    model_config = ConfigDict(frozen=True)

    age_year: int = Field(..., ge=62, le=70, description="Claiming age, whole years")
    age_month: int = Field(..., ge=0, le=11, description="Claiming age, extra months")
    factor: float = Field(..., description="Benefit as a fraction of PIA")

    @property
    def month_index(self) -> int:
        """Months after 62 years 0 months."""
        return (self.age_year - FIRST_CLAIMING_AGE) * 12 + self.age_month


class MonthlyBenefitTable(BaseModel):
    """Immutable table of benefit factors for one birth year."""

    model_config = ConfigDict(frozen=True)

    birth_year: int = Field(..., description="Birth year the table was built for")
    entries: Tuple[MonthlyBenefitEntry, ...] = Field(
        ..., description="Entries indexed by months after age 62"
    )

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> MonthlyBenefitEntry:
        return self.entries[index]

    def factor_at(self, index: int) -> float:
        """Benefit factor at a month index."""
        return self.entries[index].factor

    def claiming_age_at(self, index: int) -> float:
        """Claiming age in fractional years at a month index."""
        return claiming_age_from_index(index)

    @property
    def fra_index(self) -> int:
        """Month index of Full Retirement Age."""
        fra = full_retirement_age(self.birth_year)
        return round_half_up((fra - FIRST_CLAIMING_AGE) * 12)


def build_benefit_table(birth_year: int) -> MonthlyBenefitTable:
    """
    Build the 97-entry benefit table for a birth year.

    Args:
        birth_year: Calendar year of birth

    Returns:
        Table with entry ``i`` for claiming at ``62 + i/12``
    """
    entries = []
    for index in range(CLAIMING_MONTHS + 1):
        entries.append(
            MonthlyBenefitEntry(
                age_year=FIRST_CLAIMING_AGE + index // 12,
                age_month=index % 12,
                factor=benefit_factor(birth_year, claiming_age_from_index(index)),
            )
        )
    return MonthlyBenefitTable(birth_year=birth_year, entries=tuple(entries))


def claiming_index(claiming_age: float) -> int:
    """Nearest table index for a claiming age, clamped to [0, 96]."""
    index = round_half_up((claiming_age - FIRST_CLAIMING_AGE) * 12)
    return min(max(index, 0), CLAIMING_MONTHS)


class BenefitTableCache:
    """
    Single-slot cache of the benefit table for the most recent birth year.

    Tables are immutable and replaced whole under a lock, so a reader always
    sees a complete table.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: Optional[MonthlyBenefitTable] = None
        self.rebuild_count = 0

    @property
    def birth_year(self) -> Optional[int]:
        """Birth year of the cached table, if any."""
        table = self._table
        return table.birth_year if table is not None else None

    def table_for(self, birth_year: int) -> MonthlyBenefitTable:
        """
        Get the table for a birth year, rebuilding only on a birth-year change.

        Args:
            birth_year: Calendar year of birth

        Returns:
            Benefit table for ``birth_year``
        """
        table = self._table
        if table is not None and table.birth_year == birth_year:
            return table

        with self._lock:
            if self._table is None or self._table.birth_year != birth_year:
                logger.debug(f"Building benefit table for birth year {birth_year}")
                self._table = build_benefit_table(birth_year)
                self.rebuild_count += 1
            return self._table

    def clear(self) -> None:
        """Drop the cached table."""
        with self._lock:
            self._table = None


def monthly_benefit(
    birth_year: int,
    claiming_age: float,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> float:
    """
    Look up the monthly benefit for a claiming age.

    Args:
        birth_year: Calendar year of birth
        claiming_age: Age in fractional years, rounded to the nearest month
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use; a private one is created if omitted

    Returns:
        Monthly benefit in dollars
    """
    cache = cache if cache is not None else BenefitTableCache()
    table = cache.table_for(birth_year)
    return table.factor_at(claiming_index(claiming_age)) * pia
