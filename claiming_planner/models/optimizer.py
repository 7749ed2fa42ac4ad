"""
Claiming-age optimizers.

Both optimizers scan all 97 claiming months from 62y0m to 70y0m in order and
keep the first month whose value strictly beats the best so far, so ties go to
the youngest claiming age.
"""

from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .bank_balance import first_best_index, future_values
from .benefit_table import BenefitTableCache
from .formatting import (
    CLAIMING_MONTHS,
    AgeFormat,
    CurrencyFormatter,
    claiming_age_from_index,
    format_rate,
    to_years_months,
)
from .present_value import net_present_value

CANDIDATE_INDICES = range(CLAIMING_MONTHS + 1)


class ClaimingAgeChoice(BaseModel):
    """Best claiming month found by an optimizer."""

    best_month_index: int = Field(
        ..., ge=0, le=CLAIMING_MONTHS, description="Months after 62 years 0 months"
    )
    best_value: float = Field(..., description="Value achieved at the best month")

    @property
    def claiming_age(self) -> float:
        """Best claiming age in fractional years."""
        return claiming_age_from_index(self.best_month_index)

    @property
    def label(self) -> str:
        """Best claiming age as year:month text."""
        return to_years_months(self.claiming_age, AgeFormat.COLON)


def best_claiming_age_by_npv(
    birth_year: int,
    age_at_death: float,
    annual_rate: float,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> ClaimingAgeChoice:
    """
    Find the claiming month with the highest net present value at age 62.

    Args:
        birth_year: Calendar year of birth
        age_at_death: Age in fractional years at death
        annual_rate: Annual discount rate in percent
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use

    Returns:
        Best month index and its NPV
    """
    cache = cache if cache is not None else BenefitTableCache()
    values = [
        net_present_value(
            birth_year,
            claiming_age_from_index(index),
            age_at_death,
            annual_rate,
            pia,
            cache,
        )
        for index in CANDIDATE_INDICES
    ]
    best_index, best_value = first_best_index(values)
    return ClaimingAgeChoice(best_month_index=best_index, best_value=best_value)


def best_claiming_age_by_balance(
    birth_year: int,
    age_at_death: float,
    annual_rate: float,
    cola: float,
    birth_month: int,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> ClaimingAgeChoice:
    """
    Find the claiming month with the highest bank balance at death.

    Args:
        birth_year: Calendar year of birth
        age_at_death: Age in fractional years at death
        annual_rate: Annual interest rate in percent
        cola: Annual cost-of-living adjustment in percent
        birth_month: Month of birth, 1-12
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use

    Returns:
        Best month index and its final balance
    """
    balances = future_values(
        birth_year,
        [claiming_age_from_index(index) for index in CANDIDATE_INDICES],
        age_at_death,
        annual_rate,
        cola,
        birth_month,
        pia,
        cache,
    )
    best_index, best_value = first_best_index(balances)
    return ClaimingAgeChoice(best_month_index=best_index, best_value=best_value)


class ClaimingAgeGrid(BaseModel):
    """Balance-optimal claiming ages by age at death (rows) and rate (columns)."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    birth_year: int = Field(..., description="Calendar year of birth")
    birth_month: int = Field(..., ge=1, le=12, description="Month of birth")
    cola: float = Field(..., description="Annual COLA (%)")
    pia: float = Field(..., description="Monthly benefit at FRA ($)")
    ages_at_death: List[float] = Field(..., description="Row headers")
    rates: List[float] = Field(..., description="Column headers, annual %")
    # Best claiming month index (ages_at_death, rates)
    best_month_indices: NDArray[np.int64] = Field(..., description="Best month index")
    # Final balance at the best month (ages_at_death, rates)
    best_values: NDArray[np.float64] = Field(..., description="Best final balance")

    def label_at(self, row: int, col: int) -> str:
        """Best claiming age of a cell as year:month text."""
        index = int(self.best_month_indices[row, col])
        return to_years_months(claiming_age_from_index(index), AgeFormat.COLON)

    def shade_at(self, row: int, col: int) -> float:
        """0 for claiming at 62 through 1 for claiming at 70."""
        return int(self.best_month_indices[row, col]) / CLAIMING_MONTHS

    def description_at(self, row: int, col: int) -> str:
        """Sentence describing one cell."""
        best_value = CurrencyFormatter().format_currency(float(self.best_values[row, col]))
        age_at_death = self.ages_at_death[row]
        return (
            f"Best Bank Balance is {best_value} for age at death={age_at_death:g} "
            f"and interest rate={format_rate(self.rates[col])} is with Claiming-Age "
            f"at {self.label_at(row, col)}."
        )

    def to_table(self) -> List[List[str]]:
        """Grid of year:month labels, one list per age at death."""
        return [
            [self.label_at(row, col) for col in range(len(self.rates))]
            for row in range(len(self.ages_at_death))
        ]

    def descriptions(self) -> List[List[str]]:
        """Grid of cell descriptions, one list per age at death."""
        return [
            [self.description_at(row, col) for col in range(len(self.rates))]
            for row in range(len(self.ages_at_death))
        ]

    def shades(self) -> List[List[float]]:
        """Grid of 0..1 shades, one list per age at death."""
        return [
            [self.shade_at(row, col) for col in range(len(self.rates))]
            for row in range(len(self.ages_at_death))
        ]


def best_claiming_age_grid(
    birth_year: int,
    birth_month: int,
    cola: float,
    pia: float,
    max_age_at_death: float = 100,
    age_step: int = 2,
    rates: Iterable[float] = range(-4, 9),
    cache: Optional[BenefitTableCache] = None,
) -> ClaimingAgeGrid:
    """
    Run the balance optimizer over a grid of ages at death and interest rates.

    Args:
        birth_year: Calendar year of birth
        birth_month: Month of birth, 1-12
        cola: Annual cost-of-living adjustment in percent
        pia: Monthly benefit at Full Retirement Age
        max_age_at_death: Last age at death row (inclusive)
        age_step: Years between rows, starting at 62
        rates: Annual interest rates in percent, one column each
        cache: Table cache to use

    Returns:
        ClaimingAgeGrid of best months and balances
    """
    cache = cache if cache is not None else BenefitTableCache()
    rate_list = [float(rate) for rate in rates]
    ages_at_death = []
    age = 62
    while age <= max_age_at_death:
        ages_at_death.append(float(age))
        age += age_step

    best_month_indices = np.zeros((len(ages_at_death), len(rate_list)), dtype=np.int64)
    best_values = np.zeros((len(ages_at_death), len(rate_list)))

    for row, age_at_death in enumerate(ages_at_death):
        for col, rate in enumerate(rate_list):
            choice = best_claiming_age_by_balance(
                birth_year, age_at_death, rate, cola, birth_month, pia, cache
            )
            best_month_indices[row, col] = choice.best_month_index
            best_values[row, col] = choice.best_value

    return ClaimingAgeGrid(
        birth_year=birth_year,
        birth_month=birth_month,
        cola=cola,
        pia=pia,
        ages_at_death=ages_at_death,
        rates=rate_list,
        best_month_indices=best_month_indices,
        best_values=best_values,
    )
