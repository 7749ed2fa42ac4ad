"""
Monthly benefit schedule by claiming age.

For each of the 97 claiming months this lists the benefit, how it compares to
nearby months and to the age-62, FRA and age-70 benefits, and how long it takes
to recoup the benefits given up by waiting one more month.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .benefit_formula import ClaimingStatus, claiming_status
from .benefit_table import BenefitTableCache, MonthlyBenefitTable
from .formatting import (
    CLAIMING_MONTHS,
    AgeFormat,
    format_date,
    to_years_months,
)
from .retirement_age import full_retirement_age


class BenefitScheduleRow(BaseModel):
    """One claiming month of the benefit schedule."""

    row_number: int = Field(..., ge=1, description="1-based row number")
    month_index: int = Field(..., ge=0, le=CLAIMING_MONTHS, description="Months after 62")
    claiming_age: str = Field(..., description="Claiming age (year:month)")
    claiming_date: str = Field(..., description="Calendar month of claiming age")
    status: ClaimingStatus = Field(..., description="Early, Normal or Late")
    monthly_benefit: float = Field(..., description="Monthly benefit ($)")
    change_from_previous_month: Optional[float] = Field(
        default=None, description="Percent increase over the previous month"
    )
    change_from_previous_year: Optional[float] = Field(
        default=None, description="Percent increase over 12 months earlier"
    )
    percent_of_age_62: float = Field(..., description="Percent of the age-62 benefit")
    percent_of_fra: float = Field(..., description="Percent of the FRA benefit")
    percent_of_age_70: float = Field(..., description="Percent of the age-70 benefit")
    payback_months: Optional[float] = Field(
        default=None,
        description="Months to recoup one month of benefits given up by waiting",
    )


class BenefitSchedule(BaseModel):
    """Benefit schedule for one claimant."""

    birth_year: int = Field(..., description="Calendar year of birth")
    birth_month: int = Field(..., ge=1, le=12, description="Month of birth")
    pia: float = Field(..., description="Monthly benefit at FRA ($)")
    full_retirement_age: float = Field(..., description="FRA in fractional years")
    full_retirement_label: str = Field(..., description="FRA as year:month")
    rows: List[BenefitScheduleRow] = Field(..., description="97 claiming months")


def _percent_change(current: float, previous: float) -> float:
    return 100 * current / previous - 100


def build_benefit_schedule(
    birth_year: int,
    birth_month: int,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> BenefitSchedule:
    """
    Build the claiming-age benefit schedule.

    Args:
        birth_year: Calendar year of birth
        birth_month: Month of birth, 1-12
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use

    Returns:
        BenefitSchedule with one row per claiming month
    """
    cache = cache if cache is not None else BenefitTableCache()
    table: MonthlyBenefitTable = cache.table_for(birth_year)
    fra_index = table.fra_index

    at_62 = table.factor_at(0)
    at_fra = table.factor_at(fra_index)
    at_70 = table.factor_at(CLAIMING_MONTHS)

    rows = []
    for index in range(len(table)):
        factor = table.factor_at(index)

        change_month = None
        payback = None
        if index > 0:
            previous = table.factor_at(index - 1)
            change_month = _percent_change(factor, previous)
            delta = factor - previous
            if delta != 0:
                payback = previous / delta

        change_year = None
        if index >= 12:
            change_year = _percent_change(factor, table.factor_at(index - 12))

        rows.append(
            BenefitScheduleRow(
                row_number=index + 1,
                month_index=index,
                claiming_age=to_years_months(table.claiming_age_at(index), AgeFormat.COLON),
                claiming_date=format_date(birth_year + 62, birth_month - 1 + index),
                status=claiming_status(index, fra_index),
                monthly_benefit=factor * pia,
                change_from_previous_month=change_month,
                change_from_previous_year=change_year,
                percent_of_age_62=100 * factor / at_62,
                percent_of_fra=100 * factor / at_fra,
                percent_of_age_70=100 * factor / at_70,
                payback_months=payback,
            )
        )

    fra = full_retirement_age(birth_year)
    return BenefitSchedule(
        birth_year=birth_year,
        birth_month=birth_month,
        pia=pia,
        full_retirement_age=fra,
        full_retirement_label=to_years_months(fra, AgeFormat.COMPACT),
        rows=rows,
    )
