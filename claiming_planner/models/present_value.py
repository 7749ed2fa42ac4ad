"""
Net present value, as of age 62, of a Social Security benefit stream.
"""

from typing import Optional

from .benefit_table import BenefitTableCache, monthly_benefit
from .formatting import FIRST_CLAIMING_AGE, round_half_up


def months_after_62(age: float) -> int:
    """Whole months from age 62 to ``age``; zero for ages at or below 62."""
    return max(0, round_half_up((age - FIRST_CLAIMING_AGE) * 12))


def net_present_value(
    birth_year: int,
    claiming_age: float,
    age_at_death: float,
    annual_rate: float,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> float:
    """
    Discount every monthly benefit back to age 62.

    The benefit for month ``m`` after age 62 is discounted by
    ``(1 + annual_rate/1200) ** (m + 1)``. Payments run from the claiming month
    up to, but not including, the month of death.

    Args:
        birth_year: Calendar year of birth
        claiming_age: Age in fractional years when benefits start
        age_at_death: Age in fractional years at death
        annual_rate: Annual discount rate in percent
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use

    Returns:
        Present value in dollars at age 62
    """
    benefit = monthly_benefit(birth_year, claiming_age, pia, cache)
    first_month = months_after_62(claiming_age)
    last_month = months_after_62(age_at_death)

    monthly_growth = 1 + annual_rate / 12 / 100
    npv = 0.0
    for month in range(first_month, last_month):
        npv += benefit / monthly_growth ** (month + 1)
    return npv
