"""
Claiming-age adjustment of the Primary Insurance Amount (PIA).

Claiming before Full Retirement Age reduces the benefit by 5/9 of 1% per month
for the first 36 months early and 5/12 of 1% per month beyond that. Claiming
after FRA earns delayed retirement credits of 8% per year, up to age 70.
"""

from typing import Literal

from .formatting import LAST_CLAIMING_AGE
from .retirement_age import full_retirement_age

# Claiming ages are whole months while FRA can be fractional; ages closer than
# this are treated as claiming exactly at FRA.
FRA_EPSILON = 1e-3

EARLY_REDUCTION_PER_YEAR_FIRST_36 = 12 * 5 / 900
EARLY_REDUCTION_PER_YEAR_BEYOND_36 = 12 * 5 / 1200
DELAYED_CREDIT_PER_YEAR = 0.08

ClaimingStatus = Literal["Early", "Normal", "Late"]


def calc_monthly_benefit(birth_year: int, claiming_age: float, pia: float) -> float:
    """
    Calculate the monthly benefit for claiming at a given age.

    The early-reduction factor is not floored at zero; only claiming ages in
    [62, 70] are meaningful inputs.

    Args:
        birth_year: Calendar year of birth
        claiming_age: Age in fractional years when benefits start
        pia: Monthly benefit at Full Retirement Age

    Returns:
        Monthly benefit in the same units as ``pia``
    """
    fra = full_retirement_age(birth_year)
    if abs(claiming_age - fra) < FRA_EPSILON:
        return pia

    if claiming_age < fra:
        years_early = fra - claiming_age
        if years_early <= 3:
            factor = 1 - years_early * EARLY_REDUCTION_PER_YEAR_FIRST_36
        else:
            factor = (
                1
                - 3 * EARLY_REDUCTION_PER_YEAR_FIRST_36
                - (years_early - 3) * EARLY_REDUCTION_PER_YEAR_BEYOND_36
            )
        return pia * factor

    # No credit accrues for delaying past 70
    years_late = min(claiming_age, LAST_CLAIMING_AGE) - fra
    return pia * (1 + years_late * DELAYED_CREDIT_PER_YEAR)


def benefit_factor(birth_year: int, claiming_age: float) -> float:
    """Benefit as a fraction of PIA, used to build the monthly table."""
    return calc_monthly_benefit(birth_year, claiming_age, 1.0)


def claiming_status(month_index: int, fra_index: int) -> ClaimingStatus:
    """SSA classification of a claiming month relative to the FRA month."""
    if month_index < fra_index:
        return "Early"
    if month_index == fra_index:
        return "Normal"
    return "Late"
