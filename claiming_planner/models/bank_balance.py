"""
Future value (bank balance) projections of Social Security benefits.

Benefits are deposited month by month into a simulated bank account that
earns interest on a positive balance, pays a borrowing rate on a negative one,
and is reduced by monthly spending. Several claiming-age and interest-rate
combinations run side by side so one call yields a full comparison matrix.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .benefit_table import BenefitTableCache, claiming_index
from .formatting import (
    FIRST_CLAIMING_AGE,
    AgeFormat,
    format_date,
    format_rate,
    round_half_up,
    to_years_months,
)
from .present_value import months_after_62
from .projection import ProjectionParameters

logger = logging.getLogger(__name__)

DECEMBER = 11  # zero-based calendar month of the COLA increase


def is_cola_month(month: int, birth_month: int) -> bool:
    """Whether month ``month`` after age 62 is a December for this birth month."""
    return (birth_month - 1 + month) % 12 == DECEMBER


def first_best_index(values: Sequence[float], floor: float = 0.0) -> Tuple[int, float]:
    """
    Index and value of the first strict maximum above ``floor``.

    Ties keep the earliest index; when nothing exceeds ``floor`` the result is
    ``(0, floor)``.
    """
    best_index = 0
    best_value = floor
    for index, value in enumerate(values):
        if value > best_value:
            best_index = index
            best_value = float(value)
    return best_index, best_value


def future_values(
    birth_year: int,
    claiming_ages: Sequence[float],
    age_at_death: float,
    annual_rate: float,
    cola: float,
    birth_month: int,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> NDArray[np.float64]:
    """
    End-of-life bank balance for each of several claiming ages.

    Each balance compounds monthly at ``annual_rate`` from its claiming month
    and receives the monthly benefit, which grows by ``cola`` percent each
    December after the first month. No benefit is paid for the month of death.

    Args:
        birth_year: Calendar year of birth
        claiming_ages: Claiming ages in fractional years
        age_at_death: Age in fractional years at death
        annual_rate: Annual interest rate in percent
        cola: Annual cost-of-living adjustment in percent
        birth_month: Month of birth, 1-12
        pia: Monthly benefit at Full Retirement Age
        cache: Table cache to use

    Returns:
        Array of balances, one per claiming age
    """
    cache = cache if cache is not None else BenefitTableCache()
    table = cache.table_for(birth_year)

    benefits = np.array(
        [table.factor_at(claiming_index(age)) * pia for age in claiming_ages],
        dtype=np.float64,
    )
    first_months = np.array([months_after_62(age) for age in claiming_ages])
    last_month = months_after_62(age_at_death)

    monthly_growth = 1 + annual_rate / 12 / 100
    cola_growth = 1 + cola / 100

    balances = np.zeros(len(benefits), dtype=np.float64)
    for month in range(last_month):
        if month > 0 and is_cola_month(month, birth_month):
            benefits = benefits * cola_growth
        balances = np.where(
            month >= first_months, balances * monthly_growth + benefits, balances
        )
    return balances


def future_value(
    birth_year: int,
    claiming_age: float,
    age_at_death: float,
    annual_rate: float,
    cola: float,
    birth_month: int,
    pia: float,
    cache: Optional[BenefitTableCache] = None,
) -> float:
    """End-of-life bank balance for a single claiming age."""
    balances = future_values(
        birth_year,
        [claiming_age],
        age_at_death,
        annual_rate,
        cola,
        birth_month,
        pia,
        cache,
    )
    return float(balances[0])


class ClaimingCombination(BaseModel):
    """One claiming-age and interest-rate column of a projection."""

    claiming_age: float = Field(..., description="Claiming age in fractional years")
    annual_rate: float = Field(..., description="Annual interest rate (%)")
    month_index: int = Field(..., ge=0, le=96, description="Benefit table index")
    factor: float = Field(..., description="Benefit as a fraction of PIA")
    label: str = Field(..., description="Column label, e.g. '64:5 @ 3%'")


class BankBalanceResult(BaseModel):
    """Month-by-month result of a bank-balance projection."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    parameters: ProjectionParameters = Field(..., description="Projection inputs")
    combinations: List[ClaimingCombination] = Field(
        ..., description="Columns in claiming-age-major order"
    )
    # Month index after age 62 for each row (rows,)
    months: NDArray[np.int64] = Field(..., description="Months after age 62")
    # Cumulative COLA factor in effect for each row (rows,)
    cola_factors: NDArray[np.float64] = Field(..., description="COLA factor by row")
    # Whether the balance was updated on each row (rows,)
    active: NDArray[np.bool_] = Field(..., description="Rows that update balances")
    # Interest, benefit and balance per row and combination (rows, combinations)
    interest: NDArray[np.float64] = Field(..., description="Monthly interest")
    benefits: NDArray[np.float64] = Field(..., description="Monthly benefit")
    balances: NDArray[np.float64] = Field(..., description="Bank balance")
    # Column of the highest balance per row, -1 on the starting-loan row (rows,)
    best_combination: NDArray[np.int64] = Field(
        ..., description="Best combination index by row"
    )
    due_dates: List[str] = Field(..., description="Month the benefit is earned")
    payment_dates: Optional[List[str]] = Field(
        default=None, description="Month the benefit is paid (arrears only)"
    )
    age_labels: List[str] = Field(..., description="Age (year:month) by row")

    def final_balances(self) -> NDArray[np.float64]:
        """Balances of every combination on the last row."""
        return self.balances[-1]

    def best_labels(self) -> List[Optional[str]]:
        """Label of the best combination for each row."""
        return [
            self.combinations[index].label if index >= 0 else None
            for index in self.best_combination
        ]

    def to_rows(self) -> List[Dict[str, Any]]:
        """Serialize the projection as one dictionary per month."""
        best_labels = self.best_labels()
        rows = []
        for row, month in enumerate(self.months):
            active = bool(self.active[row])
            columns = []
            for col, combination in enumerate(self.combinations):
                columns.append(
                    {
                        "label": combination.label,
                        "interest": float(self.interest[row, col]) if month >= 0 else None,
                        "benefit": float(self.benefits[row, col]) if active else None,
                        "balance": float(self.balances[row, col]),
                    }
                )
            record: Dict[str, Any] = {
                "month": int(month),
                "due_date": self.due_dates[row],
                "age": self.age_labels[row],
                "cola_factor": float(self.cola_factors[row]),
                "columns": columns,
                "best": best_labels[row],
            }
            if self.payment_dates is not None:
                record["payment_date"] = self.payment_dates[row]
            rows.append(record)
        return rows


def build_combinations(
    params: ProjectionParameters, cache: BenefitTableCache
) -> List[ClaimingCombination]:
    """Expand claiming ages and interest rates into projection columns."""
    table = cache.table_for(params.birth_date.year)
    show_rate = len(params.interest_rates) >= 2

    combinations = []
    for claiming_age in params.claiming_ages:
        index = claiming_index(claiming_age)
        for rate in params.interest_rates:
            label = to_years_months(claiming_age, AgeFormat.COLON)
            if show_rate:
                label = f"{label} @ {format_rate(rate)}"
            combinations.append(
                ClaimingCombination(
                    claiming_age=claiming_age,
                    annual_rate=rate,
                    month_index=index,
                    factor=table.factor_at(index),
                    label=label,
                )
            )
    return combinations


def simulate_bank_balance(
    params: ProjectionParameters, cache: Optional[BenefitTableCache] = None
) -> BankBalanceResult:
    """
    Simulate bank balances month by month for every claiming-age and rate pair.

    Each combination starts at ``-pay_down_balance``; when a loan is being
    paid down an extra starting row (month -1) records the opening balance.
    Each month applies the December COLA, accrues interest (or borrowing cost
    on a negative balance), deposits the benefit once it has started, and
    subtracts spending. With ``arrears`` set, every benefit is recognized one
    month later, when it is actually paid.

    Args:
        params: Projection parameters (assumed already validated)
        cache: Table cache to use

    Returns:
        BankBalanceResult with per-month interest, benefit and balance
    """
    cache = cache if cache is not None else BenefitTableCache()
    combinations = build_combinations(params, cache)

    birth_year = params.birth_date.year
    birth_month = params.birth_date.month
    arrears = 1 if params.arrears else 0

    last_benefit_month = round_half_up((params.max_age - FIRST_CLAIMING_AGE) * 12)
    num_months = last_benefit_month + arrears
    first_month = -1 if params.pay_down_balance > 0 else 0
    months = np.arange(first_month, num_months + 1, dtype=np.int64)

    num_rows = len(months)
    num_combinations = len(combinations)

    rates = np.array([c.annual_rate for c in combinations], dtype=np.float64)
    start_months = np.array([c.month_index for c in combinations]) + arrears
    base_benefits = np.array([c.factor for c in combinations], dtype=np.float64) * params.pia
    monthly_rates = rates / 100 / 12
    monthly_borrow_rate = params.borrow_rate / 100 / 12
    cola_growth = 1 + params.cola / 100

    cola_factors = np.ones(num_rows)
    active = np.zeros(num_rows, dtype=bool)
    interest = np.zeros((num_rows, num_combinations))
    benefits = np.zeros((num_rows, num_combinations))
    balances = np.zeros((num_rows, num_combinations))
    best_combination = np.full(num_rows, -1, dtype=np.int64)

    logger.debug(
        f"Simulating {num_combinations} combinations over {num_rows} months "
        f"for birth {birth_month}/{birth_year}"
    )

    balance = np.full(num_combinations, -params.pay_down_balance, dtype=np.float64)
    cola_factor = 1.0
    for row, month in enumerate(months):
        if month >= 0 and is_cola_month(month, birth_month):
            cola_factor *= cola_growth
        cola_factors[row] = cola_factor

        if month >= 0:
            # Shown on the closing row too, which does not update the balance
            interest[row] = np.where(
                balance >= 0, balance * monthly_rates, balance * monthly_borrow_rate
            )

        if 0 <= month < num_months:
            month_interest = interest[row]
            paying = (month >= start_months) & (month <= last_benefit_month)
            month_benefit = np.where(paying, base_benefits * cola_factor, 0.0)
            balance = balance + (month_benefit + month_interest - params.spending)

            active[row] = True
            benefits[row] = month_benefit

        balances[row] = balance
        if month >= 0:
            best_combination[row] = first_best_index(balance)[0]

    due_dates = [format_date(birth_year + 62, birth_month - 1 + m) for m in months]
    payment_dates = None
    if arrears:
        payment_dates = [
            format_date(birth_year + 62, birth_month + m) for m in months
        ]
    age_labels = [
        to_years_months(FIRST_CLAIMING_AGE + m / 12, AgeFormat.COLON) for m in months
    ]

    return BankBalanceResult(
        parameters=params,
        combinations=combinations,
        months=months,
        cola_factors=cola_factors,
        active=active,
        interest=interest,
        benefits=benefits,
        balances=balances,
        best_combination=best_combination,
        due_dates=due_dates,
        payment_dates=payment_dates,
        age_labels=age_labels,
    )
