"""
Input models for bank-balance projections.

The projection engine accepts any numeric input and lets NaN propagate.
Range checking belongs to the caller: ``validate_projection_parameters``
collects descriptive messages, and a projection must not run while any are
present.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .formatting import (
    CLAIMING_MONTHS,
    FIRST_CLAIMING_AGE,
    LAST_CLAIMING_AGE,
    parse_age,
    parse_claiming_ages,
)

MAX_CLAIMING_AGES = CLAIMING_MONTHS + 1
MAX_INTEREST_RATES = 61


class BirthDate(BaseModel):
    """Birth year and month (1-12) of the claimant."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Calendar year of birth")
    month: int = Field(default=1, ge=1, le=12, description="Month of birth, 1-12")


class ProjectionParameters(BaseModel):
    """Parameters for a month-by-month bank-balance projection."""

    birth_date: BirthDate = Field(..., description="Claimant birth date")
    claiming_ages: List[float] = Field(
        ..., description="Claiming ages in fractional years"
    )
    interest_rates: List[float] = Field(
        default_factory=lambda: [0.0],
        description="Annual interest rates (%) earned on positive balances",
    )
    cola: float = Field(default=0.0, description="Annual cost-of-living adjustment (%)")
    pia: float = Field(default=1000.0, description="Monthly benefit at FRA ($)")
    arrears: bool = Field(
        default=False, description="Record benefits in the month paid, not earned"
    )
    pay_down_balance: float = Field(
        default=0.0, description="Initial loan balance paid down by benefits ($)"
    )
    borrow_rate: float = Field(
        default=0.0, description="Annual interest rate (%) charged on negative balances"
    )
    spending: float = Field(default=0.0, description="Monthly spending ($)")
    max_age: float = Field(default=100.0, description="Age to simulate through")

    @field_validator("claiming_ages", mode="before")
    @classmethod
    def parse_claiming_age_text(cls, v):
        """Accept "62 64:5 70" text as well as a list of numbers or strings."""
        if isinstance(v, str):
            return parse_claiming_ages(v)
        if isinstance(v, (list, tuple)):
            return [parse_age(item) if isinstance(item, str) else item for item in v]
        return v

    @field_validator("interest_rates", mode="before")
    @classmethod
    def wrap_single_rate(cls, v):
        """Accept a single rate as well as a list of rates."""
        if isinstance(v, (int, float)):
            return [v]
        return v


class InvalidProjectionError(ValueError):
    """Raised when projection parameters fail validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _out_of_range(value: float, low: float, high: float) -> bool:
    # NaN fails every comparison, so it is reported as out of range too
    return not (low <= value <= high)


def validate_projection_parameters(params: ProjectionParameters) -> List[str]:
    """
    Validate projection parameters against plausible input ranges.

    Args:
        params: Parameters to check

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    year = params.birth_date.year
    if _out_of_range(year, 1900, 2050):
        errors.append(f"Birth year={year}, expecting value of between 1900 and 2050.")

    if not params.claiming_ages:
        errors.append("At least one claiming age is required.")
    if len(params.claiming_ages) > MAX_CLAIMING_AGES:
        errors.append(
            f"{len(params.claiming_ages)} claiming ages given, "
            f"expecting at most {MAX_CLAIMING_AGES}."
        )
    for age in params.claiming_ages:
        if _out_of_range(age, FIRST_CLAIMING_AGE, LAST_CLAIMING_AGE):
            errors.append(
                f"Claiming age={age}, expecting value of between "
                f"{FIRST_CLAIMING_AGE} and {LAST_CLAIMING_AGE}."
            )

    if not params.interest_rates:
        errors.append("At least one interest rate is required.")
    if len(params.interest_rates) > MAX_INTEREST_RATES:
        errors.append(
            f"{len(params.interest_rates)} interest rates given, "
            f"expecting at most {MAX_INTEREST_RATES}."
        )
    for rate in params.interest_rates:
        if _out_of_range(rate, -20, 40):
            errors.append(
                f"Investment Interest Rate={rate}, expecting a value of a few percent."
            )

    if _out_of_range(params.cola, -20, 20):
        errors.append(f"COLA={params.cola}, expecting a value of a few percent.")

    if _out_of_range(params.pia, 0, 10000):
        errors.append(f"PIA={params.pia}, value seems out of range.")

    if _out_of_range(params.pay_down_balance, 0, 10_000_000):
        errors.append(
            f"Pay Down Balance={params.pay_down_balance}, value seems out of range."
        )

    if _out_of_range(params.borrow_rate, -20, 40):
        errors.append(
            f"Borrow Interest Rate={params.borrow_rate}, value seems out of range."
        )

    if _out_of_range(params.spending, -99999, 100000):
        errors.append(f"Monthly Spending={params.spending}, value seems out of range.")

    if _out_of_range(params.max_age, FIRST_CLAIMING_AGE, 200):
        errors.append(
            f"Max age={params.max_age}, expecting value of between "
            f"{FIRST_CLAIMING_AGE} and 200."
        )

    return errors
