"""Benefit calculation and projection models for claiming-age planning."""

from .retirement_age import full_retirement_age, full_retirement_age_description
from .benefit_formula import benefit_factor, calc_monthly_benefit, claiming_status
from .benefit_table import (
    BenefitTableCache,
    MonthlyBenefitEntry,
    MonthlyBenefitTable,
    build_benefit_table,
    claiming_index,
    monthly_benefit,
)
from .present_value import net_present_value
from .bank_balance import (
    BankBalanceResult,
    ClaimingCombination,
    future_value,
    future_values,
    simulate_bank_balance,
)
from .optimizer import (
    ClaimingAgeChoice,
    ClaimingAgeGrid,
    best_claiming_age_by_balance,
    best_claiming_age_by_npv,
    best_claiming_age_grid,
)
from .benefit_schedule import BenefitSchedule, BenefitScheduleRow, build_benefit_schedule
from .projection import (
    BirthDate,
    InvalidProjectionError,
    ProjectionParameters,
    validate_projection_parameters,
)
from .formatting import (
    AgeFormat,
    CurrencyFormatter,
    format_date,
    parse_age,
    parse_claiming_ages,
    to_years_months,
)

__all__ = [
    "full_retirement_age",
    "full_retirement_age_description",
    "benefit_factor",
    "calc_monthly_benefit",
    "claiming_status",
    "BenefitTableCache",
    "MonthlyBenefitEntry",
    "MonthlyBenefitTable",
    "build_benefit_table",
    "claiming_index",
    "monthly_benefit",
    "net_present_value",
    "BankBalanceResult",
    "ClaimingCombination",
    "future_value",
    "future_values",
    "simulate_bank_balance",
    "ClaimingAgeChoice",
    "ClaimingAgeGrid",
    "best_claiming_age_by_balance",
    "best_claiming_age_by_npv",
    "best_claiming_age_grid",
    "BenefitSchedule",
    "BenefitScheduleRow",
    "build_benefit_schedule",
    "BirthDate",
    "InvalidProjectionError",
    "ProjectionParameters",
    "validate_projection_parameters",
    "AgeFormat",
    "CurrencyFormatter",
    "format_date",
    "parse_age",
    "parse_claiming_ages",
    "to_years_months",
]
