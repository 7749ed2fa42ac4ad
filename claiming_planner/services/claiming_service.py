"""
Claiming analysis service.

Coordinates the benefit, present-value, bank-balance and optimizer engines for
the API, owning the shared benefit-table cache and the projection defaults.
"""

import logging
from typing import Iterable, Optional

from claiming_planner.config import Settings
from claiming_planner.models.bank_balance import (
    BankBalanceResult,
    future_value,
    simulate_bank_balance,
)
from claiming_planner.models.benefit_schedule import BenefitSchedule, build_benefit_schedule
from claiming_planner.models.benefit_table import BenefitTableCache, monthly_benefit
from claiming_planner.models.optimizer import (
    ClaimingAgeChoice,
    ClaimingAgeGrid,
    best_claiming_age_by_balance,
    best_claiming_age_by_npv,
    best_claiming_age_grid,
)
from claiming_planner.models.present_value import net_present_value
from claiming_planner.models.projection import (
    InvalidProjectionError,
    ProjectionParameters,
    validate_projection_parameters,
)
from claiming_planner.models.retirement_age import full_retirement_age

logger = logging.getLogger(__name__)


class ClaimingAnalysisService:
    """Service for claiming-age benefit analysis and projections."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the service.

        Args:
            settings: Application settings supplying projection defaults
        """
        self.logger = logging.getLogger(__name__)
        self.cache = BenefitTableCache()
        self.default_pia = settings.default_pia if settings else 1000.0
        self.default_age_at_death = settings.default_age_at_death if settings else 100.0
        self.default_max_age = settings.default_max_age if settings else 100.0
        if settings is not None:
            self.summary_rates = range(settings.summary_min_rate, settings.summary_max_rate + 1)
            self.summary_age_step = settings.summary_age_step
        else:
            self.summary_rates = range(-4, 9)
            self.summary_age_step = 2

    def full_retirement_age(self, birth_year: int) -> float:
        """Full Retirement Age for a birth year."""
        return full_retirement_age(birth_year)

    def monthly_benefit(
        self, birth_year: int, claiming_age: float, pia: Optional[float] = None
    ) -> float:
        """Monthly benefit for a claiming age."""
        pia = self.default_pia if pia is None else pia
        return monthly_benefit(birth_year, claiming_age, pia, self.cache)

    def net_present_value(
        self,
        birth_year: int,
        claiming_age: float,
        age_at_death: Optional[float],
        annual_rate: float,
        pia: Optional[float] = None,
    ) -> float:
        """Net present value at 62 of the benefits for one claiming age."""
        age_at_death = self.default_age_at_death if age_at_death is None else age_at_death
        pia = self.default_pia if pia is None else pia
        return net_present_value(
            birth_year, claiming_age, age_at_death, annual_rate, pia, self.cache
        )

    def future_value(
        self,
        birth_year: int,
        claiming_age: float,
        age_at_death: Optional[float],
        annual_rate: float,
        cola: float,
        birth_month: int,
        pia: Optional[float] = None,
    ) -> float:
        """Bank balance at death for one claiming age."""
        age_at_death = self.default_age_at_death if age_at_death is None else age_at_death
        pia = self.default_pia if pia is None else pia
        return future_value(
            birth_year,
            claiming_age,
            age_at_death,
            annual_rate,
            cola,
            birth_month,
            pia,
            self.cache,
        )

    def best_by_npv(
        self,
        birth_year: int,
        age_at_death: Optional[float],
        annual_rate: float,
        pia: Optional[float] = None,
    ) -> ClaimingAgeChoice:
        """Claiming age maximizing net present value."""
        age_at_death = self.default_age_at_death if age_at_death is None else age_at_death
        pia = self.default_pia if pia is None else pia
        choice = best_claiming_age_by_npv(
            birth_year, age_at_death, annual_rate, pia, self.cache
        )
        self.logger.info(
            f"Best NPV claiming age for {birth_year} (death {age_at_death}, "
            f"rate {annual_rate}%) is {choice.label}"
        )
        return choice

    def best_by_balance(
        self,
        birth_year: int,
        age_at_death: Optional[float],
        annual_rate: float,
        cola: float,
        birth_month: int,
        pia: Optional[float] = None,
    ) -> ClaimingAgeChoice:
        """Claiming age maximizing the bank balance at death."""
        age_at_death = self.default_age_at_death if age_at_death is None else age_at_death
        pia = self.default_pia if pia is None else pia
        choice = best_claiming_age_by_balance(
            birth_year, age_at_death, annual_rate, cola, birth_month, pia, self.cache
        )
        self.logger.info(
            f"Best balance claiming age for {birth_month}/{birth_year} "
            f"(death {age_at_death}, rate {annual_rate}%, COLA {cola}%) is {choice.label}"
        )
        return choice

    def benefit_schedule(
        self, birth_year: int, birth_month: int, pia: Optional[float] = None
    ) -> BenefitSchedule:
        """Monthly benefit schedule for every claiming month."""
        pia = self.default_pia if pia is None else pia
        return build_benefit_schedule(birth_year, birth_month, pia, self.cache)

    def bank_balance(self, params: ProjectionParameters) -> BankBalanceResult:
        """Validate parameters and run a bank-balance projection.

        Args:
            params: Projection parameters

        Returns:
            BankBalanceResult for every claiming-age and rate combination

        Raises:
            InvalidProjectionError: If any parameter fails validation
        """
        errors = validate_projection_parameters(params)
        if errors:
            self.logger.warning(f"Rejected bank balance projection: {errors}")
            raise InvalidProjectionError(errors)

        self.logger.info(
            f"Running bank balance projection for {len(params.claiming_ages)} "
            f"claiming ages and {len(params.interest_rates)} interest rates"
        )
        return simulate_bank_balance(params, self.cache)

    def summary_grid(
        self,
        birth_year: int,
        birth_month: int,
        cola: float,
        pia: Optional[float] = None,
        max_age_at_death: Optional[float] = None,
        rates: Optional[Iterable[float]] = None,
    ) -> ClaimingAgeGrid:
        """Balance-optimal claiming ages across ages at death and interest rates."""
        pia = self.default_pia if pia is None else pia
        max_age_at_death = (
            self.default_age_at_death if max_age_at_death is None else max_age_at_death
        )
        rates = self.summary_rates if rates is None else rates
        self.logger.info(
            f"Building claiming-age summary grid for {birth_month}/{birth_year} "
            f"through age {max_age_at_death}"
        )
        return best_claiming_age_grid(
            birth_year,
            birth_month,
            cola,
            pia,
            max_age_at_death=max_age_at_death,
            age_step=self.summary_age_step,
            rates=rates,
            cache=self.cache,
        )
