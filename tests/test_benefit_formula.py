"""
Tests for the claiming-age benefit formula.
"""

import math

import pytest

from claiming_planner.models.benefit_formula import (
    benefit_factor,
    calc_monthly_benefit,
    claiming_status,
)
from claiming_planner.models.retirement_age import full_retirement_age


class TestCalcMonthlyBenefit:
    """Test early reduction and delayed credits."""

    def test_full_pia_at_fra(self):
        """Test the benefit equals PIA when claiming at FRA."""
        for birth_year in range(1950, 1966):
            fra = full_retirement_age(birth_year)
            assert calc_monthly_benefit(birth_year, fra, 1234.0) == 1234.0

    def test_fra_matched_within_tolerance(self):
        """Test a month-discretized claiming age still matches a fractional FRA."""
        claiming_age = 62 + 50 / 12  # 66 years 2 months
        assert calc_monthly_benefit(1955, claiming_age, 1000.0) == 1000.0

    def test_claiming_at_62_born_1960(self):
        """Test 36 months at 5/9% plus 24 months at 5/12% gives 30% off."""
        assert calc_monthly_benefit(1960, 62, 1000.0) == pytest.approx(700.0)

    def test_claiming_at_70_born_1960(self):
        """Test three years of 8% delayed credits."""
        assert calc_monthly_benefit(1960, 70, 1000.0) == pytest.approx(1240.0)

    def test_three_years_early(self):
        """Test the first 36 months of reduction."""
        assert calc_monthly_benefit(1960, 64, 1000.0) == pytest.approx(800.0)

    def test_beyond_36_months_early(self):
        """Test the slower reduction beyond 36 months early."""
        # FRA 66.5, claiming 4.5 years early
        assert calc_monthly_benefit(1957, 62, 1000.0) == pytest.approx(725.0)

    def test_one_year_late(self):
        """Test one year of delayed credit."""
        assert calc_monthly_benefit(1960, 68, 1000.0) == pytest.approx(1080.0)

    def test_no_credit_after_70(self):
        """Test claiming after 70 earns nothing more."""
        assert calc_monthly_benefit(1960, 72, 1000.0) == pytest.approx(
            calc_monthly_benefit(1960, 70, 1000.0)
        )

    def test_early_reduction_not_floored(self):
        """Test extreme early claiming yields a negative benefit rather than zero."""
        # 27 years early: 1 - 0.2 - 24 * 0.05 = -0.4
        assert calc_monthly_benefit(1960, 40, 1000.0) == pytest.approx(-400.0)

    def test_nan_pia_propagates(self):
        """Test NaN input is not intercepted."""
        assert math.isnan(calc_monthly_benefit(1960, 62, float("nan")))
        assert math.isnan(calc_monthly_benefit(1960, 68, float("nan")))

    def test_strictly_increasing_in_claiming_age(self):
        """Test each extra month of delay raises the benefit."""
        for birth_year in (1950, 1955, 1957, 1959, 1960, 1975):
            benefits = [
                calc_monthly_benefit(birth_year, 62 + index / 12, 1000.0)
                for index in range(97)
            ]
            for earlier, later in zip(benefits, benefits[1:]):
                assert later > earlier

    def test_benefit_factor_is_normalized(self):
        """Test the factor is the benefit for a PIA of 1."""
        assert benefit_factor(1960, 62) == pytest.approx(0.7)
        assert benefit_factor(1960, 67) == 1.0


class TestClaimingStatus:
    """Test the Early/Normal/Late classification."""

    def test_status(self):
        """Test classification around the FRA month."""
        assert claiming_status(0, 60) == "Early"
        assert claiming_status(59, 60) == "Early"
        assert claiming_status(60, 60) == "Normal"
        assert claiming_status(61, 60) == "Late"
