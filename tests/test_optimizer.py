"""
Tests for the claiming-age optimizers and summary grid.
"""

import pytest

from claiming_planner.models.optimizer import (
    ClaimingAgeChoice,
    best_claiming_age_by_balance,
    best_claiming_age_by_npv,
    best_claiming_age_grid,
)
from claiming_planner.models.present_value import net_present_value


class TestClaimingAgeChoice:
    """Test choice labels."""

    def test_label(self):
        """Test the month index converts to an age."""
        choice = ClaimingAgeChoice(best_month_index=17, best_value=1.0)
        assert choice.claiming_age == pytest.approx(63 + 5 / 12)
        assert choice.label == "63:5"


class TestBestClaimingAgeByNpv:
    """Test NPV optimization."""

    def test_early_death_favors_62(self, cache):
        """Test dying at 63 makes claiming at 62 best."""
        choice = best_claiming_age_by_npv(1960, 63, 0, 1000, cache)
        assert choice.best_month_index == 0
        assert choice.best_value == pytest.approx(8400.0)

    def test_long_life_favors_70(self, cache):
        """Test living to 100 with no discounting makes claiming at 70 best."""
        choice = best_claiming_age_by_npv(1960, 100, 0, 1000, cache)
        assert choice.best_month_index == 96
        assert choice.best_value == pytest.approx(446400.0)

    def test_nothing_collected(self, cache):
        """Test death at 62 leaves index 0 with zero value."""
        choice = best_claiming_age_by_npv(1960, 62, 5, 1000, cache)
        assert (choice.best_month_index, choice.best_value) == (0, 0.0)

    def test_best_value_is_maximum(self, cache):
        """Test no other claiming month beats the chosen one."""
        choice = best_claiming_age_by_npv(1957, 84, 3, 1000, cache)
        for index in range(97):
            npv = net_present_value(1957, 62 + index / 12, 84, 3, 1000, cache)
            assert npv <= choice.best_value + 1e-9


class TestBestClaimingAgeByBalance:
    """Test bank-balance optimization."""

    def test_early_death_favors_62(self, cache):
        """Test dying at 63 makes claiming at 62 best."""
        choice = best_claiming_age_by_balance(1960, 63, 0, 0, 1, 1000, cache)
        assert choice.best_month_index == 0
        assert choice.best_value == pytest.approx(8400.0)

    def test_matches_npv_at_zero_rate(self, cache):
        """Test balance and NPV agree without interest or COLA."""
        by_balance = best_claiming_age_by_balance(1960, 100, 0, 0, 1, 1000, cache)
        by_npv = best_claiming_age_by_npv(1960, 100, 0, 1000, cache)

        assert by_balance.best_month_index == by_npv.best_month_index == 96
        assert by_balance.best_value == pytest.approx(by_npv.best_value)

    def test_nothing_collected(self, cache):
        """Test death at 62 leaves index 0 with zero value."""
        choice = best_claiming_age_by_balance(1960, 62, 5, 2, 3, 1000, cache)
        assert (choice.best_month_index, choice.best_value) == (0, 0.0)

    def test_high_rate_favors_earlier_claiming(self, cache):
        """Test a high interest rate does not push the best age later."""
        low = best_claiming_age_by_balance(1960, 90, 0, 0, 1, 1000, cache)
        high = best_claiming_age_by_balance(1960, 90, 8, 0, 1, 1000, cache)
        assert high.best_month_index <= low.best_month_index


class TestBestClaimingAgeGrid:
    """Test the summary grid."""

    def test_grid_shape_and_headers(self, cache):
        """Test rows by age at death and columns by rate."""
        grid = best_claiming_age_grid(1960, 1, 0, 1000, 66, rates=[0, 5], cache=cache)

        assert grid.ages_at_death == [62.0, 64.0, 66.0]
        assert grid.rates == [0.0, 5.0]
        assert grid.best_month_indices.shape == (3, 2)
        assert grid.best_values.shape == (3, 2)
        assert len(grid.to_table()) == 3

    def test_cells_match_optimizer(self, cache):
        """Test each cell is the balance optimizer for that row and column."""
        grid = best_claiming_age_grid(1960, 4, 2, 1000, 80, age_step=6, rates=[1, 6], cache=cache)

        for row, age_at_death in enumerate(grid.ages_at_death):
            for col, rate in enumerate(grid.rates):
                choice = best_claiming_age_by_balance(1960, age_at_death, rate, 2, 4, 1000, cache)
                assert grid.best_month_indices[row, col] == choice.best_month_index
                assert grid.best_values[row, col] == pytest.approx(choice.best_value)

    def test_cell_descriptions(self, cache):
        """Test labels, shading and descriptions of a cell."""
        grid = best_claiming_age_grid(1960, 1, 0, 1000, 64, rates=[0], cache=cache)

        assert grid.to_table() == [["62:0"], ["62:0"]]
        assert grid.shade_at(0, 0) == 0.0
        assert grid.shades() == [[0.0], [0.0]]
        assert grid.descriptions()[1] == [grid.description_at(1, 0)]
        assert grid.description_at(1, 0) == (
            "Best Bank Balance is $16,800.00 for age at death=64 and interest "
            "rate=0% is with Claiming-Age at 62:0."
        )
