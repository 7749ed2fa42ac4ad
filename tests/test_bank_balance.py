"""
Tests for the month-by-month bank-balance simulator.
"""

import numpy as np
import pytest

from claiming_planner.models.bank_balance import (
    first_best_index,
    future_value,
    is_cola_month,
    simulate_bank_balance,
)
from claiming_planner.models.projection import ProjectionParameters


def make_params(**overrides):
    values = {
        "birth_date": {"year": 1960, "month": 1},
        "claiming_ages": [62],
        "max_age": 63,
    }
    values.update(overrides)
    return ProjectionParameters(**values)


class TestHelpers:
    """Test COLA timing and best-index selection."""

    def test_is_cola_month(self):
        """Test the December month depends on birth month."""
        assert is_cola_month(11, 1)
        assert not is_cola_month(10, 1)
        assert is_cola_month(0, 12)
        assert is_cola_month(5, 7)
        assert is_cola_month(17, 7)

    def test_first_best_index(self):
        """Test the first strict maximum wins."""
        assert first_best_index([1, 3, 3, 2]) == (1, 3.0)

    def test_first_best_index_nothing_positive(self):
        """Test zero and negative values leave index 0."""
        assert first_best_index([-5, -1, 0]) == (0, 0.0)
        assert first_best_index([]) == (0, 0.0)

    def test_first_best_index_ignores_nan(self):
        """Test NaN never beats the running best."""
        assert first_best_index([float("nan"), 2, float("nan")]) == (1, 2.0)


class TestSimulateBankBalance:
    """Test bank-balance projections."""

    def test_one_year_of_benefits(self, cache):
        """Test twelve monthly deposits with no interest."""
        result = simulate_bank_balance(make_params(), cache)

        assert list(result.months) == list(range(13))
        assert result.final_balances()[0] == pytest.approx(8400.0)
        assert result.balances[0, 0] == pytest.approx(700.0)

    def test_last_row_carries_balance(self, cache):
        """Test the final row shows interest but does not update the balance."""
        result = simulate_bank_balance(make_params(interest_rates=[5]), cache)

        assert not result.active[-1]
        assert result.balances[-1, 0] == result.balances[-2, 0]
        expected_interest = result.balances[-2, 0] * 0.05 / 12
        assert result.interest[-1, 0] == pytest.approx(expected_interest)
        last_row = result.to_rows()[-1]
        assert last_row["columns"][0]["interest"] == pytest.approx(expected_interest)
        assert last_row["columns"][0]["benefit"] is None

    def test_cola_matches_future_value(self, cache):
        """Test the simulator agrees with the closed-loop future value."""
        result = simulate_bank_balance(make_params(cola=10), cache)

        expected = future_value(1960, 62, 63, 0, 10, 1, 1000, cache)
        assert result.final_balances()[0] == pytest.approx(8470.0)
        assert result.final_balances()[0] == pytest.approx(expected)
        assert result.cola_factors[11] == pytest.approx(1.1)
        assert result.cola_factors[10] == 1.0

    def test_arrears_shifts_payments(self, cache):
        """Test each benefit lands one month later when paid in arrears."""
        result = simulate_bank_balance(make_params(arrears=True), cache)

        assert len(result.months) == 14
        assert result.benefits[0, 0] == 0.0
        assert result.benefits[1, 0] == pytest.approx(700.0)
        assert result.final_balances()[0] == pytest.approx(8400.0)
        assert result.due_dates[0] == "January 2022"
        assert result.payment_dates[0] == "February 2022"
        assert "payment_date" in result.to_rows()[0]

    def test_no_payment_dates_without_arrears(self, cache):
        """Test payment dates are only reported for arrears."""
        result = simulate_bank_balance(make_params(), cache)

        assert result.payment_dates is None
        assert "payment_date" not in result.to_rows()[0]

    def test_pay_down_balance(self, cache):
        """Test a starting loan adds an opening row and accrues borrowing cost."""
        result = simulate_bank_balance(
            make_params(pay_down_balance=1000, borrow_rate=12), cache
        )

        assert result.months[0] == -1
        assert result.balances[0, 0] == -1000.0
        assert result.interest[1, 0] == pytest.approx(-10.0)
        assert result.balances[1, 0] == pytest.approx(-310.0)
        assert result.best_combination[0] == -1
        assert result.best_labels()[0] is None
        assert result.to_rows()[0]["columns"][0]["interest"] is None
        assert result.due_dates[0] == "December 2021"

    def test_spending_before_claiming(self, cache):
        """Test spending draws down the balance before benefits start."""
        result = simulate_bank_balance(
            make_params(claiming_ages=[70], spending=100), cache
        )

        assert result.final_balances()[0] == pytest.approx(-1200.0)
        assert all(index == 0 for index in result.best_combination)

    def test_combination_order_and_labels(self, cache):
        """Test columns run claiming-age-major with rate labels."""
        result = simulate_bank_balance(
            make_params(claiming_ages=[62, 70], interest_rates=[0, 5]), cache
        )

        labels = [c.label for c in result.combinations]
        assert labels == ["62:0 @ 0%", "62:0 @ 5%", "70:0 @ 0%", "70:0 @ 5%"]
        assert result.balances.shape == (13, 4)

    def test_labels_without_rate(self, cache):
        """Test a single rate leaves the rate out of the labels."""
        result = simulate_bank_balance(
            make_params(claiming_ages=[62, 64.5]), cache
        )
        assert [c.label for c in result.combinations] == ["62:0", "64:6"]

    def test_best_combination_is_first_maximum(self, cache):
        """Test the best column is the first largest positive balance."""
        result = simulate_bank_balance(
            make_params(claiming_ages=[62, 66, 70], interest_rates=[0, 4], max_age=90),
            cache,
        )

        for row in range(len(result.months)):
            balances = result.balances[row]
            if balances.max() > 0:
                assert result.best_combination[row] == int(np.argmax(balances))
            else:
                assert result.best_combination[row] == 0

    def test_balance_non_decreasing_without_spending(self, cache):
        """Test balances never fall with non-negative rates and COLA."""
        result = simulate_bank_balance(
            make_params(claiming_ages=[62, 67], interest_rates=[3], cola=2, max_age=80),
            cache,
        )
        assert np.all(np.diff(result.balances, axis=0) >= 0)

    def test_age_labels(self, cache):
        """Test ages are labelled as year:month."""
        result = simulate_bank_balance(make_params(), cache)
        assert result.age_labels[0] == "62:0"
        assert result.age_labels[12] == "63:0"

    def test_half_month_max_age_rounds_up(self, cache):
        """Test a max age landing on half a month pays through the rounded-up month."""
        result = simulate_bank_balance(make_params(max_age=62.375), cache)

        assert list(result.months) == list(range(6))
        assert result.final_balances()[0] == pytest.approx(3500.0)
