import pytest

from capital_planner.engine.compounding import (
    calculate_monthly_return,
    calculate_projected_capital,
    calculate_year_capital,
    estimate_years_to_goal,
    round_half_up,
)


def test_monthly_return_is_geometric_not_divided():
    monthly = calculate_monthly_return(0.12)

    assert monthly == pytest.approx(0.00948879, abs=1e-6)
    assert monthly < 0.12 / 12
    assert (1 + monthly) ** 12 == pytest.approx(1.12)


def test_monthly_return_zero_and_negative():
    assert calculate_monthly_return(0) == 0
    assert calculate_monthly_return(-0.1) < 0


def test_year_capital_with_positive_return_is_taxed():
    result = calculate_year_capital(100000, 1000, 0.01, 0.13)

    assert result.annual_contributions == 12000
    assert result.total_return > 0
    assert result.tax == pytest.approx(result.total_return * 0.13)
    assert result.capital_end == pytest.approx(100000 + 12000 + result.total_return - result.tax)


def test_year_capital_zero_return_adds_only_contributions():
    result = calculate_year_capital(100000, 1000, 0, 0.13)

    assert result.capital_end == 112000
    assert result.total_return == 0
    assert result.tax == 0


def test_contribution_lands_before_monthly_growth():
    # a single contribution month earns its full month of return
    result = calculate_year_capital(0, 100, 0.01, 0)

    expected = sum(100 * 1.01 ** months for months in range(1, 13))
    assert result.capital_end == pytest.approx(expected)


@pytest.mark.parametrize("monthly_return", [-0.01, -0.2])
def test_losses_are_never_taxed(monthly_return):
    result = calculate_year_capital(100000, 1000, monthly_return, 0.13)

    assert result.total_return < 0
    assert result.tax == 0


def test_projected_capital_edge_cases():
    assert calculate_projected_capital(100000, 1000, 0.1, 0.13, 0) == 100000
    assert calculate_projected_capital(100000, 1000, 0, 0.13, 5) == 100000 + 1000 * 12 * 5


def test_projected_capital_outgrows_contributions():
    result = calculate_projected_capital(100000, 1000, 0.1, 0.13, 10)

    assert result > 100000 + 1000 * 12 * 10


def test_estimate_years_to_goal():
    assert 0 < estimate_years_to_goal(100000, 1000, 0.1, 0.13, 500000) < 100
    assert estimate_years_to_goal(1000000, 1000, 0.1, 0.13, 500000) == 0
    assert estimate_years_to_goal(1000, 10, 0.01, 0.13, 1000000000) == 100


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(2025.5) == 2026
    assert round_half_up(2.49) == 2
    assert round_half_up(-0.5) == 0
