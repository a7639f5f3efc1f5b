from dataclasses import replace

import pytest

from capital_planner.data_model import FUND_CATALOG, MAX_AGE, AgeBasedStrategy, GoalBasedStrategy
from capital_planner.engine.compounding import calculate_projected_capital
from capital_planner.engine.delay import (
    calculate_delay_cost,
    calculate_delay_data_list,
    generate_delay_periods,
    get_effective_max_delay_years,
    is_valid_delay_scenario,
)

NET_RETURN = FUND_CATALOG["SPX"].net_yearly_return


def _age_based(**overrides) -> AgeBasedStrategy:
    strategy = AgeBasedStrategy(
        id="test-age-based",
        name="Test Age Based",
        current_age=30,
        goal_age=65,
        initial_amount=10000,
        monthly_contribution=500,
        selected_fund="SPX",
        inflation_rate=3,
        tax_rate=13,
    )
    return replace(strategy, **overrides)


def _goal_based(**overrides) -> GoalBasedStrategy:
    strategy = GoalBasedStrategy(
        id="test-goal-based",
        name="Test Goal Based",
        current_age=30,
        goal_age=65,
        goal=1000000,
        initial_amount=10000,
        monthly_contribution=500,
        selected_fund="SPX",
        inflation_rate=3,
        tax_rate=13,
    )
    return replace(strategy, **overrides)


def test_effective_max_delay_years():
    assert get_effective_max_delay_years(_age_based(), 10) == 10
    assert get_effective_max_delay_years(_age_based()) == 34
    assert get_effective_max_delay_years(_age_based(current_age=65)) == 0
    assert get_effective_max_delay_years(_age_based(current_age=64)) == 0
    assert get_effective_max_delay_years(_goal_based()) == 30


@pytest.mark.parametrize(
    "step, maximum, expected",
    [
        (3, 12, [3, 6, 9, 12]),
        (5, 20, [5, 10, 15, 20]),
        (5, 3, []),
        (3, 0, []),
        (1, 5, [1, 2, 3, 4, 5]),
        (3, 10, [3, 6, 9]),
        (0, 10, []),
    ],
)
def test_generate_delay_periods(step, maximum, expected):
    assert generate_delay_periods(step, maximum) == expected


def test_is_valid_delay_scenario():
    assert not is_valid_delay_scenario(_age_based(), 5, 0)
    assert not is_valid_delay_scenario(_age_based(), 5, -100)
    assert is_valid_delay_scenario(_age_based(), 10, 1000)
    assert is_valid_delay_scenario(_age_based(), 34, 1000)
    assert not is_valid_delay_scenario(_age_based(), 35, 1000)
    assert not is_valid_delay_scenario(_age_based(), 40, 1000)
    assert is_valid_delay_scenario(_goal_based(), 50, 1000)


def test_delay_cost_compares_at_goal_age():
    result = calculate_delay_cost(_age_based(), 5, start_year=2030)

    assert result.current_capital == pytest.approx(calculate_projected_capital(10000, 500, NET_RETURN, 0.13, 35))
    assert result.delayed_capital == pytest.approx(calculate_projected_capital(10000, 500, NET_RETURN, 0.13, 30))
    assert result.cost == pytest.approx(result.current_capital - result.delayed_capital)
    assert result.cost_percentage == pytest.approx(result.cost / result.current_capital * 100)
    assert result.current_age_at_goal == result.delayed_age_at_goal == 65
    assert result.current_year_at_goal == 2065


def test_delay_cost_reports_catch_up_amounts():
    strategy = _age_based()

    result = calculate_delay_cost(strategy, 9)

    assert result.required_initial_amount is not None
    assert result.required_monthly_contribution is not None
    assert result.required_initial_amount > strategy.initial_amount
    assert result.required_monthly_contribution > strategy.monthly_contribution
    assert (
        calculate_projected_capital(
            strategy.initial_amount, result.required_monthly_contribution, NET_RETURN, 0.13, 26
        )
        >= result.current_capital
    )


def test_delay_past_goal_age_leaves_initial_amount_only():
    result = calculate_delay_cost(_age_based(current_age=60), 5)

    assert result.delayed_capital == 10000
    assert result.required_initial_amount is None
    assert result.required_monthly_contribution is None


def test_delay_list_for_age_based_strategy():
    result = calculate_delay_data_list(_age_based(), 3)

    assert result
    assert [data.delay_years for data in result] == list(range(3, 34, 3))
    for data in result:
        assert data.cost > 0
        assert data.delay_years < 35
        assert data.current_capital > data.delayed_capital


def test_delay_list_filters_to_remaining_horizon():
    result = calculate_delay_data_list(_age_based(current_age=60), 3)

    assert [data.delay_years for data in result] == [3]


def test_delay_list_respects_custom_max():
    result = calculate_delay_data_list(_age_based(), 3, 9)

    assert [data.delay_years for data in result] == [3, 6, 9]


def test_delay_list_empty_when_no_room():
    assert calculate_delay_data_list(_age_based(current_age=64), 3) == []


def test_delay_list_for_goal_based_strategy():
    strategy = _goal_based()

    result = calculate_delay_data_list(strategy, 3)

    assert result
    for data in result:
        assert data.cost > 0
        assert data.delayed_age_at_goal > data.current_age_at_goal
        assert data.delayed_year_at_goal - data.current_year_at_goal == (
            data.delayed_age_at_goal - data.current_age_at_goal
        )


def test_goal_already_met_has_no_delay_cost():
    assert calculate_delay_data_list(_goal_based(initial_amount=2000000)) == []


def test_unknown_fund_has_no_delay_cost():
    assert calculate_delay_data_list(_age_based(selected_fund="INVALID")) == []


def test_goal_at_current_age_has_no_delay_cost():
    strategy = _goal_based(goal_age=30)

    result = calculate_delay_cost(strategy, 3, start_year=2030)

    assert result.current_age_at_goal == 30
    assert result.current_year_at_goal == 2030
    assert result.cost == 0
    assert calculate_delay_data_list(strategy, 3) == []


def test_goal_based_ages_stay_within_lifespan():
    for data in calculate_delay_data_list(_goal_based(), 3):
        assert data.current_age_at_goal <= 65
        assert data.delayed_age_at_goal <= MAX_AGE
