"""Cost of postponing investment by N years."""
from __future__ import annotations

from datetime import date
from typing import List, Tuple, assert_never

from ..data_model.constants import DEFAULT_DELAY_STEP_YEARS, DEFAULT_MAX_DELAY_YEARS, MAX_AGE
from ..data_model.results import DelayCostResult
from ..data_model.strategy import AgeBasedStrategy, GoalBasedStrategy, Strategy
from ..settings import EngineSettings, resolve_settings
from .compounding import calculate_projected_capital, estimate_years_to_goal
from .growth import get_strategy_financial_params
from .solvers import calculate_required_initial_amount, calculate_required_monthly_contribution


def get_effective_max_delay_years(strategy: Strategy, max_delay_years: int | None = None) -> int:
    """Explicit limit if given; age-based strategies stop a year short of the goal age."""
    if max_delay_years is not None:
        return max_delay_years
    match strategy:
        case AgeBasedStrategy():
            return max(0, strategy.years_to_goal_age - 1)
        case GoalBasedStrategy():
            return DEFAULT_MAX_DELAY_YEARS
        case _:
            assert_never(strategy)


def generate_delay_periods(step_years: int, max_delay_years: int) -> List[int]:
    """``step_years=3, max_delay_years=12`` -> ``[3, 6, 9, 12]``."""
    if step_years <= 0:
        return []
    return list(range(step_years, max_delay_years + 1, step_years))


def is_valid_delay_scenario(strategy: Strategy, delay_years: int, cost: float) -> bool:
    if cost <= 0:
        return False
    match strategy:
        case AgeBasedStrategy():
            # starting at or after the goal age leaves nothing to compare
            return delay_years < strategy.years_to_goal_age
        case GoalBasedStrategy():
            return True
        case _:
            assert_never(strategy)


def _goal_horizons(
    strategy: Strategy,
    delay_years: int,
    monthly_contribution: float,
    yearly_return: float,
    tax_rate: float,
) -> Tuple[int, int]:
    """Years until the goal without delay and with ``delay_years`` of waiting.

    A goal-based horizon never runs past the goal age, and a delayed one never
    past MAX_AGE.
    """
    match strategy:
        case AgeBasedStrategy():
            return strategy.years_to_goal_age, strategy.years_to_goal_age
        case GoalBasedStrategy():
            years_to_goal = min(
                max(0, strategy.years_to_goal_age),
                estimate_years_to_goal(
                    strategy.initial_amount, monthly_contribution, yearly_return, tax_rate, strategy.goal
                ),
            )
            inflated_goal = strategy.goal * (1 + strategy.inflation_rate / 100) ** delay_years
            delayed_years = delay_years + estimate_years_to_goal(
                strategy.initial_amount, monthly_contribution, yearly_return, tax_rate, inflated_goal
            )
            return years_to_goal, min(delayed_years, MAX_AGE - strategy.current_age)
        case _:
            assert_never(strategy)


def calculate_delay_cost(
    strategy: Strategy,
    delay_years: int,
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> DelayCostResult:
    """Compare investing now against letting the initial amount sit idle for ``delay_years``.

    Both paths are measured at the same point, the end of the undelayed
    horizon. An unknown fund yields a zero-cost result, which the list
    filter drops.
    """
    settings = resolve_settings(settings)
    this_year = date.today().year if start_year is None else start_year
    params = get_strategy_financial_params(strategy, settings)
    if params is None:
        return DelayCostResult(
            delay_years=delay_years,
            current_capital=0.0,
            delayed_capital=0.0,
            cost=0.0,
            cost_percentage=0.0,
            current_age_at_goal=strategy.current_age,
            delayed_age_at_goal=strategy.current_age + delay_years,
            current_year_at_goal=this_year,
            delayed_year_at_goal=this_year + delay_years,
        )

    contribution = params.monthly_contribution
    yearly_return = params.net_yearly_return
    tax_rate = params.tax_rate
    years_to_goal, delayed_years_to_goal = _goal_horizons(
        strategy, delay_years, contribution, yearly_return, tax_rate
    )

    current_capital = calculate_projected_capital(
        strategy.initial_amount, contribution, yearly_return, tax_rate, years_to_goal
    )
    remaining_years = years_to_goal - delay_years
    if remaining_years > 0:
        delayed_capital = calculate_projected_capital(
            strategy.initial_amount, contribution, yearly_return, tax_rate, remaining_years
        )
    else:
        delayed_capital = strategy.initial_amount

    cost = current_capital - delayed_capital
    cost_percentage = cost / current_capital * 100 if current_capital > 0 else 0.0

    required_initial = None
    required_monthly = None
    if remaining_years > 0 and cost > 0:
        required_initial = calculate_required_initial_amount(
            current_capital, contribution, yearly_return, tax_rate, remaining_years, settings.solver
        )
        required_monthly = calculate_required_monthly_contribution(
            current_capital, strategy.initial_amount, yearly_return, tax_rate, remaining_years, settings.solver
        )

    return DelayCostResult(
        delay_years=delay_years,
        current_capital=current_capital,
        delayed_capital=delayed_capital,
        cost=cost,
        cost_percentage=cost_percentage,
        current_age_at_goal=strategy.current_age + years_to_goal,
        delayed_age_at_goal=strategy.current_age + delayed_years_to_goal,
        current_year_at_goal=this_year + years_to_goal,
        delayed_year_at_goal=this_year + delayed_years_to_goal,
        required_initial_amount=required_initial,
        required_monthly_contribution=required_monthly,
    )


def calculate_delay_data_list(
    strategy: Strategy,
    step_years: int = DEFAULT_DELAY_STEP_YEARS,
    max_delay_years: int | None = None,
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> List[DelayCostResult]:
    """Delay scenarios every ``step_years`` up to the effective limit, keeping only costly ones."""
    periods = generate_delay_periods(step_years, get_effective_max_delay_years(strategy, max_delay_years))
    results = [
        calculate_delay_cost(strategy, delay_years, start_year=start_year, settings=settings)
        for delay_years in periods
    ]
    return [data for data in results if is_valid_delay_scenario(strategy, data.delay_years, data.cost)]
