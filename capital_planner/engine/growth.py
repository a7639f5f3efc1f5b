"""Year-by-year capital growth for a single strategy."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Tuple, assert_never

from ..data_model.constants import MAX_AGE, MIN_AGE, SolverPolicy
from ..data_model.funds import Fund, get_fund_by_id
from ..data_model.results import CapitalGrowthRow
from ..data_model.strategy import AgeBasedStrategy, GoalBasedStrategy, LifeEvent, Strategy
from ..settings import EngineSettings, resolve_settings
from .compounding import (
    calculate_monthly_return,
    calculate_projected_capital,
    calculate_year_capital,
    round_half_up,
)
from .solvers import calculate_required_monthly_contribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyFinancialParams:
    fund: Fund
    net_yearly_return: float
    monthly_return: float
    tax_rate: float  # decimal
    monthly_contribution: float


def calculate_goal_based_monthly_contribution(
    goal: float,
    initial_amount: float,
    current_age: int,
    goal_age: int,
    yearly_return: float,
    tax_rate: float,
    inflation_rate: float,
    *,
    adjust_goal_for_inflation: bool = False,
    policy: SolverPolicy | None = None,
) -> float:
    """Monthly contribution needed to grow ``initial_amount`` into ``goal`` by ``goal_age``.

    ``inflation_rate`` (percent) only matters with ``adjust_goal_for_inflation``;
    otherwise the nominal goal is targeted as entered.
    """
    if goal <= 0:
        return 0.0
    if current_age < MIN_AGE or current_age >= MAX_AGE:
        return 0.0
    if goal_age <= current_age:
        return 0.0
    if initial_amount >= goal:
        return 0.0

    years = goal_age - current_age
    target = goal
    if adjust_goal_for_inflation:
        target = goal * (1 + inflation_rate / 100) ** years
    return calculate_required_monthly_contribution(target, initial_amount, yearly_return, tax_rate, years, policy)


def resolve_monthly_contribution(
    strategy: Strategy,
    yearly_return: float,
    tax_rate: float,
    settings: EngineSettings | None = None,
) -> float:
    settings = resolve_settings(settings)
    match strategy:
        case AgeBasedStrategy():
            return strategy.monthly_contribution
        case GoalBasedStrategy():
            return calculate_goal_based_monthly_contribution(
                strategy.goal,
                strategy.initial_amount,
                strategy.current_age,
                strategy.goal_age,
                yearly_return,
                tax_rate,
                strategy.inflation_rate,
                adjust_goal_for_inflation=settings.adjust_goal_for_inflation,
                policy=settings.solver,
            )
        case _:
            assert_never(strategy)


def get_strategy_financial_params(
    strategy: Strategy,
    settings: EngineSettings | None = None,
) -> StrategyFinancialParams | None:
    settings = resolve_settings(settings)
    fund = get_fund_by_id(strategy.selected_fund, settings.funds)
    if fund is None:
        logger.warning("Unknown fund %r for strategy %r", strategy.selected_fund, strategy.name)
        return None

    net_yearly_return = fund.net_yearly_return
    tax_rate = strategy.tax_rate / 100
    return StrategyFinancialParams(
        fund=fund,
        net_yearly_return=net_yearly_return,
        monthly_return=calculate_monthly_return(net_yearly_return),
        tax_rate=tax_rate,
        monthly_contribution=resolve_monthly_contribution(strategy, net_yearly_return, tax_rate, settings),
    )


def calculate_target_amount(
    strategy: Strategy,
    monthly_contribution: float,
    yearly_return: float,
    tax_rate: float,
) -> Tuple[float, int]:
    """Return ``(target_amount, years_to_goal)``.

    Goal-based targets are the nominal goal. Age-based strategies have no amount
    to reach, so the target is the capital projected at goal age.
    """
    years_to_goal = strategy.years_to_goal_age
    match strategy:
        case AgeBasedStrategy():
            target = calculate_projected_capital(
                strategy.initial_amount, monthly_contribution, yearly_return, tax_rate, years_to_goal
            )
            return target, years_to_goal
        case GoalBasedStrategy():
            return strategy.goal, years_to_goal
        case _:
            assert_never(strategy)


def get_effective_max_years(strategy: Strategy, max_years: int) -> int:
    # +1 so the goal-age year itself gets a row
    return max(0, min(max_years, strategy.years_to_goal_age + 1))


def calculate_goal_progress(
    strategy: Strategy,
    year_index: int,
    years_to_goal: int,
    capital_end: float,
    target_amount: float,
) -> float:
    match strategy:
        case AgeBasedStrategy():
            if years_to_goal <= 0:
                return 100.0
            progress = (year_index + 1) / years_to_goal * 100
        case GoalBasedStrategy():
            progress = capital_end / target_amount * 100 if target_amount > 0 else 0.0
        case _:
            assert_never(strategy)
    return max(0.0, min(progress, 100.0))


def should_stop_calculation(
    strategy: Strategy,
    age: int,
    capital_end: float,
    target_amount: float,
    *,
    stop_on_goal: bool = True,
) -> bool:
    if age >= strategy.goal_age:
        return True
    match strategy:
        case AgeBasedStrategy():
            return False
        case GoalBasedStrategy():
            return stop_on_goal and capital_end >= target_amount
        case _:
            assert_never(strategy)


def life_events_at_age(strategy: Strategy, age: int) -> Tuple[LifeEvent, ...]:
    return tuple(event for event in strategy.life_events if event.age == age)


def build_growth_rows(
    strategy: Strategy,
    monthly_contribution: float,
    monthly_return: float,
    tax_rate: float,
    target_amount: float,
    years_to_goal: int,
    max_years: int,
    start_year: int,
    *,
    stop_on_goal: bool = True,
) -> List[CapitalGrowthRow]:
    rows: List[CapitalGrowthRow] = []
    capital = strategy.initial_amount

    for year_index in range(get_effective_max_years(strategy, max_years)):
        age = strategy.current_age + year_index
        capital_start = capital
        result = calculate_year_capital(capital_start, monthly_contribution, monthly_return, tax_rate)

        capital_end = result.capital_end
        events = life_events_at_age(strategy, age)
        withdrawal = None
        if events:
            withdrawal = sum(event.amount for event in events)
            capital_end = max(0.0, capital_end - withdrawal)
        capital = capital_end

        rows.append(
            CapitalGrowthRow(
                year=start_year + year_index,
                age=age,
                capital_start=round_half_up(capital_start),
                contributions=round_half_up(result.annual_contributions),
                return_=round_half_up(result.total_return),
                tax=round_half_up(result.tax),
                capital_end=round_half_up(capital_end),
                goal_progress=calculate_goal_progress(
                    strategy, year_index, years_to_goal, capital_end, target_amount
                ),
                withdrawal=round_half_up(withdrawal) if withdrawal is not None else None,
                life_events=events,
            )
        )

        if should_stop_calculation(strategy, age, capital_end, target_amount, stop_on_goal=stop_on_goal):
            break

    return rows


def calculate_capital_growth(
    strategy: Strategy,
    max_years: int | None = None,
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> List[CapitalGrowthRow]:
    """Project ``strategy`` year by year until its goal age or goal amount.

    Returns an empty list when the selected fund is not in the catalog.
    ``max_years`` defaults to ``settings.max_years`` (50).
    """
    settings = resolve_settings(settings)
    params = get_strategy_financial_params(strategy, settings)
    if params is None:
        return []

    target_amount, years_to_goal = calculate_target_amount(
        strategy, params.monthly_contribution, params.net_yearly_return, params.tax_rate
    )
    return build_growth_rows(
        strategy,
        params.monthly_contribution,
        params.monthly_return,
        params.tax_rate,
        target_amount,
        years_to_goal,
        settings.max_years if max_years is None else max_years,
        date.today().year if start_year is None else start_year,
    )
