from .compounding import (
    calculate_monthly_return,
    calculate_projected_capital,
    calculate_year_capital,
    estimate_years_to_goal,
    round_half_up,
)
from .delay import (
    calculate_delay_cost,
    calculate_delay_data_list,
    generate_delay_periods,
    get_effective_max_delay_years,
    is_valid_delay_scenario,
)
from .growth import (
    StrategyFinancialParams,
    calculate_capital_growth,
    calculate_goal_based_monthly_contribution,
    calculate_goal_progress,
    calculate_target_amount,
    get_effective_max_years,
    get_strategy_financial_params,
    resolve_monthly_contribution,
    should_stop_calculation,
)
from .prepare import growth_rows_to_frame, prepare_growth_data
from .solvers import calculate_required_initial_amount, calculate_required_monthly_contribution
from .summary import calculate_summary
from .what_if import generate_what_if_scenarios

__all__ = [
    "StrategyFinancialParams",
    "calculate_capital_growth",
    "calculate_delay_cost",
    "calculate_delay_data_list",
    "calculate_goal_based_monthly_contribution",
    "calculate_goal_progress",
    "calculate_monthly_return",
    "calculate_projected_capital",
    "calculate_required_initial_amount",
    "calculate_required_monthly_contribution",
    "calculate_summary",
    "calculate_target_amount",
    "calculate_year_capital",
    "estimate_years_to_goal",
    "generate_delay_periods",
    "generate_what_if_scenarios",
    "get_effective_max_delay_years",
    "get_effective_max_years",
    "get_strategy_financial_params",
    "growth_rows_to_frame",
    "is_valid_delay_scenario",
    "prepare_growth_data",
    "resolve_monthly_contribution",
    "round_half_up",
    "should_stop_calculation",
]
