"""Return-rate sensitivity: rerun the projection with the net return shifted up or down."""
from __future__ import annotations

from datetime import date
from typing import List, Sequence

from ..data_model.constants import WHAT_IF_MODIFIERS
from ..data_model.results import CapitalGrowthRow, WhatIfReport, WhatIfScenario
from ..data_model.strategy import Strategy
from ..settings import EngineSettings, resolve_settings
from .compounding import calculate_monthly_return
from .growth import (
    StrategyFinancialParams,
    build_growth_rows,
    calculate_target_amount,
    get_strategy_financial_params,
)


def calculate_capital_growth_with_modified_return(
    strategy: Strategy,
    params: StrategyFinancialParams,
    return_modifier: float,
    *,
    start_year: int,
    settings: EngineSettings,
) -> List[CapitalGrowthRow]:
    """Rows for the shifted return, with the base case's contribution held fixed.

    Runs through the goal age even when a goal-based amount is reached earlier,
    so every scenario ends at the same age.
    """
    modified_return = params.net_yearly_return + return_modifier
    target_amount, years_to_goal = calculate_target_amount(
        strategy, params.monthly_contribution, modified_return, params.tax_rate
    )
    return build_growth_rows(
        strategy,
        params.monthly_contribution,
        calculate_monthly_return(modified_return),
        params.tax_rate,
        target_amount,
        years_to_goal,
        settings.max_years,
        start_year,
        stop_on_goal=False,
    )


def generate_what_if_scenarios(
    strategy: Strategy,
    base_rows: Sequence[CapitalGrowthRow],
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> WhatIfReport:
    """Scenarios for every modifier in WHAT_IF_MODIFIERS, compared to an unmodified rerun.

    ``base_rows`` only signals that a projection exists. The base capital is
    recomputed under the same age-only stop rule as the scenarios.
    """
    settings = resolve_settings(settings)
    params = get_strategy_financial_params(strategy, settings)
    if params is None or not base_rows:
        return WhatIfReport(scenarios=[], base_final_capital=0)

    start_year = date.today().year if start_year is None else start_year
    base = calculate_capital_growth_with_modified_return(
        strategy, params, 0.0, start_year=start_year, settings=settings
    )
    base_final_capital = base[-1].capital_end if base else 0

    scenarios: List[WhatIfScenario] = []
    for scenario_id, label, modifier in WHAT_IF_MODIFIERS:
        rows = calculate_capital_growth_with_modified_return(
            strategy, params, modifier, start_year=start_year, settings=settings
        )
        if not rows:
            continue
        final_capital = rows[-1].capital_end
        difference = final_capital - base_final_capital
        difference_percentage = difference / base_final_capital * 100 if base_final_capital > 0 else 0.0
        scenarios.append(
            WhatIfScenario(
                id=scenario_id,
                name=label,
                return_modifier=modifier,
                rows=rows,
                final_capital=final_capital,
                difference=difference,
                difference_percentage=difference_percentage,
            )
        )

    return WhatIfReport(scenarios=scenarios, base_final_capital=base_final_capital)
