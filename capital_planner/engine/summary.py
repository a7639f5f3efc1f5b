from __future__ import annotations

from ..data_model.results import StrategySummary
from ..data_model.strategy import Strategy
from ..settings import EngineSettings, resolve_settings
from .growth import calculate_capital_growth, get_strategy_financial_params


def calculate_summary(
    strategy: Strategy,
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> StrategySummary | None:
    """Totals over the projection plus the final capital in today's purchasing power.

    Inflation only shows up here; it never changes the projection itself.
    """
    settings = resolve_settings(settings)
    params = get_strategy_financial_params(strategy, settings)
    if params is None:
        return None
    rows = calculate_capital_growth(strategy, start_year=start_year, settings=settings)
    if not rows:
        return None

    final_capital = rows[-1].capital_end
    years = len(rows)
    inflation_multiplier = (1 + strategy.inflation_rate / 100) ** years
    nominal_return = params.fund.yearly_return * 100

    return StrategySummary(
        final_capital=final_capital,
        total_contributions=strategy.initial_amount + sum(row.contributions for row in rows),
        total_returns=sum(row.return_ for row in rows),
        total_taxes=sum(row.tax for row in rows),
        total_withdrawals=sum(row.withdrawal or 0 for row in rows),
        inflation_adjusted_capital=final_capital / inflation_multiplier,
        years_to_goal=years,
        average_yearly_return=nominal_return,
        effective_return_after_inflation=nominal_return - strategy.inflation_rate,
    )
