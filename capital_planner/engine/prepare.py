# engine/prepare.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from ..data_model.results import CapitalGrowthRow
from ..data_model.strategy import Strategy
from ..settings import EngineSettings
from .compounding import round_half_up
from .growth import calculate_capital_growth

ROW_COLUMNS = [
    "year",
    "age",
    "capitalStart",
    "contributions",
    "return",
    "tax",
    "withdrawal",
    "capitalEnd",
    "goalProgress",
    "lifeEvents",
]
REQUIRED_COLUMNS = {"year", "age", "contributions", "capitalEnd"}


@dataclass(frozen=True)
class StrategyGrowthData:
    strategy: Strategy
    rows: List[CapitalGrowthRow]


def calculate_cumulative_contributions(rows: Iterable[CapitalGrowthRow], year: int) -> int:
    return sum(row.contributions for row in rows if row.year <= year)


def calculate_cumulative_contributions_by_age(rows: Iterable[CapitalGrowthRow], age: int) -> int:
    return sum(row.contributions for row in rows if row.age <= age)


def get_last_row_up_to_year(rows: Iterable[CapitalGrowthRow], year: int) -> CapitalGrowthRow | None:
    candidates = [row for row in rows if row.year <= year]
    return max(candidates, key=lambda row: row.year) if candidates else None


def get_age_range(growth_data: Sequence[StrategyGrowthData]) -> Tuple[int, int] | None:
    ages = [row.age for item in growth_data for row in item.rows]
    if not ages:
        return None
    return min(ages), max(ages)


def calculate_average_year(years: Sequence[float]) -> int:
    if not years:
        return 0
    return round_half_up(sum(years) / len(years))


def growth_rows_to_frame(rows: Iterable[CapitalGrowthRow]) -> pd.DataFrame:
    """Tabular view of a projection, columns named as the UI table and CSV export expect."""
    records = [row.to_record() for row in rows]
    if not records:
        return pd.DataFrame(columns=ROW_COLUMNS)
    return pd.DataFrame(records, columns=ROW_COLUMNS)


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")
    return df.sort_values("age").copy()


def align_by_age(df: pd.DataFrame, ages: pd.Index) -> pd.DataFrame:
    """Reindex one strategy's rows onto ``ages``.

    Ages after the last row keep the last capital; ages before the first row
    stay empty. Contributions are cumulative.
    """
    df = _prepare(df)
    df["cumulativeContributions"] = df["contributions"].cumsum()
    aligned = df.set_index("age")[["year", "capitalEnd", "cumulativeContributions"]].reindex(ages)
    return aligned.ffill()


def prepare_growth_data(
    strategies: Sequence[Strategy],
    *,
    start_year: int | None = None,
    settings: EngineSettings | None = None,
) -> pd.DataFrame:
    """Age-aligned comparison frame for several strategies.

    One row per age across all strategies, with a ``<name>`` capital column and
    a ``<name>_contributions`` column per strategy, plus the average calendar
    ``year`` of the strategies at that age. Strategies are never summed.
    """
    if not strategies:
        return pd.DataFrame()

    growth_data = [
        StrategyGrowthData(
            strategy=strategy,
            rows=calculate_capital_growth(strategy, start_year=start_year, settings=settings),
        )
        for strategy in strategies
    ]
    age_range = get_age_range(growth_data)
    if age_range is None:
        return pd.DataFrame()

    min_age, max_age = age_range
    ages = pd.RangeIndex(min_age, max_age + 1, name="age")
    prepared = pd.DataFrame(index=ages)
    years: List[pd.Series] = []

    for item in growth_data:
        if not item.rows:
            continue
        aligned = align_by_age(growth_rows_to_frame(item.rows), ages)
        name = item.strategy.name
        prepared[name] = aligned["capitalEnd"]
        prepared[f"{name}_contributions"] = aligned["cumulativeContributions"]
        years.append(aligned["year"])

    prepared["year"] = pd.concat(years, axis=1).mean(axis=1).map(round_half_up)
    return prepared.reset_index()
