import math
from dataclasses import replace

import pandas as pd
import pytest

from capital_planner.data_model import AgeBasedStrategy, CapitalGrowthRow
from capital_planner.engine.growth import calculate_capital_growth
from capital_planner.engine.prepare import (
    ROW_COLUMNS,
    StrategyGrowthData,
    align_by_age,
    calculate_average_year,
    calculate_cumulative_contributions,
    calculate_cumulative_contributions_by_age,
    get_age_range,
    get_last_row_up_to_year,
    growth_rows_to_frame,
    prepare_growth_data,
)

START_YEAR = 2030

ROWS = [
    CapitalGrowthRow(2024, 25, 100000, 12000, 10000, 1300, 120700, 5),
    CapitalGrowthRow(2025, 26, 120700, 12000, 12000, 1560, 143140, 10),
    CapitalGrowthRow(2026, 27, 143140, 12000, 14000, 1820, 167320, 15),
]


def _strategy(name: str, current_age: int, goal_age: int) -> AgeBasedStrategy:
    return AgeBasedStrategy(
        id=name,
        name=name,
        current_age=current_age,
        goal_age=goal_age,
        initial_amount=100000,
        monthly_contribution=1000,
        selected_fund="SPX",
        inflation_rate=3,
        tax_rate=13,
    )


def test_cumulative_contributions():
    assert calculate_cumulative_contributions(ROWS, 2025) == 24000
    assert calculate_cumulative_contributions(ROWS, 2023) == 0
    assert calculate_cumulative_contributions([], 2024) == 0
    assert calculate_cumulative_contributions_by_age(ROWS, 27) == 36000


def test_last_row_up_to_year():
    assert get_last_row_up_to_year(ROWS, 2025).year == 2025
    assert get_last_row_up_to_year([ROWS[0], ROWS[2]], 2025).year == 2024
    assert get_last_row_up_to_year(ROWS, 2023) is None


@pytest.mark.parametrize(
    "years, expected",
    [([2024, 2025, 2026], 2025), ([2024, 2025, 2026, 2027], 2026), ([], 0), ([2024], 2024)],
)
def test_average_year(years, expected):
    assert calculate_average_year(years) == expected


def test_age_range_across_strategies():
    growth_data = [
        StrategyGrowthData(_strategy("A", 25, 65), ROWS[:2]),
        StrategyGrowthData(_strategy("B", 30, 65), [replace(ROWS[0], age=30), replace(ROWS[1], age=31)]),
    ]

    assert get_age_range(growth_data) == (25, 31)
    assert get_age_range([StrategyGrowthData(_strategy("C", 25, 65), [])]) is None


def test_growth_rows_to_frame():
    df = growth_rows_to_frame(ROWS)

    assert list(df.columns) == ROW_COLUMNS
    assert len(df) == 3
    assert df["capitalEnd"].tolist() == [120700, 143140, 167320]
    assert growth_rows_to_frame([]).empty


def test_align_requires_columns():
    with pytest.raises(KeyError):
        align_by_age(pd.DataFrame({"age": [25]}), pd.RangeIndex(25, 27, name="age"))


def test_prepare_growth_data_aligns_by_age():
    first = _strategy("A", 25, 30)
    second = _strategy("B", 28, 35)
    rows_a = calculate_capital_growth(first, start_year=START_YEAR)
    rows_b = calculate_capital_growth(second, start_year=START_YEAR)

    df = prepare_growth_data([first, second], start_year=START_YEAR)

    assert df["age"].tolist() == list(range(25, 36))
    by_age = df.set_index("age")
    assert by_age.loc[25, "A"] == rows_a[0].capital_end
    assert by_age.loc[26, "A_contributions"] == 24000
    # A ends at 30; its last value carries forward
    assert by_age.loc[35, "A"] == rows_a[-1].capital_end
    assert by_age.loc[35, "A_contributions"] == 72000
    # B starts at 28; nothing before that
    assert math.isnan(by_age.loc[25, "B"])
    assert by_age.loc[35, "B"] == rows_b[-1].capital_end
    assert by_age.loc[25, "year"] == START_YEAR
    assert by_age.loc[28, "year"] == 2032  # mean of 2033 and 2030, rounded half up
    assert by_age.loc[35, "year"] == 2036


def test_prepare_growth_data_empty_inputs():
    assert prepare_growth_data([]).empty
    assert prepare_growth_data([replace(_strategy("X", 25, 30), selected_fund="NOPE")]).empty
