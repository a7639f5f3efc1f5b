from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .strategy import LifeEvent


@dataclass(frozen=True)
class YearCapital:
    """Unrounded outcome of one simulated year."""

    capital_end: float
    annual_contributions: float
    total_return: float
    tax: float


@dataclass(frozen=True)
class CapitalGrowthRow:
    year: int
    age: int
    capital_start: int
    contributions: int
    return_: int  # gain before tax
    tax: int
    capital_end: int
    goal_progress: float  # 0-100
    withdrawal: int | None = None
    life_events: tuple[LifeEvent, ...] = ()

    def to_record(self) -> dict:
        return {
            "year": self.year,
            "age": self.age,
            "capitalStart": self.capital_start,
            "contributions": self.contributions,
            "return": self.return_,
            "tax": self.tax,
            "withdrawal": self.withdrawal,
            "capitalEnd": self.capital_end,
            "goalProgress": self.goal_progress,
            "lifeEvents": ", ".join(event.name for event in self.life_events),
        }


@dataclass(frozen=True)
class DelayCostResult:
    delay_years: int
    current_capital: float
    delayed_capital: float
    cost: float
    cost_percentage: float
    current_age_at_goal: int
    delayed_age_at_goal: int
    current_year_at_goal: int
    delayed_year_at_goal: int
    required_initial_amount: float | None = None
    required_monthly_contribution: float | None = None


@dataclass(frozen=True)
class WhatIfScenario:
    id: str
    name: str
    return_modifier: float
    rows: List[CapitalGrowthRow]
    final_capital: int
    difference: int
    difference_percentage: float


@dataclass(frozen=True)
class WhatIfReport:
    scenarios: List[WhatIfScenario]
    base_final_capital: int


@dataclass(frozen=True)
class StrategySummary:
    final_capital: int
    total_contributions: float
    total_returns: int
    total_taxes: int
    total_withdrawals: int
    inflation_adjusted_capital: float
    years_to_goal: int
    average_yearly_return: float  # nominal, percent
    effective_return_after_inflation: float  # percent
