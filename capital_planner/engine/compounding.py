"""Yearly compounding step shared by the growth engine, solvers and scenarios."""
from __future__ import annotations

import math

from ..data_model.constants import MAX_YEARS_TO_GOAL, MONTHS_PER_YEAR
from ..data_model.results import YearCapital


def round_half_up(value: float) -> int:
    """Display rounding; .5 always goes up, unlike ``round()``."""
    return int(math.floor(value + 0.5))


def calculate_monthly_return(yearly_return: float) -> float:
    """Geometric monthly rate that compounds to ``yearly_return`` over twelve months."""
    return (1 + yearly_return) ** (1 / MONTHS_PER_YEAR) - 1


def calculate_year_capital(
    capital_start: float,
    monthly_contribution: float,
    monthly_return: float,
    tax_rate: float,
) -> YearCapital:
    """Simulate one year: each month the contribution lands first, then the month's return.

    Only a positive yearly gain is taxed; losses are not carried forward.
    """
    capital = capital_start
    for _ in range(MONTHS_PER_YEAR):
        capital += monthly_contribution
        capital *= 1 + monthly_return

    annual_contributions = monthly_contribution * MONTHS_PER_YEAR
    total_return = capital - capital_start - annual_contributions
    tax = total_return * tax_rate if total_return > 0 else 0.0
    return YearCapital(
        capital_end=capital - tax,
        annual_contributions=annual_contributions,
        total_return=total_return,
        tax=tax,
    )


def calculate_projected_capital(
    initial: float,
    monthly_contribution: float,
    yearly_return: float,
    tax_rate: float,
    years: int,
) -> float:
    monthly_return = calculate_monthly_return(yearly_return)
    capital = initial
    for _ in range(max(0, int(years))):
        capital = calculate_year_capital(capital, monthly_contribution, monthly_return, tax_rate).capital_end
    return capital


def estimate_years_to_goal(
    initial: float,
    monthly_contribution: float,
    yearly_return: float,
    tax_rate: float,
    goal: float,
) -> int:
    """Whole years until ``goal`` is reached, capped at MAX_YEARS_TO_GOAL."""
    monthly_return = calculate_monthly_return(yearly_return)
    years = 0
    capital = initial
    while capital < goal and years < MAX_YEARS_TO_GOAL:
        capital = calculate_year_capital(capital, monthly_contribution, monthly_return, tax_rate).capital_end
        years += 1
    return years
