"""Binary searches over the forward projection.

Both searches rely on the projection being non-decreasing in the searched
variable: extra initial capital or contributions only ever add capital.
"""
from __future__ import annotations

import logging
import math

from ..data_model.constants import DEFAULT_SOLVER_POLICY, MONTHS_PER_YEAR, SolverPolicy
from .compounding import calculate_projected_capital

logger = logging.getLogger(__name__)


def calculate_required_initial_amount(
    target_capital: float,
    monthly_contribution: float,
    yearly_return: float,
    tax_rate: float,
    years: int,
    policy: SolverPolicy | None = None,
) -> float:
    """Smallest whole initial amount that grows to ``target_capital`` within ``years``."""
    policy = policy or DEFAULT_SOLVER_POLICY
    if years <= 0:
        return target_capital
    if calculate_projected_capital(0.0, monthly_contribution, yearly_return, tax_rate, years) >= target_capital:
        return 0.0

    low, high = 0.0, float(target_capital)
    for _ in range(policy.max_iterations):
        if high - low <= policy.initial_amount_tolerance:
            break
        mid = (low + high) / 2
        projected = calculate_projected_capital(mid, monthly_contribution, yearly_return, tax_rate, years)
        if projected < target_capital:
            low = mid
        else:
            high = mid
    else:
        logger.debug(
            "Initial amount search stopped after %d iterations (interval %.4f)",
            policy.max_iterations,
            high - low,
        )
    return float(math.ceil(high))


def calculate_required_monthly_contribution(
    target_capital: float,
    initial_amount: float,
    yearly_return: float,
    tax_rate: float,
    years: int,
    policy: SolverPolicy | None = None,
) -> float:
    """Smallest monthly contribution, rounded up to the cent, reaching ``target_capital``.

    The starting upper bound ignores growth entirely. When it turns out too low
    (negative returns, heavy tax), the bound is doubled once the search has
    passed ``policy.escalation_threshold_iteration`` and still projects under
    ``policy.escalation_ratio`` of the target.
    """
    policy = policy or DEFAULT_SOLVER_POLICY
    if years <= 0:
        return 0.0
    if calculate_projected_capital(initial_amount, 0.0, yearly_return, tax_rate, years) >= target_capital:
        return 0.0

    months = years * MONTHS_PER_YEAR
    low = 0.0
    high = max(target_capital, target_capital - initial_amount) / months
    # high is only trusted once some projection at or below it reached the target
    bracketed = False
    converged = False
    for iteration in range(policy.max_iterations):
        mid = (low + high) / 2
        projected = calculate_projected_capital(initial_amount, mid, yearly_return, tax_rate, years)

        if (
            not bracketed
            and iteration >= policy.escalation_threshold_iteration
            and projected < target_capital * policy.escalation_ratio
        ):
            logger.debug("Escalating contribution bound from %.2f at iteration %d", high, iteration)
            low = mid
            high *= 2
            continue

        if projected < target_capital:
            low = mid
        else:
            high = mid
            bracketed = True
        if bracketed and high - low < policy.contribution_tolerance:
            converged = True
            break

    if not converged:
        logger.debug("Contribution search did not converge; best estimate %.2f", high)
    return math.ceil(high * 100) / 100
