from __future__ import annotations

from dataclasses import dataclass

STRATEGY_TYPES = ("age-based", "goal-based")

MIN_AGE = 0
MAX_AGE = 120
DEFAULT_GOAL_AGE = 65
MAX_INVESTMENT_YEARS = 50

MAX_YEARS_TO_GOAL = 100
DEFAULT_MAX_DELAY_YEARS = 30
DEFAULT_DELAY_STEP_YEARS = 3

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class SolverPolicy:
    """Iteration limits for the binary-search solvers.

    The monthly-contribution search starts from an estimated upper bound. Once
    ``escalation_threshold_iteration`` steps have run and the projection is
    still below ``escalation_ratio`` of the target, the bound is doubled.
    """

    max_iterations: int = 100
    escalation_threshold_iteration: int = 50
    escalation_ratio: float = 0.9
    initial_amount_tolerance: float = 1.0
    contribution_tolerance: float = 0.01


DEFAULT_SOLVER_POLICY = SolverPolicy()

# (id, label, modifier applied to the net yearly return)
WHAT_IF_MODIFIERS: tuple[tuple[str, str, float], ...] = (
    ("pessimistic-3", "-3%", -0.03),
    ("pessimistic-2", "-2%", -0.02),
    ("pessimistic-1", "-1%", -0.01),
    ("optimistic-1", "+1%", 0.01),
    ("optimistic-2", "+2%", 0.02),
    ("optimistic-3", "+3%", 0.03),
)
