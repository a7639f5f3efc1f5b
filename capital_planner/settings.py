"""Engine configuration.

Defaults reproduce the calculator as shipped. ``load_settings_from_env()``
lets a host application tune the engine without code changes.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .data_model.constants import DEFAULT_SOLVER_POLICY, MAX_INVESTMENT_YEARS, SolverPolicy
from .data_model.funds import FUND_CATALOG, Fund, load_fund_catalog

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineSettings:
    max_years: int = MAX_INVESTMENT_YEARS
    solver: SolverPolicy = DEFAULT_SOLVER_POLICY
    # Inflate a goal-based target before deriving the monthly contribution.
    # Off by default: the nominal goal is what the user typed in.
    adjust_goal_for_inflation: bool = False
    # read-only; build a new EngineSettings to change funds
    funds: Mapping[str, Fund] = field(default_factory=lambda: FUND_CATALOG)


DEFAULT_SETTINGS = EngineSettings()


def resolve_settings(settings: EngineSettings | None) -> EngineSettings:
    return DEFAULT_SETTINGS if settings is None else settings


def load_settings_from_env() -> EngineSettings:
    """Creates settings based on env vars.

    Env vars:
      CAPITAL_PLANNER_MAX_YEARS=50                    -> upper bound on projected years
      CAPITAL_PLANNER_SOLVER_MAX_ITERATIONS=100       -> binary search iteration cap
      CAPITAL_PLANNER_SOLVER_ESCALATION_ITERATION=50  -> when to start doubling the bound
      CAPITAL_PLANNER_SOLVER_ESCALATION_RATIO=0.9     -> doubling trigger, share of target
      CAPITAL_PLANNER_ADJUST_GOAL_FOR_INFLATION=1     -> inflate goal-based targets
      CAPITAL_PLANNER_FUND_CATALOG=<path.json>        -> fund overrides merged over the catalog
    """
    solver = SolverPolicy(
        max_iterations=int(os.getenv("CAPITAL_PLANNER_SOLVER_MAX_ITERATIONS", DEFAULT_SOLVER_POLICY.max_iterations)),
        escalation_threshold_iteration=int(
            os.getenv(
                "CAPITAL_PLANNER_SOLVER_ESCALATION_ITERATION",
                DEFAULT_SOLVER_POLICY.escalation_threshold_iteration,
            )
        ),
        escalation_ratio=float(
            os.getenv("CAPITAL_PLANNER_SOLVER_ESCALATION_RATIO", DEFAULT_SOLVER_POLICY.escalation_ratio)
        ),
    )
    if solver.max_iterations <= 0:
        raise ValueError("CAPITAL_PLANNER_SOLVER_MAX_ITERATIONS must be positive.")

    max_years = int(os.getenv("CAPITAL_PLANNER_MAX_YEARS", MAX_INVESTMENT_YEARS))
    if max_years <= 0:
        raise ValueError("CAPITAL_PLANNER_MAX_YEARS must be positive.")

    adjust = str(os.getenv("CAPITAL_PLANNER_ADJUST_GOAL_FOR_INFLATION", "")).lower() in TRUTHY
    funds = load_fund_catalog(os.getenv("CAPITAL_PLANNER_FUND_CATALOG", ""))

    logger.debug(
        "Loaded engine settings: max_years=%s solver=%s adjust_goal_for_inflation=%s funds=%d",
        max_years,
        solver,
        adjust,
        len(funds),
    )
    return EngineSettings(
        max_years=max_years, solver=solver, adjust_goal_for_inflation=adjust, funds=MappingProxyType(funds)
    )
