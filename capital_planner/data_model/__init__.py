from .constants import (
    DEFAULT_SOLVER_POLICY,
    MAX_AGE,
    MAX_INVESTMENT_YEARS,
    MIN_AGE,
    STRATEGY_TYPES,
    WHAT_IF_MODIFIERS,
    SolverPolicy,
)
from .funds import FUND_CATALOG, FUNDS, Fund, get_fund_by_id, load_fund_catalog
from .results import (
    CapitalGrowthRow,
    DelayCostResult,
    StrategySummary,
    WhatIfReport,
    WhatIfScenario,
    YearCapital,
)
from .strategy import (
    AgeBasedStrategy,
    GoalBasedStrategy,
    LifeEvent,
    Strategy,
    create_default_strategy,
    find_next_name,
    strategy_from_dict,
    strategy_to_dict,
)

__all__ = [
    "DEFAULT_SOLVER_POLICY",
    "FUNDS",
    "FUND_CATALOG",
    "MAX_AGE",
    "MAX_INVESTMENT_YEARS",
    "MIN_AGE",
    "STRATEGY_TYPES",
    "WHAT_IF_MODIFIERS",
    "AgeBasedStrategy",
    "CapitalGrowthRow",
    "DelayCostResult",
    "Fund",
    "GoalBasedStrategy",
    "LifeEvent",
    "SolverPolicy",
    "Strategy",
    "StrategySummary",
    "WhatIfReport",
    "WhatIfScenario",
    "YearCapital",
    "create_default_strategy",
    "find_next_name",
    "get_fund_by_id",
    "load_fund_catalog",
    "strategy_from_dict",
    "strategy_to_dict",
]
