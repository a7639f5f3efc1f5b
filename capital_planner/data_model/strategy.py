# data_model/strategy.py
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Iterable, List, Literal, Mapping, Union, assert_never

from .constants import DEFAULT_GOAL_AGE

StrategyType = Literal["age-based", "goal-based"]


@dataclass(frozen=True)
class LifeEvent:
    """One-off withdrawal taken from the capital in the year ``age`` is reached."""

    id: str
    name: str
    age: int
    amount: float


@dataclass(frozen=True, kw_only=True)
class StrategyBase:
    type: ClassVar[StrategyType]

    id: str
    name: str
    created_at: datetime = field(default_factory=datetime.now)
    current_age: int
    goal_age: int
    initial_amount: float = 0.0
    monthly_contribution: float = 0.0
    selected_fund: str
    inflation_rate: float = 0.0  # percent
    tax_rate: float = 0.0  # percent
    life_events: tuple[LifeEvent, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.life_events or (), key=lambda event: event.age))
        object.__setattr__(self, "life_events", ordered)

    @property
    def years_to_goal_age(self) -> int:
        return self.goal_age - self.current_age


@dataclass(frozen=True, kw_only=True)
class AgeBasedStrategy(StrategyBase):
    type: ClassVar[StrategyType] = "age-based"


@dataclass(frozen=True, kw_only=True)
class GoalBasedStrategy(StrategyBase):
    """Saves towards a nominal ``goal``; the monthly contribution is derived, not read."""

    type: ClassVar[StrategyType] = "goal-based"

    goal: float


Strategy = Union[AgeBasedStrategy, GoalBasedStrategy]

STRATEGY_CLASSES: Dict[str, type] = {
    AgeBasedStrategy.type: AgeBasedStrategy,
    GoalBasedStrategy.type: GoalBasedStrategy,
}


def find_next_name(names: Iterable[str], prefix: str) -> str:
    """Return ``"<prefix> <n>"`` where n is one above the largest number found in ``names``."""
    last_number = 0
    for name in names:
        match = re.search(r"\d+", name)
        last_number = max(last_number, int(match.group(0)) if match else 0)
    return f"{prefix} {last_number + 1}"


def create_default_strategy(
    name: str,
    *,
    strategy_id: str | None = None,
    created_at: datetime | None = None,
) -> AgeBasedStrategy:
    """Seed strategy for an empty collection. ``name`` comes from the caller's locale."""
    return AgeBasedStrategy(
        id=strategy_id or str(uuid.uuid4()),
        name=name,
        created_at=created_at or datetime.now(),
        current_age=25,
        goal_age=DEFAULT_GOAL_AGE,
        initial_amount=10000.0,
        monthly_contribution=500.0,
        selected_fund="SPX",
        inflation_rate=3.0,
        tax_rate=13.0,
    )


def _extract_payload_value(payload: Mapping[str, Any], *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _parse_created_at(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return datetime.now()


def life_events_from_rows(rows: Iterable[Mapping[str, Any]] | None) -> List[LifeEvent]:
    events: List[LifeEvent] = []
    for row in rows or []:
        amount = float(row.get("amount", 0.0) or 0.0)
        if amount == 0.0:
            continue
        events.append(
            LifeEvent(
                id=str(row.get("id") or uuid.uuid4()),
                name=str(row.get("name", "")).strip(),
                age=int(_extract_payload_value(row, "age", "targetAge", default=0)),
                amount=amount,
            )
        )
    return events


def strategy_from_dict(payload: Mapping[str, Any]) -> Strategy:
    """Build a strategy from a UI payload (camelCase keys, snake_case accepted too).

    Raises ``ValueError`` for an unknown strategy type or non-numeric fields.
    """
    kind = str(payload.get("type", "age-based"))
    cls = STRATEGY_CLASSES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown strategy type: {kind!r}")

    try:
        fields: Dict[str, Any] = {
            "id": str(payload.get("id") or uuid.uuid4()),
            "name": str(payload.get("name", "")).strip(),
            "created_at": _parse_created_at(_extract_payload_value(payload, "createdAt", "created_at")),
            "current_age": int(_extract_payload_value(payload, "currentAge", "current_age", default=0)),
            "goal_age": int(_extract_payload_value(payload, "goalAge", "goal_age", default=DEFAULT_GOAL_AGE)),
            "initial_amount": float(_extract_payload_value(payload, "initialAmount", "initial_amount", default=0.0)),
            "monthly_contribution": float(
                _extract_payload_value(payload, "monthlyContribution", "monthly_contribution", default=0.0)
            ),
            "selected_fund": str(_extract_payload_value(payload, "selectedFund", "selected_fund", default="")),
            "inflation_rate": float(_extract_payload_value(payload, "inflationRate", "inflation_rate", default=0.0)),
            "tax_rate": float(_extract_payload_value(payload, "taxRate", "tax_rate", default=0.0)),
            "life_events": tuple(
                life_events_from_rows(_extract_payload_value(payload, "lifeEvents", "life_events", default=[]))
            ),
        }
        if cls is GoalBasedStrategy:
            fields["goal"] = float(payload.get("goal", 0.0) or 0.0)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid strategy payload: {exc}") from exc

    return cls(**fields)


def strategy_to_dict(strategy: Strategy) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": strategy.id,
        "name": strategy.name,
        "createdAt": strategy.created_at.isoformat(),
        "type": strategy.type,
        "currentAge": strategy.current_age,
        "goalAge": strategy.goal_age,
        "initialAmount": strategy.initial_amount,
        "monthlyContribution": strategy.monthly_contribution,
        "selectedFund": strategy.selected_fund,
        "inflationRate": strategy.inflation_rate,
        "taxRate": strategy.tax_rate,
        "lifeEvents": [
            {"id": event.id, "name": event.name, "age": event.age, "amount": event.amount}
            for event in strategy.life_events
        ],
    }
    match strategy:
        case AgeBasedStrategy():
            pass
        case GoalBasedStrategy():
            payload["goal"] = strategy.goal
        case _:
            assert_never(strategy)
    return payload
