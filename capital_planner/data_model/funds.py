from __future__ import annotations

import json
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping


@dataclass(frozen=True)
class Fund:
    id: str
    name: str
    description: str
    yearly_return: float
    expense_ratio: float = 0.0  # TER as a decimal, 0.0003 == 0.03%

    @property
    def net_yearly_return(self) -> float:
        return self.yearly_return - self.expense_ratio


FUNDS: tuple[Fund, ...] = (
    Fund("SPX", "S&P 500", "S&P 500 Index", 0.11, 0.0003),
    Fund("NDX", "NASDAQ 100", "NASDAQ 100 Index", 0.13, 0.002),
    Fund("DJI", "Dow Jones", "Dow Jones Industrial Average", 0.10, 0.0016),
    Fund("MSCI", "MSCI World", "MSCI World Index", 0.09, 0.002),
    Fund("FTSE", "FTSE 100", "FTSE 100 Index", 0.08, 0.0007),
    Fund("N225", "Nikkei 225", "Nikkei 225 Index", 0.07, 0.0048),
    Fund("DAX", "DAX", "DAX Index", 0.08, 0.0016),
    Fund("CAC", "CAC 40", "CAC 40 Index", 0.07, 0.0025),
    Fund("ASX", "ASX 200", "ASX 200 Index", 0.09, 0.0007),
    Fund("TSX", "TSX Composite", "S&P/TSX Composite Index", 0.08, 0.0006),
    Fund("BOND", "Government Bonds", "10-Year Government Bonds", 0.04, 0.0003),
    Fund("GOLD", "Gold", "Gold ETF", 0.05, 0.004),
    Fund("REIT", "REIT", "Real Estate Investment Trust", 0.10, 0.0012),
    Fund("EM", "Emerging Markets", "Emerging Markets Index", 0.12, 0.0011),
    Fund("SMALL", "Small Cap", "Small Cap Stocks Index", 0.13, 0.0005),
)

FUND_CATALOG: Mapping[str, Fund] = MappingProxyType({fund.id: fund for fund in FUNDS})


def get_fund_by_id(fund_id: str, catalog: Mapping[str, Fund] | None = None) -> Fund | None:
    return (FUND_CATALOG if catalog is None else catalog).get(fund_id)


def fund_from_dict(row: Mapping[str, Any]) -> Fund:
    fund_id = str(row.get("id", "")).strip()
    if not fund_id:
        raise ValueError("Fund entry is missing an id.")
    return Fund(
        id=fund_id,
        name=str(row.get("name", fund_id)),
        description=str(row.get("description", "")),
        yearly_return=float(row.get("yearlyReturn", row.get("yearly_return", 0.0)) or 0.0),
        expense_ratio=float(row.get("expenseRatio", row.get("expense_ratio", 0.0)) or 0.0),
    )


def _iter_fund_rows(data: Any) -> Iterable[Mapping[str, Any]]:
    if isinstance(data, dict):
        # {"SPX": {...}} keyed form; the key wins over any embedded id
        for key, value in data.items():
            yield {**value, "id": key}
    elif isinstance(data, list):
        yield from data
    else:
        raise ValueError("Fund catalog must be a JSON list or object.")


def load_fund_catalog(path: str, base: Mapping[str, Fund] | None = None) -> Dict[str, Fund]:
    """Merge fund overrides from a JSON file over ``base`` (the static catalog by default).

    A missing or empty file leaves the base catalog untouched.
    """
    catalog = dict(FUND_CATALOG if base is None else base)
    if not path or not os.path.exists(path):
        return catalog
    with open(path, "r", encoding="utf-8") as handle:
        raw_text = handle.read().strip()
    if not raw_text:
        return catalog
    for row in _iter_fund_rows(json.loads(raw_text)):
        fund = fund_from_dict(row)
        catalog[fund.id] = fund
    return catalog
