"""
rebalancer/models.py
--------------------
Plain data carriers shared by the validator, the greedy engine and the
manual simulator.

Assets serialise to the camelCase shape used by the portfolio store so that
files written by earlier versions of the tool keep loading.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rebalancer.enums import SimulationIssue


# camelCase key in stored dicts → dataclass field name
_ASSET_KEYS: Dict[str, str] = {
    "symbol":           "symbol",
    "name":             "name",
    "price":            "price",
    "currentValue":     "current_value",
    "targetAllocation": "target_allocation",
    "exchange":         "exchange",
    "lastPrice":        "last_price",
    "lastUpdated":      "last_updated",
    "minBuyPrice":      "min_buy_price",
}


@dataclass(frozen=True)
class Asset:
    """
    One holding (or prospective holding) in the portfolio.

    ``price``, ``current_value`` and the investment cash share one currency
    unit.  ``target_allocation`` is in percentage points of the portfolio
    value after the new cash is invested.
    """
    symbol: str
    name: str
    price: float
    current_value: float = 0.0
    target_allocation: float = 0.0

    exchange: Optional[str] = None
    last_price: Optional[float] = None
    last_updated: Optional[float] = None     # epoch seconds
    min_buy_price: Optional[float] = None

    @property
    def buy_increment(self) -> float:
        """Smallest purchasable amount; falls back to one share's price."""
        if self.min_buy_price and self.min_buy_price > 0:
            return self.min_buy_price
        return self.price

    def to_dict(self) -> dict:
        out = {}
        for key, attr in _ASSET_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "Asset":
        kwargs = {
            attr: data[key]
            for key, attr in _ASSET_KEYS.items()
            if data.get(key) is not None
        }
        kwargs.setdefault("name", kwargs.get("symbol", ""))
        return cls(**kwargs)


@dataclass
class AllocationResult:
    """Recommended (or simulated) purchase for one asset."""
    symbol: str
    name: str
    price: float
    current_value: float
    target_allocation: float
    shares: int
    investment_amount: float
    new_value: float
    new_portfolio_percentage: float
    new_difference_from_target: float

    def to_dict(self) -> dict:
        return {
            "symbol":                     self.symbol,
            "name":                       self.name,
            "price":                      self.price,
            "current_value":              self.current_value,
            "target_allocation":          self.target_allocation,
            "shares":                     self.shares,
            "investment_amount":          self.investment_amount,
            "new_value":                  self.new_value,
            "new_portfolio_percentage":   self.new_portfolio_percentage,
            "new_difference_from_target": self.new_difference_from_target,
        }


@dataclass
class SimulationReport:
    """
    Outcome of evaluating caller-supplied share counts.

    Validation findings are data: the results are always computed, and the
    caller decides whether to act on ``is_valid``.
    """
    results: List[AllocationResult] = field(default_factory=list)
    total_spent: float = 0.0
    remaining_cash: float = 0.0

    # symbol → issue / human-readable message
    issues: Dict[str, SimulationIssue] = field(default_factory=dict)
    messages: Dict[str, str] = field(default_factory=dict)

    exceeds_budget: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.issues and not self.exceeds_budget


@dataclass
class PortfolioData:
    """Snapshot persisted between sessions."""
    assets: List[Asset] = field(default_factory=list)
    additional_investment: float = 0.0

    @property
    def current_portfolio_value(self) -> float:
        return sum(a.current_value for a in self.assets)
