"""
rebalancer/portfolio_validator.py
---------------------------------
Checks performed before an allocation run.

Design contract:
  - ``validate`` is advisory: it never raises and never mutates its input
  - ``check_assets`` guards the engines against inputs that would make the
    greedy loop divide by zero or never terminate
  - Fully stateless (all methods are @staticmethod)
"""

from __future__ import annotations

import math
from typing import List

from rebalancer.config import ALLOCATION_TOLERANCE, ALLOCATION_TOTAL
from rebalancer.exceptions import InvalidAssetError
from rebalancer.models import Asset


class PortfolioValidator:
    """Target-allocation and structural checks over an asset list."""

    @staticmethod
    def total_target_allocation(assets: List[Asset]) -> float:
        """Sum of target allocations in percentage points (0 for no assets)."""
        return sum(a.target_allocation for a in assets)

    @staticmethod
    def validate(assets: List[Asset]) -> bool:
        """
        Return True iff target allocations add up to 100 within tolerance.

        An empty portfolio is invalid (its total is 0).
        """
        total = PortfolioValidator.total_target_allocation(assets)
        return abs(total - ALLOCATION_TOTAL) < ALLOCATION_TOLERANCE

    @staticmethod
    def check_assets(assets: List[Asset]) -> None:
        """
        Raise :class:`InvalidAssetError` for assets the engines cannot price.

        Rejected:
            * price that is zero, negative, NaN or infinite
            * negative current value
            * a symbol seen earlier in the same list
        """
        seen = set()
        for asset in assets:
            if not math.isfinite(asset.price) or asset.price <= 0:
                raise InvalidAssetError(
                    f"Asset {asset.symbol!r} has invalid price {asset.price!r}; "
                    "price must be a positive number.",
                    symbol=asset.symbol,
                )
            if asset.current_value < 0:
                raise InvalidAssetError(
                    f"Asset {asset.symbol!r} has negative current value "
                    f"{asset.current_value!r}.",
                    symbol=asset.symbol,
                )
            if asset.symbol in seen:
                raise InvalidAssetError(
                    f"Duplicate symbol {asset.symbol!r} in portfolio.",
                    symbol=asset.symbol,
                )
            seen.add(asset.symbol)
