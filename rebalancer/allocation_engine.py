"""
rebalancer/allocation_engine.py
-------------------------------
Greedy whole-share allocation of new cash across a portfolio.

Design contract:
  - No I/O, no display concerns
  - Never mutates the caller's asset list
  - Fully deterministic and stateless (all methods are @staticmethod)

Algorithm
---------
Each greedy step tentatively buys one share of every affordable asset,
scores the resulting portfolio by the sum of squared percentage-point gaps
to target, and commits the purchase with the lowest score (first asset in
input order on ties).  The loop ends as soon as no single share fits in the
remaining cash, even if the only affordable purchase moves the portfolio
away from target.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from rebalancer.config import TIE_ATOL, TIE_RTOL
from rebalancer.models import AllocationResult, Asset
from rebalancer.portfolio_validator import PortfolioValidator

logger = logging.getLogger(__name__)


class AllocationEngine:
    """
    Decide how many whole shares of each asset to buy with *cash*.

    Entry point::

        results = AllocationEngine.allocate(assets, cash=1_000.0)
        leftover = AllocationEngine.leftover_cash(results, 1_000.0)

    Results come back sorted by ``investment_amount`` descending.
    """

    # ------------------------------------------------------------------ #
    #  Public entry point
    # ------------------------------------------------------------------ #

    @staticmethod
    def allocate(assets: List[Asset], cash: float) -> List[AllocationResult]:
        """
        Spend *cash* one share at a time, always on the asset that leaves the
        portfolio closest to its targets.

        Parameters
        ----------
        assets:
            Portfolio assets in priority order (order only matters for ties).
            Target allocations should add up to 100; see
            :meth:`PortfolioValidator.validate`.
        cash:
            New money to invest, in the assets' currency unit.

        Returns
        -------
        One :class:`AllocationResult` per asset, sorted by investment amount
        descending.  Empty when *cash* <= 0 or *assets* is empty.

        Raises
        ------
        InvalidAssetError
            If any asset has a non-positive price, a negative current value,
            or a duplicated symbol.
        """
        if cash <= 0 or not assets:
            return []

        PortfolioValidator.check_assets(assets)

        prices  = np.array([a.price for a in assets], dtype=float)
        targets = np.array([a.target_allocation for a in assets], dtype=float)
        values  = np.array([a.current_value for a in assets], dtype=float)
        shares  = [0] * len(assets)

        total_value    = float(values.sum())
        remaining_cash = float(cash)

        # Every step spends at least the cheapest price, so the loop can
        # never need more iterations than this.
        max_steps = math.ceil(cash / float(prices.min()))

        steps = 0
        while steps < max_steps:
            affordable = prices <= remaining_cash
            if not affordable.any():
                break

            candidates = AllocationEngine._candidate_deviations(
                values, prices, targets, total_value
            )
            candidates[~affordable] = np.inf
            best = AllocationEngine._first_minimum(candidates)

            remaining_cash -= prices[best]
            values[best]   += prices[best]
            total_value    += prices[best]
            shares[best]   += 1
            steps += 1

        logger.debug(
            f"Greedy allocation finished after {steps} steps "
            f"({remaining_cash:.2f} of {cash:.2f} left)"
        )

        new_total = sum(
            a.current_value + n * a.price for a, n in zip(assets, shares)
        )
        results = [
            AllocationEngine.build_result(asset, n, new_total)
            for asset, n in zip(assets, shares)
        ]
        # sorted() is stable, so equal amounts keep input order
        return sorted(results, key=lambda r: r.investment_amount, reverse=True)

    # ------------------------------------------------------------------ #
    #  Shared arithmetic
    # ------------------------------------------------------------------ #

    @staticmethod
    def deviation(
        values: Sequence[float],
        targets: Sequence[float],
        total: float,
    ) -> float:
        """
        Sum of squared percentage-point gaps between actual and target weights.

        With a zero *total* every actual weight is taken as 0.
        """
        targets = np.asarray(targets, dtype=float)
        if total <= 0:
            return float((targets ** 2).sum())
        row = np.asarray(values, dtype=float)[None, :]
        return float(AllocationEngine._squared_gaps(row, targets, np.array([total]))[0])

    @staticmethod
    def build_result(asset: Asset, shares: int, new_total: float) -> AllocationResult:
        """Derive every output field for *asset* after buying *shares*."""
        investment = shares * asset.price
        new_value = asset.current_value + investment
        pct = new_value / new_total * 100 if new_total > 0 else 0.0
        return AllocationResult(
            symbol=asset.symbol,
            name=asset.name,
            price=asset.price,
            current_value=asset.current_value,
            target_allocation=asset.target_allocation,
            shares=shares,
            investment_amount=investment,
            new_value=new_value,
            new_portfolio_percentage=pct,
            new_difference_from_target=pct - asset.target_allocation,
        )

    # ------------------------------------------------------------------ #
    #  Result helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def total_invested(results: List[AllocationResult]) -> float:
        return sum(r.investment_amount for r in results)

    @staticmethod
    def leftover_cash(results: List[AllocationResult], cash: float) -> float:
        """Cash the allocation did not spend."""
        return cash - AllocationEngine.total_invested(results)

    @staticmethod
    def share_counts(results: List[AllocationResult]) -> Dict[str, int]:
        """``{symbol: shares}`` for every asset with a purchase."""
        return {r.symbol: r.shares for r in results if r.shares > 0}

    # ------------------------------------------------------------------ #
    #  Private helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _candidate_deviations(
        values: np.ndarray,
        prices: np.ndarray,
        targets: np.ndarray,
        total: float,
    ) -> np.ndarray:
        """
        Deviation after buying one share of each asset, one row per candidate.

        Row *i* of the value grid is the current values with ``prices[i]``
        added to asset *i*; the matching total grows by the same amount.
        """
        n = len(values)
        grid = np.tile(values, (n, 1)) + np.diag(prices)
        return AllocationEngine._squared_gaps(grid, targets, total + prices)

    @staticmethod
    def _squared_gaps(
        grid: np.ndarray,
        targets: np.ndarray,
        totals: np.ndarray,
    ) -> np.ndarray:
        """Deviation metric for each row of *grid* against its own total."""
        pct = grid / totals[:, None] * 100
        return ((pct - targets) ** 2).sum(axis=1)

    @staticmethod
    def _first_minimum(candidates: np.ndarray) -> int:
        """
        Index of the lowest score, earliest index on ties.

        Row sums carry rounding noise of order 1e-12, so scores within
        TIE_RTOL / TIE_ATOL of the minimum count as equal.
        """
        lowest = candidates.min()
        tied = np.isclose(candidates, lowest, rtol=TIE_RTOL, atol=TIE_ATOL)
        return int(np.flatnonzero(tied)[0])
