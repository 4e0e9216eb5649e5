"""
rebalancer/simulation.py
------------------------
What-if evaluation of share counts entered by the user.

Unlike :class:`AllocationEngine`, nothing is searched: the caller's share
counts are priced with the same formulas, and the portfolio percentages use
the *planned* total (current value + all of the cash) as denominator, whether
or not the cash is fully spent.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Dict, List, Optional

from rebalancer.allocation_engine import AllocationEngine
from rebalancer.config import INCREMENT_TOLERANCE
from rebalancer.enums import SimulationIssue
from rebalancer.models import AllocationResult, Asset, SimulationReport
from rebalancer.portfolio_validator import PortfolioValidator

logger = logging.getLogger(__name__)


class ManualSimulator:
    """Evaluate, validate and apply caller-chosen purchases."""

    @staticmethod
    def evaluate(
        assets: List[Asset],
        share_counts: Dict[str, float],
        cash: float,
    ) -> List[AllocationResult]:
        """
        Price *share_counts* against *assets*; symbols not listed buy nothing.

        Results are returned in input order.
        """
        PortfolioValidator.check_assets(assets)

        new_total = sum(a.current_value for a in assets) + cash
        return [
            AllocationEngine.build_result(asset, share_counts.get(asset.symbol, 0), new_total)
            for asset in assets
        ]

    @staticmethod
    def run(
        assets: List[Asset],
        share_counts: Dict[str, float],
        cash: float,
    ) -> SimulationReport:
        """
        Evaluate *share_counts* and attach advisory validation.

        Flags, per asset, negative share counts and amounts that are not a
        whole multiple of the asset's minimum buy increment; flags the whole
        plan when it spends more than *cash*.
        """
        results = ManualSimulator.evaluate(assets, share_counts, cash)
        total_spent = AllocationEngine.total_invested(results)

        report = SimulationReport(
            results=results,
            total_spent=total_spent,
            remaining_cash=cash - total_spent,
            exceeds_budget=total_spent > cash,
        )

        for asset in assets:
            shares = share_counts.get(asset.symbol, 0)
            issue = ManualSimulator._check_shares(asset, shares)
            if issue is None:
                continue
            report.issues[asset.symbol] = issue
            report.messages[asset.symbol] = ManualSimulator._message(asset, issue)

        if not report.is_valid:
            logger.info(
                f"Manual plan flagged: {len(report.issues)} asset issue(s), "
                f"exceeds_budget={report.exceeds_budget}"
            )
        return report

    # Validation always comes with the evaluated results.
    validate = run

    @staticmethod
    def apply_purchases(
        assets: List[Asset],
        share_counts: Dict[str, float],
    ) -> List[Asset]:
        """
        Return new assets with each purchase added to ``current_value``.

        Used to confirm an investment; *assets* itself is left untouched.
        """
        updated = []
        for asset in assets:
            shares = share_counts.get(asset.symbol, 0)
            if shares:
                asset = dataclasses.replace(
                    asset, current_value=asset.current_value + shares * asset.price
                )
            updated.append(asset)
        return updated

    # ------------------------------------------------------------------ #
    #  Private helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _check_shares(asset: Asset, shares: float) -> Optional[SimulationIssue]:
        if shares < 0:
            return SimulationIssue.NEGATIVE_SHARES
        if shares > 0 and not ManualSimulator._is_multiple(
            shares * asset.price, asset.buy_increment
        ):
            return SimulationIssue.INVALID_INCREMENT
        return None

    @staticmethod
    def _is_multiple(amount: float, increment: float) -> bool:
        """True when *amount* is a whole multiple of *increment* (float-safe)."""
        remainder = math.fmod(amount, increment)
        tol = INCREMENT_TOLERANCE * max(1.0, increment)
        return remainder <= tol or increment - remainder <= tol

    @staticmethod
    def _message(asset: Asset, issue: SimulationIssue) -> str:
        if issue is SimulationIssue.NEGATIVE_SHARES:
            return "Cannot be negative"
        lot = asset.buy_increment / asset.price
        return f"Must be in increments of {lot:,.2f} shares"
