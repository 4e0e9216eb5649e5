"""
rebalancer/allocation_report.py
-------------------------------
Plain-text presentation of portfolio state, allocations and manual plans.

Design contract:
  - Does NOT compute allocations
  - Does NOT mutate results
  - Only interprets AllocationEngine / ManualSimulator output
  - Fully stateless (all methods are @staticmethod)
"""

from typing import Dict, List, Optional

import pandas as pd

from rebalancer.allocation_engine import AllocationEngine
from rebalancer.formatting import format_number, format_price
from rebalancer.models import AllocationResult, Asset, SimulationReport
from rebalancer.portfolio_validator import PortfolioValidator


_TABLE_COLUMNS: Dict[str, str] = {
    "symbol":                     "Symbol",
    "shares":                     "Shares",
    "price":                      "Price",
    "investment_amount":          "Invest",
    "new_value":                  "New Value",
    "target_allocation":          "Target %",
    "new_portfolio_percentage":   "New %",
    "new_difference_from_target": "Diff",
}


class AllocationReport:
    """
    Summaries and text tables for the CLI.

    Entry points::

        AllocationReport.summary(assets, cash)                → dict
        AllocationReport.render_allocation(results, cash)     → str
        AllocationReport.render_simulation(report)            → str
    """

    # ------------------------------------------------------------------ #
    #  Portfolio summary
    # ------------------------------------------------------------------ #

    @staticmethod
    def summary(assets: List[Asset], cash: float) -> dict:
        """
        Portfolio-level figures shown before an allocation is run.

        Returns
        -------
        dict
            ``total_current_value``      - sum of current values
            ``total_target_allocation``  - sum of targets (percentage points)
            ``is_valid_allocation``      - targets add up to 100
            ``additional_investment``    - *cash*
            ``new_total_value``          - current total + *cash*
            ``current_percentages``      - ``{symbol: % of current total}``
            ``can_calculate``            - assets present, valid targets, cash > 0
        """
        total = sum(a.current_value for a in assets)
        is_valid = PortfolioValidator.validate(assets)
        return {
            "total_current_value":     total,
            "total_target_allocation": PortfolioValidator.total_target_allocation(assets),
            "is_valid_allocation":     is_valid,
            "additional_investment":   cash,
            "new_total_value":         total + cash,
            "current_percentages":     {
                a.symbol: (a.current_value / total * 100 if total > 0 else 0.0)
                for a in assets
            },
            "can_calculate":           bool(assets) and is_valid and cash > 0,
        }

    @staticmethod
    def render_summary(assets: List[Asset], cash: float, exchange: Optional[str] = None) -> str:
        s = AllocationReport.summary(assets, cash)
        lines = [
            f"Current portfolio value: {format_price(s['total_current_value'], exchange)}",
            f"Target allocation:       {s['total_target_allocation']:.1f}%",
        ]
        if not s["is_valid_allocation"]:
            lines.append("  ⚠  Target allocations should total 100%")
        lines.append(f"Additional investment:   {format_price(cash, exchange)}")
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    @staticmethod
    def to_frame(results: List[AllocationResult]) -> pd.DataFrame:
        """One row per result, columns named after the result fields."""
        columns = list(AllocationResult.__dataclass_fields__)
        return pd.DataFrame([r.to_dict() for r in results], columns=columns)

    @staticmethod
    def render_allocation(
        results: List[AllocationResult],
        cash: float,
        exchange: Optional[str] = None,
    ) -> str:
        """Greedy allocation table followed by invested / leftover totals."""
        if not results:
            return "No purchases to recommend."

        invested = AllocationEngine.total_invested(results)
        leftover = AllocationEngine.leftover_cash(results, cash)
        return "\n".join([
            AllocationReport._table(results),
            "",
            f"Total invested: {format_price(invested, exchange)}",
            f"Leftover cash:  {format_price(leftover, exchange)}",
        ])

    @staticmethod
    def render_simulation(report: SimulationReport, exchange: Optional[str] = None) -> str:
        """Manual plan table, spend totals and any validation problems."""
        lines = [
            AllocationReport._table(report.results),
            "",
            f"Total spent:    {format_price(report.total_spent, exchange)}",
            f"Remaining cash: {format_price(report.remaining_cash, exchange)}",
        ]
        for symbol, message in report.messages.items():
            lines.append(f"  ⚠  {symbol}: {message}")
        if report.exceeds_budget:
            lines.append("  ⚠  Total investment exceeds available cash")
        if report.is_valid:
            lines.append("Plan is valid.")
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    #  Private helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _table(results: List[AllocationResult]) -> str:
        df = AllocationReport.to_frame(results)[list(_TABLE_COLUMNS)]
        df = df.rename(columns=_TABLE_COLUMNS)
        money = ["Price", "Invest", "New Value"]
        pct = ["Target %", "New %", "Diff"]
        formatters = {c: format_number for c in money}
        formatters.update({c: (lambda v: f"{v:.2f}") for c in pct})
        return df.to_string(index=False, formatters=formatters)
