"""
rebalancer/formatting.py
------------------------
Currency, number and price-age formatting used by reports and the CLI.
"""

from __future__ import annotations

import time
from typing import Optional

from rebalancer.config import STALE_AFTER_SECONDS
from rebalancer.enums import Exchange


def currency_symbol(exchange: Optional[str] = None) -> str:
    return "₪" if exchange == Exchange.TA.value else "$"


def format_number(value: float) -> str:
    """Thousands separators, two decimals: ``1234.5`` → ``"1,234.50"``."""
    return f"{value:,.2f}"


def format_price(value: float, exchange: Optional[str] = None) -> str:
    """Price with the exchange's currency symbol: ``"$1,234.50"``."""
    return f"{currency_symbol(exchange)}{format_number(value)}"


def format_time_since_update(
    last_updated: Optional[float],
    now: Optional[float] = None,
) -> str:
    """
    Human-readable age of a price update.

    *last_updated* and *now* are epoch seconds; *now* defaults to the
    current time.  Minutes and hours are floored, days rounded.
    """
    if not last_updated:
        return "Never updated"

    now = time.time() if now is None else now
    diff = now - last_updated
    minutes = int(diff // 60)
    hours = int(diff // 3600)
    days = round(diff / 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    return f"{days} day{'s' if days != 1 else ''} ago"


def is_asset_stale(
    last_updated: Optional[float],
    now: Optional[float] = None,
) -> bool:
    """True when the price was never updated or is older than the limit."""
    if not last_updated:
        return True
    now = time.time() if now is None else now
    return now - last_updated > STALE_AFTER_SECONDS
