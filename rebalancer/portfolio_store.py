"""
rebalancer/portfolio_store.py
-----------------------------
Persists the asset list and the planned cash amount between sessions.

Design
------
* A single JSON file holding two keys, ``portfolio_assets`` (list of asset
  dicts in camelCase) and ``additional_investment`` (number).
* Writes go through a temp file + rename, so a crash mid-write never leaves
  a truncated store behind.
* Read or write failures are logged and never raised. A missing or corrupt
  store behaves like an empty portfolio; a failed write makes save() return
  False.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List

from rebalancer.config import (
    ADDITIONAL_INVESTMENT_KEY,
    DEFAULT_STORE_PATH,
    PORTFOLIO_STORAGE_KEY,
)
from rebalancer.models import Asset, PortfolioData

logger = logging.getLogger(__name__)


class PortfolioStore:
    """
    JSON-file store for :class:`PortfolioData`.

    Usage::

        store = PortfolioStore()                 # ~/.rebalancer/portfolio.json
        store.save(assets, additional_investment=500.0)
        data = store.load()
    """

    def __init__(self, path: str | Path = DEFAULT_STORE_PATH):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def save(self, assets: List[Asset], additional_investment: float) -> bool:
        """
        Atomically write *assets* and *additional_investment* to disk.

        Returns False when the write failed (the error is logged).
        """
        tmp = self._path.with_suffix(".tmp")
        payload = {
            PORTFOLIO_STORAGE_KEY:     [a.to_dict() for a in assets],
            ADDITIONAL_INVESTMENT_KEY: additional_investment,
        }

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, allow_nan=False)
            os.replace(tmp, self._path)
        except (OSError, ValueError) as exc:
            logger.error(f"Failed to save portfolio to {self._path}: {exc}")
            tmp.unlink(missing_ok=True)
            return False

        logger.info(f"Portfolio saved: {len(assets)} assets -> {self._path}")
        return True

    def load(self) -> PortfolioData:
        """
        Read the stored portfolio.

        Returns an empty :class:`PortfolioData` when the file is missing or
        cannot be parsed.
        """
        if not self._path.exists():
            return PortfolioData()

        try:
            with open(self._path, encoding="utf-8") as fh:
                payload = json.load(fh)
            assets = [Asset.from_dict(d) for d in payload.get(PORTFOLIO_STORAGE_KEY) or []]
            cash = float(payload.get(ADDITIONAL_INVESTMENT_KEY) or 0.0)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning(f"Portfolio store unreadable, treating as empty: {self._path} ({exc})")
            return PortfolioData()

        return PortfolioData(assets=assets, additional_investment=cash)

    def clear(self) -> None:
        """Delete the store file if present."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error(f"Failed to clear portfolio store {self._path}: {exc}")
