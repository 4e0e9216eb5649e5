from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from rebalancer.exceptions import PortfolioFileError
from rebalancer.models import Asset

logger = logging.getLogger(__name__)


# Accepted camelCase headers → canonical column names
_COLUMN_ALIASES = {
    "currentvalue":     "current_value",
    "targetallocation": "target_allocation",
    "minbuyprice":      "min_buy_price",
}

_REQUIRED = {"symbol", "price", "target_allocation"}


class PortfolioLoader:
    """
    Loads a portfolio definition from a CSV file.

    Expected layout (one row per asset)::

        symbol,name,price,current_value,target_allocation,min_buy_price,exchange
        VTI,Vanguard Total Market,250.10,5000,60,,
        BND,Vanguard Total Bond,72.40,3000,40,,

    Only ``symbol``, ``price`` and ``target_allocation`` are required;
    ``name`` defaults to the symbol and ``current_value`` to 0.
    """

    @staticmethod
    def load_csv(path: str | Path) -> List[Asset]:
        """
        Parse *path* into a list of :class:`Asset`, in file order.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        PortfolioFileError
            If required columns are missing or a numeric cell cannot be parsed.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Portfolio file not found: {path}")

        try:
            df = pd.read_csv(path, dtype=str, skipinitialspace=True)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise PortfolioFileError(f"Cannot read portfolio file {path}: {exc}", path=str(path))

        df = PortfolioLoader._normalise_columns(df)

        missing = _REQUIRED - set(df.columns)
        if missing:
            raise PortfolioFileError(
                f"Portfolio file {path} is missing columns: {sorted(missing)}",
                path=str(path),
            )

        assets = []
        for row in df.to_dict(orient="records"):
            try:
                assets.append(PortfolioLoader._row_to_asset(row))
            except (TypeError, ValueError) as exc:
                raise PortfolioFileError(
                    f"Bad row for {row.get('symbol')!r} in {path}: {exc}",
                    path=str(path),
                )

        logger.info(f"Loaded {len(assets)} assets from {path}")
        return assets

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _normalise_columns(df: pd.DataFrame) -> pd.DataFrame:
        renamed = {}
        for col in df.columns:
            key = str(col).strip()
            key = _COLUMN_ALIASES.get(key.lower(), key.lower())
            renamed[col] = key
        return df.rename(columns=renamed)

    @staticmethod
    def _row_to_asset(row: dict) -> Asset:
        symbol = _text(row.get("symbol"))
        if not symbol:
            raise ValueError("empty symbol")
        symbol = symbol.upper()

        return Asset(
            symbol=symbol,
            name=_text(row.get("name")) or symbol,
            price=_required_number(row, "price"),
            current_value=_number(row.get("current_value")) or 0.0,
            target_allocation=_required_number(row, "target_allocation"),
            exchange=_text(row.get("exchange")),
            min_buy_price=_number(row.get("min_buy_price")),
        )


def _text(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def _number(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _required_number(row: dict, column: str) -> float:
    value = _number(row.get(column))
    if value is None:
        raise ValueError(f"missing {column}")
    return value
