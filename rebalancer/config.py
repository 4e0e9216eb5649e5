"""
rebalancer/config.py
--------------------
Tunable parameters for allocation, simulation and persistence.

Financial tolerances live here rather than in the engines so that the
validator, the greedy engine and the manual simulator agree on one set of
numbers.
"""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Target allocation
# ---------------------------------------------------------------------------
# Target allocations are expressed in percentage points and must add up to
# ALLOCATION_TOTAL within ALLOCATION_TOLERANCE (absolute) for a portfolio to
# be considered valid.

ALLOCATION_TOTAL: float = 100.0
ALLOCATION_TOLERANCE: float = 0.01

# ---------------------------------------------------------------------------
# Greedy tie-breaking
# ---------------------------------------------------------------------------
# Candidate deviation scores within these tolerances of the best score are
# treated as tied, and the earliest asset in input order wins. Scores are
# sums of squared percentage points, so real differences are far larger.

TIE_RTOL: float = 1e-12
TIE_ATOL: float = 1e-9

# ---------------------------------------------------------------------------
# Lot-size checks
# ---------------------------------------------------------------------------
# Remainder tolerance when checking that shares * price is a whole multiple
# of an asset's minimum buy increment. Prices are floats, so an exact modulo
# check would reject amounts such as 3 * 0.1.

INCREMENT_TOLERANCE: float = 1e-9

# ---------------------------------------------------------------------------
# Price freshness
# ---------------------------------------------------------------------------

STALE_AFTER_SECONDS: int = 60 * 60   # 1 hour

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

PORTFOLIO_STORAGE_KEY: str = "portfolio_assets"
ADDITIONAL_INVESTMENT_KEY: str = "additional_investment"

DEFAULT_STORE_PATH: Path = Path(
    os.environ.get(
        "REBALANCER_STORE",
        Path.home() / ".rebalancer" / "portfolio.json",
    )
)
