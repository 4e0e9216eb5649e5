from enum import Enum


class SimulationIssue(Enum):
    """Advisory problems reported for a manually entered share count."""
    NEGATIVE_SHARES = "negative_shares"
    INVALID_INCREMENT = "invalid_increment"


class Exchange(Enum):
    """Exchanges with a currency other than the default dollar."""
    TA = "TA"   # Tel Aviv Stock Exchange, prices in shekels
