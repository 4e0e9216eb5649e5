"""Exceptions raised by the rebalancer package."""


class RebalancerError(Exception):
    """Base exception for all rebalancer errors."""

    pass


class InvalidAssetError(RebalancerError, ValueError):
    """Raised when an asset cannot take part in an allocation run.

    Examples:
    - Zero, negative or non-finite share price
    - Negative current holding value
    - Symbol appearing twice in the same run
    """

    def __init__(self, message: str, symbol: str | None = None):
        super().__init__(message)
        self.symbol = symbol


class PortfolioFileError(RebalancerError, ValueError):
    """Raised when a portfolio file is present but cannot be interpreted."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
