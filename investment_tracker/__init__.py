"""Personal investment tracker: transactions, dividends, DCA plans and positions."""

__version__ = "0.1.0"

__all__ = ["__version__"]
