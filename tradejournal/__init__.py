"""Trade journal: ledger, performance metrics, daily rules and projections."""

__version__ = "0.1.0"
