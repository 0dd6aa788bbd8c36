"""Data models for the trade journal."""

from tradejournal.models.daily import DailySummary, DayRulesReport, DayStatus
from tradejournal.models.ledger import LedgerRow
from tradejournal.models.metrics import Metrics
from tradejournal.models.projection import (
    PercentileBands,
    ProjectionResult,
    ProjectionSummary,
)
from tradejournal.models.settings import (
    ProjectionMethod,
    ProjectionSettings,
    ReturnMode,
    Settings,
)
from tradejournal.models.trade import Account, ResultType, RiskType, Trade

__all__ = [
    "Account",
    "DailySummary",
    "DayRulesReport",
    "DayStatus",
    "LedgerRow",
    "Metrics",
    "PercentileBands",
    "ProjectionMethod",
    "ProjectionResult",
    "ProjectionSettings",
    "ProjectionSummary",
    "ResultType",
    "ReturnMode",
    "RiskType",
    "Settings",
    "Trade",
]
