"""Calculation engine: risk, ledger, metrics, daily rules and projection."""

from tradejournal.engine.daily import (
    classify_day,
    summarize_by_day,
    summary_for_day,
    threshold_status,
    validate_day_rules,
)
from tradejournal.engine.ledger import (
    build_ledger,
    filter_by_account,
    final_balance,
    sort_trades,
)
from tradejournal.engine.metrics import RStats, calculate_metrics, derive_stats
from tradejournal.engine.numeric import percentile, round_to
from tradejournal.engine.projection import project
from tradejournal.engine.random_source import (
    SeededRandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    UniformSource,
)
from tradejournal.engine.risk import risk_amount

__all__ = [
    "RStats",
    "SeededRandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
    "UniformSource",
    "build_ledger",
    "calculate_metrics",
    "classify_day",
    "derive_stats",
    "filter_by_account",
    "final_balance",
    "percentile",
    "project",
    "risk_amount",
    "round_to",
    "sort_trades",
    "summarize_by_day",
    "summary_for_day",
    "threshold_status",
    "validate_day_rules",
]
