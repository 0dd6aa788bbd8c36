"""Normalization of stored or imported records into engine models.

Stored data may come from older versions or from the browser app's JSON
export (camelCase keys, ``"R"`` result type, ``"BT"`` account). Anything
that cannot be read falls back to a safe default so the engine always
receives finite numbers.
"""

import logging
import math
from datetime import date
from typing import Any, Optional

from tradejournal.models import (
    Account,
    ProjectionMethod,
    ResultType,
    ReturnMode,
    RiskType,
    Settings,
    Trade,
)

logger = logging.getLogger(__name__)


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Convert a number or numeric string (decimal comma allowed) to a finite float."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return fallback
        return number if math.isfinite(number) else fallback
    if isinstance(value, str):
        try:
            parsed = float(value.strip().replace(",", "."))
        except ValueError:
            return fallback
        return parsed if math.isfinite(parsed) else fallback
    return fallback


def _first(raw: dict, *keys: str) -> Any:
    """Value of the first key present in ``raw`` with a non-None value."""
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _parse_date(value: Any, reference_date: date) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            logger.debug("Unreadable trade date %r, using %s", value, reference_date)
    return reference_date


def normalize_trade(
    raw: Any, reference_date: date, now_ms: float = 0.0
) -> Optional[Trade]:
    """Build a Trade from a loosely structured record.

    Args:
        raw: Mapping with snake_case or camelCase keys.
        reference_date: Date used when the record has none.
        now_ms: Creation timestamp used when the record has none.

    Returns:
        The normalized trade, or None when the record has no usable id.
    """
    if not isinstance(raw, dict):
        return None

    raw_id = _first(raw, "id", "tradeId", "trade_id")
    if isinstance(raw_id, bool):
        raw_id = None
    trade_id = str(raw_id).strip() if isinstance(raw_id, (str, int)) else ""
    if not trade_id:
        return None

    risk_type = RiskType.FIXED if _first(raw, "risk_type", "riskType") == "FIXED" else RiskType.PERCENT

    result_type_raw = _first(raw, "result_type", "resultType", "resultMode", "pnlUnit")
    result_type = (
        ResultType.R_MULTIPLE if result_type_raw in ("R", "R_MULTIPLE") else ResultType.MONEY
    )

    account_raw = _first(raw, "account")
    account = Account.BACKTEST if account_raw in ("BT", "BACKTEST") else Account.REAL

    return Trade(
        id=trade_id,
        date=_parse_date(raw.get("date"), reference_date),
        symbol=_text(raw.get("symbol")),
        notes=_text(raw.get("notes")),
        risk_type=risk_type,
        risk_value=to_number(_first(raw, "risk_value", "riskValue", "risk")),
        account=account,
        result_type=result_type,
        result_value=to_number(_first(raw, "result_value", "resultValue", "pnl", "result")),
        created_at=to_number(_first(raw, "created_at", "createdAt", "timestamp"), now_ms),
    )


def normalize_trades(
    records: Any, reference_date: date, now_ms: float = 0.0
) -> list[Trade]:
    """Normalize a list of records, dropping the unusable ones."""
    if not isinstance(records, list):
        return []

    trades = []
    for raw in records:
        trade = normalize_trade(raw, reference_date, now_ms)
        if trade is None:
            logger.warning("Skipping trade record without id: %r", raw)
            continue
        trades.append(trade)
    return trades


def _enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def normalize_settings(raw: Any) -> Settings:
    """Merge a settings record over the defaults, clamping each value to its valid range."""
    defaults = Settings()
    if not isinstance(raw, dict):
        return defaults

    def number(*keys: str, fallback: float) -> float:
        value = _first(raw, *keys)
        return fallback if value is None else to_number(value, fallback)

    max_trades = number("max_trades_per_day", "maxTradesPerDay", fallback=defaults.max_trades_per_day)

    return Settings(
        starting_balance=max(0.0, number("starting_balance", "startingBalance", fallback=defaults.starting_balance)),
        backtest_starting_balance=max(
            0.0,
            number(
                "backtest_starting_balance",
                "btStartingBalance",
                fallback=defaults.backtest_starting_balance,
            ),
        ),
        currency=_text(raw.get("currency")) or defaults.currency,
        default_risk_type=_enum(
            RiskType, _first(raw, "default_risk_type", "defaultRiskType"), defaults.default_risk_type
        ),
        default_risk_value=max(
            0.0, number("default_risk_value", "defaultRiskValue", fallback=defaults.default_risk_value)
        ),
        daily_stop_r=-abs(number("daily_stop_r", "dailyStopR", fallback=defaults.daily_stop_r)),
        daily_take_r=abs(number("daily_take_r", "dailyTakeR", fallback=defaults.daily_take_r)),
        max_trades_per_day=max(1, int(max_trades)),
        return_mode=_enum(ReturnMode, _first(raw, "return_mode", "returnMode"), defaults.return_mode),
        projection_method=_enum(
            ProjectionMethod,
            _first(raw, "projection_method", "projectionMethod"),
            defaults.projection_method,
        ),
    )
