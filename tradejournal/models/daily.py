"""Daily summary models."""

from datetime import date as date_type
from enum import Enum

from pydantic import BaseModel, Field


class DayStatus(str, Enum):
    """Classification of a trading day against the daily limits."""

    OK = "OK"
    STOP_HIT = "STOP_HIT"
    TAKE_HIT = "TAKE_HIT"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"


class DailySummary(BaseModel):
    """Aggregated results of one calendar day."""

    date: date_type = Field(..., description="Calendar day")
    trades: int = Field(..., ge=0, description="Number of trades")
    day_pnl: float = Field(..., description="Summed P&L")
    day_r: float = Field(..., description="Summed R")
    status: DayStatus = Field(default=DayStatus.OK, description="Rule classification")

    model_config = {"frozen": True}


class DayRulesReport(BaseModel):
    """Advisory result of checking trade counts against the daily limit."""

    ok: bool = Field(..., description="True when no day breaks the limit")
    warnings: list[str] = Field(default_factory=list, description="Human-readable warnings")

    model_config = {"frozen": True}
