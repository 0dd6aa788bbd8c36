"""Metrics data model."""

from typing import Optional

from pydantic import BaseModel, Field


class Metrics(BaseModel):
    """Aggregate performance snapshot of a ledger."""

    trades: int = Field(..., ge=0, description="Number of trades")
    wins: int = Field(..., ge=0, description="Trades with positive R")
    losses: int = Field(..., ge=0, description="Trades with negative R")
    breakevens: int = Field(..., ge=0, description="Trades with zero R")
    win_rate_pct: float = Field(..., ge=0, le=100, description="Win rate over decisive trades")
    avg_win_r: float = Field(..., description="Average winning R")
    avg_loss_r: float = Field(..., description="Average losing R (negative)")
    expectancy_r: float = Field(..., description="Expected R per trade")
    net_pnl: float = Field(..., description="Final balance minus starting balance")
    net_return_pct: float = Field(..., description="Net P&L over starting balance")
    profit_factor: Optional[float] = Field(
        default=None, description="Gross profit over gross loss, None when there are no losses"
    )
    max_drawdown_pct: float = Field(..., ge=0, description="Maximum peak-to-trough decline")

    model_config = {"frozen": True}
