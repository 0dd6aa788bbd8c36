"""LedgerRow data model."""

from datetime import date as date_type

from pydantic import BaseModel, Field


class LedgerRow(BaseModel):
    """One chronologically ordered trade with its running balance."""

    index: int = Field(..., ge=1, description="1-based chronological position")
    trade_id: str = Field(..., description="Source trade ID")
    date: date_type = Field(..., description="Trade date")
    balance_before: float = Field(..., description="Balance before the trade")
    risk_amount: float = Field(..., ge=0, description="Currency amount at risk")
    pnl: float = Field(..., description="Realized P&L in currency")
    r_multiple: float = Field(..., description="Realized result in R")
    balance_after: float = Field(..., description="Balance after the trade")
    return_pct: float = Field(..., description="Return percentage of the trade")

    model_config = {"frozen": True}
