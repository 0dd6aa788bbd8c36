"""Trade data model."""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RiskType(str, Enum):
    """How a trade's risk value is interpreted."""

    PERCENT = "PERCENT"
    FIXED = "FIXED"


class ResultType(str, Enum):
    """Which field carries a trade's authoritative outcome."""

    MONEY = "MONEY"
    R_MULTIPLE = "R_MULTIPLE"


class Account(str, Enum):
    """Account partition a trade belongs to."""

    REAL = "REAL"
    BACKTEST = "BACKTEST"


class Trade(BaseModel):
    """Represents a journaled trade with its effective risk and realized result."""

    id: str = Field(..., min_length=1, description="Stable trade identifier")
    date: date_type = Field(..., description="Trade date (day granularity)")
    symbol: Optional[str] = Field(default=None, description="Trading symbol")
    notes: Optional[str] = Field(default=None, description="User notes")
    risk_type: RiskType = Field(default=RiskType.PERCENT, description="Risk interpretation")
    risk_value: float = Field(
        default=0.0, description="Percentage points if PERCENT, currency if FIXED"
    )
    account: Account = Field(default=Account.REAL, description="Account partition")
    result_type: ResultType = Field(default=ResultType.MONEY, description="Result interpretation")
    result_value: float = Field(
        default=0.0, description="Realized P&L if MONEY, realized R if R_MULTIPLE"
    )
    created_at: float = Field(default=0.0, description="Tie-break timestamp (epoch ms)")

    model_config = {"frozen": True}
