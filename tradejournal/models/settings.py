"""Journal and projection settings models."""

from enum import Enum

from pydantic import BaseModel, Field

from tradejournal.models.trade import Account, RiskType


class ReturnMode(str, Enum):
    """Denominator basis for per-trade return percentage."""

    ON_STARTING_BALANCE = "ON_STARTING_BALANCE"
    ON_PREV_BALANCE = "ON_PREV_BALANCE"


class ProjectionMethod(str, Enum):
    """Forward balance projection method."""

    DETERMINISTIC = "DETERMINISTIC"
    DAILY_SIM = "DAILY_SIM"


class Settings(BaseModel):
    """Fully resolved journal settings for one account view."""

    starting_balance: float = Field(default=10000.0, description="Starting balance")
    backtest_starting_balance: float = Field(
        default=10000.0, description="Starting balance of the backtest account"
    )
    currency: str = Field(default="USD", description="Display currency code")
    default_risk_type: RiskType = Field(default=RiskType.PERCENT, description="Default risk type")
    default_risk_value: float = Field(default=1.0, description="Default risk value")
    daily_stop_r: float = Field(default=-1.0, description="Daily stop in R (<= 0)")
    daily_take_r: float = Field(default=2.0, description="Daily take in R (>= 0)")
    max_trades_per_day: int = Field(default=1, ge=1, description="Maximum trades per day")
    return_mode: ReturnMode = Field(
        default=ReturnMode.ON_STARTING_BALANCE, description="Return percentage basis"
    )
    projection_method: ProjectionMethod = Field(
        default=ProjectionMethod.DETERMINISTIC, description="Preferred projection method"
    )

    model_config = {"frozen": True}

    def for_account(self, account: Account) -> "Settings":
        """Return settings seeded with the starting balance of ``account``."""
        if account == Account.BACKTEST:
            return self.model_copy(update={"starting_balance": self.backtest_starting_balance})
        return self


class ProjectionSettings(BaseModel):
    """Parameters of a single projection request."""

    method: ProjectionMethod = Field(
        default=ProjectionMethod.DETERMINISTIC, description="Projection method"
    )
    horizon_days: int = Field(default=30, description="Days to project (negative means 0)")
    simulations: int = Field(default=500, description="Simulation trials (at least 1)")
    fallback_expectancy_r: float = Field(
        default=0.0, description="Expectancy used when history is too short to estimate"
    )

    model_config = {"frozen": True}
