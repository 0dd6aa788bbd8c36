"""Projection result models."""

from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.models.settings import ProjectionMethod


class PercentileBands(BaseModel):
    """Per-day balance percentiles across simulation trials."""

    p10: list[float] = Field(..., description="10th percentile path")
    p50: list[float] = Field(..., description="Median path")
    p90: list[float] = Field(..., description="90th percentile path")

    model_config = {"frozen": True}


class ProjectionSummary(BaseModel):
    """Start and end balances of a projection."""

    start_balance: float = Field(..., description="Balance at day 0")
    end_balance_p10: float = Field(..., description="10th percentile end balance")
    end_balance_p50: float = Field(..., description="Median end balance")
    end_balance_p90: float = Field(..., description="90th percentile end balance")

    model_config = {"frozen": True}


class ProjectionResult(BaseModel):
    """Forward-looking balance path."""

    method: ProjectionMethod = Field(..., description="Method used")
    horizon_days: int = Field(..., ge=0, description="Projected days")
    simulations: int = Field(..., ge=1, description="Trials run (1 for deterministic)")
    expectancy_r: float = Field(..., description="Expectancy driving the projection")
    path: list[float] = Field(..., description="Balance path, median band for simulations")
    bands: Optional[PercentileBands] = Field(default=None, description="Simulation bands")
    summary: ProjectionSummary = Field(..., description="Start/end balance summary")

    model_config = {"frozen": True}
