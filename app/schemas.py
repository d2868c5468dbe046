"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CoolingTrend(str, Enum):
    """Direction of a computed run."""

    cooling = "cooling"
    warming = "warming"
    steady = "steady"


class RunRequest(BaseModel):
    """Raw run parameters as submitted by a client.

    Numeric fields accept numbers or strings so that values such as ``"5,5"``
    reach the parameter validation instead of failing schema coercion.
    """

    date: str = Field(..., description="Run date, DD/MM/YYYY or YYYY-MM-DD.")
    start_clock: str = Field(..., description="Start time of day, HH:MM.")
    end_clock: str = Field(..., description="End time of day, HH:MM.")
    initial_temp: Union[float, str]
    final_temp: Union[float, str]
    initial_humidity: Union[float, str]
    final_humidity: Union[float, str]
    title: Optional[str] = None
    objective: Optional[str] = None
    product: Optional[str] = None
    issued_at: Optional[str] = None


class RunParameters(BaseModel):
    """Validated parameters echoed back with a stored run."""

    date: str
    start_clock: str
    end_clock: str
    initial_temp: float
    final_temp: float
    initial_humidity: float
    final_humidity: float
    title: str = ""
    objective: str = ""
    product: str = ""
    issued_at: Optional[str] = None


class DataPointOut(BaseModel):
    index: int = Field(..., ge=1)
    clock_time: str
    observed_temp: float
    model_temp: float
    humidity: float
    interval_rate_constant: float
    timestamp: str


class RunSummary(BaseModel):
    """Scalar view of a stored run, without its data points."""

    run_id: str
    created_at: datetime
    product: str = ""
    total_minutes: int = Field(..., ge=1)
    global_rate_constant: float
    trend: CoolingTrend


class CoolingRun(BaseModel):
    """Full record representing a computed run."""

    run_id: str
    created_at: datetime
    parameters: RunParameters
    total_minutes: int = Field(..., ge=1)
    global_rate_constant: float
    mean_linear_rate: float = Field(..., description="Signed °C per minute.")
    humidity_max: float
    humidity_min: float
    humidity_mean: float
    temperature_max: float
    temperature_min: float
    temperature_mean: float
    jitter_seconds: int = Field(..., ge=1, le=59)
    target_temp: float
    minutes_to_target: Optional[int] = None
    trend: CoolingTrend
    summary_rows: List[List[str]] = Field(default_factory=list)
    observation: str = ""
    data_points: List[DataPointOut] = Field(default_factory=list)

    def summary(self) -> RunSummary:
        return RunSummary(
            run_id=self.run_id,
            created_at=self.created_at,
            product=self.parameters.product,
            total_minutes=self.total_minutes,
            global_rate_constant=self.global_rate_constant,
            trend=self.trend,
        )
