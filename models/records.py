"""Domain records for cooling runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Tuple


@dataclass(frozen=True)
class ReportParameters:
    """Validated inputs describing one monitored chilling interval."""

    start_clock: time
    end_clock: time
    run_date: date
    initial_temp: float
    final_temp: float
    initial_humidity: float
    final_humidity: float
    title: str = ""
    objective: str = ""
    product: str = ""
    issued_at: Optional[str] = None


@dataclass(frozen=True)
class DataPoint:
    """One minute of the reconstructed series."""

    index: int
    clock_time: str
    observed_temp: float
    model_temp: float
    humidity: float
    interval_rate_constant: float
    timestamp: str


@dataclass(frozen=True)
class CoolingResult:
    """Computed series for one run, with its rate constants and statistics."""

    params: ReportParameters
    data_points: Tuple[DataPoint, ...]
    global_rate_constant: float
    total_minutes: int
    mean_linear_rate: float
    humidity_max: float
    humidity_min: float
    humidity_mean: float
    temperature_max: float
    temperature_min: float
    temperature_mean: float
    jitter_seconds: int
    target_temp: float
    minutes_to_target: Optional[int] = None

    @property
    def trend(self) -> str:
        """Direction of the run: ``cooling``, ``warming`` or ``steady``."""
        if self.params.final_temp < self.params.initial_temp:
            return "cooling"
        if self.params.final_temp > self.params.initial_temp:
            return "warming"
        return "steady"

    @property
    def target_reached(self) -> bool:
        return self.minutes_to_target is not None
