"""Reconstruction of a per-minute cooling series from run endpoints.

Two traces are produced over the same minute grid:

- an observed trace, linearly interpolated between the start and end
  readings, standing in for sensor samples;
- a model trace following Newton's law of cooling, with the rate constant
  fitted so the curve passes exactly through both endpoints.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, List, Optional, Tuple

from models.records import CoolingResult, DataPoint, ReportParameters
from services.aggregator import Aggregator
from services.errors import InvalidTimeRangeError, UndefinedCoolingDomainError
from services.formatting import round_half_up

logger = logging.getLogger(__name__)

# Chamber temperature the product cools toward, in °C.
AMBIENT_TEMP = 0.0
DEFAULT_TARGET_TEMP = 4.0

CLOCK_FORMAT = "%H:%M"
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
JITTER_RANGE = (1, 59)


@dataclass(frozen=True)
class TimeGrid:
    """Closed minute grid ``[0, total_minutes]`` anchored at ``start``."""

    start: datetime
    end: datetime
    total_minutes: int

    def instants(self) -> Iterator[Tuple[int, datetime]]:
        for minute in range(self.total_minutes + 1):
            yield minute, self.start + timedelta(minutes=minute)


def build_time_grid(params: ReportParameters) -> TimeGrid:
    """Combine the run date with both clocks, rolling the end over midnight if needed."""
    start = datetime.combine(params.run_date, params.start_clock)
    end = datetime.combine(params.run_date, params.end_clock)
    if end < start:
        end += timedelta(days=1)

    total_minutes = round((end - start).total_seconds() / 60)
    if total_minutes <= 0:
        raise InvalidTimeRangeError(
            f"Interval from {params.start_clock:%H:%M} to {params.end_clock:%H:%M} has no duration.",
            field="end_clock",
        )
    return TimeGrid(start=start, end=end, total_minutes=total_minutes)


def global_rate_constant(initial_temp: float, final_temp: float, total_minutes: int) -> float:
    """Newton's k fitted through both endpoints, per minute."""
    if initial_temp <= AMBIENT_TEMP:
        raise UndefinedCoolingDomainError(
            f"initial_temp must be above ambient ({AMBIENT_TEMP} °C), got {initial_temp}.",
            field="initial_temp",
        )
    if final_temp <= AMBIENT_TEMP:
        raise UndefinedCoolingDomainError(
            f"final_temp must be above ambient ({AMBIENT_TEMP} °C), got {final_temp}.",
            field="final_temp",
        )
    ratio = (final_temp - AMBIENT_TEMP) / (initial_temp - AMBIENT_TEMP)
    if ratio == 0.0:
        raise UndefinedCoolingDomainError(
            f"final_temp {final_temp} is indistinguishable from ambient next to "
            f"initial_temp {initial_temp}.",
            field="final_temp",
        )
    if not math.isfinite(ratio):
        raise UndefinedCoolingDomainError(
            f"initial_temp {initial_temp} is indistinguishable from ambient next to "
            f"final_temp {final_temp}.",
            field="initial_temp",
        )
    # Adding 0.0 normalises -0.0 for steady runs.
    return -math.log(ratio) / total_minutes + 0.0


def interval_rate_constant(previous: float, current: float) -> float:
    """Per-step Newton constant between two consecutive linear values.

    Returns 0 when either value sits at or below ambient.
    """
    a = previous - AMBIENT_TEMP
    b = current - AMBIENT_TEMP
    if a <= 0 or b <= 0:
        return 0.0
    return -math.log(b / a) + 0.0


class CoolingSeriesGenerator:
    """Generator for per-minute cooling series.

    The seconds jitter applied to timestamps comes from a ``random.Random``
    built per call, so concurrent callers never share a random source.
    """

    def __init__(
        self,
        seed: int | None = None,
        target_temp: float = DEFAULT_TARGET_TEMP,
        aggregator: Aggregator | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            seed: Seed for the timestamp jitter; ``None`` draws from OS entropy
            target_temp: Temperature the run is expected to reach, in °C
            aggregator: Reducer used for the summary statistics
        """
        self._seed = seed
        self.target_temp = target_temp
        self.aggregator = aggregator or Aggregator()

    def compute(
        self,
        params: ReportParameters,
        rng: random.Random | None = None,
    ) -> CoolingResult:
        """Compute the dual-model series and its aggregates.

        Args:
            params: Validated run parameters
            rng: Explicit random source for the jitter draw

        Returns:
            The full series with summary statistics

        Raises:
            InvalidTimeRangeError: The interval has no duration
            UndefinedCoolingDomainError: An endpoint is at or below ambient
        """
        grid = build_time_grid(params)
        total = grid.total_minutes
        k_global = global_rate_constant(params.initial_temp, params.final_temp, total)
        mean_rate = (params.initial_temp - params.final_temp) / total

        source = rng if rng is not None else random.Random(self._seed)
        jitter = source.randint(*JITTER_RANGE)

        points: List[DataPoint] = []
        for minute, instant in grid.instants():
            points.append(
                self._build_point(params, minute, instant, total, mean_rate, k_global, jitter)
            )

        humidity = self.aggregator.aggregate(point.humidity for point in points)
        temperature = self.aggregator.aggregate(point.observed_temp for point in points)

        result = CoolingResult(
            params=params,
            data_points=tuple(points),
            global_rate_constant=k_global,
            total_minutes=total,
            mean_linear_rate=mean_rate,
            humidity_max=humidity.max_value,
            humidity_min=humidity.min_value,
            humidity_mean=humidity.mean_value,
            temperature_max=temperature.max_value,
            temperature_min=temperature.min_value,
            temperature_mean=temperature.mean_value,
            jitter_seconds=jitter,
            target_temp=self.target_temp,
            minutes_to_target=self._minutes_to_target(points),
        )
        logger.info(
            "Computed cooling series",
            extra={
                "product": params.product or None,
                "total_minutes": total,
                "global_k": f"{k_global:.6f}",
                "trend": result.trend,
                "jitter_seconds": jitter,
            },
        )
        return result

    @staticmethod
    def _build_point(
        params: ReportParameters,
        minute: int,
        instant: datetime,
        total: int,
        mean_rate: float,
        k_global: float,
        jitter: int,
    ) -> DataPoint:
        linear = params.initial_temp - mean_rate * minute
        if minute == total:
            observed = params.final_temp
        else:
            observed = round_half_up(linear)

        model = AMBIENT_TEMP + (params.initial_temp - AMBIENT_TEMP) * math.exp(-k_global * minute)

        humidity_span = params.final_humidity - params.initial_humidity
        humidity = round_half_up(params.initial_humidity + humidity_span * minute / total)

        k_interval = 0.0
        if minute > 0:
            previous = params.initial_temp - mean_rate * (minute - 1)
            k_interval = interval_rate_constant(previous, linear)

        stamped = instant.replace(second=jitter)
        return DataPoint(
            index=minute + 1,
            clock_time=instant.strftime(CLOCK_FORMAT),
            observed_temp=observed,
            model_temp=model,
            humidity=humidity,
            interval_rate_constant=k_interval,
            timestamp=stamped.strftime(TIMESTAMP_FORMAT),
        )

    def _minutes_to_target(self, points: List[DataPoint]) -> Optional[int]:
        for point in points:
            if point.observed_temp <= self.target_temp:
                return point.index - 1
        return None
