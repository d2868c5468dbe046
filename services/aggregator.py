"""Aggregation logic for generated series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class SeriesSummary:
    """Computed statistics for one series of values."""

    count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(self, values: Iterable[float]) -> SeriesSummary:
        summary = SeriesSummary()
        total = 0.0

        for value in values:
            summary.count += 1
            total += value

            if summary.min_value is None or value < summary.min_value:
                summary.min_value = value
            if summary.max_value is None or value > summary.max_value:
                summary.max_value = value

        if summary.count:
            summary.mean_value = total / summary.count

        return summary
