"""CSV export of the per-minute records."""

from __future__ import annotations

import csv
import io
from typing import Iterable, Protocol, TextIO

from services.formatting import format_decimal

HEADER = ("ID", "Data/Hora", "Temp. Produto [°C]", "Umidade [%Hr]", "k (min-¹)")


class PointLike(Protocol):
    index: int
    timestamp: str
    observed_temp: float
    humidity: float
    interval_rate_constant: float


def write_points_csv(points: Iterable[PointLike], handle: TextIO) -> int:
    """Write ``;``-delimited rows with comma decimals; returns the row count."""
    writer = csv.writer(handle, delimiter=";", lineterminator="\n")
    writer.writerow(HEADER)
    rows = 0
    for point in points:
        writer.writerow(
            (
                point.index,
                point.timestamp,
                format_decimal(point.observed_temp),
                format_decimal(point.humidity),
                format_decimal(point.interval_rate_constant, 4),
            )
        )
        rows += 1
    return rows


def points_to_csv(points: Iterable[PointLike]) -> str:
    buffer = io.StringIO()
    write_points_csv(points, buffer)
    return buffer.getvalue()
