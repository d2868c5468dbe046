from __future__ import annotations

from typing import Any, Dict, Iterable

import typer

from services.formatting import format_decimal

PREVIEW_ROWS = 10


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _decimal(value: Any, places: int = 1) -> str:
    if value is None:
        return "-"
    return format_decimal(float(value), places)


def render_run(payload: Dict[str, Any]) -> None:
    echo_heading("Cooling Run")
    parameters = payload.get("parameters") or {}
    echo_key_values(
        [
            ("run_id", payload.get("run_id")),
            ("product", parameters.get("product") or "-"),
            ("date", parameters.get("date")),
            ("interval", f"{parameters.get('start_clock')} - {parameters.get('end_clock')}"),
            ("trend", payload.get("trend")),
        ]
    )

    typer.echo()
    echo_heading("Summary")
    minutes_to_target = payload.get("minutes_to_target")
    echo_key_values(
        [
            ("total_minutes", payload.get("total_minutes")),
            ("mean_linear_rate", f"{_decimal(payload.get('mean_linear_rate'), 5)} ºC/min"),
            ("global_rate_constant", f"{_decimal(payload.get('global_rate_constant'), 4)} min-¹"),
            (
                "humidity (max/min/mean)",
                " / ".join(
                    _decimal(payload.get(key))
                    for key in ("humidity_max", "humidity_min", "humidity_mean")
                ),
            ),
            (
                "target",
                f"{_decimal(payload.get('target_temp'))} ºC "
                + (
                    f"reached after {minutes_to_target} min"
                    if minutes_to_target is not None
                    else "not reached"
                ),
            ),
        ]
    )

    points = payload.get("data_points") or []
    typer.echo()
    echo_heading("Data Points")
    if points:
        for point in points[:PREVIEW_ROWS]:
            typer.echo(
                f"  {point.get('index'):03d}  {point.get('timestamp')}  "
                f"{_decimal(point.get('observed_temp'))} ºC  "
                f"{_decimal(point.get('humidity'))} %  "
                f"k={_decimal(point.get('interval_rate_constant'), 4)}"
            )
        if len(points) > PREVIEW_ROWS:
            typer.echo(f"  ... {len(points)} points in total")
    else:
        typer.echo("No data points available.")

    observation = payload.get("observation")
    if observation:
        typer.echo()
        typer.echo(observation)
