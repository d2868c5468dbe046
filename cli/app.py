from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_run
from services.cooling import CoolingSeriesGenerator
from services.errors import ComputationError
from services.export import write_points_csv
from services.parsing import parse_parameters
from services.runs import build_run_record
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Compute cooling runs locally or through the cooling run service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _fail(exc: ComputationError) -> NoReturn:
    typer.secho(f"[{exc.code}] {exc.message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each service request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("compute")
def compute_command(
    ctx: typer.Context,
    date: str = typer.Option(..., "--date", "-d", help="Run date, DD/MM/YYYY or YYYY-MM-DD."),
    start: str = typer.Option(..., "--start", help="Start clock, HH:MM."),
    end: str = typer.Option(..., "--end", help="End clock, HH:MM; earlier than start means next day."),
    initial_temp: str = typer.Option(..., "--initial-temp", help="Initial product temperature (°C)."),
    final_temp: str = typer.Option(..., "--final-temp", help="Final product temperature (°C)."),
    initial_humidity: str = typer.Option(..., "--initial-humidity", help="Initial relative humidity (%)."),
    final_humidity: str = typer.Option(..., "--final-humidity", help="Final relative humidity (%)."),
    product: Optional[str] = typer.Option(None, "--product", help="Product name."),
    title: Optional[str] = typer.Option(None, "--title", help="Report title."),
    objective: Optional[str] = typer.Option(None, "--objective", help="Monitoring objective."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Fix the timestamp seconds jitter."),
    csv_path: Optional[Path] = typer.Option(
        None,
        "--csv",
        dir_okay=False,
        writable=True,
        help="Write the per-minute records to this CSV file (local mode only).",
    ),
    remote: bool = typer.Option(
        False,
        "--remote/--local",
        help="Submit the run to the service instead of computing it locally.",
    ),
) -> None:
    """Compute a cooling run and display its summary."""
    state = _get_state(ctx)
    payload: Dict[str, Any] = {
        "date": date,
        "start_clock": start,
        "end_clock": end,
        "initial_temp": initial_temp,
        "final_temp": final_temp,
        "initial_humidity": initial_humidity,
        "final_humidity": final_humidity,
        "product": product,
        "title": title,
        "objective": objective,
    }

    if remote:
        if csv_path is not None:
            raise typer.BadParameter("--csv is only available in local mode; use 'export' instead.")
        typer.echo(f"Submitting run to {state.config.base_url} ...")
        result = state.client.submit_run(payload)
        typer.secho(f"Run stored. run_id={result['run_id']}", fg=typer.colors.GREEN)
        typer.echo()
        render_run(result)
        return

    settings = get_settings()
    generator = CoolingSeriesGenerator(
        seed=seed if seed is not None else settings.jitter_seed,
        target_temp=settings.target_temp,
    )
    try:
        computed = generator.compute(parse_parameters(payload))
    except ComputationError as exc:
        _fail(exc)

    render_run(build_run_record(computed, run_id="local").model_dump(mode="json"))

    if csv_path is not None:
        with csv_path.open("w", encoding="utf-8", newline="") as handle:
            rows = write_points_csv(computed.data_points, handle)
        typer.echo()
        typer.secho(f"Wrote {rows} rows to {csv_path}", fg=typer.colors.GREEN)


@app.command("result")
def result_command(
    ctx: typer.Context,
    run_id: str = typer.Argument(..., help="Identifier returned when the run was submitted."),
) -> None:
    """Fetch a stored run from the service."""
    state = _get_state(ctx)
    payload = state.client.get_run(run_id)
    render_run(payload)


@app.command("export")
def export_command(
    ctx: typer.Context,
    run_id: str = typer.Argument(..., help="Identifier returned when the run was submitted."),
    output: Path = typer.Option(..., "--output", "-o", dir_okay=False, writable=True, help="Destination CSV file."),
) -> None:
    """Download the per-minute records of a stored run as CSV."""
    state = _get_state(ctx)
    body = state.client.export_points(run_id)
    output.write_text(body, encoding="utf-8")
    typer.secho(f"Wrote {output}", fg=typer.colors.GREEN)
