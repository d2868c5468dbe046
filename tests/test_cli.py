from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from cli.app import app
from models.records import ReportParameters
from services.cooling import CoolingSeriesGenerator
from services.runs import build_run_record

RUN_ARGS = [
    "--date", "17/10/2026",
    "--start", "16:03",
    "--end", "16:53",
    "--initial-temp", "5,5",
    "--final-temp", "3.9",
    "--initial-humidity", "73.8",
    "--final-humidity", "89.5",
    "--product", "Sassami",
]


def _stored_run(run_id: str) -> Dict[str, Any]:
    params = ReportParameters(
        start_clock=time(16, 3),
        end_clock=time(16, 53),
        run_date=date(2026, 10, 17),
        initial_temp=5.5,
        final_temp=3.9,
        initial_humidity=73.8,
        final_humidity=89.5,
        product="Sassami",
    )
    result = CoolingSeriesGenerator(seed=5).compute(params)
    return build_run_record(result, run_id=run_id).model_dump(mode="json")


class StubClient:
    def __init__(self, config, run_id: str = "run-123") -> None:
        self.config = config
        self.run_id = run_id
        self.submitted: List[Dict[str, Any]] = []
        self.closed = False

    def submit_run(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.submitted.append(payload)
        return _stored_run(self.run_id)

    def get_run(self, run_id: str) -> Dict[str, Any]:
        return _stored_run(run_id)

    def export_points(self, run_id: str) -> str:
        return f"ID;Data/Hora\n1;{run_id}\n"

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_compute_locally(runner: CliRunner, stub: StubClient, tmp_path) -> None:
    csv_path = tmp_path / "points.csv"

    result = runner.invoke(app, ["compute", *RUN_ARGS, "--seed", "7", "--csv", str(csv_path)])

    assert result.exit_code == 0, result.output
    assert "Cooling Run" in result.output
    assert "total_minutes: 50" in result.output
    assert "global_rate_constant: 0,0069 min-¹" in result.output
    assert "reached after 46 min" in result.output
    assert "51 points in total" in result.output
    assert not stub.submitted
    assert stub.closed is True

    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 52
    assert lines[1].startswith("1;17/10/2026 16:03:")


def test_compute_locally_is_reproducible_with_seed(runner: CliRunner, stub: StubClient) -> None:
    first = runner.invoke(app, ["compute", *RUN_ARGS, "--seed", "9"])
    second = runner.invoke(app, ["compute", *RUN_ARGS, "--seed", "9"])

    assert first.exit_code == 0
    assert first.output == second.output


def test_compute_reports_typed_error(runner: CliRunner, stub: StubClient) -> None:
    args = [arg if arg != "3.9" else "0" for arg in RUN_ARGS]

    result = runner.invoke(app, ["compute", *args])

    assert result.exit_code == 1
    assert "undefined_cooling_domain" in result.output


def test_compute_rejects_malformed_number(runner: CliRunner, stub: StubClient) -> None:
    args = [arg if arg != "73.8" else "humid" for arg in RUN_ARGS]

    result = runner.invoke(app, ["compute", *args])

    assert result.exit_code == 1
    assert "malformed_input" in result.output


def test_compute_remote(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://cooling:9000/", "compute", *RUN_ARGS, "--remote"])

    assert result.exit_code == 0, result.output
    assert "Run stored. run_id=run-123" in result.output
    assert stub.config.base_url == "http://cooling:9000"
    assert stub.submitted[0]["initial_temp"] == "5,5"
    assert stub.submitted[0]["product"] == "Sassami"
    assert stub.closed is True


def test_result_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["result", "run-999"])

    assert result.exit_code == 0
    assert "run_id: run-999" in result.output
    assert "Summary" in result.output
    assert "Processo iniciado às 16:03:" in result.output


def test_export_command(runner: CliRunner, stub: StubClient, tmp_path) -> None:
    output = tmp_path / "export.csv"

    result = runner.invoke(app, ["export", "run-42", "--output", str(output)])

    assert result.exit_code == 0
    assert output.read_text(encoding="utf-8") == "ID;Data/Hora\n1;run-42\n"
