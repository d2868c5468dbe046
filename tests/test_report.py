from __future__ import annotations

import io
from datetime import date, time

import pytest

from models.records import CoolingResult, ReportParameters
from services.cooling import CoolingSeriesGenerator
from services.export import HEADER, points_to_csv, write_points_csv
from services.formatting import format_decimal, round_half_up
from services.report import build_analysis_prompt, closing_observation, summary_rows


class FixedRandom:
    def __init__(self, value: int) -> None:
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


@pytest.fixture()
def result() -> CoolingResult:
    params = ReportParameters(
        start_clock=time(16, 3),
        end_clock=time(16, 53),
        run_date=date(2026, 10, 17),
        initial_temp=5.5,
        final_temp=3.9,
        initial_humidity=73.8,
        final_humidity=89.5,
        product="Sassami",
        objective="Verificação 4 ºC em 4 horas",
    )
    return CoolingSeriesGenerator().compute(params, rng=FixedRandom(27))


@pytest.mark.parametrize(
    ("value", "places", "expected"),
    [
        (5.5, 1, "5,5"),
        (3.9, 1, "3,9"),
        (0.032, 3, "0,032"),
        (0.0068754, 4, "0,0069"),
        (-0.5, 1, "-0,5"),
        (5.25, 1, "5,3"),
        (70.25, 1, "70,3"),
        (-5.25, 1, "-5,3"),
        (2.675, 2, "2,67"),
        (12, 2, "12,00"),
    ],
)
def test_format_decimal_uses_comma_separator(value, places, expected) -> None:
    assert format_decimal(value, places) == expected


def test_format_decimal_defaults_to_one_place() -> None:
    assert format_decimal(89.54) == "89,5"


def test_summary_rows(result: CoolingResult) -> None:
    rows = dict(summary_rows(result))

    assert rows["Data"] == "17/10/2026"
    assert rows["Início"] == "16:03"
    assert rows["Fim"] == "16:53"
    assert rows["Intervalo Total (min)"] == "50"
    assert rows["Produto Analisado"] == "Sassami"
    assert rows["Temperatura (Máx/Mín/Méd)"].startswith("5,5 ºC / 3,9 ºC / ")
    assert rows["Umidade Relativa [%Hr] (Máx/Mín/Méd)"].startswith("89,5 / 73,8 / ")
    assert rows["Taxa média de resfriamento"] == "0,03200 ºC/min"
    assert rows["Constante Newtoniana (k global)"] == "0,0069 min-¹"


def test_closing_observation(result: CoolingResult) -> None:
    assert closing_observation(result) == (
        "Processo iniciado às 16:03:27. "
        "Registro finalizado ao atingir 3,9 ºC às 16:53:27."
    )


def test_analysis_prompt_interpolates_scalars(result: CoolingResult) -> None:
    prompt = build_analysis_prompt(result)

    assert "produto Sassami" in prompt
    assert "Temperatura Inicial: 5,5 °C" in prompt
    assert "Temperatura Final: 3,9 °C" in prompt
    assert "Tempo total: 50 minutos" in prompt
    assert "Taxa média de resfriamento: 0,0320 °C/min" in prompt
    assert "(k global): 0,0069 min-¹" in prompt
    assert "Objetivo de monitoramento: Verificação 4 ºC em 4 horas" in prompt


def test_points_csv_layout(result: CoolingResult) -> None:
    body = points_to_csv(result.data_points)
    lines = body.splitlines()

    assert lines[0] == ";".join(HEADER)
    assert lines[1] == "1;17/10/2026 16:03:27;5,5;73,8;0,0000"
    assert lines[-1].startswith("51;17/10/2026 16:53:27;3,9;89,5;")
    assert len(lines) == result.total_minutes + 2


def test_write_points_csv_returns_row_count(result: CoolingResult) -> None:
    handle = io.StringIO()

    rows = write_points_csv(result.data_points, handle)

    assert rows == 51
    assert handle.getvalue().count("\n") == 52


def test_round_half_up_matches_fixed_point_text() -> None:
    assert round_half_up(5.25) == 5.3
    assert round_half_up(0.05) == 0.1
    assert round_half_up(3.14159, 3) == 3.142
