from __future__ import annotations

from datetime import date, time

import pytest

from services.errors import InvalidTimeRangeError, MalformedInputError
from services.parsing import parse_clock, parse_date, parse_number, parse_parameters


def _raw(**overrides):
    payload = {
        "date": "17/10/2026",
        "start_clock": "16:03",
        "end_clock": "16:53",
        "initial_temp": "5,5",
        "final_temp": 3.9,
        "initial_humidity": "73.8",
        "final_humidity": 89.5,
        "product": "  Sassami ",
        "title": "MONITORAMENTO PCC 2B",
        "objective": None,
    }
    payload.update(overrides)
    return payload


def test_parse_parameters_builds_record() -> None:
    params = parse_parameters(_raw())

    assert params.run_date == date(2026, 10, 17)
    assert params.start_clock == time(16, 3)
    assert params.end_clock == time(16, 53)
    assert params.initial_temp == 5.5
    assert params.final_temp == 3.9
    assert params.initial_humidity == 73.8
    assert params.final_humidity == 89.5
    assert params.product == "Sassami"
    assert params.objective == ""
    assert params.issued_at is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(5, 5.0), (3.9, 3.9), ("4,25", 4.25), (" 7.5 ", 7.5), ("-1", -1.0)],
)
def test_parse_number_accepts_numeric_forms(value, expected) -> None:
    assert parse_number(value, "initial_temp") == expected


@pytest.mark.parametrize("value", ["abc", "", None, True, "nan", "inf", float("nan")])
def test_parse_number_rejects_malformed_values(value) -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        parse_number(value, "final_temp")

    assert excinfo.value.field == "final_temp"
    assert excinfo.value.code == "malformed_input"


def test_malformed_numbers_are_rejected_before_clock_parsing() -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        parse_parameters(_raw(initial_temp="quente", start_clock="not-a-clock"))

    assert excinfo.value.field == "initial_temp"


@pytest.mark.parametrize("field", ["initial_humidity", "final_humidity"])
def test_humidity_outside_percent_range_is_rejected(field) -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        parse_parameters(_raw(**{field: 101}))

    assert excinfo.value.field == field


def test_missing_numeric_field_is_rejected() -> None:
    raw = _raw()
    del raw["final_humidity"]

    with pytest.raises(MalformedInputError, match="final_humidity is missing"):
        parse_parameters(raw)


@pytest.mark.parametrize("value", ["25:00", "16h03", "", None])
def test_parse_clock_rejects_invalid_values(value) -> None:
    with pytest.raises(InvalidTimeRangeError) as excinfo:
        parse_clock(value, "end_clock")

    assert excinfo.value.field == "end_clock"


def test_parse_clock_passes_time_through() -> None:
    assert parse_clock(time(8, 15), "start_clock") == time(8, 15)


@pytest.mark.parametrize(
    "value",
    ["17/10/2026", "2026-10-17", date(2026, 10, 17)],
)
def test_parse_date_accepts_supported_formats(value) -> None:
    assert parse_date(value) == date(2026, 10, 17)


def test_parse_date_rejects_unknown_format() -> None:
    with pytest.raises(InvalidTimeRangeError) as excinfo:
        parse_date("10-17-2026")

    assert excinfo.value.code == "invalid_time_range"
    assert excinfo.value.field == "date"
