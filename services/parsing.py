"""Validation of raw run parameters into a ``ReportParameters`` record."""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any, Mapping, Optional

from models.records import ReportParameters
from services.errors import InvalidTimeRangeError, MalformedInputError

_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")
_HUMIDITY_FIELDS = ("initial_humidity", "final_humidity")
_NUMERIC_FIELDS = ("initial_temp", "final_temp") + _HUMIDITY_FIELDS


def parse_number(value: Any, field: str) -> float:
    """Coerce ``value`` to a finite float, accepting ``,`` as decimal separator."""
    if value is None:
        raise MalformedInputError(f"{field} is missing.", field=field)
    if isinstance(value, bool):
        raise MalformedInputError(f"{field} must be numeric, got {value!r}.", field=field)

    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        candidate = str(value).strip().replace(",", ".")
        if not candidate:
            raise MalformedInputError(f"{field} is missing.", field=field)
        try:
            parsed = float(candidate)
        except ValueError as exc:
            raise MalformedInputError(
                f"{field} must be numeric, got {value!r}.", field=field
            ) from exc

    if not math.isfinite(parsed):
        raise MalformedInputError(f"{field} must be finite, got {value!r}.", field=field)
    return parsed


def parse_clock(value: Any, field: str) -> time:
    if isinstance(value, time):
        return value
    candidate = str(value or "").strip()
    if not candidate:
        raise InvalidTimeRangeError(f"{field} is missing.", field=field)
    try:
        return datetime.strptime(candidate, "%H:%M").time()
    except ValueError as exc:
        raise InvalidTimeRangeError(
            f"{field} must be a HH:MM clock value, got {value!r}.", field=field
        ) from exc


def parse_date(value: Any, field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    candidate = str(value or "").strip()
    if not candidate:
        raise InvalidTimeRangeError(f"{field} is missing.", field=field)
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    raise InvalidTimeRangeError(
        f"{field} must be DD/MM/YYYY or YYYY-MM-DD, got {value!r}.", field=field
    )


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    candidate = str(value).strip()
    return candidate or None


def parse_parameters(raw: Mapping[str, Any]) -> ReportParameters:
    """Build ``ReportParameters`` from loosely typed input.

    Numeric fields are validated first so malformed input is rejected before
    any clock or date handling takes place.
    """
    numbers = {field: parse_number(raw.get(field), field) for field in _NUMERIC_FIELDS}
    for field in _HUMIDITY_FIELDS:
        if not 0 <= numbers[field] <= 100:
            raise MalformedInputError(
                f"{field} must be between 0 and 100, got {numbers[field]}.", field=field
            )

    return ReportParameters(
        start_clock=parse_clock(raw.get("start_clock"), "start_clock"),
        end_clock=parse_clock(raw.get("end_clock"), "end_clock"),
        run_date=parse_date(raw.get("date"), "date"),
        title=_optional_text(raw.get("title")) or "",
        objective=_optional_text(raw.get("objective")) or "",
        product=_optional_text(raw.get("product")) or "",
        issued_at=_optional_text(raw.get("issued_at")),
        **numbers,
    )
