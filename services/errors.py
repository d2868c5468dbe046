"""Typed errors raised when a cooling run cannot be computed."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ComputationError(ValueError):
    """Base class for rejected computations.

    Each subclass carries a stable ``code`` so callers can tell the failure
    kinds apart without matching on message text.
    """

    code = "computation_error"

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "field": self.field, "message": self.message}


class InvalidTimeRangeError(ComputationError):
    """Clock or date values are unparseable, or the interval has no length."""

    code = "invalid_time_range"


class UndefinedCoolingDomainError(ComputationError):
    """A temperature endpoint sits at or below ambient, so Newton's k is undefined."""

    code = "undefined_cooling_domain"


class MalformedInputError(ComputationError):
    """A numeric field is missing, non-numeric, non-finite or out of range."""

    code = "malformed_input"
