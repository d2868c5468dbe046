from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal

# Wide enough to hold any finite float quantized to a handful of places.
_CONTEXT = Context(prec=400)


def _quantize(value: float, places: int) -> Decimal:
    # Decimal(value) keeps the exact binary value, so only true halves round up.
    return Decimal(value).quantize(
        Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=_CONTEXT
    )


def round_half_up(value: float, places: int = 1) -> float:
    """Round ``value`` with ties away from zero, e.g. ``5.25`` to ``5.3``."""
    return float(_quantize(value, places))


def format_decimal(value: float, places: int = 1) -> str:
    """Fixed-point text using a comma as decimal separator, e.g. ``5,5``."""
    return f"{_quantize(value, places):f}".replace(".", ",")
