"""Range checks shared by the analyzers.

Each helper raises :class:`InvalidInput` naming the field; nothing is clamped.
"""

from __future__ import annotations

import math

from dealcalc.errors import InvalidInput

MAX_PERCENT = 100.0


def _require_finite(field: str, value: float) -> None:
    if value is None:
        raise InvalidInput(field, "is required")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInput(field, f"must be a finite number, got {value}")


def require_non_negative(field: str, value: float) -> None:
    _require_finite(field, value)
    if value < 0:
        raise InvalidInput(field, f"must be >= 0, got {value}")


def require_positive(field: str, value: float) -> None:
    _require_finite(field, value)
    if value <= 0:
        raise InvalidInput(field, f"must be > 0, got {value}")


def require_percent(field: str, value: float) -> None:
    _require_finite(field, value)
    if not 0 <= value <= MAX_PERCENT:
        raise InvalidInput(field, f"must be between 0 and {MAX_PERCENT:g} percent, got {value}")


def require_fields(model, *, positive=(), non_negative=(), percent=()) -> None:
    """Check named attributes of an input model in declaration order."""
    for name in positive:
        require_positive(name, getattr(model, name))
    for name in non_negative:
        require_non_negative(name, getattr(model, name))
    for name in percent:
        require_percent(name, getattr(model, name))
