"""Error types raised by the calculation engine."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import ValidationError


class InvalidInput(ValueError):
    """An input field is missing, malformed, or outside its allowed range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> InvalidInput:
        """Convert the first pydantic field error into an InvalidInput."""
        return cls.from_errors(exc.errors(), fallback=str(exc))

    @classmethod
    def from_errors(
        cls,
        errors: Sequence[dict[str, Any]],
        skip_prefix: tuple[str, ...] = (),
        fallback: str = "invalid input",
    ) -> InvalidInput:
        """Build from a pydantic-style error list, reporting the first entry.

        A leading ``loc`` part named in ``skip_prefix`` (e.g. FastAPI's
        ``"body"``) is dropped from the field path.
        """
        if not errors:
            return cls("input", fallback)
        first = errors[0]
        loc = list(first.get("loc", ()))
        if loc and loc[0] in skip_prefix:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "input"
        return cls(field, first.get("msg", "invalid value"))
