"\"\"\"Exception hierarchy for form building, loading and sessions.\"\"\""

from __future__ import annotations


class FormError(ValueError):
    """Base class for form engine errors."""


class FormDefinitionError(FormError):
    """Raised when a stored form definition cannot be loaded."""


class FieldEditError(FormError):
    """Raised when a builder edit cannot be saved."""

    def __init__(self, field_id: str, reason: str):
        super().__init__(f"Cannot save field {field_id!r}: {reason}")
        self.field_id = field_id
        self.reason = reason


class UnknownFieldError(FormError, KeyError):
    """Raised when an answer targets a field the form does not define."""

    def __init__(self, name: str):
        super().__init__(f"Unknown field: {name!r}")
        self.name = name

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Unknown field: {self.name!r}"


class SessionClosedError(FormError):
    """Raised when a submitted session is edited again."""
