"\"\"\"Email format rule.\"\"\""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...schemas import AnswerValue, FieldDescriptor, InputKind

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class EmailConfig:
    """Message template for malformed email answers."""

    message: str = "{label} must be a valid email address"


class EmailRule:
    """Check email fields against a loose address pattern."""

    name = "email"

    def __init__(self, *, config: EmailConfig | None = None) -> None:
        self._config = config or EmailConfig()

    def check(self, field: FieldDescriptor, value: AnswerValue | None) -> str | None:
        if field.input_kind is not InputKind.EMAIL:
            return None
        if not isinstance(value, str) or not value.strip():
            return None
        if EMAIL_PATTERN.fullmatch(value):
            return None
        return self._config.message.format(label=field.label)
