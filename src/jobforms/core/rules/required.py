"\"\"\"Required-field rule.\"\"\""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import AnswerValue, FieldDescriptor


@dataclass
class RequiredConfig:
    """Message template for missing required answers."""

    message: str = "{label} is required"


class RequiredRule:
    """Flag required fields whose answer is absent or blank."""

    name = "required"

    def __init__(self, *, config: RequiredConfig | None = None) -> None:
        self._config = config or RequiredConfig()

    def check(self, field: FieldDescriptor, value: AnswerValue | None) -> str | None:
        if not field.required:
            return None
        if value is None or value is False:
            return self._config.message.format(label=field.label)
        if isinstance(value, str) and not value.strip():
            return self._config.message.format(label=field.label)
        return None
