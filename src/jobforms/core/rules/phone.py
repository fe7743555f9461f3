"\"\"\"Phone character rule.\"\"\""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...schemas import AnswerValue, FieldDescriptor, InputKind

INVALID_PHONE_CHARS = re.compile(r"[^0-9\s\-+()]")


@dataclass
class PhoneConfig:
    """Message template for phone answers with stray characters."""

    message: str = "{label} must contain only valid phone number characters"


class PhoneRule:
    """Reject phone answers containing anything but digits, spaces, + - ( )."""

    name = "phone"

    def __init__(self, *, config: PhoneConfig | None = None) -> None:
        self._config = config or PhoneConfig()

    def check(self, field: FieldDescriptor, value: AnswerValue | None) -> str | None:
        if field.input_kind is not InputKind.PHONE:
            return None
        if not isinstance(value, str) or not value.strip():
            return None
        if INVALID_PHONE_CHARS.search(value) is None:
            return None
        return self._config.message.format(label=field.label)
