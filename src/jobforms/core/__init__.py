"\"\"\"Form engine core: builder, prefill, rendering, validation and sessions.\"\"\""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import AnswerValue, FieldDescriptor

# NOTE: keep imports explicit for export clarity.
from .builder import BuilderConfig, FormBuilder, options_to_text, parse_options_text
from .prefill import (
    DEFAULT_PREFILL_RULES,
    PrefillRule,
    build_submission,
    initial_answers,
    match_rule,
    rehydrate,
    split_answers,
)
from .rendering import Choice, Control, ControlRenderer, HtmlFormRenderer, RenderingSettings
from .rules import EmailRule, PhoneRule, RequiredRule
from .session import FormSession, SessionMessages, SessionState
from .validation import FormValidator, ValidationReport


@runtime_checkable
class FieldRule(Protocol):
    """Rule contract used by the form validator."""

    name: str

    def check(self, field: FieldDescriptor, value: AnswerValue | None) -> str | None:
        """Return an error message, or None when the value is acceptable."""


__all__ = [
    "BuilderConfig",
    "Choice",
    "Control",
    "ControlRenderer",
    "DEFAULT_PREFILL_RULES",
    "EmailRule",
    "FieldRule",
    "FormBuilder",
    "FormSession",
    "FormValidator",
    "HtmlFormRenderer",
    "PhoneRule",
    "PrefillRule",
    "RenderingSettings",
    "RequiredRule",
    "SessionMessages",
    "SessionState",
    "ValidationReport",
    "build_submission",
    "initial_answers",
    "match_rule",
    "options_to_text",
    "parse_options_text",
    "rehydrate",
    "split_answers",
]
