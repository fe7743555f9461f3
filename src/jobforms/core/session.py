"\"\"\"Candidate-side form session: answers, validation and submit.\"\"\""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PureWindowsPath
from typing import Any, Awaitable, Callable, Iterable, Sequence

import structlog

from ..errors import FormDefinitionError, FormError, SessionClosedError, UnknownFieldError
from ..schemas import (
    AnswerValue,
    CandidateProfile,
    FieldDescriptor,
    InputKind,
    coerce_answer,
    order_fields,
)
from .prefill import DEFAULT_PREFILL_RULES, PrefillRule, initial_answers, rehydrate
from .rendering import Control, ControlRenderer
from .validation import FormValidator, ValidationErrorSet

SubmitCallback = Callable[[dict[str, AnswerValue]], Awaitable[None]]


class SessionState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass
class SessionMessages:
    """Banner texts shown above the form."""

    validation_banner: str = "Please fill in all required fields"
    submit_fallback: str = "Failed to submit application"


class FormSession:
    """One candidate filling in one job's application form.

    Answers start from the profile prefill rules; edits clear the edited
    field's error; ``submit`` validates everything and awaits the caller's
    callback once validation passes.
    """

    def __init__(
        self,
        fields: Iterable[FieldDescriptor],
        *,
        profile: CandidateProfile | None = None,
        validator: FormValidator | None = None,
        renderer: ControlRenderer | None = None,
        prefill_rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
        messages: SessionMessages | None = None,
    ) -> None:
        self._fields = order_fields(list(fields))
        self._by_name = {descriptor.name: descriptor for descriptor in self._fields}
        if len(self._by_name) != len(self._fields):
            counts = Counter(descriptor.name for descriptor in self._fields)
            duplicates = sorted(name for name, count in counts.items() if count > 1)
            raise FormDefinitionError(f"Duplicate field names: {', '.join(duplicates)}")
        self._validator = validator or FormValidator()
        self._renderer = renderer or ControlRenderer()
        self._rules = tuple(prefill_rules)
        self._messages = messages or SessionMessages()
        self._profile = profile
        self._answers = initial_answers(self._fields, profile, self._rules)
        self._errors: ValidationErrorSet = {}
        self._submit_error = ""
        self._state = SessionState.EDITING
        self.is_loading = False
        self._logger = structlog.get_logger(__name__)

    @property
    def fields(self) -> list[FieldDescriptor]:
        return list(self._fields)

    @property
    def answers(self) -> dict[str, AnswerValue]:
        return dict(self._answers)

    @property
    def errors(self) -> ValidationErrorSet:
        return dict(self._errors)

    @property
    def submit_error(self) -> str:
        return self._submit_error

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def profile(self) -> CandidateProfile | None:
        return self._profile

    def set_value(self, name: str, value: Any) -> AnswerValue:
        descriptor = self._descriptor(name)
        self._ensure_open()
        coerced = coerce_answer(descriptor.input_kind, value)
        self._answers[name] = coerced
        self._errors.pop(name, None)
        return coerced

    def select_file(self, name: str, filename: str) -> str:
        """Record the chosen file's base name; the upload itself happens elsewhere."""
        descriptor = self._descriptor(name)
        if descriptor.input_kind is not InputKind.FILE:
            raise FormError(f"Field {name!r} is not a file field")
        base_name = PureWindowsPath(PurePath(filename).name).name
        self.set_value(name, base_name)
        return base_name

    def update_profile(self, profile: CandidateProfile | None) -> None:
        if profile is self._profile:
            return
        self._profile = profile
        self._answers = rehydrate(self._answers, self._fields, profile, self._rules)
        self._logger.debug("form.profile_applied", has_profile=profile is not None)

    def validate(self) -> bool:
        report = self._validator.validate(self._fields, self._answers)
        self._errors = dict(report.errors)
        return report.ok

    async def submit(self, on_submit: SubmitCallback) -> bool:
        """Validate and hand the answers to ``on_submit``.

        Returns True once the callback completed; False when validation
        failed, the callback raised, or a submit is already in flight.
        """
        if self.is_loading or self._state is SessionState.SUBMITTING:
            self._logger.info("form.submit_ignored", state=self._state.value, is_loading=self.is_loading)
            return False
        self._ensure_open()

        self._submit_error = ""
        self._state = SessionState.VALIDATING
        if not self.validate():
            self._state = SessionState.EDITING
            self._submit_error = self._messages.validation_banner
            self._logger.info("form.validation_failed", errors=sorted(self._errors))
            return False

        self._state = SessionState.SUBMITTING
        try:
            await on_submit(dict(self._answers))
        except Exception as exc:  # noqa: BLE001
            self._submit_error = str(exc) or self._messages.submit_fallback
            self._logger.warning("form.submit_failed", error=self._submit_error)
            return False
        else:
            self._state = SessionState.SUBMITTED
        finally:
            # Cancellation propagates, but the form must stay editable.
            if self._state is not SessionState.SUBMITTED:
                self._state = SessionState.EDITING

        self._logger.info("form.submitted", fields=len(self._answers))
        return True

    def controls(self) -> list[Control]:
        return self._renderer.render(
            self._fields,
            self._answers,
            self._errors,
            is_loading=self.is_loading or self._state is SessionState.SUBMITTING,
        )

    def _descriptor(self, name: str) -> FieldDescriptor:
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise UnknownFieldError(name) from exc

    def _ensure_open(self) -> None:
        if self._state is SessionState.SUBMITTED:
            raise SessionClosedError("Session already submitted")
