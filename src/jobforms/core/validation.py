"\"\"\"Submit-time validation over a whole form.\"\"\""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..schemas import AnswerValue, FieldDescriptor, order_fields
from .rules import EmailRule, PhoneRule, RequiredRule

ValidationErrorSet = dict[str, str]


@dataclass(slots=True)
class ValidationReport:
    """Errors found in one validation pass."""

    errors: ValidationErrorSet = field(default_factory=dict)
    checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


class FormValidator:
    """Run every rule against every descriptor.

    There is no short-circuit: all fields are checked on each pass. When more
    than one rule fires for a field the first rule's message is kept.
    """

    def __init__(self, rules: Iterable[Any] | None = None) -> None:
        self._rules = list(rules) if rules is not None else default_rules()

    @property
    def rules(self) -> list[Any]:
        return list(self._rules)

    def validate(
        self,
        fields: Iterable[FieldDescriptor],
        answers: Mapping[str, AnswerValue],
    ) -> ValidationReport:
        report = ValidationReport()
        for descriptor in order_fields(list(fields)):
            report.checked += 1
            value = answers.get(descriptor.name)
            for rule in self._rules:
                message = rule.check(descriptor, value)
                if message:
                    report.errors.setdefault(descriptor.name, message)
        return report


def default_rules() -> list[Any]:
    return [RequiredRule(), EmailRule(), PhoneRule()]
