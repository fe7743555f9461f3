"""Profile prefill rules and the reverse split used when applying.

Field names are matched case-insensitively against an ordered rule table;
the first matching rule decides which profile attribute feeds the field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence

from ..schemas import (
    AnswerValue,
    ApplicationAnswer,
    ApplicationSubmission,
    CandidateProfile,
    FieldDescriptor,
    InputKind,
    ProfileUpdate,
    empty_value,
)

# Kinds whose value type cannot hold a profile string.
NON_PREFILL_KINDS = frozenset({InputKind.CHECKBOX, InputKind.FILE})


@dataclass(frozen=True)
class PrefillRule:
    """Maps field names satisfying ``predicate`` to a profile attribute."""

    key: str
    predicate: Callable[[str], bool]
    profile_attribute: str

    def matches(self, field_name: str) -> bool:
        return self.predicate(field_name.lower())

    def value_from(self, profile: CandidateProfile) -> str:
        return getattr(profile, self.profile_attribute, None) or ""


def _contains_all(*needles: str) -> Callable[[str], bool]:
    return lambda name: all(needle in name for needle in needles)


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda name: any(needle in name for needle in needles)


DEFAULT_PREFILL_RULES: tuple[PrefillRule, ...] = (
    PrefillRule("first_name", _contains_all("first", "name"), "first_name"),
    PrefillRule("last_name", _contains_all("last", "name"), "last_name"),
    PrefillRule("phone", _contains_any("phone"), "phone"),
    PrefillRule("bio", _contains_any("bio", "cover"), "bio"),
    PrefillRule("linkedin", _contains_any("linkedin"), "linkedin_url"),
    PrefillRule("github", _contains_any("github"), "github_url"),
    PrefillRule("portfolio", _contains_any("portfolio"), "portfolio_url"),
)


def match_rule(
    field_name: str,
    rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
) -> PrefillRule | None:
    """Return the first rule matching ``field_name``, or None."""
    for rule in rules:
        if rule.matches(field_name):
            return rule
    return None


def _prefill_rule_for(
    descriptor: FieldDescriptor,
    rules: Sequence[PrefillRule],
) -> PrefillRule | None:
    if descriptor.input_kind in NON_PREFILL_KINDS:
        return None
    return match_rule(descriptor.name, rules)


def initial_answers(
    fields: Iterable[FieldDescriptor],
    profile: CandidateProfile | None = None,
    rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
) -> dict[str, AnswerValue]:
    """Build the starting AnswerSet, one entry per descriptor."""
    answers: dict[str, AnswerValue] = {}
    for descriptor in fields:
        value = empty_value(descriptor.input_kind)
        if profile is not None:
            rule = _prefill_rule_for(descriptor, rules)
            if rule is not None:
                value = rule.value_from(profile)
        answers[descriptor.name] = value
    return answers


def rehydrate(
    answers: Mapping[str, AnswerValue],
    fields: Iterable[FieldDescriptor],
    profile: CandidateProfile | None,
    rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
) -> dict[str, AnswerValue]:
    """Apply a (re)loaded profile; only rule-matched fields are overwritten."""
    updated = dict(answers)
    if profile is None:
        return updated
    for descriptor in fields:
        rule = _prefill_rule_for(descriptor, rules)
        if rule is not None:
            updated[descriptor.name] = rule.value_from(profile)
        elif descriptor.name not in updated:
            updated[descriptor.name] = empty_value(descriptor.input_kind)
    return updated


def split_answers(
    fields: Iterable[FieldDescriptor],
    answers: Mapping[str, AnswerValue],
    rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
) -> tuple[ProfileUpdate, list[ApplicationAnswer]]:
    """Separate profile-backed answers from job-specific ones."""
    profile_values: dict[str, str] = {}
    job_answers: list[ApplicationAnswer] = []
    for descriptor in fields:
        if descriptor.name not in answers:
            continue
        text = _answer_text(answers[descriptor.name])
        if not text:
            continue
        rule = _prefill_rule_for(descriptor, rules)
        if rule is not None:
            profile_values[rule.profile_attribute] = text
            continue
        job_answers.append(
            ApplicationAnswer(job_form_field_id=descriptor.id, answer_text=text)
        )
    return ProfileUpdate(**profile_values), job_answers


def build_submission(
    job_id: str | None,
    fields: Iterable[FieldDescriptor],
    answers: Mapping[str, AnswerValue],
    rules: Sequence[PrefillRule] = DEFAULT_PREFILL_RULES,
) -> ApplicationSubmission:
    profile_update, job_answers = split_answers(fields, answers, rules)
    return ApplicationSubmission(
        job_id=job_id,
        answers=job_answers,
        profile_update=profile_update,
    )


def _answer_text(value: AnswerValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
