from __future__ import annotations

import pytest

from jobforms.core import DEFAULT_PREFILL_RULES, build_submission, initial_answers, match_rule, rehydrate
from jobforms.core.prefill import split_answers
from jobforms.schemas import CandidateProfile, FieldDescriptor


def build_profile(**kwargs) -> CandidateProfile:
    defaults = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone": "+44 20 7946 0000",
        "bio": "Analyst of engines.",
        "linkedin_url": "https://linkedin.com/in/ada",
        "github_url": "https://github.com/ada",
        "portfolio_url": "https://ada.dev",
    }
    defaults.update(kwargs)
    return CandidateProfile(**defaults)


def build_fields(*names: str, **kinds: str) -> list[FieldDescriptor]:
    return [
        FieldDescriptor(
            id=f"f-{index}",
            name=name,
            label=name.title(),
            input_kind=kinds.get(name, "text"),
            sort_order=index,
        )
        for index, name in enumerate(names)
    ]


@pytest.mark.parametrize(
    ("field_name", "expected_key"),
    [
        ("firstName", "first_name"),
        ("FIRST_NAME", "first_name"),
        ("lastName", "last_name"),
        ("phoneNumber", "phone"),
        ("bio", "bio"),
        ("coverLetter", "bio"),
        ("linkedinUrl", "linkedin"),
        ("GitHub", "github"),
        ("portfolio_site", "portfolio"),
        ("favoriteColor", None),
        ("email", None),
    ],
)
def test_match_rule_precedence(field_name: str, expected_key: str | None):
    rule = match_rule(field_name)

    assert (rule.key if rule else None) == expected_key


def test_first_rule_wins_when_several_match():
    # "first" + "name" beats "phone"
    assert match_rule("first_name_phone").key == "first_name"
    assert [rule.key for rule in DEFAULT_PREFILL_RULES][:3] == ["first_name", "last_name", "phone"]


def test_initial_answers_from_profile():
    fields = build_fields("firstName", "favoriteColor", "coverLetter", "consent", consent="checkbox")

    answers = initial_answers(fields, build_profile())

    assert answers == {
        "firstName": "Ada",
        "favoriteColor": "",
        "coverLetter": "Analyst of engines.",
        "consent": False,
    }


def test_initial_answers_without_profile_are_empty():
    fields = build_fields("firstName", "resume", "consent", resume="file", consent="checkbox")

    assert initial_answers(fields) == {"firstName": "", "resume": "", "consent": False}


def test_missing_profile_attribute_prefills_empty_string():
    fields = build_fields("githubUrl")

    assert initial_answers(fields, build_profile(github_url=None)) == {"githubUrl": ""}


def test_rehydrate_keeps_user_input_for_unmatched_fields():
    fields = build_fields("firstName", "favoriteColor")
    answers = {"firstName": "", "favoriteColor": "teal"}

    updated = rehydrate(answers, fields, build_profile(first_name="Grace"))

    assert updated == {"firstName": "Grace", "favoriteColor": "teal"}
    assert answers["firstName"] == ""


def test_rehydrate_without_profile_changes_nothing():
    fields = build_fields("firstName")

    assert rehydrate({"firstName": "typed"}, fields, None) == {"firstName": "typed"}


def test_split_answers_routes_profile_fields():
    fields = build_fields("firstName", "phone", "favoriteColor", "notes", "consent", consent="checkbox")
    answers = {
        "firstName": "Ada",
        "phone": "",
        "favoriteColor": "teal",
        "notes": "",
        "consent": True,
    }

    profile_update, job_answers = split_answers(fields, answers)

    assert profile_update.model_dump(exclude_none=True) == {"first_name": "Ada"}
    assert [(a.job_form_field_id, a.answer_text) for a in job_answers] == [
        ("f-2", "teal"),
        ("f-4", "true"),
    ]


def test_build_submission_carries_job_id():
    fields = build_fields("favoriteColor")

    submission = build_submission("JOB-9", fields, {"favoriteColor": "teal"})

    assert submission.job_id == "JOB-9"
    assert submission.answers[0].answer_text == "teal"
    assert submission.profile_update.is_empty()
