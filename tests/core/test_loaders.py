from __future__ import annotations

import json
from pathlib import Path

import pytest

from jobforms.config import ConfigManager, template_manager
from jobforms.errors import FormDefinitionError
from jobforms.loaders import AnswersLoader, AuditLogger, FormLoader, OutputWriter, ProfileLoader


def test_form_loader_reads_json(tmp_path: Path):
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(
            {
                "job_id": 12,
                "fields": [
                    {"id": 1, "name": "resume", "label": "Resume", "type": "file", "required": True},
                ],
            }
        ),
        encoding="utf-8",
    )

    form = FormLoader().load(path)

    assert form.job_id == "12"
    assert form.fields[0].id == "1"
    assert form.fields[0].input_kind.value == "file"


def test_form_loader_invalid_json(tmp_path: Path):
    path = tmp_path / "form.json"
    path.write_text("{invalid", encoding="utf-8")

    with pytest.raises(FormDefinitionError) as exc:
        FormLoader().load(path)
    assert "Invalid form JSON" in str(exc.value)


def test_form_loader_schema_violation(tmp_path: Path):
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps([{"id": "a", "name": "x", "label": "X", "input_kind": "select"}]),
        encoding="utf-8",
    )

    with pytest.raises(FormDefinitionError):
        FormLoader().load(path)


def test_bundled_templates():
    manager = template_manager()
    loader = FormLoader(manager)

    form = loader.from_template("default", job_id="JD-1")

    assert "default" in manager.names()
    assert form.job_id == "JD-1"
    assert [(f.name, f.input_kind.value, f.required) for f in form.ordered_fields()] == [
        ("resume", "file", True),
        ("coverLetter", "textarea", True),
    ]
    assert loader.from_template("contact").field_by_name("email") is not None


def test_unknown_template(tmp_path: Path):
    loader = FormLoader(ConfigManager(tmp_path))

    with pytest.raises(FormDefinitionError):
        loader.from_template("missing")


def test_profile_and_answers_loaders(tmp_path: Path):
    profile_path = tmp_path / "profile.json"
    profile_path.write_text(json.dumps({"first_name": "Ada", "user_id": 3}), encoding="utf-8")
    answers_path = tmp_path / "answers.json"
    answers_path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")

    assert ProfileLoader().load(profile_path).first_name == "Ada"
    with pytest.raises(FormDefinitionError):
        AnswersLoader().load(answers_path)


def test_writer_and_audit_logger(tmp_path: Path):
    output = tmp_path / "out" / "submission.json"
    audit = tmp_path / "logs" / "audit.jsonl"

    OutputWriter().write(output, {"job_id": "JD-1"})
    logger = AuditLogger(audit)
    logger.append({"job_id": "JD-1"})
    logger.append({"job_id": "JD-2"})

    assert json.loads(output.read_text(encoding="utf-8")) == {"job_id": "JD-1"}
    lines = [json.loads(line) for line in audit.read_text(encoding="utf-8").splitlines()]
    assert [line["job_id"] for line in lines] == ["JD-1", "JD-2"]
    assert all("recorded_at" in line for line in lines)
