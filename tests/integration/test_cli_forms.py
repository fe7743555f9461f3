from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jobforms.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def form_path(tmp_path: Path) -> Path:
    path = tmp_path / "form.json"
    write_json(
        path,
        {
            "job_id": "JD-001",
            "fields": [
                {"id": "f-1", "name": "firstName", "label": "First name", "required": True, "sort_order": 0},
                {"id": "f-2", "name": "email", "label": "Email", "input_kind": "email", "required": True, "sort_order": 1},
                {"id": "f-3", "name": "favoriteColor", "label": "Favorite color", "sort_order": 2},
                {"id": "f-4", "name": "resume", "label": "Resume", "input_kind": "file", "required": True, "sort_order": 3},
            ],
        },
    )
    return path


def test_init_form_writes_template(tmp_path: Path, runner: CliRunner) -> None:
    output = tmp_path / "new_form.json"

    result = runner.invoke(app, ["init-form", "--output", str(output), "--job-id", "JD-42"])

    assert result.exit_code == 0, result.stdout
    written = json.loads(output.read_text(encoding="utf-8"))
    assert written["job_id"] == "JD-42"
    assert [field["name"] for field in written["fields"]] == ["resume", "coverLetter"]


def test_init_form_unknown_template(tmp_path: Path, runner: CliRunner) -> None:
    result = runner.invoke(app, ["init-form", "--output", str(tmp_path / "x.json"), "--template", "nope"])

    assert result.exit_code != 0


def test_prefill_prints_initial_answers(tmp_path: Path, form_path: Path, runner: CliRunner) -> None:
    profile_path = tmp_path / "profile.json"
    write_json(profile_path, {"first_name": "Ada"})

    result = runner.invoke(app, ["prefill", "--form", str(form_path), "--profile", str(profile_path)])

    assert result.exit_code == 0, result.stdout
    assert json.loads(result.stdout) == {
        "firstName": "Ada",
        "email": "",
        "favoriteColor": "",
        "resume": "",
    }


def test_render_writes_html(tmp_path: Path, form_path: Path, runner: CliRunner) -> None:
    output = tmp_path / "form.html"

    result = runner.invoke(app, ["render", "--form", str(form_path), "--output", str(output)])

    assert result.exit_code == 0, result.stdout
    html = output.read_text(encoding="utf-8")
    assert html.index('name="firstName"') < html.index('name="email"') < html.index('name="resume"')


def test_submit_writes_submission_and_audit(tmp_path: Path, form_path: Path, runner: CliRunner) -> None:
    answers_path = tmp_path / "answers.json"
    output = tmp_path / "submission.json"
    audit = tmp_path / "audit.jsonl"
    write_json(
        answers_path,
        {"firstName": "Ada", "email": "ada@example.com", "favoriteColor": "teal", "resume": "cv.pdf"},
    )

    result = runner.invoke(
        app,
        [
            "submit",
            "--form",
            str(form_path),
            "--answers",
            str(answers_path),
            "--output",
            str(output),
            "--audit-log",
            str(audit),
            "--log-level",
            "WARNING",
        ],
    )

    assert result.exit_code == 0, result.stdout
    rendered = json.loads(output.read_text(encoding="utf-8"))
    submission = rendered["submission"]
    assert rendered["metadata"]["job_id"] == "JD-001"
    assert submission["profile_update"] == {"first_name": "Ada"}
    assert {a["job_form_field_id"]: a["answer_text"] for a in submission["answers"]} == {
        "f-2": "ada@example.com",
        "f-3": "teal",
        "f-4": "cv.pdf",
    }
    audit_lines = audit.read_text(encoding="utf-8").splitlines()
    assert len(audit_lines) == 1
    assert json.loads(audit_lines[0])["answer_count"] == 3


def test_submit_reports_validation_errors(tmp_path: Path, form_path: Path, runner: CliRunner) -> None:
    answers_path = tmp_path / "answers.json"
    output = tmp_path / "submission.json"
    write_json(answers_path, {"firstName": "Ada", "email": "not-an-email"})

    result = runner.invoke(
        app,
        [
            "submit",
            "--form",
            str(form_path),
            "--answers",
            str(answers_path),
            "--output",
            str(output),
            "--log-level",
            "WARNING",
        ],
    )

    assert result.exit_code == 1
    assert not output.exists()
    assert "Please fill in all required fields" in result.stdout
    assert "Email must be a valid email address" in result.stdout
    assert "Resume is required" in result.stdout


def test_submit_rejects_unknown_answer_keys(tmp_path: Path, form_path: Path, runner: CliRunner) -> None:
    answers_path = tmp_path / "answers.json"
    write_json(answers_path, {"shoeSize": "42"})

    result = runner.invoke(
        app,
        [
            "submit",
            "--form",
            str(form_path),
            "--answers",
            str(answers_path),
            "--output",
            str(tmp_path / "out.json"),
        ],
    )

    assert result.exit_code != 0
