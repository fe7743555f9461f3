"\"\"\"JSON loaders and writers for forms, profiles and submissions.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
from pydantic import ValidationError

from .config import ConfigManager, template_manager
from .errors import FormDefinitionError
from .schemas import CandidateProfile, FormDefinition


def _read_json(path: Path, what: str) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise FormDefinitionError(f"Invalid {what} JSON: {exc}") from exc


class FormLoader:
    """Load form definitions from JSON files or bundled templates."""

    def __init__(self, templates: ConfigManager | None = None):
        self._templates = templates or template_manager()

    def load(self, path: Path) -> FormDefinition:
        return self.parse(_read_json(path, "form"))

    def parse(self, data: Any) -> FormDefinition:
        try:
            return FormDefinition.model_validate(data)
        except ValidationError as exc:
            raise FormDefinitionError(f"Invalid form definition: {exc}") from exc

    def from_template(self, name: str, *, job_id: str | None = None) -> FormDefinition:
        try:
            data = self._templates.load(name)
        except FileNotFoundError as exc:
            raise FormDefinitionError(f"Unknown form template: {name!r}") from exc
        form = self.parse(data or {})
        if job_id is not None:
            form = form.model_copy(update={"job_id": job_id})
        return form


class ProfileLoader:
    """Load candidate profile documents."""

    def load(self, path: Path) -> CandidateProfile:
        data = _read_json(path, "profile")
        try:
            return CandidateProfile.model_validate(data)
        except ValidationError as exc:
            raise FormDefinitionError(f"Invalid candidate profile: {exc}") from exc


class AnswersLoader:
    """Load raw answer mappings keyed by field name."""

    def load(self, path: Path) -> dict[str, Any]:
        data = _read_json(path, "answers")
        if not isinstance(data, dict):
            raise FormDefinitionError("Answers must be a JSON object keyed by field name")
        return data


class OutputWriter:
    """Persist submission payloads."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        entry = {"recorded_at": pendulum.now("UTC").to_iso8601_string(), **record}
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=False))
            handle.write("\n")
