"\"\"\"Typer CLI entrypoint for working with application forms.\"\"\""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import pendulum
import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .container import FormsContainer, create_container
from .core import build_submission, initial_answers
from .errors import FormDefinitionError
from .loaders import AnswersLoader, AuditLogger, OutputWriter, ProfileLoader
from .logging import configure_logging
from .schemas import AnswerValue, CandidateProfile, FormDefinition
from .schemas.config import load_config

app = typer.Typer(help="Job application form CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


def _build_container(config: Optional[Path], log_level: str) -> FormsContainer:
    settings = _load_settings(config)
    configure_logging(log_level)
    return create_container(settings=settings)


def _load_form(container: FormsContainer, path: Path) -> FormDefinition:
    try:
        return container.form_loader().load(path)
    except FormDefinitionError as exc:
        raise typer.BadParameter(str(exc), param_name="form") from exc


def _load_profile(path: Optional[Path]) -> CandidateProfile | None:
    if not path:
        return None
    try:
        return ProfileLoader().load(path)
    except FormDefinitionError as exc:
        raise typer.BadParameter(str(exc), param_name="profile") from exc


@app.command("init-form")
def init_form(
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Form JSON output path."),
    template: str = typer.Option("default", help="Bundled template name."),
    job_id: Optional[str] = typer.Option(None, help="Job posting identifier."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Write a starter form definition from a bundled template."""
    container = _build_container(config, log_level)
    try:
        form = container.form_loader().from_template(template, job_id=job_id)
    except FormDefinitionError as exc:
        raise typer.BadParameter(str(exc), param_name="template") from exc
    OutputWriter().write(output, form.model_dump(mode="json", exclude_none=True))
    typer.echo(f"Wrote {len(form.fields)} fields to {output}.")


@app.command()
def prefill(
    form: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Form JSON path."),
    profile: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Candidate profile JSON path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the initial answers a candidate would see."""
    container = _build_container(None, log_level)
    definition = _load_form(container, form)
    answers = initial_answers(definition.ordered_fields(), _load_profile(profile))
    typer.echo(json.dumps(answers, ensure_ascii=False, indent=2))


@app.command()
def render(
    form: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Form JSON path."),
    profile: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Candidate profile JSON path."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, resolve_path=True, help="HTML output path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Render the form as an HTML fragment."""
    container = _build_container(config, log_level)
    definition = _load_form(container, form)
    answers = initial_answers(definition.ordered_fields(), _load_profile(profile))
    html = container.html_renderer().render(definition.fields, answers)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        typer.echo(f"Rendered {len(definition.fields)} fields to {output}.")
    else:
        typer.echo(html)


@app.command()
def submit(
    form: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Form JSON path."),
    answers: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Answers JSON path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Submission JSON output path."),
    profile: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Candidate profile JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Validate answers and write the application submission."""
    container = _build_container(config, log_level)
    definition = _load_form(container, form)
    try:
        raw_answers = AnswersLoader().load(answers)
    except FormDefinitionError as exc:
        raise typer.BadParameter(str(exc), param_name="answers") from exc

    session = container.session(definition.fields, profile=_load_profile(profile))
    for name, value in raw_answers.items():
        if definition.field_by_name(name) is None:
            raise typer.BadParameter(f"Unknown field: {name!r}", param_name="answers")
        session.set_value(name, value)

    audit_logger = AuditLogger(audit_log) if audit_log else None
    writer = OutputWriter()

    async def deliver(collected: dict[str, AnswerValue]) -> None:
        submission = build_submission(definition.job_id, definition.fields, collected)
        writer.write(
            output,
            {
                "metadata": {
                    "job_id": definition.job_id,
                    "field_count": len(definition.fields),
                    "timestamp": pendulum.now().to_iso8601_string(),
                    "app_version": __version__,
                },
                "submission": submission.model_dump(mode="json", exclude_none=True),
            },
        )
        if audit_logger:
            audit_logger.append(
                {
                    "job_id": definition.job_id,
                    "answer_count": len(submission.answers),
                    "profile_fields": sorted(submission.profile_update.model_dump(exclude_none=True)),
                }
            )

    if not asyncio.run(session.submit(deliver)):
        typer.echo(
            json.dumps(
                {"message": session.submit_error, "errors": session.errors},
                ensure_ascii=False,
                indent=2,
            )
        )
        raise typer.Exit(code=1)

    typer.echo(f"Submitted {len(definition.fields)} answers. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
