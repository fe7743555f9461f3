"\"\"\"Pydantic configuration schema for YAML input.\"\"\""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MessagesConfig(BaseModel):
    required: str | None = None
    email: str | None = None
    phone: str | None = None
    validation_banner: str | None = None
    submit_fallback: str | None = None


class RenderingConfig(BaseModel):
    textarea_rows: int | None = None
    checkbox_caption: str | None = None
    submit_label: str | None = None
    submitting_label: str | None = None


class BuilderSettings(BaseModel):
    default_label: str | None = None
    name_prefix: str | None = None
    strict_labels: bool | None = None


class AppConfig(BaseModel):
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    builder: BuilderSettings = Field(default_factory=BuilderSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("messages", "rendering", "builder"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    """Validate a raw mapping; non-mappings raise ValidationError."""
    return AppConfig.model_validate(raw if raw is not None else {})
