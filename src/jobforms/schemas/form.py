"\"\"\"Pydantic schema definitions for application form descriptors.\"\"\""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

AnswerValue = Union[str, bool]

_TRUTHY = {"true", "on", "yes", "1"}


class InputKind(str, Enum):
    """Control kinds a descriptor can render as."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    TEXTAREA = "textarea"
    SELECT = "select"
    FILE = "file"
    RADIO = "radio"
    CHECKBOX = "checkbox"

    @property
    def has_options(self) -> bool:
        return self in OPTION_KINDS


OPTION_KINDS = frozenset({InputKind.SELECT, InputKind.RADIO})


class FieldOption(BaseModel):
    """One choice of a select or radio field."""

    value: str
    label: str

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            text = data.strip()
            return {"value": text, "label": text}
        if isinstance(data, dict) and ("option_value" in data or "option_label" in data):
            value = data.get("option_value", data.get("option_label", ""))
            label = data.get("option_label", value)
            return {"value": value, "label": label}
        if isinstance(data, dict) and "label" not in data and "value" in data:
            return {"value": data["value"], "label": data["value"]}
        return data


class FieldDescriptor(BaseModel):
    """One configurable question on an application form."""

    id: str
    name: str
    label: str
    input_kind: InputKind = Field(
        default=InputKind.TEXT,
        validation_alias=AliasChoices("input_kind", "type", "inputKind"),
    )
    required: bool = Field(
        default=False,
        validation_alias=AliasChoices("required", "is_required"),
    )
    sort_order: int = Field(
        default=0,
        validation_alias=AliasChoices("sort_order", "order", "sortOrder"),
    )
    placeholder: str | None = None
    options: list[FieldOption] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FormDefinition(BaseModel):
    """The descriptor set attached to one job posting."""

    job_id: str | None = None
    fields: list[FieldDescriptor] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"fields": data}
        return data

    @field_validator("job_id", mode="before")
    @classmethod
    def _coerce_job_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "FormDefinition":
        seen: set[str] = set()
        for descriptor in self.fields:
            if descriptor.name in seen:
                raise ValueError(f"Duplicate field name: {descriptor.name!r}")
            seen.add(descriptor.name)
            if descriptor.input_kind.has_options and not descriptor.options:
                raise ValueError(
                    f"Field {descriptor.name!r} of kind {descriptor.input_kind.value} needs options"
                )
        return self

    def ordered_fields(self) -> list[FieldDescriptor]:
        return order_fields(self.fields)

    def field_by_name(self, name: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None


def order_fields(fields: list[FieldDescriptor]) -> list[FieldDescriptor]:
    """Sort descriptors by sort_order; ties keep insertion order."""
    return sorted(fields, key=lambda descriptor: descriptor.sort_order)


def empty_value(kind: InputKind) -> AnswerValue:
    return False if kind is InputKind.CHECKBOX else ""


def coerce_answer(kind: InputKind, raw: Any) -> AnswerValue:
    """Normalize a raw answer to the value type its kind carries."""
    if kind is InputKind.CHECKBOX:
        if isinstance(raw, str):
            return raw.strip().lower() in _TRUTHY
        return bool(raw)
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)
