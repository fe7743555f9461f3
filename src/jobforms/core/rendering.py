"\"\"\"Per-kind control rendering for application forms.\"\"\""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping

from jinja2 import Environment, select_autoescape
from markupsafe import Markup

from ..schemas import AnswerValue, FieldDescriptor, InputKind, order_fields


@dataclass
class RenderingSettings:
    """Captions and size hints used when rendering controls."""

    textarea_rows: int = 5
    checkbox_caption: str = "Check this box"
    submit_label: str = "Submit Application"
    submitting_label: str = "Submitting Application..."


@dataclass(slots=True)
class Choice:
    """One selectable entry of a select or radio control."""

    value: str
    label: str
    selected: bool = False


@dataclass(slots=True)
class Control:
    """Renderable description of one form field."""

    field_id: str
    name: str
    label: str
    kind: InputKind
    widget: str
    input_type: str | None
    required: bool
    value: AnswerValue
    placeholder: str | None = None
    choices: list[Choice] = field(default_factory=list)
    rows: int | None = None
    caption: str | None = None
    error: str | None = None
    disabled: bool = False


_SINGLE_LINE_TYPES: dict[InputKind, str] = {
    InputKind.TEXT: "text",
    InputKind.EMAIL: "email",
    InputKind.PHONE: "tel",
    InputKind.DATE: "date",
}


class ControlRenderer:
    """Turn descriptors plus current answers into ordered controls."""

    def __init__(self, *, settings: RenderingSettings | None = None) -> None:
        self._settings = settings or RenderingSettings()
        self._builders: dict[InputKind, Callable[[FieldDescriptor, AnswerValue], Control]] = {
            InputKind.TEXT: self._single_line,
            InputKind.EMAIL: self._single_line,
            InputKind.PHONE: self._single_line,
            InputKind.DATE: self._single_line,
            InputKind.TEXTAREA: self._textarea,
            InputKind.SELECT: self._select,
            InputKind.FILE: self._file,
            InputKind.RADIO: self._radio,
            InputKind.CHECKBOX: self._checkbox,
        }

    @property
    def settings(self) -> RenderingSettings:
        return self._settings

    def render(
        self,
        fields: Iterable[FieldDescriptor],
        answers: Mapping[str, AnswerValue],
        errors: Mapping[str, str] | None = None,
        *,
        is_loading: bool = False,
    ) -> list[Control]:
        errors = errors or {}
        controls: list[Control] = []
        for descriptor in order_fields(list(fields)):
            value = answers.get(descriptor.name, "")
            control = self._builders[descriptor.input_kind](descriptor, value)
            control.error = errors.get(descriptor.name)
            control.disabled = is_loading
            controls.append(control)
        return controls

    def _base(self, descriptor: FieldDescriptor, value: AnswerValue, **extra) -> Control:
        return Control(
            field_id=descriptor.id,
            name=descriptor.name,
            label=descriptor.label,
            kind=descriptor.input_kind,
            required=descriptor.required,
            value=value,
            **extra,
        )

    def _single_line(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        # Date inputs carry no hint text.
        placeholder = None if descriptor.input_kind is InputKind.DATE else descriptor.placeholder
        return self._base(
            descriptor,
            _text(value),
            widget="input",
            input_type=_SINGLE_LINE_TYPES[descriptor.input_kind],
            placeholder=placeholder,
        )

    def _textarea(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        return self._base(
            descriptor,
            _text(value),
            widget="textarea",
            input_type=None,
            placeholder=descriptor.placeholder,
            rows=self._settings.textarea_rows,
        )

    def _select(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        current = _text(value)
        choices = [Choice(value="", label=f"Select {descriptor.label}", selected=current == "")]
        choices.extend(
            Choice(value=option.value, label=option.label, selected=option.value == current)
            for option in descriptor.options
        )
        return self._base(descriptor, current, widget="select", input_type=None, choices=choices)

    def _file(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        current = _text(value)
        return self._base(
            descriptor,
            current,
            widget="file",
            input_type="file",
            caption=f"Selected: {current}" if current else "Click to upload or drag and drop",
        )

    def _radio(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        current = _text(value)
        choices = [
            Choice(value=option.value, label=option.label, selected=option.value == current)
            for option in descriptor.options
        ]
        return self._base(descriptor, current, widget="radio", input_type="radio", choices=choices)

    def _checkbox(self, descriptor: FieldDescriptor, value: AnswerValue) -> Control:
        return self._base(
            descriptor,
            bool(value),
            widget="checkbox",
            input_type="checkbox",
            caption=descriptor.placeholder or self._settings.checkbox_caption,
        )


def _text(value: AnswerValue) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    return str(value)


FORM_TEMPLATE = """\
<form class="application-form" method="post" enctype="multipart/form-data">
{%- if banner %}
  <div class="form-banner" role="alert">{{ banner }}</div>
{%- endif %}
{%- for control in controls %}
  <div class="form-field" data-field-id="{{ control.field_id }}">
  {%- if control.widget != "checkbox" %}
    <label for="{{ control.name }}">{{ control.label }}{% if control.required %}<span class="required">*</span>{% endif %}</label>
  {%- else %}
    <span class="field-label">{{ control.label }}{% if control.required %}<span class="required">*</span>{% endif %}</span>
  {%- endif %}
  {%- if control.widget == "input" %}
    <input id="{{ control.name }}" name="{{ control.name }}" type="{{ control.input_type }}" value="{{ control.value }}"
      {%- if control.placeholder %} placeholder="{{ control.placeholder }}"{% endif %}{{ attrs(control) }}>
  {%- elif control.widget == "textarea" %}
    <textarea id="{{ control.name }}" name="{{ control.name }}" rows="{{ control.rows }}"
      {%- if control.placeholder %} placeholder="{{ control.placeholder }}"{% endif %}{{ attrs(control) }}>{{ control.value }}</textarea>
  {%- elif control.widget == "select" %}
    <select id="{{ control.name }}" name="{{ control.name }}"{{ attrs(control) }}>
    {%- for choice in control.choices %}
      <option value="{{ choice.value }}"{% if choice.selected %} selected{% endif %}>{{ choice.label }}</option>
    {%- endfor %}
    </select>
  {%- elif control.widget == "file" %}
    <label class="file-drop"><input id="{{ control.name }}" name="{{ control.name }}" type="file"{{ attrs(control) }}>{{ control.caption }}</label>
  {%- elif control.widget == "radio" %}
    {%- for choice in control.choices %}
    <label><input type="radio" name="{{ control.name }}" value="{{ choice.value }}"{% if choice.selected %} checked{% endif %}{{ attrs(control) }}> {{ choice.label }}</label>
    {%- endfor %}
  {%- elif control.widget == "checkbox" %}
    <input id="{{ control.name }}" name="{{ control.name }}" type="checkbox"{% if control.value %} checked{% endif %}{{ attrs(control) }}>
    <label for="{{ control.name }}">{{ control.caption }}</label>
  {%- endif %}
  {%- if control.error %}
    <p class="field-error">{{ control.error }}</p>
  {%- endif %}
  </div>
{%- endfor %}
  <button type="submit"{% if is_loading %} disabled{% endif %}>{{ submit_label }}</button>
</form>
"""


def _control_attrs(control: Control) -> Markup:
    parts = []
    if control.disabled:
        parts.append(" disabled")
    if control.error:
        parts.append(' aria-invalid="true"')
    return Markup("".join(parts))


class HtmlFormRenderer:
    """Render controls to an escaped HTML fragment."""

    def __init__(
        self,
        *,
        controls: ControlRenderer | None = None,
        template: str = FORM_TEMPLATE,
    ) -> None:
        self._controls = controls or ControlRenderer()
        self._env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
        self._env.globals["attrs"] = _control_attrs
        self._template = self._env.from_string(template)

    def render(
        self,
        fields: Iterable[FieldDescriptor],
        answers: Mapping[str, AnswerValue],
        errors: Mapping[str, str] | None = None,
        *,
        banner: str | None = None,
        is_loading: bool = False,
    ) -> str:
        settings = self._controls.settings
        controls = self._controls.render(fields, answers, errors, is_loading=is_loading)
        return self._template.render(
            controls=controls,
            banner=banner,
            is_loading=is_loading,
            submit_label=settings.submitting_label if is_loading else settings.submit_label,
        )
