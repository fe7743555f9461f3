"\"\"\"Admin-side editor for a job's application form descriptors.\"\"\""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import structlog

from ..errors import FieldEditError
from ..schemas import FieldDescriptor, FieldOption, InputKind

ChangeCallback = Callable[[list[FieldDescriptor]], None]

_DRAFT_KEYS = frozenset(
    {"name", "label", "input_kind", "required", "placeholder", "options"}
)


@dataclass
class BuilderConfig:
    """Defaults for newly added fields and save strictness."""

    default_label: str = "New Field"
    name_prefix: str = "field_"
    strict_labels: bool = True


def parse_options_text(text: str) -> list[FieldOption]:
    """One option per non-blank line; value and label are the same string."""
    options: list[FieldOption] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped:
            options.append(FieldOption(value=stripped, label=stripped))
    return options


def options_to_text(options: Iterable[FieldOption]) -> str:
    return "\n".join(option.label for option in options)


def _new_field_id() -> str:
    return f"field-{uuid.uuid4().hex}"


class FormBuilder:
    """Edit an ordered list of field descriptors.

    Every structural change hands the full new list to ``on_change``;
    persisting it is the caller's job.
    """

    def __init__(
        self,
        fields: Iterable[FieldDescriptor] | None = None,
        *,
        on_change: ChangeCallback | None = None,
        config: BuilderConfig | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._fields: list[FieldDescriptor] = list(fields or [])
        self._on_change = on_change
        self._config = config or BuilderConfig()
        self._id_factory = id_factory or _new_field_id
        self._editing_id: str | None = None
        self._draft: dict[str, Any] = {}
        self._logger = structlog.get_logger(__name__)

    @property
    def fields(self) -> list[FieldDescriptor]:
        return list(self._fields)

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    @property
    def draft(self) -> dict[str, Any]:
        return dict(self._draft)

    def add_field(self) -> FieldDescriptor:
        count = len(self._fields)
        taken = {descriptor.name for descriptor in self._fields}
        suffix = count + 1
        while f"{self._config.name_prefix}{suffix}" in taken:
            suffix += 1
        descriptor = FieldDescriptor(
            id=self._id_factory(),
            name=f"{self._config.name_prefix}{suffix}",
            label=self._config.default_label,
            input_kind=InputKind.TEXT,
            required=False,
            sort_order=count,
        )
        self._commit([*self._fields, descriptor])
        self._logger.info("builder.field_added", field_id=descriptor.id, name=descriptor.name)
        return descriptor

    def remove_field(self, field_id: str) -> None:
        remaining = [descriptor for descriptor in self._fields if descriptor.id != field_id]
        if field_id == self._editing_id:
            self.cancel_editing()
        self._commit(remaining)
        self._logger.info(
            "builder.field_removed",
            field_id=field_id,
            removed=len(remaining) != len(self._fields),
        )

    def start_editing(self, descriptor: FieldDescriptor) -> None:
        self._editing_id = descriptor.id
        self._draft = {
            "name": descriptor.name,
            "label": descriptor.label,
            "input_kind": descriptor.input_kind,
            "required": descriptor.required,
            "placeholder": descriptor.placeholder,
            "options": list(descriptor.options),
        }

    def update_draft(self, **changes: Any) -> None:
        if self._editing_id is None:
            raise FieldEditError("<none>", "no field is being edited")
        unknown = set(changes) - _DRAFT_KEYS - {"options_text"}
        if unknown:
            raise FieldEditError(self._editing_id, f"unknown attributes {sorted(unknown)}")
        if "options_text" in changes:
            changes["options"] = parse_options_text(changes.pop("options_text"))
        if changes.get("input_kind"):
            changes["input_kind"] = InputKind(changes["input_kind"])
        self._draft.update(changes)

    def cancel_editing(self) -> None:
        self._editing_id = None
        self._draft = {}

    def save_editing(self) -> FieldDescriptor | None:
        """Merge the draft back into the list by id.

        Returns the saved descriptor, or None when nothing was saved.
        """
        editing_id = self._editing_id
        if editing_id is None:
            return None
        if not self._draft.get("label"):
            if self._config.strict_labels:
                raise FieldEditError(editing_id, "label must not be empty")
            self._logger.info("builder.save_skipped", field_id=editing_id, reason="empty_label")
            return None

        saved: FieldDescriptor | None = None
        updated: list[FieldDescriptor] = []
        for descriptor in self._fields:
            if descriptor.id != editing_id:
                updated.append(descriptor)
                continue
            saved = self._merge(descriptor)
            updated.append(saved)

        if saved is None:
            self.cancel_editing()
            return None

        self._commit(updated)
        self.cancel_editing()
        self._logger.info("builder.field_saved", field_id=saved.id, name=saved.name)
        return saved

    def move_field(self, from_index: int, to_index: int) -> None:
        if to_index < 0 or to_index >= len(self._fields):
            return
        if from_index < 0 or from_index >= len(self._fields):
            return
        reordered = list(self._fields)
        moved = reordered.pop(from_index)
        reordered.insert(to_index, moved)
        renumbered = [
            descriptor.model_copy(update={"sort_order": position})
            for position, descriptor in enumerate(reordered)
        ]
        self._commit(renumbered)

    def move_up(self, index: int) -> None:
        self.move_field(index, index - 1)

    def move_down(self, index: int) -> None:
        self.move_field(index, index + 1)

    def _merge(self, current: FieldDescriptor) -> FieldDescriptor:
        draft = self._draft
        name = draft.get("name") or current.name
        label = draft.get("label") or current.label
        input_kind = InputKind(draft.get("input_kind") or current.input_kind)

        for other in self._fields:
            if other.id != current.id and other.name == name:
                raise FieldEditError(current.id, f"name {name!r} is already used")

        options = list(draft.get("options", current.options))
        if input_kind.has_options:
            if not options:
                raise FieldEditError(
                    current.id, f"{input_kind.value} fields need at least one option"
                )
        else:
            options = []

        return current.model_copy(
            update={
                "name": name,
                "label": label,
                "input_kind": input_kind,
                "required": bool(draft.get("required", current.required)),
                "placeholder": draft.get("placeholder", current.placeholder) or None,
                "options": options,
            }
        )

    def _commit(self, fields: list[FieldDescriptor]) -> None:
        self._fields = fields
        if self._on_change is not None:
            self._on_change(list(fields))
