from __future__ import annotations

import pytest
from pydantic import ValidationError

from jobforms.container import create_container
from jobforms.schemas import FieldDescriptor
from jobforms.schemas.config import AppConfig, load_config


def test_create_container_defaults():
    container = create_container()

    session = container.session([FieldDescriptor(id="1", name="resume", label="Resume", required=True)])

    assert session.validate() is False
    assert session.errors == {"resume": "Resume is required"}
    assert container.builder().add_field().label == "New Field"


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "messages": {
                "required": "{label} cannot be blank",
                "validation_banner": "Fix the highlighted fields",
            },
            "rendering": {"textarea_rows": 8},
            "builder": {"default_label": "Untitled", "strict_labels": False},
        }
    )

    fields = [FieldDescriptor(id="1", name="bio", label="Bio", input_kind="textarea", required=True)]
    session = container.session(fields)
    session.validate()
    controls = container.control_renderer().render(fields, {})
    builder = container.builder()

    assert session.errors == {"bio": "Bio cannot be blank"}
    assert container.session_messages().validation_banner == "Fix the highlighted fields"
    assert container.session_messages().submit_fallback == "Failed to submit application"
    assert controls[0].rows == 8
    assert builder.add_field().label == "Untitled"
    assert container.builder_config().strict_labels is False


def test_load_config_validation():
    data = {
        "messages": {"email": "{label} looks wrong"},
        "rendering": {"checkbox_caption": "Tick to confirm"},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings == {
        "messages": {"email": "{label} looks wrong"},
        "rendering": {"checkbox_caption": "Tick to confirm"},
    }


def test_load_config_rejects_bad_types():
    with pytest.raises(ValidationError):
        load_config({"rendering": {"textarea_rows": "many"}})
    with pytest.raises(ValidationError):
        load_config(["not", "a", "mapping"])
