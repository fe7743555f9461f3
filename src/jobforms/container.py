"\"\"\"Dependency injection container for the form engine.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    BuilderConfig,
    ControlRenderer,
    EmailRule,
    FormBuilder,
    FormSession,
    FormValidator,
    HtmlFormRenderer,
    PhoneRule,
    RenderingSettings,
    RequiredRule,
    SessionMessages,
)
from .core.prefill import DEFAULT_PREFILL_RULES
from .core.rules.email import EmailConfig
from .core.rules.phone import PhoneConfig
from .core.rules.required import RequiredConfig
from .loaders import FormLoader


class FormsContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    required_rule = providers.Singleton(RequiredRule)
    email_rule = providers.Singleton(EmailRule)
    phone_rule = providers.Singleton(PhoneRule)

    rules = providers.List(
        required_rule,
        email_rule,
        phone_rule,
    )

    validator = providers.Singleton(FormValidator, rules=rules)

    rendering_settings = providers.Singleton(RenderingSettings)
    control_renderer = providers.Singleton(ControlRenderer, settings=rendering_settings)
    html_renderer = providers.Singleton(HtmlFormRenderer, controls=control_renderer)

    session_messages = providers.Singleton(SessionMessages)
    builder_config = providers.Singleton(BuilderConfig)

    form_loader = providers.Singleton(FormLoader)

    session = providers.Factory(
        FormSession,
        validator=validator,
        renderer=control_renderer,
        prefill_rules=providers.Object(DEFAULT_PREFILL_RULES),
        messages=session_messages,
    )

    builder = providers.Factory(FormBuilder, config=builder_config)


def create_container(*, settings: dict | None = None) -> FormsContainer:
    """Instantiate container with optional overrides."""

    container = FormsContainer()

    if not settings:
        return container

    messages = settings.get("messages", {}) if isinstance(settings, dict) else {}

    if "required" in messages:
        container.required_rule.override(
            providers.Singleton(RequiredRule, config=RequiredConfig(message=messages["required"]))
        )

    if "email" in messages:
        container.email_rule.override(
            providers.Singleton(EmailRule, config=EmailConfig(message=messages["email"]))
        )

    if "phone" in messages:
        container.phone_rule.override(
            providers.Singleton(PhoneRule, config=PhoneConfig(message=messages["phone"]))
        )

    banner_settings = {
        key: messages[key]
        for key in ("validation_banner", "submit_fallback")
        if key in messages
    }
    if banner_settings:
        container.session_messages.override(
            providers.Singleton(SessionMessages, **banner_settings)
        )

    rendering = settings.get("rendering", {}) if isinstance(settings, dict) else {}
    if rendering:
        container.rendering_settings.override(
            providers.Singleton(RenderingSettings, **rendering)
        )

    builder = settings.get("builder", {}) if isinstance(settings, dict) else {}
    if builder:
        container.builder_config.override(providers.Singleton(BuilderConfig, **builder))

    return container
