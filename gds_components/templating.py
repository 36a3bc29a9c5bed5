"""
Jinja2 rendering for the components.

Everything interpolated into component templates is escaped unless it is
already ``Markup``.  Hint and label HTML must be wrapped with ``trusted()`` (or
passed as ``Markup``) to be emitted raw.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined
from markupsafe import Markup

from utils.patterns import ATTRIBUTE_NAME

_env = Environment(
    loader=PackageLoader("gds_components", "templates"),
    autoescape=True,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)


def get_environment() -> Environment:
    return _env


def render(template_name: str, **context: Any) -> Markup:
    """Render a component template and mark the result safe."""
    return Markup(_env.get_template(template_name).render(**context).strip())


def trusted(html: str | None) -> Markup | None:
    """Mark caller-supplied HTML (hints, rich labels) as safe to emit raw."""
    if html is None:
        return None
    return Markup(html)


def attributes(attrs: Mapping[str, Any] | None) -> Markup:
    """Render *attrs* as ``key="value"`` pairs, each prefixed by a space.

    ``None`` and empty-string values are dropped; ``True`` renders as
    ``key="key"``; ``False`` is dropped.  Keys must be valid attribute names.
    """
    if not attrs:
        return Markup("")
    parts = []
    for key, value in attrs.items():
        if not ATTRIBUTE_NAME.match(key):
            raise ValueError(f"Invalid HTML attribute name: {key!r}")
        if value is None or value is False or value == "":
            continue
        if value is True:
            value = key
        parts.append(Markup(' {}="{}"').format(Markup(key), value))
    return Markup("").join(parts)


def css_classes(*classes: str | None, **conditional: bool) -> str:
    """Join CSS classes, skipping blanks; keyword classes are kept when truthy.

    Keyword names use ``__`` for ``--`` so modifiers can be passed directly::

        css_classes("govuk-input", govuk_input__error=True)  # "govuk-input govuk-input--error"
    """
    names = [c.strip() for c in classes if c and c.strip()]
    names.extend(
        key.replace("__", "--").replace("_", "-")
        for key, enabled in conditional.items() if enabled
    )
    return " ".join(names)


def _error_filter(entry, validation_message=None) -> Markup:
    from gds_components.model_state import govuk_error_html
    return govuk_error_html(entry, validation_message)


def register_components(env: Environment) -> Environment:
    """Install the component helpers as globals on a page-template environment.

    Page authors then write::

        {{ gds_input(for_=bind(form, "email"), model_state=errors, label_text="Email") }}
    """
    from gds_components import (
        Autocomplete,
        CharacterCountTextarea,
        CheckboxGroup,
        DateInput,
        RadioGroup,
        Select,
        Textarea,
        TextInput,
    )
    from gds_components.binding import ModelExpression, expression_for

    env.globals.update(
        gds_input=TextInput,
        gds_textarea=Textarea,
        gds_character_count=CharacterCountTextarea,
        gds_select=Select,
        gds_radios=RadioGroup,
        gds_checkboxes=CheckboxGroup,
        gds_date_input=DateInput,
        gds_autocomplete=Autocomplete,
        bind=expression_for,
        model_expression=ModelExpression,
        trusted=trusted,
    )
    env.filters["govuk_error"] = _error_filter
    return env
