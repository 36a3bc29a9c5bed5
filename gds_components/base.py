"""
Shared behaviour for the GOV.UK form components.

Every component wraps its control in a ``govuk-form-group`` container and
shares the same vocabulary for labels, hints, validation errors, conditional
display and extra attributes.  Subclasses supply a template name and the
control-specific context.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from markupsafe import Markup, escape

from gds_components.binding import ModelExpression, require_binding
from gds_components.model_state import ModelState, ModelStateEntry, govuk_error_html
from gds_components.templating import attributes, css_classes, render

FORM_GROUP_CLASS = "govuk-form-group"
FORM_GROUP_ERROR_CLASS = "govuk-form-group--error"
CONDITIONAL_FIELD_CLASS = "conditional-field"


class FieldComponent:
    """Base class for components bound to a single model property.

    Args:
        for_: The bind target (required).
        model_state: Validation errors for the page; empty when omitted.
        label_text: Label text; defaults to the property name.  Escaped.
        hint_html: Hint content.  Plain strings are escaped; pass ``Markup`` or
            ``trusted(...)`` for raw HTML.
        hint_id: Id of the hint element (default ``<field id>-hint``).
        label_aria_describedby: Explicit ``aria-describedby`` target.
        validation_message: Replaces the recorded error messages when the
            field has errors.  Plain text.
        error_key: Look errors up under this key instead of the property name.
        field_id: Override for the control's id.
        html_id: Id for the outer form-group container.
        conditional: Marks the container with ``conditional-field``.
        data_parents: Parent question ids for conditional display scripts.
        data_question_id: This question's id for conditional display scripts.
        readonly: Render the control readonly.
        disabled: Render the control disabled.
        additional_attributes: Extra control attributes; override defaults.
    """

    template_name = ""

    def __init__(
        self,
        for_: ModelExpression | None = None,
        *,
        model_state: ModelState | None = None,
        label_text: str | None = None,
        hint_html: str | Markup | None = None,
        hint_id: str | None = None,
        label_aria_describedby: str | None = None,
        validation_message: str | None = None,
        error_key: str | None = None,
        field_id: str | None = None,
        html_id: str | None = None,
        conditional: bool = False,
        data_parents: str | None = None,
        data_question_id: str | None = None,
        readonly: bool = False,
        disabled: bool = False,
        additional_attributes: Mapping[str, str] | None = None,
    ) -> None:
        self.for_ = require_binding(for_, type(self).__name__)
        self.model_state = model_state if model_state is not None else ModelState()
        self.label_text = label_text
        self.hint_html = hint_html
        self.hint_id = hint_id
        self.label_aria_describedby = label_aria_describedby
        self.validation_message = validation_message
        self.error_key = error_key
        self.field_id = field_id
        self.html_id = html_id
        self.conditional = conditional
        self.data_parents = data_parents
        self.data_question_id = data_question_id
        self.readonly = readonly
        self.disabled = disabled
        self.additional_attributes = dict(additional_attributes or {})

    # ── Naming ───────────────────────────────────────────────────────────────

    @property
    def property_name(self) -> str:
        return self.for_.name

    @property
    def resolved_field_id(self) -> str:
        return self.field_id or self.for_.field_id

    @property
    def error_lookup_key(self) -> str:
        return self.error_key or self.property_name

    @property
    def label(self) -> str:
        return self.label_text if self.label_text is not None else self.property_name

    # ── Validation ───────────────────────────────────────────────────────────

    def entry(self, key: str | None = None) -> ModelStateEntry | None:
        return self.model_state.get(key or self.error_lookup_key)

    @property
    def has_error(self) -> bool:
        return self.model_state.has_errors(self.error_lookup_key)

    @property
    def error_html(self) -> Markup:
        if not self.has_error:
            return Markup("")
        return govuk_error_html(self.entry(), self.validation_message)

    # ── Hint ─────────────────────────────────────────────────────────────────

    @property
    def has_hint(self) -> bool:
        return self.hint_html is not None and str(self.hint_html).strip() != ""

    @property
    def hint_html_markup(self) -> Markup:
        """The hint as markup: ``Markup`` passes through, plain text is escaped."""
        if not self.has_hint:
            return Markup("")
        return escape(self.hint_html)

    @property
    def described_by_id(self) -> str:
        return self.label_aria_describedby or self.hint_id or f"{self.resolved_field_id}-hint"

    @property
    def hint_element_id(self) -> str:
        return self.hint_id or f"{self.resolved_field_id}-hint"

    # ── Container ────────────────────────────────────────────────────────────

    def form_group_class(self, *extra: str) -> str:
        return css_classes(
            FORM_GROUP_CLASS,
            *extra,
            CONDITIONAL_FIELD_CLASS if self.conditional else None,
            FORM_GROUP_ERROR_CLASS if self.has_error else None,
        )

    def container_attributes(self) -> dict[str, Any]:
        attrs: dict[str, Any] = {"class": self.form_group_class()}
        if self.html_id and self.html_id.strip():
            attrs["id"] = self.html_id
        if self.data_parents and self.data_parents.strip():
            attrs["data-parents"] = self.data_parents
        if self.data_question_id and self.data_question_id.strip():
            attrs["data-questionId"] = self.data_question_id
        return attrs

    # ── Control ──────────────────────────────────────────────────────────────

    def control_attributes(self, **defaults: Any) -> dict[str, Any]:
        """Extra control attributes: *defaults* first, then readonly/disabled, then
        ``additional_attributes`` (which win on key clashes)."""
        attrs: dict[str, Any] = dict(defaults)
        if self.readonly:
            attrs["readonly"] = "readonly"
        if self.disabled:
            attrs["disabled"] = "disabled"
        attrs.update(self.additional_attributes)
        return attrs

    # ── Rendering ────────────────────────────────────────────────────────────

    def get_context(self) -> dict[str, Any]:
        return {
            "c": self,
            "container_attrs": attributes(self.container_attributes()),
            "label": self.label,
            "field_id": self.resolved_field_id,
            "name": self.property_name,
            "hint": self.hint_html_markup if self.has_hint else None,
            "hint_id": self.hint_element_id,
            "described_by": self.described_by_id,
            "error_html": self.error_html,
            "has_error": self.has_error,
        }

    def render(self) -> Markup:
        if not self.template_name:
            raise NotImplementedError(f"{type(self).__name__} does not define a template")
        return render(self.template_name, **self.get_context())

    def __html__(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return str(self.render())
