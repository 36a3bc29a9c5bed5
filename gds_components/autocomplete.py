"""
Server-side half of the autocomplete field.

Renders a plain text input that works without script, plus the container and
inline script that upgrade it to an accessible autocomplete.  The plain input
doubles as the hidden submission field once the client takes over, so its id
and name are the bound property's.
"""

from __future__ import annotations

from typing import Any

from gds_components.base import FieldComponent
from gds_components.client import MIN_QUERY_LENGTH, FieldBinding
from gds_components.errors import MissingBindingError
from gds_components.templating import attributes, css_classes


class Autocomplete(FieldComponent):
    """GOV.UK autocomplete input.

    Args:
        api_url: Lookup endpoint queried with ``?name=<query>`` (required).
        width_class: Width modifier (default ``govuk-!-width-three-quarters``).
        display_name: Initial text shown in the enhanced input when the bound
            value is an id rather than a display label.
        enabled_flag_id: Id/name of a hidden input the script sets to
            ``true``, so the server can tell the enhanced control was used.
    """

    template_name = "autocomplete.html"

    def __init__(
        self,
        for_=None,
        *,
        api_url: str | None = None,
        width_class: str = "govuk-!-width-three-quarters",
        display_name: str | None = None,
        enabled_flag_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        if not api_url or not api_url.strip():
            raise MissingBindingError(f"Autocomplete {self.property_name!r} requires api_url")
        self.api_url = api_url
        self.width_class = width_class
        self.display_name = display_name
        self.enabled_flag_id = enabled_flag_id

    @property
    def autocomplete_id(self) -> str:
        return f"{self.resolved_field_id}_autocomplete"

    @property
    def container_id(self) -> str:
        return f"{self.resolved_field_id}_autocomplete_container"

    def binding(self) -> FieldBinding:
        value = self.for_.as_text()
        return FieldBinding(
            input_id=self.autocomplete_id,
            submission_id=self.resolved_field_id,
            container_id=self.container_id,
            lookup_url=self.api_url,
            default_value=self.display_name if self.display_name is not None else value,
            submission_value=value,
        )

    def script_config(self) -> dict[str, Any]:
        config: dict[str, Any] = self.binding().to_dict()
        config.update(
            enabledFlagId=self.enabled_flag_id or "",
            widthClass=self.width_class,
            minLength=MIN_QUERY_LENGTH,
            describedBy=self.described_by_id if (self.has_hint or self.label_aria_describedby) else "",
        )
        return config

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        extra = self.control_attributes()
        if self.has_hint or self.label_aria_describedby:
            extra.setdefault("aria-describedby", self.described_by_id)
        context.update(
            autocomplete_id=self.autocomplete_id,
            container_id=self.container_id,
            input_class=css_classes(
                "govuk-input",
                self.width_class,
                "govuk-input--error" if self.has_error else None,
            ),
            value=self.for_.as_text(),
            enabled_flag_id=self.enabled_flag_id,
            control_attrs=attributes(extra),
            config=self.script_config(),
        )
        return context
