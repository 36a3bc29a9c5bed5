"""
Single-line text input and day/month/year date input components.
"""

from __future__ import annotations

from typing import Any

from gds_components.base import FieldComponent
from gds_components.errors import MissingBindingError
from gds_components.templating import attributes, css_classes
from utils.strings import parse_month

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class TextInput(FieldComponent):
    """GOV.UK text input.

    Args:
        width_class: Width modifier (default ``govuk-!-width-one-half``).
        input_type: ``type`` attribute (default ``text``).
        autocomplete: Browser autofill token, e.g. ``email``.
        placeholder: Placeholder text.
        conditional_class: Extra class placed on the input and exposed on the
            container as ``conditional-class`` for conditional display scripts.

    Remaining arguments are documented on ``FieldComponent``.
    """

    template_name = "input.html"

    def __init__(
        self,
        for_=None,
        *,
        width_class: str = "govuk-!-width-one-half",
        input_type: str = "text",
        autocomplete: str | None = None,
        placeholder: str | None = None,
        conditional_class: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        self.width_class = width_class
        self.input_type = input_type
        self.autocomplete = autocomplete
        self.placeholder = placeholder
        self.conditional_class = conditional_class

    def container_attributes(self) -> dict[str, Any]:
        attrs = super().container_attributes()
        if self.conditional_class and self.conditional_class.strip():
            attrs["conditional-class"] = self.conditional_class
        return attrs

    @property
    def input_class(self) -> str:
        return css_classes(
            "govuk-input",
            self.width_class,
            self.conditional_class,
            "govuk-input--error" if self.has_error else None,
        )

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        described_by = self.described_by_id if (self.has_hint or self.label_aria_describedby) else None
        extra = self.control_attributes(
            autocomplete=self.autocomplete,
            placeholder=self.placeholder,
        )
        extra.setdefault("aria-describedby", described_by)
        if self.has_error:
            extra.setdefault("aria-invalid", "true")
        context.update(
            input_class=self.input_class,
            input_type=self.input_type,
            value=self.for_.as_text(),
            control_attrs=attributes(extra),
        )
        return context


class DateInput(FieldComponent):
    """GOV.UK date input made of separate day, month and year controls.

    The bind target names the date as a whole (errors are looked up under it);
    each part carries its own submitted name and value.

    Args:
        day_name / month_name / year_name: ``name`` and ``id`` of each part.
        day_value / month_value / year_value: Pre-filled part values.
        month_as_dropdown: Render the month as a ``<select>`` of month names
            (default ``True``).  Numeric values such as ``"03"`` select March.
    """

    template_name = "date_input.html"

    def __init__(
        self,
        for_=None,
        *,
        day_name: str | None = None,
        month_name: str | None = None,
        year_name: str | None = None,
        day_value: str | int | None = None,
        month_value: str | int | None = None,
        year_value: str | int | None = None,
        month_as_dropdown: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        name = self.property_name
        self.day_name = day_name or f"{name}.Day"
        self.month_name = month_name or f"{name}.Month"
        self.year_name = year_name or f"{name}.Year"
        for part in (self.day_name, self.month_name, self.year_name):
            if not part.strip():
                raise MissingBindingError("DateInput part names must not be blank")
        self.day_value = day_value
        self.month_value = month_value
        self.year_value = year_value
        self.month_as_dropdown = month_as_dropdown

    def container_attributes(self) -> dict[str, Any]:
        attrs = super().container_attributes()
        attrs.setdefault("id", self.property_name)
        return attrs

    @staticmethod
    def _text(value) -> str:
        return "" if value is None else str(value)

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        context.update(
            first_part=self.day_name,
            day_name=self.day_name,
            month_name=self.month_name,
            year_name=self.year_name,
            day_value=self._text(self.day_value),
            month_value=self._text(self.month_value),
            year_value=self._text(self.year_value),
            month_as_dropdown=self.month_as_dropdown,
            months=list(enumerate(MONTHS, start=1)),
            selected_month=parse_month(self.month_value),
        )
        return context
