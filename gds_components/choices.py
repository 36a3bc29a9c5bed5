"""
Select dropdown, radio group and checkbox group components.

Selection matching is case-insensitive and ignores surrounding whitespace, so
a model value of ``" email "`` selects the option whose value is ``"Email"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from gds_components.base import FieldComponent
from gds_components.binding import ModelExpression
from gds_components.errors import MissingBindingError
from gds_components.options import GdsOption, OptionProjection, options_from, project
from gds_components.templating import attributes, css_classes
from utils.strings import option_id


def _matches(selected: Any, value: str) -> bool:
    if selected is None:
        return False
    return str(selected).strip().casefold() == value.strip().casefold()


class Select(FieldComponent):
    """GOV.UK select dropdown.

    Args:
        options: Options to list (required).
        include_default_option: Prepend a disabled prompt option (default ``True``),
            selected while the model has no value.
        default_option_text: Prompt text (default ``Please select...``).
    """

    template_name = "select.html"

    def __init__(
        self,
        for_=None,
        *,
        options: Iterable[Any] | None = None,
        include_default_option: bool = True,
        default_option_text: str = "Please select...",
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        self.options: list[GdsOption] = options_from(options, "Select")
        self.include_default_option = include_default_option
        self.default_option_text = default_option_text

    @property
    def selected_value(self) -> str:
        return self.for_.as_text()

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        selected = self.selected_value
        extra = self.control_attributes()
        if self.has_error:
            extra.setdefault("aria-invalid", "true")
        context.update(
            select_class=css_classes("govuk-select", "govuk-select--error" if self.has_error else None),
            selected_value=selected,
            include_default_option=self.include_default_option,
            default_option_text=self.default_option_text,
            control_attrs=attributes(extra),
            options=[
                {
                    "id": option_id(self.property_name, o.value),
                    "value": o.value,
                    "label": o.label,
                    "selected": _matches(selected, o.value),
                }
                for o in self.options
            ],
        )
        return context


class RadioGroup(FieldComponent):
    """GOV.UK radio group inside a fieldset.

    A list-valued model selects its first item.

    Args:
        options: Options to render (required).
        conditional_reveals: Option value → id of the element revealed when
            that option is chosen (``data-aria-controls``).
        inline: Lay the radios out horizontally.
    """

    template_name = "radios.html"

    def __init__(
        self,
        for_=None,
        *,
        options: Iterable[Any] | None = None,
        conditional_reveals: dict[str, str] | None = None,
        inline: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        self.options: list[GdsOption] = options_from(options, "RadioGroup")
        self.conditional_reveals = dict(conditional_reveals or {})
        self.inline = inline

    def container_attributes(self) -> dict[str, Any]:
        attrs = super().container_attributes()
        attrs.setdefault("id", self.property_name)
        return attrs

    @property
    def selected_value(self) -> Any:
        if self.for_.is_enumerable:
            values = self.for_.as_list()
            return values[0] if values else None
        return self.for_.model

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        selected = self.selected_value
        if selected is not None and not isinstance(selected, str):
            selected = ModelExpression(self.property_name, selected).as_text()
        context.update(
            radios_class=css_classes("govuk-radios", "govuk-radios--inline" if self.inline else None),
            control_attrs=attributes(self.control_attributes()),
            options=[
                {
                    "id": option_id(self.property_name, o.value),
                    "value": o.value,
                    "label": o.label,
                    "checked": _matches(selected, o.value),
                    "reveal": self.conditional_reveals.get(o.value),
                }
                for o in self.options
            ],
        )
        return context


class CheckboxGroup(FieldComponent):
    """GOV.UK checkbox group.

    Two modes:

    * **Simple** — ``options`` lists the choices; the model is the list of
      checked values.
    * **Composite** — the model is a list of domain objects and ``projector``
      maps each one to an ``OptionProjection``.  Each item submits
      ``<name>[<i>].<item_value_property>`` plus one hidden field per entry in
      ``hidden_fields`` (``<name>[<i>].<field>``) so the list round-trips.

    Args:
        options: Simple-mode options.
        projector: Composite-mode mapping function.
        item_value_property: Name of the per-item boolean the checkbox binds to
            (composite mode, default ``Selected``).
        label_css_class: Extra class for every checkbox label.
    """

    template_name = "checkboxes.html"

    def __init__(
        self,
        for_=None,
        *,
        options: Iterable[Any] | None = None,
        projector: Callable[[Any], OptionProjection] | None = None,
        item_value_property: str = "Selected",
        label_css_class: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        if options is None and projector is None:
            raise MissingBindingError("CheckboxGroup requires options or a projector")
        if options is not None and projector is not None:
            raise ValueError("CheckboxGroup takes options or a projector, not both")
        self.options: list[GdsOption] | None = (
            options_from(options, "CheckboxGroup") if options is not None else None
        )
        self.projector = projector
        self.item_value_property = item_value_property
        self.label_css_class = label_css_class

    @property
    def is_composite(self) -> bool:
        return self.projector is not None

    def container_attributes(self) -> dict[str, Any]:
        attrs = super().container_attributes()
        attrs.setdefault("id", self.property_name)
        return attrs

    def _simple_items(self) -> list[dict[str, Any]]:
        selected = [str(v) for v in self.for_.as_list()]
        items = []
        for o in self.options or []:
            items.append({
                "id": option_id(self.property_name, o.value),
                "name": self.property_name,
                "value": o.value,
                "label": o.label,
                "checked": any(_matches(s, o.value) for s in selected),
                "hidden": [],
            })
        return items

    def _composite_items(self) -> list[dict[str, Any]]:
        if self.for_.model is None:
            return []
        if not self.for_.is_enumerable:
            raise MissingBindingError(
                f"CheckboxGroup {self.property_name!r} needs a list model in composite mode"
            )
        name = self.property_name
        prop = self.item_value_property
        items = []
        for index, projection in enumerate(project(self.for_.as_list(), self.projector)):
            hidden = [
                (f"{name}[{index}].{field}", "" if value is None else str(value))
                for field, value in projection.hidden_fields.items()
            ]
            items.append({
                "id": f"{self.for_.field_id}_{index}__{prop}",
                "name": f"{name}[{index}].{prop}",
                "value": projection.value,
                "label": projection.label,
                "checked": projection.checked,
                "hidden": hidden,
            })
        return items

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        context.update(
            items=self._composite_items() if self.is_composite else self._simple_items(),
            item_label_class=css_classes("govuk-label", "govuk-checkboxes__label", self.label_css_class),
            control_attrs=attributes(self.control_attributes()),
        )
        return context
