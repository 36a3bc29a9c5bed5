"""
Options for choice components and the explicit projection used for
composite checkbox lists.

Composite lists (a list of domain objects, each rendered as one checkbox with
hidden companion fields) are mapped through a caller-supplied projector
function instead of looking properties up by name at runtime::

    def project_role(role: Role) -> OptionProjection:
        return OptionProjection(
            value="true",
            label=role.display_name,
            checked=role.is_selected,
            hidden_fields={"Id": role.id, "Name": role.name},
        )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, Field

from gds_components.errors import MissingBindingError

T = TypeVar("T")


class GdsOption(BaseModel):
    """A single option of a radio group, checkbox group or select."""

    value: str = Field(..., description="Submitted value", examples=["email"])
    label: str = Field(..., description="Text shown to the user", examples=["Email"])


@dataclass(frozen=True)
class OptionProjection:
    """What one composite list item looks like once rendered."""

    value: str
    label: str
    checked: bool = False
    hidden_fields: Mapping[str, Any] = field(default_factory=dict)


def _to_option(item: Any) -> GdsOption:
    if isinstance(item, GdsOption):
        return item
    if isinstance(item, str):
        return GdsOption(value=item, label=item)
    if isinstance(item, Mapping):
        return GdsOption(value=str(item["value"]), label=str(item.get("label", item["value"])))
    if isinstance(item, tuple) and len(item) == 2:
        return GdsOption(value=str(item[0]), label=str(item[1]))
    raise TypeError(f"Cannot build an option from {type(item).__name__}")


def options_from(items: Iterable[Any] | None, component: str = "component") -> list[GdsOption]:
    """Normalise *items* into ``GdsOption`` instances.

    Accepts ``GdsOption``, plain strings (value == label), ``(value, label)``
    tuples and ``{"value": ..., "label": ...}`` mappings.  ``None`` is a
    programmer error.
    """
    if items is None:
        raise MissingBindingError(f"{component} requires an option list")
    return [_to_option(item) for item in items]


def project(items: Iterable[T], projector: Callable[[T], OptionProjection]) -> list[OptionProjection]:
    """Apply *projector* to every item, checking it returns ``OptionProjection``."""
    projections = []
    for index, item in enumerate(items):
        result = projector(item)
        if not isinstance(result, OptionProjection):
            raise TypeError(
                f"Projector returned {type(result).__name__} for item {index}; "
                "expected OptionProjection"
            )
        projections.append(result)
    return projections
