"""
Bind targets for the components.

A ``ModelExpression`` carries what a component needs from the page model:
the bound property's name (used for ``name``, default ``id`` and the
validation-error key) and its current value.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from gds_components.errors import MissingBindingError
from utils.strings import field_id_from_name


@dataclass(frozen=True)
class ModelExpression:
    """Name and current value of a bound model property."""

    name: str
    model: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise MissingBindingError("A bind target needs a non-empty property name")

    @property
    def field_id(self) -> str:
        return field_id_from_name(self.name)

    @property
    def is_enumerable(self) -> bool:
        return isinstance(self.model, Iterable) and not isinstance(self.model, (str, bytes, Mapping, BaseModel))

    def as_text(self) -> str:
        """Scalar value as submitted text (``None`` → ``""``, booleans lowercase)."""
        value = self.model
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, enum.Enum):
            return str(value.value)
        return str(value)

    def as_list(self) -> list[Any]:
        """Value as a list: ``None`` → ``[]``, scalars → ``[value]``."""
        if self.model is None:
            return []
        if self.is_enumerable:
            return list(self.model)
        return [self.model]


def require_binding(for_: ModelExpression | None, component: str) -> ModelExpression:
    """Fail fast when a component is built without a bind target."""
    if for_ is None:
        raise MissingBindingError(f"{component} requires a bind target (for_)")
    if not isinstance(for_, ModelExpression):
        raise TypeError(f"{component}.for_ must be a ModelExpression, got {type(for_).__name__}")
    return for_


def _step(obj: Any, part: str) -> Any:
    if isinstance(obj, Mapping):
        if part not in obj:
            raise MissingBindingError(f"Model has no key {part!r}")
        return obj[part]
    if isinstance(obj, BaseModel) or dataclasses.is_dataclass(obj) or hasattr(obj, part):
        try:
            return getattr(obj, part)
        except AttributeError as exc:
            raise MissingBindingError(f"Model has no attribute {part!r}") from exc
    raise MissingBindingError(f"Cannot resolve {part!r} on {type(obj).__name__}")


def expression_for(model: Any, path: str, name: str | None = None) -> ModelExpression:
    """Resolve a dotted *path* on *model* into a ``ModelExpression``.

    Works with pydantic models, dataclasses, plain objects and mappings.
    *name* overrides the bound name (defaults to *path*).

    Example::

        expression_for(form, "address.town")  # ModelExpression("address.town", form.address.town)
    """
    if model is None:
        raise MissingBindingError("Cannot bind to a missing model")
    value = model
    for part in path.split("."):
        if value is None:
            break
        value = _step(value, part)
    return ModelExpression(name or path, value)
