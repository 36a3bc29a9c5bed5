"""
Validation-error collection consumed by the components.

``ModelState`` is a small stand-in for a web framework's model-state
dictionary: field keys map to entries holding zero or more error messages.
The FastAPI host fills it from a pydantic ``ValidationError``; components
only read it.

Error markup is always escaped.  A caller-supplied override message is plain
text too.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from markupsafe import Markup, escape
from pydantic import ValidationError

ERROR_MESSAGE_CLASS = "govuk-error-message"


@dataclass(frozen=True)
class ModelError:
    """One human-readable validation message."""

    message: str


@dataclass
class ModelStateEntry:
    """All validation errors recorded against one field key."""

    errors: list[ModelError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


class ModelState:
    """Mapping of field key → ``ModelStateEntry``.

    Keys are matched exactly (``Address.Postcode`` and ``address.postcode`` are
    different fields), the same way the bound field names are rendered.
    """

    def __init__(self, errors: dict[str, list[str]] | None = None) -> None:
        self._entries: dict[str, ModelStateEntry] = {}
        for key, messages in (errors or {}).items():
            for message in messages:
                self.add_model_error(key, message)

    def add_model_error(self, key: str, message: str) -> None:
        entry = self._entries.setdefault(key, ModelStateEntry())
        entry.errors.append(ModelError(message))

    def set_entry(self, key: str) -> ModelStateEntry:
        """Register *key* with no errors (a posted field that validated)."""
        return self._entries.setdefault(key, ModelStateEntry())

    def get(self, key: str | None) -> ModelStateEntry | None:
        if key is None:
            return None
        return self._entries.get(key)

    def try_get(self, key: str | None) -> tuple[bool, ModelStateEntry | None]:
        entry = self.get(key)
        return entry is not None, entry

    def has_errors(self, key: str | None) -> bool:
        entry = self.get(key)
        return entry is not None and entry.has_errors

    @property
    def is_valid(self) -> bool:
        return not any(e.has_errors for e in self._entries.values())

    @property
    def error_count(self) -> int:
        return sum(len(e.errors) for e in self._entries.values())

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[str, ModelStateEntry]]:
        return iter(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_validation_error(cls, exc: ValidationError, prefix: str = "") -> "ModelState":
        """Build a ``ModelState`` from a pydantic ``ValidationError``.

        ``loc`` tuples become dotted keys; integer positions become indexers,
        so ``("items", 0, "name")`` is stored under ``items[0].name``.
        """
        state = cls()
        for error in exc.errors():
            key = error_key_from_loc(error.get("loc", ()), prefix)
            state.add_model_error(key, _clean_message(error.get("msg", "")))
        return state


def error_key_from_loc(loc: tuple, prefix: str = "") -> str:
    key = prefix
    for part in loc:
        if isinstance(part, int):
            key += f"[{part}]"
        elif key:
            key += f".{part}"
        else:
            key = str(part)
    return key


def _clean_message(message: str) -> str:
    # pydantic prefixes custom ValueError messages with "Value error, "
    return message.removeprefix("Value error, ")


def govuk_error_html(entry: ModelStateEntry | None, validation_message: str | None = None) -> Markup:
    """Render a field's errors as a GOV.UK error message span.

    A non-blank *validation_message* replaces the recorded messages.  Multiple
    messages are joined with ``<br>``.  Returns empty markup when there is
    nothing to show.
    """
    if validation_message is not None and validation_message.strip():
        return Markup('<span class="{}">{}</span>').format(ERROR_MESSAGE_CLASS, validation_message)

    if entry is None or not entry.has_errors:
        return Markup("")

    messages = [escape(m) for m in entry.messages if m and m.strip()]
    if not messages:
        return Markup("")
    return Markup('<span class="{}">{}</span>').format(
        ERROR_MESSAGE_CLASS, Markup("<br>").join(messages)
    )
