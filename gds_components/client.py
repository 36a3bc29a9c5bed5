"""
Autocomplete client: Suggestion Fetcher and Selection Binder.

One ``AutocompleteClient`` drives one autocomplete field.  It owns its own
request-token counter; nothing is shared between fields.  All state changes
happen on the event loop thread between awaits, so no locking is needed.

Ordering
--------
Every keystroke event takes a new token, and so does confirming a
suggestion.  A lookup response is applied only if its token is still the
current one when it arrives, so the rendered list always reflects the
most recently dispatched query (last request wins).  Superseded requests are
not aborted; their responses are dropped.  There is no timeout: a response
that never arrives leaves the last rendered state.

State per request::

    IDLE -> QUERYING -> RESOLVED | STALE_DISCARDED | TOO_SHORT
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup, escape
from pydantic import BaseModel, ConfigDict, ValidationError

from gds_components.errors import ClientClosedError, LookupTransportError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
BEFORE_SUGGESTIONS_TEXT = "Suggestions"
CONTINUE_TYPING_TEXT = "Continue entering to improve suggestions"
NO_RESULTS_TEXT = "No suggestions found."


# ── Data model ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldBinding:
    """Ids and endpoint tying one rendered autocomplete field together.

    Created once at render time; never changes for the life of the page.
    """

    input_id: str           # visible, enhanced input
    submission_id: str      # hidden field carrying the submitted value
    container_id: str       # element the enhanced control is built into
    lookup_url: str
    default_value: str = ""      # initial display text
    submission_value: str = ""   # prefilled submitted value

    def to_dict(self) -> dict[str, str]:
        return {
            "inputId": self.input_id,
            "submissionId": self.submission_id,
            "containerId": self.container_id,
            "lookupUrl": self.lookup_url,
            "defaultValue": self.default_value,
        }


class Suggestion(BaseModel):
    """One lookup candidate.  Plain-string results use the same text for both."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    label: str
    value: str


def normalize_suggestions(payload: Any) -> list[Suggestion]:
    """Convert a lookup payload into suggestions.

    Accepts a JSON array of strings or of ``{"label": ..., "value": ...}``
    records (``value`` defaults to ``label``; numeric ids become strings).
    ``None`` means no results.

    Raises:
        LookupTransportError: the payload has any other shape.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise LookupTransportError(f"Expected a JSON array, got {type(payload).__name__}")
    suggestions = []
    try:
        for item in payload:
            if isinstance(item, str):
                suggestions.append(Suggestion(label=item, value=item))
            elif isinstance(item, dict):
                label = item.get("label")
                value = item.get("value", label)
                suggestions.append(Suggestion(label=label, value=value))
            else:
                raise LookupTransportError(f"Unexpected suggestion item: {item!r}")
    except ValidationError as exc:
        raise LookupTransportError(f"Malformed suggestion record: {exc}") from exc
    return suggestions


def highlight(text: str, query: str) -> Markup:
    """Escape *text* and wrap each case-insensitive literal match of *query* in ``<strong>``."""
    if not query:
        return escape(text)
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    parts = []
    last = 0
    for match in pattern.finditer(text):
        parts.append(escape(text[last:match.start()]))
        parts.append(Markup("<strong>{}</strong>").format(match.group(0)))
        last = match.end()
    parts.append(escape(text[last:]))
    return Markup("").join(parts)


@dataclass(frozen=True)
class RenderedSuggestion:
    suggestion: Suggestion
    html: Markup


@dataclass
class AutocompleteView:
    """What the user currently sees for one field."""

    input_value: str = ""
    submission_value: str = ""
    suggestions: list[RenderedSuggestion] = field(default_factory=list)
    status_message: str = ""
    menu_before: str = ""
    menu_after: str = ""
    fallback_visible: bool = True
    fallback_label_visible: bool = True
    enhanced_visible: bool = False
    enhanced_label_visible: bool = False

    @property
    def suggestion_labels(self) -> list[str]:
        return [r.suggestion.label for r in self.suggestions]

    def clear_menu(self) -> None:
        self.suggestions = []
        self.status_message = ""
        self.menu_before = ""
        self.menu_after = ""


class FetchState(enum.Enum):
    IDLE = "idle"
    QUERYING = "querying"
    RESOLVED = "resolved"
    STALE_DISCARDED = "stale_discarded"
    TOO_SHORT = "too_short"


@dataclass(frozen=True)
class FetchOutcome:
    token: int
    state: FetchState
    suggestions: tuple[Suggestion, ...] = ()


# ── Suggestion Fetcher ───────────────────────────────────────────────────────


class SuggestionFetcher:
    """Turns queries into rendered suggestions, discarding stale responses."""

    def __init__(self, binding: FieldBinding, transport, view: AutocompleteView,
                 min_length: int = MIN_QUERY_LENGTH) -> None:
        self.binding = binding
        self.transport = transport
        self.view = view
        self.min_length = min_length
        self._token = 0
        self._in_flight = 0

    @property
    def token(self) -> int:
        return self._token

    @property
    def state(self) -> FetchState:
        return FetchState.QUERYING if self._in_flight else FetchState.IDLE

    def invalidate(self) -> int:
        """Take a new token without dispatching, so every in-flight response is dropped."""
        self._token += 1
        return self._token

    async def dispatch(self, query: str) -> FetchOutcome:
        self._token += 1
        token = self._token

        if len(query) < self.min_length:
            self.view.suggestions = []
            self.view.status_message = ""
            self.view.menu_before = CONTINUE_TYPING_TEXT
            self.view.menu_after = ""
            return FetchOutcome(token, FetchState.TOO_SHORT)

        self._in_flight += 1
        try:
            suggestions = await self._fetch(query, token)
        finally:
            self._in_flight -= 1

        if token != self._token:
            logger.debug("Discarding stale lookup response token=%d current=%d", token, self._token)
            return FetchOutcome(token, FetchState.STALE_DISCARDED)

        # The input may have been cleared while the request was out
        if len(self.view.input_value) < self.min_length:
            return FetchOutcome(token, FetchState.STALE_DISCARDED)

        if not suggestions:
            self.view.clear_menu()
            self.view.status_message = NO_RESULTS_TEXT
            self.view.submission_value = ""
            return FetchOutcome(token, FetchState.RESOLVED)

        self.view.status_message = ""
        self.view.menu_before = BEFORE_SUGGESTIONS_TEXT
        self.view.menu_after = CONTINUE_TYPING_TEXT
        self.view.suggestions = [
            RenderedSuggestion(s, highlight(s.label, query)) for s in suggestions
        ]
        self.view.submission_value = ""
        return FetchOutcome(token, FetchState.RESOLVED, tuple(suggestions))

    async def _fetch(self, query: str, token: int) -> list[Suggestion]:
        try:
            return list(await self.transport.fetch(self.binding.lookup_url, query))
        except Exception as exc:
            if token == self._token:
                logger.warning("Error fetching suggestions from %s: %s", self.binding.lookup_url, exc)
            return []


# ── Selection Binder ─────────────────────────────────────────────────────────


class SelectionBinder:
    """Keeps the hidden submission field in step with what the user confirmed."""

    def __init__(self, binding: FieldBinding, view: AutocompleteView) -> None:
        self.binding = binding
        self.view = view

    def confirm(self, suggestion: Suggestion | str | None) -> str:
        if suggestion is None:
            value, label = "", ""
        elif isinstance(suggestion, Suggestion):
            value, label = suggestion.value, suggestion.label
        else:
            value = label = suggestion
        self.view.submission_value = value
        self.view.input_value = label
        self.view.clear_menu()
        return value

    def input_changed(self, value: str) -> bool:
        """Return ``True`` when the input was emptied and state was cleared."""
        if value:
            return False
        self.view.submission_value = ""
        self.view.clear_menu()
        return True

    def enhance(self) -> None:
        self.view.fallback_visible = False
        self.view.fallback_label_visible = False
        self.view.enhanced_visible = True
        self.view.enhanced_label_visible = True

    def restore(self) -> None:
        self.view.enhanced_visible = False
        self.view.enhanced_label_visible = False
        self.view.fallback_visible = True
        self.view.fallback_label_visible = True


# ── Client ───────────────────────────────────────────────────────────────────


class AutocompleteClient:
    """Per-field autocomplete controller with an explicit lifecycle.

    Usage::

        client = AutocompleteClient(binding, RequestsLookupTransport())
        client.initialize()
        await client.on_input("john")
        client.confirm(client.view.suggestions[0].suggestion)
        client.destroy()
    """

    def __init__(self, binding: FieldBinding, transport, *,
                 view: AutocompleteView | None = None,
                 min_length: int = MIN_QUERY_LENGTH) -> None:
        self.binding = binding
        self.view = view if view is not None else AutocompleteView()
        self.fetcher = SuggestionFetcher(binding, transport, self.view, min_length)
        self.binder = SelectionBinder(binding, self.view)
        self._initialized = False
        self._closed = False

    @property
    def is_active(self) -> bool:
        return self._initialized and not self._closed

    def _require_active(self) -> None:
        if self._closed:
            raise ClientClosedError(f"Autocomplete {self.binding.input_id!r} has been destroyed")
        if not self._initialized:
            raise ClientClosedError(f"Autocomplete {self.binding.input_id!r} is not initialised")

    def initialize(self) -> None:
        if self._closed:
            raise ClientClosedError(f"Autocomplete {self.binding.input_id!r} has been destroyed")
        if self._initialized:
            return
        self.view.input_value = self.binding.default_value
        self.view.submission_value = self.binding.submission_value
        self.view.clear_menu()
        # Swap controls only once the enhanced one exists
        self.binder.enhance()
        self._initialized = True
        logger.debug("Initialised autocomplete %s", self.binding.input_id)

    def destroy(self) -> None:
        if self._closed:
            return
        self.fetcher.invalidate()
        self.binder.restore()
        self._closed = True

    async def on_input(self, value: str) -> FetchOutcome:
        """Handle one keystroke event with the input's new *value*."""
        self._require_active()
        self.view.input_value = value
        if self.binder.input_changed(value):
            return FetchOutcome(self.fetcher.invalidate(), FetchState.IDLE)
        return await self.fetcher.dispatch(value)

    def confirm(self, suggestion: Suggestion | str | None) -> str:
        self._require_active()
        # Responses still in flight must not overwrite the confirmed value
        self.fetcher.invalidate()
        return self.binder.confirm(suggestion)

    def suggestions_for(self, labels: Iterable[str]) -> list[Suggestion]:
        wanted = set(labels)
        return [r.suggestion for r in self.view.suggestions if r.suggestion.label in wanted]

    async def __aenter__(self) -> "AutocompleteClient":
        self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.destroy()
