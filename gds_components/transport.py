"""
Lookup transports for the autocomplete client.

A transport turns ``(lookup_url, query)`` into a list of suggestions or raises
``LookupTransportError``.  The client never sees any other exception type from
a well-behaved transport.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Protocol

import requests

from gds_components.client import Suggestion, normalize_suggestions
from gds_components.errors import LookupTransportError
from utils.http import SessionManager

logger = logging.getLogger(__name__)


class LookupTransport(Protocol):
    async def fetch(self, url: str, query: str) -> list[Suggestion]:
        ...


class RequestsLookupTransport:
    """Issue ``GET <url>?name=<query>`` through a pooled ``requests`` session.

    The blocking call runs in a worker thread so the event loop keeps
    handling keystrokes while a lookup is outstanding.  ``timeout`` is
    ``None`` by default: a lookup that never answers simply never resolves.
    """

    def __init__(self, session_manager: SessionManager | None = None,
                 timeout: float | None = None) -> None:
        self.session_manager = session_manager or SessionManager()
        self.timeout = timeout

    def fetch_sync(self, url: str, query: str) -> list[Suggestion]:
        try:
            payload = self.session_manager.get_json(url, params={"name": query}, timeout=self.timeout)
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise LookupTransportError(f"Lookup returned HTTP {status}", url=url, status_code=status) from exc
        except requests.JSONDecodeError as exc:
            raise LookupTransportError(f"Lookup returned invalid JSON: {exc}", url=url) from exc
        except requests.RequestException as exc:
            raise LookupTransportError(f"Lookup request failed: {exc}", url=url) from exc
        except ValueError as exc:
            raise LookupTransportError(f"Lookup returned invalid JSON: {exc}", url=url) from exc
        return normalize_suggestions(payload)

    async def fetch(self, url: str, query: str) -> list[Suggestion]:
        return await asyncio.to_thread(self.fetch_sync, url, query)

    def close(self) -> None:
        self.session_manager.close()


class InMemoryLookupTransport:
    """Serve suggestions from a fixed list, matching like the lookup endpoint.

    Case-insensitive literal substring match, prefix matches first.  Useful for
    pages without a backing service and for exercising the client.
    """

    def __init__(self, labels: Iterable[str], max_results: int = 20) -> None:
        self.labels = list(labels)
        self.max_results = max_results
        self.calls: list[tuple[str, str]] = []

    async def fetch(self, url: str, query: str) -> list[Suggestion]:
        self.calls.append((url, query))
        needle = query.casefold()
        hits = [label for label in self.labels if needle in label.casefold()]
        hits.sort(key=lambda label: (not label.casefold().startswith(needle), label.casefold()))
        return [Suggestion(label=label, value=label) for label in hits[: self.max_results]]
