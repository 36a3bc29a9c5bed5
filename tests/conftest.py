"""
Pytest fixtures for the GOV.UK form components tests.

Provides an HTML tag collector for markup assertions, a temporary
organisations database and a TestClient bound to it.
"""

import sys
from html.parser import HTMLParser
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.database import init_db  # noqa: E402
from api.seed import DEMO_ORGANISATIONS  # noqa: E402


# ── HTML helpers ──────────────────────────────────────────────────────────────

class _TagCollector(HTMLParser):
    """Collect all tags, their attributes and text from an HTML fragment."""

    def __init__(self):
        super().__init__()
        self.tags: list[dict[str, Any]] = []
        self.text: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tags.append({"tag": tag.lower(), "attrs": dict(attrs)})

    def handle_data(self, data: str) -> None:
        if data.strip():
            self.text.append(data.strip())

    def find(self, tag: str, **attrs: str) -> list[dict]:
        return [
            t for t in self.tags
            if t["tag"] == tag and all(t["attrs"].get(k) == v for k, v in attrs.items())
        ]

    def one(self, tag: str, **attrs: str) -> dict:
        found = self.find(tag, **attrs)
        assert len(found) == 1, f"expected one <{tag} {attrs}>, found {len(found)}"
        return found[0]

    def by_id(self, element_id: str) -> dict:
        matches = [t for t in self.tags if t["attrs"].get("id") == element_id]
        assert len(matches) == 1, f"expected one element with id={element_id!r}, found {len(matches)}"
        return matches[0]

    def classes(self, tag: dict) -> set[str]:
        return set((tag["attrs"].get("class") or "").split())


def parse_html(html) -> _TagCollector:
    collector = _TagCollector()
    collector.feed(str(html))
    return collector


@pytest.fixture
def parse():
    return parse_html


# ── Database fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def org_db(tmp_path) -> Path:
    """Organisations database seeded with the demo list."""
    db_path = tmp_path / "organisations.sqlite"
    init_db(db_path, DEMO_ORGANISATIONS)
    return db_path


@pytest.fixture
def app_client(org_db):
    """TestClient for an app bound to the seeded organisations database."""
    from fastapi.testclient import TestClient
    from api.app import create_app

    with TestClient(create_app(db_path=org_db), raise_server_exceptions=False) as client:
        yield client
