"""Tests for gds_components/autocomplete.py — server-rendered autocomplete field."""
import json
import re
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from conftest import parse_html
from gds_components import Autocomplete, MissingBindingError, ModelExpression, ModelState

_CONFIG_RE = re.compile(r"GdsAutocomplete\.create\((\{.*\})\)\.init\(\)", re.S)


def _config(html) -> dict:
    match = _CONFIG_RE.search(str(html))
    assert match, "inline script config not found"
    return json.loads(match.group(1))


def _component(value=None, **kwargs):
    kwargs.setdefault("api_url", "/api/v1/lookup/organisations")
    return Autocomplete(ModelExpression("Organisation", value), **kwargs)


class TestAutocompleteMarkup:
    def test_ids(self):
        html = parse_html(_component().render())
        fallback = html.by_id("Organisation")
        assert fallback["tag"] == "input"
        assert fallback["attrs"]["name"] == "Organisation"
        html.by_id("Organisation_autocomplete_container")

    def test_fallback_visible_without_script(self):
        html = parse_html(_component("Acme").render())
        fallback = html.by_id("Organisation")
        assert "hidden" not in fallback["attrs"]
        assert "js-hidden" not in html.classes(fallback)
        assert fallback["attrs"]["value"] == "Acme"
        assert {"govuk-input", "govuk-!-width-three-quarters"} <= html.classes(fallback)

    def test_two_labels(self):
        html = parse_html(_component(label_text="Organisation name").render())
        fallback_label = html.one("label", **{"for": "Organisation"})
        assert "hidden" not in fallback_label["attrs"]
        assert html.classes(fallback_label) == {"govuk-label"}
        enhanced_label = html.one("label", **{"for": "Organisation_autocomplete"})
        assert "hidden" in enhanced_label["attrs"]

    def test_enabled_flag(self):
        html = parse_html(_component(enabled_flag_id="org_enabled").render())
        flag = html.by_id("org_enabled")
        assert flag["attrs"]["type"] == "hidden"
        assert flag["attrs"]["value"] == "false"

    def test_no_flag_by_default(self):
        html = parse_html(_component().render())
        assert html.find("input", type="hidden") == []

    def test_error_state(self):
        state = ModelState({"Organisation": ["Select your organisation from the list"]})
        html = parse_html(_component(model_state=state).render())
        assert "govuk-input--error" in html.classes(html.by_id("Organisation"))
        assert "govuk-form-group--error" in html.classes(html.tags[0])

    def test_missing_api_url(self):
        with pytest.raises(MissingBindingError):
            Autocomplete(ModelExpression("Organisation"))
        with pytest.raises(MissingBindingError):
            Autocomplete(ModelExpression("Organisation"), api_url="  ")

    def test_idempotent(self):
        component = _component("Acme", hint_html="Start typing")
        assert component.render() == component.render()


class TestAutocompleteConfig:
    def test_script_config(self):
        config = _config(_component("Acme", enabled_flag_id="flag").render())
        assert config == {
            "inputId": "Organisation_autocomplete",
            "submissionId": "Organisation",
            "containerId": "Organisation_autocomplete_container",
            "lookupUrl": "/api/v1/lookup/organisations",
            "defaultValue": "Acme",
            "enabledFlagId": "flag",
            "widthClass": "govuk-!-width-three-quarters",
            "minLength": 3,
            "describedBy": "",
        }

    def test_display_name_for_id_values(self):
        component = _component("org-42", display_name="Acme Ltd")
        binding = component.binding()
        assert binding.default_value == "Acme Ltd"
        assert binding.submission_value == "org-42"
        assert _config(component.render())["defaultValue"] == "Acme Ltd"
        assert parse_html(component.render()).by_id("Organisation")["attrs"]["value"] == "org-42"

    def test_described_by_with_hint(self):
        html = _component(hint_html="Start typing").render()
        assert _config(html)["describedBy"] == "Organisation-hint"
        assert parse_html(html).by_id("Organisation")["attrs"]["aria-describedby"] == "Organisation-hint"

    def test_script_breakout_is_escaped(self):
        html = str(_component('</script><script>alert(1)</script>').render())
        assert html.count("</script>") == 1
        assert _config(html)["defaultValue"] == '</script><script>alert(1)</script>'

    def test_binding_matches_markup(self):
        component = _component(field_id="org")
        binding = component.binding()
        html = parse_html(component.render())
        html.by_id(binding.submission_id)
        html.by_id(binding.container_id)
        assert binding.input_id == "org_autocomplete"
