"""Tests for gds_components/choices.py — Select, RadioGroup and CheckboxGroup."""
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from conftest import parse_html
from gds_components import (
    CheckboxGroup,
    GdsOption,
    MissingBindingError,
    ModelExpression,
    ModelState,
    OptionProjection,
    RadioGroup,
    Select,
)

COLOURS = [("red", "Red"), ("dark blue", "Dark blue"), ("green", "Green")]


@dataclass
class _Member:
    id: int
    name: str
    selected: bool = False


def _project_member(m: _Member) -> OptionProjection:
    return OptionProjection(value="true", label=m.name, checked=m.selected,
                            hidden_fields={"Id": m.id, "Name": m.name})


def _checked(html, tag="input"):
    return [t["attrs"]["value"] for t in html.find(tag) if "checked" in t["attrs"]]


# ── Select ───────────────────────────────────────────────────────────────────

class TestSelect:
    def test_default_option_selected_when_empty(self):
        html = parse_html(Select(ModelExpression("Colour"), options=COLOURS).render())
        options = html.find("option")
        assert len(options) == 4
        first = options[0]
        assert first["attrs"]["value"] == ""
        assert "disabled" in first["attrs"] and "selected" in first["attrs"]
        assert "Please select..." in html.text

    def test_selection_is_case_insensitive_and_trimmed(self):
        html = parse_html(Select(ModelExpression("Colour", "  GREEN "), options=COLOURS).render())
        selected = [t["attrs"]["value"] for t in html.find("option") if "selected" in t["attrs"]]
        assert selected == ["green"]

    def test_option_ids_replace_spaces(self):
        html = parse_html(Select(ModelExpression("Colour"), options=COLOURS).render())
        assert html.by_id("Colour_dark_blue")["attrs"]["value"] == "dark blue"

    def test_without_default_option(self):
        html = parse_html(Select(ModelExpression("Colour"), options=COLOURS,
                                 include_default_option=False).render())
        assert len(html.find("option")) == 3

    def test_custom_default_text(self):
        html = parse_html(Select(ModelExpression("Colour"), options=COLOURS,
                                 default_option_text="Pick one").render())
        assert "Pick one" in html.text

    def test_none_options_fail_fast(self):
        with pytest.raises(MissingBindingError):
            Select(ModelExpression("Colour"), options=None)

    def test_error_state(self):
        state = ModelState({"Colour": ["Select a colour"]})
        html = parse_html(Select(ModelExpression("Colour"), options=COLOURS, model_state=state).render())
        select = html.one("select")
        assert "govuk-select--error" in html.classes(select)
        assert select["attrs"]["aria-invalid"] == "true"

    def test_labels_escaped(self):
        html = str(Select(ModelExpression("X"), options=[GdsOption(value="a", label="<b>A</b>")]).render())
        assert "&lt;b&gt;A&lt;/b&gt;" in html


# ── RadioGroup ───────────────────────────────────────────────────────────────

class TestRadioGroup:
    def test_fieldset_and_items(self):
        html = parse_html(RadioGroup(ModelExpression("Colour", "red"), options=COLOURS,
                                     label_text="Favourite colour").render())
        assert html.one("fieldset")
        assert html.one("legend")
        radios = html.find("input", type="radio")
        assert [r["attrs"]["name"] for r in radios] == ["Colour"] * 3
        assert _checked(html) == ["red"]
        assert html.by_id("Colour")["tag"] == "div"

    def test_list_model_selects_first_item(self):
        html = parse_html(RadioGroup(ModelExpression("Colour", ["Green", "red"]), options=COLOURS).render())
        assert _checked(html) == ["green"]

    def test_boolean_model(self):
        html = parse_html(RadioGroup(ModelExpression("Agree", True),
                                     options=[("true", "Yes"), ("false", "No")]).render())
        assert _checked(html) == ["true"]

    def test_conditional_reveals(self):
        html = parse_html(RadioGroup(ModelExpression("Contact"), options=[("email", "Email"), ("post", "Post")],
                                     conditional_reveals={"email": "email-reveal"}).render())
        assert html.by_id("Contact_email")["attrs"]["data-aria-controls"] == "email-reveal"
        assert "data-aria-controls" not in html.by_id("Contact_post")["attrs"]

    def test_inline(self):
        html = parse_html(RadioGroup(ModelExpression("C"), options=COLOURS, inline=True).render())
        modules = [t for t in html.find("div") if t["attrs"].get("data-module") == "govuk-radios"]
        assert "govuk-radios--inline" in html.classes(modules[0])

    def test_html_id_wins_over_property_name(self):
        html = parse_html(RadioGroup(ModelExpression("C"), options=COLOURS, html_id="q-colour").render())
        html.by_id("q-colour")
        assert not [t for t in html.tags if t["attrs"].get("id") == "C"]


# ── CheckboxGroup ────────────────────────────────────────────────────────────

class TestCheckboxGroupSimple:
    def test_checked_from_model_list(self):
        html = parse_html(CheckboxGroup(ModelExpression("Colours", ["RED", "green"]), options=COLOURS).render())
        boxes = html.find("input", type="checkbox")
        assert [b["attrs"]["name"] for b in boxes] == ["Colours"] * 3
        assert _checked(html) == ["red", "green"]
        html.by_id("Colours_checkboxes")

    def test_empty_model(self):
        html = parse_html(CheckboxGroup(ModelExpression("Colours"), options=COLOURS).render())
        assert _checked(html) == []

    def test_label_css_class(self):
        html = parse_html(CheckboxGroup(ModelExpression("C"), options=COLOURS,
                                        label_css_class="govuk-!-font-weight-bold").render())
        labels = html.find("label")
        assert all("govuk-!-font-weight-bold" in html.classes(label) for label in labels)

    def test_requires_options_or_projector(self):
        with pytest.raises(MissingBindingError):
            CheckboxGroup(ModelExpression("C"))

    def test_not_both(self):
        with pytest.raises(ValueError):
            CheckboxGroup(ModelExpression("C"), options=COLOURS, projector=_project_member)


class TestCheckboxGroupComposite:
    def _members(self):
        return [_Member(7, "Alex", True), _Member(9, "Sam")]

    def test_indexed_names_and_hidden_fields(self):
        html = parse_html(CheckboxGroup(ModelExpression("Team", self._members()),
                                        projector=_project_member).render())
        boxes = html.find("input", type="checkbox")
        assert [b["attrs"]["name"] for b in boxes] == ["Team[0].Selected", "Team[1].Selected"]
        assert [b["attrs"]["id"] for b in boxes] == ["Team_0__Selected", "Team_1__Selected"]
        assert all(b["attrs"]["value"] == "true" for b in boxes)
        assert "checked" in boxes[0]["attrs"] and "checked" not in boxes[1]["attrs"]

        hidden = {t["attrs"]["name"]: t["attrs"]["value"] for t in html.find("input", type="hidden")}
        assert hidden == {
            "Team[0].Id": "7", "Team[0].Name": "Alex",
            "Team[1].Id": "9", "Team[1].Name": "Sam",
        }

    def test_custom_value_property(self):
        html = parse_html(CheckboxGroup(ModelExpression("Team", self._members()),
                                        projector=_project_member, item_value_property="Include").render())
        assert html.by_id("Team_1__Include")["attrs"]["name"] == "Team[1].Include"

    def test_none_model_renders_no_items(self):
        html = parse_html(CheckboxGroup(ModelExpression("Team"), projector=_project_member).render())
        assert html.find("input") == []

    def test_scalar_model_rejected(self):
        component = CheckboxGroup(ModelExpression("Team", "not a list"), projector=_project_member)
        with pytest.raises(MissingBindingError):
            component.render()

    def test_bad_projector_fails_render(self):
        component = CheckboxGroup(ModelExpression("Team", self._members()), projector=lambda m: m.name)
        with pytest.raises(TypeError):
            component.render()

    def test_hidden_values_escaped(self):
        members = [_Member(1, '"><script>')]
        html = str(CheckboxGroup(ModelExpression("Team", members), projector=_project_member).render())
        assert "<script>" not in html
