"""Tests for gds_components/model_state.py — validation-error collection."""
import sys
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError, field_validator

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from gds_components.model_state import (
    ModelState,
    ModelStateEntry,
    error_key_from_loc,
    govuk_error_html,
)


class _Address(BaseModel):
    postcode: str

    @field_validator("postcode")
    @classmethod
    def _postcode(cls, v):
        if not v:
            raise ValueError("Enter a postcode")
        return v


class _Item(BaseModel):
    name: str


class _Form(BaseModel):
    email: str
    address: _Address
    items: list[_Item] = []


class TestModelState:
    def test_empty_state_is_valid(self):
        state = ModelState()
        assert state.is_valid
        assert state.error_count == 0
        assert state.get("Email") is None

    def test_add_model_error(self):
        state = ModelState()
        state.add_model_error("Email", "Enter an email")
        state.add_model_error("Email", "Too long")
        assert state.has_errors("Email")
        assert state.get("Email").messages == ["Enter an email", "Too long"]
        assert state.error_count == 2
        assert not state.is_valid

    def test_constructor_dict(self):
        state = ModelState({"Name": ["Required"], "Age": ["Too young", "Not a number"]})
        assert state.keys() == ["Name", "Age"]
        assert len(state) == 2
        assert "Age" in state

    def test_keys_are_exact(self):
        state = ModelState({"Address.Postcode": ["Bad"]})
        assert state.has_errors("Address.Postcode")
        assert not state.has_errors("address.postcode")

    def test_set_entry_without_errors(self):
        state = ModelState()
        entry = state.set_entry("Name")
        assert isinstance(entry, ModelStateEntry)
        assert not entry.has_errors
        assert "Name" in state
        assert state.is_valid

    def test_try_get(self):
        state = ModelState({"Name": ["Required"]})
        found, entry = state.try_get("Name")
        assert found and entry.messages == ["Required"]
        assert state.try_get("Other") == (False, None)
        assert state.try_get(None) == (False, None)


class TestFromValidationError:
    def _errors(self, data) -> ModelState:
        with pytest.raises(ValidationError) as exc_info:
            _Form.model_validate(data)
        return ModelState.from_validation_error(exc_info.value)

    def test_nested_keys_are_dotted(self):
        state = self._errors({"email": "a@b.c", "address": {"postcode": ""}})
        assert state.keys() == ["address.postcode"]
        # pydantic's "Value error, " prefix is dropped
        assert state.get("address.postcode").messages == ["Enter a postcode"]

    def test_list_indices(self):
        state = self._errors({"email": "x", "address": {"postcode": "AB1"}, "items": [{"name": "a"}, {}]})
        assert "items[1].name" in state

    def test_missing_field(self):
        state = self._errors({"address": {"postcode": "AB1"}})
        assert state.has_errors("email")

    def test_prefix(self):
        with pytest.raises(ValidationError) as exc_info:
            _Form.model_validate({"address": {"postcode": "AB1"}})
        state = ModelState.from_validation_error(exc_info.value, prefix="Applicant")
        assert state.has_errors("Applicant.email")

    def test_error_key_from_loc(self):
        assert error_key_from_loc(("a", 0, "b")) == "a[0].b"
        assert error_key_from_loc(()) == ""
        assert error_key_from_loc(("x",), prefix="p") == "p.x"


class TestGovukErrorHtml:
    def test_nothing_to_show(self):
        assert govuk_error_html(None) == ""
        assert govuk_error_html(ModelStateEntry()) == ""

    def test_single_message(self):
        entry = ModelState({"Email": ["Enter an email"]}).get("Email")
        assert govuk_error_html(entry) == '<span class="govuk-error-message">Enter an email</span>'

    def test_multiple_messages_joined_with_br(self):
        entry = ModelState({"Email": ["One", "Two"]}).get("Email")
        assert govuk_error_html(entry) == '<span class="govuk-error-message">One<br>Two</span>'

    def test_blank_messages_skipped(self):
        entry = ModelState({"Email": ["", "  ", "Real"]}).get("Email")
        assert govuk_error_html(entry) == '<span class="govuk-error-message">Real</span>'

    def test_messages_are_escaped(self):
        entry = ModelState({"Email": ["<script>alert(1)</script>"]}).get("Email")
        html = govuk_error_html(entry)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_override_replaces_messages(self):
        entry = ModelState({"Email": ["One", "Two"]}).get("Email")
        html = govuk_error_html(entry, "Check your email")
        assert html == '<span class="govuk-error-message">Check your email</span>'

    def test_override_is_plain_text(self):
        entry = ModelState({"Email": ["One"]}).get("Email")
        html = govuk_error_html(entry, "<b>bold</b>")
        assert "&lt;b&gt;bold&lt;/b&gt;" in html

    def test_blank_override_ignored(self):
        entry = ModelState({"Email": ["One"]}).get("Email")
        assert "One" in govuk_error_html(entry, "   ")
