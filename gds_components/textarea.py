"""
Textarea and character-count textarea components.
"""

from __future__ import annotations

from typing import Any

from gds_components.base import FieldComponent
from gds_components.templating import attributes, css_classes


class Textarea(FieldComponent):
    """GOV.UK textarea.  Every recorded error message is listed above the control.

    Args:
        width_class: Width modifier (default ``govuk-!-width-full``).
        rows: Visible rows (default 5).
        placeholder: Placeholder text.
    """

    template_name = "textarea.html"

    def __init__(
        self,
        for_=None,
        *,
        width_class: str = "govuk-!-width-full",
        rows: int = 5,
        placeholder: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        if rows < 1:
            raise ValueError(f"rows must be at least 1, got {rows}")
        self.width_class = width_class
        self.rows = rows
        self.placeholder = placeholder

    @property
    def textarea_class(self) -> str:
        return css_classes(
            "govuk-textarea",
            self.width_class,
            "govuk-textarea--error" if self.has_error else None,
        )

    def error_messages(self) -> list[str]:
        if not self.has_error:
            return []
        if self.validation_message and self.validation_message.strip():
            return [self.validation_message]
        return [m for m in self.entry().messages if m and m.strip()]

    def textarea_attributes(self) -> dict[str, Any]:
        extra = self.control_attributes(placeholder=self.placeholder, rows=str(self.rows))
        if self.has_hint or self.label_aria_describedby:
            extra.setdefault("aria-describedby", self.described_by_id)
        if self.has_error:
            extra.setdefault("aria-invalid", "true")
        return extra

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        context.update(
            textarea_class=self.textarea_class,
            error_messages=self.error_messages(),
            value=self.for_.as_text(),
            control_attrs=attributes(self.textarea_attributes()),
        )
        return context


class CharacterCountTextarea(Textarea):
    """Textarea inside the GOV.UK character count module.

    Args:
        max_length: Character limit, exposed as ``data-maxlength``.
        max_words: Word limit, exposed as ``data-maxwords`` (wins over
            ``max_length`` in the limit message).
        word_count_error_for: Model-state key holding a separate word/character
            count error, shown under the textarea.
    """

    template_name = "character_count.html"

    def __init__(
        self,
        for_=None,
        *,
        max_length: int | None = None,
        max_words: int | None = None,
        word_count_error_for: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(for_, **kwargs)
        self.max_length = max_length
        self.max_words = max_words
        self.word_count_error_for = word_count_error_for

    def form_group_class(self, *extra: str) -> str:
        return super().form_group_class("govuk-character-count", *extra)

    def container_attributes(self) -> dict[str, Any]:
        attrs = super().container_attributes()
        attrs["data-module"] = "govuk-character-count"
        if self.max_words:
            attrs["data-maxwords"] = str(self.max_words)
        elif self.max_length:
            attrs["data-maxlength"] = str(self.max_length)
        return attrs

    @property
    def limit_message(self) -> str | None:
        if self.max_words:
            return f"You can enter up to {self.max_words} words"
        if self.max_length:
            return f"You can enter up to {self.max_length} characters"
        return None

    @property
    def count_error(self) -> str | None:
        if not self.word_count_error_for:
            return None
        entry = self.model_state.get(self.word_count_error_for)
        if entry is None or not entry.has_errors:
            return None
        return entry.messages[0]

    def textarea_attributes(self) -> dict[str, Any]:
        extra = super().textarea_attributes()
        if self.limit_message and "aria-describedby" not in self.additional_attributes:
            described = [extra.get("aria-describedby"), f"{self.resolved_field_id}-info"]
            extra["aria-describedby"] = " ".join(d for d in described if d)
        return extra

    def get_context(self) -> dict[str, Any]:
        context = super().get_context()
        context.update(limit_message=self.limit_message, count_error=self.count_error)
        return context
