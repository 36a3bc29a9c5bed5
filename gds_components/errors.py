"""Exceptions raised by the form components and the autocomplete client."""


class ComponentError(Exception):
    """Base class for component errors."""


class MissingBindingError(ComponentError, ValueError):
    """A required template input (bind target, option list, part name) is missing.

    Raised at construction/render time so a page never ships half-built markup.
    """


class LookupTransportError(ComponentError):
    """The lookup endpoint could not be reached or returned an unusable payload."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ClientClosedError(ComponentError, RuntimeError):
    """An autocomplete client was used after ``destroy()``."""
