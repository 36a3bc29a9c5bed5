"""GOV.UK form components rendered with Jinja2, plus the autocomplete client.

Components (bound to a ``ModelExpression`` and reading a ``ModelState``):
- TextInput, DateInput
- Textarea, CharacterCountTextarea
- Select, RadioGroup, CheckboxGroup
- Autocomplete

Client side of the autocomplete field:
- AutocompleteClient (Suggestion Fetcher + Selection Binder)
- RequestsLookupTransport / InMemoryLookupTransport
"""

from gds_components.autocomplete import Autocomplete
from gds_components.base import FieldComponent
from gds_components.binding import ModelExpression, expression_for
from gds_components.choices import CheckboxGroup, RadioGroup, Select
from gds_components.client import (
    MIN_QUERY_LENGTH,
    AutocompleteClient,
    AutocompleteView,
    FetchOutcome,
    FetchState,
    FieldBinding,
    SelectionBinder,
    Suggestion,
    SuggestionFetcher,
    highlight,
    normalize_suggestions,
)
from gds_components.errors import (
    ClientClosedError,
    ComponentError,
    LookupTransportError,
    MissingBindingError,
)
from gds_components.inputs import DateInput, TextInput
from gds_components.model_state import ModelState, ModelStateEntry, govuk_error_html
from gds_components.options import GdsOption, OptionProjection, options_from, project
from gds_components.templating import (
    attributes,
    css_classes,
    get_environment,
    register_components,
    render,
    trusted,
)
from gds_components.textarea import CharacterCountTextarea, Textarea
from gds_components.transport import (
    InMemoryLookupTransport,
    LookupTransport,
    RequestsLookupTransport,
)

__all__ = [
    # Components
    "Autocomplete",
    "CharacterCountTextarea",
    "CheckboxGroup",
    "DateInput",
    "FieldComponent",
    "RadioGroup",
    "Select",
    "TextInput",
    "Textarea",
    # Binding and validation state
    "ModelExpression",
    "ModelState",
    "ModelStateEntry",
    "expression_for",
    "govuk_error_html",
    # Options
    "GdsOption",
    "OptionProjection",
    "options_from",
    "project",
    # Templating
    "attributes",
    "css_classes",
    "get_environment",
    "register_components",
    "render",
    "trusted",
    # Client
    "MIN_QUERY_LENGTH",
    "AutocompleteClient",
    "AutocompleteView",
    "FetchOutcome",
    "FetchState",
    "FieldBinding",
    "SelectionBinder",
    "Suggestion",
    "SuggestionFetcher",
    "highlight",
    "normalize_suggestions",
    # Transport
    "InMemoryLookupTransport",
    "LookupTransport",
    "RequestsLookupTransport",
    # Errors
    "ClientClosedError",
    "ComponentError",
    "LookupTransportError",
    "MissingBindingError",
]
