"""Shared utilities for the GOV.UK form components host."""

from utils.cache import TTLCache
from utils.config import AppConfig, Config, LookupConfig
from utils.http import RetryStrategy, SessionManager
from utils.patterns import ATTRIBUTE_NAME, LIKE_SPECIAL_CHARS, WHITESPACE
from utils.strings import (
    escape_like,
    field_id_from_name,
    normalize_whitespace,
    option_id,
    parse_month,
)

__all__ = [
    # Cache
    "TTLCache",
    # Config
    "AppConfig",
    "Config",
    "LookupConfig",
    # HTTP
    "RetryStrategy",
    "SessionManager",
    # Patterns
    "ATTRIBUTE_NAME",
    "LIKE_SPECIAL_CHARS",
    "WHITESPACE",
    # Strings
    "escape_like",
    "field_id_from_name",
    "normalize_whitespace",
    "option_id",
    "parse_month",
]
