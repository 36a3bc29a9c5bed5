"""String helpers for field ids, option ids and lookup queries."""

from utils.patterns import LEADING_ZEROS, LIKE_SPECIAL_CHARS, WHITESPACE


def normalize_whitespace(s: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends.

    Example:
        "  John   Smith\\n" -> "John Smith"
    """
    return WHITESPACE.sub(' ', s).strip()


def field_id_from_name(name: str) -> str:
    """Turn a dotted bind-target name into an HTML id ("Address.Town" -> "Address_Town")."""
    return name.replace('.', '_')


def option_id(name: str, value: str) -> str:
    """Id for one option of a choice field: ``<name>_<value with spaces as _>``."""
    return f"{name}_{value.replace(' ', '_')}"


def escape_like(query: str) -> str:
    """Escape ``%``, ``_`` and ``\\`` so *query* matches literally in ``LIKE ... ESCAPE '\\'``."""
    return LIKE_SPECIAL_CHARS.sub(r'\\\1', query)


def parse_month(value) -> int | None:
    """Parse a month number ("3", "03", 3) into 1..12, or ``None``."""
    if value is None:
        return None
    text = LEADING_ZEROS.sub('', str(value).strip())
    if not text.isdigit():
        return None
    month = int(text)
    return month if 1 <= month <= 12 else None
