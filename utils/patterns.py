"""Pre-compiled regex patterns shared by the components and the host app.

Usage:
    from utils.patterns import ATTRIBUTE_NAME

    if not ATTRIBUTE_NAME.match(key):
        ...
"""

import re

# Whitespace normalization: multiple spaces/tabs/newlines
WHITESPACE = re.compile(r'\s+')

# Names accepted for extra HTML attributes ("data-foo", "aria-label", "x:y")
ATTRIBUTE_NAME = re.compile(r'^[A-Za-z_:][-A-Za-z0-9_:.]*$')

# Characters with special meaning inside a SQL LIKE pattern
LIKE_SPECIAL_CHARS = re.compile(r'([\\%_])')

# Leading zeros on a numeric month ("03" -> "3")
LEADING_ZEROS = re.compile(r'^0+(?=\d)')
