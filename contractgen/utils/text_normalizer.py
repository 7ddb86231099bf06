"""Small text helpers used when building contract numbers and field values."""

import re
from typing import Any

# Quote glyphs dropped from company names before taking initials
NAME_QUOTE_PATTERN = re.compile(r"[«»\"']")
PHONE_COUNTRY_PATTERN = re.compile(r"^998")


def initials(name: Any) -> str:
    """Upper-cased first letters of each word in a company name.

    >>> initials('ООО «Smart Teams»')
    'ОST'
    """
    if not name or not isinstance(name, str):
        return ""

    cleaned = NAME_QUOTE_PATTERN.sub("", name).strip()
    return "".join(word[0].upper() for word in cleaned.split() if word)


def normalize_phone(raw: Any) -> str:
    """Prefix a bare Uzbek country code with '+'."""
    if raw is None:
        return ""
    return PHONE_COUNTRY_PATTERN.sub("+998", str(raw), count=1)
