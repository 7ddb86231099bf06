"""Quote fragile values in a contract configuration before YAML parsing."""

import logging
import re
from typing import Callable, List, Pattern, Tuple

logger = logging.getLogger(__name__)

# key, separator and value of a single "Key: value" line
CONTRACT_FORMAT_LINE = re.compile(r"^(?P<head>[ \t]*ContractFormat[ \t]*:[ \t]*)(?P<value>.*?)(?P<tail>[ \t]*)$")
CONTRACT_NUMBER_LINE = re.compile(r"^(?P<head>[ \t]*ContractNumber[ \t]*:[ \t]*)(?P<value>.*?)(?P<tail>[ \t]*)$")

BRACE_PATTERN = re.compile(r"[{}]")
WHITESPACE_PATTERN = re.compile(r"\s")


def is_fully_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'"


def quote_value(value: str) -> str:
    """Wrap a value as a YAML double-quoted scalar."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _needs_quotes_for_braces(value: str) -> bool:
    return bool(BRACE_PATTERN.search(value))


def _needs_quotes_for_whitespace(value: str) -> bool:
    return bool(WHITESPACE_PATTERN.search(value))


# Each rule targets one key, so the order does not matter
SANITIZE_RULES: List[Tuple[Pattern, Callable[[str], bool]]] = [
    (CONTRACT_FORMAT_LINE, _needs_quotes_for_braces),
    (CONTRACT_NUMBER_LINE, _needs_quotes_for_whitespace),
]


def sanitize_line(line: str) -> str:
    """Apply the quoting rules to one line without its line ending."""
    for pattern, needs_quotes in SANITIZE_RULES:
        match = pattern.match(line)
        if not match:
            continue
        value = match.group("value")
        if value and not is_fully_quoted(value) and needs_quotes(value):
            logger.debug(f"Quoting configuration value: {line.strip()}")
            return f"{match.group('head')}{quote_value(value)}{match.group('tail')}"
        return line
    return line


def sanitize_config_text(text: str) -> str:
    """Quote ContractFormat values with braces and ContractNumber values with spaces.

    Only lines whose key is exactly ``ContractFormat`` or ``ContractNumber``
    are touched; line endings are preserved.
    """
    sanitized = []
    for raw_line in text.splitlines(keepends=True):
        body = raw_line.rstrip("\r\n")
        ending = raw_line[len(body):]
        sanitized.append(sanitize_line(body) + ending)
    return "".join(sanitized)
