"""Placeholder discovery and replacement text for bracketed template tokens."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Set

from config.settings import settings
from ..utils.number_words import month_name, number_to_words
from ..utils.text_normalizer import normalize_phone
from .contract_data import MONTH, ContractData, stringify

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\[([A-Za-z0-9_]+)\]")

CONTRACT_NUM_TOKEN = "ContractNum"
MONTH_TEXT_TOKEN = "MonthText"
TEXT_SUFFIX = "Text"
PHONE_SUFFIX = "Phone"


def scan_placeholders(text: str) -> Set[str]:
    """Distinct token names found as [Token] in the text."""
    return set(PLACEHOLDER_PATTERN.findall(text or ""))


def placeholder_literal(token: str) -> str:
    """The literal text a token occupies in a template."""
    return f"[{token}]"


@dataclass
class ResolutionContext:
    """Inputs shared by every token of one resolution pass."""
    data: ContractData
    contract_number: str


@dataclass
class ResolutionStrategy:
    """A named (predicate, resolver) pair."""
    name: str
    matches: Callable[[str], bool]
    resolve: Callable[[str, ResolutionContext], str]


class PlaceholderResolver:
    """Classifies tokens by name and computes their replacement text.

    Strategies are tried in order and the first whose predicate accepts the
    token wins:

    1. ``ContractNum`` - the run's contract number.
    2. ``MonthText`` - the name of the ``Month`` field.
    3. ``<Key>Text`` - ``Key`` written out in words.
    4. ``<Key>Phone`` - the phone field of the same name, with ``998``
       turned into ``+998``.
    5. Anything else - the field of the same name as text.

    Missing data always resolves to an empty string.
    """

    def __init__(self,
                 number_to_words: Optional[Callable[[Any], str]] = None,
                 month_name: Optional[Callable[[Any], str]] = None):
        self.number_to_words = number_to_words or _default_number_to_words
        self.month_name = month_name or _default_month_name
        self.strategies: List[ResolutionStrategy] = [
            ResolutionStrategy("contract_number", lambda token: token == CONTRACT_NUM_TOKEN, self._resolve_contract_number),
            ResolutionStrategy("month_text", lambda token: token == MONTH_TEXT_TOKEN, self._resolve_month_text),
            ResolutionStrategy("number_text", lambda token: token.endswith(TEXT_SUFFIX), self._resolve_number_text),
            ResolutionStrategy("phone", lambda token: token.endswith(PHONE_SUFFIX), self._resolve_phone),
            ResolutionStrategy("field", lambda token: True, self._resolve_field),
        ]

    def classify(self, token: str) -> ResolutionStrategy:
        for strategy in self.strategies:
            if strategy.matches(token):
                return strategy
        # The last strategy accepts every token
        return self.strategies[-1]

    def resolve_token(self, token: str, context: ResolutionContext) -> str:
        strategy = self.classify(token)
        replacement = strategy.resolve(token, context)
        logger.debug(f"Placeholder [{token}] resolved by '{strategy.name}' to '{replacement}'")
        return replacement

    def resolve(self, template_text: str, data: Mapping[str, Any], contract_number: str) -> Dict[str, str]:
        """Map every distinct token in the template text to its replacement."""
        context = ResolutionContext(data=ContractData.from_mapping(data), contract_number=contract_number or "")
        tokens = scan_placeholders(template_text)

        replacements = {token: self.resolve_token(token, context) for token in sorted(tokens)}
        logger.info(f"Resolved {len(replacements)} placeholders")
        return replacements

    def _resolve_contract_number(self, token: str, context: ResolutionContext) -> str:
        return context.contract_number

    def _resolve_month_text(self, token: str, context: ResolutionContext) -> str:
        return self.month_name(context.data.get(MONTH))

    def _resolve_number_text(self, token: str, context: ResolutionContext) -> str:
        key = token[:-len(TEXT_SUFFIX)]
        if not context.data.has(key):
            return ""
        return self.number_to_words(context.data.get(key))

    def _resolve_phone(self, token: str, context: ResolutionContext) -> str:
        # Stripping and re-appending the suffix looks the phone up under the token's own name
        key = token[:-len(PHONE_SUFFIX)] + PHONE_SUFFIX
        value = context.data.get(key)
        if not value:
            return ""
        return normalize_phone(stringify(value))

    def _resolve_field(self, token: str, context: ResolutionContext) -> str:
        return context.data.text(token)


def _default_number_to_words(value: Any) -> str:
    return number_to_words(value, lang=settings.words_language)


def _default_month_name(value: Any) -> str:
    return month_name(value, lang=settings.words_language)


def resolve_placeholders(template_text: str,
                         data: Mapping[str, Any],
                         contract_number: str,
                         resolver: Optional[PlaceholderResolver] = None) -> Dict[str, str]:
    """Replacement text for each distinct [Token] in the template text."""
    resolver = resolver or PlaceholderResolver()
    return resolver.resolve(template_text, data, contract_number)
