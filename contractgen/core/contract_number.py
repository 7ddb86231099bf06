"""Contract number synthesis from a brace-delimited format template."""

import logging
import re
from typing import Any, Mapping, Optional

from config.settings import Settings, settings as default_settings
from ..utils.text_normalizer import initials
from .contract_data import (
    COMPANY_NAME, CONTRACT_FORMAT, CONTRACT_NUMBER, CONTRACT_PREFIX,
    DAY, MONTH, MY_NAME, YEAR, ContractData, stringify,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "RC"
DEFAULT_FORMAT = "RC-{Year}-{Month}-{Day}"

# Only these names are substituted; any other {Name} stays literal
FORMAT_TOKEN_PATTERN = re.compile(r"\{(ContractPrefix|Prefix|ComName|CName|Day|Month|Year)\}")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _trimmed(value: Any) -> str:
    return stringify(value).strip()


def _date_part(value: Any, width: int = 0) -> str:
    # Falsy values (missing, 0, "") give "00" for Day/Month and "" for Year.
    # Date-less numbering schemes rely on this; wider values are not truncated.
    return stringify(value or "").rjust(width, "0")


def format_contract_number(
    data: Mapping[str, Any],
    fallback_prefix: Optional[str] = None,
    fallback_format: Optional[str] = None,
) -> str:
    """Substitute the prefix, company initials and date parts into a format.

    Args:
        data: Contract fields; ``ContractPrefix`` and ``ContractFormat`` in
            the data win over the fallbacks.
        fallback_prefix: Prefix used when the data carries none (default "RC").
        fallback_format: Format used when the data carries none
            (default "RC-{Year}-{Month}-{Day}").

    Returns:
        The synthesized contract number. Never raises for missing fields.
    """
    prefix = _trimmed(data.get(CONTRACT_PREFIX)) or fallback_prefix or DEFAULT_PREFIX
    number_format = _trimmed(data.get(CONTRACT_FORMAT)) or fallback_format or DEFAULT_FORMAT

    company_initials = initials(data.get(COMPANY_NAME))
    values = {
        "ContractPrefix": prefix,
        "Prefix": prefix,
        "ComName": company_initials,
        "CName": company_initials,
        "Day": _date_part(data.get(DAY), 2),
        "Month": _date_part(data.get(MONTH), 2),
        "Year": _date_part(data.get(YEAR)),
    }

    contract_number = FORMAT_TOKEN_PATTERN.sub(lambda match: values.get(match.group(1)) or "", number_format)
    logger.debug(f"Formatted contract number '{contract_number}' from '{number_format}'")
    return contract_number


def resolve_contract_number(data: ContractData, settings: Optional[Settings] = None) -> str:
    """Supplied ContractNumber when present, otherwise a formatted one."""
    settings = settings or default_settings

    supplied = _trimmed(data.get(CONTRACT_NUMBER))
    if supplied:
        logger.info(f"Using supplied contract number '{supplied}'")
        return supplied

    contract_number = format_contract_number(data, settings.contract_prefix, settings.contract_format)
    logger.info(f"Generated contract number '{contract_number}'")
    return contract_number


def contract_number_for_path(contract_number: str) -> str:
    """Contract number with all whitespace removed, for folder and file names."""
    return WHITESPACE_PATTERN.sub("", contract_number)


def party_type(data: Mapping[str, Any], settings: Optional[Settings] = None) -> str:
    settings = settings or default_settings
    my_name = data.get(MY_NAME)
    if isinstance(my_name, str) and settings.company_marker in my_name:
        return settings.company_party_label
    return settings.person_party_label
