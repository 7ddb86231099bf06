"""Load contract data from a YAML-like configuration document."""

import logging
import re
from pathlib import Path
from typing import Union

import yaml

from ..core.contract_data import ContractData
from ..utils.error_handler import ConfigurationError
from .config_sanitizer import sanitize_config_text

logger = logging.getLogger(__name__)

BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


class ContractConfigLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 core scalar rules.

    Plain values such as ``10:30``, ``0750`` or ``no`` stay as written
    instead of becoming sexagesimal, octal or boolean values.
    """


ContractConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (BOOL_TAG, INT_TAG, FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

ContractConfigLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"))
ContractConfigLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"))
ContractConfigLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
               r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"),
    list("-+.0123456789"))


def construct_core_int(loader, node):
    """Decimal unless prefixed with 0o or 0x; leading zeros stay base 10."""
    value = loader.construct_scalar(node)
    sign = -1 if value.startswith("-") else 1
    digits = value.lstrip("+-")
    if digits.startswith("0o"):
        return sign * int(digits[2:], 8)
    if digits.startswith("0x"):
        return sign * int(digits[2:], 16)
    return sign * int(digits)


ContractConfigLoader.add_constructor(INT_TAG, construct_core_int)


def parse_contract_data(text: str, source: str = "<string>") -> ContractData:
    """Sanitize and parse configuration text into a ContractData record.

    Scalars follow YAML 1.2 core typing (see ContractConfigLoader).

    Raises:
        ConfigurationError: If the text is not valid YAML or is not a
            key/value mapping.
    """
    sanitized = sanitize_config_text(text)

    try:
        parsed = yaml.load(sanitized, Loader=ContractConfigLoader)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Error parsing contract configuration {source}: {e}",
            details={"source": source},
            suggestions=["Check indentation and 'Key: value' syntax", "Quote values containing ':' or '#'"]
        ) from e

    if parsed is None:
        raise ConfigurationError(
            f"Contract configuration {source} is empty",
            details={"source": source},
            suggestions=["Add at least the contract date fields"]
        )

    data = ContractData.from_mapping(parsed)
    logger.info(f"Loaded {len(data)} contract fields from {source}")
    return data


def load_contract_data(file_path: Union[str, Path]) -> ContractData:
    """Read and parse a contract configuration file.

    Raises:
        ConfigurationError: If the file does not exist, cannot be read, or
            cannot be parsed.
    """
    path = Path(file_path)

    if not path.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {path.resolve()}",
            details={"path": str(path)},
            suggestions=["Pass the configuration path explicitly", "Check CONTRACT_DEFAULT_CONFIG_FILE"]
        )

    try:
        # utf-8-sig tolerates files saved with a BOM by Windows editors
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file {path}: {e}",
            details={"path": str(path)}
        ) from e

    return parse_contract_data(content, source=str(path))
