"""Immutable key/value record parsed from a contract configuration document."""

import logging
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from ..utils.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

# Keys with structural meaning; any other key is an opaque placeholder field.
CONTRACT_NUMBER = "ContractNumber"
CONTRACT_PREFIX = "ContractPrefix"
CONTRACT_FORMAT = "ContractFormat"
COMPANY_NAME = "ComName"
DAY = "Day"
MONTH = "Month"
YEAR = "Year"
AREA = "Area"
MY_NAME = "MyName"


def stringify(value: Any) -> str:
    """Render a field value the way the contract data files expect.

    Booleans are lower-case and integral floats lose their fraction, so that
    ``Amount: 5.0`` prints as ``5``. ``None`` becomes the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ContractData(Mapping):
    """Read-only view over the fields of one contract."""

    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        self._fields = MappingProxyType(dict(fields or {}))

    @classmethod
    def from_mapping(cls, raw: Any) -> "ContractData":
        """Build a record from parsed configuration, stringifying keys."""
        if isinstance(raw, ContractData):
            return raw
        if not isinstance(raw, Mapping):
            raise ConfigurationError(
                f"Contract configuration must be a key/value mapping, got {type(raw).__name__}",
                details={"parsed_type": type(raw).__name__},
                suggestions=["Write the configuration as 'Key: value' lines"]
            )
        return cls({stringify(key): value for key, value in raw.items()})

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ContractData({dict(self._fields)!r})"

    def has(self, key: str) -> bool:
        """True when the key is present with a non-null value."""
        return self._fields.get(key) is not None

    def text(self, key: str) -> str:
        """Lookup-or-empty: the stringified value, or '' when absent."""
        value = self._fields.get(key)
        if value is None:
            logger.debug(f"Field '{key}' is absent, using empty string")
        return stringify(value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._fields)
