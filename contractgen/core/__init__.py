"""Contract numbering, placeholder resolution and document generation."""

from .contract_data import ContractData
from .contract_number import format_contract_number, resolve_contract_number
from .placeholder_resolver import PlaceholderResolver, resolve_placeholders, scan_placeholders

__all__ = [
    'ContractData',
    'format_contract_number',
    'resolve_contract_number',
    'PlaceholderResolver',
    'resolve_placeholders',
    'scan_placeholders',
]
