"""Configuration document processing."""

from .config_sanitizer import sanitize_config_text
from .data_loader import load_contract_data, parse_contract_data

__all__ = [
    'sanitize_config_text',
    'load_contract_data',
    'parse_contract_data',
]
