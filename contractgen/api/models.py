"""Pydantic models for API request/response schemas."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ContractNumberSource(str, Enum):
    """Where a contract number came from."""
    SUPPLIED = "supplied"
    GENERATED = "generated"


class ContractNumberRequest(BaseModel):
    """Request model for contract number preview."""
    contract_data: Dict[str, Any] = Field(
        ...,
        description="Contract fields such as Day, Month, Year, ComName, ContractFormat"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "contract_data": {
                    "Day": 5,
                    "Month": 3,
                    "Year": 2024,
                    "ComName": "«Smart Teams» LLC",
                    "ContractFormat": "{Prefix}-{CName}-{Year}{Month}{Day}"
                }
            }
        }
    }


class ContractNumberResponse(BaseModel):
    """Response model for contract number preview."""
    contract_number: str
    source: ContractNumberSource


class PlaceholderResolutionRequest(BaseModel):
    """Request model for placeholder resolution."""
    template_text: str = Field(..., description="Template text containing [Token] placeholders")
    contract_data: Dict[str, Any] = Field(default_factory=dict)
    contract_number: Optional[str] = Field(
        default=None,
        description="Contract number for [ContractNum]; derived from contract_data when omitted"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "template_text": "Contract No. [ContractNum] for [AmountText] sum, phone [ClientPhone]",
                "contract_data": {"Amount": 5, "ClientPhone": "998901112233", "Month": 3},
                "contract_number": "RC-1"
            }
        }
    }


class PlaceholderResolutionResponse(BaseModel):
    """Response model for placeholder resolution."""
    contract_number: str
    placeholders: List[str]
    replacements: Dict[str, str]


class ConfigParseRequest(BaseModel):
    """Request model for parsing a contract configuration document."""
    config_text: str = Field(..., description="Raw 'Key: value' configuration text")


class ConfigParseResponse(BaseModel):
    """Response model for a parsed contract configuration."""
    sanitized_text: str
    contract_data: Dict[str, Any]
    contract_number: str


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    version: str
    services: Dict[str, str]
