"""FastAPI application for the Contract Template Generator."""

import logging
import shutil
from datetime import datetime

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from .models import (
    ConfigParseRequest, ConfigParseResponse,
    ContractNumberRequest, ContractNumberResponse, ContractNumberSource,
    HealthCheckResponse,
    PlaceholderResolutionRequest, PlaceholderResolutionResponse,
)
from ..core.contract_data import CONTRACT_NUMBER, ContractData, stringify
from ..core.contract_number import resolve_contract_number
from ..core.placeholder_resolver import resolve_placeholders
from ..processors.config_sanitizer import sanitize_config_text
from ..processors.data_loader import parse_contract_data
from ..utils.error_handler import ValidationError, handle_exceptions

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Contract numbering and template placeholder resolution",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _services_status() -> dict:
    return {
        "document_processor": "active",
        "pdf_converter": "available" if shutil.which(settings.soffice_binary) else "unavailable",
    }


def _number_source(data: ContractData) -> ContractNumberSource:
    if stringify(data.get(CONTRACT_NUMBER)).strip():
        return ContractNumberSource.SUPPLIED
    return ContractNumberSource.GENERATED


@app.get("/", response_model=HealthCheckResponse)
async def root():
    """Root endpoint with basic health check."""
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=settings.app_version,
        services={"document_processor": "active"}
    )


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Detailed health check endpoint."""
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=settings.app_version,
        services=_services_status()
    )


@app.post("/contract-number", response_model=ContractNumberResponse)
@handle_exceptions
async def contract_number(request: ContractNumberRequest):
    """Supplied or generated contract number for the given fields."""
    data = ContractData.from_mapping(request.contract_data)
    return ContractNumberResponse(
        contract_number=resolve_contract_number(data, settings),
        source=_number_source(data)
    )


@app.post("/placeholders/resolve", response_model=PlaceholderResolutionResponse)
@handle_exceptions
async def resolve_template_placeholders(request: PlaceholderResolutionRequest):
    """Replacement text for every [Token] in the template text."""
    if not request.template_text.strip():
        raise ValidationError(
            "Template text cannot be empty",
            suggestions=["Send the template's full text in template_text"]
        )

    data = ContractData.from_mapping(request.contract_data)
    number = request.contract_number
    if number is None:
        number = resolve_contract_number(data, settings)

    replacements = resolve_placeholders(request.template_text, data, number)
    return PlaceholderResolutionResponse(
        contract_number=number,
        placeholders=sorted(replacements),
        replacements=replacements
    )


@app.post("/config/parse", response_model=ConfigParseResponse)
@handle_exceptions
async def parse_config(request: ConfigParseRequest):
    """Sanitize and parse a configuration document."""
    data = parse_contract_data(request.config_text, source="request body")
    return ConfigParseResponse(
        sanitized_text=sanitize_config_text(request.config_text),
        contract_data=jsonable_encoder(data.to_dict()),
        contract_number=resolve_contract_number(data, settings)
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contractgen.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
