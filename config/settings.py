"""Configuration settings for the Contract Template Generator."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    app_name: str = "Contract Template Generator"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Contract numbering fallbacks (legacy variable names kept for old .env files)
    contract_prefix: str = Field(
        default="RC",
        validation_alias=AliasChoices("CONTRACT_PREFIX", "ContractPrefix"),
    )
    contract_format: str = Field(
        default="RC-{Year}-{Month}-{Day}",
        validation_alias=AliasChoices("CONTRACT_FORMAT", "ContractFormat"),
    )

    # Input
    default_config_file: str = "./ALL.contract"

    # Output naming
    output_folder_name: str = "Contract"
    area_suffix: str = "-kv"
    company_marker: str = "SMART TEAMS"
    company_party_label: str = "LLC"
    person_party_label: str = "Person"

    # Numbers and months in words
    words_language: str = "ru"

    # Fixed-layout export (LibreOffice)
    export_pdf: bool = True
    soffice_binary: str = "soffice"
    conversion_timeout: int = 120  # seconds

    model_config = {
        "env_file": ".env",
        "env_prefix": "CONTRACT_",
        "extra": "ignore",  # Ignore extra fields
        "populate_by_name": True,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
