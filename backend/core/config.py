"""Core configuration with Pydantic v2 Settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # Directory holding the XSD/Schematron resources (not shipped with the package)
    EINVOICE_SCHEMA_DIR: Path = Path("schemas")
    # Resource files relative to EINVOICE_SCHEMA_DIR; versions 2 and 3 share one set
    EINVOICE_SCHEMA_V1: str = "zugferd_1/ZUGFeRD1p0.xsd"
    EINVOICE_SCHEMATRON_V1: str = "zugferd_1/ZUGFeRD1p0.sch"
    EINVOICE_SCHEMA_V2: str = "zugferd_2/Factur-X_EXTENDED.xsd"
    EINVOICE_SCHEMATRON_V2: str = "zugferd_2/Factur-X_EXTENDED.sch"

    # Defaults for the generator CLI
    EINVOICE_DEFAULT_VERSION: int = 2
    EINVOICE_DEFAULT_MODE: str = "zugferd"
    EINVOICE_PRETTY_PRINT: bool = True


# Global settings instance
settings = Settings()
