"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, List, Dict, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


DEFAULT_CODECC_ATOM_CODES = [
    "CodeccCheckAtom",
    "CodeccCheckAtomDebug",
    "CodeCCCheckAtom",
    "linuxCodeCCScript",
    "linuxPaasCodeCCScript",
]

DEFAULT_ELEMENT_NAMES = {
    "linuxCodeCCScript": "CodeCC Code Check",
    "linuxPaasCodeCCScript": "CodeCC Code Check",
    "CodeccCheckAtom": "CodeCC Code Check",
    "CodeccCheckAtomDebug": "CodeCC Code Check (debug)",
    "CodeCCCheckAtom": "CodeCC Code Check",
    "manualReviewUserTask": "Manual Review",
}


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Quality Range Service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")

    # Upstream Services
    process_service_url: str = Field(
        default="http://process:21921", description="Process service base URL"
    )
    quality_service_url: str = Field(
        default="http://quality:21925", description="Quality service base URL"
    )
    store_service_url: str = Field(
        default="http://store:21918", description="Store service base URL"
    )
    request_timeout: float = Field(default=30.0, gt=0, description="Upstream request timeout in seconds")
    connect_timeout: float = Field(default=10.0, gt=0, description="Upstream connect timeout in seconds")

    # Hash ID Configuration
    hash_id_salt: str = Field(default="jhy^3(@So0", description="Salt used for hashed IDs")
    hash_id_min_length: int = Field(default=8, ge=0, description="Minimum hashed ID length")

    # Element Configuration
    codecc_atom_codes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CODECC_ATOM_CODES),
        description="Atom codes belonging to the CodeCC family",
    )
    element_names: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ELEMENT_NAMES),
        description="Built-in element display names",
    )

    # Security Configuration
    allowed_hosts: List[str] = Field(default=["*"], description="Allowed hosts for CORS")
    service_token_digests: List[str] = Field(
        default=[], description="SHA-256 digests of accepted X-DEVOPS-BK-TOKEN values"
    )
    skip_token_validation: bool = Field(
        default=True, description="Accept calls without a service token in debug mode"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file path")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("allowed_hosts", "codecc_atom_codes", mode="before")
    @classmethod
    def parse_string_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse a list from a JSON or comma-separated string."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["host1", "host2"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "host1,host2"
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("process_service_url", "quality_service_url", "store_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise service URLs so paths can be appended directly."""
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="QUALITY_RANGE_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
