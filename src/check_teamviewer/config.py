"""
Configuration management for the TeamViewer probe.

Settings come from CLI flags with environment variables (TEAMVIEWER_*) as
fallback, so the API token does not have to appear on the command line.
The config is built once per run and passed explicitly.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TEAMVIEWER_API_URL = "https://webapi.teamviewer.com/api/v1/devices"


class ProbeConfig(BaseSettings):
    """Probe configuration loaded from keyword arguments and environment."""

    # ========================================================================
    # API Connection
    # ========================================================================

    api_key: str = Field(
        ...,
        min_length=1,
        description="TeamViewer API token (Bearer)"
    )
    api_url: str = Field(
        default=TEAMVIEWER_API_URL,
        description="Devices endpoint of the TeamViewer web API"
    )

    # ========================================================================
    # Timing
    # ========================================================================

    timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Total request timeout in seconds"
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Fetch attempts on transport errors"
    )

    # ========================================================================
    # Logging
    # ========================================================================

    log_level: str = Field(
        default="WARNING",
        description="Log level for stderr diagnostics"
    )

    # ========================================================================
    # Validators
    # ========================================================================

    @field_validator('api_url')
    @classmethod
    def validate_api_url(cls, v):
        if not v.startswith(('https://', 'http://')):
            raise ValueError('api_url must be an http(s) URL')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ['DEBUG', 'INFO', 'WARNING', 'ERROR']:
            raise ValueError('log_level must be DEBUG, INFO, WARNING, or ERROR')
        return v

    model_config = SettingsConfigDict(
        env_prefix='TEAMVIEWER_',
        validate_assignment=True,
        extra='ignore',
    )


def load_config(**overrides: Any) -> ProbeConfig:
    """
    Build the probe configuration.

    Overrides set to None are dropped so that unset CLI flags fall back to
    the environment.

    Raises:
        pydantic.ValidationError: If required settings missing or invalid
    """
    return ProbeConfig(**{k: v for k, v in overrides.items() if v is not None})
