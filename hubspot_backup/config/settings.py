"""Environment settings for HubSpot Backup."""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.backup_config import AuthMode, HubspotCredentials


class HubspotSettings(BaseSettings):
    """HubSpot connection and output configuration."""

    hapikey: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("HAPIKEY", "hapikey"),
        description="Environment variable: HAPIKEY",
    )
    access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("HAPI_ACCESS_KEY", "access_key"),
        description="Environment variable: HAPI_ACCESS_KEY",
    )
    api_base_url: str = Field(
        default="https://api.hubapi.com",
        validation_alias=AliasChoices("HUBSPOT_API_BASE_URL", "api_base_url"),
        description="Environment variable: HUBSPOT_API_BASE_URL",
    )
    output_path: str = Field(
        default=".",
        validation_alias=AliasChoices("HUBSPOT_OUTPUT_PATH", "output_path"),
        description="Environment variable: HUBSPOT_OUTPUT_PATH",
    )
    request_timeout: float = Field(
        default=30,
        gt=0,
        validation_alias=AliasChoices("HUBSPOT_REQUEST_TIMEOUT", "request_timeout"),
        description="Environment variable: HUBSPOT_REQUEST_TIMEOUT",
    )
    verbose: bool = Field(
        default=False,
        validation_alias=AliasChoices("VERBOSE", "verbose"),
        description="Environment variable: VERBOSE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("hapikey", "access_key")
    @classmethod
    def blank_as_missing(cls, v):
        """Treat empty variables as unset."""
        if v is not None and not v.strip():
            return None
        return v

    def credentials(
        self, hapikey: Optional[str] = None, access_key: Optional[str] = None
    ) -> Optional[HubspotCredentials]:
        """
        Resolve credentials from explicit values and the environment.

        Order: explicit API key, HAPIKEY, explicit access key, HAPI_ACCESS_KEY.

        Args:
            hapikey: API key given on the command line
            access_key: Private app token given on the command line

        Returns:
            Optional[HubspotCredentials]: Resolved credentials, None if absent
        """
        for token, mode in (
            (hapikey, AuthMode.API_KEY),
            (self.hapikey, AuthMode.API_KEY),
            (access_key, AuthMode.PRIVATE_APP),
            (self.access_key, AuthMode.PRIVATE_APP),
        ):
            if token and token.strip():
                return HubspotCredentials(token=token, mode=mode)
        return None


_settings: Optional[HubspotSettings] = None


def get_settings() -> HubspotSettings:
    """Get application settings."""
    global _settings
    if _settings is None:
        _settings = HubspotSettings()
    return _settings


def reload_settings() -> HubspotSettings:
    """Reload settings from environment."""
    global _settings
    _settings = HubspotSettings()
    return _settings
