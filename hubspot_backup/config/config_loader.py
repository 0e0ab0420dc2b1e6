"""
Configuration Loader for HubSpot Backup.

This module resolves the endpoint list of a backup run: the built-in
catalogue, optionally replaced or trimmed by a YAML configuration file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from pydantic import ValidationError

from ..models.backup_config import BackupConfig
from .endpoints import default_endpoints

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised when configuration loading fails."""

    pass


class BackupConfigLoader:
    """
    Loader for backup configurations.

    A configuration file may set ``base_url``, replace the endpoint list with
    ``endpoints`` and drop endpoints by name with ``disabled``. Without a file
    the built-in catalogue of sixteen endpoints is used.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        base_url: str = "https://api.hubapi.com",
    ):
        """
        Initialize the configuration loader.

        Args:
            config_file: Optional YAML file with endpoint overrides
            base_url: Base URL used when the file does not set one
        """
        self.config_file = Path(config_file) if config_file else None
        self.base_url = base_url

    def load(self) -> BackupConfig:
        """
        Load the backup configuration.

        Returns:
            BackupConfig: Loaded and validated configuration

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid
        """
        if self.config_file is None:
            logger.debug("No configuration file given, using default endpoints")
            return BackupConfig(base_url=self.base_url, endpoints=default_endpoints())

        logger.info(f"Loading backup configuration: {self.config_file}")

        if not self.config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_file}")

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError("Configuration file must contain a mapping")

        disabled = config_data.pop("disabled", None) or []
        config_data.setdefault("base_url", self.base_url)
        if "endpoints" not in config_data:
            config_data["endpoints"] = [
                endpoint.model_dump() for endpoint in default_endpoints()
            ]

        if disabled:
            unknown = self._unknown_names(config_data["endpoints"], disabled)
            if unknown:
                raise ConfigurationError(f"Unknown endpoints disabled: {', '.join(unknown)}")
            config_data["endpoints"] = [
                endpoint
                for endpoint in config_data["endpoints"]
                if not (isinstance(endpoint, dict) and endpoint.get("name") in disabled)
            ]

        try:
            config = BackupConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")

        logger.info(
            f"Successfully loaded backup configuration - endpoints_count: {len(config.endpoints)}"
        )
        return config

    @staticmethod
    def _unknown_names(endpoints: List[Dict[str, Any]], names: Sequence[str]) -> List[str]:
        known = {endpoint.get("name") for endpoint in endpoints if isinstance(endpoint, dict)}
        return sorted(set(names) - known)


def select_endpoints(config: BackupConfig, names: Optional[Sequence[str]]) -> BackupConfig:
    """
    Restrict a configuration to the named endpoints.

    Raises:
        ConfigurationError: If a name is not configured
    """
    if not names:
        return config

    known = {endpoint.name for endpoint in config.endpoints}
    unknown = sorted(set(names) - known)
    if unknown:
        raise ConfigurationError(f"Unknown endpoints: {', '.join(unknown)}")

    return BackupConfig(
        base_url=config.base_url,
        endpoints=[endpoint for endpoint in config.endpoints if endpoint.name in names],
    )


def describe_endpoints(config: BackupConfig) -> List[Dict[str, Any]]:
    """Summaries of configured endpoints for listings."""
    return [
        {
            "name": endpoint.name,
            "url": config.resolve_url(endpoint),
            "pagination": endpoint.pagination.value,
            "page_size": endpoint.page_size,
        }
        for endpoint in config.endpoints
    ]
