"""
Configuration module for HubSpot Backup.

Contains environment settings, the default endpoint catalogue and
configuration file loading.
"""

from .config_loader import (
    BackupConfigLoader,
    ConfigurationError,
    describe_endpoints,
    select_endpoints,
)
from .endpoints import DEFAULT_ENDPOINTS, default_config, default_endpoints
from .settings import HubspotSettings, get_settings, reload_settings

__all__ = [
    "BackupConfigLoader",
    "ConfigurationError",
    "describe_endpoints",
    "select_endpoints",
    "DEFAULT_ENDPOINTS",
    "default_config",
    "default_endpoints",
    "HubspotSettings",
    "get_settings",
    "reload_settings",
]
