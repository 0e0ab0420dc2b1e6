"""
HubSpot Backup Package.

A one-shot export of all data and content of a HubSpot account, written as
one JSON file per record under a dated directory tree.
"""

__version__ = "1.0.0"
__description__ = "HubSpot Data & Content Backup"

from .agent.backup_agent import BackupAgentError, HubspotBackupAgent
from .models.backup_config import (
    AuthMode,
    BackupConfig,
    BackupEndpoint,
    BackupResult,
    EndpointJob,
    HubspotCredentials,
    PaginationStyle,
)

__all__ = [
    "HubspotBackupAgent",
    "BackupAgentError",
    "AuthMode",
    "BackupConfig",
    "BackupEndpoint",
    "BackupResult",
    "EndpointJob",
    "HubspotCredentials",
    "PaginationStyle",
]
