"""
Models module for HubSpot Backup.

Contains Pydantic models for configuration, page jobs and run results.
"""

from .backup_config import (
    AccountInfo,
    AuthMode,
    BackupConfig,
    BackupEndpoint,
    BackupResult,
    EndpointJob,
    EndpointStatus,
    EndpointSummary,
    Envelope,
    HubspotCredentials,
    PageResponse,
    PaginationStyle,
)

__all__ = [
    "AccountInfo",
    "AuthMode",
    "BackupConfig",
    "BackupEndpoint",
    "BackupResult",
    "EndpointJob",
    "EndpointStatus",
    "EndpointSummary",
    "Envelope",
    "HubspotCredentials",
    "PageResponse",
    "PaginationStyle",
]
