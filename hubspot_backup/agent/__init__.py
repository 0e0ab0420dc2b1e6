"""
Agent module for HubSpot Backup.

Contains pagination strategies, crawl orchestration, the backup agent and
the CLI interface.
"""

from .backup_agent import BackupAgentError, HubspotBackupAgent
from .main import HubspotBackupCLI, main
from .orchestrator import CrawlOrchestrator, TaskTracker
from .progress import LogProgressReporter, NullProgressReporter, ProgressReporter
from .strategies import (
    HasMoreStrategy,
    LimitStrategy,
    OnceStrategy,
    PaginationStrategy,
    VidOffsetStrategy,
    strategy_for,
)

__all__ = [
    "HubspotBackupAgent",
    "BackupAgentError",
    "HubspotBackupCLI",
    "main",
    "CrawlOrchestrator",
    "TaskTracker",
    "ProgressReporter",
    "LogProgressReporter",
    "NullProgressReporter",
    "PaginationStrategy",
    "HasMoreStrategy",
    "OnceStrategy",
    "LimitStrategy",
    "VidOffsetStrategy",
    "strategy_for",
]
