"""
HubSpot Backup Agent - one-shot export workflow orchestrator.

This agent implements the complete backup flow:
1. Resolve the endpoint configuration (built-in catalogue or YAML file)
2. Optionally verify the credentials against the account endpoint
3. Crawl every endpoint concurrently, writing one file per item
4. Summarise the run
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..clients.hubspot_client import HubspotApiError, HubspotClient, TransportError
from ..clients.item_writer import ItemWriter
from ..config.config_loader import (
    BackupConfigLoader,
    ConfigurationError,
    describe_endpoints,
    select_endpoints,
)
from ..models.backup_config import (
    AccountInfo,
    BackupConfig,
    BackupResult,
    EndpointJob,
    HubspotCredentials,
)
from .orchestrator import CrawlOrchestrator
from .progress import ProgressReporter

logger = logging.getLogger(__name__)


class BackupAgentError(Exception):
    """Exception raised when a backup cannot be started."""

    pass


class HubspotBackupAgent:
    """
    HubSpot Backup Agent.

    Drives a full account export: configuration, optional account check,
    concurrent crawl and result summary. Branch failures during the crawl are
    recorded per endpoint and never abort the run.
    """

    def __init__(
        self,
        credentials: Optional[HubspotCredentials] = None,
        output_base_path: str = ".",
        config_file: Optional[str] = None,
        base_url: str = "https://api.hubapi.com",
        request_timeout: float = 30,
        reporter: Optional[ProgressReporter] = None,
    ):
        """
        Initialize the backup agent.

        Args:
            credentials: Credentials used to sign requests; only listing works without them
            output_base_path: Directory receiving the ``hubspot-backup`` tree
            config_file: Optional YAML configuration file
            base_url: Base URL of the HubSpot API
            request_timeout: Total timeout of one request in seconds
            reporter: Receiver of progress events
        """
        self.execution_id = f"hubspot_backup_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}"
        self.credentials = credentials
        self.output_base_path = Path(output_base_path)
        self.config_loader = BackupConfigLoader(config_file, base_url=base_url)
        self.base_url = base_url
        self.request_timeout = request_timeout
        self.reporter = reporter
        self.current_config: Optional[BackupConfig] = None

        auth_mode = credentials.mode.value if credentials else "none"
        logger.info(
            f"HubSpot Backup Agent initialized - execution_id: {self.execution_id}, "
            f"output_base_path: {self.output_base_path}, auth_mode: {auth_mode}"
        )

    def _client(self) -> HubspotClient:
        if self.credentials is None:
            raise BackupAgentError("HubSpot credentials are required to contact the API")
        return HubspotClient(
            self.credentials, base_url=self.base_url, timeout=self.request_timeout
        )

    def load_configuration(self, endpoints: Optional[Sequence[str]] = None) -> BackupConfig:
        """Load the configuration, restricted to ``endpoints`` when given."""
        try:
            config = select_endpoints(self.config_loader.load(), endpoints)
        except ConfigurationError as e:
            raise BackupAgentError(f"Configuration error: {e}") from e

        self.current_config = config
        return config

    async def verify_account(self) -> AccountInfo:
        """
        Check the credentials against the account endpoint.

        Raises:
            BackupAgentError: If HubSpot rejects the credentials or is unreachable
        """
        try:
            async with self._client() as client:
                return await client.get_account_info()
        except (HubspotApiError, TransportError) as e:
            raise BackupAgentError(f"Account verification failed: {e}") from e

    async def execute_backup(
        self,
        endpoints: Optional[Sequence[str]] = None,
        check_account: bool = False,
        run_date: Optional[date] = None,
    ) -> BackupResult:
        """
        Execute a complete backup.

        Args:
            endpoints: Optional subset of endpoint names to back up
            check_account: Verify the credentials before crawling
            run_date: Date stamp of the backup directory, today when omitted

        Returns:
            BackupResult: Per-endpoint summaries and output location

        Raises:
            BackupAgentError: If the backup cannot be started
        """
        started_at = datetime.utcnow()
        config = self.load_configuration(endpoints)

        account = None
        if check_account:
            account = await self.verify_account()

        writer = ItemWriter(self.output_base_path, run_date=run_date)
        jobs = [
            EndpointJob(endpoint=endpoint, url=config.resolve_url(endpoint))
            for endpoint in config.endpoints
        ]

        logger.info(
            f"Starting HubSpot backup - execution_id: {self.execution_id}, "
            f"endpoints_count: {len(jobs)}, output: {writer.backup_root}"
        )

        async with self._client() as client:
            orchestrator = CrawlOrchestrator(client, writer, reporter=self.reporter)
            summaries = await orchestrator.run(jobs)

        completed_at = datetime.utcnow()
        result = BackupResult(
            execution_id=self.execution_id,
            run_date=writer.run_date,
            output_location=str(writer.backup_root.resolve()),
            started_at=started_at,
            completed_at=completed_at,
            duration_seconds=(completed_at - started_at).total_seconds(),
            endpoints=summaries,
            metadata={"portal_id": account.portal_id} if account else {},
        )

        logger.info(
            f"HubSpot backup finished - execution_id: {self.execution_id}, "
            f"items_written: {result.items_written}, "
            f"failed_endpoints: {result.failed_endpoints or 'none'}"
        )
        return result

    def list_endpoints(self) -> List[Dict[str, Any]]:
        """
        List the configured endpoints.

        Returns:
            List[Dict[str, Any]]: Name, URL, pagination style and page size
        """
        return describe_endpoints(self.load_configuration())
