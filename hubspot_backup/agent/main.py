"""
Main entry point for HubSpot Backup.

This module provides the command-line interface, allowing users to back up an
account, check their credentials and list the backed up endpoints.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import structlog

from ..config.settings import HubspotSettings, get_settings
from ..models.backup_config import HubspotCredentials
from .backup_agent import BackupAgentError, HubspotBackupAgent

logger = logging.getLogger(__name__)

API_KEY_HELP_URL = (
    "https://knowledge.hubspot.com/Integrations/How-do-I-get-my-HubSpot-API-key"
)


def configure_logging(verbose: bool = False) -> None:
    """Configure stdlib logging and route structlog events through it."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event", "endpoint"]),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class HubspotBackupCLI:
    """
    Command-line interface for HubSpot Backup.
    """

    def __init__(self, settings: Optional[HubspotSettings] = None):
        """Initialize the CLI."""
        self.settings = settings
        self.agent: Optional[HubspotBackupAgent] = None

    async def run(self, args: Optional[list] = None) -> int:
        """
        Run the CLI with the given arguments.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            int: Exit code
        """
        parser = self._create_parser()
        parsed_args = parser.parse_args(args)
        if not parsed_args.command:
            parsed_args.command = "backup"

        try:
            settings = self.settings or get_settings()
            if parsed_args.verbose or settings.verbose:
                logging.getLogger().setLevel(logging.DEBUG)

            credentials = None
            if parsed_args.command != "list":
                credentials = self._resolve_credentials(parsed_args, settings)
                if credentials is None:
                    logger.error(
                        "No HubSpot credentials: use --hapikey, --accesskey, "
                        "HAPIKEY or HAPI_ACCESS_KEY"
                    )
                    return 1

            self.agent = HubspotBackupAgent(
                credentials=credentials,
                output_base_path=parsed_args.output_path or settings.output_path,
                config_file=parsed_args.config_file,
                base_url=settings.api_base_url,
                request_timeout=settings.request_timeout,
            )

            if parsed_args.command == "backup":
                return await self._execute_backup(parsed_args)
            elif parsed_args.command == "account":
                return await self._execute_account(parsed_args)
            elif parsed_args.command == "list":
                return self._execute_list(parsed_args)
            else:
                logger.error(f"Unknown command: {parsed_args.command}")
                return 1

        except Exception as e:
            logger.error(f"CLI execution failed: {e}", exc_info=True)
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create command line argument parser."""
        parser = argparse.ArgumentParser(
            description="HubSpot Backup - Export all data and content of a HubSpot account",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Back up everything with a private app token
  hubspot-backup backup --accesskey pat-na1-...

  # Back up two endpoints with a legacy API key from the environment
  HAPIKEY=... hubspot-backup backup --endpoint deals --endpoint contacts

  # Check which portal the credentials belong to
  hubspot-backup account --accesskey pat-na1-...

  # List backed up endpoints
  hubspot-backup list --format simple
            """,
        )

        # Global options
        parser.add_argument(
            "--output-path",
            default=None,
            help="Directory receiving the hubspot-backup tree (default: current directory)",
        )
        parser.add_argument(
            "--config-file",
            default=None,
            help="YAML file overriding the backed up endpoints",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose logging"
        )

        # Accepted before the subcommand too, so "hubspot-backup --hapikey KEY" backs up
        self._add_credential_options(parser, default=None)
        credentials = argparse.ArgumentParser(add_help=False)
        self._add_credential_options(credentials, default=argparse.SUPPRESS)

        # Subcommands
        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        backup_parser = subparsers.add_parser(
            "backup", parents=[credentials], help="Back up the account (default)"
        )
        backup_parser.add_argument(
            "--endpoint",
            "-e",
            action="append",
            dest="endpoints",
            help="Back up only this endpoint (repeatable)",
        )
        backup_parser.add_argument(
            "--check-account",
            action="store_true",
            help="Verify the credentials before starting",
        )

        subparsers.add_parser(
            "account", parents=[credentials], help="Show the connected account"
        )

        list_parser = subparsers.add_parser("list", help="List backed up endpoints")
        list_parser.add_argument(
            "--format",
            "-f",
            choices=["json", "table", "simple"],
            default="table",
            help="Output format (default: table)",
        )

        return parser

    @staticmethod
    def _add_credential_options(parser: argparse.ArgumentParser, default) -> None:
        # Subcommand copies use SUPPRESS so they don't reset values given globally
        parser.add_argument("--hapikey", default=default, help="HubSpot API key (legacy)")
        parser.add_argument(
            "--accesskey", default=default, help="HubSpot private app access token"
        )

    def _resolve_credentials(
        self, args: argparse.Namespace, settings: HubspotSettings
    ) -> Optional[HubspotCredentials]:
        credentials = settings.credentials(
            hapikey=getattr(args, "hapikey", None),
            access_key=getattr(args, "accesskey", None),
        )
        if credentials is None and sys.stdin.isatty():
            print("Thank you for using HubSpot Data & Content Backup!")
            print(f"This app needs a HubSpot API key. Learn how to get one: {API_KEY_HELP_URL}")
            answer = input("Please enter HubSpot API key: ").strip()
            credentials = settings.credentials(hapikey=answer)
        return credentials

    async def _execute_backup(self, args: argparse.Namespace) -> int:
        """Execute backup command."""
        try:
            if not self.agent:
                logger.error("Agent not initialized")
                return 1

            print("Backing up your HubSpot account...")
            result = await self.agent.execute_backup(
                endpoints=getattr(args, "endpoints", None),
                check_account=getattr(args, "check_account", False),
            )

            print("\n" + "=" * 60)
            print("HUBSPOT BACKUP COMPLETE")
            print("=" * 60)
            print(f"Duration: {result.duration_seconds:.2f} seconds")
            print(f"Items Written: {result.items_written}")
            for summary in result.endpoints:
                line = f"  {summary.name}: {summary.items_written} items ({summary.status.value})"
                if summary.error_message:
                    line += f" - {summary.error_message}"
                print(line)
            print(f"Backup saved in {result.output_location}")
            print("=" * 60)

            return 0

        except BackupAgentError as e:
            logger.error(f"Backup failed: {e}")
            return 1

    async def _execute_account(self, args: argparse.Namespace) -> int:
        """Execute account command."""
        try:
            if not self.agent:
                logger.error("Agent not initialized")
                return 1

            account = await self.agent.verify_account()
            print(f"Connected to HubSpot account {account.portal_id}")
            if account.time_zone:
                print(f"Time Zone: {account.time_zone}")
            if account.currency:
                print(f"Currency: {account.currency}")
            return 0

        except BackupAgentError as e:
            logger.error(str(e))
            return 1

    def _execute_list(self, args: argparse.Namespace) -> int:
        """Execute list command."""
        try:
            if not self.agent:
                logger.error("Agent not initialized")
                return 1

            endpoints = self.agent.list_endpoints()

            if args.format == "json":
                print(json.dumps(endpoints, indent=2))
            elif args.format == "table":
                self._print_endpoints_table(endpoints)
            else:  # simple
                for endpoint in endpoints:
                    print(endpoint["name"])

            return 0

        except BackupAgentError as e:
            logger.error(f"Failed to list endpoints: {e}")
            return 1

    def _print_endpoints_table(self, endpoints: list) -> None:
        """Print endpoints in table format."""
        if not endpoints:
            print("No endpoints configured.")
            return

        max_name = max(len(endpoint["name"]) for endpoint in endpoints)
        max_style = max(len(endpoint["pagination"]) for endpoint in endpoints)

        print(f"{'Name':<{max_name}} | {'Pagination':<{max_style}} | URL")
        print("-" * (max_name + max_style + 50))

        for endpoint in endpoints:
            print(
                f"{endpoint['name']:<{max_name}} | "
                f"{endpoint['pagination']:<{max_style}} | {endpoint['url']}"
            )


def main():
    """Main entry point."""
    configure_logging()

    cli = HubspotBackupCLI()
    exit_code = asyncio.run(cli.run())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
