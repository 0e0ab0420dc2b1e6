"""
HubSpot API client for the backup crawl.

This module provides the signed GET used by every pagination strategy. It
injects credentials the way the active auth mode requires and reports
transport failures as exceptions, without retrying.
"""

import asyncio
import json
import logging
from typing import Optional

from aiohttp import ClientSession, ClientTimeout
from aiohttp.client_exceptions import ClientError
from pydantic import ValidationError

from ..models.backup_config import AccountInfo, HubspotCredentials, PageResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.hubapi.com"
ACCOUNT_INFO_PATH = "/integrations/v1/me"


class TransportError(Exception):
    """Exception raised when a request cannot be completed at all."""

    pass


class HubspotApiError(Exception):
    """Exception raised when HubSpot answers with an error status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message


def error_message(body: bytes) -> str:
    """Extract the ``message`` field of an error body, or the raw text."""
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text)
    except ValueError:
        return text.strip()
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return text.strip()


class HubspotClient:
    """
    Client issuing authenticated GET requests against the HubSpot API.
    """

    def __init__(
        self,
        credentials: HubspotCredentials,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
    ):
        """
        Initialize the HubSpot client.

        Args:
            credentials: API key or private app token and its mode
            base_url: Base URL of the HubSpot API
            timeout: Total timeout of one request in seconds
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session: Optional[ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()
            self.session = None

    def sign_url(self, url: str) -> str:
        """Append the legacy API key to a URL that already has a query string."""
        url = url.strip()
        if self.credentials.appends_query_key:
            url += "&hapikey=" + self.credentials.token
        return url

    def auth_headers(self):
        if self.credentials.appends_query_key:
            return {}
        return {"Authorization": f"Bearer {self.credentials.token}"}

    async def get(self, url: str) -> PageResponse:
        """
        Issue a signed GET request.

        Args:
            url: Fully formed URL including the pagination query

        Returns:
            PageResponse: Status code and raw body

        Raises:
            TransportError: If the request fails below the HTTP layer
        """
        if not self.session:
            raise TransportError("Session not initialized")

        signed = self.sign_url(url)
        logger.debug(f"GET {url}")

        try:
            async with self.session.get(signed, headers=self.auth_headers()) as response:
                body = await response.read()
                return PageResponse(status=response.status, body=body)
        except (ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Error making request to {url}: {e!r}") from e

    async def get_account_info(self) -> AccountInfo:
        """
        Fetch details of the portal the credentials belong to.

        Returns:
            AccountInfo: Portal id, time zone and currency

        Raises:
            HubspotApiError: If HubSpot rejects the request
            TransportError: If the request fails below the HTTP layer
        """
        url = self.base_url + ACCOUNT_INFO_PATH
        if self.credentials.appends_query_key:
            url += "?hapikey=" + self.credentials.token
        if not self.session:
            raise TransportError("Session not initialized")

        try:
            async with self.session.get(url, headers=self.auth_headers()) as response:
                body = await response.read()
                status = response.status
        except (ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Error making request to {ACCOUNT_INFO_PATH}: {e!r}") from e

        if status >= 300:
            raise HubspotApiError(status, error_message(body))

        try:
            account = AccountInfo.model_validate_json(body)
        except ValidationError as e:
            raise HubspotApiError(status, f"Unexpected account response: {e}") from e

        logger.info(f"Connected to HubSpot account {account.portal_id}")
        return account
