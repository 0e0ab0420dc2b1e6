"""
Pytest configuration for HubSpot Backup tests.
"""

import json
import tempfile
from datetime import date
from pathlib import Path

import pytest
from hubspot_backup.agent.progress import NullProgressReporter
from hubspot_backup.clients.item_writer import ItemWriter
from hubspot_backup.models.backup_config import (
    AuthMode,
    BackupEndpoint,
    EndpointJob,
    HubspotCredentials,
    PageResponse,
    PaginationStyle,
)

BASE_URL = "https://api.example.test"
RUN_DATE = date(2024, 3, 9)


class FakeHubspotClient:
    """Serves scripted responses keyed by the unsigned page URL."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests = []

    async def get(self, url):
        self.requests.append(url)
        response = self.pages.get(url)
        if response is None:
            return PageResponse(status=404, body=b'{"message": "resource not found"}')
        if isinstance(response, Exception):
            raise response
        return response

    def requests_for(self, name):
        return [url for url in self.requests if url.startswith(f"{BASE_URL}/{name}?")]


def json_page(payload, status=200):
    """Build a page response from a JSON-serialisable payload."""
    return PageResponse(status=status, body=json.dumps(payload).encode("utf-8"))


def page_url(name, offset, count=250, param="offset"):
    return f"{BASE_URL}/{name}?count={count}&{param}={offset}"


def make_job(name, style=PaginationStyle.HAS_MORE, offset=0, **kwargs):
    endpoint = BackupEndpoint(name=name, url=f"/{name}", pagination=style, **kwargs)
    return EndpointJob(endpoint=endpoint, url=f"{BASE_URL}/{name}", offset=offset)


def read_backup(writer, name):
    """Decoded files of one endpoint directory, keyed by index."""
    folder = writer.endpoint_path(name)
    if not folder.exists():
        return {}
    return {
        int(path.stem): json.loads(path.read_text(encoding="utf-8"))
        for path in folder.glob("*.json")
    }


@pytest.fixture
def temp_output_dir():
    """Create a temporary output directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        output_dir = Path(temp_dir) / "output"
        output_dir.mkdir(parents=True, exist_ok=True)
        yield str(output_dir)


@pytest.fixture
def writer(temp_output_dir):
    """Item writer for a fixed run date."""
    return ItemWriter(temp_output_dir, run_date=RUN_DATE)


@pytest.fixture
def fake_client_factory():
    return FakeHubspotClient


@pytest.fixture
def helpers():
    """Response and job builders shared by the tests."""

    class Helpers:
        base_url = BASE_URL
        run_date = RUN_DATE

    Helpers.json_page = staticmethod(json_page)
    Helpers.page_url = staticmethod(page_url)
    Helpers.make_job = staticmethod(make_job)
    Helpers.read_backup = staticmethod(read_backup)
    return Helpers


@pytest.fixture
def quiet_reporter():
    return NullProgressReporter()


@pytest.fixture
def api_key_credentials():
    return HubspotCredentials(token="test-key", mode=AuthMode.API_KEY)


@pytest.fixture
def token_credentials():
    return HubspotCredentials(token="pat-test-token", mode=AuthMode.PRIVATE_APP)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HubSpot variables from the environment."""
    for name in (
        "HAPIKEY",
        "HAPI_ACCESS_KEY",
        "HUBSPOT_API_BASE_URL",
        "HUBSPOT_OUTPUT_PATH",
        "HUBSPOT_REQUEST_TIMEOUT",
        "VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
