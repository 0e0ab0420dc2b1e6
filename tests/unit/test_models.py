"""
Unit tests for HubSpot Backup models.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError
from hubspot_backup.models.backup_config import (
    AuthMode,
    BackupConfig,
    BackupEndpoint,
    BackupResult,
    EndpointJob,
    EndpointStatus,
    EndpointSummary,
    HubspotCredentials,
    PageResponse,
    PaginationStyle,
)


class TestBackupEndpoint:
    """Test BackupEndpoint."""

    def test_style_defaults(self):
        endpoint = BackupEndpoint(name="deals", url="/deals/v1/deal/paged", pagination="has_more")
        assert endpoint.pagination == PaginationStyle.HAS_MORE
        assert endpoint.page_size == 250
        assert endpoint.offset_param == "offset"
        assert endpoint.cursor_key == "offset"
        assert endpoint.continuation_delay == 0
        assert endpoint.max_pages is None

    def test_explicit_values_win(self):
        endpoint = BackupEndpoint(
            name="contacts",
            url="/contacts",
            pagination=PaginationStyle.VID_OFFSET,
            page_size=50,
            continuation_delay=0,
        )
        assert endpoint.page_size == 50
        assert endpoint.continuation_delay == 0
        assert endpoint.offset_param == "vidOffset"

    @pytest.mark.parametrize("name", ["", "a/b", "..", "."])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            BackupEndpoint(name=name, url="/x")

    def test_invalid_page_size(self):
        with pytest.raises(ValidationError):
            BackupEndpoint(name="deals", url="/x", page_size=0)


class TestBackupConfig:
    """Test BackupConfig."""

    def test_requires_endpoints(self):
        with pytest.raises(ValidationError, match="At least one endpoint"):
            BackupConfig(endpoints=[])

    def test_resolve_url(self):
        config = BackupConfig(
            base_url="https://api.hubapi.com/",
            endpoints=[
                BackupEndpoint(name="a", url="/a/v1"),
                BackupEndpoint(name="b", url="https://other.test/b"),
            ],
        )
        assert config.resolve_url(config.endpoints[0]) == "https://api.hubapi.com/a/v1"
        assert config.resolve_url(config.endpoints[1]) == "https://other.test/b"


class TestEndpointJob:
    """Test EndpointJob."""

    def test_advance_creates_new_job(self):
        endpoint = BackupEndpoint(name="pages", url="/pages")
        job = EndpointJob(endpoint=endpoint, url="https://api.hubapi.com/pages")

        next_job = job.advance(250)

        assert (job.offset, job.page) == (0, 1)
        assert (next_job.offset, next_job.page) == (250, 2)
        assert next_job.name == "pages"

    def test_job_is_immutable(self):
        job = EndpointJob(endpoint=BackupEndpoint(name="pages", url="/p"), url="/p")
        with pytest.raises(ValidationError):
            job.offset = 10


class TestCredentials:
    """Test HubspotCredentials."""

    def test_token_is_stripped(self):
        credentials = HubspotCredentials(token="  key \n", mode=AuthMode.API_KEY)
        assert credentials.token == "key"
        assert credentials.appends_query_key

    def test_blank_token(self):
        with pytest.raises(ValidationError):
            HubspotCredentials(token="   ")

    def test_default_mode(self):
        assert HubspotCredentials(token="pat").mode == AuthMode.PRIVATE_APP


def test_page_response_ok():
    assert PageResponse(status=200).ok
    assert PageResponse(status=299).ok
    assert not PageResponse(status=301).ok


def test_backup_result_totals():
    result = BackupResult(
        execution_id="x",
        run_date="2024-03-09",
        output_location="/tmp/x",
        started_at=datetime(2024, 3, 9),
        endpoints=[
            EndpointSummary(name="a", items_written=3, status=EndpointStatus.COMPLETED),
            EndpointSummary(name="b", items_written=1, status=EndpointStatus.FAILED),
        ],
    )
    assert result.items_written == 4
    assert result.failed_endpoints == ["b"]
