"""
Pydantic models for HubSpot backup configuration and run results.

This module defines the data structures used to describe backed up endpoints,
the immutable page jobs walked by the crawl, decoded response envelopes and
the summary of a finished backup run.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PaginationStyle(str, Enum):
    """Enumeration of the pagination protocols exposed by HubSpot endpoints."""

    HAS_MORE = "has_more"
    ONCE = "once"
    LIMIT = "limit"
    VID_OFFSET = "vid_offset"


class AuthMode(str, Enum):
    """Enumeration of credential injection modes."""

    API_KEY = "api_key"
    PRIVATE_APP = "private_app"


# Per-style request defaults: (page_size, offset_param, cursor_key, delay)
_STYLE_DEFAULTS = {
    PaginationStyle.HAS_MORE: (250, "offset", "offset", 0.0),
    PaginationStyle.ONCE: (250, "offset", "offset", 0.0),
    PaginationStyle.LIMIT: (250, "offset", "offset", 0.0),
    PaginationStyle.VID_OFFSET: (100, "vidOffset", "vid-offset", 1.0),
}


class HubspotCredentials(BaseModel):
    """Credentials used to sign every request."""

    token: str = Field(..., description="API key or private app access token")
    mode: AuthMode = Field(
        default=AuthMode.PRIVATE_APP, description="How the token is sent"
    )

    @field_validator("token")
    @classmethod
    def strip_token(cls, v):
        """Reject blank tokens and trim surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Credential token must not be empty")
        return v

    @property
    def appends_query_key(self) -> bool:
        """Whether the key is appended to the query string (legacy mode)."""
        return self.mode == AuthMode.API_KEY


class BackupEndpoint(BaseModel):
    """Configuration for a single backed up endpoint."""

    name: str = Field(..., description="Endpoint label and output directory name")
    url: str = Field(..., description="Endpoint URL (absolute or relative to base)")
    pagination: PaginationStyle = Field(
        default=PaginationStyle.LIMIT, description="Pagination protocol"
    )
    page_size: Optional[int] = Field(
        default=None, gt=0, description="Value of the count query parameter"
    )
    offset_param: Optional[str] = Field(
        default=None, description="Query parameter carrying the offset"
    )
    cursor_key: Optional[str] = Field(
        default=None, description="Envelope field holding the next cursor"
    )
    continuation_delay: Optional[float] = Field(
        default=None, ge=0, description="Seconds to wait before a continuation"
    )
    max_pages: Optional[int] = Field(
        default=None, gt=0, description="Optional safety cap on pages fetched"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Endpoint names become directory names."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"Invalid endpoint name: {v!r}")
        return v

    @model_validator(mode="after")
    def apply_style_defaults(self):
        """Fill unset request parameters from the pagination style."""
        page_size, offset_param, cursor_key, delay = _STYLE_DEFAULTS[self.pagination]
        if self.page_size is None:
            self.page_size = page_size
        if self.offset_param is None:
            self.offset_param = offset_param
        if self.cursor_key is None:
            self.cursor_key = cursor_key
        if self.continuation_delay is None:
            self.continuation_delay = delay
        return self


class BackupConfig(BaseModel):
    """Configuration for a backup run."""

    base_url: str = Field(
        default="https://api.hubapi.com", description="Base URL for relative paths"
    )
    endpoints: List[BackupEndpoint] = Field(
        ..., description="List of endpoints to back up"
    )

    @field_validator("endpoints")
    @classmethod
    def validate_endpoints(cls, v):
        """Validate that endpoints are present and uniquely named."""
        if not v:
            raise ValueError("At least one endpoint must be configured")
        names = [endpoint.name for endpoint in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate endpoint names: {', '.join(duplicates)}")
        return v

    def resolve_url(self, endpoint: BackupEndpoint) -> str:
        """Return the absolute URL for an endpoint."""
        if endpoint.url.startswith(("http://", "https://")):
            return endpoint.url
        return self.base_url.rstrip("/") + "/" + endpoint.url.lstrip("/")


class EndpointJob(BaseModel):
    """One page request: an endpoint plus the offset to start from."""

    model_config = ConfigDict(frozen=True)

    endpoint: BackupEndpoint
    url: str
    offset: int = 0
    page: int = 1

    @property
    def name(self) -> str:
        return self.endpoint.name

    def advance(self, offset: int) -> "EndpointJob":
        """Return the job describing the next page."""
        return EndpointJob(
            endpoint=self.endpoint, url=self.url, offset=offset, page=self.page + 1
        )


class PageResponse(BaseModel):
    """Raw result of one signed GET."""

    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status < 300


class Envelope(BaseModel):
    """Decoded page: extracted items and continuation signals."""

    items: List[Any] = Field(default_factory=list)
    has_more: Optional[bool] = None
    next_cursor: Optional[int] = None


class AccountInfo(BaseModel):
    """HubSpot portal details returned by the account endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    portal_id: int = Field(..., alias="portalId")
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    currency: Optional[str] = None
    utc_offset_milliseconds: Optional[int] = Field(
        default=None, alias="utcOffsetMilliseconds"
    )
    utc_offset: Optional[str] = Field(default=None, alias="utcOffset")


class EndpointStatus(str, Enum):
    """Terminal state of an endpoint branch."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class EndpointSummary(BaseModel):
    """Per-endpoint counters collected during a crawl."""

    name: str
    pages_fetched: int = 0
    items_written: int = 0
    write_failures: int = 0
    status: EndpointStatus = EndpointStatus.RUNNING
    error_message: Optional[str] = None


class BackupResult(BaseModel):
    """Result of a backup run."""

    execution_id: str = Field(..., description="Execution identifier")
    run_date: str = Field(..., description="Date stamp of the backup directory")
    output_location: str = Field(..., description="Dated backup directory")
    started_at: datetime = Field(..., description="Start time")
    completed_at: Optional[datetime] = Field(
        default=None, description="Completion time"
    )
    duration_seconds: float = Field(default=0.0, description="Execution duration")
    endpoints: List[EndpointSummary] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def items_written(self) -> int:
        return sum(summary.items_written for summary in self.endpoints)

    @property
    def failed_endpoints(self) -> List[str]:
        return [
            summary.name
            for summary in self.endpoints
            if summary.status == EndpointStatus.FAILED
        ]
