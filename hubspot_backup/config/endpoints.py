"""Endpoints backed up by default, in launch order."""

from typing import List

from ..models.backup_config import BackupConfig, BackupEndpoint, PaginationStyle

HAS_MORE = PaginationStyle.HAS_MORE
ONCE = PaginationStyle.ONCE
LIMIT = PaginationStyle.LIMIT
VID_OFFSET = PaginationStyle.VID_OFFSET

DEFAULT_ENDPOINTS = [
    ("lists", "/contacts/v1/lists", HAS_MORE),
    ("blogs", "/content/api/v2/blogs", ONCE),
    ("blog-posts", "/content/api/v2/blog-posts", LIMIT),
    ("blog-authors", "/blogs/v3/blog-authors", LIMIT),
    ("blog-topics", "/blogs/v3/topics", LIMIT),
    ("blog-comments", "/comments/v3/comments", LIMIT),
    ("layouts", "/content/api/v2/layouts", LIMIT),
    ("pages", "/content/api/v2/pages", LIMIT),
    ("hubdb-tables", "/hubdb/api/v2/tables", ONCE),
    ("templates", "/content/api/v2/templates", LIMIT),
    ("url-mappings", "/url-mappings/v3/url-mappings", LIMIT),
    ("deals", "/deals/v1/deal/paged", HAS_MORE),
    ("marketing-emails", "/marketing-emails/v1/emails", LIMIT),
    ("workflows", "/automation/v3/workflows", ONCE),
    ("companies", "/companies/v2/companies/paged", HAS_MORE),
    ("contacts", "/contacts/v1/lists/all/contacts/all", VID_OFFSET),
]


def default_endpoints() -> List[BackupEndpoint]:
    return [
        BackupEndpoint(name=name, url=url, pagination=style)
        for name, url, style in DEFAULT_ENDPOINTS
    ]


def default_config(base_url: str = "https://api.hubapi.com") -> BackupConfig:
    return BackupConfig(base_url=base_url, endpoints=default_endpoints())
