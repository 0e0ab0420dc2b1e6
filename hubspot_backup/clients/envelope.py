"""
Decoding of HubSpot list responses.

HubSpot wraps result arrays either under ``objects`` or under a key named
after the endpoint, and signals continuation through ``has-more`` plus an
offset field whose name depends on the endpoint.
"""

import json
from typing import Any, Optional

from ..models.backup_config import Envelope


class EnvelopeError(Exception):
    """Exception raised when a response body does not have the expected shape."""

    pass


def extract_items(data: dict, endpoint_name: str) -> list:
    """Return the item array of a decoded page, or an empty list."""
    if data.get("objects") is not None:
        items = data["objects"]
    elif data.get(endpoint_name) is not None:
        items = data[endpoint_name]
    else:
        return []
    return items if isinstance(items, list) else []


def _has_more(value: Any) -> Optional[bool]:
    if value is None:
        return None
    return value is not False


def _cursor(value: Any) -> Optional[int]:
    # bool is an int subclass; a flag is never a cursor
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def parse_envelope(body: bytes, endpoint_name: str, cursor_key: str = "offset") -> Envelope:
    """
    Decode one page body.

    Args:
        body: Raw response body
        endpoint_name: Name of the endpoint, used as the fallback wrapper key
        cursor_key: Envelope field holding the next offset

    Returns:
        Envelope: Items, has-more flag and next cursor

    Raises:
        EnvelopeError: If the body is not a JSON object
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise EnvelopeError(f"Invalid JSON in {endpoint_name} response: {e}") from e

    if not isinstance(data, dict):
        raise EnvelopeError(
            f"Expected a JSON object in {endpoint_name} response, got {type(data).__name__}"
        )

    return Envelope(
        items=extract_items(data, endpoint_name),
        has_more=_has_more(data.get("has-more")),
        next_cursor=_cursor(data.get(cursor_key)),
    )
