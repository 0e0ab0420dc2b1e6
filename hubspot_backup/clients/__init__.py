"""
Clients module for HubSpot Backup.

Contains the HubSpot API client, response envelope parsing and item persistence.
"""

from .envelope import EnvelopeError, extract_items, parse_envelope
from .hubspot_client import HubspotApiError, HubspotClient, TransportError, error_message
from .item_writer import ItemWriter, serialize_item

__all__ = [
    "HubspotClient",
    "HubspotApiError",
    "TransportError",
    "error_message",
    "EnvelopeError",
    "extract_items",
    "parse_envelope",
    "ItemWriter",
    "serialize_item",
]
