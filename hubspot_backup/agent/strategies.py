"""
Pagination strategies for HubSpot endpoints.

Each strategy knows how to request a page for an :class:`EndpointJob`, how to
read continuation signals from the decoded envelope and which job, if any,
comes next. Strategies never perform I/O themselves; the orchestrator fetches,
writes and schedules.
"""

import logging
from typing import Dict, Optional, Type

from ..clients.envelope import EnvelopeError
from ..models.backup_config import BackupEndpoint, EndpointJob, Envelope, PaginationStyle

logger = logging.getLogger(__name__)


class PaginationStrategy:
    """
    Base class for pagination strategies.

    Subclasses implement :meth:`next_offset`; the base class builds page URLs
    and applies the optional ``max_pages`` cap of the endpoint.
    """

    style: PaginationStyle

    def __init__(self, endpoint: BackupEndpoint):
        self.endpoint = endpoint

    @property
    def cursor_key(self) -> str:
        return self.endpoint.cursor_key

    @property
    def continuation_delay(self) -> float:
        return self.endpoint.continuation_delay

    def build_url(self, job: EndpointJob) -> str:
        """Return the page URL of a job."""
        return (
            f"{job.url}?count={self.endpoint.page_size}"
            f"&{self.endpoint.offset_param}={job.offset}"
        )

    def next_offset(self, job: EndpointJob, envelope: Envelope) -> Optional[int]:
        raise NotImplementedError

    def next_job(self, job: EndpointJob, envelope: Envelope) -> Optional[EndpointJob]:
        """
        Decide whether the branch continues after a page.

        Args:
            job: Job whose page was just processed
            envelope: Decoded page

        Returns:
            Optional[EndpointJob]: The continuation job, or None when done

        Raises:
            EnvelopeError: If the page asks for more but gives no cursor
        """
        offset = self.next_offset(job, envelope)
        if offset is None:
            return None

        max_pages = self.endpoint.max_pages
        if max_pages is not None and job.page >= max_pages:
            logger.warning(
                f"Stopping {job.name} after {job.page} pages (max_pages reached)"
            )
            return None

        return job.advance(offset)


class HasMoreStrategy(PaginationStrategy):
    """Follows ``has-more`` and the offset reported by the API."""

    style = PaginationStyle.HAS_MORE

    def next_offset(self, job, envelope):
        if not envelope.items:
            return None
        if envelope.has_more is False:
            return None
        if envelope.next_cursor is None:
            raise EnvelopeError(
                f"{job.name} response has more pages but no '{self.cursor_key}' cursor"
            )
        return envelope.next_cursor


class OnceStrategy(PaginationStrategy):
    """Fetches a single page, whatever the envelope says."""

    style = PaginationStyle.ONCE

    def next_offset(self, job, envelope):
        return None


class LimitStrategy(PaginationStrategy):
    """
    Advances the offset by the number of items received.

    The branch only ends on an empty page; there is no page-size stopping
    rule, so an upstream that never returns an empty page is only bounded by
    ``max_pages``.
    """

    style = PaginationStyle.LIMIT

    def next_offset(self, job, envelope):
        if not envelope.items:
            return None
        return job.offset + len(envelope.items)


class VidOffsetStrategy(HasMoreStrategy):
    """
    Contacts pagination: ``vidOffset`` query parameter, ``vid-offset`` cursor
    and a fixed delay before each continuation.
    """

    style = PaginationStyle.VID_OFFSET


STRATEGIES: Dict[PaginationStyle, Type[PaginationStrategy]] = {
    PaginationStyle.HAS_MORE: HasMoreStrategy,
    PaginationStyle.ONCE: OnceStrategy,
    PaginationStyle.LIMIT: LimitStrategy,
    PaginationStyle.VID_OFFSET: VidOffsetStrategy,
}


def strategy_for(endpoint: BackupEndpoint) -> PaginationStrategy:
    """Instantiate the strategy configured for an endpoint."""
    return STRATEGIES[endpoint.pagination](endpoint)
