"""
Crawl orchestration for HubSpot backups.

Every page of every endpoint runs as its own asyncio task. A page task that
finds more data registers the continuation with the shared
:class:`TaskTracker` before launching it and before finishing itself, so the
tracker only drains once every branch has reached a terminal state.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Set

from ..clients.envelope import EnvelopeError, parse_envelope
from ..clients.hubspot_client import HubspotApiError, TransportError, error_message
from ..clients.item_writer import ItemWriter
from ..models.backup_config import EndpointJob, EndpointStatus, EndpointSummary
from .progress import LogProgressReporter, ProgressReporter
from .strategies import PaginationStrategy, strategy_for

logger = logging.getLogger(__name__)


class TaskTracker:
    """Counts in-flight page tasks; :meth:`wait` returns when none are left."""

    def __init__(self):
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> int:
        return self._pending

    def add(self, count: int = 1) -> None:
        self._pending += count
        if self._pending:
            self._idle.clear()

    def done(self) -> None:
        if self._pending <= 0:
            raise RuntimeError("TaskTracker.done() called without a pending task")
        self._pending -= 1
        if self._pending == 0:
            self._idle.set()

    async def wait(self) -> None:
        await self._idle.wait()


class CrawlOrchestrator:
    """
    Fans out one branch per endpoint and waits for all of them.

    The client only needs an ``async get(url) -> PageResponse`` method.
    """

    def __init__(
        self,
        client,
        writer: ItemWriter,
        reporter: Optional[ProgressReporter] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            client: Transport issuing signed GET requests
            writer: Item writer for the current run
            reporter: Receiver of progress events
        """
        self.client = client
        self.writer = writer
        self.reporter = reporter or LogProgressReporter()
        self.tracker = TaskTracker()
        self.summaries: Dict[str, EndpointSummary] = {}
        self._tasks: Set[asyncio.Task] = set()

    async def run(self, jobs: Iterable[EndpointJob]) -> List[EndpointSummary]:
        """
        Crawl every endpoint to completion.

        Args:
            jobs: Initial job of each endpoint

        Returns:
            List[EndpointSummary]: One summary per endpoint, in launch order
        """
        names = []
        for job in jobs:
            names.append(job.name)
            self.summaries[job.name] = EndpointSummary(name=job.name)
            self.reporter.start(job.name)
            self.submit(job)

        logger.info(f"Launched {len(names)} endpoint crawls")
        await self.tracker.wait()
        logger.info("All endpoint crawls finished")

        return [self.summaries[name] for name in names]

    def submit(self, job: EndpointJob) -> asyncio.Task:
        """Register a page job with the tracker and schedule it."""
        self.tracker.add()
        task = asyncio.create_task(self._run_page(job), name=f"{job.name}@{job.offset}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_page(self, job: EndpointJob) -> None:
        strategy = strategy_for(job.endpoint)
        try:
            next_job = await self._process_page(strategy, job)
            if next_job is not None:
                if strategy.continuation_delay:
                    await asyncio.sleep(strategy.continuation_delay)
                self.submit(next_job)

        except TransportError as e:
            self._fail(job, str(e))

        except HubspotApiError as e:
            self._fail(job, str(e))

        except EnvelopeError as e:
            self._fail(job, str(e))

        except Exception as e:
            logger.error(f"Unexpected error backing up {job.name}: {e}", exc_info=True)
            self._fail(job, f"Unexpected error: {e}")

        finally:
            self.tracker.done()

    async def _process_page(
        self, strategy: PaginationStrategy, job: EndpointJob
    ) -> Optional[EndpointJob]:
        summary = self.summaries.setdefault(job.name, EndpointSummary(name=job.name))

        response = await self.client.get(strategy.build_url(job))
        summary.pages_fetched += 1

        if not response.ok:
            raise HubspotApiError(response.status, error_message(response.body))

        envelope = parse_envelope(response.body, job.name, strategy.cursor_key)
        if not envelope.items:
            self._complete(job)
            return None

        written, failed = self.writer.write_page(job.name, job.offset, envelope.items)
        summary.items_written += written
        summary.write_failures += failed
        self.reporter.progress(job.name, job.offset + len(envelope.items))

        next_job = strategy.next_job(job, envelope)
        if next_job is None:
            self._complete(job)
        return next_job

    def _complete(self, job: EndpointJob) -> None:
        summary = self.summaries[job.name]
        summary.status = EndpointStatus.COMPLETED
        logger.info(f"Backed up all {job.name}")
        self.reporter.done(job.name, summary.items_written)

    def _fail(self, job: EndpointJob, message: str) -> None:
        summary = self.summaries.setdefault(job.name, EndpointSummary(name=job.name))
        summary.status = EndpointStatus.FAILED
        summary.error_message = message
        logger.error(f"Backup of {job.name} stopped at offset {job.offset}: {message}")
        self.reporter.error(job.name, message)
