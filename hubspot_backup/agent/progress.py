"""Progress reporting for backup crawls."""

import structlog


class ProgressReporter:
    """Receives crawl events. The base class ignores them."""

    def start(self, endpoint: str) -> None:
        pass

    def progress(self, endpoint: str, count: int) -> None:
        pass

    def done(self, endpoint: str, count: int) -> None:
        pass

    def error(self, endpoint: str, message: str) -> None:
        pass


NullProgressReporter = ProgressReporter


class LogProgressReporter(ProgressReporter):
    """Emits each event as a structured log record."""

    def __init__(self, logger=None):
        self.logger = logger or structlog.get_logger("hubspot_backup.progress")

    def start(self, endpoint):
        self.logger.info("endpoint_started", endpoint=endpoint)

    def progress(self, endpoint, count):
        self.logger.info("endpoint_progress", endpoint=endpoint, items=count)

    def done(self, endpoint, count):
        self.logger.info("endpoint_completed", endpoint=endpoint, items=count)

    def error(self, endpoint, message):
        self.logger.error("endpoint_failed", endpoint=endpoint, error=message)
