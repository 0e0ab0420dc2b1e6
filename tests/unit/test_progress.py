"""Unit tests for progress reporters."""

from unittest.mock import Mock

from hubspot_backup.agent.progress import LogProgressReporter, NullProgressReporter


def test_null_reporter_ignores_events():
    reporter = NullProgressReporter()
    reporter.start("deals")
    reporter.progress("deals", 10)
    reporter.done("deals", 10)
    reporter.error("deals", "HTTP 500: boom")


def test_log_reporter_events():
    logger = Mock()
    reporter = LogProgressReporter(logger=logger)

    reporter.start("deals")
    reporter.progress("deals", 250)
    reporter.done("deals", 300)
    reporter.error("contacts", "HTTP 401: bad key")

    logger.info.assert_any_call("endpoint_started", endpoint="deals")
    logger.info.assert_any_call("endpoint_progress", endpoint="deals", items=250)
    logger.info.assert_any_call("endpoint_completed", endpoint="deals", items=300)
    logger.error.assert_called_once_with(
        "endpoint_failed", endpoint="contacts", error="HTTP 401: bad key"
    )
