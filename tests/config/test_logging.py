"""Tests for logging configuration."""

import structlog
from structlog.testing import capture_logs

from outletstock.config import configure_logging, get_logger, log_context


class TestLogContext:
    def test_values_bound_inside_block_only(self):
        with log_context(request_id="abc123", command="sync"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["request_id"] == "abc123"
            assert bound["command"] == "sync"

        assert "request_id" not in structlog.contextvars.get_contextvars()

    def test_configure_then_log(self):
        configure_logging()
        logger = get_logger("outletstock.tests")

        with capture_logs() as captured:
            logger.info("material_reconciled", code="A1")

        assert captured[0]["event"] == "material_reconciled"
        assert captured[0]["code"] == "A1"
