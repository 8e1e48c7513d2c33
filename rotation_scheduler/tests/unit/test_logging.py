# rotation_scheduler/tests/unit/test_logging.py

"""
Tests for the structured logging helpers.
"""

import io
import logging

from rotation_scheduler.config import get_logger
from rotation_scheduler.hybrid import incremental_optimizer
from rotation_scheduler.utils.logging import (
    StructuredFormatter,
    log_operation,
    setup_logging,
    timings,
)


class TestStructuredFormatter:
    def test_metrics_are_appended(self):
        record = logging.LogRecord(
            "rotation_scheduler.test", logging.INFO, __file__, 1, "done", None, None
        )
        record.metrics = {"duration_seconds": 0.5}
        text = StructuredFormatter().format(record)

        assert "[INFO] [rotation_scheduler.test] done" in text
        assert text.endswith("| duration_seconds=0.5")


class TestSetup:
    def test_setup_replaces_own_handler(self):
        stream = io.StringIO()
        setup_logging("DEBUG")
        logger = setup_logging("INFO", stream=stream)

        own = [h for h in logger.handlers if getattr(h, "_rotation_scheduler", False)]
        assert len(own) == 1

        get_logger("engine").info("hello")
        assert "hello" in stream.getvalue()

    def test_module_records_are_written_once(self):
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)

        get_logger("engine")
        incremental_optimizer.logger.info("seeded population")

        assert stream.getvalue().count("seeded population") == 1
        assert incremental_optimizer.logger.name == (
            "rotation_scheduler.hybrid.incremental_optimizer"
        )
        assert not incremental_optimizer.logger.handlers

    def test_get_logger_prefixes_package(self):
        assert get_logger("engine").name == "rotation_scheduler.engine"
        assert get_logger("rotation_scheduler.x").name == "rotation_scheduler.x"


class TestLogOperation:
    def test_decorator_records_duration_and_result(self):
        timings.clear()

        @log_operation("double")
        def double(value):
            return value * 2

        assert double(4) == 8
        assert double.__name__ == "double"
        assert timings.summary()["double"]["count"] == 1
