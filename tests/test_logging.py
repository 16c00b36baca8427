"""
Log configuration and correlation-id stamping.
"""

import logging

from enterprise_ledger.core.logging import LoggingContextFilter, configure_logging, correlation_id_var


def _record() -> logging.LogRecord:
    return logging.LogRecord("enterprise_ledger", logging.INFO, __file__, 1, "msg", None, None)


class TestLoggingContextFilter:
    def test_placeholder_outside_a_request(self):
        record = _record()
        assert LoggingContextFilter().filter(record) is True
        assert record.correlation_id == "-"

    def test_stamps_current_correlation_id(self):
        token = correlation_id_var.set("cid-42")
        try:
            record = _record()
            LoggingContextFilter().filter(record)
        finally:
            correlation_id_var.reset(token)
        assert record.correlation_id == "cid-42"


class TestConfigureLogging:
    def test_reconfiguring_keeps_one_ledger_handler_and_foreign_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        try:
            configure_logging("DEBUG")
            configure_logging(logging.WARNING)
            ours = [h for h in root.handlers if any(isinstance(f, LoggingContextFilter) for f in h.filters)]
            assert len(ours) == 1
            assert foreign in root.handlers
            assert root.level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
