from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | %(message)s"

# Set per HTTP request by the API middleware; unset for in-process callers.
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class LoggingContextFilter(logging.Filter):
    """Stamp ``record.correlation_id`` ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.correlation_id = correlation_id_var.get() or "-"
        return True


class _LedgerHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces only our own handler."""


# PUBLIC_INTERFACE
def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Route all ledger, workflow and API logs to stdout in one line format.

    Safe to call more than once: the previously installed handler is swapped
    out, handlers added by other tooling (pytest's caplog, for one) are kept.
    """
    handler = _LedgerHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _LedgerHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
