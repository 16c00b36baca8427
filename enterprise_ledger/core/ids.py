"""
Identity and cloning helpers shared by the store, services and repositories.
"""

from __future__ import annotations

import copy
import itertools
import time
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

T = TypeVar("T")

_counter = itertools.count(1)
_CENT = Decimal("0.01")


# PUBLIC_INTERFACE
def new_id(prefix: str) -> str:
    """
    Return a process-unique identifier: ``{prefix}-{epoch_ms}-{counter:x}``.

    Uniqueness holds for the lifetime of the process only; ids are neither
    unpredictable nor unique across processes.
    """
    return f"{prefix}-{int(time.time() * 1000)}-{next(_counter):x}"


# PUBLIC_INTERFACE
def deep_copy(value: T) -> T:
    """Return a structurally identical copy sharing no mutable references with ``value``."""
    return copy.deepcopy(value)


# PUBLIC_INTERFACE
def round2(value: float) -> float:
    """Round half-up to two decimal places."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)
