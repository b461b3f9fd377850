"""Wall-clock helpers."""

import time
from collections.abc import Callable

# Callable returning the current time in epoch milliseconds
Clock = Callable[[], int]


def now_ms() -> int:
    """Return the current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000
