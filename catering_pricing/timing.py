"""
Performance timing for pricing calculations.

Every calculation is expected to finish well inside its budget; overruns are
logged as warnings so slow recomputation shows up before users feel it.
"""

import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class Timer:
    """Elapsed-time holder yielded by `timed`."""

    def __init__(self, label: str):
        self.label = label
        self.started = time.perf_counter()
        self.duration_ms = 0.0

    def stop(self) -> float:
        self.duration_ms = (time.perf_counter() - self.started) * 1000.0
        return self.duration_ms


@contextmanager
def timed(label: str, budget_ms: float = None):
    """
    Time the wrapped block and log the duration.

    Logs a warning when the block takes longer than budget_ms. Exceptions
    raised inside the block are logged and re-raised unchanged.
    """
    timer = Timer(label)
    try:
        yield timer
    except Exception:
        timer.stop()
        logger.error("%s failed after %.2fms", label, timer.duration_ms)
        raise
    timer.stop()
    logger.debug("%s took %.2fms", label, timer.duration_ms)
    if budget_ms is not None and timer.duration_ms > budget_ms:
        logger.warning(
            "%s exceeded performance budget: %.2fms (budget %.0fms)",
            label, timer.duration_ms, budget_ms,
        )
