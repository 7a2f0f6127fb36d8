"""
Optional timing instrumentation for the expensive analysis phases.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class Timer:
    """Elapsed wall-clock seconds of a finished ``timed`` block."""

    def __init__(self):
        self.elapsed = 0.0


@contextmanager
def timed(label: str, enabled: bool = True, log: Optional[logging.Logger] = None) -> Iterator[Timer]:
    """
    Time the enclosed block.

    The elapsed time is always recorded on the yielded :class:`Timer`; it is
    logged at INFO only when ``enabled`` is true.
    """
    timer = Timer()
    start = time.perf_counter()
    try:
        yield timer
    finally:
        timer.elapsed = time.perf_counter() - start
        if enabled:
            (log or logger).info(f"{label} calculated in {timer.elapsed:.6f} seconds")
