from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator


@contextmanager
def timed(label: str, log: logging.Logger | None = None) -> Iterator[None]:
    """Log wall time of the block under `label`, also when the block raises."""
    t0 = time.perf_counter()
    try:
        yield
    finally:
        (log or logging.getLogger("gridmdp.timer")).info(
            "[timer] %s: %.3fs", label, time.perf_counter() - t0
        )
