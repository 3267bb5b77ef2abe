import logging
import time
from contextlib import contextmanager
from typing import Iterator

from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

@contextmanager
def timed_block(name: str, cpu_bound: bool = False) -> Iterator[None]:
    """Log how long the enclosed stage took (visible in verbose mode)."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        bound_type = "CPU-bound" if cpu_bound else "I/O-bound"
        logger.debug(f"{name}: {elapsed_ms:.2f} ms ({bound_type})")
