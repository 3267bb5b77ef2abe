import sys
import threading
from typing import Optional, TextIO

from config import settings


class ProgressBar:
    """Single-line stderr progress bar fed by EmbeddingBatcher callbacks."""

    def __init__(self, total: int, message: str = "Embedding file chunks...",
                 width: int = 40, stream: Optional[TextIO] = None):
        self.total = total
        self.message = message
        self.width = width
        self.stream = stream or sys.stderr
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self, done: int, total: int) -> None:
        with self._lock:
            # Callbacks from different workers can arrive out of order
            if done < self._last:
                return
            self._last = done
            filled = self.width * done // total if total else self.width
            bar = "#" * filled
            if filled < self.width:
                bar += ">" + "-" * (self.width - filled - 1)
            self.stream.write(f"\r[{bar}] {done}/{total} {self.message}")
            if done >= total:
                self.stream.write("\nDone embedding chunks.\n")
            self.stream.flush()


def progress_for(verbose: bool):
    """Progress factory for SemanticSearchService.search."""
    def factory(chunk_count: int) -> Optional[ProgressBar]:
        if verbose or chunk_count > settings.PROGRESS_BAR_THRESHOLD:
            return ProgressBar(chunk_count)
        return None
    return factory
