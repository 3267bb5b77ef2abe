# services/embedding_batcher.py
"""Batched, parallel embedding of text chunks"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

import numpy as np

from core.domain import ErrorCode, SearchPipelineError, TextChunk
from core.interfaces import IEmbeddingProvider
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

ProgressCallback = Callable[[int, int], None]


class EmbeddingBatcher:
    """
    Embeds chunks in fixed-size batches on a bounded thread pool.

    The provider is shared by all workers. Batches may finish in any
    order; the result matrix is always reassembled in chunk order, so
    row i belongs to chunks[i].

    `embedded_count` only grows and may be read from another thread
    (e.g. a progress display) at any time.
    """

    def __init__(
        self,
        provider: IEmbeddingProvider,
        batch_size: int = settings.EMBEDDING_BATCH_SIZE,
        max_workers: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        if batch_size < 1:
            raise SearchPipelineError(
                f"batch_size must be positive, got {batch_size}",
                ErrorCode.INVALID_ARGUMENT
            )
        self.provider = provider
        self.batch_size = batch_size
        self.max_workers = max_workers or settings.worker_count
        self.progress_callback = progress_callback
        self._embedded = 0
        self._total = 0
        self._lock = threading.Lock()

    @property
    def embedded_count(self) -> int:
        """Chunks embedded so far in the current run"""
        with self._lock:
            return self._embedded

    def embed_chunks(self, chunks: Sequence[TextChunk]) -> np.ndarray:
        """Return a (len(chunks), D) matrix aligned with `chunks`."""
        texts = [chunk.text for chunk in chunks]
        with self._lock:
            self._embedded = 0
            self._total = len(texts)

        batches: List[List[str]] = [
            texts[i:i + self.batch_size]
            for i in range(0, len(texts), self.batch_size)
        ]
        if not batches:
            return np.zeros((0, self.provider.dimension), dtype="float32")

        logger.debug(
            f"Embedding {len(texts)} chunks in {len(batches)} batches "
            f"of up to {self.batch_size} with {self.max_workers} workers"
        )

        # executor.map yields in submission order regardless of completion order
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(self._encode_batch, batches))

        dimension = results[0].shape[1]
        for index, embeddings in enumerate(results):
            if embeddings.shape[1] != dimension:
                raise SearchPipelineError(
                    f"Embedding batch {index} has dimension {embeddings.shape[1]}, "
                    f"expected {dimension}",
                    ErrorCode.DIMENSION_MISMATCH
                )
        return np.vstack(results)

    def embed_query(self, query: str) -> np.ndarray:
        """Encode the query on its own as a single-element batch."""
        return self._encode(
            [query], f"Failed to encode query string {query!r}"
        )[0]

    # ------------------------------------------------------------------

    def _encode_batch(self, batch: List[str]) -> np.ndarray:
        embeddings = self._encode(batch, f"Embedding batch of {len(batch)} chunks failed")
        self._advance(len(batch))
        return embeddings

    def _encode(self, texts: List[str], failure_message: str) -> np.ndarray:
        try:
            embeddings = np.asarray(self.provider.encode(texts), dtype="float32")
        except SearchPipelineError:
            raise
        except Exception as e:
            raise SearchPipelineError(f"{failure_message}: {e}", ErrorCode.EMBEDDING_FAILED) from e

        if embeddings.ndim != 2 or embeddings.shape[0] != len(texts):
            raise SearchPipelineError(
                f"{failure_message}: provider returned shape {embeddings.shape} "
                f"for {len(texts)} texts",
                ErrorCode.EMBEDDING_FAILED
            )
        return embeddings

    def _advance(self, count: int) -> None:
        with self._lock:
            self._embedded += count
            done, total = self._embedded, self._total
        if self.progress_callback:
            self.progress_callback(done, total)
