# services/search_service.py
import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from config import settings
from core.domain import ErrorCode, SearchPipelineError, SearchReport
from core.interfaces import IChunkExtractor, IEmbeddingProvider
from services.embedding_batcher import EmbeddingBatcher, ProgressCallback
from services.result_selector import select_top
from services.similarity_ranker import SimilarityRanker
from utils.helpers import timed_block

logger = logging.getLogger(settings.LOGGER_NAME)


class SemanticSearchService:
    """
    Runs one search: discovery -> embedding -> ranking -> selection.

    The embedding provider is created through `provider_factory` only once
    there is something to search, so an empty directory never pays for
    loading the model. The provider then lives for the whole run and is
    shared read-only by every embedding worker.

    Fatal errors (SearchPipelineError) are not caught here; the caller
    decides how to report them.
    """

    def __init__(
        self,
        extractor: IChunkExtractor,
        provider_factory: Callable[[], IEmbeddingProvider],
        batch_size: int = settings.EMBEDDING_BATCH_SIZE,
        max_workers: Optional[int] = None,
        ranker: Optional[SimilarityRanker] = None
    ):
        self.extractor = extractor
        self.provider_factory = provider_factory
        self.batch_size = batch_size
        self.max_workers = max_workers
        self.ranker = ranker or SimilarityRanker()

    def search(
        self,
        root: Path,
        query: str,
        limit: int = settings.DEFAULT_RESULT_LIMIT,
        recursive: bool = False,
        extensions: Iterable[str] = tuple(settings.DEFAULT_EXTENSIONS),
        progress_factory: Optional[Callable[[int], Optional[ProgressCallback]]] = None
    ) -> SearchReport:
        """
        Args:
            root: Directory (or single file) to search
            query: Natural-language query
            limit: Maximum number of results to return
            recursive: Descend into subdirectories
            extensions: Accepted file extensions, without the dot
            progress_factory: Given the chunk count, returns a callback that
                receives (embedded, total) after each batch, or None

        Returns:
            SearchReport; `nothing_to_search` is set when no chunks were found
        """
        if limit < 0:
            raise SearchPipelineError(
                f"Result limit must not be negative, got {limit}",
                ErrorCode.INVALID_ARGUMENT
            )
        start = time.perf_counter()

        with timed_block("File Discovery, Reading & Chunking"):
            extraction = self.extractor.extract(Path(root), recursive, extensions)

        if not extraction.chunks:
            logger.info(f"No chunks extracted from {root}")
            return SearchReport(
                query=query,
                results=[],
                total_matches=0,
                file_count=0,
                elapsed_ms=(time.perf_counter() - start) * 1000.0
            )

        chunks = extraction.chunks

        with timed_block("Model Loading"):
            provider = self.provider_factory()

        progress_callback = progress_factory(len(chunks)) if progress_factory else None
        batcher = EmbeddingBatcher(
            provider,
            batch_size=self.batch_size,
            max_workers=self.max_workers,
            progress_callback=progress_callback
        )

        with timed_block("Chunk Embedding Generation", cpu_bound=True):
            chunk_embeddings = batcher.embed_chunks(chunks)

        with timed_block("Query Embedding", cpu_bound=True):
            query_embedding = batcher.embed_query(query)

        with timed_block("Similarity Calculation & Sorting", cpu_bound=True):
            ranked = self.ranker.rank(query_embedding, chunk_embeddings, chunks)

        results = select_top(ranked, limit)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            f"Ranked {len(ranked)} chunks from {extraction.file_count} files "
            f"in {elapsed_ms:.2f} ms"
        )

        return SearchReport(
            query=query,
            results=results,
            total_matches=len(ranked),
            file_count=extraction.file_count,
            elapsed_ms=elapsed_ms
        )
