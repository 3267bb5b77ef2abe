# services/factory.py
from functools import partial
from typing import Optional

from config import settings
from core.interfaces import IChunkExtractor, IEmbeddingProvider
from infrastructure.document_processors import TextFileChunkExtractor
from infrastructure.embedding_services import SentenceTransformerEmbedding
from services.search_service import SemanticSearchService

# Provider functions for each component
def get_embedding_service(model_name: Optional[str] = None) -> IEmbeddingProvider:
    """Create embedding provider based on configuration."""
    return SentenceTransformerEmbedding(
        model_name or settings.EMBEDDING_MODEL_NAME,
        normalize=settings.NORMALIZE_EMBEDDINGS
    )

def get_chunk_extractor() -> IChunkExtractor:
    """Create chunk extractor based on configuration."""
    return TextFileChunkExtractor(
        chunk_size=settings.WORD_CHUNK_SIZE,
        max_workers=settings.worker_count
    )

def get_search_service(model_name: Optional[str] = None) -> SemanticSearchService:
    """
    Wire the search pipeline.

    The model is not loaded here; the service calls the provider
    factory once it has found chunks to embed.
    """
    return SemanticSearchService(
        extractor=get_chunk_extractor(),
        provider_factory=partial(get_embedding_service, model_name),
        batch_size=settings.EMBEDDING_BATCH_SIZE,
        max_workers=settings.worker_count
    )
