# infrastructure/embedding_services.py
"""Sentence-transformers embedding provider with L2 normalization"""
import logging
import threading
import numpy as np
from typing import Dict, Sequence
from sentence_transformers import SentenceTransformer

from core.domain import ErrorCode, SearchPipelineError
from core.interfaces import IEmbeddingProvider
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

class SentenceTransformerEmbedding(IEmbeddingProvider):
    """
    Sentence transformer model shared by every embedding batch of a run.

    Static models such as minishlab/potion-retrieval-32M load through the
    same API as transformer models. With normalization on, every non-zero
    row is a unit vector, so cosine similarity reduces to a dot product.
    Rows that come back all zero stay zero and later score 0.0.
    """

    _models: Dict[str, SentenceTransformer] = {}  # Loaded once per model name
    _load_lock = threading.Lock()

    def __init__(self, model_name: str = settings.EMBEDDING_MODEL_NAME, normalize: bool = True):
        """Initializes the service, loading the heavy model only once."""
        self.model_name = model_name
        self.normalize = normalize
        self.model = self._load_model(model_name)

    @classmethod
    def _load_model(cls, model_name: str) -> SentenceTransformer:
        with cls._load_lock:
            if model_name in cls._models:
                return cls._models[model_name]

            try:
                logger.info(f"Attempting to load model {model_name} from local cache...")
                model = SentenceTransformer(model_name, local_files_only=True)
                logger.info(f"Successfully loaded {model_name} from local cache.")
            except Exception as e:
                logger.warning(
                    f"Model {model_name} not found in cache. Attempting online download. "
                    f"This may take a few minutes. Error: {e}"
                )
                try:
                    model = SentenceTransformer(model_name)
                except Exception as download_error:
                    raise SearchPipelineError(
                        f"Could not load embedding model '{model_name}': {download_error}",
                        ErrorCode.MODEL_LOAD_FAILED
                    ) from download_error
                logger.info(f"Successfully downloaded and loaded {model_name}.")

            cls._models[model_name] = model
            return model

    @property
    def dimension(self) -> int:
        return int(self.model.get_sentence_embedding_dimension())

    def _l2_normalize(self, arr: np.ndarray) -> np.ndarray:
        """
        L2 normalize vectors to unit length (||v|| = 1).

        Args:
            arr: (N, D) array of N vectors with D dimensions

        Returns:
            (N, D) array of unit-normalized vectors; zero rows are left at zero
        """
        norms = np.linalg.norm(arr, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return arr / norms

    def encode(self, texts: Sequence[str]) -> np.ndarray:
        """Encode a batch of texts into a (N, D) float32 matrix."""
        texts = list(texts)
        if not texts:
            return np.zeros((0, self.dimension), dtype="float32")
        raw = self.model.encode(
            texts,
            batch_size=max(len(texts), 1),
            convert_to_numpy=True,
            show_progress_bar=False
        )
        embeddings = np.asarray(raw, dtype="float32").reshape(len(texts), -1)
        if self.normalize:
            embeddings = self._l2_normalize(embeddings)
        return embeddings
