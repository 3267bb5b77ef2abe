# core/interfaces.py
"""Core interfaces for the search pipeline"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from core.domain import ExtractionResult

# ============= Embedding Provider Interface =============
class IEmbeddingProvider(ABC):
    """
    Interface for a text -> vector model.

    Implementations must be safe to call from several threads at once;
    one instance is shared by every embedding batch of a run.
    """

    @abstractmethod
    def encode(self, texts: Sequence[str]) -> np.ndarray:
        """
        Encode texts into a (len(texts), D) float matrix.

        Row i is the embedding of texts[i].
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Embedding dimensionality D"""
        pass

# ============= Chunk Extractor Interface =============
class IChunkExtractor(ABC):
    """Turns files under a directory into word chunks."""

    @abstractmethod
    def extract(
        self,
        root: Path,
        recursive: bool,
        extensions: Iterable[str]
    ) -> ExtractionResult:
        """
        Read every eligible file and split it into chunks.

        Unreadable files are skipped; they never fail the run.
        """
        pass
