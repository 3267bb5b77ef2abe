"""
Shared test fixtures for the search pipeline.

Provides: a deterministic bag-of-words embedding provider, text corpus builders
Dependencies: pytest, numpy
"""

import threading
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np
import pytest

from core.interfaces import IEmbeddingProvider


class FakeEmbeddingProvider(IEmbeddingProvider):
    """
    One dimension per known word plus one shared bucket for unknown words.

    Rows are L2-normalised counts, so a chunk made only of the query word
    scores exactly 1.0 and a chunk sharing no word with it scores 0.0.
    """

    def __init__(self, vocabulary: Sequence[str], fail_on: str = ""):
        self.index: Dict[str, int] = {word: i for i, word in enumerate(vocabulary)}
        self.fail_on = fail_on
        self.calls: List[List[str]] = []
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return len(self.index) + 1

    def encode(self, texts: Sequence[str]) -> np.ndarray:
        texts = list(texts)
        with self._lock:
            self.calls.append(texts)
        if self.fail_on and any(self.fail_on in text for text in texts):
            raise ValueError(f"cannot encode text containing {self.fail_on!r}")

        matrix = np.zeros((len(texts), self.dimension), dtype="float32")
        for row, text in enumerate(texts):
            for word in text.split():
                matrix[row, self.index.get(word, len(self.index))] += 1.0
        norms = np.linalg.norm(matrix, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return matrix / norms


class IndexEmbeddingProvider(IEmbeddingProvider):
    """Encodes 'chunk-<n>' as the vector [n, 1]; lets tests check row alignment."""

    dimension = 2

    def encode(self, texts: Sequence[str]) -> np.ndarray:
        return np.array(
            [[float(text.split("-")[1]), 1.0] for text in texts], dtype="float32"
        )


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    """Provide a provider that knows the words used by the sample corpus."""
    return FakeEmbeddingProvider(["alpha", "beta", "unrelated", "content", "only"])


@pytest.fixture
def sample_corpus(tmp_path: Path) -> Path:
    """
    Two-file corpus: a.txt holds 24 x 'alpha' + 'beta' (25 words),
    b.md holds 'unrelated content only'.
    """
    (tmp_path / "a.txt").write_text(" ".join(["alpha"] * 24 + ["beta"]), encoding="utf-8")
    (tmp_path / "b.md").write_text("unrelated content only", encoding="utf-8")
    return tmp_path
