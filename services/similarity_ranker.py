# services/similarity_ranker.py
"""Cosine scoring of chunk embeddings against the query"""
import math
from typing import List, Sequence

import numpy as np

from core.domain import ErrorCode, ScoredChunk, SearchPipelineError, TextChunk


def _bounded_ratio(dots: np.ndarray, denominators: np.ndarray) -> np.ndarray:
    """dots / denominators clipped to [-1, 1]; 0.0 wherever a denominator is zero."""
    dots = np.asarray(dots, dtype="float64")
    denominators = np.asarray(denominators, dtype="float64")
    scores = np.divide(
        dots, denominators, out=np.zeros_like(dots), where=denominators != 0.0
    )
    return np.clip(scores, -1.0, 1.0)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    dot(a, b) / (|a| * |b|), or 0.0 when either vector has zero norm.
    """
    a = np.asarray(a, dtype="float64")
    b = np.asarray(b, dtype="float64")
    return float(_bounded_ratio(np.dot(a, b), np.linalg.norm(a) * np.linalg.norm(b)))


def cosine_similarities(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Row-wise cosine_similarity of every row of `matrix` against `query`."""
    query = np.asarray(query, dtype="float64")
    matrix = np.asarray(matrix, dtype="float64")

    denominators = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    return _bounded_ratio(matrix @ query, denominators)


def _descending_key(result: ScoredChunk) -> float:
    # NaN compares as the lowest score
    return math.inf if math.isnan(result.score) else -result.score


class SimilarityRanker:
    """Scores each chunk against the query and orders them best first."""

    def rank(
        self,
        query_embedding: np.ndarray,
        chunk_embeddings: np.ndarray,
        chunks: Sequence[TextChunk]
    ) -> List[ScoredChunk]:
        query_embedding = np.asarray(query_embedding)
        chunk_embeddings = np.asarray(chunk_embeddings)

        if len(chunks) == 0:
            return []
        if chunk_embeddings.ndim != 2 or chunk_embeddings.shape[0] != len(chunks):
            raise SearchPipelineError(
                f"Got {chunk_embeddings.shape[0] if chunk_embeddings.ndim else 0} "
                f"embeddings for {len(chunks)} chunks",
                ErrorCode.DIMENSION_MISMATCH
            )
        if query_embedding.ndim != 1 or query_embedding.shape[0] != chunk_embeddings.shape[1]:
            raise SearchPipelineError(
                f"Query embedding has shape {query_embedding.shape}, "
                f"chunk embeddings have dimension {chunk_embeddings.shape[1]}",
                ErrorCode.DIMENSION_MISMATCH
            )

        scores = cosine_similarities(query_embedding, chunk_embeddings)
        results = [
            ScoredChunk(score=float(score), path=chunk.path, text=chunk.text)
            for score, chunk in zip(scores, chunks)
        ]
        results.sort(key=_descending_key)
        return results
