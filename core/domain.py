# core/domain.py
"""Domain models and error types shared across the search pipeline."""
from enum import Enum

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

# ============= Enums =============

class ErrorCode(str, Enum):
    """Error codes for fatal pipeline failures."""
    MODEL_LOAD_FAILED = "MODEL_LOAD_FAILED"
    EMBEDDING_FAILED = "EMBEDDING_FAILED"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class SearchPipelineError(Exception):
    """Raised when the search pipeline cannot complete"""

    def __init__(self, message: str, error_code: ErrorCode):
        self.message = message
        self.error_code = error_code
        super().__init__(message)

    def __str__(self):
        return f"[{self.error_code.value}] {self.message}"


# ============= Domain Models =============

@dataclass(frozen=True)
class TextChunk:
    """A run of at most WORD_CHUNK_SIZE words taken from one file"""
    path: Path
    text: str


@dataclass
class ScoredChunk:
    """A chunk paired with its similarity to the query"""
    score: float
    path: Path
    text: str


@dataclass
class ExtractionResult:
    """Chunks found under a search root and the number of files they came from"""
    chunks: List[TextChunk] = field(default_factory=list)
    file_count: int = 0


@dataclass
class SearchReport:
    """Everything the presentation layer needs about one search run"""
    query: str
    results: List[ScoredChunk]
    total_matches: int
    file_count: int
    elapsed_ms: float

    @property
    def nothing_to_search(self) -> bool:
        return self.total_matches == 0 and self.file_count == 0
