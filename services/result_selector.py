# services/result_selector.py
from typing import List, Sequence

from core.domain import ErrorCode, ScoredChunk, SearchPipelineError


def select_top(ranked: Sequence[ScoredChunk], limit: int) -> List[ScoredChunk]:
    """First min(limit, len(ranked)) results, in the order given."""
    if limit < 0:
        raise SearchPipelineError(
            f"Result limit must not be negative, got {limit}",
            ErrorCode.INVALID_ARGUMENT
        )
    return list(ranked[:limit])
