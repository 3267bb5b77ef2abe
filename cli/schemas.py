from pydantic import BaseModel
from typing import List

class SearchResultRecord(BaseModel):
    score: float
    text: str
    path: str

class SearchResponse(BaseModel):
    query: str
    total_matches: int
    file_count: int
    elapsed_ms: float
    results: List[SearchResultRecord]
