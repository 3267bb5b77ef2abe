"""Human-readable and JSON rendering of search reports"""
from typing import Iterable, List, Sequence

from config import settings
from core.domain import ScoredChunk, SearchReport
from cli.schemas import SearchResponse, SearchResultRecord
from utils.paths import format_path_for_terminal

TABLE_HEADERS = ("Score", "Matching Text Chunk", "File Path")


def truncate_text(text: str, max_len: int = settings.MAX_CHUNK_DISPLAY_LEN) -> str:
    """Cut text to max_len characters, marking the cut with '...'."""
    if len(text) > max_len:
        return text[:max_len] + "..."
    return text


def no_files_message(root: str, extensions: Iterable[str]) -> str:
    listed = ", ".join(f".{ext}" for ext in extensions)
    return f"No text files ({listed}) found to search in '{root}'."


def render_summary(report: SearchReport, limit: int) -> str:
    return (
        f"\nFound {report.total_matches} relevant chunks from {report.file_count} files "
        f"for query \"{report.query}\" in {report.elapsed_ms:.2f} ms. "
        f"Top {min(limit, report.total_matches)} results:"
    )


def _rows(results: Sequence[ScoredChunk]) -> List[List[str]]:
    return [
        [
            f"{result.score:.2f}",
            truncate_text(result.text),
            format_path_for_terminal(result.path),
        ]
        for result in results
    ]


def render_table(results: Sequence[ScoredChunk]) -> str:
    """Box-drawn table of results, or 'No matches found.' when there are none."""
    if not results:
        return "No matches found."

    rows = _rows(results)
    widths = [
        max(len(header), *(len(row[col]) for row in rows))
        for col, header in enumerate(TABLE_HEADERS)
    ]

    def border(left: str, fill: str, joint: str, right: str) -> str:
        return left + joint.join(fill * (w + 2) for w in widths) + right

    def line(cells: Sequence[str]) -> str:
        return "│" + "│".join(f" {cell.ljust(w)} " for cell, w in zip(cells, widths)) + "│"

    lines = [border("┌", "─", "┬", "┐"), line(TABLE_HEADERS), border("╞", "═", "╪", "╡")]
    for i, row in enumerate(rows):
        if i:
            lines.append(border("├", "─", "┼", "┤"))
        lines.append(line(row))
    lines.append(border("└", "─", "┴", "┘"))
    return "\n".join(lines)


def build_response(report: SearchReport) -> SearchResponse:
    return SearchResponse(
        query=report.query,
        total_matches=report.total_matches,
        file_count=report.file_count,
        elapsed_ms=round(report.elapsed_ms, 2),
        results=[
            SearchResultRecord(
                score=result.score,
                text=truncate_text(result.text),
                path=format_path_for_terminal(result.path),
            )
            for result in report.results
        ],
    )


def render_json(report: SearchReport) -> str:
    return build_response(report).model_dump_json(indent=2)
