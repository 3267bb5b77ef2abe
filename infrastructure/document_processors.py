# infrastructure/document_processors.py
"""Plain-text document discovery and word chunking

Files are discovered first (a cheap directory walk), then read and chunked
on a thread pool. Reading is I/O-bound and never overlaps with the
CPU-bound embedding stage that follows.

Key properties:
- Only regular files are considered; symlinks are not followed.
- Extensions match case-sensitively against the text after the last dot.
- A file that cannot be read or decoded as UTF-8 is skipped and logged.
- Output order is sorted by path, so it never depends on traversal order.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

from core.domain import ExtractionResult, TextChunk
from core.interfaces import IChunkExtractor
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)


def split_into_word_chunks(content: str, chunk_size: int) -> List[str]:
    """
    Split text on whitespace runs and join every `chunk_size` words.

    The last chunk holds the remainder; text without words gives [].
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    words = content.split()
    return [
        " ".join(words[i:i + chunk_size])
        for i in range(0, len(words), chunk_size)
    ]


def file_extension(path: Path) -> Optional[str]:
    """Extension without the dot, or None for names like '.bashrc' or 'README'."""
    suffix = path.suffix
    return suffix[1:] if suffix else None


class TextFileChunkExtractor(IChunkExtractor):
    """Reads eligible text files under a root and splits them into word chunks."""

    def __init__(
        self,
        chunk_size: int = settings.WORD_CHUNK_SIZE,
        max_workers: Optional[int] = None
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.max_workers = max_workers or settings.worker_count

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract(
        self,
        root: Path,
        recursive: bool,
        extensions: Iterable[str]
    ) -> ExtractionResult:
        accepted = set(extensions)
        candidates = sorted(
            path for path in self._iter_files(Path(root), recursive)
            if file_extension(path) in accepted
        )
        logger.debug(f"Found {len(candidates)} candidate files under {root}")

        if not candidates:
            return ExtractionResult()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            per_file = list(executor.map(self._chunk_file, candidates))

        chunks: List[TextChunk] = []
        file_count = 0
        for file_chunks in per_file:
            if file_chunks:
                file_count += 1
                chunks.extend(file_chunks)

        logger.debug(f"Extracted {len(chunks)} chunks from {file_count} files")
        return ExtractionResult(chunks=chunks, file_count=file_count)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _iter_files(self, root: Path, recursive: bool) -> Iterator[Path]:
        """Yield regular files directly under root, or at any depth when recursive."""
        if root.is_file() and not root.is_symlink():
            yield root
            return

        pending: List[Path] = [root]
        visited: Set[Path] = set()
        while pending:
            directory = pending.pop()
            if directory in visited:
                continue
            visited.add(directory)
            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        try:
                            if entry.is_file(follow_symlinks=False):
                                yield Path(entry.path)
                            elif recursive and entry.is_dir(follow_symlinks=False):
                                pending.append(Path(entry.path))
                        except OSError as e:
                            logger.debug(f"Skipping {entry.path}: {e}")
            except OSError as e:
                logger.debug(f"Cannot list {directory}: {e}")

    def _chunk_file(self, path: Path) -> List[TextChunk]:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Failed to read {path}: {e}")
            return []
        return [
            TextChunk(path=path, text=text)
            for text in split_into_word_chunks(content, self.chunk_size)
        ]
