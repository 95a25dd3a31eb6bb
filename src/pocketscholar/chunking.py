# src/pocketscholar/chunking.py
"""Split page text into overlapping, word-boundary-respecting chunks."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pocketscholar.models import Chunk, PageText

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 400
DEFAULT_CHUNK_OVERLAP = 80

LEGACY_CHUNK_SIZE = 500
LEGACY_CHUNK_OVERLAP = 0


def _validate(size: int, overlap: int) -> None:
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    if overlap < 0:
        raise ValueError(f"overlap must be non-negative, got {overlap}")
    if overlap >= size:
        raise ValueError(f"overlap ({overlap}) must be less than size ({size})")


def split_text(
    text: str,
    size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """Split text into windows of at most ``size`` characters.

    A window that does not reach the end of the text is pulled back to just
    after the last space inside it, so words are never cut; without such a
    space the hard ``size`` boundary is used. The next window starts
    ``overlap`` characters before the adjusted end. Pieces are stripped and
    empty pieces dropped.

    Args:
        text: Text to split
        size: Maximum window length in characters
        overlap: Characters shared by consecutive windows

    Returns:
        Ordered list of non-empty pieces (empty for blank text)

    Raises:
        ValueError: If size is not positive or overlap is not in [0, size)
    """
    _validate(size, overlap)
    if not text.strip():
        return []

    length = len(text)
    pieces: list[str] = []
    start = 0
    while start < length:
        end = min(start + size, length)
        if end < length:
            last_space = text.rfind(" ", 0, end)
            if last_space >= start:
                end = last_space + 1
        pieces.append(text[start:end].strip())
        if end >= length:
            break
        next_start = min(max(end - overlap, 0), length)
        # A window shortened to a few characters could otherwise step backwards forever
        start = next_start if next_start > start else end

    return [piece for piece in pieces if piece]


def chunk_text(
    text: str,
    page_number: int,
    document_id: str,
    size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
    start_index: int = 0,
) -> list[Chunk]:
    """Chunk the text of one page.

    Args:
        text: Page text
        page_number: 1-based page the text came from
        document_id: Owning document
        size: Maximum chunk length in characters
        overlap: Characters shared by consecutive chunks
        start_index: chunk_index given to the first produced chunk

    Returns:
        Chunks without embeddings, indexed from start_index
    """
    return [
        Chunk(
            document_id=document_id,
            page_number=page_number,
            chunk_index=start_index + offset,
            text=piece,
        )
        for offset, piece in enumerate(split_text(text, size, overlap))
    ]


class Chunker:
    """Chunks whole documents page by page.

    ``chunk_index`` runs across the whole document rather than restarting
    on each page.
    """

    def __init__(
        self,
        size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        _validate(size, overlap)
        self.size = size
        self.overlap = overlap

    @classmethod
    def legacy(cls) -> Chunker:
        """The original 500-character, no-overlap layout."""
        return cls(size=LEGACY_CHUNK_SIZE, overlap=LEGACY_CHUNK_OVERLAP)

    def chunk_pages(self, pages: Iterable[PageText], document_id: str) -> list[Chunk]:
        """Chunk every page of a document in page order."""
        chunks: list[Chunk] = []
        for page in pages:
            chunks.extend(
                chunk_text(
                    page.text,
                    page_number=page.page_number,
                    document_id=document_id,
                    size=self.size,
                    overlap=self.overlap,
                    start_index=len(chunks),
                )
            )
        logger.debug("Chunked document %s into %d chunks", document_id, len(chunks))
        return chunks
