# src/pocketscholar/context.py
"""Assemble ranked chunks into one bounded context string."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pocketscholar.models import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTEXT_CHARS = 1500
DEFAULT_SEPARATOR = "\n\n"
DEFAULT_PLACEHOLDER = "(No content available.)"

SENTENCE_ENDINGS = (". ", "! ", "? ", ".\n", "!\n", "?\n", ".\r\n", "!\r\n", "?\r\n")


def remove_overlap(
    previous_end: str,
    new_chunk: str,
    window: int = 100,
    min_overlap: int = 20,
) -> str:
    """Strip text the new chunk shares with the end of the previous one.

    Looks for the longest suffix of ``previous_end`` (at most ``window``
    characters) that is also a prefix of ``new_chunk``, trying lengths from
    longest down to ``min_overlap``.

    Returns:
        ``new_chunk`` without the shared prefix (trimmed), or unchanged if
        no overlap of at least ``min_overlap`` characters exists
    """
    if not previous_end or not new_chunk:
        return new_chunk

    check_length = min(window, len(previous_end), len(new_chunk))
    for match_len in range(check_length, min_overlap - 1, -1):
        if match_len <= 0:
            break
        if new_chunk.startswith(previous_end[-match_len:]):
            return new_chunk[match_len:].strip()
    return new_chunk


def _last_sentence_end(text: str) -> int:
    """Index of the last sentence-ending punctuation mark in text, or -1."""
    return max(text.rfind(ending) for ending in SENTENCE_ENDINGS)


class ContextAssembler:
    """Merges ranked chunks into a context of at most ``max_chars`` characters.

    Chunks are joined in ranking order. Text a chunk shares with the tail of
    the previously appended chunk (chunker overlap) is removed so the model
    does not see duplicated passages. The first chunk that does not fit
    whole is either cut at a sentence boundary or dropped, and assembly
    stops there.
    """

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
        separator: str = DEFAULT_SEPARATOR,
        overlap_window: int = 100,
        min_overlap: int = 20,
        partial_threshold: float = 0.75,
        min_partial_chars: int = 100,
        placeholder: str = DEFAULT_PLACEHOLDER,
        ellipsis: str = "…",
    ) -> None:
        """Initialize the assembler.

        Args:
            max_chars: Hard budget for the assembled context
            separator: Inserted between chunks
            overlap_window: How much of the previous chunk's tail to compare
            min_overlap: Shortest shared run treated as overlap
            partial_threshold: A truncated chunk is kept only if its sentence
                boundary lies past this fraction of the remaining space
            min_partial_chars: Remaining space needed to attempt a partial chunk
            placeholder: Returned when no chunks are given
            ellipsis: Appended to a truncated chunk
        """
        if max_chars <= 0:
            raise ValueError(f"max_chars must be positive, got {max_chars}")
        if not 0.0 <= partial_threshold <= 1.0:
            raise ValueError(
                f"partial_threshold must be between 0.0 and 1.0, got {partial_threshold}"
            )
        self.max_chars = max_chars
        self.separator = separator
        self.overlap_window = overlap_window
        self.min_overlap = min_overlap
        self.partial_threshold = partial_threshold
        self.min_partial_chars = min_partial_chars
        self.placeholder = placeholder
        self.ellipsis = ellipsis

    def assemble(self, chunks: Sequence[Chunk | ScoredChunk]) -> str:
        """Build the context string from chunks in ranking order."""
        parts: list[str] = []
        length = 0
        previous_end = ""

        for item in chunks:
            chunk = item.chunk if isinstance(item, ScoredChunk) else item
            part = chunk.text.strip()
            if not part:
                continue

            if parts and previous_end:
                part = remove_overlap(previous_end, part, self.overlap_window, self.min_overlap)
                if not part:
                    continue

            separator = self.separator if parts else ""
            if length + len(separator) + len(part) > self.max_chars:
                space_left = self.max_chars - length - len(separator)
                partial = self._truncate(part, space_left)
                if partial is not None:
                    parts.append(separator + partial + self.ellipsis)
                    length += len(parts[-1])
                else:
                    logger.debug("Dropped chunk %s: no sentence boundary fits", chunk.id)
                break

            parts.append(separator + part)
            length += len(separator) + len(part)
            previous_end = part[-self.overlap_window :]

        if not chunks:
            return self.placeholder
        return "".join(parts)

    def _truncate(self, part: str, space_left: int) -> str | None:
        """Cut part at its last sentence end within space_left, or None to drop it."""
        if space_left <= self.min_partial_chars:
            return None
        # Leave room for the ellipsis marker
        head = part[: space_left - len(self.ellipsis)]
        cut = _last_sentence_end(head)
        if cut <= space_left * self.partial_threshold:
            return None
        return part[: cut + 1].strip()


def assemble_context(
    chunks: Sequence[Chunk | ScoredChunk],
    max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
) -> str:
    """Assemble chunks with the default separator and thresholds."""
    return ContextAssembler(max_chars=max_chars).assemble(chunks)
