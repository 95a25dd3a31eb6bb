# src/pocketscholar/sanitizer.py
"""Clean up raw model output before it is shown as an answer.

Small local models tend to echo the prompt around their answer and to fall
into repetition loops. The sanitizer runs a fixed sequence of passes, each
narrowing the text:

1. Strip a prompt echo at the start
2. Strip an ``Answer:`` / ``A:`` label
3. Truncate at a prompt echo after the answer
4. Truncate repetition loops (line, short pattern, word)
5. Cap the length at a sentence boundary

Echo stripping runs before repetition detection because an echoed prompt
can itself look like repeated boilerplate.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence

logger = logging.getLogger(__name__)

LEADING_FRAGMENTS: tuple[str, ...] = (
    "### Response:",
    "### Instruction:",
    "Answer the question using ONLY",
    "Context from documents:",
    "Based on the context above",
    "Answer based ONLY on these passages",
    "Question:",
    "Context:",
    "Answer briefly and directly:",
)

TRAILING_MARKERS: tuple[str, ...] = (
    "### Instruction:",
    "### Context:",
    "### Question:",
    "### Response:",
    "Q:",
    "Question:",
    "Context:",
    "Answer briefly",
    "Answer based ONLY",
    "Based on the context",
    "Answer the question using",
)

ANSWER_LABELS: tuple[str, ...] = ("Answer:", "A:")

# Repetition detectors ignore text shorter than this
MIN_REPETITION_TEXT = 30
MIN_LINE_REPEATS = 3
MIN_PATTERN_REPEATS = 3
PATTERN_LENGTHS = range(3, 21)
MIN_WORD_REPEATS = 5


def _find(text: str, needle: str, start: int = 0) -> int:
    """Case-insensitive index of needle in text[start:], or -1."""
    match = re.compile(re.escape(needle), re.IGNORECASE).search(text, start)
    return match.start() if match else -1


def _truncate_repeated_lines(text: str) -> str | None:
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    counts = Counter(lines)
    repeated = next(
        (
            line
            for line, count in counts.items()
            if count >= MIN_LINE_REPEATS and len(line) >= 3
        ),
        None,
    )
    if repeated is None:
        return None

    logger.warning("Detected repeated line (%dx): %r", counts[repeated], repeated[:30])
    seen: set[str] = set()
    kept: list[str] = []
    for line in lines:
        if line in seen:
            if line == repeated:
                break
            continue
        seen.add(line)
        kept.append(line)
    return " ".join(kept).strip() or lines[0]


def _truncate_repeated_pattern(text: str) -> str | None:
    length = len(text)
    for pattern_len in PATTERN_LENGTHS:
        for i in range(0, max(0, length - pattern_len * MIN_PATTERN_REPEATS)):
            pattern = text[i : i + pattern_len]
            if not pattern.strip():
                continue

            count = 1
            j = i + pattern_len
            while j + pattern_len <= length and text[j : j + pattern_len] == pattern:
                count += 1
                j += pattern_len

            if count >= MIN_PATTERN_REPEATS:
                logger.warning("Detected repeated pattern (%dx): %r", count, pattern)
                return text[:i].strip() or pattern.strip()
    return None


def _truncate_repeated_words(text: str) -> str | None:
    words = re.split(r"\s+", text)
    for i in range(len(words) - (MIN_WORD_REPEATS - 1)):
        word = words[i]
        if len(word) < 2:
            continue
        count = 1
        for following in words[i + 1 :]:
            if following != word:
                break
            count += 1
        if count >= MIN_WORD_REPEATS:
            logger.warning("Detected word repetition (%dx): %r", count, word)
            return " ".join(words[:i]) or word
    return None


def truncate_repetition(text: str) -> str:
    """Cut text before the first repetition loop.

    Three detectors run in order and the first that fires wins: a line
    occurring three or more times, a 3-20 character pattern repeated three
    times back to back, and one word repeated five times in a row.
    Text without a loop is returned unchanged.
    """
    if len(text) < MIN_REPETITION_TEXT:
        return text

    for detector in (
        _truncate_repeated_lines,
        _truncate_repeated_pattern,
        _truncate_repeated_words,
    ):
        truncated = detector(text)
        if truncated is not None:
            return truncated
    return text


class ResponseSanitizer:
    """Post-processes raw generated text into a clean answer."""

    def __init__(
        self,
        max_chars: int = 800,
        min_sentence_cut: int = 200,
        leading_window: int = 100,
        trailing_offset: int = 30,
        leading_fragments: Sequence[str] = LEADING_FRAGMENTS,
        trailing_markers: Sequence[str] = TRAILING_MARKERS,
    ) -> None:
        """Initialize the sanitizer.

        Args:
            max_chars: Longest answer returned
            min_sentence_cut: An over-long answer is cut at its last sentence
                end only if that lies past this index; otherwise it is hard-cut
            leading_window: Leading echoes are only searched for in this many
                leading characters
            trailing_offset: Trailing echoes are only searched for after this
                many characters, so short genuine answers are not cut
            leading_fragments: Prompt fragments stripped from the start
            trailing_markers: Prompt fragments that end the answer
        """
        self.max_chars = max_chars
        self.min_sentence_cut = min_sentence_cut
        self.leading_window = leading_window
        self.trailing_offset = trailing_offset
        self.leading_fragments = tuple(leading_fragments)
        self.trailing_markers = tuple(trailing_markers)

    def sanitize(self, raw: str) -> str:
        """Run all passes over raw model output."""
        cleaned = raw.strip()
        cleaned = self.strip_leading_echo(cleaned)
        cleaned = self.strip_answer_label(cleaned)
        cleaned = self.truncate_trailing_echo(cleaned)
        cleaned = truncate_repetition(cleaned)
        cleaned = self.cap_length(cleaned)
        return cleaned.strip()

    def strip_leading_echo(self, text: str) -> str:
        for fragment in self.leading_fragments:
            idx = _find(text[: self.leading_window], fragment)
            if idx == -1:
                continue
            remainder = text[idx + len(fragment) :].strip()
            if remainder:
                text = remainder
        return text

    def strip_answer_label(self, text: str) -> str:
        for label in ANSWER_LABELS:
            if text[: len(label)].lower() == label.lower():
                text = text[len(label) :].strip()
        return text

    def truncate_trailing_echo(self, text: str) -> str:
        for marker in self.trailing_markers:
            idx = _find(text, marker, min(self.trailing_offset, len(text)))
            if idx != -1:
                text = text[:idx].strip()
        return text

    def cap_length(self, text: str) -> str:
        if len(text) <= self.max_chars:
            return text
        head = text[: self.max_chars]
        last_sentence_end = max(head.rfind(mark) for mark in ".!?")
        if last_sentence_end > self.min_sentence_cut:
            return head[: last_sentence_end + 1]
        return head + "..."


def sanitize_response(raw: str) -> str:
    """Sanitize with the default thresholds."""
    return ResponseSanitizer().sanitize(raw)
