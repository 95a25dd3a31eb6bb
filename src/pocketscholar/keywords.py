# src/pocketscholar/keywords.py
"""Lexical scoring of chunk text against a query's significant words.

Embedding models handle paraphrase well but often miss proper nouns and
rare terms they never learned; a plain substring/word match recovers those.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from pocketscholar.models import Chunk, ScoredChunk

MIN_TERM_LENGTH = 3

# Cap on the coverage bonus so very short chunks containing a term are not over-boosted
MAX_COVERAGE_BONUS = 0.3

_TERM_SPLIT = re.compile(r"[\s,.!?;:'\"()\[\]{}]+")


class KeywordMatch(NamedTuple):
    """Raw match counts of a set of terms against one text.

    Attributes:
        points: One point per term found as a substring, one more if it
            also matches as a whole word
        matched_chars: Total length of the terms that matched
        term_count: Number of terms searched for
    """

    points: int
    matched_chars: int
    term_count: int

    @property
    def matched(self) -> bool:
        return self.points > 0

    @property
    def ratio(self) -> float:
        """Match points normalised to [0, 1] (two points per term at most)."""
        if self.term_count == 0:
            return 0.0
        return min(1.0, self.points / (2 * self.term_count))


def query_terms(query: str) -> frozenset[str]:
    """Lower-cased, de-duplicated query words of at least three characters."""
    return frozenset(
        token for token in _TERM_SPLIT.split(query.lower()) if len(token) >= MIN_TERM_LENGTH
    )


def keyword_match(terms: Iterable[str], text: str) -> KeywordMatch:
    """Count how well ``terms`` match ``text``."""
    term_list = list(terms)
    text_lower = text.lower()
    points = 0
    matched_chars = 0
    for term in term_list:
        if term not in text_lower:
            continue
        points += 1
        if re.search(rf"\b{re.escape(term)}\b", text_lower):
            points += 1
        matched_chars += len(term)
    return KeywordMatch(points=points, matched_chars=matched_chars, term_count=len(term_list))


def keyword_score(query: str | Iterable[str], text: str) -> float:
    """Score a chunk's text against a query.

    score = min(1, points / (2 * terms) + min(0.3, matched_chars / len(text)))

    Args:
        query: Query string, or an already extracted set of terms
        text: Chunk text

    Returns:
        Score in [0, 1]; 0.0 when the query has no usable terms or nothing
        matched, which callers treat as "no match"
    """
    terms = query_terms(query) if isinstance(query, str) else frozenset(query)
    if not terms or not text:
        return 0.0

    match = keyword_match(terms, text)
    if not match.matched:
        return 0.0

    coverage_bonus = min(MAX_COVERAGE_BONUS, match.matched_chars / len(text))
    return min(1.0, match.ratio + coverage_bonus)


def top_k_by_keyword(query: str, chunks: Sequence[Chunk], k: int) -> list[ScoredChunk]:
    """Rank chunks purely by keyword score.

    Chunks that match no query term are excluded.
    """
    terms = query_terms(query)
    if not chunks or k <= 0 or not terms:
        return []

    scored = []
    for chunk in chunks:
        score = keyword_score(terms, chunk.text)
        if score > 0:
            scored.append(ScoredChunk(chunk=chunk, score=score))

    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:k]
