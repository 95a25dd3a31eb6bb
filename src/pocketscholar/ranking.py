# src/pocketscholar/ranking.py
"""Hybrid ranking: fuse embedding similarity with keyword matching.

Pure embedding search misses rare terms and proper nouns; pure keyword
search misses paraphrase and synonymy. Summing a weighted share of each
recovers both.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pocketscholar.keywords import keyword_match, query_terms
from pocketscholar.models import Chunk, ScoredChunk
from pocketscholar.similarity import score_by_embedding

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_WEIGHT = 0.6


def hybrid_search(
    query_embedding: Sequence[float],
    query_text: str,
    chunks: Sequence[Chunk],
    k: int,
    min_similarity: float = 0.0,
    embedding_weight: float = DEFAULT_EMBEDDING_WEIGHT,
) -> list[ScoredChunk]:
    """Rank chunks by a weighted sum of embedding and keyword scores.

    Every dimension-matched chunk receives ``cosine * embedding_weight``;
    every chunk matching at least one query term receives
    ``match_ratio * (1 - embedding_weight)``. A chunk found by only one path
    keeps that path's score.

    Args:
        query_embedding: Query vector
        query_text: Raw query, for keyword matching
        chunks: Candidate chunks
        k: Maximum number of results
        min_similarity: Minimum combined score to keep a chunk
        embedding_weight: Share of the score given to embedding similarity

    Returns:
        ScoredChunks in non-increasing combined-score order

    Raises:
        ValueError: If embedding_weight is outside [0, 1]
    """
    if not 0.0 <= embedding_weight <= 1.0:
        raise ValueError(f"embedding_weight must be between 0.0 and 1.0, got {embedding_weight}")
    if not chunks or k <= 0:
        return []

    keyword_weight = 1.0 - embedding_weight
    combined: dict[str, tuple[Chunk, float]] = {}

    for chunk, similarity in score_by_embedding(query_embedding, chunks):
        combined[chunk.id] = (chunk, similarity * embedding_weight)

    terms = query_terms(query_text)
    keyword_hits = 0
    if terms:
        for chunk in chunks:
            match = keyword_match(terms, chunk.text)
            if not match.matched:
                continue
            keyword_hits += 1
            partial = match.ratio * keyword_weight
            existing = combined.get(chunk.id)
            if existing is not None:
                combined[chunk.id] = (existing[0], existing[1] + partial)
            else:
                combined[chunk.id] = (chunk, partial)

    ranked = [
        ScoredChunk(chunk=chunk, score=score)
        for chunk, score in combined.values()
        if score >= min_similarity
    ]
    ranked.sort(key=lambda item: item.score, reverse=True)

    logger.debug(
        "Hybrid search over %d chunks: %d keyword hits, %d above %.3f",
        len(chunks),
        keyword_hits,
        len(ranked),
        min_similarity,
    )
    return ranked[:k]
