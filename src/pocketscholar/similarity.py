# src/pocketscholar/similarity.py
"""Cosine similarity and top-k selection over chunk embeddings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pocketscholar.models import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

# Chunks scoring below this are treated as irrelevant
DEFAULT_MIN_SIMILARITY = 0.15


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Formula: cos(θ) = (a · b) / (||a|| * ||b||)

    Returns:
        A value in [-1, 1]; 0.0 if the vectors differ in length, are empty,
        or either has zero norm (a zero vector has no direction).
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape or a_arr.size == 0:
        return 0.0

    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.clip(np.dot(a_arr, b_arr) / (norm_a * norm_b), -1.0, 1.0))


def is_zero_vector(vector: Sequence[float]) -> bool:
    """True for empty or all-zero vectors, i.e. an embedding with no signal."""
    return not np.any(np.asarray(vector, dtype=np.float64))


def score_by_embedding(
    query_embedding: Sequence[float],
    chunks: Sequence[Chunk],
) -> list[tuple[Chunk, float]]:
    """Cosine similarity of the query against every dimension-matched chunk.

    Chunks whose embedding length differs from the query's (including
    chunks with an empty or corrupt embedding) are skipped. Input order is
    preserved.
    """
    query = np.asarray(query_embedding, dtype=np.float64)
    dim = query.size
    if dim == 0:
        return []

    candidates = [chunk for chunk in chunks if len(chunk.embedding) == dim]
    skipped = len(chunks) - len(candidates)
    if skipped:
        logger.debug("Skipped %d chunks with embedding dimension != %d", skipped, dim)
    if not candidates:
        return []

    matrix = np.asarray([chunk.embedding for chunk in candidates], dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    scores = np.clip(scores, -1.0, 1.0)

    return [(chunk, float(score)) for chunk, score in zip(candidates, scores, strict=True)]


def top_k_by_similarity(
    query_embedding: Sequence[float],
    chunks: Sequence[Chunk],
    k: int,
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
) -> list[ScoredChunk]:
    """Return the ``k`` chunks most similar to the query.

    Args:
        query_embedding: Query vector
        chunks: Candidate chunks
        k: Maximum number of results
        min_similarity: Chunks scoring strictly below this are excluded

    Returns:
        ScoredChunks in non-increasing score order; ties keep input order
    """
    if not chunks or k <= 0:
        return []

    scored = [
        ScoredChunk(chunk=chunk, score=score)
        for chunk, score in score_by_embedding(query_embedding, chunks)
        if score >= min_similarity
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:k]
