# src/pocketscholar/models/__init__.py
"""Data models for PocketScholar."""

from pocketscholar.models.chunk import Chunk, PageText
from pocketscholar.models.ingest import IngestError, IngestErrorKind, IngestResult
from pocketscholar.models.results import RagResult, RagSource, ScoredChunk

__all__ = [
    "Chunk",
    "PageText",
    "ScoredChunk",
    "RagSource",
    "RagResult",
    "IngestError",
    "IngestErrorKind",
    "IngestResult",
]
