# src/pocketscholar/models/ingest.py
"""Ingestion result types."""

from enum import Enum

from pydantic import BaseModel, Field

from pocketscholar.models.chunk import Chunk


class IngestErrorKind(str, Enum):
    """Why a document produced no chunks."""

    NOT_FOUND = "not_found"
    UNSUPPORTED = "unsupported"
    PARSE_FAILED = "parse_failed"
    EMPTY = "empty"


class IngestError(BaseModel):
    """An ingestion failure, returned instead of raised."""

    kind: IngestErrorKind
    message: str


class IngestResult(BaseModel):
    """Outcome of ingesting one document.

    On failure ``chunks`` is empty and ``error`` says why; the chunk store
    is left untouched.
    """

    document_id: str
    chunks: list[Chunk] = Field(default_factory=list)
    error: IngestError | None = None
    zero_vectors: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, document_id: str, kind: IngestErrorKind, message: str) -> "IngestResult":
        return cls(document_id=document_id, error=IngestError(kind=kind, message=message))
