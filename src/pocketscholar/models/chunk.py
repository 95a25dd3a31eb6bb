# src/pocketscholar/models/chunk.py
"""Chunk and page data models."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class PageText(BaseModel):
    """Raw text extracted from a single page of a document."""

    page_number: int = Field(ge=1)
    text: str


class Chunk(BaseModel):
    """A bounded span of a document's text, the unit of retrieval.

    Chunks are immutable once built. ``embedding`` is empty until the chunk
    has been embedded; its length is fixed per embedding provider.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    page_number: int = Field(ge=1)
    chunk_index: int = Field(ge=0)
    text: str = Field(min_length=1)
    embedding: list[float] = Field(default_factory=list)

    def with_embedding(self, embedding: list[float]) -> "Chunk":
        """Return a copy of this chunk carrying the given embedding."""
        return self.model_copy(update={"embedding": list(embedding)})
