# src/pocketscholar/stores/base.py
"""Abstract base class for chunk storage."""

from abc import ABC, abstractmethod

from pocketscholar.models import Chunk


class ChunkStore(ABC):
    """Abstract base class for chunk storage.

    Chunks are grouped by ``document_id``. Implementations must return
    chunks from :meth:`get_all` ordered by document, page and chunk index.
    """

    @abstractmethod
    def get_all(self) -> list[Chunk]:
        """Get every stored chunk."""
        ...

    @abstractmethod
    def get_by_document_ids(self, document_ids: list[str]) -> list[Chunk]:
        """Get all chunks belonging to any of the given documents."""
        ...

    @abstractmethod
    def get_by_document_id(self, document_id: str) -> list[Chunk]:
        """Get all chunks of one document, in page and chunk order."""
        ...

    @abstractmethod
    def insert_all(self, chunks: list[Chunk]) -> None:
        """Store chunks, replacing any with the same ID."""
        ...

    @abstractmethod
    def delete_by_document_id(self, document_id: str) -> int:
        """Delete all chunks of a document. Returns the number deleted."""
        ...

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every chunk. Returns the number deleted."""
        ...

    @abstractmethod
    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        ...

    @abstractmethod
    def list_document_ids(self) -> list[str]:
        """List all unique document IDs in the store."""
        ...

    @abstractmethod
    def count_by_document_id(self, document_id: str) -> int:
        """Count the chunks of one document."""
        ...
