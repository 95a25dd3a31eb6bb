# src/pocketscholar/configuration/base.py
"""Protocol definitions for configuration objects.

Implementations can use @dataclass(frozen=True) for immutability. Any
object with the right methods satisfies these protocols; stores and
clients, by contrast, are ABCs and require inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pocketscholar.embedder import Embedder
    from pocketscholar.providers import LLMClient
    from pocketscholar.settings import Settings
    from pocketscholar.stores import ChunkStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the model-backed components:
    - Embedder: Creates vector embeddings for chunks and queries
    - LLMClient: Generates answers from the assembled prompt

    Example implementation:
        @dataclass(frozen=True)
        class MyProvider:
            def build_embedder(self, settings: Settings) -> Embedder: ...
            def build_llm_client(self, settings: Settings | None = None) -> LLMClient: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for creating vector embeddings.

        Args:
            settings: Settings containing embedding_dimension and retries.
        """
        ...

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build a client for answer generation."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_chunk_store(self) -> ChunkStore: ...
    """

    def build_chunk_store(self) -> ChunkStore:
        """Build the chunk store."""
        ...
