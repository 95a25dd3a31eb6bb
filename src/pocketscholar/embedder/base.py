# src/pocketscholar/embedder/base.py
"""Embedder abstract base class."""

import logging
from abc import ABC, abstractmethod

from pocketscholar.models import Chunk
from pocketscholar.similarity import is_zero_vector

logger = logging.getLogger(__name__)

WARM_UP_PROBE = "warm up"


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_text, embed_texts and dimension.
    """

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        ...

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of the vectors this embedder produces."""
        ...

    def is_loaded(self) -> bool:
        """Whether the embedder has produced a real embedding yet."""
        return True

    def warm_up(self) -> bool:
        """Embed a probe text to check the provider is producing signal.

        Returns:
            False (after logging a warning) when the probe comes back as a
            zero vector, meaning retrieval would fall back to keywords only
        """
        embedding = self.embed_text(WARM_UP_PROBE)
        if is_zero_vector(embedding):
            logger.warning(
                "Embedding warm-up produced a zero vector; "
                "semantic search will not work until the provider is reachable"
            )
            return False
        logger.debug("Embedding warm-up ok (dimension %d)", len(embedding))
        return True

    def embed_chunks(self, chunks: list[Chunk]) -> list[Chunk]:
        """Return copies of chunks with embeddings attached (batched)."""
        if not chunks:
            return []
        embeddings = self.embed_texts([c.text for c in chunks])
        return [
            chunk.with_embedding(emb) for chunk, emb in zip(chunks, embeddings, strict=True)
        ]
