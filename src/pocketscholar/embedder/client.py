# src/pocketscholar/embedder/client.py
"""Client-based embedder implementation."""

import logging

from pocketscholar.embedder.base import Embedder
from pocketscholar.providers.base import EmbeddingClient

logger = logging.getLogger(__name__)

# all-MiniLM-L6-v2 and its derivatives
DEFAULT_DIMENSION = 384


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient for generating embeddings.

    Never raises on provider failure: texts that cannot be embedded (and
    blank texts) get an all-zero vector of the known dimension, which the
    similarity engine scores as 0. The dimension starts at
    ``dimension`` and is updated from the first successful response.

    Example:
        from pocketscholar.providers.litellm import LiteLLMEmbeddingClient
        from pocketscholar.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="ollama/all-minilm")
        embedder = ClientEmbedder(embedding_client=client)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        dimension: int = DEFAULT_DIMENSION,
        batch_size: int = 32,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            dimension: Vector length assumed until the provider responds
            batch_size: Maximum texts sent to the provider per call
        """
        if dimension <= 0:
            raise ValueError(f"dimension must be positive, got {dimension}")
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._client = embedding_client
        self._dimension = dimension
        self._batch_size = batch_size
        self._loaded = False

    @property
    def dimension(self) -> int:
        return self._dimension

    def is_loaded(self) -> bool:
        return self._loaded

    def _zeros(self) -> list[float]:
        return [0.0] * self._dimension

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        results: list[list[float] | None] = [None] * len(texts)
        pending = [i for i, text in enumerate(texts) if text.strip()]

        for start in range(0, len(pending), self._batch_size):
            batch = pending[start : start + self._batch_size]
            embeddings = self._embed_batch([texts[i] for i in batch])
            if embeddings is None:
                continue
            for i, embedding in zip(batch, embeddings, strict=True):
                results[i] = embedding

        return [embedding if embedding is not None else self._zeros() for embedding in results]

    def _embed_batch(self, batch: list[str]) -> list[list[float]] | None:
        try:
            embeddings = self._client.embed(batch)
        except Exception:
            logger.exception("Embedding failed for %d texts; using zero vectors", len(batch))
            return None

        if len(embeddings) != len(batch):
            logger.error(
                "Embedding provider returned %d vectors for %d texts; using zero vectors",
                len(embeddings),
                len(batch),
            )
            return None

        if embeddings and embeddings[0]:
            if len(embeddings[0]) != self._dimension:
                logger.info(
                    "Embedding dimension is %d (was %d)", len(embeddings[0]), self._dimension
                )
                self._dimension = len(embeddings[0])
            self._loaded = True
        return [list(embedding) for embedding in embeddings]
