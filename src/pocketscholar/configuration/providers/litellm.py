# src/pocketscholar/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pocketscholar.embedder import Embedder
    from pocketscholar.providers import LLMClient
    from pocketscholar.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for generation and embedding calls.

    Args:
        llm: LiteLLM model identifier for answer generation.
             Examples: "ollama/llama3.2:1b", "openai/gpt-5-mini"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "ollama/all-minilm", "openai/text-embedding-3-small"
        api_base: Optional endpoint override for both models, e.g. the URL
                  of an Ollama server on another machine.

    Example:
        provider = LiteLLMProvider(
            llm="ollama/llama3.2:1b",
            embedding="ollama/all-minilm",
        )
    """

    llm: str
    embedding: str
    api_base: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client.

        Args:
            settings: Settings containing num_retries, embedding_dimension
                      and embedding_batch_size.
        """
        from pocketscholar.embedder import ClientEmbedder
        from pocketscholar.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            num_retries=settings.num_retries,
            api_base=self.api_base,
        )
        return ClientEmbedder(
            embedding_client=embedding_client,
            dimension=settings.embedding_dimension,
            batch_size=settings.embedding_batch_size,
        )

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build a LiteLLMClient for answer generation.

        Args:
            settings: Optional settings containing num_retries and
                      max_answer_tokens. If None, uses client defaults.
        """
        from pocketscholar.providers.litellm import LiteLLMClient

        if settings is None:
            return LiteLLMClient(model=self.llm, api_base=self.api_base)
        return LiteLLMClient(
            model=self.llm,
            num_retries=settings.num_retries,
            max_tokens=settings.max_answer_tokens,
            api_base=self.api_base,
        )
