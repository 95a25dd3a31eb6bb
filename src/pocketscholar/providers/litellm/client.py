# src/pocketscholar/providers/litellm/client.py
"""LiteLLM client implementations for text generation and embedding APIs."""

from typing import Any

import litellm

from pocketscholar.providers.base import EmbeddingClient, LLMClient
from pocketscholar.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based client for text generation.

    Supports any model available through LiteLLM, including local Ollama
    models.

    Example:
        from pocketscholar.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.OLLAMA_LLAMA32_1B, max_tokens=256)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = ChatModels.OLLAMA_LLAMA32_1B,
        num_retries: int = 3,
        max_tokens: int | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "ollama/llama3.2:1b", "openai/gpt-5-mini"
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
            max_tokens: Optional cap on generated tokens.
            api_base: Optional endpoint override (e.g. a remote Ollama host).
        """
        self.model = model
        self.num_retries = num_retries
        self.max_tokens = max_tokens
        self.api_base = api_base

    def _completion_kwargs(self, messages: list[dict], temperature: float | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        if self.api_base is not None:
            kwargs["api_base"] = self.api_base
        return kwargs

    def _extract_content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(**self._completion_kwargs(messages, temperature))
        return self._extract_content(response)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(**self._completion_kwargs(messages, temperature))
        return self._extract_content(response)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from pocketscholar.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.OLLAMA_ALL_MINILM)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.OLLAMA_ALL_MINILM,
        num_retries: int = 3,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "ollama/all-minilm", "openai/text-embedding-3-small"
            num_retries: Number of retries on rate limit errors. Default: 3.
            api_base: Optional endpoint override.
        """
        self.model = model
        self.num_retries = num_retries
        self.api_base = api_base

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.api_base is not None:
            kwargs["api_base"] = self.api_base

        response = litellm.embedding(**kwargs)
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
