# src/pocketscholar/providers/base.py
"""Abstract base classes for text generation and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for text generation providers.

    The retriever sends the fully composed prompt as a single user message,
    so any chat or instruction-tuned model can sit behind this interface.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None):
                return my_model.generate(messages[-1]["content"], temp=temperature)
    """

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "user", "content": "Hello"}]
            temperature: Optional sampling temperature. If None, use the
                         provider default.

        Returns:
            The raw generated text.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion for the given messages (async).

        The default implementation calls the blocking complete(). Override in
        subclasses with a native async path.
        """
        return self.complete(messages, temperature)


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Tokenization and model input formats are the provider's concern; callers
    only ever pass text.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_model.encode(texts).tolist()
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...
