# src/pocketscholar/providers/litellm/__init__.py
"""LiteLLM provider clients for PocketScholar.

- LiteLLMClient: text generation using LiteLLM
- LiteLLMEmbeddingClient: embeddings using LiteLLM
- ChatModels / EmbeddingModels: curated model identifiers

Usage:
    from pocketscholar.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.OLLAMA_LLAMA32_1B)
"""

from pocketscholar.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from pocketscholar.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
