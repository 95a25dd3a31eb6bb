# src/pocketscholar/providers/__init__.py
"""Provider implementations for PocketScholar.

This module contains text generation and embedding provider abstractions:
- LLMClient: Abstract base class for completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations (requires: pip install pocketscholar[litellm])

Usage:
    from pocketscholar.providers import LLMClient, EmbeddingClient
    from pocketscholar.providers.litellm import LiteLLMClient, ChatModels
"""

from pocketscholar.providers.base import EmbeddingClient, LLMClient

try:
    from pocketscholar.providers.litellm import (
        ChatModels,
        EmbeddingModels,
        LiteLLMClient,
        LiteLLMEmbeddingClient,
    )
except ImportError:
    from pocketscholar._optional import _create_missing_dependency_class

    class ChatModels:  # type: ignore[no-redef]
        """Placeholder - requires litellm package."""

        pass

    class EmbeddingModels:  # type: ignore[no-redef]
        """Placeholder - requires litellm package."""

        pass

    LiteLLMClient = _create_missing_dependency_class(  # type: ignore[misc,assignment]
        "LiteLLMClient", "litellm"
    )
    LiteLLMEmbeddingClient = _create_missing_dependency_class(  # type: ignore[misc,assignment]
        "LiteLLMEmbeddingClient", "litellm"
    )

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
