# src/pocketscholar/providers/litellm/models.py
"""Curated model identifiers for the LiteLLM provider.

Any valid LiteLLM model string works; these exist for autocomplete.
Local Ollama models are listed first since PocketScholar targets small
on-device models.
"""


class ChatModels:
    """Text generation models for LiteLLMClient."""

    # Ollama (local)
    OLLAMA_LLAMA32_1B = "ollama/llama3.2:1b"
    OLLAMA_LLAMA32_3B = "ollama/llama3.2:3b"
    OLLAMA_QWEN25_05B = "ollama/qwen2.5:0.5b"
    OLLAMA_GEMMA3_1B = "ollama/gemma3:1b"
    OLLAMA_PHI3_MINI = "ollama/phi3:mini"

    # Hosted
    GPT_5_MINI = "openai/gpt-5-mini"
    GPT_5_NANO = "openai/gpt-5-nano"
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"
    GEMINI_3_FLASH = "gemini/gemini-3-flash-preview"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # Ollama (local); all-minilm produces 384-dimensional vectors
    OLLAMA_ALL_MINILM = "ollama/all-minilm"
    OLLAMA_NOMIC_EMBED = "ollama/nomic-embed-text"

    # Hosted
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    GEMINI_004 = "gemini/text-embedding-004"
