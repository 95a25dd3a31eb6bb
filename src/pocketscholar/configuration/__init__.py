# src/pocketscholar/configuration/__init__.py
"""Configuration objects for PocketScholar.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build embedding and generation components):
- LiteLLMProvider: Uses LiteLLM for generation and embedding calls

Storage configurations (build the chunk store):
- LocalStorage: SQLite under a local data directory

Example:
    from pocketscholar import PocketScholar, LiteLLMProvider, LocalStorage

    scholar = PocketScholar(
        provider=LiteLLMProvider(llm="ollama/llama3.2:1b", embedding="ollama/all-minilm"),
        storage=LocalStorage("./data"),
    )
"""

from pocketscholar.configuration.base import ProviderConfig, StorageConfig
from pocketscholar.configuration.providers import LiteLLMProvider
from pocketscholar.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
