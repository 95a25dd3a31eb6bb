# tests/test_configuration.py
"""Tests for the configuration objects."""

import os
from dataclasses import FrozenInstanceError

import pytest

from pocketscholar.configuration import LiteLLMProvider, LocalStorage, ProviderConfig, StorageConfig
from pocketscholar.settings import Settings
from pocketscholar.stores import SQLiteChunkStore


class TestLocalStorage:
    def test_build_chunk_store(self, temp_dir):
        store = LocalStorage(temp_dir).build_chunk_store()

        assert isinstance(store, SQLiteChunkStore)
        assert store.db_path == os.path.join(temp_dir, "chunks.db")

    def test_creates_directory(self, temp_dir):
        new_dir = os.path.join(temp_dir, "new_storage")
        LocalStorage(new_dir).build_chunk_store()

        assert os.path.isdir(new_dir)

    def test_is_frozen_dataclass(self, temp_dir):
        storage = LocalStorage(temp_dir)
        with pytest.raises(FrozenInstanceError):
            storage.data_dir = "/other"

    def test_satisfies_protocol(self, temp_dir):
        assert isinstance(LocalStorage(temp_dir), StorageConfig)


class TestLiteLLMProvider:
    def test_satisfies_protocol(self):
        provider = LiteLLMProvider(llm="ollama/llama3.2:1b", embedding="ollama/all-minilm")
        assert isinstance(provider, ProviderConfig)

    def test_is_frozen_dataclass(self):
        provider = LiteLLMProvider(llm="a", embedding="b")
        with pytest.raises(FrozenInstanceError):
            provider.llm = "c"

    def test_build_embedder(self):
        pytest.importorskip("litellm", reason="Requires litellm")
        from pocketscholar.embedder import ClientEmbedder

        settings = Settings(embedding_dimension=768, embedding_batch_size=8)
        embedder = LiteLLMProvider(llm="a", embedding="ollama/nomic-embed-text").build_embedder(
            settings
        )

        assert isinstance(embedder, ClientEmbedder)
        assert embedder.dimension == 768

    def test_build_llm_client(self):
        pytest.importorskip("litellm", reason="Requires litellm")
        from pocketscholar.providers.litellm import LiteLLMClient

        provider = LiteLLMProvider(
            llm="ollama/llama3.2:1b", embedding="b", api_base="http://gpu-box:11434"
        )
        client = provider.build_llm_client(Settings(max_answer_tokens=128, num_retries=1))

        assert isinstance(client, LiteLLMClient)
        assert client.model == "ollama/llama3.2:1b"
        assert client.max_tokens == 128
        assert client.num_retries == 1
        assert client.api_base == "http://gpu-box:11434"
