"""Shared pytest fixtures."""

import os
import tempfile
from dataclasses import dataclass
from typing import Any

import pytest

from pocketscholar.embedder import Embedder
from pocketscholar.providers import LLMClient

# Each word gets its own dimension, so texts sharing vocabulary are similar
VOCABULARY = (
    "treaty",
    "signed",
    "peace",
    "war",
    "capital",
    "paris",
    "river",
    "mountain",
    "protein",
    "cell",
    "enzyme",
    "sample",
)


class FakeEmbedder(Embedder):
    """Deterministic bag-of-words embedder over a fixed vocabulary.

    Texts containing none of the vocabulary embed to a zero vector.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    @property
    def dimension(self) -> int:
        return len(VOCABULARY)

    def embed_text(self, text: str) -> list[float]:
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            lowered = text.lower()
            vectors.append([float(lowered.count(word)) for word in VOCABULARY])
        return vectors


class FakeLLMClient(LLMClient):
    """Returns a canned response and records the prompts it saw."""

    def __init__(
        self, response: str = "The treaty was signed in 1648.", error: Exception | None = None
    ):
        self.response = response
        self.error = error
        self.prompts: list[str] = []
        self.temperatures: list[float | None] = []

    def complete(self, messages: list[dict], temperature: float | None = None) -> str:
        self.prompts.append(messages[-1]["content"])
        self.temperatures.append(temperature)
        if self.error is not None:
            raise self.error
        return self.response


@dataclass(frozen=True)
class FakeProvider:
    """Provider config that hands out prebuilt fakes."""

    _embedder: Any
    _llm_client: Any

    def build_embedder(self, settings: Any) -> Any:
        return self._embedder

    def build_llm_client(self, settings: Any = None) -> Any:
        return self._llm_client


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def fake_provider(fake_embedder, fake_llm):
    return FakeProvider(_embedder=fake_embedder, _llm_client=fake_llm)


@pytest.fixture
def chunk_store(temp_dir):
    """Create an empty SQLiteChunkStore."""
    from pocketscholar.stores import SQLiteChunkStore

    return SQLiteChunkStore(os.path.join(temp_dir, "chunks.db"))


@pytest.fixture
def scholar(fake_provider, chunk_store):
    """PocketScholar wired to fakes and a temporary SQLite store."""
    from pocketscholar import PocketScholar

    with PocketScholar.from_stores(provider=fake_provider, chunk_store=chunk_store) as instance:
        yield instance


@pytest.fixture
def history_file(temp_dir):
    """A two-page text document (pages separated by a form feed)."""
    path = os.path.join(temp_dir, "history.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write(
            "The Peace of Westphalia treaty was signed in 1648 and ended a long war.\f"
            "Paris became the capital of France long before the river trade grew."
        )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep POCKETSCHOLAR_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("POCKETSCHOLAR_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_llm():
    """Factory for FakeLLMClient with a custom response or error."""
    return FakeLLMClient
