# tests/embedder/test_client_embedder.py
"""Tests for the ClientEmbedder."""

import pytest

from pocketscholar.embedder import DEFAULT_DIMENSION, ClientEmbedder, Embedder
from pocketscholar.models import Chunk
from pocketscholar.providers import EmbeddingClient


class RecordingClient(EmbeddingClient):
    """Embedding client returning [len(text), 1.0] per text."""

    def __init__(self, fail: bool = False, drop_one: bool = False):
        self.fail = fail
        self.drop_one = drop_one
        self.batches: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.batches.append(list(texts))
        if self.fail:
            raise ConnectionError("provider unreachable")
        vectors = [[float(len(text)), 1.0] for text in texts]
        return vectors[:-1] if self.drop_one else vectors


class TestClientEmbedder:
    def test_is_embedder(self):
        assert isinstance(ClientEmbedder(RecordingClient()), Embedder)

    def test_default_dimension(self):
        embedder = ClientEmbedder(RecordingClient())
        assert embedder.dimension == DEFAULT_DIMENSION
        assert not embedder.is_loaded()

    def test_embed_text(self):
        embedder = ClientEmbedder(RecordingClient())
        assert embedder.embed_text("abc") == [3.0, 1.0]

    def test_learns_dimension(self):
        embedder = ClientEmbedder(RecordingClient())
        embedder.embed_texts(["abc"])

        assert embedder.dimension == 2
        assert embedder.is_loaded()

    def test_batches(self):
        client = RecordingClient()
        embedder = ClientEmbedder(client, batch_size=2)

        result = embedder.embed_texts(["a", "bb", "ccc", "dddd", "eeeee"])

        assert [len(batch) for batch in client.batches] == [2, 2, 1]
        assert [vector[0] for vector in result] == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_blank_text_gets_zero_vector_without_a_call(self):
        client = RecordingClient()
        embedder = ClientEmbedder(client, dimension=2)

        result = embedder.embed_texts(["  ", "abc"])

        assert result[0] == [0.0, 0.0]
        assert result[1] == [3.0, 1.0]
        assert client.batches == [["abc"]]

    def test_failure_gives_zero_vectors(self):
        embedder = ClientEmbedder(RecordingClient(fail=True), dimension=4)

        assert embedder.embed_texts(["abc", "de"]) == [[0.0] * 4, [0.0] * 4]

    def test_count_mismatch_gives_zero_vectors(self):
        embedder = ClientEmbedder(RecordingClient(drop_one=True), dimension=2)

        assert embedder.embed_texts(["abc", "de"]) == [[0.0, 0.0], [0.0, 0.0]]

    def test_embed_chunks(self):
        embedder = ClientEmbedder(RecordingClient())
        chunk = Chunk(document_id="d", page_number=1, chunk_index=0, text="abcd")

        embedded = embedder.embed_chunks([chunk])

        assert embedded[0].embedding == [4.0, 1.0]
        assert embedded[0].id == chunk.id
        assert embedder.embed_chunks([]) == []

    def test_warm_up(self):
        assert ClientEmbedder(RecordingClient()).warm_up() is True
        assert ClientEmbedder(RecordingClient(fail=True)).warm_up() is False

    @pytest.mark.parametrize("kwargs", [{"dimension": 0}, {"batch_size": 0}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            ClientEmbedder(RecordingClient(), **kwargs)
