# tests/models/test_chunk.py
"""Tests for the Chunk and PageText models."""

import pytest
from pydantic import ValidationError

from pocketscholar.models import Chunk, PageText


class TestChunk:
    def test_create_chunk(self):
        chunk = Chunk(document_id="doc.pdf", page_number=2, chunk_index=5, text="Some text")

        assert chunk.document_id == "doc.pdf"
        assert chunk.page_number == 2
        assert chunk.chunk_index == 5
        assert chunk.text == "Some text"
        assert chunk.embedding == []

    def test_auto_id(self):
        a = Chunk(document_id="d", page_number=1, chunk_index=0, text="a")
        b = Chunk(document_id="d", page_number=1, chunk_index=0, text="a")
        assert a.id
        assert a.id != b.id

    def test_frozen(self):
        chunk = Chunk(document_id="d", page_number=1, chunk_index=0, text="a")
        with pytest.raises(ValidationError):
            chunk.text = "b"

    def test_with_embedding_returns_copy(self):
        chunk = Chunk(document_id="d", page_number=1, chunk_index=0, text="a")
        embedded = chunk.with_embedding([0.1, 0.2])

        assert embedded.embedding == [0.1, 0.2]
        assert embedded.id == chunk.id
        assert chunk.embedding == []

    @pytest.mark.parametrize(
        "fields",
        [
            {"page_number": 0, "chunk_index": 0, "text": "a"},
            {"page_number": 1, "chunk_index": -1, "text": "a"},
            {"page_number": 1, "chunk_index": 0, "text": ""},
        ],
    )
    def test_invalid_fields(self, fields):
        with pytest.raises(ValidationError):
            Chunk(document_id="d", **fields)


class TestPageText:
    def test_page_numbers_start_at_one(self):
        with pytest.raises(ValidationError):
            PageText(page_number=0, text="x")

    def test_create(self):
        page = PageText(page_number=3, text="Page three")
        assert page.page_number == 3
