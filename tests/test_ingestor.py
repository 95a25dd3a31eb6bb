# tests/test_ingestor.py
"""Tests for the Ingestor pipeline."""

import os
from pathlib import Path

import pytest

from pocketscholar.chunking import Chunker
from pocketscholar.ingestor import Ingestor
from pocketscholar.loaders import Loader, LoaderRegistry, TextLoader
from pocketscholar.models import IngestErrorKind, PageText


class BrokenLoader(Loader):
    SUPPORTED_EXTENSIONS = {".bad"}

    def load_pages(self, path: str) -> list[PageText]:
        raise RuntimeError("corrupt xref table")


@pytest.fixture
def ingestor(chunk_store, fake_embedder):
    return Ingestor(chunk_store=chunk_store, embedder=fake_embedder)


class TestIngestPages:
    def test_stores_embedded_chunks(self, ingestor, chunk_store):
        pages = [
            PageText(page_number=1, text="The treaty was signed."),
            PageText(page_number=2, text="The river flows past the mountain."),
        ]

        result = ingestor.ingest_pages(pages, "history")

        assert result.ok
        assert len(result.chunks) == 2
        assert [c.chunk_index for c in result.chunks] == [0, 1]
        assert all(c.embedding for c in result.chunks)
        assert chunk_store.count_by_document_id("history") == 2

    def test_reingest_replaces_chunks(self, ingestor, chunk_store):
        ingestor.ingest_pages([PageText(page_number=1, text="Old treaty text.")], "doc")
        ingestor.ingest_pages([PageText(page_number=1, text="New treaty text.")], "doc")

        stored = chunk_store.get_by_document_id("doc")
        assert [c.text for c in stored] == ["New treaty text."]

    def test_other_documents_untouched(self, ingestor, chunk_store):
        ingestor.ingest_pages([PageText(page_number=1, text="First treaty.")], "a")
        ingestor.ingest_pages([PageText(page_number=1, text="Second treaty.")], "b")

        assert chunk_store.list_document_ids() == ["a", "b"]

    def test_no_text_is_empty_error(self, ingestor, chunk_store):
        ingestor.ingest_pages([PageText(page_number=1, text="Existing treaty.")], "doc")

        result = ingestor.ingest_pages([PageText(page_number=1, text="   ")], "doc")

        assert result.error.kind == IngestErrorKind.EMPTY
        # A failed ingest leaves the previous version in place
        assert chunk_store.count_by_document_id("doc") == 1

    def test_counts_zero_vectors(self, ingestor):
        pages = [
            PageText(page_number=1, text="The treaty was signed."),
            PageText(page_number=2, text="Nothing from the vocabulary appears here."),
        ]

        result = ingestor.ingest_pages(pages, "doc")

        assert result.zero_vectors == 1

    def test_progress_events(self, ingestor):
        events = []

        def on_progress(event, current, total, message):
            events.append(event)

        ingestor.ingest_pages([PageText(page_number=1, text="A treaty.")], "doc", on_progress)

        assert events[0] == "chunking"
        assert "embedding" in events
        assert events[-1] == "storing"

    def test_custom_chunker(self, chunk_store, fake_embedder):
        ingestor = Ingestor(chunk_store, fake_embedder, chunker=Chunker(size=20, overlap=0))
        text = "The treaty was signed in the year sixteen forty eight."

        result = ingestor.ingest_pages([PageText(page_number=1, text=text)], "doc")

        assert len(result.chunks) > 1
        assert all(len(c.text) <= 20 for c in result.chunks)


class TestIngestFile:
    def test_ingest_text_file(self, ingestor, chunk_store, history_file):
        result = ingestor.ingest_file(history_file)

        assert result.ok
        assert result.document_id == str(Path(history_file).resolve())
        assert {c.page_number for c in result.chunks} == {1, 2}
        assert chunk_store.list_document_ids() == [result.document_id]

    def test_custom_document_id(self, ingestor, history_file):
        result = ingestor.ingest_file(history_file, "history-notes")
        assert result.document_id == "history-notes"

    def test_missing_file(self, ingestor, temp_dir):
        result = ingestor.ingest_file(os.path.join(temp_dir, "missing.txt"))
        assert result.error.kind == IngestErrorKind.NOT_FOUND

    def test_unsupported_file(self, ingestor, temp_dir):
        path = os.path.join(temp_dir, "slides.pptx")
        open(path, "wb").close()

        result = ingestor.ingest_file(path)

        assert result.error.kind == IngestErrorKind.UNSUPPORTED

    def test_parse_failure(self, ingestor, chunk_store, temp_dir):
        path = os.path.join(temp_dir, "scan.bad")
        open(path, "wb").close()
        registry = LoaderRegistry()
        registry.register(BrokenLoader())

        result = ingestor.ingest_file(path, loader_registry=registry)

        assert result.error.kind == IngestErrorKind.PARSE_FAILED
        assert "corrupt xref table" in result.error.message
        assert chunk_store.count_chunks() == 0

    def test_empty_file(self, ingestor, temp_dir):
        path = os.path.join(temp_dir, "blank.txt")
        with open(path, "w") as f:
            f.write("\n\n")

        result = ingestor.ingest_file(path)

        assert result.error.kind == IngestErrorKind.EMPTY

    def test_loading_progress(self, ingestor, history_file):
        events = []
        registry = LoaderRegistry()
        registry.register(TextLoader())

        ingestor.ingest_file(
            history_file,
            loader_registry=registry,
            on_progress=lambda event, current, total, message: events.append(event),
        )

        assert events[0] == "loading"
        assert events[-1] == "storing"
