# tests/commands/test_query.py
"""Tests for the ask command."""

import os

from pocketscholar.commands import query
from pocketscholar.models import Chunk

QUESTION = "When was the treaty signed?"


class TestQueryCommand:
    """Tests for query.query()."""

    def test_query_no_database(self, temp_dir) -> None:
        missing = os.path.join(temp_dir, "missing")

        result = query.query(QUESTION, data_dir=missing)

        assert result.success is False
        assert result.query == QUESTION
        assert result.error == (
            f"Data directory not found: {missing}. Run 'pocketscholar ingest' first."
        )


class TestQueryWithScholar:
    """Tests for query.query_with_scholar()."""

    def test_answer_with_sources(self, scholar, history_file, fake_llm) -> None:
        scholar.ingest_file(history_file, "history")

        result = query.query_with_scholar(scholar, QUESTION)

        assert result.success is True
        assert result.answer == fake_llm.response
        assert result.cited_pages == [1]
        assert result.sources[0].document_id == "history"
        assert result.passages == []

    def test_raw_mode_skips_generation(self, scholar, history_file, fake_llm) -> None:
        scholar.ingest_file(history_file, "history")

        result = query.query_with_scholar(scholar, QUESTION, raw=True)

        assert result.success is True
        assert result.answer is None
        assert fake_llm.prompts == []
        assert result.passages[0].page_number == 1
        assert "1648" in result.passages[0].text

    def test_raw_mode_cites_each_page_once(self, scholar, chunk_store, fake_embedder) -> None:
        texts = [
            (1, "The treaty was signed."),
            (1, "The treaty ended the war."),
            (1, "Peace treaty text."),
            (2, "The capital is Paris."),
        ]
        chunks = [
            Chunk(document_id="history", page_number=page, chunk_index=i, text=text)
            for i, (page, text) in enumerate(texts)
        ]
        chunk_store.insert_all(fake_embedder.embed_chunks(chunks))

        result = query.query_with_scholar(scholar, "treaty signed", k=5, raw=True)

        assert len(result.passages) == 3
        assert [(s.document_id, s.page_number) for s in result.sources] == [("history", 1)]
        assert result.sources[0].score == result.passages[0].score

    def test_no_matches(self, scholar, history_file) -> None:
        scholar.ingest_file(history_file, "history")

        result = query.query_with_scholar(scholar, QUESTION, document_ids=["other"])

        assert result.success is True
        assert result.sources == []

    def test_failure_reported(self, scholar) -> None:
        scholar.close()

        result = query.query_with_scholar(scholar, QUESTION)

        assert result.success is False
        assert result.error.startswith("Query failed:")
