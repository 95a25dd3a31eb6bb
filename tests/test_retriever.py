# tests/test_retriever.py
"""Tests for the Retriever pipeline."""

import pytest

from pocketscholar.ingestor import Ingestor
from pocketscholar.retriever import (
    FALLBACK_ANSWER,
    NO_RESULT_ANSWER,
    RAG_PROMPT_TEMPLATE,
    Retriever,
)

QUESTION = "When was the treaty signed?"


@pytest.fixture
def seeded_store(chunk_store, fake_embedder, history_file):
    Ingestor(chunk_store, fake_embedder).ingest_file(history_file, "history")
    return chunk_store


@pytest.fixture
def retriever(seeded_store, fake_embedder, fake_llm):
    return Retriever(seeded_store, fake_embedder, fake_llm)


class TestRetrieverInit:
    def test_invalid_search_mode(self, chunk_store, fake_embedder):
        with pytest.raises(ValueError):
            Retriever(chunk_store, fake_embedder, search_mode="keyword")

    def test_invalid_weight(self, chunk_store, fake_embedder):
        with pytest.raises(ValueError):
            Retriever(chunk_store, fake_embedder, embedding_weight=2.0)

    def test_default_prompt(self, chunk_store, fake_embedder):
        assert Retriever(chunk_store, fake_embedder).prompt_template == RAG_PROMPT_TEMPLATE


class TestSearch:
    def test_finds_relevant_page(self, retriever):
        results = retriever.search(QUESTION)

        assert results
        assert results[0].chunk.page_number == 1
        assert "1648" in results[0].chunk.text

    def test_irrelevant_page_below_threshold(self, retriever):
        pages = {r.chunk.page_number for r in retriever.search(QUESTION)}
        assert pages == {1}

    def test_empty_store(self, chunk_store, fake_embedder):
        assert Retriever(chunk_store, fake_embedder).search(QUESTION) == []

    def test_document_filter(self, retriever):
        assert retriever.search(QUESTION, document_ids=["other"]) == []
        assert retriever.search(QUESTION, document_ids=["history"])

    def test_embedding_mode(self, seeded_store, fake_embedder):
        retriever = Retriever(seeded_store, fake_embedder, search_mode="embedding")

        results = retriever.search(QUESTION)

        assert [r.chunk.page_number for r in results] == [1]
        assert results[0].score == pytest.approx(2 / (2**0.5 * 2))

    def test_top_k(self, retriever):
        results = retriever.search("capital treaty", top_k=1, min_similarity=0.0)
        assert len(results) == 1


class TestAsk:
    def test_answer_with_sources(self, retriever, fake_llm):
        result = retriever.ask(QUESTION)

        assert result.answer == "The treaty was signed in 1648."
        assert result.query == QUESTION
        assert [(s.document_id, s.page_number) for s in result.sources] == [("history", 1)]
        assert result.cited_pages() == [1]

    def test_prompt_contains_context_and_question(self, retriever, fake_llm):
        retriever.ask(QUESTION)

        prompt = fake_llm.prompts[0]
        assert "Westphalia" in prompt
        assert QUESTION in prompt
        assert prompt.startswith("### Instruction:")

    def test_custom_prompt_template(self, seeded_store, fake_embedder, fake_llm):
        retriever = Retriever(
            seeded_store,
            fake_embedder,
            fake_llm,
            prompt_template="Q: {question}\nC: {context}",
        )

        retriever.ask(QUESTION)

        assert fake_llm.prompts[0].startswith(f"Q: {QUESTION}")

    def test_no_relevant_chunks(self, retriever, fake_llm):
        result = retriever.ask("mountain enzyme")

        assert result.answer == NO_RESULT_ANSWER
        assert result.sources == []
        assert fake_llm.prompts == []

    def test_empty_store(self, chunk_store, fake_embedder, fake_llm):
        result = Retriever(chunk_store, fake_embedder, fake_llm).ask(QUESTION)
        assert result.answer == NO_RESULT_ANSWER

    def test_generation_error_uses_fallback(self, seeded_store, fake_embedder, make_llm):
        llm = make_llm(error=ConnectionError("ollama not running"))

        result = Retriever(seeded_store, fake_embedder, llm).ask(QUESTION)

        assert result.answer == FALLBACK_ANSWER
        assert result.cited_pages() == [1]

    def test_no_llm_client_uses_fallback(self, seeded_store, fake_embedder):
        result = Retriever(seeded_store, fake_embedder).ask(QUESTION)
        assert result.answer == FALLBACK_ANSWER

    def test_blank_output_uses_fallback(self, seeded_store, fake_embedder, make_llm):
        result = Retriever(seeded_store, fake_embedder, make_llm("   ")).ask(QUESTION)
        assert result.answer == FALLBACK_ANSWER

    def test_output_is_sanitized(self, seeded_store, fake_embedder, make_llm):
        llm = make_llm("### Response: Answer: In 1648.")
        result = Retriever(seeded_store, fake_embedder, llm).ask(QUESTION)
        assert result.answer == "In 1648."

    def test_custom_answers(self, seeded_store, fake_embedder):
        retriever = Retriever(
            seeded_store,
            fake_embedder,
            no_result_answer="Nothing found.",
            fallback_answer="Could not answer.",
        )

        assert retriever.ask("mountain enzyme").answer == "Nothing found."
        assert retriever.ask(QUESTION).answer == "Could not answer."

    def test_temperature_passed(self, seeded_store, fake_embedder, fake_llm):
        Retriever(seeded_store, fake_embedder, fake_llm, temperature=0.3).ask(QUESTION)
        assert fake_llm.temperatures == [0.3]

    def test_context_is_kept(self, retriever):
        result = retriever.ask(QUESTION)
        assert "1648" in result.context
