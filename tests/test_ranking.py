# tests/test_ranking.py
"""Tests for hybrid ranking."""

import pytest

from pocketscholar.models import Chunk
from pocketscholar.ranking import hybrid_search


def make_chunk(text: str, embedding: list[float], index: int) -> Chunk:
    return Chunk(
        document_id="doc", page_number=index + 1, chunk_index=index, text=text, embedding=embedding
    )


@pytest.fixture
def chunks():
    return [
        make_chunk("Nothing about the subject here.", [1.0, 0.0], 0),
        make_chunk("The treaty text.", [0.0, 1.0], 1),
        make_chunk("The treaty in full.", [1.0, 0.0], 2),
        make_chunk("A treaty without an embedding.", [], 3),
    ]


class TestHybridSearch:
    def test_scores_combine_both_paths(self, chunks):
        results = hybrid_search([1.0, 0.0], "treaty", chunks, k=10, embedding_weight=0.6)
        scores = {r.chunk.chunk_index: r.score for r in results}

        assert scores[2] == pytest.approx(1.0)  # 0.6 embedding + 0.4 keyword
        assert scores[0] == pytest.approx(0.6)  # embedding only
        assert scores[1] == pytest.approx(0.4)  # keyword only, orthogonal embedding
        assert scores[3] == pytest.approx(0.4)  # keyword only, no embedding

    def test_best_combined_first(self, chunks):
        results = hybrid_search([1.0, 0.0], "treaty", chunks, k=10, embedding_weight=0.6)
        assert results[0].chunk.chunk_index == 2
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)

    def test_threshold(self, chunks):
        results = hybrid_search(
            [1.0, 0.0], "treaty", chunks, k=10, min_similarity=0.5, embedding_weight=0.6
        )
        assert {r.chunk.chunk_index for r in results} == {0, 2}

    def test_k_limits_results(self, chunks):
        assert len(hybrid_search([1.0, 0.0], "treaty", chunks, k=2)) == 2

    def test_zero_query_embedding_falls_back_to_keywords(self, chunks):
        results = hybrid_search([0.0, 0.0], "treaty", chunks, k=10, min_similarity=0.1)
        assert {r.chunk.chunk_index for r in results} == {1, 2, 3}

    def test_pure_embedding_weight(self, chunks):
        results = hybrid_search(
            [1.0, 0.0], "treaty", chunks, k=10, min_similarity=0.5, embedding_weight=1.0
        )
        assert {r.chunk.chunk_index for r in results} == {0, 2}

    def test_each_chunk_listed_once(self, chunks):
        results = hybrid_search([1.0, 0.0], "treaty", chunks, k=10, min_similarity=0.0)
        ids = [r.chunk.id for r in results]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("weight", [-0.1, 1.5])
    def test_invalid_weight(self, chunks, weight):
        with pytest.raises(ValueError):
            hybrid_search([1.0, 0.0], "treaty", chunks, k=3, embedding_weight=weight)

    def test_empty_inputs(self, chunks):
        assert hybrid_search([1.0, 0.0], "treaty", [], k=3) == []
        assert hybrid_search([1.0, 0.0], "treaty", chunks, k=0) == []
