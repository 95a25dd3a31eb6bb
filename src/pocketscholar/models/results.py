# src/pocketscholar/models/results.py
"""Result data models for PocketScholar queries."""

from pydantic import BaseModel, Field

from pocketscholar.models.chunk import Chunk


class ScoredChunk(BaseModel):
    """A chunk paired with its ranking score for one query."""

    chunk: Chunk
    score: float


class RagSource(BaseModel):
    """A citation: one (document, page) pair that grounded an answer."""

    document_id: str
    page_number: int
    score: float = 0.0


class RagResult(BaseModel):
    """Full response to a user query."""

    answer: str
    sources: list[RagSource] = Field(default_factory=list)
    query: str = ""
    results: list[ScoredChunk] = Field(default_factory=list)
    context: str | None = None

    @classmethod
    def from_ranked(
        cls,
        query: str,
        answer: str,
        ranked: list[ScoredChunk],
        context: str | None = None,
    ) -> "RagResult":
        """Build a result, collapsing ranked chunks into unique (document, page) sources.

        The first occurrence of a pair wins, so sources keep the ranking order
        and carry the best score for their page.
        """
        seen: set[tuple[str, int]] = set()
        sources: list[RagSource] = []
        for scored in ranked:
            key = (scored.chunk.document_id, scored.chunk.page_number)
            if key in seen:
                continue
            seen.add(key)
            sources.append(
                RagSource(
                    document_id=scored.chunk.document_id,
                    page_number=scored.chunk.page_number,
                    score=scored.score,
                )
            )
        return cls(answer=answer, sources=sources, query=query, results=ranked, context=context)

    def cited_pages(self) -> list[int]:
        """Sorted distinct page numbers across all sources."""
        return sorted({source.page_number for source in self.sources})
