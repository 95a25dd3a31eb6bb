"""Retrieval pipeline for PocketScholar."""

import logging
from typing import Literal

from pocketscholar.context import ContextAssembler
from pocketscholar.embedder import Embedder
from pocketscholar.models import RagResult, ScoredChunk
from pocketscholar.providers import LLMClient
from pocketscholar.ranking import hybrid_search
from pocketscholar.sanitizer import ResponseSanitizer
from pocketscholar.similarity import DEFAULT_MIN_SIMILARITY, is_zero_vector, top_k_by_similarity
from pocketscholar.stores import ChunkStore

logger = logging.getLogger(__name__)

SearchMode = Literal["hybrid", "embedding"]

RAG_PROMPT_TEMPLATE = """### Instruction:
Answer the question using ONLY the information below. Be brief and precise.

### Context:
{context}

### Question:
{question}

### Response:"""

FALLBACK_ANSWER = "[No answer could be generated.]"

NO_RESULT_ANSWER = (
    "No information about this topic was found in the uploaded documents. "
    "Try asking a more specific question."
)

DEFAULT_TOP_K = 5
DEFAULT_HYBRID_WEIGHT = 0.5


class Retriever:
    """Answers questions from the chunks in a ChunkStore.

    Pipeline for ask():
    1. Load candidate chunks (all, or only the requested documents)
    2. Embed the query
    3. Rank chunks (hybrid or pure embedding)
    4. Assemble a bounded context from the ranked chunks
    5. Generate with the prompt template and sanitize the output
    6. Collapse ranked chunks into (document, page) sources
    """

    def __init__(
        self,
        chunk_store: ChunkStore,
        embedder: Embedder,
        llm_client: LLMClient | None = None,
        *,
        assembler: ContextAssembler | None = None,
        sanitizer: ResponseSanitizer | None = None,
        prompt_template: str | None = None,
        default_k: int = DEFAULT_TOP_K,
        min_similarity: float = DEFAULT_MIN_SIMILARITY,
        search_mode: SearchMode = "hybrid",
        embedding_weight: float = DEFAULT_HYBRID_WEIGHT,
        temperature: float | None = None,
        fallback_answer: str = FALLBACK_ANSWER,
        no_result_answer: str = NO_RESULT_ANSWER,
    ) -> None:
        """Initialize the retriever.

        Args:
            chunk_store: Chunk store to search
            embedder: Embedder for query embedding
            llm_client: Text generation client. Without one, ask() returns
                        the fallback answer alongside the retrieved sources.
            assembler: Context assembler. If None, uses defaults.
            sanitizer: Response sanitizer. If None, uses defaults.
            prompt_template: Template with {context} and {question} fields
            default_k: Default number of chunks to retrieve
            min_similarity: Default minimum score for a chunk to be used
            search_mode: "hybrid" (embedding + keyword) or "embedding"
            embedding_weight: Embedding share of the hybrid score
            temperature: Sampling temperature for generation
            fallback_answer: Returned when generation fails or is empty
            no_result_answer: Returned when no chunk passes the threshold

        Raises:
            ValueError: If search_mode or embedding_weight is invalid
        """
        if search_mode not in ("hybrid", "embedding"):
            raise ValueError(f"search_mode must be 'hybrid' or 'embedding', got {search_mode!r}")
        if not 0.0 <= embedding_weight <= 1.0:
            raise ValueError(
                f"embedding_weight must be between 0.0 and 1.0, got {embedding_weight}"
            )

        self.chunk_store = chunk_store
        self.embedder = embedder
        self._llm_client = llm_client
        self.assembler = assembler or ContextAssembler()
        self.sanitizer = sanitizer or ResponseSanitizer()
        self.prompt_template = prompt_template or RAG_PROMPT_TEMPLATE
        self.default_k = default_k
        self.min_similarity = min_similarity
        self.search_mode = search_mode
        self.embedding_weight = embedding_weight
        self.temperature = temperature
        self.fallback_answer = fallback_answer
        self.no_result_answer = no_result_answer

    def search(
        self,
        query: str,
        top_k: int | None = None,
        document_ids: list[str] | None = None,
        min_similarity: float | None = None,
    ) -> list[ScoredChunk]:
        """Rank stored chunks against a query without generating an answer.

        Args:
            query: User's question
            top_k: Number of chunks to return (default: self.default_k)
            document_ids: Restrict the search to these documents. None or
                          empty searches the whole store.
            min_similarity: Minimum score (default: self.min_similarity)

        Returns:
            ScoredChunks ordered by relevance
        """
        k = self.default_k if top_k is None else top_k
        threshold = self.min_similarity if min_similarity is None else min_similarity

        if document_ids:
            chunks = self.chunk_store.get_by_document_ids(document_ids)
        else:
            chunks = self.chunk_store.get_all()

        if not chunks:
            logger.debug("No chunks to search")
            return []

        query_embedding = self.embedder.embed_text(query)
        if is_zero_vector(query_embedding):
            logger.warning("Query embedding is a zero vector; only keyword matches can score")

        if self.search_mode == "embedding":
            ranked = top_k_by_similarity(query_embedding, chunks, k, min_similarity=threshold)
        else:
            ranked = hybrid_search(
                query_embedding,
                query,
                chunks,
                k,
                min_similarity=threshold,
                embedding_weight=self.embedding_weight,
            )

        logger.debug("Query %r -> %d of %d chunks", query[:50], len(ranked), len(chunks))
        for i, scored in enumerate(ranked):
            logger.debug(
                "  [%d] score=%.3f doc=%s page=%d",
                i,
                scored.score,
                scored.chunk.document_id,
                scored.chunk.page_number,
            )
        return ranked

    def ask(
        self,
        query: str,
        top_k: int | None = None,
        document_ids: list[str] | None = None,
        min_similarity: float | None = None,
    ) -> RagResult:
        """Answer a question from the stored documents.

        Never raises on generation failure; the fallback answer is used
        instead.

        Args:
            query: User's question
            top_k: Number of chunks to retrieve (default: self.default_k)
            document_ids: Restrict the search to these documents
            min_similarity: Minimum score (default: self.min_similarity)

        Returns:
            RagResult with the answer and de-duplicated page sources
        """
        ranked = self.search(query, top_k, document_ids, min_similarity)
        if not ranked:
            logger.info("No relevant chunks found for query; try lowering min_similarity")
            return RagResult(answer=self.no_result_answer, query=query)

        context = self.assembler.assemble(ranked)
        prompt = self.prompt_template.format(context=context, question=query)
        logger.debug("Context %d chars, prompt %d chars", len(context), len(prompt))

        answer = self._generate(prompt)
        return RagResult.from_ranked(query=query, answer=answer, ranked=ranked, context=context)

    def _generate(self, prompt: str) -> str:
        """Run the LLM on a prompt and sanitize its output."""
        if self._llm_client is None:
            logger.warning("No LLM client configured; returning fallback answer")
            return self.fallback_answer

        try:
            raw = self._llm_client.complete(
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except Exception:
            logger.exception("Answer generation failed")
            return self.fallback_answer

        if not raw or not raw.strip():
            return self.fallback_answer

        answer = self.sanitizer.sanitize(raw)
        return answer or self.fallback_answer
