# src/pocketscholar/scholar.py
"""Central configuration class for PocketScholar."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pocketscholar.configuration import ProviderConfig, StorageConfig
    from pocketscholar.ingestor import Ingestor, ProgressCallback
    from pocketscholar.loaders import LoaderRegistry
    from pocketscholar.models import IngestResult, PageText, RagResult
    from pocketscholar.providers import LLMClient
    from pocketscholar.retriever import Retriever
    from pocketscholar.stores import ChunkStore

from pocketscholar.settings import Settings

logger = logging.getLogger(__name__)


class PocketScholar:
    """Bundles the chunk store, embedder and generation client.

    Configure once, then ingest documents and ask questions, or create
    Retrievers/Ingestors for finer control.

    There are two ways to create a PocketScholar instance:

    1. With a storage bundle:

        from pocketscholar import PocketScholar, LiteLLMProvider, LocalStorage

        scholar = PocketScholar(
            provider=LiteLLMProvider(llm="ollama/llama3.2:1b", embedding="ollama/all-minilm"),
            storage=LocalStorage("./data"),
        )
        scholar.ingest_file("thesis.pdf")
        result = scholar.ask("What sample size was used?")

    2. With an explicit store:

        from pocketscholar.stores import SQLiteChunkStore

        scholar = PocketScholar.from_stores(
            provider=LiteLLMProvider(...),
            chunk_store=SQLiteChunkStore("./data/chunks.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        storage: StorageConfig | None = None,
        chunk_store: ChunkStore | None = None,
        settings: Settings | None = None,
        loader_registry: LoaderRegistry | None = None,
        llm_client: LLMClient | None = None,
    ) -> None:
        """Create a PocketScholar instance.

        Args:
            provider: Provider configuration (builds the embedder and LLM client).
            storage: Storage bundle. Mutually exclusive with chunk_store.
            chunk_store: Explicit chunk store.
            settings: Behavioral settings. If None, uses defaults.
            loader_registry: Optional loader registry. If None, uses default.
            llm_client: Optional generation client overriding the provider's.

        Raises:
            ValueError: If neither or both of storage and chunk_store are given.
        """
        self._settings = settings if settings is not None else Settings()

        if storage is not None:
            if chunk_store is not None:
                raise ValueError("Cannot mix 'storage' bundle with an explicit chunk_store")
            self.chunk_store = storage.build_chunk_store()
        elif chunk_store is not None:
            self.chunk_store = chunk_store
        else:
            raise ValueError("Must provide either 'storage' bundle or 'chunk_store'")

        self._provider = provider
        self.embedder = provider.build_embedder(self._settings)
        self._llm_client = llm_client
        self._loader_registry = loader_registry
        self._closed = False

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        chunk_store: ChunkStore,
        settings: Settings | None = None,
        loader_registry: LoaderRegistry | None = None,
        llm_client: LLMClient | None = None,
    ) -> PocketScholar:
        """Create PocketScholar with an explicit chunk store."""
        return cls(
            provider=provider,
            chunk_store=chunk_store,
            settings=settings,
            loader_registry=loader_registry,
            llm_client=llm_client,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_loader_registry(self) -> LoaderRegistry:
        """Get or create the loader registry."""
        if self._loader_registry is None:
            from pocketscholar.loaders import LoaderRegistry

            self._loader_registry = LoaderRegistry.default()
        return self._loader_registry

    def _get_llm_client(self) -> LLMClient:
        """Get or build the generation client."""
        if self._llm_client is None:
            self._llm_client = self._provider.build_llm_client(self._settings)
        return self._llm_client

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("PocketScholar instance has been closed")

    def retriever(
        self,
        *,
        llm_client: LLMClient | None = None,
        use_llm: bool = True,
        prompt_template: str | None = None,
        default_k: int | None = None,
    ) -> Retriever:
        """Create a Retriever using this instance's store and embedder.

        Args:
            llm_client: Generation client. If None, the provider's client is used.
            use_llm: Set False for a retrieval-only Retriever that never
                     builds a generation client.
            prompt_template: Custom prompt template with {context} and {question}.
            default_k: Number of chunks to retrieve. If None, uses settings.

        Returns:
            Configured Retriever instance.
        """
        from pocketscholar.retriever import FALLBACK_ANSWER, NO_RESULT_ANSWER, Retriever

        self._check_open()
        settings = self._settings
        if llm_client is None and use_llm:
            llm_client = self._get_llm_client()

        return Retriever(
            chunk_store=self.chunk_store,
            embedder=self.embedder,
            llm_client=llm_client,
            assembler=settings.build_assembler(),
            sanitizer=settings.build_sanitizer(),
            prompt_template=prompt_template or settings.prompt_template,
            default_k=default_k if default_k is not None else settings.default_k,
            min_similarity=settings.min_similarity,
            search_mode=settings.search_mode,
            embedding_weight=settings.embedding_weight,
            temperature=settings.synthesis_temperature,
            fallback_answer=settings.fallback_answer or FALLBACK_ANSWER,
            no_result_answer=settings.no_result_answer or NO_RESULT_ANSWER,
        )

    def ingestor(self) -> Ingestor:
        """Create an Ingestor using this instance's store, embedder and chunk layout."""
        from pocketscholar.ingestor import Ingestor

        self._check_open()
        return Ingestor(
            chunk_store=self.chunk_store,
            embedder=self.embedder,
            chunker=self._settings.build_chunker(),
        )

    def ingest_file(
        self,
        filepath: str,
        document_id: str | None = None,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest a file, replacing any chunks previously stored for it.

        Args:
            filepath: Path to the file to ingest
            document_id: Optional custom document identifier. If not provided,
                         the absolute path will be used.
            on_progress: Optional callback for progress updates

        Returns:
            IngestResult with the stored chunks or the reason nothing was stored
        """
        return self.ingestor().ingest_file(
            filepath,
            document_id,
            loader_registry=self._get_loader_registry(),
            on_progress=on_progress,
        )

    def ingest_pages(
        self,
        pages: list[PageText],
        document_id: str,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest already extracted pages under a document id."""
        return self.ingestor().ingest_pages(pages, document_id, on_progress=on_progress)

    def ask(
        self,
        query: str,
        top_k: int | None = None,
        document_ids: list[str] | None = None,
        min_similarity: float | None = None,
    ) -> RagResult:
        """Answer a question from the stored documents.

        See Retriever.ask for argument details.
        """
        return self.retriever().ask(query, top_k, document_ids, min_similarity)

    def list_documents(self) -> list[str]:
        """List the ids of all stored documents."""
        self._check_open()
        return self.chunk_store.list_document_ids()

    def delete_document(self, document_id: str) -> int:
        """Delete all chunks of a document.

        Returns:
            Number of chunks removed (0 if the document was unknown)
        """
        self._check_open()
        removed = self.chunk_store.delete_by_document_id(document_id)
        logger.info("Deleted %d chunks of %s", removed, document_id)
        return removed

    def clear(self) -> int:
        """Delete every stored chunk, e.g. before re-ingesting with a new embedding model.

        Returns:
            Number of chunks removed
        """
        self._check_open()
        removed = self.chunk_store.delete_all()
        logger.info("Cleared %d chunks", removed)
        return removed

    def warm_up(self) -> bool:
        """Check the embedding provider produces real vectors."""
        self._check_open()
        return self.embedder.warm_up()

    def close(self) -> None:
        """Release resources held by the store.

        The SQLite store opens a connection per operation and does not close
        it explicitly; each connection is released when garbage collected.
        Stores that do expose close() have it called. After close() the
        instance should not be used.
        """
        if self._closed:
            return
        if hasattr(self.chunk_store, "close"):
            self.chunk_store.close()
        self._closed = True

    def __enter__(self) -> PocketScholar:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
