"""Ingestion pipeline for PocketScholar."""

import logging
from collections.abc import Callable
from pathlib import Path

from pocketscholar.chunking import Chunker
from pocketscholar.embedder import Embedder
from pocketscholar.loaders import LoaderRegistry, UnsupportedFileError
from pocketscholar.models import IngestErrorKind, IngestResult, PageText
from pocketscholar.similarity import is_zero_vector
from pocketscholar.stores import ChunkStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type: "loading", "chunking", "embedding" or "storing"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""


class Ingestor:
    """Orchestrates the ingestion pipeline.

    Pipeline:
    1. Load page texts (ingest_file only)
    2. Chunk pages with running chunk indexes
    3. Embed chunks
    4. Replace the document's chunks in the ChunkStore

    Any failure before step 4 is returned as an IngestResult error and the
    store is not touched.
    """

    def __init__(
        self,
        chunk_store: ChunkStore,
        embedder: Embedder,
        chunker: Chunker | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            chunk_store: Store the chunks are written to
            embedder: Component to embed chunk text
            chunker: Chunk layout. If None, uses the default Chunker.
        """
        self.chunk_store = chunk_store
        self.embedder = embedder
        self.chunker = chunker or Chunker()

    def ingest_pages(
        self,
        pages: list[PageText],
        document_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Chunk, embed and store already extracted pages of one document.

        Re-ingesting a document replaces all of its previous chunks.

        Args:
            pages: Page texts in page order
            document_id: Owning document
            on_progress: Optional callback(event, current, total, message)

        Returns:
            IngestResult with the stored chunks, or an EMPTY error when the
            pages contain no text
        """

        def progress(event: str, current: int, total: int, message: str = "") -> None:
            if on_progress:
                on_progress(event, current, total, message)

        progress("chunking", 0, len(pages), f"Chunking {len(pages)} pages...")
        chunks = self.chunker.chunk_pages(pages, document_id)
        progress("chunking", len(pages), len(pages), f"Created {len(chunks)} chunks")

        if not chunks:
            return IngestResult.failed(
                document_id, IngestErrorKind.EMPTY, f"No extractable text in {document_id}"
            )

        progress("embedding", 0, len(chunks), f"Embedding {len(chunks)} chunks...")
        embedded = self.embedder.embed_chunks(chunks)
        progress("embedding", len(chunks), len(chunks), "Embedding complete")

        zero_vectors = sum(1 for chunk in embedded if is_zero_vector(chunk.embedding))
        if zero_vectors:
            logger.warning(
                "%d of %d chunks of %s have zero embeddings and will only match by keyword",
                zero_vectors,
                len(embedded),
                document_id,
            )

        progress("storing", 0, 1, f"Storing {len(embedded)} chunks...")
        removed = self.chunk_store.delete_by_document_id(document_id)
        if removed:
            logger.info("Replaced %d previous chunks of %s", removed, document_id)
        self.chunk_store.insert_all(embedded)
        progress("storing", 1, 1, "Storing chunks complete")

        return IngestResult(document_id=document_id, chunks=embedded, zero_vectors=zero_vectors)

    def ingest_file(
        self,
        filepath: str,
        document_id: str | None = None,
        *,
        loader_registry: LoaderRegistry | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Load a file and ingest its pages.

        Args:
            filepath: Path to the file to ingest
            document_id: Optional custom document identifier. If not provided,
                         the absolute path will be used.
            loader_registry: Loaders to choose from. If None, uses the default registry.
            on_progress: Optional callback for progress updates

        Returns:
            IngestResult; loader failures are reported as NOT_FOUND,
            UNSUPPORTED or PARSE_FAILED errors rather than raised
        """
        file_path = Path(filepath)
        doc_id = document_id or str(file_path.resolve())
        registry = loader_registry or LoaderRegistry.default()

        if on_progress:
            on_progress("loading", 0, 1, f"Loading {file_path.name}...")

        try:
            pages = registry.load_pages(filepath)
        except FileNotFoundError as e:
            return IngestResult.failed(doc_id, IngestErrorKind.NOT_FOUND, str(e))
        except (UnsupportedFileError, ImportError) as e:
            return IngestResult.failed(doc_id, IngestErrorKind.UNSUPPORTED, str(e))
        except Exception as e:
            logger.exception("Failed to extract text from %s", filepath)
            return IngestResult.failed(
                doc_id, IngestErrorKind.PARSE_FAILED, f"Could not read {filepath}: {e}"
            )

        if on_progress:
            on_progress("loading", 1, 1, f"Loaded {len(pages)} pages")

        return self.ingest_pages(pages, doc_id, on_progress=on_progress)
