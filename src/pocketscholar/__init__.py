"""PocketScholar - question answering over your own documents.

Documents are split page by page into overlapping chunks, embedded and
stored. Questions are answered by ranking chunks with hybrid semantic and
keyword search, assembling a bounded context, asking a small language model
to answer only from that context, and cleaning up its output. Every answer
cites the document pages it came from.

Quick Start (local Ollama models + SQLite):
    from pocketscholar import PocketScholar, LiteLLMProvider, LocalStorage

    scholar = PocketScholar(
        provider=LiteLLMProvider(llm="ollama/llama3.2:1b", embedding="ollama/all-minilm"),
        storage=LocalStorage("./data"),
    )

    scholar.ingest_file("lecture-notes.pdf")

    result = scholar.ask("When was the treaty signed?")
    print(result.answer, result.cited_pages())

Core functions (no providers needed):
    from pocketscholar import Chunker, hybrid_search, assemble_context, sanitize_response
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pocketscholar")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

# Retrieval core
from pocketscholar.chunking import Chunker, chunk_text, split_text

# Configuration objects
from pocketscholar.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from pocketscholar.context import ContextAssembler, assemble_context, remove_overlap
from pocketscholar.embedder import ClientEmbedder, Embedder

# Pipelines
from pocketscholar.ingestor import Ingestor
from pocketscholar.keywords import keyword_score, top_k_by_keyword

# File loading
from pocketscholar.loaders import Loader, LoaderRegistry, TextLoader

# Models
from pocketscholar.models import (
    Chunk,
    IngestError,
    IngestErrorKind,
    IngestResult,
    PageText,
    RagResult,
    RagSource,
    ScoredChunk,
)

# Provider ABCs
from pocketscholar.providers import EmbeddingClient, LLMClient
from pocketscholar.ranking import hybrid_search
from pocketscholar.retriever import Retriever
from pocketscholar.sanitizer import ResponseSanitizer, sanitize_response

# Central configuration
from pocketscholar.scholar import PocketScholar
from pocketscholar.settings import Settings
from pocketscholar.similarity import cosine_similarity, top_k_by_similarity

# Storage
from pocketscholar.stores import ChunkStore, SQLiteChunkStore

__all__ = [
    # Version
    "__version__",
    # Models
    "Chunk",
    "PageText",
    "ScoredChunk",
    "RagSource",
    "RagResult",
    "IngestError",
    "IngestErrorKind",
    "IngestResult",
    # Retrieval core
    "Chunker",
    "split_text",
    "chunk_text",
    "cosine_similarity",
    "top_k_by_similarity",
    "keyword_score",
    "top_k_by_keyword",
    "hybrid_search",
    "ContextAssembler",
    "assemble_context",
    "remove_overlap",
    "ResponseSanitizer",
    "sanitize_response",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "ChunkStore",
    "SQLiteChunkStore",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "Ingestor",
    "Retriever",
    # Central configuration
    "PocketScholar",
    # File loading
    "Loader",
    "LoaderRegistry",
    "TextLoader",
]
