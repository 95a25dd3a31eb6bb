# src/pocketscholar/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Progress callbacks for long-running operations
- Confirmation callbacks for destructive commands
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    # Ingest stages
    LOADING = "Loading"
    CHUNKING = "Chunking"
    EMBEDDING = "Embedding"
    STORING = "Storing"

    # General stages
    PROCESSING = "Processing"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def is_indeterminate(self) -> bool:
        """True if progress is indeterminate (total unknown)."""
        return self.total == 0

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 if indeterminate."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class ConfirmRequest:
    """Request for the user to confirm a destructive operation."""

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class FileIngestResult:
    """Result for a single file ingestion."""

    filepath: str
    document_id: str
    chunks: int = 0
    zero_vectors: int = 0
    error_kind: str | None = None  # IngestErrorKind value if nothing was stored
    reason: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_kind is not None


@dataclass
class IngestReport(CommandResult):
    """Result of the ingest command.

    Attributes:
        files_processed: Number of files stored
        files_failed: Number of files that produced no chunks
        total_chunks: Total chunks stored
        total_zero_vectors: Chunks stored without a usable embedding
        file_results: Per-file results
        errors: List of (filepath, error_message) for failed files
    """

    files_processed: int = 0
    files_failed: int = 0
    total_chunks: int = 0
    total_zero_vectors: int = 0
    file_results: list[FileIngestResult] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class SourceResult:
    """One cited (document, page) pair."""

    document_id: str
    page_number: int
    score: float


@dataclass
class PassageResult:
    """A retrieved chunk, for --raw output."""

    document_id: str
    page_number: int
    score: float
    text: str


@dataclass
class QueryResult(CommandResult):
    """Result of the ask command.

    Attributes:
        query: The original question
        answer: Generated answer (None in raw mode)
        sources: Cited (document, page) pairs in ranking order
        passages: Retrieved chunks (raw mode only)
    """

    query: str = ""
    answer: str | None = None
    sources: list[SourceResult] = field(default_factory=list)
    passages: list[PassageResult] = field(default_factory=list)

    @property
    def cited_pages(self) -> list[int]:
        return sorted({source.page_number for source in self.sources})


@dataclass
class DocumentInfo:
    """Information about a stored document."""

    document_id: str
    chunk_count: int
    page_count: int = 0


@dataclass
class ListResult(CommandResult):
    """Result of the list command."""

    documents: list[DocumentInfo] = field(default_factory=list)


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        data_dir: Data directory inspected
        total_documents: Number of stored documents
        total_chunks: Total chunks in the store
        documents: Per-document breakdown (if detailed)
    """

    data_dir: str = ""
    total_documents: int = 0
    total_chunks: int = 0
    documents: list[DocumentInfo] = field(default_factory=list)


@dataclass
class DeleteResult(CommandResult):
    """Result of the delete and clear commands.

    Attributes:
        document_id: The document deleted (None for clear)
        chunks_deleted: Number of chunks deleted
    """

    document_id: str | None = None
    chunks_deleted: int = 0


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        provider: Provider type (litellm, custom)
        llm_model: Generation model name
        embedding_model: Embedding model name
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
    """

    provider: str = "litellm"
    llm_model: str | None = None
    embedding_model: str | None = None
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
