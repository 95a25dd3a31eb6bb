# src/pocketscholar/commands/ingest.py
"""Ingest command - add documents to the store."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from pocketscholar.commands.base import (
    CommandStage,
    FileIngestResult,
    IngestReport,
    ProgressCallback,
    ProgressUpdate,
)
from pocketscholar.config import ConfigError, create_scholar, get_scholar_config

if TYPE_CHECKING:
    from pocketscholar.scholar import PocketScholar


# Map internal stage names to CommandStage
STAGE_MAP = {
    "loading": CommandStage.LOADING,
    "chunking": CommandStage.CHUNKING,
    "embedding": CommandStage.EMBEDDING,
    "storing": CommandStage.STORING,
}


def ingest(
    path: str | Path,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    document_id: str | None = None,
    on_progress: ProgressCallback | None = None,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestReport:
    """Ingest a file, or every supported file under a directory.

    Args:
        path: File or directory to ingest
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        document_id: Custom document id (single files only)
        on_progress: Callback for progress updates during ingestion
        on_file_start: Callback when starting a file (filepath, file_index, total_files)
        on_file_complete: Callback when a file is done (receives FileIngestResult)

    Returns:
        IngestReport with aggregated statistics and per-file results
    """
    if not Path(path).exists():
        return IngestReport(success=False, error=f"Path not found: {path}")

    config = get_scholar_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return IngestReport(success=False, error=config.message)

    try:
        scholar = create_scholar(config)
    except Exception as e:
        return IngestReport(success=False, error=f"Failed to create PocketScholar: {e}")

    try:
        return ingest_with_scholar(
            scholar,
            path,
            document_id=document_id,
            on_progress=on_progress,
            on_file_start=on_file_start,
            on_file_complete=on_file_complete,
        )
    finally:
        scholar.close()


def _find_files(scholar: PocketScholar, path: Path) -> list[str]:
    """Supported files under path, in a stable order."""
    if path.is_file():
        return [str(path)]

    registry = scholar._get_loader_registry()
    files = []
    for root, _, filenames in os.walk(path):
        for filename in sorted(filenames):
            filepath = os.path.join(root, filename)
            if registry.find_loader(filepath):
                files.append(filepath)
    return sorted(files)


def _ingest_file(
    scholar: PocketScholar,
    filepath: str,
    document_id: str | None = None,
    on_progress: ProgressCallback | None = None,
) -> FileIngestResult:
    """Ingest a single file."""

    def progress_adapter(event: str, current: int, total: int, message: str) -> None:
        """Adapt the ingestor's progress callback to ProgressUpdate."""
        if on_progress:
            on_progress(
                ProgressUpdate(
                    stage=STAGE_MAP.get(event, CommandStage.PROCESSING),
                    current=current,
                    total=total,
                    message=message,
                )
            )

    result = scholar.ingest_file(
        filepath,
        document_id,
        on_progress=progress_adapter if on_progress else None,
    )

    if result.error is not None:
        return FileIngestResult(
            filepath=filepath,
            document_id=result.document_id,
            error_kind=result.error.kind.value,
            reason=result.error.message,
        )

    return FileIngestResult(
        filepath=filepath,
        document_id=result.document_id,
        chunks=len(result.chunks),
        zero_vectors=result.zero_vectors,
    )


def ingest_with_scholar(
    scholar: PocketScholar,
    path: str | Path,
    document_id: str | None = None,
    on_progress: ProgressCallback | None = None,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestReport:
    """Ingest files using an existing PocketScholar instance.

    Args:
        scholar: Existing PocketScholar instance
        path: File or directory to ingest
        document_id: Custom document id (single files only)
        on_progress: Callback for progress updates
        on_file_start: Callback when starting a file
        on_file_complete: Callback when a file is done

    Returns:
        IngestReport with aggregated statistics
    """
    path = Path(path)

    if not path.exists():
        return IngestReport(success=False, error=f"Path not found: {path}")
    if document_id is not None and not path.is_file():
        return IngestReport(
            success=False, error="A document id can only be given when ingesting a single file"
        )

    files = _find_files(scholar, path)
    if not files:
        return IngestReport(success=True, error="No supported files found")

    result = IngestReport(success=True)

    for i, filepath in enumerate(files):
        if on_file_start:
            on_file_start(filepath, i, len(files))

        file_result = _ingest_file(scholar, filepath, document_id, on_progress)
        result.file_results.append(file_result)

        if file_result.failed:
            result.files_failed += 1
            result.errors.append((filepath, file_result.reason or "unknown error"))
        else:
            result.files_processed += 1
            result.total_chunks += file_result.chunks
            result.total_zero_vectors += file_result.zero_vectors

        if on_file_complete:
            on_file_complete(file_result)

    if result.files_failed and result.files_processed == 0:
        result.success = False
        result.error = result.errors[0][1]

    return result
