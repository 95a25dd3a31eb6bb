# src/pocketscholar/commands/status.py
"""Status command - show store statistics."""

from __future__ import annotations

import os
from pathlib import Path

from pocketscholar.commands.base import StatusResult
from pocketscholar.commands.list import document_info
from pocketscholar.config import get_stores, load_config, resolve_data_dir


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    detailed: bool = False,
) -> StatusResult:
    """Get store statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        detailed: If True, include per-document breakdown

    Returns:
        StatusResult with store statistics
    """
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        return StatusResult(success=True, data_dir=effective_data_dir)

    try:
        chunk_store = get_stores(effective_data_dir)
    except Exception as e:
        return StatusResult(success=False, error=f"Failed to access database: {e}")

    document_ids = chunk_store.list_document_ids()
    result = StatusResult(
        success=True,
        data_dir=effective_data_dir,
        total_documents=len(document_ids),
        total_chunks=chunk_store.count_chunks(),
    )

    if detailed:
        for document_id in document_ids:
            result.documents.append(document_info(chunk_store, document_id))

    return result
