# src/pocketscholar/commands/delete.py
"""Delete and clear commands - remove documents from the store.

Both take an optional confirmation callback so each front end can ask
the user in its own way.
"""

from __future__ import annotations

import os
from pathlib import Path

from pocketscholar.commands.base import ConfirmCallback, ConfirmRequest, DeleteResult
from pocketscholar.config import get_stores, load_config, resolve_data_dir


def delete(
    document_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> DeleteResult:
    """Delete a document's chunks from the store.

    Args:
        document_id: Document to delete
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional confirmation callback. Return True to proceed.
            If None, deletion proceeds without confirmation (--force).

    Returns:
        DeleteResult with deletion statistics, or a cancelled result
    """
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        return DeleteResult(success=False, document_id=document_id, error="No database found.")

    try:
        chunk_store = get_stores(effective_data_dir)
    except Exception as e:
        return DeleteResult(
            success=False, document_id=document_id, error=f"Failed to access database: {e}"
        )

    chunk_count = chunk_store.count_by_document_id(document_id)
    if chunk_count == 0:
        return DeleteResult(
            success=False, document_id=document_id, error=f"Document not found: {document_id}"
        )

    if on_confirm is not None:
        request = ConfirmRequest(
            message=f"Delete {document_id}?",
            details=f"This will remove {chunk_count} chunks from the database.",
        )
        if not on_confirm(request):
            return DeleteResult(success=False, document_id=document_id, error="Cancelled.")

    deleted = chunk_store.delete_by_document_id(document_id)
    return DeleteResult(success=True, document_id=document_id, chunks_deleted=deleted)


def clear(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> DeleteResult:
    """Delete every document, e.g. before re-ingesting with a new embedding model.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional confirmation callback. Return True to proceed.

    Returns:
        DeleteResult with the number of chunks removed
    """
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        return DeleteResult(success=True)

    try:
        chunk_store = get_stores(effective_data_dir)
    except Exception as e:
        return DeleteResult(success=False, error=f"Failed to access database: {e}")

    chunk_count = chunk_store.count_chunks()
    if chunk_count == 0:
        return DeleteResult(success=True)

    if on_confirm is not None:
        request = ConfirmRequest(
            message="Delete all documents?",
            details=f"This will remove {chunk_count} chunks from "
            f"{len(chunk_store.list_document_ids())} documents.",
        )
        if not on_confirm(request):
            return DeleteResult(success=False, error="Cancelled.")

    return DeleteResult(success=True, chunks_deleted=chunk_store.delete_all())
