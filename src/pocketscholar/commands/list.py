# src/pocketscholar/commands/list.py
"""List command - list stored documents."""

from __future__ import annotations

import os
from pathlib import Path

from pocketscholar.commands.base import DocumentInfo, ListResult
from pocketscholar.config import get_stores, load_config, resolve_data_dir
from pocketscholar.stores import ChunkStore


def document_info(chunk_store: ChunkStore, document_id: str) -> DocumentInfo:
    """Chunk and page counts for one document."""
    chunks = chunk_store.get_by_document_id(document_id)
    return DocumentInfo(
        document_id=document_id,
        chunk_count=len(chunks),
        page_count=len({chunk.page_number for chunk in chunks}),
    )


def list_documents(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ListResult:
    """List all stored documents.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ListResult with document information
    """
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        return ListResult(success=True, documents=[])

    try:
        chunk_store = get_stores(effective_data_dir)
    except Exception as e:
        return ListResult(success=False, error=f"Failed to access database: {e}")

    result = ListResult(success=True)
    for document_id in chunk_store.list_document_ids():
        result.documents.append(document_info(chunk_store, document_id))

    return result
