# src/pocketscholar/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pocketscholar.stores import ChunkStore

CHUNKS_DB = "chunks.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    Chunks and their embeddings are persisted to ``<data_dir>/chunks.db``.

    Args:
        data_dir: Base directory for storage files.
                  Created if it doesn't exist.

    Example:
        scholar = PocketScholar(
            provider=LiteLLMProvider(llm="ollama/llama3.2:1b", embedding="ollama/all-minilm"),
            storage=LocalStorage("./my_data"),
        )
    """

    data_dir: str

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, CHUNKS_DB)

    def build_chunk_store(self) -> ChunkStore:
        """Build the SQLite chunk store, creating the data directory if needed."""
        from pocketscholar.stores import SQLiteChunkStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)
        return SQLiteChunkStore(self.db_path)
