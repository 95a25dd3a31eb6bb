# src/pocketscholar/stores/sqlite_chunk.py
"""SQLite chunk store implementation."""

import sqlite3
from pathlib import Path

from pocketscholar.models import Chunk
from pocketscholar.stores.base import ChunkStore
from pocketscholar.stores.blob import decode_embedding, encode_embedding

_COLUMNS = "id, document_id, page_number, chunk_index, text, embedding"
_ORDER = "ORDER BY document_id, page_number, chunk_index"


def _row_to_chunk(row: tuple) -> Chunk:
    return Chunk(
        id=row[0],
        document_id=row[1],
        page_number=row[2],
        chunk_index=row[3],
        text=row[4],
        embedding=decode_embedding(row[5]),
    )


class SQLiteChunkStore(ChunkStore):
    """SQLite-based chunk store with embeddings kept as float32 BLOBs."""

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chunks (
                    id TEXT PRIMARY KEY,
                    document_id TEXT NOT NULL,
                    page_number INTEGER NOT NULL,
                    chunk_index INTEGER NOT NULL,
                    text TEXT NOT NULL,
                    embedding BLOB
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_document_id ON chunks(document_id)")
            conn.commit()

    def get_all(self) -> list[Chunk]:
        """Get every stored chunk."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"SELECT {_COLUMNS} FROM chunks {_ORDER}")
            return [_row_to_chunk(row) for row in cursor.fetchall()]

    def get_by_document_ids(self, document_ids: list[str]) -> list[Chunk]:
        """Get all chunks belonging to any of the given documents."""
        if not document_ids:
            return []
        placeholders = ",".join("?" * len(document_ids))
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM chunks WHERE document_id IN ({placeholders}) {_ORDER}",
                list(document_ids),
            )
            return [_row_to_chunk(row) for row in cursor.fetchall()]

    def get_by_document_id(self, document_id: str) -> list[Chunk]:
        """Get all chunks of one document."""
        return self.get_by_document_ids([document_id])

    def insert_all(self, chunks: list[Chunk]) -> None:
        """Store chunks, overwriting if they exist."""
        if not chunks:
            return
        with sqlite3.connect(self.db_path) as conn:
            conn.executemany(
                f"""
                INSERT OR REPLACE INTO chunks ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        c.id,
                        c.document_id,
                        c.page_number,
                        c.chunk_index,
                        c.text,
                        encode_embedding(c.embedding),
                    )
                    for c in chunks
                ],
            )
            conn.commit()

    def delete_by_document_id(self, document_id: str) -> int:
        """Delete all chunks of a document."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
            conn.commit()
            return cursor.rowcount

    def delete_all(self) -> int:
        """Delete every chunk."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM chunks")
            conn.commit()
            return cursor.rowcount

    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT COUNT(id) FROM chunks")
            count = cursor.fetchone()
            return count[0] if count else 0

    def list_document_ids(self) -> list[str]:
        """List all unique document IDs."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT DISTINCT document_id FROM chunks ORDER BY document_id")
            return [row[0] for row in cursor.fetchall()]

    def count_by_document_id(self, document_id: str) -> int:
        """Count the chunks of one document."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "SELECT COUNT(id) FROM chunks WHERE document_id = ?",
                (document_id,),
            )
            count = cursor.fetchone()
            return count[0] if count else 0
