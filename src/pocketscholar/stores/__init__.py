# src/pocketscholar/stores/__init__.py
"""Storage abstractions for PocketScholar."""

from pocketscholar.stores.base import ChunkStore
from pocketscholar.stores.blob import decode_embedding, encode_embedding
from pocketscholar.stores.sqlite_chunk import SQLiteChunkStore

__all__ = [
    "ChunkStore",
    "SQLiteChunkStore",
    "encode_embedding",
    "decode_embedding",
]
