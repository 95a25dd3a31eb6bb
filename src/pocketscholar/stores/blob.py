# src/pocketscholar/stores/blob.py
"""Embedding <-> BLOB codec.

Embeddings are stored as big-endian float32 arrays, four bytes per
dimension, so a stored vector has exactly ``dim * 4`` bytes.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

_DTYPE = np.dtype(">f4")


def encode_embedding(embedding: list[float]) -> bytes:
    """Encode an embedding as big-endian float32 bytes."""
    return np.asarray(embedding, dtype=_DTYPE).tobytes()


def decode_embedding(blob: bytes | None) -> list[float]:
    """Decode a BLOB written by :func:`encode_embedding`.

    A missing BLOB, or one whose length is not a multiple of four, decodes
    to an empty embedding; such chunks never match a query dimension.
    """
    if not blob:
        return []
    if len(blob) % _DTYPE.itemsize:
        logger.warning("Discarding corrupt embedding blob of %d bytes", len(blob))
        return []
    return np.frombuffer(blob, dtype=_DTYPE).astype(float).tolist()
