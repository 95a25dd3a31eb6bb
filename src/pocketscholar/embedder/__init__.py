# src/pocketscholar/embedder/__init__.py
"""Embedding functionality for PocketScholar."""

from pocketscholar.embedder.base import Embedder
from pocketscholar.embedder.client import DEFAULT_DIMENSION, ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder", "DEFAULT_DIMENSION"]
