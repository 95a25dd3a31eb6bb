# src/pocketscholar/loaders/base.py
"""Loader abstract base class."""

from abc import ABC, abstractmethod
from pathlib import Path

from pocketscholar.models import PageText


class Loader(ABC):
    """Abstract base class for page-wise text extraction.

    Loaders only extract text; chunking happens later so every loader
    shares the same chunk boundaries and page attribution.
    """

    SUPPORTED_EXTENSIONS: set[str] = set()

    @abstractmethod
    def load_pages(self, path: str) -> list[PageText]:
        """Extract the text of each page of a file.

        Pages without text are omitted; the remaining pages keep their
        original 1-based page numbers.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        ...

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given path."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS
