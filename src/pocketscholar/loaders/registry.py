# src/pocketscholar/loaders/registry.py
"""Loader registry for auto-selecting file loaders."""

import importlib.util

from pocketscholar.loaders.base import Loader
from pocketscholar.loaders.text import TextLoader
from pocketscholar.models import PageText


class UnsupportedFileError(ValueError):
    """Raised when no registered loader handles a file type."""


class LoaderRegistry:
    """Registry for file loaders.

    Selects the first registered loader that supports a file's extension.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._loaders: list[Loader] = []

    def register(self, loader: Loader) -> None:
        """Register a loader."""
        self._loaders.append(loader)

    def find_loader(self, path: str) -> Loader | None:
        """Find a loader that supports the given path."""
        for loader in self._loaders:
            if loader.supports(path):
                return loader
        return None

    def supported_extensions(self) -> set[str]:
        """All extensions handled by the registered loaders."""
        return {ext for loader in self._loaders for ext in loader.SUPPORTED_EXTENSIONS}

    def load_pages(self, path: str) -> list[PageText]:
        """Load a file's pages using the appropriate loader.

        Raises:
            UnsupportedFileError: If no loader supports the file type
        """
        loader = self.find_loader(path)
        if loader is None:
            raise UnsupportedFileError(f"No loader found for: {path}")
        return loader.load_pages(path)

    @classmethod
    def default(cls) -> "LoaderRegistry":
        """Create a registry with all available loaders registered.

        Registers TextLoader (always available) plus a PDF loader if one of
        the PDF extras is installed.

        PDF loader priority: pdfplumber (better tables) > pypdf (lighter)
        """
        registry = cls()
        registry.register(TextLoader())

        if importlib.util.find_spec("pdfplumber") is not None:
            from pocketscholar.loaders.pdfplumber_loader import PDFPlumberLoader

            registry.register(PDFPlumberLoader())
        elif importlib.util.find_spec("pypdf") is not None:
            from pocketscholar.loaders.pypdf_loader import PyPDFLoader

            registry.register(PyPDFLoader())

        return registry
