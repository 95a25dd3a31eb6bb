# src/pocketscholar/loaders/__init__.py
"""File loaders for PocketScholar."""

from pocketscholar.loaders.base import Loader
from pocketscholar.loaders.registry import LoaderRegistry, UnsupportedFileError
from pocketscholar.loaders.text import TextLoader

# Optional loaders - imported lazily to avoid ImportError when deps not installed
__all__ = ["Loader", "LoaderRegistry", "TextLoader", "UnsupportedFileError"]


def __getattr__(name: str) -> type:
    """Lazy import optional loaders."""
    if name == "PyPDFLoader":
        from pocketscholar.loaders.pypdf_loader import PyPDFLoader

        return PyPDFLoader
    elif name == "PDFPlumberLoader":
        from pocketscholar.loaders.pdfplumber_loader import PDFPlumberLoader

        return PDFPlumberLoader
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
