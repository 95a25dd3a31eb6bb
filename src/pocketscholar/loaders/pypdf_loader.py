# src/pocketscholar/loaders/pypdf_loader.py
"""PDF loader using pypdf - lightweight, pure Python."""

from pathlib import Path

from pocketscholar.loaders.base import Loader
from pocketscholar.models import PageText


class PyPDFLoader(Loader):
    """Load PDF files using pypdf.

    A lightweight, pure Python PDF loader suitable for basic text extraction.
    For documents with tables or complex layouts, consider PDFPlumberLoader.

    Requires: pip install pocketscholar[pdf-text]
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def load_pages(self, path: str) -> list[PageText]:
        """Extract the text of each page of a PDF.

        Raises:
            ImportError: If pypdf is not installed
            FileNotFoundError: If file does not exist
        """
        try:
            from pypdf import PdfReader
        except ImportError:
            raise ImportError(
                "pypdf is required for PDF text extraction. "
                "Install with: pip install pocketscholar[pdf-text]"
            ) from None

        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        pages = []
        reader = PdfReader(path)

        for page_num, page in enumerate(reader.pages, start=1):
            text = page.extract_text() or ""
            if text.strip():
                pages.append(PageText(page_number=page_num, text=text.strip()))

        return pages
