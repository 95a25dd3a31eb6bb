# src/pocketscholar/loaders/text.py
"""Text and Markdown file loader."""

from pathlib import Path

from pocketscholar.loaders.base import Loader
from pocketscholar.models import PageText

PAGE_BREAK = "\f"


class TextLoader(Loader):
    """Load plain text and markdown files.

    Form feed characters are treated as page breaks, which is what
    ``pdftotext`` and similar converters emit; a file without them is a
    single page.
    """

    SUPPORTED_EXTENSIONS = {".txt", ".md", ".markdown", ".text"}

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def load_pages(self, path: str) -> list[PageText]:
        """Load a text file and return its non-blank pages."""
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        content = file_path.read_text(encoding=self.encoding)

        return [
            PageText(page_number=page_number, text=text.strip())
            for page_number, text in enumerate(content.split(PAGE_BREAK), start=1)
            if text.strip()
        ]
