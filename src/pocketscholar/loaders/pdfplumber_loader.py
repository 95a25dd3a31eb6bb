# src/pocketscholar/loaders/pdfplumber_loader.py
"""PDF loader using pdfplumber - best for tables and structured content."""

from pathlib import Path
from typing import Any

from pocketscholar.loaders.base import Loader
from pocketscholar.models import PageText


class PDFPlumberLoader(Loader):
    """Load PDF files using pdfplumber.

    Tables are appended to their page's text as markdown, so figures in
    tables stay searchable and attributable to the right page.

    Requires: pip install pocketscholar[pdf]
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def load_pages(self, path: str) -> list[PageText]:
        """Extract the text and tables of each page of a PDF.

        Raises:
            ImportError: If pdfplumber is not installed
            FileNotFoundError: If file does not exist
        """
        try:
            import pdfplumber
        except ImportError:
            raise ImportError(
                "pdfplumber is required for full PDF support with table extraction. "
                "Install with: pip install pocketscholar[pdf]"
            ) from None

        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        pages = []

        with pdfplumber.open(path) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                text = page.extract_text() or ""

                tables = page.extract_tables()
                table_md = tables_to_markdown(tables) if tables else ""

                content = f"{text}\n\n{table_md}".strip()
                if content:
                    pages.append(PageText(page_number=page_num, text=content))

        return pages


def tables_to_markdown(tables: list[list[list[Any]]]) -> str:
    """Convert pdfplumber tables to markdown.

    Args:
        tables: List of tables, where each table is a list of rows,
                and each row is a list of cell values

    Returns:
        Markdown-formatted tables separated by blank lines
    """
    md_tables = []

    for table in tables:
        if not table or not table[0]:
            continue

        header_cells = [str(cell or "").replace("|", "\\|") for cell in table[0]]
        lines = [
            "| " + " | ".join(header_cells) + " |",
            "| " + " | ".join("---" for _ in table[0]) + " |",
        ]
        for row in table[1:]:
            cells = [str(cell or "").replace("|", "\\|") for cell in row]
            lines.append("| " + " | ".join(cells) + " |")

        md_tables.append("\n".join(lines))

    return "\n\n".join(md_tables)
