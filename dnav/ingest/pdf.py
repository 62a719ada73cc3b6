"""PDF page loader."""

from __future__ import annotations

import logging
from pathlib import Path

from dnav.extract.models import PageText
from dnav.ingest.base import PageLoader

logger = logging.getLogger(__name__)


class PdfPageLoader(PageLoader):
    """Loader for PDF documents."""

    extensions = [".pdf"]

    def load(self, path: Path) -> list[PageText]:
        """Extract the text of every page of a PDF.

        A page whose text cannot be extracted is kept with empty text so
        page numbers stay aligned with the document.

        Raises:
            pypdf.errors.PdfReadError: If PDF is corrupted or encrypted.
            OSError: If file cannot be read.
        """
        from pypdf import PdfReader
        from pypdf.errors import PdfReadError

        try:
            reader = PdfReader(path)
        except PdfReadError as e:
            raise PdfReadError(f"Failed to read PDF {path}: {e}") from e

        if reader.is_encrypted:
            raise PdfReadError(f"PDF is encrypted and cannot be parsed: {path}")

        pages: list[PageText] = []
        for page_num, page in enumerate(reader.pages, start=1):
            try:
                text = page.extract_text() or ""
            except Exception as e:
                # Log warning but continue with other pages
                logger.warning("Failed to extract text from page %d of %s: %s", page_num, path, e)
                text = ""
            pages.append(PageText(page_number=page_num, text=text, file_name=path.name))

        return pages
