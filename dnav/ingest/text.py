"""Plain-text and Markdown page loader."""

from __future__ import annotations

from pathlib import Path

from dnav.extract.models import PageText
from dnav.ingest.base import PageLoader

# Text exported from PDFs separates pages with form feeds
PAGE_BREAK = "\f"


class TextPageLoader(PageLoader):
    """Loader for .txt and .md files."""

    extensions = [".txt", ".text", ".md", ".markdown"]

    def load(self, path: Path) -> list[PageText]:
        """Load a text file, one page per form-feed separated block.

        Raises:
            UnicodeDecodeError: If file cannot be decoded.
            OSError: If file cannot be read.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            # Try common fallback encodings
            for encoding in ["cp1252", "latin-1"]:
                try:
                    content = path.read_text(encoding=encoding)
                    break
                except (UnicodeDecodeError, LookupError):
                    continue
            else:
                raise UnicodeDecodeError(
                    "utf-8",
                    b"",
                    0,
                    0,
                    f"Unable to decode {path} with UTF-8 or common fallback encodings",
                )

        return [
            PageText(page_number=number, text=block, file_name=path.name)
            for number, block in enumerate(content.split(PAGE_BREAK), start=1)
        ]
