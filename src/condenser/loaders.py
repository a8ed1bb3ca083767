"""Load plain document text from text, markdown or PDF files."""

from __future__ import annotations

from pathlib import Path

import pymupdf

TEXT_SUFFIXES = {".txt", ".md", ".markdown", ""}


def extract_pdf_text(path: str | Path) -> str:
    """Extract the text of every page, one page per block."""
    with pymupdf.open(str(path)) as doc:
        return "\n".join(page.get_text() for page in doc)


def load_text(source: str | Path) -> str:
    """Read a document as plain text.

    Raises:
        FileNotFoundError: If ``source`` doesn't exist.
        ValueError: For unsupported file types.
    """
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")

    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(path)
    if suffix in TEXT_SUFFIXES:
        return path.read_text(encoding="utf-8", errors="replace")

    raise ValueError(f"Unsupported file format: {suffix}")
