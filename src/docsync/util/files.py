from __future__ import annotations

import os
import re

PDF_KIND: str = "pdf"
PDF_MIME: str = "application/pdf"
PDF_EXTENSION: str = ".pdf"

MAX_FILE_SIZE: int = 50 * 1024 * 1024

# Keyword -> tag; matched case-insensitively against the filename.
FILENAME_TAG_KEYWORDS: tuple[str, ...] = ("facture", "contrat", "rapport")

_YEAR_RE = re.compile(r"\d{4}")


def has_extension(filename: str, extension: str = PDF_EXTENSION) -> bool:
    return bool(filename) and filename.lower().endswith(extension.lower())


def strip_extension(filename: str) -> str:
    """Return the filename without its last extension (`a.b.pdf` -> `a.b`)."""
    base = os.path.basename(filename)
    stem, ext = os.path.splitext(base)
    return stem if ext else base


def tags_from_filename(filename: str) -> list[str]:
    """
    Derive tags from a filename.

    Known keywords become tags; any 4-digit run (a year, usually) adds `date`.
    """
    lower = filename.lower()
    tags = [kw for kw in FILENAME_TAG_KEYWORDS if kw in lower]
    if _YEAR_RE.search(filename):
        tags.append("date")
    return tags
