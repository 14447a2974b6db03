"""Whitespace normalization for extracted résumé and query text."""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Flatten text onto a single line with single spaces.

    Newlines (from PDF extraction) become spaces and runs of whitespace
    collapse to one space. Case is preserved; consumers lowercase as needed.
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()
