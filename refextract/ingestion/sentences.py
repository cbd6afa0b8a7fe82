"""Conservative sentence splitter tuned for legal prose."""

from __future__ import annotations

import re
from typing import List

SENTENCE_BOUNDARY_PATTERN = re.compile(r"(?<=[.?!;])\s+(?=[A-Z(\"'“])")


def split_sentences(text: str) -> List[str]:
    """Split after terminal punctuation only when a new sentence clearly starts.

    Abbreviations and mid-citation punctuation ("Reg. 3(a)", "No. 12") stay
    inside one chunk because the next token is not capitalised or bracketed.
    """
    chunks = [chunk.strip() for chunk in SENTENCE_BOUNDARY_PATTERN.split(text)]
    chunks = [chunk for chunk in chunks if chunk]
    return chunks if chunks else [text.strip()]
