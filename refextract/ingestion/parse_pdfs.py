"""Parse regulatory PDFs into page-aligned, repaired text."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

import fitz

from refextract.errors import DocumentReadError
from refextract.models.document import PageRecord

logger = logging.getLogger(__name__)

HYPHEN_BREAK_PATTERN = re.compile(r"-\s*\n\s*")
NEWLINES_PATTERN = re.compile(r"\n+")
WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")

TEXT_BLOCK = 0


def dehyphenate(text: str) -> str:
    """Rejoin words split across line wraps and flatten line breaks.

    ``"regula-\\ntions"`` becomes ``"regulations"`` and ``"a\\nb"`` becomes
    ``"a b"``.
    """
    text = HYPHEN_BREAK_PATTERN.sub("", text)
    text = text.replace("\r", "")
    text = NEWLINES_PATTERN.sub(" ", text)
    return WHITESPACE_RUN_PATTERN.sub(" ", text)


def iter_page_fragments(page: fitz.Page) -> Iterable[str]:
    """Yield raw text blocks from a PDF page in reading order."""
    blocks = page.get_text("blocks")
    for block in sorted(blocks, key=lambda b: (b[1], b[0])):
        if block[6] != TEXT_BLOCK:
            continue
        if block[4]:
            yield block[4]


def page_urls(page: fitz.Page) -> List[str]:
    urls: List[str] = []
    for link in page.get_links():
        uri = link.get("uri")
        if link.get("kind") == fitz.LINK_URI and uri and uri not in urls:
            urls.append(str(uri))
    return urls


def extract_pages(path: Union[str, Path]) -> List[PageRecord]:
    """Return one PageRecord per physical page, numbered from 1."""
    source = Path(path)
    try:
        doc = fitz.open(source, filetype="pdf")
    except (RuntimeError, ValueError, OSError) as exc:
        raise DocumentReadError("extract_pages", f"Cannot open {source}: {exc}") from exc

    pages: List[PageRecord] = []
    with doc:
        try:
            for page_index in range(doc.page_count):
                page = doc[page_index]
                text = dehyphenate(" ".join(iter_page_fragments(page))).strip()
                pages.append(
                    PageRecord(page=page_index + 1, text=text, urls=tuple(page_urls(page)))
                )
                logger.debug(
                    "Page %s: %s chars, %s links", page_index + 1, len(text), len(pages[-1].urls)
                )
        except (RuntimeError, ValueError) as exc:
            raise DocumentReadError(
                "extract_pages", f"Failed reading {source} at page {len(pages) + 1}: {exc}"
            ) from exc
    logger.info("Extracted %s pages from %s", len(pages), source)
    return pages
