from pathlib import Path
from typing import Dict, List, Optional

import fitz
import pytest

from refextract.models.reference import ReferenceRecord


def build_pdf(path: Path, pages: List[str], links: Optional[Dict[int, List[str]]] = None) -> Path:
    """Write a PDF with one text page per entry; ``links`` maps page number to URIs."""
    links = links or {}
    doc = fitz.open()
    for number, text in enumerate(pages, start=1):
        page = doc.new_page()
        if text:
            page.insert_text((50, 72), text, fontsize=10)
        for offset, uri in enumerate(links.get(number, [])):
            top = 700 + offset * 20
            page.insert_link(
                {"kind": fitz.LINK_URI, "from": fitz.Rect(50, top, 250, top + 15), "uri": uri}
            )
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def make_pdf(tmp_path):
    def _make(pages: List[str], links: Optional[Dict[int, List[str]]] = None, name: str = "doc.pdf") -> Path:
        return build_pdf(tmp_path / name, pages, links)

    return _make


@pytest.fixture
def make_reference():
    def _make(**overrides) -> ReferenceRecord:
        data = {
            "type": "Circular",
            "title": None,
            "identifier": "SEBI/HO/MRD/DSA/CIR/2023/45",
            "url": None,
            "anchorPageHint": None,
            "pages": [1],
            "snippets": ["snippet"],
            "confidence": 0.5,
        }
        data.update(overrides)
        return ReferenceRecord.model_validate(data)

    return _make
