"""
Tests for page-true PDF extraction.
"""

from unittest.mock import MagicMock

import pytest

from refextract.errors import DocumentReadError
from refextract.ingestion import parse_pdfs
from refextract.ingestion.parse_pdfs import dehyphenate, extract_pages


class TestDehyphenate:
    def test_joins_hyphenated_line_break(self):
        assert dehyphenate("informa-\ntion") == "information"

    def test_hyphen_break_with_surrounding_whitespace(self):
        assert dehyphenate("regula-  \n  tions apply") == "regulations apply"

    def test_plain_line_break_becomes_space(self):
        assert dehyphenate("a\nb") == "a b"

    def test_collapses_whitespace_and_carriage_returns(self):
        assert dehyphenate("one\r\n\n\ntwo   three\t\tfour") == "one two three four"

    def test_keeps_inline_hyphens(self):
        assert dehyphenate("stock-broker and e-voting") == "stock-broker and e-voting"


class TestExtractPages:
    def test_pages_numbered_in_order(self, make_pdf):
        path = make_pdf(["First page.", "Second page.", "Third page."])

        pages = extract_pages(path)

        assert [p.page for p in pages] == [1, 2, 3]
        assert pages[0].text == "First page."
        assert pages[2].text == "Third page."

    def test_multiline_text_is_repaired(self, make_pdf):
        path = make_pdf(["The informa-\ntion is\nhere."])

        pages = extract_pages(path)

        assert pages[0].text == "The information is here."

    def test_collects_link_annotations(self, make_pdf):
        path = make_pdf(
            ["Links below.", "No links."],
            links={1: ["https://www.sebi.gov.in/a.html", "https://www.sebi.gov.in/b.pdf#page=3"]},
        )

        pages = extract_pages(path)

        assert set(pages[0].urls) == {
            "https://www.sebi.gov.in/a.html",
            "https://www.sebi.gov.in/b.pdf#page=3",
        }
        assert pages[1].urls == ()

    def test_blank_page_has_empty_text(self, make_pdf):
        pages = extract_pages(make_pdf(["Text.", ""]))

        assert len(pages) == 2
        assert pages[1].text == ""

    def test_unparseable_file_is_fatal(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")

        with pytest.raises(DocumentReadError) as excinfo:
            extract_pages(path)
        assert excinfo.value.stage == "extract_pages"

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(DocumentReadError):
            extract_pages(tmp_path / "missing.pdf")

    def test_document_closed_after_mid_read_error(self, monkeypatch, tmp_path):
        doc = MagicMock()
        doc.page_count = 2
        doc.__enter__.return_value = doc
        doc.__exit__.return_value = False
        doc.__getitem__.side_effect = RuntimeError("corrupt page stream")
        monkeypatch.setattr(parse_pdfs.fitz, "open", MagicMock(return_value=doc))

        with pytest.raises(DocumentReadError):
            extract_pages(tmp_path / "any.pdf")

        assert doc.__exit__.called
