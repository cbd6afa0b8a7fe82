"""
End-to-end tests for the hybrid pipeline.
"""

import json
from unittest.mock import Mock

import pytest

from refextract.errors import DocumentReadError, NormalizationError
from refextract.extraction.normalizers import LLMNormalizer, RulesNormalizer
from refextract.extraction.pipeline import HybridPipeline
from refextract.models.reference import ReferenceType

SENTENCE = "Refer to SEBI/HO/MRD/DSA/CIR/2023/45 dated Jan 1, 2023 and Regulation 9(1)."


class TestHybridPipelineRulesOnly:
    def test_one_page_scenario(self, make_pdf):
        result = HybridPipeline(RulesNormalizer()).run(make_pdf([SENTENCE]))

        by_type = {r.type: r for r in result.references}
        assert len(result.references) == 2
        circular = by_type[ReferenceType.CIRCULAR]
        regulation = by_type[ReferenceType.REGULATION]
        assert circular.identifier == "SEBI/HO/MRD/DSA/CIR/2023/45"
        assert regulation.identifier == "Regulation 9(1)"
        for record in (circular, regulation):
            assert record.confidence == 0.4
            assert record.pages == [1]
            assert record.snippets == [SENTENCE]
            assert record.title is None
            assert record.anchor_page_hint is None

    def test_repeated_reference_merges_across_pages(self, make_pdf):
        path = make_pdf(["Chapter 4 applies here.", "Nothing.", "See Chapter 4 again."])

        result = HybridPipeline(RulesNormalizer()).run(path)

        (chapter,) = result.references
        assert chapter.pages == [1, 3]
        assert set(chapter.snippets) == {"Chapter 4 applies here.", "See Chapter 4 again."}

    def test_page_links_reach_the_output(self, make_pdf):
        path = make_pdf(["Plain text."], links={1: ["https://www.sebi.gov.in/m.pdf#page=110"]})

        result = HybridPipeline(RulesNormalizer()).run(path)

        (link,) = result.references
        assert link.type is ReferenceType.URL
        assert link.url == "https://www.sebi.gov.in/m.pdf#page=110"
        assert link.anchor_page_hint is None

    def test_no_candidates_is_an_empty_result(self, make_pdf):
        normalizer = Mock()

        result = HybridPipeline(normalizer).run(make_pdf(["Nothing to see here."]))

        assert result.references == []
        assert len(result.pages) == 1
        normalizer.normalize.assert_not_called()

    def test_unreadable_document(self, tmp_path):
        path = tmp_path / "bad.pdf"
        path.write_bytes(b"not a pdf either")

        with pytest.raises(DocumentReadError):
            HybridPipeline().run(path)

    def test_runs_are_independent(self, make_pdf):
        pipeline = HybridPipeline(RulesNormalizer())
        first = pipeline.run(make_pdf(["Chapter 1."], name="one.pdf"))
        second = pipeline.run(make_pdf(["Chapter 2."], name="two.pdf"))

        assert [r.snippets for r in first.references] == [["Chapter 1."]]
        assert [r.snippets for r in second.references] == [["Chapter 2."]]


class TestHybridPipelineWithModel:
    def test_model_records_are_merged(self, make_pdf):
        client = Mock()
        client.complete_json.return_value = json.dumps(
            {
                "references": [
                    {
                        "type": "Regulation",
                        "title": None,
                        "identifier": "Regulation 9(1)",
                        "url": None,
                        "anchorPageHint": None,
                        "pages": [1],
                        "snippets": ["Regulation 9(1)"],
                        "confidence": 0.8,
                    }
                ]
            }
        )
        normalizer = LLMNormalizer(client=client, batch_size=1)

        result = HybridPipeline(normalizer).run(make_pdf([SENTENCE]))

        assert client.complete_json.call_count == 2
        (regulation,) = result.references
        assert regulation.confidence == 0.8

    def test_model_failure_aborts_run(self, make_pdf):
        client = Mock()
        client.complete_json.return_value = ""

        with pytest.raises(NormalizationError):
            HybridPipeline(LLMNormalizer(client=client)).run(make_pdf([SENTENCE]))
