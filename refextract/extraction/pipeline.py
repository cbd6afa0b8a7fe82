"""Hybrid extraction: page-true parsing, rule candidates, normalization, merge."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from refextract.extraction.candidates import find_candidates
from refextract.extraction.merge import merge_references
from refextract.extraction.normalizers import Normalizer, RulesNormalizer
from refextract.ingestion.parse_pdfs import extract_pages
from refextract.models.candidate import Candidate
from refextract.models.document import PageRecord
from refextract.models.reference import ReferenceRecord

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    pages: List[PageRecord] = field(default_factory=list)
    candidates: List[Candidate] = field(default_factory=list)
    references: List[ReferenceRecord] = field(default_factory=list)


class HybridPipeline:
    """Runs every stage for one document; nothing is shared between runs."""

    def __init__(self, normalizer: Normalizer | None = None) -> None:
        self.normalizer = normalizer or RulesNormalizer()

    def run(self, path: Union[str, Path]) -> PipelineResult:
        pages = extract_pages(path)
        result = PipelineResult(pages=pages, candidates=find_candidates(pages))
        if not result.candidates:
            logger.info("No candidates found by rules in %s", path)
            return result

        normalized = self.normalizer.normalize(result.candidates)
        result.references = merge_references(normalized)
        logger.info("%s: %s references", Path(path).name, len(result.references))
        return result
