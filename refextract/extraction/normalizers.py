"""Turn raw candidates into typed reference records."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Protocol, Sequence

from pydantic import ValidationError

from refextract.config import settings
from refextract.errors import NormalizationError
from refextract.llm.openai_client import OpenAIChatClient
from refextract.llm.prompts import NORMALIZE_SYSTEM_PROMPT, build_normalize_prompt
from refextract.models.candidate import Candidate, CandidateKind
from refextract.models.reference import (
    SNIPPET_MAX_CHARS,
    ReferenceEnvelope,
    ReferenceRecord,
    ReferenceType,
)

logger = logging.getLogger(__name__)

KIND_TO_TYPE: Dict[CandidateKind, ReferenceType] = {
    CandidateKind.MASTER_CIRCULAR: ReferenceType.MASTER_CIRCULAR,
    CandidateKind.CIRCULAR_CODE: ReferenceType.CIRCULAR,
    CandidateKind.REGULATION: ReferenceType.REGULATION,
    CandidateKind.REGULATION_SET: ReferenceType.REGULATION,
    CandidateKind.ACT_SECTION: ReferenceType.ACT_SECTION,
    CandidateKind.SCHEDULE: ReferenceType.SCHEDULE,
    CandidateKind.CHAPTER: ReferenceType.CHAPTER,
    CandidateKind.CLAUSE: ReferenceType.CLAUSE,
    CandidateKind.URL: ReferenceType.URL,
}
IDENTIFIER_KINDS = {CandidateKind.CIRCULAR_CODE, CandidateKind.REGULATION}

ANCHOR_PAGE_PATTERN = re.compile(r"#page=(\d+)(?!\d)")


class Normalizer(Protocol):
    """Maps a batch of candidates to validated reference records."""

    def normalize(self, candidates: Sequence[Candidate]) -> List[ReferenceRecord]:
        ...


def parse_anchor_page_hint(url: Optional[str]) -> Optional[int]:
    """Page number asserted by a ``#page=N`` fragment, if any."""
    if not url:
        return None
    match = ANCHOR_PAGE_PATTERN.search(url)
    return int(match.group(1)) if match else None


def parse_envelope(raw: Optional[str], stage: str, batch: Optional[int] = None) -> List[ReferenceRecord]:
    """Validate a model payload against the reference schema, failing closed."""
    preview = settings.raw_payload_preview_chars
    if not raw or not raw.strip():
        raise NormalizationError(stage, "Model returned an empty response", raw="", batch=batch)
    try:
        envelope = ReferenceEnvelope.model_validate_json(raw)
    except ValidationError as exc:
        raise NormalizationError(
            stage,
            f"Model output failed schema validation: {exc.error_count()} error(s)",
            raw=raw,
            batch=batch,
            preview_chars=preview,
        ) from exc
    return envelope.references


class RulesNormalizer:
    """Casts candidates straight to records at a fixed, low confidence."""

    def __init__(self, confidence: Optional[float] = None, snippet_max_chars: Optional[int] = None) -> None:
        self.confidence = settings.rules_confidence if confidence is None else confidence
        self.snippet_max_chars = min(snippet_max_chars or settings.snippet_max_chars, SNIPPET_MAX_CHARS)

    def to_record(self, candidate: Candidate) -> ReferenceRecord:
        kind = candidate.kind
        snippet = candidate.sentence or candidate.match
        return ReferenceRecord(
            type=KIND_TO_TYPE.get(kind, ReferenceType.OTHER),
            title=None,
            identifier=candidate.match if kind in IDENTIFIER_KINDS else None,
            url=candidate.match if kind is CandidateKind.URL else candidate.url,
            anchor_page_hint=None,
            pages=[candidate.page],
            snippets=[snippet[: self.snippet_max_chars]],
            confidence=self.confidence,
        )

    def normalize(self, candidates: Sequence[Candidate]) -> List[ReferenceRecord]:
        return [self.to_record(candidate) for candidate in candidates]


class LLMNormalizer:
    """Sends candidates to the model in fixed-size batches."""

    stage = "normalize"

    def __init__(self, client: OpenAIChatClient | None = None, batch_size: Optional[int] = None) -> None:
        self.client = client or OpenAIChatClient(model=settings.openai_model_normalize)
        self.batch_size = settings.batch_size if batch_size is None else batch_size
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        self.schema = ReferenceEnvelope.model_json_schema(by_alias=True)

    def normalize_batch(self, batch: Sequence[Candidate], index: int) -> List[ReferenceRecord]:
        try:
            raw = self.client.complete_json(
                NORMALIZE_SYSTEM_PROMPT, build_normalize_prompt(batch), self.schema
            )
        except Exception as exc:
            raise NormalizationError(
                self.stage, f"Model call failed for batch {index}: {exc}", batch=index
            ) from exc
        records = parse_envelope(raw, self.stage, batch=index)
        for record in records:
            if record.anchor_page_hint is None:
                record.anchor_page_hint = parse_anchor_page_hint(record.url)
        logger.debug("Batch %s: %s candidates -> %s references", index, len(batch), len(records))
        return records

    def normalize(self, candidates: Sequence[Candidate]) -> List[ReferenceRecord]:
        records: List[ReferenceRecord] = []
        total = (len(candidates) + self.batch_size - 1) // self.batch_size
        for index, start in enumerate(range(0, len(candidates), self.batch_size), start=1):
            logger.info("Normalizing batch %s/%s", index, total)
            records.extend(self.normalize_batch(candidates[start : start + self.batch_size], index))
        return records
