"""Rule pass: find citation candidates in page-aligned sentences."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from refextract.ingestion.sentences import split_sentences
from refextract.models.candidate import Candidate, CandidateKind
from refextract.models.document import PageRecord

logger = logging.getLogger(__name__)

PATTERNS: Dict[CandidateKind, re.Pattern] = {
    CandidateKind.CIRCULAR_CODE: re.compile(r"SEBI/HO/[A-Za-z0-9/-]+/(?:P/)?CIR/\d{4}/\d+"),
    CandidateKind.MASTER_CIRCULAR: re.compile(
        r"\bMaster Circular (?:for|on)\s+[^.,;\n]+?"
        r"(?:\s+dated\s+[A-Z][a-z]+\s+\d{1,2},\s*\d{4}|(?=[.,;\n]|$))",
        re.IGNORECASE,
    ),
    CandidateKind.REGULATION_SET: re.compile(
        r"SEBI\s*\([^)]+\)\s*Regulations,\s*\d{4}", re.IGNORECASE
    ),
    CandidateKind.REGULATION: re.compile(r"\bRegulation(?:s)?\s+\d+(?:\([0-9A-Za-z]+\))*"),
    CandidateKind.ACT_SECTION: re.compile(
        r"\bSection\s+\d+(?:\(\d+\))*\s+of the\s+[^.,\n]+?Act,\s*\d{4}", re.IGNORECASE
    ),
    CandidateKind.SCHEDULE: re.compile(r"\bSchedule\s+[IVXLC]+\b"),
    CandidateKind.CHAPTER: re.compile(r"\bChapter\s+\d+\b"),
    CandidateKind.CLAUSE: re.compile(r"\bClause\s+\d+(?:\.\d+)*\b"),
    CandidateKind.URL: re.compile(r"\bhttps?://\S+", re.IGNORECASE),
}


# "Regulation 12(3) and 12(3A)": sub-clause numbers chained after a regulation hit.
# Bare numbers ("and 15 days", ", 2018") are counts or years, not regulations.
REGULATION_CONTINUATION_PATTERN = re.compile(
    r"\s*(?:,|and|or|&)\s*(\d+(?:\([0-9A-Za-z]+\))+)(?![\d(])"
)
REGULATION_KEYWORD_PATTERN = re.compile(r"Regulations?")


def first_url(sentence: str) -> Optional[str]:
    match = PATTERNS[CandidateKind.URL].search(sentence)
    return match.group(0) if match else None


def iter_matches(kind: CandidateKind, sentence: str) -> Iterable[str]:
    """Yield the match strings for one pattern kind, in sentence order."""
    for match in PATTERNS[kind].finditer(sentence):
        yield match.group(0).strip()
        if kind is not CandidateKind.REGULATION:
            continue
        keyword = REGULATION_KEYWORD_PATTERN.match(match.group(0)).group(0)
        position = match.end()
        continuation = REGULATION_CONTINUATION_PATTERN.match(sentence, position)
        while continuation:
            yield f"{keyword} {continuation.group(1)}"
            position = continuation.end()
            continuation = REGULATION_CONTINUATION_PATTERN.match(sentence, position)


def scan_sentence(page: int, sentence: str) -> Iterable[Candidate]:
    """Run every pattern independently over one sentence."""
    sentence = sentence.strip()
    url_in_sentence = first_url(sentence)
    for kind in PATTERNS:
        for text in iter_matches(kind, sentence):
            yield Candidate(
                page=page,
                sentence=sentence,
                match=text,
                kind=kind,
                url=url_in_sentence,
            )


def scan_page(page: PageRecord) -> Iterable[Candidate]:
    for sentence in split_sentences(page.text):
        yield from scan_sentence(page.page, sentence)
    for url in page.urls:
        yield Candidate(page=page.page, sentence="", match=url, kind=CandidateKind.URL, url=url)


def dedupe_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Collapse exact duplicates on (page, kind, match, sentence)."""
    unique: Dict[Tuple[int, str, str, str], Candidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.key, candidate)
    return list(unique.values())


def find_candidates(pages: Iterable[PageRecord]) -> List[Candidate]:
    """Return deduplicated candidates for every page; order is not meaningful."""
    raw: List[Candidate] = []
    for page in pages:
        raw.extend(scan_page(page))
    candidates = dedupe_candidates(raw)
    logger.info("Found %s candidates (%s before dedupe)", len(candidates), len(raw))
    return candidates
