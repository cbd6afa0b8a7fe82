"""Collapse references seen on several pages into one record with pooled evidence."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from refextract.models.reference import ReferenceRecord

logger = logging.getLogger(__name__)


def _unique(items: Iterable) -> List:
    return list(dict.fromkeys(items))


def _absorb(existing: ReferenceRecord, incoming: ReferenceRecord) -> None:
    existing.pages = sorted(set(existing.pages) | set(incoming.pages))
    existing.snippets = _unique([*existing.snippets, *incoming.snippets])
    existing.confidence = max(existing.confidence, incoming.confidence)
    if not existing.url and incoming.url:
        existing.url = incoming.url
    if existing.anchor_page_hint is None and incoming.anchor_page_hint is not None:
        existing.anchor_page_hint = incoming.anchor_page_hint


def merge_references(records: Iterable[ReferenceRecord]) -> List[ReferenceRecord]:
    """Return one record per merge key, in first-seen order.

    The first record seen under a key keeps its ``type``, ``identifier`` and
    ``title``; later ones only contribute pages, snippets, the higher
    confidence and any ``url``/``anchorPageHint`` the stored record lacks.
    Input records are left untouched.
    """
    merged: Dict[Tuple[str, str, str], ReferenceRecord] = {}
    seen = 0
    for record in records:
        seen += 1
        existing = merged.get(record.merge_key)
        if existing is None:
            stored = record.model_copy(deep=True)
            stored.pages = sorted(set(stored.pages))
            stored.snippets = _unique(stored.snippets)
            merged[record.merge_key] = stored
        else:
            _absorb(existing, record)
    logger.info("Merged %s references into %s", seen, len(merged))
    return list(merged.values())
