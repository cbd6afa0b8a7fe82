"""Prompt templates for the normalization and one-shot stages."""

from __future__ import annotations

import json
from typing import Iterable

from refextract.models.candidate import Candidate

NORMALIZE_SYSTEM_PROMPT = """You are normalizing legal/reference candidates extracted from a SEBI circular.
For each candidate, emit zero or more normalized references following the schema.
Rules:
- Use ONLY information present in the candidate sentence and match text.
- If multiple items are present (e.g., "Regulation 12(3) and 12(3A)"), emit separate entries.
- title is the as-written title if present, else null.
- identifier is a precise code or number (circular code, Regulation number, Section).
- Include the source page and a short snippet (<=200 chars) containing the reference.
- If a URL includes "#page=110", set anchorPageHint=110.
- Never invent text; lower confidence if unsure."""

ONE_SHOT_SYSTEM_PROMPT = """You are extracting **only explicit references** to other documents from a SEBI circular PDF.
Return a JSON object with a "references" array following the provided JSON Schema exactly. Rules:
- Do NOT invent titles, identifiers, or dates. Use only what is present in the PDF.
- Include all page numbers where each reference appears.
- If multiple items are cited together (e.g., "Regulation 12(3) and 12(3A)"), return **separate entries**.
- Prefer the title as written, else null. Keep identifiers precise (e.g., circular code, regulation number).
- Snippet must be a short exact quote (<=200 chars) containing the reference.
- If a URL includes an anchor like "#page=110", set anchorPageHint=110.
- If uncertain, lower confidence; do not fabricate."""

ONE_SHOT_USER_PROMPT = (
    "Extract all references and return ONLY the JSON per the schema. No extra prose."
)


def build_normalize_prompt(candidates: Iterable[Candidate]) -> str:
    payload = [candidate.model_dump(mode="json") for candidate in candidates]
    return (
        "Normalize these candidates into references. Return only JSON per the schema.\n"
        f"{json.dumps(payload, ensure_ascii=False)}"
    )
