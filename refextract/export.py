"""JSON and CSV writers for merged references."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from refextract.models.reference import ReferenceRecord

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "type",
    "title",
    "identifier",
    "url",
    "anchorPageHint",
    "pages",
    "first_page",
    "snippets",
    "confidence",
]
NEEDS_QUOTING = re.compile(r'[",\n]')


def escape_csv(value) -> str:
    text = "" if value is None else str(value)
    if NEEDS_QUOTING.search(text):
        return '"{}"'.format(text.replace('"', '""'))
    return text


def references_to_json(records: Iterable[ReferenceRecord]) -> str:
    return json.dumps([record.to_output() for record in records], indent=2, ensure_ascii=False)


def references_to_csv(records: Iterable[ReferenceRecord]) -> str:
    lines: List[str] = [",".join(CSV_HEADER)]
    for record in records:
        row = [
            record.type.value,
            record.title,
            record.identifier,
            record.url,
            record.anchor_page_hint,
            "|".join(str(page) for page in record.pages),
            min(record.pages),
            " | ".join(record.snippets),
            record.confidence,
        ]
        lines.append(",".join(escape_csv(value) for value in row))
    return "\n".join(lines)


def write_json(records: Iterable[ReferenceRecord], path: Union[str, Path]) -> int:
    records = list(records)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(references_to_json(records), encoding="utf-8")
    logger.info("JSON written to %s (%s items)", output_path, len(records))
    return len(records)


def write_csv(records: Iterable[ReferenceRecord], path: Union[str, Path]) -> int:
    records = list(records)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(references_to_csv(records), encoding="utf-8")
    logger.info("CSV written to %s", output_path)
    return len(records)
