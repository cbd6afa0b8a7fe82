"""One-shot strategy: hand the whole PDF to the model and validate what comes back."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from refextract.config import settings
from refextract.errors import DocumentReadError, NormalizationError
from refextract.extraction.normalizers import parse_envelope
from refextract.llm.openai_client import OpenAIChatClient
from refextract.llm.prompts import ONE_SHOT_SYSTEM_PROMPT, ONE_SHOT_USER_PROMPT
from refextract.models.reference import ReferenceEnvelope, ReferenceRecord

logger = logging.getLogger(__name__)


class OneShotExtractor:
    stage = "one_shot"

    def __init__(self, client: OpenAIChatClient | None = None) -> None:
        self.client = client or OpenAIChatClient(model=settings.openai_model_one_shot)
        self.schema = ReferenceEnvelope.model_json_schema(by_alias=True)

    def extract(self, path: Union[str, Path]) -> List[ReferenceRecord]:
        source = Path(path)
        if not source.is_file():
            raise DocumentReadError(self.stage, f"Input PDF not found: {source}")
        logger.info("Sending %s to %s", source.name, self.client.model)
        try:
            raw = self.client.complete_file_json(
                ONE_SHOT_SYSTEM_PROMPT, ONE_SHOT_USER_PROMPT, source, self.schema
            )
        except Exception as exc:
            raise NormalizationError(self.stage, f"Model call failed: {exc}") from exc
        references = parse_envelope(raw, self.stage)
        logger.info("Model returned %s references", len(references))
        return references
