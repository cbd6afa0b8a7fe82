"""Fatal pipeline errors, tagged with the stage that raised them."""

from __future__ import annotations

from typing import Optional


class ExtractionError(RuntimeError):
    """Base class for errors that abort an extraction run."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"[{stage}] {message}")
        self.stage = stage


class DocumentReadError(ExtractionError):
    """The input document could not be opened or parsed."""


class NormalizationError(ExtractionError):
    """The model call failed or returned a payload that does not fit the schema."""

    def __init__(
        self,
        stage: str,
        message: str,
        raw: Optional[str] = None,
        batch: Optional[int] = None,
        preview_chars: int = 2000,
    ) -> None:
        super().__init__(stage, message)
        self.batch = batch
        self.raw = truncate_payload(raw, preview_chars) if raw is not None else None


def truncate_payload(raw: str, limit: int) -> str:
    if len(raw) <= limit:
        return raw
    return f"{raw[:limit]}..."
