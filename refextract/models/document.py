"""Document-level data models."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class PageRecord(BaseModel):
    """Repaired text and hyperlink targets of one physical page."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(..., ge=1)
    text: str
    urls: Tuple[str, ...] = ()
