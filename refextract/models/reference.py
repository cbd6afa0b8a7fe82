"""Normalized reference records and the envelope the model must return."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

SNIPPET_MAX_CHARS = 200
Snippet = Annotated[StrictStr, Field(max_length=SNIPPET_MAX_CHARS)]


class ReferenceType(str, Enum):
    CIRCULAR = "Circular"
    MASTER_CIRCULAR = "Master Circular"
    REGULATION = "Regulation"
    ACT_SECTION = "Act Section"
    SCHEDULE = "Schedule"
    CHAPTER = "Chapter"
    CLAUSE = "Clause"
    STOCK_EXCHANGE_CIRCULAR = "Stock Exchange Circular"
    DEPOSITORY_CIRCULAR = "Depository Circular"
    URL = "URL"
    OTHER = "Other"


class ReferenceRecord(BaseModel):
    """A citation with the pages and quotes it was found on.

    Validation is closed: unknown keys, wrong types and out-of-range values are
    rejected rather than coerced. ``anchor_page_hint`` is serialized as
    ``anchorPageHint``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: ReferenceType
    title: Optional[StrictStr] = None
    identifier: Optional[StrictStr] = None
    url: Optional[StrictStr] = None
    anchor_page_hint: Optional[Annotated[StrictInt, Field(ge=0)]] = Field(
        default=None, alias="anchorPageHint"
    )
    pages: List[StrictInt] = Field(..., min_length=1)
    snippets: List[Snippet] = Field(..., min_length=1)
    confidence: Annotated[float, Field(ge=0.0, le=1.0, strict=True)]

    @property
    def merge_key(self) -> Tuple[str, str, str]:
        return (
            self.type.value,
            (self.identifier or "").lower(),
            (self.title or "").lower(),
        )

    def to_output(self) -> dict:
        """Plain dict with every field present, absent values as ``None``."""
        return self.model_dump(mode="json", by_alias=True)


class ReferenceEnvelope(BaseModel):
    """Top-level object returned by the model."""

    model_config = ConfigDict(extra="forbid")

    references: List[ReferenceRecord]
