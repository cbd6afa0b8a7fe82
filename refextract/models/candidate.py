"""Raw pattern hits produced by the rule pass."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class CandidateKind(str, Enum):
    """Which pattern produced a candidate."""

    CIRCULAR_CODE = "circularCode"
    MASTER_CIRCULAR = "masterCircular"
    REGULATION_SET = "regulationSet"
    REGULATION = "regulation"
    ACT_SECTION = "actSection"
    SCHEDULE = "schedule"
    CHAPTER = "chapter"
    CLAUSE = "clause"
    URL = "url"


class Candidate(BaseModel):
    """An unvalidated citation hit with its page/sentence context."""

    model_config = ConfigDict(frozen=True)

    page: int
    sentence: str
    match: str
    kind: CandidateKind
    url: Optional[str] = None

    @property
    def key(self) -> Tuple[int, str, str, str]:
        return (self.page, self.kind.value, self.match, self.sentence)
