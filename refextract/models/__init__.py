"""Typed models shared across the application."""

from .candidate import Candidate, CandidateKind
from .document import PageRecord
from .reference import ReferenceEnvelope, ReferenceRecord, ReferenceType

__all__ = [
    "Candidate",
    "CandidateKind",
    "PageRecord",
    "ReferenceEnvelope",
    "ReferenceRecord",
    "ReferenceType",
]
