"""Citation extraction stages."""

from .candidates import find_candidates
from .merge import merge_references
from .normalizers import LLMNormalizer, Normalizer, RulesNormalizer
from .one_shot import OneShotExtractor
from .pipeline import HybridPipeline, PipelineResult

__all__ = [
    "HybridPipeline",
    "LLMNormalizer",
    "Normalizer",
    "OneShotExtractor",
    "PipelineResult",
    "RulesNormalizer",
    "find_candidates",
    "merge_references",
]
