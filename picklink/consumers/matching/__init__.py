"""Pick-to-event matching: lexical scorer and resolution policy."""

from picklink.consumers.matching.normalizer import normalize_name
from picklink.consumers.matching.policy import ResolutionPolicy
from picklink.consumers.matching.scorer import rank_candidates, score_event, score_pick

__all__ = [
    "ResolutionPolicy",
    "normalize_name",
    "rank_candidates",
    "score_event",
    "score_pick",
]
