"""
Sequence Alignment Module
Provides Needleman-Wunsch global alignment with edge-aware gap penalties
"""

from .matrix import (
    SENTINEL,
    AlignmentMatrix,
    TraceDirection,
    score_only
)
from .pairwise import (
    AlignmentConfig,
    AlignmentEngine,
    AlignmentResult,
    align_many,
    align_many_async,
    pairwise
)
from .scoring import (
    BLOSUM62,
    ScoringPolicy,
    SubstitutionMatrixPolicy,
    default_policy,
    match_mismatch_policy
)
from .traceback import GAP, MATCH_CHAR, path_score, reconstruct, trace_path

__all__ = [
    "SENTINEL",
    "GAP",
    "MATCH_CHAR",
    "AlignmentMatrix",
    "TraceDirection",
    "score_only",
    "AlignmentConfig",
    "AlignmentEngine",
    "AlignmentResult",
    "align_many",
    "align_many_async",
    "pairwise",
    "BLOSUM62",
    "ScoringPolicy",
    "SubstitutionMatrixPolicy",
    "default_policy",
    "match_mismatch_policy",
    "path_score",
    "reconstruct",
    "trace_path"
]
