"""
NWAlign - Needleman-Wunsch global sequence alignment
"""

from .errors import (
    NWAlignError,
    ConfigurationError,
    FormatError,
    ValidationError,
    TracebackError
)
from .seq_alignment import (
    AlignmentConfig,
    AlignmentEngine,
    AlignmentMatrix,
    AlignmentResult,
    pairwise
)

__version__ = "0.1.0"

__all__ = [
    "NWAlignError",
    "ConfigurationError",
    "FormatError",
    "ValidationError",
    "TracebackError",
    "AlignmentConfig",
    "AlignmentEngine",
    "AlignmentMatrix",
    "AlignmentResult",
    "pairwise",
    "__version__"
]
