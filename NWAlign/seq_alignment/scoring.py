"""
Scoring policies for pairwise alignment.

A scoring policy is any callable ``policy(a, b) -> int`` that is pure,
deterministic and total over the symbols it will be asked about. The engine
never inspects a policy beyond calling it.
"""

from typing import Callable, Dict, Tuple, Optional

import numpy as np


ScoringPolicy = Callable[[str, str], int]

DEFAULT_MATCH = 1
DEFAULT_MISMATCH = 0


# BLOSUM62 - protein substitution matrix, rows/columns in AMINO_ACIDS order
AMINO_ACIDS = "ARNDCQEGHILKMFPSTWYV"

_BLOSUM62_ROWS = np.array([
    [ 4, -1, -2, -2,  0, -1, -1,  0, -2, -1, -1, -1, -1, -2, -1,  1,  0, -3, -2,  0],
    [-1,  5,  0, -2, -3,  1,  0, -2,  0, -3, -2,  2, -1, -3, -2, -1, -1, -3, -2, -3],
    [-2,  0,  6,  1, -3,  0,  0,  0,  1, -3, -3,  0, -2, -3, -2,  1,  0, -4, -2, -3],
    [-2, -2,  1,  6, -3,  0,  2, -1, -1, -3, -4, -1, -3, -3, -1,  0, -1, -4, -3, -3],
    [ 0, -3, -3, -3,  9, -3, -4, -3, -3, -1, -1, -3, -1, -2, -3, -1, -1, -2, -2, -1],
    [-1,  1,  0,  0, -3,  5,  2, -2,  0, -3, -2,  1,  0, -3, -1,  0, -1, -2, -1, -2],
    [-1,  0,  0,  2, -4,  2,  5, -2,  0, -3, -3,  1, -2, -3, -1,  0, -1, -3, -2, -2],
    [ 0, -2,  0, -1, -3, -2, -2,  6, -2, -4, -4, -2, -3, -3, -2,  0, -2, -2, -3, -3],
    [-2,  0,  1, -1, -3,  0,  0, -2,  8, -3, -3, -1, -2, -1, -2, -1, -2, -2,  2, -3],
    [-1, -3, -3, -3, -1, -3, -3, -4, -3,  4,  2, -3,  1,  0, -3, -2, -1, -3, -1,  3],
    [-1, -2, -3, -4, -1, -2, -3, -4, -3,  2,  4, -2,  2,  0, -3, -2, -1, -2, -1,  1],
    [-1,  2,  0, -1, -3,  1,  1, -2, -1, -3, -2,  5, -1, -3, -1,  0, -1, -3, -2, -2],
    [-1, -1, -2, -3, -1,  0, -2, -3, -2,  1,  2, -1,  5,  0, -2, -1, -1, -1, -1,  1],
    [-2, -3, -3, -3, -2, -3, -3, -3, -1,  0,  0, -3,  0,  6, -4, -2, -2,  1,  3, -1],
    [-1, -2, -2, -1, -3, -1, -1, -2, -2, -3, -3, -1, -2, -4,  7, -1, -1, -4, -3, -2],
    [ 1, -1,  1,  0, -1,  0,  0,  0, -1, -2, -2,  0, -1, -2, -1,  4,  1, -3, -2, -2],
    [ 0, -1,  0, -1, -1, -1, -1, -2, -2, -1, -1, -1, -1, -2, -1,  1,  5, -2, -2,  0],
    [-3, -3, -4, -4, -2, -2, -3, -2, -2, -3, -2, -3, -1,  1, -4, -3, -2, 11,  2, -3],
    [-2, -2, -2, -3, -2, -1, -2, -3,  2, -1, -1, -2, -1,  3, -3, -2, -2,  2,  7, -1],
    [ 0, -3, -3, -3, -1, -2, -2, -3, -3,  3,  1, -2,  1, -1, -2, -2,  0, -3, -1,  4],
], dtype=np.int64)

BLOSUM62: Dict[Tuple[str, str], int] = {
    (a, b): int(_BLOSUM62_ROWS[i, j])
    for i, a in enumerate(AMINO_ACIDS)
    for j, b in enumerate(AMINO_ACIDS)
}


def symbols_match(a: str, b: str) -> bool:
    """Case-insensitive symbol identity."""
    return a.casefold() == b.casefold()


def default_policy(a: str, b: str) -> int:
    """1 for equal symbols (ignoring case), 0 otherwise."""
    return DEFAULT_MATCH if symbols_match(a, b) else DEFAULT_MISMATCH


def match_mismatch_policy(match: int = DEFAULT_MATCH,
                          mismatch: int = DEFAULT_MISMATCH) -> ScoringPolicy:
    """
    Build a case-insensitive identity policy with custom scores

    Args:
        match: Score for two equal symbols
        mismatch: Score for two different symbols

    Returns:
        ScoringPolicy: callable ``(a, b) -> int``

    Example:
        >>> policy = match_mismatch_policy(2, -1)
        >>> policy("a", "A"), policy("a", "c")
        (2, -1)
    """
    def policy(a: str, b: str) -> int:
        return match if symbols_match(a, b) else mismatch

    return policy


class SubstitutionMatrixPolicy:
    """Score symbol pairs by table lookup (e.g. BLOSUM62)"""

    def __init__(self, table: Optional[Dict[Tuple[str, str], int]] = None, default: int = -4):
        """
        Parameters:
        -----------
        table : dict
            Mapping ``(a, b) -> score`` keyed by upper-case symbols
            (default BLOSUM62)
        default : int
            Score for pairs missing from the table (default -4, as in BLOSUM62
            for the stop symbol)
        """
        self.table = dict(BLOSUM62 if table is None else table)
        self.default = default

    def __call__(self, a: str, b: str) -> int:
        return self.table.get((a.upper(), b.upper()), self.default)

    def __repr__(self) -> str:
        return f"SubstitutionMatrixPolicy(entries={len(self.table)}, default={self.default})"


def policy_match_score(policy: ScoringPolicy) -> int:
    """Score the policy gives to a pair of identical symbols."""
    return policy("a", "a")


def policy_mismatch_score(policy: ScoringPolicy) -> int:
    """Score the policy gives to a pair of different symbols."""
    return policy("a", "b")
