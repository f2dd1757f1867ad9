"""
Traceback through a filled AlignmentMatrix
"""

from typing import List, Tuple

from ..errors import TracebackError
from .matrix import AlignmentMatrix, TraceDirection
from .scoring import symbols_match

GAP = "_"
MATCH_CHAR = "|"


def trace_path(matrix: AlignmentMatrix) -> List[Tuple[int, int]]:
    """
    Cells visited from (n, m) back to the origin, origin included

    Raises:
        TracebackError: if the matrix was never filled or a stored direction
            does not lead back to (0, 0)
    """
    if not matrix.filled:
        raise TracebackError((matrix.n, matrix.m), "matrix has not been filled")

    i, k = matrix.n, matrix.m
    path = [(i, k)]
    while i > 0 or k > 0:
        direction = matrix.direction_at(i, k)
        if direction == TraceDirection.DIAGONAL and i > 0 and k > 0:
            i -= 1
            k -= 1
        elif direction == TraceDirection.UP and i > 0:
            i -= 1
        elif direction == TraceDirection.LEFT and k > 0:
            k -= 1
        else:
            raise TracebackError((i, k), f"no legal move recorded ({direction.name})")
        path.append((i, k))
    return path


def reconstruct(matrix: AlignmentMatrix) -> Tuple[str, str, str]:
    """
    Rebuild one optimal alignment from the traceback matrix

    Args:
        matrix: Filled AlignmentMatrix

    Returns:
        tuple: (aligned_a, match_line, aligned_b), all of equal length, with
        GAP where a sequence has no symbol and MATCH_CHAR where the aligned
        symbols are equal ignoring case

    Example:
        >>> m = AlignmentMatrix.fill(".ACGT", ".AGT", default_policy)
        >>> reconstruct(m)
        ('ACGT', '| ||', 'A_GT')
    """
    seq_a, seq_b = matrix.seq_a, matrix.seq_b
    aligned_a, match_line, aligned_b = [], [], []

    path = trace_path(matrix)
    for (i, k), (pi, pk) in zip(path, path[1:]):
        if pi == i - 1 and pk == k - 1:
            aligned_a.append(seq_a[i])
            aligned_b.append(seq_b[k])
            match_line.append(MATCH_CHAR if symbols_match(seq_a[i], seq_b[k]) else " ")
        elif pi == i - 1:
            aligned_a.append(seq_a[i])
            aligned_b.append(GAP)
            match_line.append(" ")
        else:
            aligned_a.append(GAP)
            aligned_b.append(seq_b[k])
            match_line.append(" ")

    # collected backwards from (n, m)
    return (
        "".join(reversed(aligned_a)),
        "".join(reversed(match_line)),
        "".join(reversed(aligned_b)),
    )


def path_score(matrix: AlignmentMatrix) -> int:
    """Sum of policy and gap contributions along the traceback path."""
    return sum(matrix.step_score(i, k) for i, k in trace_path(matrix)[:-1])
