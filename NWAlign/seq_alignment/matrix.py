"""
Needleman-Wunsch score and traceback matrices

Both sequences handed to this layer carry a sentinel symbol at position 0, so
row 0 and column 0 of the matrix stand for "before the sequence starts" and
the recurrence needs no special base case beyond the origin.
"""

import logging
import numbers
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from ..errors import FormatError, ValidationError
from .scoring import ScoringPolicy

logger = logging.getLogger(__name__)

SENTINEL = "."


class TraceDirection(IntEnum):
    """Move that produced a cell's score"""
    NONE = 0
    DIAGONAL = 1
    UP = 2
    LEFT = 3


def check_formatted(seq_a: str, seq_b: str) -> None:
    """Raise FormatError unless both sequences lead with the sentinel."""
    for name, seq in (("seq_a", seq_a), ("seq_b", seq_b)):
        if not isinstance(seq, str):
            raise ValidationError(name, repr(seq), "a string of symbols")
        if not seq.startswith(SENTINEL):
            raise FormatError(name, seq, SENTINEL)


def policy_score(policy: ScoringPolicy, a: str, b: str) -> int:
    """Call the policy and insist on an integral score."""
    value = policy(a, b)
    # bool is Integral but never a meaningful score
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError("policy", f"{value!r} for ({a!r}, {b!r})", "an int score")
    return int(value)


def gap_cost(index: int, last: int, interior_gap: int, edge_gap: int) -> int:
    """
    Penalty for a gap move made along row/column ``index``.

    A move is an edge gap when it runs along the first or the last
    row/column of the matrix.
    """
    return edge_gap if index == 0 or index == last else interior_gap


def best_move(diag: Optional[int],
              up: Optional[int],
              left: Optional[int]) -> Tuple[int, TraceDirection]:
    """
    Pick the best available candidate move.

    ``None`` marks a move that is not available at the matrix boundary.
    Ties go to DIAGONAL, then UP, then LEFT.
    """
    best = None
    direction = TraceDirection.NONE
    for value, move in ((diag, TraceDirection.DIAGONAL),
                        (up, TraceDirection.UP),
                        (left, TraceDirection.LEFT)):
        if value is not None and (best is None or value > best):
            best, direction = value, move
    if best is None:
        return 0, TraceDirection.NONE
    return best, direction


class AlignmentMatrix:
    """Score matrix plus traceback matrix for one sentinel-prefixed pair"""

    def __init__(
        self,
        seq_a: str,
        seq_b: str,
        policy: ScoringPolicy,
        interior_gap: int = 0,
        edge_gap: int = 0
    ):
        check_formatted(seq_a, seq_b)
        self.seq_a = seq_a
        self.seq_b = seq_b
        self.policy = policy
        self.interior_gap = interior_gap
        self.edge_gap = edge_gap
        self.n = len(seq_a) - 1
        self.m = len(seq_b) - 1

        self._scores = np.zeros((self.n + 1, self.m + 1), dtype=np.int64)
        self._directions = np.full(
            (self.n + 1, self.m + 1), TraceDirection.NONE, dtype=np.int8
        )
        self.filled = False

    @classmethod
    def fill(
        cls,
        seq_a: str,
        seq_b: str,
        policy: ScoringPolicy,
        interior_gap: int = 0,
        edge_gap: int = 0,
        method: str = "bottom_up",
        verbose: bool = False
    ) -> "AlignmentMatrix":
        """
        Build and fill the matrix for a sentinel-prefixed pair

        Parameters:
        -----------
        seq_a, seq_b : str
            Sequences with the sentinel at position 0
        policy : callable
            Scoring policy ``(a, b) -> int``
        interior_gap : int
            Penalty added for gaps away from the matrix boundary
        edge_gap : int
            Penalty added for gaps along the first/last row or column
        method : str
            "bottom_up" (row-by-row) or "top_down" (memoized)
        verbose : bool
            If True, print a progress bar while filling

        Returns:
        --------
        AlignmentMatrix
            Filled matrix; the optimal score is ``matrix.score``
        """
        matrix = cls(seq_a, seq_b, policy, interior_gap, edge_gap)
        logger.debug("Filling %dx%d matrix (%s)", matrix.n + 1, matrix.m + 1, method)
        if method == "bottom_up":
            matrix._fill_bottom_up(verbose)
        elif method == "top_down":
            matrix._fill_top_down()
        else:
            raise ValidationError("method", repr(method), "'bottom_up' or 'top_down'")
        matrix.filled = True
        logger.debug("Matrix filled, score %d", matrix.score)
        return matrix

    @classmethod
    def fill_top_down(cls, seq_a, seq_b, policy, interior_gap=0, edge_gap=0):
        """Memoized variant of :meth:`fill`; produces an identical matrix."""
        return cls.fill(seq_a, seq_b, policy, interior_gap, edge_gap, method="top_down")

    def _candidates(self, i: int, k: int) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        """Scores reachable at (i, k) via each move, or None if unavailable"""
        scores = self._scores
        diag = up = left = None
        if i > 0 and k > 0:
            diag = int(scores[i - 1, k - 1]) + policy_score(self.policy, self.seq_a[i], self.seq_b[k])
        if i > 0:
            up = int(scores[i - 1, k]) + gap_cost(k, self.m, self.interior_gap, self.edge_gap)
        if k > 0:
            left = int(scores[i, k - 1]) + gap_cost(i, self.n, self.interior_gap, self.edge_gap)
        return diag, up, left

    def _compute_cell(self, i: int, k: int) -> None:
        score, direction = best_move(*self._candidates(i, k))
        self._scores[i, k] = score
        self._directions[i, k] = direction

    def _fill_bottom_up(self, verbose: bool = False) -> None:
        if verbose:
            print(f"\nFilling alignment matrix for sequences of length {self.n} x {self.m}")
            print(f"Total cells to compute: {(self.n + 1) * (self.m + 1)}")
            print("Computing ", end="")

        for i in range(self.n + 1):
            for k in range(self.m + 1):
                if i == 0 and k == 0:
                    continue
                self._compute_cell(i, k)

            if verbose and i % max(1, self.n // 10) == 0:
                print("█", end="", flush=True)

        if verbose:
            print(" 100.0%")
            print("✓ Matrix computation complete!")

    def _fill_top_down(self) -> None:
        # explicit stack instead of recursion; presence tracked per cell
        computed = np.zeros(self._scores.shape, dtype=bool)
        computed[0, 0] = True
        stack = [(self.n, self.m)]
        while stack:
            i, k = stack[-1]
            if computed[i, k]:
                stack.pop()
                continue
            pending = [
                (pi, pk) for pi, pk in self._predecessors(i, k) if not computed[pi, pk]
            ]
            if pending:
                stack.extend(pending)
                continue
            stack.pop()
            self._compute_cell(i, k)
            computed[i, k] = True

    @staticmethod
    def _predecessors(i: int, k: int):
        if i > 0 and k > 0:
            yield i - 1, k - 1
        if i > 0:
            yield i - 1, k
        if k > 0:
            yield i, k - 1

    def step_score(self, i: int, k: int) -> int:
        """Contribution of the move recorded at (i, k) to the total score."""
        direction = self.direction_at(i, k)
        if direction == TraceDirection.DIAGONAL:
            return policy_score(self.policy, self.seq_a[i], self.seq_b[k])
        if direction == TraceDirection.UP:
            return gap_cost(k, self.m, self.interior_gap, self.edge_gap)
        if direction == TraceDirection.LEFT:
            return gap_cost(i, self.n, self.interior_gap, self.edge_gap)
        return 0

    @property
    def shape(self) -> Tuple[int, int]:
        return self._scores.shape

    @property
    def score(self) -> int:
        """Optimal global alignment score (bottom-right cell)"""
        return int(self._scores[self.n, self.m])

    def score_at(self, i: int, k: int) -> int:
        return int(self._scores[i, k])

    def direction_at(self, i: int, k: int) -> TraceDirection:
        return TraceDirection(int(self._directions[i, k]))

    @property
    def scores(self) -> np.ndarray:
        """Read-only view of the score matrix"""
        view = self._scores.view()
        view.flags.writeable = False
        return view

    @property
    def directions(self) -> np.ndarray:
        """Read-only view of the traceback matrix (TraceDirection codes)"""
        view = self._directions.view()
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        state = "filled" if self.filled else "empty"
        return f"AlignmentMatrix({self.n + 1}x{self.m + 1}, {state})"


def score_only(
    seq_a: str,
    seq_b: str,
    policy: ScoringPolicy,
    interior_gap: int = 0,
    edge_gap: int = 0
) -> int:
    """
    Optimal score without a traceback matrix

    Keeps two rows of the score matrix at a time, so memory is O(m).
    """
    check_formatted(seq_a, seq_b)
    n, m = len(seq_a) - 1, len(seq_b) - 1
    previous = None
    for i in range(n + 1):
        current = [0] * (m + 1)
        for k in range(m + 1):
            if i == 0 and k == 0:
                continue
            diag = up = left = None
            if i > 0 and k > 0:
                diag = previous[k - 1] + policy_score(policy, seq_a[i], seq_b[k])
            if i > 0:
                up = previous[k] + gap_cost(k, m, interior_gap, edge_gap)
            if k > 0:
                left = current[k - 1] + gap_cost(i, n, interior_gap, edge_gap)
            current[k], _ = best_move(diag, up, left)
        previous = current
    return previous[m]
