"""
Pairwise Global Alignment Module
Needleman-Wunsch with separate edge and interior gap penalties
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Tuple

from ..errors import ValidationError
from .matrix import SENTINEL, AlignmentMatrix, score_only
from .scoring import (
    DEFAULT_MATCH,
    DEFAULT_MISMATCH,
    ScoringPolicy,
    default_policy,
    match_mismatch_policy,
    policy_match_score,
    policy_mismatch_score,
)
from .traceback import GAP, MATCH_CHAR, reconstruct

logger = logging.getLogger(__name__)

DEFAULT_GAP = 0


def _check_penalty(name: str, value) -> int:
    # bool is an int subclass but never a meaningful penalty
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(name, repr(value), "a signed integer")
    return value


@dataclass(frozen=True)
class AlignmentConfig:
    """Immutable scoring configuration shared by every alignment of an engine"""
    policy: ScoringPolicy = default_policy
    interior_gap: int = DEFAULT_GAP
    edge_gap: int = DEFAULT_GAP

    def __post_init__(self):
        if not callable(self.policy):
            raise ValidationError("policy", repr(self.policy), "a callable (a, b) -> int")
        _check_penalty("interior_gap", self.interior_gap)
        _check_penalty("edge_gap", self.edge_gap)

    @property
    def match_score(self) -> int:
        return policy_match_score(self.policy)

    @property
    def mismatch_score(self) -> int:
        return policy_mismatch_score(self.policy)


@dataclass(frozen=True)
class AlignmentResult:
    """Store alignment results and metadata"""
    aligned_a: str
    match_line: str
    aligned_b: str
    score: int
    seq_a_original: str
    seq_b_original: str
    matrix: Optional[AlignmentMatrix] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        """String representation of alignment"""
        return (
            f"Alignment Score: {self.score}\n"
            f"Identity: {self.identity:.2%}\n"
            f"Gaps: {self.gaps}\n"
            f"Length: {len(self)}\n"
        )

    def __len__(self) -> int:
        return len(self.aligned_a)

    @property
    def lines(self) -> Tuple[str, str, str]:
        return self.aligned_a, self.match_line, self.aligned_b

    @property
    def gaps(self) -> int:
        return self.aligned_a.count(GAP) + self.aligned_b.count(GAP)

    @property
    def identity(self) -> float:
        return self.nmatch() / len(self) if len(self) > 0 else 0.0

    def nmatch(self) -> int:
        """Number of matching positions"""
        return self.match_line.count(MATCH_CHAR)

    def plot(self, width: int = 80) -> None:
        """Display alignment in blocks with match indicators"""
        lines = [
            "",
            f"Sequence A: {self.seq_a_original}",
            f"Sequence B: {self.seq_b_original}",
            "",
            f"Identity: {self.identity:.2%}",
            f"Gaps: {self.gaps}",
            f"Score: {self.score}",
            "",
        ]
        for start in range(0, len(self), width):
            end = min(start + width, len(self))
            lines.append(f"A: {self.aligned_a[start:end]}")
            lines.append(f"   {self.match_line[start:end]}")
            lines.append(f"B: {self.aligned_b[start:end]}")
            lines.append("")

        for line in lines:
            print(line)

    def view(self, width: int = 80) -> None:
        """Alias for plot method"""
        self.plot(width)


class AlignmentEngine:
    """Needleman-Wunsch global aligner with edge-aware gap penalties"""

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        interior_gap: int = DEFAULT_GAP,
        edge_gap: Optional[int] = None,
        method: Literal["bottom_up", "top_down"] = "bottom_up"
    ):
        """
        Initialize aligner

        Parameters:
        -----------
        policy : callable, optional
            Scoring policy ``(a, b) -> int`` (default: 1 for a case-insensitive
            match, 0 otherwise)
        interior_gap : int
            Penalty added for each gap away from the alignment ends (default 0)
        edge_gap : int, optional
            Penalty added for each gap at either end of the alignment
            (default: same as interior_gap)
        method : str
            Matrix fill strategy, "bottom_up" (default) or "top_down"
        """
        if method not in ("bottom_up", "top_down"):
            raise ValidationError("method", repr(method), "'bottom_up' or 'top_down'")
        self.config = AlignmentConfig(
            policy=default_policy if policy is None else policy,
            interior_gap=interior_gap,
            edge_gap=interior_gap if edge_gap is None else edge_gap,
        )
        self.method = method

    @classmethod
    def from_config(cls, config: AlignmentConfig, method: str = "bottom_up") -> "AlignmentEngine":
        return cls(config.policy, config.interior_gap, config.edge_gap, method=method)

    @staticmethod
    def normalize(seq_a: str, seq_b: str) -> Tuple[str, str]:
        """
        Prefix both sequences with the sentinel

        A sequence already starting with the sentinel is kept as is. If either
        sequence is empty, both collapse to the bare sentinel.
        """
        for name, seq in (("seq_a", seq_a), ("seq_b", seq_b)):
            if not isinstance(seq, str):
                raise ValidationError(name, repr(seq), "a string of symbols")
        if seq_a == "" or seq_b == "":
            return SENTINEL, SENTINEL
        if not seq_a.startswith(SENTINEL):
            seq_a = SENTINEL + seq_a
        if not seq_b.startswith(SENTINEL):
            seq_b = SENTINEL + seq_b
        return seq_a, seq_b

    def build_matrix(self, seq_a: str, seq_b: str, verbose: bool = False) -> AlignmentMatrix:
        """Normalize the pair and return its filled AlignmentMatrix"""
        seq_a, seq_b = self.normalize(seq_a, seq_b)
        cfg = self.config
        return AlignmentMatrix.fill(
            seq_a, seq_b, cfg.policy, cfg.interior_gap, cfg.edge_gap,
            method=self.method, verbose=verbose
        )

    def compute_score(self, seq_a: str, seq_b: str) -> int:
        """Optimal global alignment score (no traceback matrix is kept)"""
        seq_a, seq_b = self.normalize(seq_a, seq_b)
        cfg = self.config
        return score_only(seq_a, seq_b, cfg.policy, cfg.interior_gap, cfg.edge_gap)

    def compute_alignment(
        self,
        seq_a: str,
        seq_b: str,
        keep_matrix: bool = False,
        verbose: bool = False
    ) -> AlignmentResult:
        """
        Perform global alignment

        Parameters:
        -----------
        seq_a : str
            First sequence
        seq_b : str
            Second sequence
        keep_matrix : bool
            If True, attach the filled matrix to the result (for display)
        verbose : bool
            If True, display progress during alignment

        Returns:
        --------
        AlignmentResult
            Score plus the aligned sequences and match line
        """
        cfg = self.config
        if verbose:
            print("\n" + "=" * 70)
            print("GLOBAL SEQUENCE ALIGNMENT")
            print("=" * 70)
            print(f"Sequence A: {seq_a}")
            print(f"Sequence B: {seq_b}")
            print(f"Match: {cfg.match_score}, Mismatch: {cfg.mismatch_score}")
            print(f"Gap: {cfg.interior_gap}, Edge gap: {cfg.edge_gap}")
            print("=" * 70)

        matrix = self.build_matrix(seq_a, seq_b, verbose=verbose)
        aligned_a, match_line, aligned_b = reconstruct(matrix)
        logger.debug("Traceback produced %d alignment columns", len(aligned_a))

        result = AlignmentResult(
            aligned_a=aligned_a,
            match_line=match_line,
            aligned_b=aligned_b,
            score=matrix.score,
            seq_a_original=seq_a,
            seq_b_original=seq_b,
            matrix=matrix if keep_matrix else None,
        )

        if verbose:
            print("\nALIGNMENT RESULTS")
            print("=" * 70)
            print(f"Score: {result.score}")
            print(f"Identity: {result.identity:.2%} ({result.nmatch()} matches)")
            print(f"Gaps: {result.gaps}")
            print(f"Length: {len(result)}")
            print("=" * 70 + "\n")

        return result


# MAIN CONVENIENCE FUNCTION
def pairwise(
    seq_a: str,
    seq_b: str,
    match: int = DEFAULT_MATCH,
    mismatch: int = DEFAULT_MISMATCH,
    gap: int = DEFAULT_GAP,
    edge_gap: Optional[int] = None,
    policy: Optional[ScoringPolicy] = None,
    verbose: bool = False
) -> AlignmentResult:
    """
    Global pairwise alignment with a match/mismatch scoring scheme

    Parameters:
    -----------
    seq_a, seq_b : str
        Sequences to align
    match, mismatch : int
        Scores for equal / different symbols (case-insensitive)
    gap : int
        Interior gap penalty (added to the score, so usually <= 0)
    edge_gap : int, optional
        Penalty for gaps at either end (default: same as gap)
    policy : callable, optional
        Overrides match/mismatch with any ``(a, b) -> int`` function
    verbose : bool
        Show progress (default False)

    Returns:
    --------
    AlignmentResult

    Examples:
    ---------
    >>> result = pairwise("GATTACA", "GCATGCU", match=1, mismatch=-1, gap=-1)
    >>> result.score
    0
    >>> result.view()
    """
    if policy is None:
        policy = match_mismatch_policy(match, mismatch)
    engine = AlignmentEngine(policy, interior_gap=gap, edge_gap=edge_gap)
    return engine.compute_alignment(seq_a, seq_b, verbose=verbose)


# -------------------------
# Batch alignment
# -------------------------
async def align_many_async(
    pairs: Iterable[Tuple[str, str]],
    engine: Optional[AlignmentEngine] = None
) -> List[AlignmentResult]:
    """
    Align independent pairs in the default executor

    Every pair gets its own matrix; the engine only holds immutable
    configuration so it is shared across workers.
    """
    engine = engine or AlignmentEngine()
    loop = asyncio.get_running_loop()
    jobs = [
        loop.run_in_executor(None, engine.compute_alignment, seq_a, seq_b)
        for seq_a, seq_b in pairs
    ]
    return list(await asyncio.gather(*jobs))


def align_many(pairs: Iterable[Tuple[str, str]],
               engine: Optional[AlignmentEngine] = None) -> List[AlignmentResult]:
    """
    Sync wrapper for align_many_async:
    - no running event loop: asyncio.run()
    - inside a running loop (e.g. Jupyter): run in a separate thread
    """
    pairs = list(pairs)
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(align_many_async(pairs, engine))

    from threading import Thread
    result_holder = {}

    def runner():
        try:
            result_holder["res"] = asyncio.run(align_many_async(pairs, engine))
        except Exception as exc:
            result_holder["err"] = exc

    t = Thread(target=runner, daemon=True)
    t.start()
    t.join()
    if "err" in result_holder:
        raise result_holder["err"]
    return result_holder["res"]
