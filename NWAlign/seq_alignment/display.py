"""
Debug display helpers: matrix dumps, heatmaps, test sequences and reports
"""
import random
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..errors import ValidationError
from .matrix import AlignmentMatrix
from .traceback import trace_path

DNA = "ACGT"

# matrices larger than this (sentinel included) are not dumped
MAX_DISPLAY_ROWS = 30
MAX_DISPLAY_COLS = 20
# sequences/alignments at least this long are not echoed in reports
MAX_DISPLAY_SEQUENCE = 40


def random_sequence(n: int, rng: Optional[random.Random] = None, alphabet: str = DNA) -> str:
    """Random sequence of length n drawn uniformly from alphabet."""
    if n < 0:
        raise ValidationError("n", str(n), "a non-negative length")
    rng = rng or random.Random()
    return "".join(rng.choice(alphabet) for _ in range(n))


def format_matrix(matrix: AlignmentMatrix) -> Optional[str]:
    """
    Text dump of the score matrix

    Rows are sequence A and columns sequence B, both with their sentinel.
    Returns None when the matrix is too big to be worth printing.
    """
    seq_a, seq_b = matrix.seq_a, matrix.seq_b
    if len(seq_a) > MAX_DISPLAY_ROWS or len(seq_b) > MAX_DISPLAY_COLS:
        return None

    lines = ["   " + "".join(f" {c} " for c in seq_b)]
    for i, c in enumerate(seq_a):
        row = "".join(f"{matrix.score_at(i, k):3d}" for k in range(len(seq_b)))
        lines.append(f"{c} {row}")
    return "\n".join(lines)


def plot_matrix(
    matrix: AlignmentMatrix,
    figsize: Tuple[int, int] = (8, 6),
    show_path: bool = True,
    annotate: bool = True,
    font_size: int = 9,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Heatmap of the score matrix with the traceback path drawn on top.
    - Cell values are printed when the matrix is small enough to dump.
    """
    scores = matrix.scores
    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(scores, cmap="viridis", aspect="auto")
    fig.colorbar(im, ax=ax, label="score")

    ax.set_xticks(np.arange(len(matrix.seq_b)))
    ax.set_xticklabels(list(matrix.seq_b), fontsize=font_size)
    ax.set_yticks(np.arange(len(matrix.seq_a)))
    ax.set_yticklabels(list(matrix.seq_a), fontsize=font_size)
    ax.xaxis.tick_top()

    small = len(matrix.seq_a) <= MAX_DISPLAY_ROWS and len(matrix.seq_b) <= MAX_DISPLAY_COLS
    if annotate and small:
        for i in range(scores.shape[0]):
            for k in range(scores.shape[1]):
                ax.text(k, i, str(int(scores[i, k])), ha="center", va="center",
                        color="w", fontsize=font_size - 1)

    if show_path and matrix.filled:
        path = trace_path(matrix)
        ys, xs = zip(*path)
        ax.plot(xs, ys, "r-", lw=2)

    if title:
        ax.set_title(title, fontsize=font_size + 2, fontweight="bold")

    plt.tight_layout()
    return fig


def format_report(result, config) -> str:
    """
    Console report for one alignment

    Args:
        result: AlignmentResult, ideally computed with keep_matrix=True
        config: AlignmentConfig used for the alignment
    """
    seq_a, seq_b = result.seq_a_original, result.seq_b_original
    lines = []
    # lengths count the sentinel
    if len(seq_a) + 1 < MAX_DISPLAY_SEQUENCE and len(seq_b) + 1 < MAX_DISPLAY_SEQUENCE:
        lines.append(f"String A: {seq_a}")
        lines.append(f"String B: {seq_b}")
    lines.append(f"Match Score: {config.match_score}")
    lines.append(f"Mismatch Score: {config.mismatch_score}")
    lines.append(f"Penalty: {config.interior_gap}")
    lines.append(f"Edge Gap Penalty: {config.edge_gap}")

    if result.matrix is not None:
        dump = format_matrix(result.matrix)
        if dump is not None:
            lines.append(dump)

    if len(result) < MAX_DISPLAY_SEQUENCE:
        lines.extend(result.lines)
    lines.append(f"Optimal Alignment Score: {result.score}")
    return "\n".join(lines)
