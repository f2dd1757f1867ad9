"""
Command-line interface for NWAlign.

Aligns two sequences (or two random DNA sequences when none are given) and
prints the scoring scheme, the score matrix when it is small, the alignment
and the optimal score.
"""

import sys
import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import NWAlignError
from .seq_alignment import AlignmentEngine, match_mismatch_policy
from .seq_alignment.display import format_report, plot_matrix, random_sequence
from .seq_alignment.scoring import DEFAULT_MATCH, DEFAULT_MISMATCH
from .seq_alignment.pairwise import DEFAULT_GAP

logger = logging.getLogger(__name__)

# length range of generated test sequences
RANDOM_MIN_LENGTH = 5
RANDOM_MAX_LENGTH = 15


def output_path_type(path: str):
    """
    Argparse type for output paths - validates parent directory exists.

    Raises:
        ArgumentTypeError: If parent directory doesn't exist
    """
    p = Path(path)
    if p.parent != Path() and not p.parent.exists():
        raise argparse.ArgumentTypeError(
            f"Output directory doesn't exist: {p.parent}"
        )
    return str(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nwalign",
        description="Needleman-Wunsch global alignment with edge-aware gap penalties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Example:\n"
            "  nwalign GATTACA GCATGCU --match 1 --mismatch -1 --gap -1\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"nwalign {__version__}",
    )
    parser.add_argument("seq_a", nargs="?", help="First sequence (random DNA if omitted)")
    parser.add_argument("seq_b", nargs="?", help="Second sequence (random DNA if omitted)")
    parser.add_argument(
        "--match",
        type=int,
        default=DEFAULT_MATCH,
        help=f"Score for equal symbols, case-insensitive (default: {DEFAULT_MATCH})",
    )
    parser.add_argument(
        "--mismatch",
        type=int,
        default=DEFAULT_MISMATCH,
        help=f"Score for different symbols (default: {DEFAULT_MISMATCH})",
    )
    parser.add_argument(
        "--gap",
        type=int,
        default=DEFAULT_GAP,
        help=f"Interior gap penalty, added to the score (default: {DEFAULT_GAP})",
    )
    parser.add_argument(
        "--edge-gap",
        type=int,
        default=None,
        help="Penalty for gaps at either end of the alignment (default: same as --gap)",
    )
    parser.add_argument(
        "--method",
        choices=["bottom_up", "top_down"],
        default="bottom_up",
        help="Matrix fill strategy (default: bottom_up)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for generated sequences",
    )
    parser.add_argument(
        "--plot",
        type=output_path_type,
        default=None,
        metavar="FILE",
        help="Save a heatmap of the score matrix to FILE",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if (args.seq_a is None) != (args.seq_b is None):
        parser.error("give both sequences or neither")

    seq_a, seq_b = args.seq_a, args.seq_b
    if seq_a is None:
        rng = random.Random(args.seed)
        seq_a = random_sequence(rng.randrange(RANDOM_MIN_LENGTH, RANDOM_MAX_LENGTH), rng)
        seq_b = random_sequence(rng.randrange(RANDOM_MIN_LENGTH, RANDOM_MAX_LENGTH), rng)
        logger.debug("Generated random sequences %s and %s", seq_a, seq_b)

    try:
        engine = AlignmentEngine(
            match_mismatch_policy(args.match, args.mismatch),
            interior_gap=args.gap,
            edge_gap=args.edge_gap,
            method=args.method,
        )
        result = engine.compute_alignment(seq_a, seq_b, keep_matrix=True)
        print(format_report(result, engine.config))

        if args.plot:
            fig = plot_matrix(result.matrix, title=f"{seq_a} vs {seq_b}")
            fig.savefig(args.plot)
            print(f"Matrix heatmap saved to {args.plot}")

        return 0

    except NWAlignError as e:
        print(e.formatted(), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
