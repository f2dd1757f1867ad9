"""Pytest configuration and shared fixtures for NWAlign tests."""

import random

import matplotlib
import pytest

matplotlib.use("Agg")

from NWAlign.seq_alignment import AlignmentEngine, match_mismatch_policy
from NWAlign.seq_alignment.display import random_sequence


@pytest.fixture
def default_engine():
    """Engine with the default scoring: match 1, mismatch 0, no gap penalties."""
    return AlignmentEngine()


@pytest.fixture
def classic_engine():
    """Match 1, mismatch -1, every gap -1 (textbook Needleman-Wunsch)."""
    return AlignmentEngine(match_mismatch_policy(1, -1), interior_gap=-1, edge_gap=-1)


@pytest.fixture
def random_pairs():
    """Reproducible random DNA pairs of assorted lengths, including empty ones."""
    rng = random.Random(42)
    pairs = [("", ""), ("A", ""), ("", "ACGT"), ("A", "A")]
    for _ in range(12):
        pairs.append((
            random_sequence(rng.randint(1, 15), rng),
            random_sequence(rng.randint(1, 15), rng),
        ))
    return pairs
