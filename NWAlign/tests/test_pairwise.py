import asyncio

import numpy as np
import pytest

import NWAlign
from NWAlign.errors import ValidationError
from NWAlign.seq_alignment import (
    GAP,
    SENTINEL,
    AlignmentConfig,
    AlignmentEngine,
    AlignmentResult,
    SubstitutionMatrixPolicy,
    align_many,
    align_many_async,
    match_mismatch_policy,
    pairwise,
)


def test_identical_sequences(default_engine):
    result = default_engine.compute_alignment("ACGT", "ACGT")
    assert result.score == 4
    assert result.lines == ("ACGT", "||||", "ACGT")
    assert default_engine.compute_score("ACGT", "ACGT") == 4


def test_classic_example(classic_engine):
    result = classic_engine.compute_alignment("GATTACA", "GCATGCU")
    assert result.score == 0
    assert classic_engine.compute_score("GATTACA", "GCATGCU") == 0
    assert len(result.aligned_a) == len(result.aligned_b) == len(result.match_line)
    assert result.aligned_a.replace(GAP, "") == "GATTACA"
    assert result.aligned_b.replace(GAP, "") == "GCATGCU"


@pytest.mark.parametrize("seq_a, seq_b", [("", ""), ("A", ""), ("", "ACGT")])
def test_empty_input_collapses(seq_a, seq_b):
    engine = AlignmentEngine(interior_gap=-2, edge_gap=-3)
    result = engine.compute_alignment(seq_a, seq_b)
    assert result.score == 0
    assert result.lines == ("", "", "")
    assert engine.compute_score(seq_a, seq_b) == 0


def test_normalize():
    assert AlignmentEngine.normalize("ACG", "AC") == (".ACG", ".AC")
    assert AlignmentEngine.normalize(".ACG", "AC") == (".ACG", ".AC")
    assert AlignmentEngine.normalize("", "AC") == (SENTINEL, SENTINEL)
    with pytest.raises(ValidationError):
        AlignmentEngine.normalize(42, "AC")


def test_round_trip_and_lengths(random_pairs):
    engine = AlignmentEngine(match_mismatch_policy(1, -1), interior_gap=-2, edge_gap=-1)
    for seq_a, seq_b in random_pairs:
        result = engine.compute_alignment(seq_a, seq_b)
        assert len(result.aligned_a) == len(result.aligned_b) == len(result.match_line)
        if seq_a and seq_b:
            assert result.aligned_a.replace(GAP, "") == seq_a
            assert result.aligned_b.replace(GAP, "") == seq_b


def test_score_symmetric_with_symmetric_policy(random_pairs):
    for engine in (AlignmentEngine(), AlignmentEngine(interior_gap=-1, edge_gap=-2)):
        for seq_a, seq_b in random_pairs:
            assert engine.compute_score(seq_a, seq_b) == engine.compute_score(seq_b, seq_a)


def test_score_and_alignment_agree(random_pairs):
    for method in ("bottom_up", "top_down"):
        engine = AlignmentEngine(match_mismatch_policy(2, -1), interior_gap=-2, method=method)
        for seq_a, seq_b in random_pairs:
            assert engine.compute_alignment(seq_a, seq_b).score == engine.compute_score(seq_a, seq_b)


def test_edge_gap_defaults_to_interior_gap():
    engine = AlignmentEngine(interior_gap=-3)
    assert engine.config.edge_gap == -3
    assert AlignmentEngine(interior_gap=-3, edge_gap=0).config.edge_gap == 0


def test_engine_reusable_across_pairs(default_engine):
    first = default_engine.compute_alignment("ACGT", "AGT")
    default_engine.compute_alignment("TTTT", "GGGG")
    again = default_engine.compute_alignment("ACGT", "AGT")
    assert first == again


def test_config_validation():
    with pytest.raises(ValidationError):
        AlignmentConfig(policy="not callable")
    with pytest.raises(ValidationError):
        AlignmentEngine(interior_gap=1.5)
    with pytest.raises(ValidationError):
        AlignmentEngine(edge_gap=True)
    with pytest.raises(ValidationError):
        AlignmentEngine(method="greedy")


def test_config_probes_policy():
    config = AlignmentConfig(policy=match_mismatch_policy(5, -4))
    assert config.match_score == 5
    assert config.mismatch_score == -4
    engine = AlignmentEngine.from_config(config, method="top_down")
    assert engine.config == config
    assert engine.method == "top_down"


def test_result_statistics():
    result = pairwise("A", "AT", gap=-5, edge_gap=-1)
    assert result.lines == ("A_", "| ", "AT")
    assert result.score == 0
    assert result.nmatch() == 1
    assert result.gaps == 1
    assert result.identity == pytest.approx(0.5)
    assert len(result) == 2
    assert "Alignment Score: 0" in str(result)


def test_result_view_prints_blocks(capsys):
    result = pairwise("ACGTACGT", "ACGTACGT")
    result.view(width=4)
    out = capsys.readouterr().out
    assert out.count("\nA: ACGT\n") == 2
    assert "Score: 8" in out


def test_keep_matrix(default_engine):
    assert default_engine.compute_alignment("AC", "A").matrix is None
    result = default_engine.compute_alignment("AC", "A", keep_matrix=True)
    assert result.matrix is not None
    assert result.matrix.score == result.score


def test_verbose_output(capsys, default_engine):
    default_engine.compute_alignment("ACGT", "ACGT", verbose=True)
    out = capsys.readouterr().out
    assert "GLOBAL SEQUENCE ALIGNMENT" in out
    assert "Matrix computation complete" in out


def test_pairwise_with_substitution_matrix():
    result = pairwise("w", "W", policy=SubstitutionMatrixPolicy())
    assert result.score == 11
    assert result.match_line == "|"


def test_pairwise_with_mismatch_and_gaps():
    result = pairwise("GATTACA", "GCATGCU", match=1, mismatch=-1, gap=-1)
    assert isinstance(result, AlignmentResult)
    assert result.score == 0


def test_top_level_exports():
    assert NWAlign.pairwise is pairwise
    assert NWAlign.AlignmentEngine is AlignmentEngine


def test_align_many_preserves_order(random_pairs):
    engine = AlignmentEngine(match_mismatch_policy(1, -1), interior_gap=-1)
    results = align_many(random_pairs, engine)
    assert [r.score for r in results] == [
        engine.compute_score(a, b) for a, b in random_pairs
    ]


def test_align_many_inside_running_loop():
    async def inner():
        return align_many([("ACGT", "ACGT"), ("A", "C")])

    results = asyncio.run(inner())
    assert [r.score for r in results] == [4, 0]


def test_align_many_async():
    results = asyncio.run(align_many_async([("ACGT", "AGT")]))
    assert results[0].lines == ("ACGT", "| ||", "A_GT")


@pytest.mark.parametrize("policy", [
    lambda a, b: 0.6 if a == b else -0.4,
    lambda a, b: a == b,
    lambda a, b: None,
])
def test_non_integer_policy_rejected_on_every_path(policy):
    for method in ("bottom_up", "top_down"):
        engine = AlignmentEngine(policy, interior_gap=-1, method=method)
        with pytest.raises(ValidationError) as excinfo:
            engine.compute_alignment("ACGT", "ACGT")
        assert excinfo.value.param_name == "policy"
        with pytest.raises(ValidationError):
            engine.compute_score("ACGT", "ACGT")


def test_numpy_integer_policy_accepted():
    engine = AlignmentEngine(lambda a, b: np.int64(2) if a == b else np.int64(-1))
    assert engine.compute_score("ACGT", "ACGT") == 8
    assert engine.compute_alignment("ACGT", "ACGT").score == 8
