import pytest

from NWAlign.cli import build_parser, main


def test_cli_aligns_given_sequences(capsys):
    assert main(["ACGT", "ACGT"]) == 0
    out = capsys.readouterr().out
    assert "String A: ACGT" in out
    assert "||||" in out
    assert "Optimal Alignment Score: 4" in out


def test_cli_scoring_options(capsys):
    assert main(["GATTACA", "GCATGCU", "--match", "1", "--mismatch", "-1", "--gap", "-1"]) == 0
    out = capsys.readouterr().out
    assert "Penalty: -1" in out
    assert "Edge Gap Penalty: -1" in out
    assert "Optimal Alignment Score: 0" in out


def test_cli_edge_gap_option(capsys):
    assert main(["A", "AT", "--gap", "-5", "--edge-gap", "-1", "--method", "top_down"]) == 0
    out = capsys.readouterr().out
    assert "Edge Gap Penalty: -1" in out
    assert "Optimal Alignment Score: 0" in out


def test_cli_random_sequences_are_seeded(capsys):
    assert main(["--seed", "7"]) == 0
    first = capsys.readouterr().out
    assert main(["--seed", "7"]) == 0
    assert capsys.readouterr().out == first
    assert "Optimal Alignment Score:" in first


def test_cli_requires_both_sequences():
    with pytest.raises(SystemExit) as excinfo:
        main(["ACGT"])
    assert excinfo.value.code == 2


def test_cli_rejects_non_integer_scores():
    with pytest.raises(SystemExit):
        main(["A", "C", "--gap", "-1.5"])


def test_cli_plot(tmp_path, capsys):
    out_file = tmp_path / "matrix.png"
    assert main(["GATTACA", "GCATGCU", "--plot", str(out_file)]) == 0
    assert out_file.exists()
    assert "heatmap saved" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.match == 1
    assert args.mismatch == 0
    assert args.gap == 0
    assert args.edge_gap is None
    assert args.method == "bottom_up"
