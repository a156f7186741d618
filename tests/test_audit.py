import pytest

from audit import (
    AuditConfig, audit_positions, king_distance, main,
    make_random_source, placement_zone, verify_fen, verify_position,
)
from board import Board, Color, Piece, PieceType
from fen import to_fen
from placement import NumpyRandomSource, PythonRandomSource, place_kings


def test_king_distance():
    assert king_distance(0, 63) == 7
    assert king_distance(0, 9) == 1
    assert king_distance(0, 2) == 2
    assert king_distance(27, 27) == 0


def test_placement_zone():
    assert placement_zone(0) == "corner"
    assert placement_zone(4) == "edge"
    assert placement_zone(27) == "interior"


def test_valid_position_has_no_issues():
    board = place_kings(0, 63)
    assert verify_position(board) == []
    assert verify_fen(to_fen(board)) == []


def test_adjacent_kings_reported():
    board = Board.empty()
    board[0] = Piece(PieceType.KING, Color.WHITE)
    board[9] = Piece(PieceType.KING, Color.BLACK)
    issues = verify_position(board)
    assert len(issues) == 1
    assert "adjacent" in issues[0]


def test_missing_and_extra_pieces_reported():
    board = Board.empty()
    board[0] = Piece(PieceType.KING, Color.WHITE)
    board[20] = Piece(PieceType.QUEEN, Color.BLACK)
    issues = verify_position(board)
    assert "Unexpected q on e3" in issues
    assert "Expected one Black King, found 0" in issues


def test_verify_fen_reports_bad_text():
    issues = verify_fen("7k/8/8/8/8/8/8/K6 w - - 0 1")
    assert any("covers 7 files" in issue for issue in issues)
    assert any("does not parse" in issue for issue in issues)

    issues = verify_fen("7k/8/8/8/8/8/8/K7 w KQ - 0 1")
    assert any("does not end with" in issue for issue in issues)


def test_verify_fen_reports_non_ascii_digits():
    issues = verify_fen("8/8/8/8/8/8/8/²K5 w - - 0 1")
    assert "Rank 1 has unexpected character '²'" in issues
    assert "Rank 1 covers 6 files" in issues
    assert any("does not parse" in issue for issue in issues)


def test_audit_reports_board_issues_once(monkeypatch):
    lone_king = Board.empty()
    lone_king[0] = Piece(PieceType.KING, Color.WHITE)
    monkeypatch.setattr("audit.random_board", lambda rng: lone_king)

    stats = audit_positions(AuditConfig(num_positions=1, seed=0, progress=False))
    assert stats['issues'] == [(1, "Expected one Black King, found 0")]


def test_make_random_source():
    assert isinstance(make_random_source("python", 1), PythonRandomSource)
    assert isinstance(make_random_source("numpy", 1), NumpyRandomSource)
    with pytest.raises(ValueError):
        make_random_source("dice")


@pytest.mark.parametrize("backend", ["python", "numpy"])
def test_audit_finds_no_issues(backend):
    config = AuditConfig(num_positions=2000, seed=11, backend=backend, progress=False)
    stats = audit_positions(config)
    assert stats['positions'] == 2000
    assert stats['issues'] == []
    assert stats['min_distance'] >= 2
    assert sum(stats['turns'].values()) == 2000
    assert sum(stats['white_king_zones'].values()) == 2000


def test_audit_writes_fens(tmp_path):
    output = tmp_path / "runs" / "positions.fen"
    config = AuditConfig(num_positions=50, seed=3, output=str(output), progress=False)
    stats = audit_positions(config)
    lines = output.read_text().splitlines()
    assert len(lines) == 50
    assert all(line.endswith(" - - 0 1") for line in lines)
    assert stats['output'] == str(output)


def test_main_exit_status(capsys, tmp_path):
    output = tmp_path / "out.fen"
    status = main(["--positions", "20", "--seed", "1", "--quiet", "--show", "1", "--output", str(output)])
    out = capsys.readouterr().out
    assert status == 0
    assert "AUDIT SUMMARY" in out
    assert "No issues found" in out
    assert "Position 1:" in out
    assert len(output.read_text().splitlines()) == 20
