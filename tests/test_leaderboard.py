"""
Tests for the JSON-backed leaderboard
"""

import json
import itertools
import logging

import pytest

from game.leaderboard import Leaderboard, InvalidScoreError, validate_submission


@pytest.fixture
def board(tmp_path):
    ticks = itertools.count(1000)
    return Leaderboard(tmp_path / "scores.json", clock=lambda: next(ticks))


def test_empty_board(board):
    assert board.top_scores() == []
    assert board.rank_for(500) == 1


def test_scores_sorted_with_earlier_ties_first(board):
    board.submit("ann", 300)
    board.submit("bob", 900)
    board.submit("cid", 300)

    top = board.top_scores()

    assert [e.name for e in top] == ["bob", "ann", "cid"]
    assert top[0].score == 900


def test_top_scores_limit(board):
    for i in range(15):
        board.submit(f"p{i}", i * 10)

    assert len(board.top_scores()) == 10
    assert len(board.top_scores(limit=3)) == 3
    assert board.top_scores()[0].name == "p14"


def test_submission_is_persisted(board, tmp_path):
    entry = board.submit("  zoe  ", 1234.9)

    assert entry.name == "zoe"
    assert entry.score == 1234
    data = json.loads((tmp_path / "scores.json").read_text(encoding="utf-8"))
    assert data == [{"name": "zoe", "score": 1234, "timestamp": 1000}]


def test_rank_for(board):
    board.submit("a", 500)
    board.submit("b", 300)

    assert board.rank_for(600) == 1
    assert board.rank_for(400) == 2
    assert board.rank_for(300) == 3


def test_submit_and_get_top(board):
    top = board.submit_and_get_top("solo", 42)
    assert [(e.name, e.score) for e in top] == [("solo", 42)]


@pytest.mark.parametrize("name,score", [
    ("", 10),
    ("   ", 10),
    ("x" * 25, 10),
    (None, 10),
    ("ok", -1),
    ("ok", 20001),
    ("ok", float("nan")),
    ("ok", float("inf")),
    ("ok", "100"),
    ("ok", True),
])
def test_invalid_submissions(board, name, score):
    with pytest.raises(InvalidScoreError):
        board.submit(name, score)
    assert board.top_scores() == []


def test_boundary_submissions_accepted():
    assert validate_submission("x" * 24, 20000) == ("x" * 24, 20000)
    assert validate_submission("y", 0) == ("y", 0)


def test_invalid_score_is_a_value_error():
    with pytest.raises(ValueError):
        validate_submission("ok", 99999)


def test_corrupt_file_reads_as_empty(tmp_path, caplog):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    board = Leaderboard(path)

    with caplog.at_level(logging.WARNING):
        assert board.top_scores() == []
    assert "unreadable" in caplog.text

    board.submit("fresh", 10)
    assert [e.name for e in board.top_scores()] == ["fresh"]


def test_bad_entries_are_skipped(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps([
        {"name": "good", "score": 50, "timestamp": 1},
        {"name": "missing score"},
        "junk",
    ]), encoding="utf-8")

    assert [e.name for e in Leaderboard(path).top_scores()] == ["good"]


def test_non_list_file_reads_as_empty(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"name": "x"}), encoding="utf-8")

    assert Leaderboard(path).top_scores() == []


def test_submit_moves_unreadable_file_aside(tmp_path):
    path = tmp_path / "scores.json"
    truncated = '[{"name": "Ann", "score": 900, "timestamp": 1}, {"name": "Bob", "sco'
    path.write_text(truncated, encoding="utf-8")

    Leaderboard(path, clock=lambda: 3).submit("Cy", 10)

    backup = tmp_path / "scores.json.bak"
    assert backup.read_text(encoding="utf-8") == truncated
    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"name": "Cy", "score": 10, "timestamp": 3}
    ]


def test_submit_keeps_rows_it_cannot_read(tmp_path):
    path = tmp_path / "scores.json"
    rows = [
        {"name": "good", "score": 50, "timestamp": 1},
        {"name": "missing score"},
        "junk",
    ]
    path.write_text(json.dumps(rows), encoding="utf-8")

    board = Leaderboard(path, clock=lambda: 2)
    board.submit("next", 60)

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored[:3] == rows
    assert stored[3] == {"name": "next", "score": 60, "timestamp": 2}
    assert [e.name for e in board.top_scores()] == ["next", "good"]


def test_submit_leaves_no_temp_file(board, tmp_path):
    board.submit("ann", 1)
    board.submit("bob", 2)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["scores.json"]
