import json

import pytest

from tetrolab.censoring import evaluator_report, overall_censoring_report
from tetrolab.cli import main
from tetrolab.data import SessionData


def _write_boards(path, sessions, max_turns=500):
    document = {
        "total_boards": sum(len(s["boards"]) for s in sessions),
        "max_turns": max_turns,
        "sessions": sessions,
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


SESSIONS = [
    {
        "placement_evaluator": "random",
        "survived_turns": 40,
        "is_game_over": True,
        "boards": [{"turn": 10, "board": None, "placement": None}],
    },
    {
        "placement_evaluator": "heuristic",
        "survived_turns": 500,
        "is_game_over": False,
        "boards": [{"turn": 300, "board": None, "placement": None}],
    },
]


def test_analyze_censoring_prints_reports(tmp_path, capsys):
    path = _write_boards(tmp_path / "boards.json", SESSIONS)
    assert main(["analyze-censoring", str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Censoring Analysis Report (MAX_TURNS=500)\n")
    sessions = [SessionData.from_dict(s) for s in SESSIONS]
    for line in overall_censoring_report(sessions) + evaluator_report(sessions):
        assert line in out.splitlines()


def test_empty_sessions_fail(tmp_path, capsys):
    path = _write_boards(tmp_path / "boards.json", [])
    assert main(["analyze-censoring", str(path)]) == 1
    assert "is empty" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert main(["analyze-censoring", str(tmp_path / "missing.json")]) == 1
    assert "failed to open" in capsys.readouterr().err


def test_mode_is_required():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2