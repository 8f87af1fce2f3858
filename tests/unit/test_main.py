"""Tests for the command-line entry point"""
import json

import pytest

from elevare.main import main


@pytest.fixture
def write_snapshot(tmp_path):
    def _write(data):
        path = tmp_path / "snapshot.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


def test_prints_recommendations(write_snapshot, capsys):
    path = write_snapshot({
        "stats": {"tasks_completed": 9, "reflections_written": 3, "streak_count": 2, "longest_streak": 4},
        "unlocked": {
            "first_task": "2024-05-02T08:00:00+00:00",
            "first_reflection": "2024-05-03T21:15:00+00:00",
        },
    })

    assert main([path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["next_best"]["achievement"]["code"] == "tasks_10"
    assert output["next_best"]["priority"] == "high"
    assert output["suggestions"]["next_best"]["code"] == "tasks_10"
    assert output["suggestions"]["domino_effects"] == []


def test_unlocked_as_list(write_snapshot, capsys):
    path = write_snapshot({"stats": {}, "unlocked": ["first_task"]})

    assert main([path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["next_best"]["achievement"]["code"] != "first_task"


def test_everything_unlocked(write_snapshot, capsys):
    path = write_snapshot({
        "achievements": [{"id": "a", "code": "tasks_10", "title": "Ten", "description": "Ten tasks"}],
        "unlocked": ["a"],
    })

    assert main([path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["next_best"] is None
    assert output["suggestions"]["next_best"] is None


def test_usage_error(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().err


@pytest.mark.parametrize("content", [
    "not json",
    "[1, 2, 3]",
    json.dumps({"stats": {"tasks_completed": -1}}),
    json.dumps({"unlocked": "first_task"}),
    json.dumps({"unlocked": {"first_task": "yesterday"}}),
])
def test_invalid_snapshot(write_snapshot, content):
    assert main([write_snapshot(content)]) == 2


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 2


def test_earned_achievements_are_not_recommended(write_snapshot, capsys):
    """Test counters past a target unlock it instead of showing a negative remainder"""
    path = write_snapshot({"stats": {"tasks_completed": 12}, "unlocked": {}})

    assert main([path]) == 0

    next_best = json.loads(capsys.readouterr().out)["next_best"]
    # tasks_100 and first_reflection tie at 45; code breaks the tie
    assert next_best["achievement"]["code"] == "first_reflection"
    assert next_best["score"] == 45
    assert next_best["progress"]["current"] <= next_best["progress"]["target"]
    assert "-" not in next_best["reason"]
