"""Tests for the runnr command line interface."""

import json
from datetime import timedelta

import pytest

from runnr_training import cli
from runnr_training.services import prediction_service

NOW_ARG = "2025-06-01T08:00:00Z"


@pytest.fixture(autouse=True)
def fresh_prediction_service(monkeypatch):
    """Each CLI run gets its own history cache."""
    monkeypatch.setattr(prediction_service, "_race_prediction_service", None)


@pytest.fixture
def activities_file(tmp_path, now):
    payload = [
        {
            "id": i,
            "type": "Run",
            "distance": 8000.0,
            "moving_time": 8 * 5.5 * 60,
            "start_date": (now - timedelta(days=2 + i * 3)).isoformat().replace("+00:00", "Z"),
        }
        for i in range(24)
    ]
    path = tmp_path / "activities.json"
    path.write_text(json.dumps(payload))
    return path


@pytest.fixture
def goal_file(tmp_path):
    path = tmp_path / "goal.json"
    path.write_text(json.dumps({"date": "2025-08-31", "distance": "10K", "runsPerWeek": 4}))
    return path


class TestPacingCommand:
    def test_json_output(self, capsys):
        code = cli.main(["pacing", "--distance", "10", "--pace", "5:00", "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["strategy"] == "even"
        assert len(data["splits"]) == 10
        assert data["splits"][-1]["cumulative_distance"] == pytest.approx(10.0)

    def test_table_output(self, capsys):
        code = cli.main(["pacing", "--distance", "5", "--pace", "4:30", "--strategy", "negative"])

        assert code == 0
        assert "Pacing Strategy" in capsys.readouterr().out

    def test_invalid_pace(self, capsys):
        code = cli.main(["pacing", "--distance", "10", "--pace", "fast"])

        assert code == 2
        assert "Error" in capsys.readouterr().err

    def test_non_positive_distance(self):
        assert cli.main(["pacing", "--distance", "0", "--pace", "5:00"]) == 2


class TestPredictCommand:
    """Tests for the predict command."""

    def test_json_report(self, activities_file, capsys):
        code = cli.main(["predict", str(activities_file), "--now", NOW_ARG, "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["predictions"]["five_k"]["available"] is True
        assert data["predictions"]["ten_k"]["available"] is True
        assert data["training_metrics"]["recent_run_count"] == 24
        assert isinstance(data["history"], list)

    def test_table_report(self, activities_file, capsys):
        code = cli.main(["predict", str(activities_file), "--now", NOW_ARG])

        assert code == 0
        assert "Race Predictions" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        code = cli.main(["predict", str(tmp_path / "missing.json")])

        assert code == 2
        assert "Cannot read" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        assert cli.main(["predict", str(path)]) == 2

    def test_empty_activities(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"activities": []}))

        code = cli.main(["predict", str(path), "--now", NOW_ARG])

        assert code == 2
        assert "No activities found" in capsys.readouterr().err


class TestPlanCommand:
    """Tests for the plan command."""

    def test_json_plan(self, activities_file, goal_file, capsys):
        code = cli.main(["plan", str(activities_file), str(goal_file), "--now", NOW_ARG, "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["weeks_until_race"] == 13
        assert len(data["plan"]) == 13
        assert data["generated_date"] == "2025-06-01"
        race_days = [w for w in data["plan"][-1]["workouts"] if w["type"] == "Race Day"]
        assert len(race_days) == 1

    def test_plan_up_to_date(self, activities_file, goal_file, capsys):
        code = cli.main([
            "plan", str(activities_file), str(goal_file),
            "--now", NOW_ARG, "--last-generated", "2025-06-01",
        ])

        assert code == 0
        assert "Plan is up to date" in capsys.readouterr().out

    def test_stale_plan_regenerates(self, activities_file, goal_file, capsys):
        code = cli.main([
            "plan", str(activities_file), str(goal_file),
            "--now", NOW_ARG, "--last-generated", "2025-05-31",
        ])

        assert code == 0
        assert "Training Plan" in capsys.readouterr().out

    def test_past_race_date(self, activities_file, tmp_path):
        goal = tmp_path / "past.json"
        goal.write_text(json.dumps({"date": "2025-05-01", "distance": "5K", "runsPerWeek": 3}))

        assert cli.main(["plan", str(activities_file), str(goal), "--now", NOW_ARG]) == 2

    def test_bad_last_generated(self, activities_file, goal_file):
        code = cli.main([
            "plan", str(activities_file), str(goal_file),
            "--now", NOW_ARG, "--last-generated", "yesterday",
        ])

        assert code == 2


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "runnr" in capsys.readouterr().out
