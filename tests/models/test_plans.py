"""Tests for race goal validation and plan models."""

from datetime import date

import pytest

from runnr_training.exceptions import ErrorCode, InvalidRaceGoalError
from runnr_training.models.plans import (
    Intensity,
    RaceDistance,
    RaceGoal,
    TrainingPhase,
    WeeklyPlan,
    Workout,
    WorkoutType,
    parse_race_goal,
)


class TestRaceDistance:
    """Tests for RaceDistance."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5k", RaceDistance.FIVE_K),
            ("10K", RaceDistance.TEN_K),
            ("half", RaceDistance.HALF_MARATHON),
            ("half-marathon", RaceDistance.HALF_MARATHON),
            ("Half Marathon", RaceDistance.HALF_MARATHON),
            ("marathon", RaceDistance.MARATHON),
        ],
    )
    def test_from_string(self, text, expected):
        assert RaceDistance.from_string(text) == expected

    def test_unknown_distance(self):
        with pytest.raises(ValueError):
            RaceDistance.from_string("ultra")

    def test_distance_tables(self):
        assert RaceDistance.HALF_MARATHON.distance_km == 21.1
        assert RaceDistance.MARATHON.weekly_cap_km == 110.0
        assert RaceDistance.FIVE_K.base_volume_ceiling_km == 35.0


class TestRaceGoal:
    """Tests for RaceGoal parsing."""

    def test_dashboard_payload(self):
        """camelCase keys and ISO timestamps are accepted."""
        goal = parse_race_goal({
            "date": "2025-10-12T00:00:00.000Z",
            "startDate": "2025-06-02",
            "distance": "Half Marathon",
            "runsPerWeek": 4,
            "targetTime": "1:45:00",
            "trainingDays": [1, 3, 5, 6],
        })

        assert goal.race_date == date(2025, 10, 12)
        assert goal.training_start_date == date(2025, 6, 2)
        assert goal.distance == RaceDistance.HALF_MARATHON
        assert goal.runs_per_week == 4
        assert goal.target_time_minutes == pytest.approx(105.0)
        assert goal.custom_training_days == [1, 3, 5, 6]
        assert goal.distance_km == 21.1

    def test_loose_distance(self):
        goal = parse_race_goal({"race_date": "2025-10-12", "distance": "10k", "runs_per_week": 3})
        assert goal.distance == RaceDistance.TEN_K

    def test_empty_training_days_means_default(self):
        goal = RaceGoal.from_dict({"date": "2025-10-12", "distance": "5K", "runsPerWeek": 3, "trainingDays": []})
        assert goal.custom_training_days is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"date": "2025-10-12", "distance": "ultra", "runsPerWeek": 3},
            {"date": "2025-10-12", "distance": "5K", "runsPerWeek": 1},
            {"date": "2025-10-12", "distance": "5K", "runsPerWeek": 8},
            {"date": "2025-10-12", "distance": "5K", "runsPerWeek": 3, "trainingDays": [0, 7]},
            {"date": "2025-10-12", "distance": "5K", "runsPerWeek": 3, "trainingDays": [1, 1]},
            {"date": "2025-10-12", "distance": "5K", "runsPerWeek": 3, "targetTime": "fast"},
            {"date": "2025-10-12", "startDate": "2025-10-12", "distance": "5K", "runsPerWeek": 3},
            {"distance": "5K", "runsPerWeek": 3},
        ],
    )
    def test_invalid_goals(self, payload):
        with pytest.raises(InvalidRaceGoalError) as exc_info:
            parse_race_goal(payload)

        assert exc_info.value.code == ErrorCode.RACE_GOAL_INVALID

    def test_invalid_goal_reports_field(self):
        with pytest.raises(InvalidRaceGoalError) as exc_info:
            parse_race_goal({"date": "2025-10-12", "distance": "5K", "runsPerWeek": 9})

        assert exc_info.value.details["field"] in ("runsPerWeek", "runs_per_week")

    def test_round_trip_dict(self):
        goal = parse_race_goal({"date": "2025-10-12", "distance": "Marathon", "runsPerWeek": 5})
        data = goal.to_dict()

        assert data["race_date"] == "2025-10-12"
        assert data["distance"] == "Marathon"
        assert data["custom_training_days"] is None


class TestWeeklyPlan:
    """Tests for WeeklyPlan helpers."""

    def test_recovery_flag_and_dict(self):
        week = WeeklyPlan(
            week_number=4,
            week_start_date=date(2025, 6, 23),
            phase=TrainingPhase.BASE,
            focus="Recovery Week",
            target_kilometers=10.2,
            total_kilometers=10.2,
            notes="Recovery week: Reduced volume for recovery. All easy pace.",
            workouts=[Workout(day="Monday", type=WorkoutType.REST, description="Rest", intensity=Intensity.LOW)],
        )

        data = week.to_dict()

        assert week.is_recovery_week is True
        assert data["week_start_date"] == "2025-06-23"
        assert data["phase"] == "base"
        assert data["workouts"][0] == {
            "day": "Monday",
            "type": "Rest",
            "distance": None,
            "description": "Rest",
            "intensity": "Low",
        }
