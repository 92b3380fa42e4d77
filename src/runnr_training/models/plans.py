"""Training plan models.

Core plan entities (Workout, WeeklyPlan, TrainingPlan) are dataclasses
produced by the plan generator; the race goal that drives generation is a
Pydantic model so that caller-supplied payloads are validated on entry.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import InvalidRaceGoalError
from ..utils.formatting import parse_time_string


# Monday-first, matching the user-facing day picker (0=Mon ... 6=Sun)
DAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


class RaceDistance(str, Enum):
    """Race distance categories a goal can target."""
    FIVE_K = "5K"
    TEN_K = "10K"
    HALF_MARATHON = "Half Marathon"
    MARATHON = "Marathon"

    @property
    def distance_km(self) -> float:
        return RACE_DISTANCES_KM[self]

    @property
    def base_volume_ceiling_km(self) -> float:
        """Ceiling on the starting weekly volume."""
        return BASE_VOLUME_CEILING_KM[self]

    @property
    def weekly_cap_km(self) -> float:
        """Hard ceiling on any week's assigned volume."""
        return WEEKLY_CAP_KM[self]

    @classmethod
    def from_string(cls, s: str) -> "RaceDistance":
        """
        Parse a race distance from a loose string ('5k', 'half', 'Marathon').

        Raises:
            ValueError: If the string names no known distance.
        """
        mapping = {
            "5k": cls.FIVE_K,
            "10k": cls.TEN_K,
            "half": cls.HALF_MARATHON,
            "half_marathon": cls.HALF_MARATHON,
            "halfmarathon": cls.HALF_MARATHON,
            "21k": cls.HALF_MARATHON,
            "marathon": cls.MARATHON,
            "full": cls.MARATHON,
            "42k": cls.MARATHON,
        }
        key = s.strip().lower().replace("-", "_").replace(" ", "_")
        if key not in mapping:
            raise ValueError(f"Unknown race distance: {s}")
        return mapping[key]


RACE_DISTANCES_KM = {
    RaceDistance.FIVE_K: 5.0,
    RaceDistance.TEN_K: 10.0,
    RaceDistance.HALF_MARATHON: 21.1,
    RaceDistance.MARATHON: 42.2,
}

BASE_VOLUME_CEILING_KM = {
    RaceDistance.FIVE_K: 35.0,
    RaceDistance.TEN_K: 50.0,
    RaceDistance.HALF_MARATHON: 70.0,
    RaceDistance.MARATHON: 90.0,
}

WEEKLY_CAP_KM = {
    RaceDistance.FIVE_K: 45.0,
    RaceDistance.TEN_K: 65.0,
    RaceDistance.HALF_MARATHON: 85.0,
    RaceDistance.MARATHON: 110.0,
}


class TrainingPhase(str, Enum):
    """Periodization phases, earliest first."""
    BASE = "base"
    BUILD = "build"
    PEAK = "peak"
    TAPER = "taper"


class WorkoutType(str, Enum):
    """Types of workouts in a training plan."""
    EASY_RUN = "Easy Run"
    LONG_RUN = "Long Run"
    TEMPO_RUN = "Tempo Run"
    INTERVALS = "Intervals"
    RECOVERY_RUN = "Recovery Run"
    REST = "Rest"
    CROSS_TRAINING = "Cross Training"
    RACE_DAY = "Race Day"


class Intensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FitnessLevel(str, Enum):
    """Fitness tiers used to tailor coaching recommendations."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class RaceGoal(BaseModel):
    """
    Race goal driving plan generation.

    Accepts both snake_case and the camelCase keys stored by the dashboard
    (``date``, ``startDate``, ``runsPerWeek``, ``targetTime``, ``trainingDays``).
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    race_date: date = Field(..., validation_alias=AliasChoices("race_date", "raceDate", "date"))
    training_start_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("training_start_date", "startDate", "start_date")
    )
    distance: RaceDistance
    runs_per_week: int = Field(..., ge=2, le=7, validation_alias=AliasChoices("runs_per_week", "runsPerWeek"))
    target_time: Optional[str] = Field(None, validation_alias=AliasChoices("target_time", "targetTime"))
    custom_training_days: Optional[List[int]] = Field(
        None, validation_alias=AliasChoices("custom_training_days", "trainingDays", "training_days")
    )

    @field_validator("race_date", "training_start_date", mode="before")
    @classmethod
    def parse_iso_datetime(cls, v):
        """Accept full ISO timestamps and keep only the calendar date."""
        if isinstance(v, str) and "T" in v:
            return v.split("T")[0]
        return v

    @field_validator("distance", mode="before")
    @classmethod
    def parse_distance(cls, v):
        if isinstance(v, str) and v not in {d.value for d in RaceDistance}:
            return RaceDistance.from_string(v)
        return v

    @field_validator("target_time")
    @classmethod
    def validate_target_time(cls, v):
        if v is not None:
            parse_time_string(v)
        return v

    @field_validator("custom_training_days")
    @classmethod
    def validate_training_days(cls, v):
        """Ensure custom days are unique Monday-first weekday indices."""
        if not v:
            return None
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("Training days must be between 0 (Monday) and 6 (Sunday)")
        if len(set(v)) != len(v):
            raise ValueError("Training days must not repeat")
        return v

    @model_validator(mode="after")
    def validate_date_order(self):
        if self.training_start_date is not None and self.race_date <= self.training_start_date:
            raise ValueError("Race date must be after the training start date")
        return self

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RaceGoal":
        """Validate a payload, raising InvalidRaceGoalError on failure."""
        return parse_race_goal(payload)

    @property
    def distance_km(self) -> float:
        return self.distance.distance_km

    @property
    def target_time_minutes(self) -> Optional[float]:
        if self.target_time is None:
            return None
        return parse_time_string(self.target_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "race_date": self.race_date.isoformat(),
            "training_start_date": self.training_start_date.isoformat() if self.training_start_date else None,
            "distance": self.distance.value,
            "runs_per_week": self.runs_per_week,
            "target_time": self.target_time,
            "custom_training_days": self.custom_training_days,
        }


def parse_race_goal(payload: Dict[str, Any]) -> RaceGoal:
    """
    Validate a race goal payload.

    Raises:
        InvalidRaceGoalError: If the payload is incomplete or inconsistent.
    """
    try:
        return RaceGoal.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        raise InvalidRaceGoalError(
            f"Invalid race goal: {first.get('msg')}",
            field=field_name,
            details={"errors": len(e.errors())},
        ) from e


@dataclass
class Workout:
    """A single day in a weekly plan."""

    day: str
    type: WorkoutType
    description: str
    intensity: Intensity
    distance: Optional[float] = None  # km

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "type": self.type.value,
            "distance": self.distance,
            "description": self.description,
            "intensity": self.intensity.value,
        }


RECOVERY_WEEK_FOCUS = "Recovery Week"


@dataclass
class WeeklyPlan:
    """One week of the training calendar."""

    week_number: int
    week_start_date: date
    phase: TrainingPhase
    focus: str
    target_kilometers: float
    total_kilometers: float
    notes: str
    workouts: List[Workout] = field(default_factory=list)

    @property
    def is_recovery_week(self) -> bool:
        return self.focus == RECOVERY_WEEK_FOCUS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_number": self.week_number,
            "week_start_date": self.week_start_date.isoformat(),
            "phase": self.phase.value,
            "focus": self.focus,
            "target_kilometers": self.target_kilometers,
            "total_kilometers": self.total_kilometers,
            "notes": self.notes,
            "workouts": [w.to_dict() for w in self.workouts],
        }


@dataclass
class TrainingPlan:
    """Complete week-by-week plan for a race goal."""

    race_goal: RaceGoal
    weeks_until_race: int
    current_fitness: FitnessLevel
    estimated_race_time: str
    plan: List[WeeklyPlan]
    recommendations: List[str]
    generated_date: date

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence by the caller."""
        return {
            "race_goal": self.race_goal.to_dict(),
            "weeks_until_race": self.weeks_until_race,
            "current_fitness": self.current_fitness.value,
            "estimated_race_time": self.estimated_race_time,
            "plan": [week.to_dict() for week in self.plan],
            "recommendations": list(self.recommendations),
            "generated_date": self.generated_date.isoformat(),
        }
