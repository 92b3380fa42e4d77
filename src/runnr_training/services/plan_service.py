"""
Training plan generation service.

Builds a periodized week-by-week calendar (base -> build -> peak -> taper)
for a race goal from the runner's recent training metrics.

Each week is produced in two independent steps:
- Phase labeling decides the phase, focus text, notes and the nominal
  phase target volume
- Volume assignment decides the kilometers actually scheduled, following
  the 10% rule from the previous week's total with recovery weeks every
  fourth week and a hard per-distance cap

Workouts are then laid out over the seven days of the week and the
week's reported total is the sum of the generated workout distances.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import reduce
from typing import FrozenSet, List, Optional, Tuple, Union

from ..analysis.fitness import assess_fitness_level
from ..exceptions import InvalidRaceGoalError
from ..metrics.zones import calculate_pace_zones
from ..models.metrics import DetailedTrainingMetrics, PaceZones
from ..models.plans import (
    DAY_NAMES,
    RECOVERY_WEEK_FOCUS,
    FitnessLevel,
    Intensity,
    RaceDistance,
    RaceGoal,
    TrainingPhase,
    TrainingPlan,
    WeeklyPlan,
    Workout,
    WorkoutType,
)
from ..models.predictions import PredictionDistance, RacePredictions
from ..utils.dates import ensure_utc, to_date


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MIN_BASE_WEEKLY_KM = 10.0      # Below this the runner starts from the floor
FLOOR_BASE_WEEKLY_KM = 12.0

TAPER_WEEKS = 2
PEAK_FRACTION = 0.3
BUILD_FRACTION = 0.6
BASE_FRACTION = 0.4

RECOVERY_WEEK_INTERVAL = 4
RECOVERY_MIN_REMAINING_WEEKS = 3
RECOVERY_VOLUME_RATIO = 0.85
WEEKLY_INCREASE_RATIO = 1.10
FIRST_WEEK_VOLUME_RATIO = 0.80

LONG_RUN_SHARE = 0.35
TEMPO_SHARE = 0.6
SHORT_INTERVAL_MAX_RACE_KM = 10.0

PHASE_FOCUS = {
    TrainingPhase.BASE: "Building Base Fitness",
    TrainingPhase.BUILD: "Building Endurance & Speed",
    TrainingPhase.PEAK: "Race-Specific Training",
    TrainingPhase.TAPER: "Taper & Recovery",
}

PHASE_NOTES = {
    TrainingPhase.BASE: "Focus on easy kilometers and building aerobic base. No hard efforts yet.",
    TrainingPhase.BUILD: "Increase volume gradually. Add tempo runs and hill work.",
    TrainingPhase.PEAK: "Peak training volume. Include race-pace efforts and longer tempo runs.",
    TrainingPhase.TAPER: "Begin taper. Reduce volume but maintain some intensity to stay sharp.",
}
FINAL_WEEK_NOTES = "Final week! Reduce volume significantly, focus on rest and race prep."
RECOVERY_WEEK_NOTES = "Recovery week: Reduced volume for recovery. All easy pace."

# Default run days by weekly frequency (Monday-first indices)
DEFAULT_RUN_DAYS = {
    2: [2, 6],                  # Wed, Sun
    3: [1, 4, 6],               # Tue, Fri, Sun
    4: [1, 2, 5, 6],            # Tue, Wed, Sat, Sun
    5: [0, 1, 2, 5, 6],         # Mon, Tue, Wed, Sat, Sun
    6: [0, 1, 2, 3, 5, 6],      # All but Friday
    7: [0, 1, 2, 3, 4, 5, 6],
}

# Quality days for the default schedules
DEFAULT_QUALITY_DAYS = {
    2: {2},      # Wed
    3: {4},      # Fri
}
DEFAULT_QUALITY_DAYS_FREQUENT = {2, 5}  # Wed, Sat for 4+ runs/week

PREDICTION_DISTANCES = {
    RaceDistance.FIVE_K: PredictionDistance.FIVE_K,
    RaceDistance.TEN_K: PredictionDistance.TEN_K,
    RaceDistance.HALF_MARATHON: PredictionDistance.HALF_MARATHON,
    RaceDistance.MARATHON: PredictionDistance.MARATHON,
}


def round_km(value: float) -> float:
    """Round kilometers to one decimal, halves away from zero."""
    return math.floor(value * 10 + 0.5) / 10


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class PhaseLabel:
    """Labeling outcome for one week: phase, focus text and nominal target."""

    phase: TrainingPhase
    focus: str
    notes: str
    target_kilometers: float


@dataclass(frozen=True)
class VolumeAssignment:
    """
    Kilometers actually scheduled for a week.

    ``kilometers`` is unrounded; ``rounded_kilometers`` is what the week
    is built from.
    """

    kilometers: float
    focus: str
    notes: str
    is_recovery_week: bool = False

    @property
    def rounded_kilometers(self) -> float:
        return round_km(self.kilometers)


@dataclass(frozen=True)
class WeekSchedule:
    """Which days of the week carry runs, which are quality days and which is the long run."""

    run_days: Tuple[int, ...]
    quality_days: FrozenSet[int]

    @property
    def long_run_day(self) -> int:
        return self.run_days[-1]

    @property
    def other_run_days(self) -> int:
        return len(self.run_days) - 1


@dataclass(frozen=True)
class WeekAccumulator:
    """Workouts laid out so far in a week and their running distance total."""

    workouts: Tuple[Workout, ...] = ()
    total_kilometers: float = 0.0

    def add(self, workout: Workout) -> "WeekAccumulator":
        return WeekAccumulator(
            workouts=self.workouts + (workout,),
            total_kilometers=self.total_kilometers + (workout.distance or 0.0),
        )


# =============================================================================
# Pure Planning Functions
# =============================================================================


def calculate_weeks_until_race(goal: RaceGoal, now: datetime) -> int:
    """
    Whole weeks from the training start (or today) to race day, rounded up.

    Raises:
        InvalidRaceGoalError: If the race is not in the future
    """
    start = goal.training_start_date or to_date(ensure_utc(now))
    days = (goal.race_date - start).days
    weeks = math.ceil(days / 7)
    if weeks < 1:
        raise InvalidRaceGoalError(
            f"Race date {goal.race_date.isoformat()} must be after {start.isoformat()}",
            field="race_date",
        )
    return weeks


def calculate_base_volume(weekly_kilometers: float, race_distance: RaceDistance) -> float:
    """Starting weekly volume: current volume, floored for low-volume runners and capped per distance."""
    base = weekly_kilometers
    if base < MIN_BASE_WEEKLY_KM:
        base = FLOOR_BASE_WEEKLY_KM
    return min(base, race_distance.base_volume_ceiling_km)


def classify_phase(week_number: int, total_weeks: int, base_volume: float) -> PhaseLabel:
    """
    Phase, focus text and nominal phase target for a week.

    The last two weeks taper, the last 30% peaks, the middle 30% builds
    and the first 40% builds base.
    """
    remaining = total_weeks - week_number + 1

    if remaining <= TAPER_WEEKS:
        phase = TrainingPhase.TAPER
        target = base_volume * (0.7 if remaining == 2 else 0.5)
        notes = FINAL_WEEK_NOTES if remaining == 1 else PHASE_NOTES[phase]
    elif remaining <= math.ceil(total_weeks * PEAK_FRACTION):
        phase = TrainingPhase.PEAK
        target = base_volume * 1.2
        notes = PHASE_NOTES[phase]
    elif remaining <= math.ceil(total_weeks * BUILD_FRACTION):
        phase = TrainingPhase.BUILD
        build_progress = (total_weeks * BUILD_FRACTION - remaining) / (total_weeks * PEAK_FRACTION)
        target = base_volume * (1.0 + 0.2 * build_progress)
        notes = PHASE_NOTES[phase]
    else:
        phase = TrainingPhase.BASE
        base_progress = (week_number - 1) / math.ceil(total_weeks * BASE_FRACTION)
        target = base_volume * (0.8 + 0.2 * base_progress)
        notes = PHASE_NOTES[phase]

    return PhaseLabel(phase=phase, focus=PHASE_FOCUS[phase], notes=notes, target_kilometers=target)


def is_recovery_week(week_number: int, total_weeks: int) -> bool:
    """Every fourth week recovers, except in the final stretch."""
    remaining = total_weeks - week_number + 1
    return week_number % RECOVERY_WEEK_INTERVAL == 0 and remaining > RECOVERY_MIN_REMAINING_WEEKS


def assign_weekly_volume(
    week_number: int,
    total_weeks: int,
    label: PhaseLabel,
    base_volume: float,
    previous_total: Optional[float],
    race_distance: RaceDistance,
) -> VolumeAssignment:
    """
    Kilometers actually scheduled for a week.

    Precedence: recovery week (85% of the previous week), taper (phase
    target), 10% increase over the previous week capped per distance,
    and 80% of base volume for the first week.
    """
    if is_recovery_week(week_number, total_weeks) and previous_total:
        return VolumeAssignment(
            kilometers=previous_total * RECOVERY_VOLUME_RATIO,
            focus=RECOVERY_WEEK_FOCUS,
            notes=RECOVERY_WEEK_NOTES,
            is_recovery_week=True,
        )

    if label.phase == TrainingPhase.TAPER:
        kilometers = label.target_kilometers
    elif previous_total:
        kilometers = min(previous_total * WEEKLY_INCREASE_RATIO, race_distance.weekly_cap_km)
    else:
        kilometers = base_volume * FIRST_WEEK_VOLUME_RATIO

    return VolumeAssignment(kilometers=kilometers, focus=label.focus, notes=label.notes)


def select_run_days(goal: RaceGoal) -> List[int]:
    """Run days from the goal's custom selection, else the default for its frequency."""
    if goal.custom_training_days:
        return list(goal.custom_training_days)
    return list(DEFAULT_RUN_DAYS[goal.runs_per_week])


def select_quality_days(goal: RaceGoal, run_days: List[int]) -> FrozenSet[int]:
    """
    Days carrying the phase's quality session.

    Custom schedules pick by position in the run-day list (first for two
    runs a week, second for three, the 1/3 and 2/3 positions for four or
    more); default schedules use fixed weekdays.
    """
    if goal.custom_training_days:
        if goal.runs_per_week == 2:
            indices = [0]
        elif goal.runs_per_week == 3:
            indices = [1]
        else:
            indices = [len(run_days) // 3, (len(run_days) * 2) // 3]
        return frozenset(run_days[i] for i in indices if i < len(run_days))

    if goal.runs_per_week >= 4:
        return frozenset(DEFAULT_QUALITY_DAYS_FREQUENT)
    return frozenset(DEFAULT_QUALITY_DAYS[goal.runs_per_week])


def build_week_schedule(goal: RaceGoal) -> WeekSchedule:
    run_days = select_run_days(goal)
    return WeekSchedule(run_days=tuple(run_days), quality_days=select_quality_days(goal, run_days))


def generate_workout(
    phase: TrainingPhase,
    day: int,
    week_kilometers: float,
    pace_zones: PaceZones,
    race_distance: RaceDistance,
    schedule: WeekSchedule,
) -> Workout:
    """
    Workout for one day of the week.

    Args:
        phase: Training phase of the week
        day: Monday-first day index (0-6)
        week_kilometers: Kilometers scheduled for the week
        pace_zones: Zones quoted in workout descriptions
        race_distance: Goal race distance
        schedule: Run, quality and long-run days

    Returns:
        Workout for the day
    """
    day_name = DAY_NAMES[day]

    if day not in schedule.run_days:
        return Workout(
            day=day_name,
            type=WorkoutType.REST,
            description="Complete rest or light stretching/mobility work",
            intensity=Intensity.LOW,
        )

    if day == schedule.long_run_day:
        distance = round_km(week_kilometers * LONG_RUN_SHARE)
        return Workout(
            day=day_name,
            type=WorkoutType.LONG_RUN,
            distance=distance,
            description=(
                f"{distance}km at easy, conversational pace ({pace_zones.long.formatted}). "
                "Focus on time on feet and building endurance."
            ),
            intensity=Intensity.MEDIUM if phase == TrainingPhase.PEAK else Intensity.LOW,
        )

    # Quality and easy days share the distance left after the long run
    remaining_km = week_kilometers - week_kilometers * LONG_RUN_SHARE
    distance = round_km(remaining_km / schedule.other_run_days) if schedule.other_run_days > 0 else 0.0
    easy_pace = pace_zones.easy.formatted

    if day in schedule.quality_days:
        if phase == TrainingPhase.BUILD:
            tempo_km = round_km(distance * TEMPO_SHARE)
            return Workout(
                day=day_name,
                type=WorkoutType.TEMPO_RUN,
                distance=distance,
                description=(
                    f"{distance}km total: 2km warmup, {tempo_km}km at tempo pace "
                    f"({pace_zones.tempo.formatted}, comfortably hard), 2km cooldown"
                ),
                intensity=Intensity.HIGH,
            )
        if phase == TrainingPhase.PEAK:
            rep = "800m" if race_distance.distance_km <= SHORT_INTERVAL_MAX_RACE_KM else "1km"
            return Workout(
                day=day_name,
                type=WorkoutType.INTERVALS,
                distance=distance,
                description=(
                    f"{distance}km total: 2km warmup, 6-8 × {rep} at "
                    f"{pace_zones.interval.formatted} with equal recovery, 2km cooldown"
                ),
                intensity=Intensity.HIGH,
            )
        if phase == TrainingPhase.TAPER:
            return Workout(
                day=day_name,
                type=WorkoutType.EASY_RUN,
                distance=distance,
                description=(
                    f"{distance}km easy run ({easy_pace}). "
                    "Keep it relaxed and save energy for race day."
                ),
                intensity=Intensity.LOW,
            )
        return Workout(
            day=day_name,
            type=WorkoutType.EASY_RUN,
            distance=distance,
            description=f"{distance}km easy run at comfortable pace ({easy_pace})",
            intensity=Intensity.LOW,
        )

    return Workout(
        day=day_name,
        type=WorkoutType.EASY_RUN,
        distance=distance,
        description=f"{distance}km at easy, comfortable pace ({easy_pace})",
        intensity=Intensity.LOW,
    )


def race_day_workout(day: int, race_distance: RaceDistance) -> Workout:
    return Workout(
        day=DAY_NAMES[day],
        type=WorkoutType.RACE_DAY,
        distance=race_distance.distance_km,
        description="RACE DAY! Trust your training, execute your strategy, and have fun!",
        intensity=Intensity.HIGH,
    )


def build_recommendations(
    weeks_until_race: int,
    race_distance: RaceDistance,
    metrics: DetailedTrainingMetrics,
    fitness: FitnessLevel,
    base_volume: float,
) -> List[str]:
    """Coaching recommendations for the plan, in a fixed order."""
    race_km = race_distance.distance_km
    recommendations = []

    if weeks_until_race < 8:
        recommendations.append("Less than 8 weeks until race. Focus on consistency and avoid injury.")

    if metrics.longest_run < race_km * 0.6:
        recommendations.append(
            f"Build up your long run distance gradually. Current longest: {metrics.longest_run:.1f}km. "
            f"Target: {race_km * 0.75:.1f}km+"
        )

    if metrics.weekly_kilometers < base_volume * 0.8:
        recommendations.append(
            f"Gradually increase weekly volume. Current: {metrics.weekly_kilometers:.1f}km/week. "
            f"Target: {base_volume:.1f}km/week"
        )

    if metrics.recent_run_count < 12:
        recommendations.append("Try to run at least 3-4 times per week for optimal race preparation.")

    if fitness == FitnessLevel.ADVANCED:
        recommendations.append("Your current fitness is excellent! Focus on race-specific workouts.")
    elif fitness == FitnessLevel.BEGINNER:
        recommendations.append("Build your base gradually. Avoid increasing volume by more than 10% per week.")

    if metrics.recent_pace_improvement > 5:
        recommendations.append(
            f"Your pace is improving rapidly (+{metrics.recent_pace_improvement:.1f}%)! "
            "Keep up the momentum but watch for overtraining."
        )
    elif metrics.recent_pace_improvement < -5:
        recommendations.append(
            "Your pace has slowed recently. Ensure adequate recovery and check for fatigue or overtraining."
        )

    if metrics.consistency_score < 50:
        recommendations.append(
            f"Work on consistency. Current score: {round(metrics.consistency_score)}%. "
            "Regular training yields better results."
        )
    elif metrics.consistency_score >= 80:
        recommendations.append(
            f"Excellent training consistency ({round(metrics.consistency_score)}%)! "
            "This discipline will pay off on race day."
        )

    recommendations.append("Stay hydrated and fuel properly on long runs (60+ minutes).")
    recommendations.append("Prioritize sleep and recovery - progress happens during rest.")
    return recommendations


def should_regenerate_plan(last_generated_date: Optional[Union[date, str]], now: datetime) -> bool:
    """
    Whether a stored plan is stale.

    Plans regenerate at most once per calendar day: True when nothing is
    stored or the stored date differs from today's date.
    """
    if not last_generated_date:
        return True
    if isinstance(last_generated_date, str):
        last_generated_date = date.fromisoformat(last_generated_date.split("T")[0])
    elif isinstance(last_generated_date, datetime):
        last_generated_date = last_generated_date.date()
    return last_generated_date != to_date(ensure_utc(now))


# =============================================================================
# Service
# =============================================================================


class TrainingPlanService:
    """Service composing fitness assessment, periodization and workout layout into plans."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def generate_weekly_plan(
        self,
        week_number: int,
        total_weeks: int,
        base_volume: float,
        pace_zones: PaceZones,
        goal: RaceGoal,
        schedule: WeekSchedule,
        plan_start: date,
        previous_total: Optional[float] = None,
    ) -> WeeklyPlan:
        """
        Build one week of the plan.

        Args:
            week_number: 1-based week number
            total_weeks: Weeks until race
            base_volume: Starting weekly volume
            pace_zones: Zones quoted in workout descriptions
            goal: Race goal
            schedule: Run, quality and long-run days
            plan_start: Date of week 1
            previous_total: Previous week's actual total, None for week 1

        Returns:
            WeeklyPlan with seven workouts
        """
        remaining = total_weeks - week_number + 1
        label = classify_phase(week_number, total_weeks, base_volume)
        volume = assign_weekly_volume(
            week_number, total_weeks, label, base_volume, previous_total, goal.distance
        )
        week_km = volume.rounded_kilometers

        def workout_for(day: int) -> Workout:
            if remaining == 1 and day == schedule.long_run_day:
                return race_day_workout(day, goal.distance)
            return generate_workout(label.phase, day, week_km, pace_zones, goal.distance, schedule)

        week = reduce(
            lambda acc, day: acc.add(workout_for(day)),
            range(len(DAY_NAMES)),
            WeekAccumulator(),
        )

        return WeeklyPlan(
            week_number=week_number,
            week_start_date=plan_start + timedelta(days=(week_number - 1) * 7),
            phase=label.phase,
            focus=volume.focus,
            target_kilometers=week_km,
            total_kilometers=round_km(week.total_kilometers),
            notes=volume.notes,
            workouts=list(week.workouts),
        )

    def generate_training_plan(
        self,
        goal: RaceGoal,
        metrics: DetailedTrainingMetrics,
        now: datetime,
        predictions: Optional[RacePredictions] = None,
    ) -> TrainingPlan:
        """
        Generate a complete training plan for a race goal.

        Args:
            goal: Race goal
            metrics: Four-week detailed training metrics
            now: Reference instant (plan start when the goal has none)
            predictions: Current race predictions, used for the estimated race time

        Returns:
            TrainingPlan

        Raises:
            InvalidRaceGoalError: If the race is not in the future
        """
        now = ensure_utc(now)
        weeks_until_race = calculate_weeks_until_race(goal, now)
        fitness = assess_fitness_level(metrics, goal.distance_km)
        base_volume = calculate_base_volume(metrics.weekly_kilometers, goal.distance)
        pace_zones = metrics.pace_zones or calculate_pace_zones(metrics.avg_pace)
        schedule = build_week_schedule(goal)
        plan_start = goal.training_start_date or to_date(now)

        plan: List[WeeklyPlan] = []
        for week_number in range(1, weeks_until_race + 1):
            previous_total = plan[-1].total_kilometers if plan else None
            plan.append(self.generate_weekly_plan(
                week_number=week_number,
                total_weeks=weeks_until_race,
                base_volume=base_volume,
                pace_zones=pace_zones,
                goal=goal,
                schedule=schedule,
                plan_start=plan_start,
                previous_total=previous_total,
            ))

        self.logger.info(
            f"Generated {weeks_until_race}-week {goal.distance.value} plan "
            f"(fitness={fitness.value}, base={base_volume:.1f}km/week)"
        )

        return TrainingPlan(
            race_goal=goal,
            weeks_until_race=weeks_until_race,
            current_fitness=fitness,
            estimated_race_time=self._estimated_race_time(goal, predictions),
            plan=plan,
            recommendations=build_recommendations(
                weeks_until_race, goal.distance, metrics, fitness, base_volume
            ),
            generated_date=to_date(now),
        )

    def _estimated_race_time(self, goal: RaceGoal, predictions: Optional[RacePredictions]) -> str:
        """Predicted time for the goal distance, else the goal's target time."""
        if predictions is not None:
            prediction = predictions.get(PREDICTION_DISTANCES[goal.distance])
            if prediction.available and prediction.formatted_time:
                return prediction.formatted_time
        return goal.target_time or "Not available"


# Singleton instance
_training_plan_service: Optional[TrainingPlanService] = None


def get_training_plan_service() -> TrainingPlanService:
    """Get the training plan service singleton."""
    global _training_plan_service
    if _training_plan_service is None:
        _training_plan_service = TrainingPlanService()
    return _training_plan_service


def generate_training_plan(
    goal: RaceGoal,
    metrics: DetailedTrainingMetrics,
    now: datetime,
    predictions: Optional[RacePredictions] = None,
) -> TrainingPlan:
    """Convenience wrapper around the shared TrainingPlanService."""
    return get_training_plan_service().generate_training_plan(goal, metrics, now, predictions)
