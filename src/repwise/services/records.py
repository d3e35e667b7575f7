"""Personal record detection over logged sets.

PR rules:
1. Only single-exercise sets count; supersets are ignored entirely.
2. Each metric of the exercise's unit is scored independently, and the set
   holding the best value of a metric holds that metric's PR.
3. Ties go to the first logged set (earliest timestamp).
4. For weight & reps, ties at the best weight go to the set with more reps,
   then more half reps; ties at the best reps go to the set with more weight,
   then more half reps. Half reps are never a metric of their own.
5. A metric nobody has recorded (best value 0) has no PR holder.

Results are recomputed on every call; nothing is cached.
"""

from collections.abc import Iterable

from ..models.exercises import ExerciseUnit
from ..models.workout import WorkoutSession, WorkoutSet, WorkoutSetEntry

SetRecord = tuple[WorkoutSet, WorkoutSetEntry]


def collect_single_exercise_sets(
    sessions: Iterable[WorkoutSession], exercise_id: str
) -> list[SetRecord]:
    """Gather every single-exercise set for an exercise, oldest first."""
    records = [
        (workout_set, workout_set.entries[0])
        for session in sessions
        for workout_set in session.all_sets()
        if len(workout_set.entries) == 1
        and workout_set.entries[0].exercise_id == exercise_id
    ]
    # sorted() is stable, so equal timestamps keep their logged order
    return sorted(records, key=lambda record: record[0].timestamp)


def _best_holder(records: list[SetRecord], metric: str) -> str | None:
    """Id of the earliest set holding the best value of one metric."""
    best = max((entry.metric(metric) for _, entry in records), default=0)
    if best <= 0:
        return None
    for workout_set, entry in records:
        if entry.metric(metric) == best:
            return workout_set.id
    return None


def _best_holder_with_tiebreak(
    records: list[SetRecord], metric: str, tiebreak: str
) -> str | None:
    """Like _best_holder, but ties prefer a higher ``tiebreak`` value, then half reps."""
    best = max((entry.metric(metric) for _, entry in records), default=0)
    if best <= 0:
        return None
    tied = [record for record in records if record[1].metric(metric) == best]
    # max() keeps the first of equal keys, which is the earliest set
    workout_set, _ = max(
        tied,
        key=lambda record: (record[1].metric(tiebreak), record[1].metric("half_reps")),
    )
    return workout_set.id


def _single_metric_prs(records: list[SetRecord], metric: str) -> set[str]:
    holder = _best_holder(records, metric)
    return {holder} if holder else set()


def _two_metric_prs(records: list[SetRecord], first: str, second: str) -> set[str]:
    return {
        holder
        for holder in (_best_holder(records, first), _best_holder(records, second))
        if holder
    }


def _weight_reps_prs(records: list[SetRecord]) -> set[str]:
    return {
        holder
        for holder in (
            _best_holder_with_tiebreak(records, "weight", "reps"),
            _best_holder_with_tiebreak(records, "reps", "weight"),
        )
        if holder
    }


def find_personal_records(unit: ExerciseUnit, records: list[SetRecord]) -> set[str]:
    """Determine which sets currently hold a PR.

    Args:
        unit: The exercise's unit, which selects the scoring strategy
        records: Single-exercise sets for the exercise, oldest first

    Returns:
        Ids of the sets holding at least one PR
    """
    if not records:
        return set()

    if unit == ExerciseUnit.WEIGHT_REPS:
        return _weight_reps_prs(records)

    metrics = unit.metrics
    if len(metrics) == 1:
        return _single_metric_prs(records, metrics[0])
    return _two_metric_prs(records, metrics[0], metrics[1])


def current_prs(
    sessions: Iterable[WorkoutSession], exercise_id: str, unit: ExerciseUnit
) -> set[str]:
    """PR set ids for an exercise across the given sessions."""
    return find_personal_records(unit, collect_single_exercise_sets(sessions, exercise_id))
