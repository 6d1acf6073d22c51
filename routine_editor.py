"""
Editing operations for routines and priority tiers.

Every function returns a new value and leaves its input untouched, so the
analysis can simply be recomputed from whatever the latest value is.
"""

import uuid
from dataclasses import replace

from constants import DEFAULT_SETS, MAX_SETS, MIN_SETS, PRIORITY_TIERS
from models import Routine, RoutineExercise, WorkoutDay

DEFAULT_ROUTINE = Routine(
    id="default",
    name="My Routine",
    days=(
        WorkoutDay(id="day-1", name="Day 1"),
        WorkoutDay(id="day-2", name="Day 2"),
        WorkoutDay(id="day-3", name="Day 3"),
    ),
)


def generate_day_id():
    """Generate a unique id for a new workout day."""
    return f"day-{uuid.uuid4().hex[:12]}"


def clamp_sets(sets):
    """Keep a set count inside the range offered by the set picker."""
    return max(MIN_SETS, min(MAX_SETS, int(sets)))


def _update_day(routine, day_id, update):
    return replace(
        routine,
        days=tuple(update(day) if day.id == day_id else day for day in routine.days),
    )


def rename_routine(routine, name):
    name = name.strip()
    if not name:
        return routine
    return replace(routine, name=name)


def add_day(routine, name=None, day_id=None):
    """Append an empty day named "Day N" unless a name is given."""
    new_day = WorkoutDay(
        id=day_id or generate_day_id(),
        name=name or f"Day {len(routine.days) + 1}",
    )
    return replace(routine, days=routine.days + (new_day,))


def remove_day(routine, day_id):
    return replace(routine, days=tuple(d for d in routine.days if d.id != day_id))


def rename_day(routine, day_id, name):
    """Rename a day. Blank names are ignored."""
    name = name.strip()
    if not name:
        return routine
    return _update_day(routine, day_id, lambda day: replace(day, name=name))


def copy_day(routine, source_day_id, target_day_id):
    """Replace the target day's exercises with a copy of the source day's."""
    source = next((d for d in routine.days if d.id == source_day_id), None)
    if source is None or source_day_id == target_day_id:
        return routine
    return _update_day(
        routine, target_day_id, lambda day: replace(day, exercises=source.exercises)
    )


def add_exercise(routine, day_id, exercise_id, sets=DEFAULT_SETS):
    entry = RoutineExercise(exercise_id=exercise_id, sets=clamp_sets(sets))
    return _update_day(
        routine, day_id, lambda day: replace(day, exercises=day.exercises + (entry,))
    )


def update_exercise_sets(routine, day_id, index, sets):
    sets = clamp_sets(sets)

    def update(day):
        return replace(
            day,
            exercises=tuple(
                replace(ex, sets=sets) if i == index else ex
                for i, ex in enumerate(day.exercises)
            ),
        )

    return _update_day(routine, day_id, update)


def remove_exercise(routine, day_id, index):
    def update(day):
        return replace(
            day,
            exercises=tuple(ex for i, ex in enumerate(day.exercises) if i != index),
        )

    return _update_day(routine, day_id, update)


def move_exercise(routine, day_id, old_index, new_index):
    """
    Move an exercise within a day (array move). Out-of-range indexes leave
    the routine unchanged.
    """

    def update(day):
        exercises = list(day.exercises)
        if not (0 <= old_index < len(exercises) and 0 <= new_index < len(exercises)):
            return day
        exercises.insert(new_index, exercises.pop(old_index))
        return replace(day, exercises=tuple(exercises))

    return _update_day(routine, day_id, update)


# =============================================================================
# Priority tier editing
# =============================================================================


def empty_priorities():
    return {tier: [] for tier in PRIORITY_TIERS}


def unassign_muscle(priorities, muscle):
    """Remove a muscle from every tier."""
    return {
        tier: [m for m in muscles if m != muscle] for tier, muscles in priorities.items()
    }


def assign_muscle(priorities, muscle, tier):
    """Put a muscle at the end of a tier, removing it from any other tier."""
    if tier not in PRIORITY_TIERS:
        raise ValueError(f"Unknown priority tier: {tier!r}")
    updated = unassign_muscle(priorities, muscle)
    updated[tier] = updated.get(tier, []) + [muscle]
    return updated


def move_muscle_within_tier(priorities, tier, old_index, new_index):
    muscles = list(priorities.get(tier, []))
    if not (0 <= old_index < len(muscles) and 0 <= new_index < len(muscles)):
        return priorities
    muscles.insert(new_index, muscles.pop(old_index))
    return dict(priorities, **{tier: muscles})


def get_unassigned_muscles(priorities, all_muscles):
    assigned = {m for muscles in priorities.values() for m in muscles}
    return [m for m in all_muscles if m not in assigned]


def apply_preset(presets, preset_id):
    """
    Tiers of the preset with the given id, or None if there is no such preset.
    """
    for preset in presets:
        if preset["id"] == preset_id:
            priorities = empty_priorities()
            for tier, muscles in preset["tiers"].items():
                priorities[tier] = list(muscles)
            return priorities
    return None
