"""Small builders shared by the test modules."""

from models import Exercise, MuscleWeighting, Routine, RoutineExercise, VolumeLandmark, WorkoutDay


def make_exercise(exercise_id, weightings, pattern="", name=None):
    return Exercise(
        id=exercise_id,
        name=name or exercise_id.replace("-", " ").title(),
        muscle_weightings=tuple(MuscleWeighting(m, w) for m, w in weightings),
        movement_pattern=pattern,
    )


def make_day(day_id, entries, name=None):
    return WorkoutDay(
        id=day_id,
        name=name or day_id,
        exercises=tuple(RoutineExercise(ex_id, sets) for ex_id, sets in entries),
    )


def make_routine(*days):
    return Routine(id="r1", name="Test Routine", days=tuple(days))


def landmark(mv, mev, mav_min, mav_max, mrv):
    return VolumeLandmark(mv=mv, mev=mev, mav_min=mav_min, mav_max=mav_max, mrv=mrv)


CATALOG = [
    make_exercise("bench", [("Chest", 1.0), ("Triceps", 0.5), ("Front Delts", 0.5)], "Horizontal Push"),
    make_exercise("row", [("Middle Back", 1.0), ("Lats", 0.75), ("Biceps", 0.5)], "Horizontal Pull"),
    make_exercise("pulldown", [("Lats", 1.0), ("Biceps", 0.5)], "Vertical Pull"),
    make_exercise("curl", [("Biceps", 1.0)], "Elbow Flexion"),
    make_exercise("squat", [("Quads", 1.0), ("Glutes", 0.75)], "Squat"),
]
