"""Lookup and filtering helpers over the exercise catalog."""

from typing import Dict, List, Optional

from models import Exercise


def build_exercise_index(exercises) -> Dict[str, Exercise]:
    """Map exercise id to exercise. The first entry wins on duplicate ids."""
    index = {}
    for ex in exercises:
        index.setdefault(ex.id, ex)
    return index


def get_exercise_by_id(exercises, exercise_id) -> Optional[Exercise]:
    """Find exercise by id from library."""
    for ex in exercises:
        if ex.id == exercise_id:
            return ex
    return None


def get_catalog_muscles(exercises) -> List[str]:
    """Sorted list of every muscle referenced anywhere in the catalog."""
    return sorted({mw.muscle for ex in exercises for mw in ex.muscle_weightings})


def filter_exercises(exercises, query="", muscle=None) -> List[Exercise]:
    """
    Filter the catalog by name and target muscle.

    Args:
        exercises: Exercise catalog
        query: Case-insensitive substring of the exercise name ("" matches all)
        muscle: Only keep exercises that list this muscle (None for any)

    Returns:
        Matching exercises in catalog order
    """
    query_lower = query.lower()
    return [
        ex
        for ex in exercises
        if query_lower in ex.name.lower() and (muscle is None or muscle in ex.muscles)
    ]
