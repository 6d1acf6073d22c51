"""
Session fatigue and training frequency analysis.

Per session: raw set count, fatigue level, and "junk volume" flags for muscles
trained past the per-session cap. Across the week: muscles bucketed by how
many sessions train them.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from constants import (
    FATIGUE_LEVELS,
    FATIGUE_LOW_MAX_SETS,
    FATIGUE_MODERATE_MAX_SETS,
    MAX_MUSCLE_SETS_PER_SESSION,
    MAX_SETS_PER_SESSION,
)
from exercise_library import build_exercise_index
from volume_calculator import calculate_day_muscle_volumes, get_total_session_sets


def build_fatigue_thresholds(
    low_max=FATIGUE_LOW_MAX_SETS,
    moderate_max=FATIGUE_MODERATE_MAX_SETS,
    session_max=MAX_SETS_PER_SESSION,
) -> List[Dict]:
    """
    Build the fatigue threshold table in ascending max_sets order.

    The last tier ("extreme") is unbounded.
    """
    limits = [
        ("low", low_max),
        ("moderate", moderate_max),
        ("high", session_max),
        ("extreme", math.inf),
    ]
    return [
        dict(FATIGUE_LEVELS[level], level=level, max_sets=max_sets)
        for level, max_sets in limits
    ]


FATIGUE_THRESHOLDS = build_fatigue_thresholds()


def get_fatigue_level(total_sets, thresholds=FATIGUE_THRESHOLDS) -> Dict:
    """First tier whose max_sets is >= total_sets, else the last tier."""
    for threshold in thresholds:
        if total_sets <= threshold["max_sets"]:
            return threshold
    return thresholds[-1]


@dataclass(frozen=True)
class SessionAnalysis:
    day_id: str
    day_name: str
    total_sets: int
    muscle_volumes: Dict[str, float]
    high_volume_muscles: Tuple[Tuple[str, float], ...]
    fatigue_level: Dict

    @property
    def level(self) -> str:
        return self.fatigue_level["level"]


def analyze_session(
    day,
    exercise_index,
    max_muscle_sets=MAX_MUSCLE_SETS_PER_SESSION,
    thresholds=FATIGUE_THRESHOLDS,
) -> SessionAnalysis:
    """
    Analyze one training day.

    Args:
        day: WorkoutDay
        exercise_index: Dict of exercise id -> Exercise
        max_muscle_sets: Per-muscle cap; muscles strictly above it are flagged
        thresholds: Fatigue threshold table (see build_fatigue_thresholds)
    """
    total_sets = get_total_session_sets(day.exercises)
    muscle_volumes = calculate_day_muscle_volumes(day, exercise_index)

    high_volume_muscles = tuple(
        (muscle, volume)
        for muscle, volume in muscle_volumes.items()
        if volume > max_muscle_sets
    )

    return SessionAnalysis(
        day_id=day.id,
        day_name=day.name,
        total_sets=total_sets,
        muscle_volumes=muscle_volumes,
        high_volume_muscles=high_volume_muscles,
        fatigue_level=get_fatigue_level(total_sets, thresholds),
    )


def analyze_sessions(
    routine,
    exercises,
    max_muscle_sets=MAX_MUSCLE_SETS_PER_SESSION,
    thresholds=FATIGUE_THRESHOLDS,
) -> List[SessionAnalysis]:
    """Analyze every day of the routine, in day order."""
    exercise_index = build_exercise_index(exercises)
    return [
        analyze_session(day, exercise_index, max_muscle_sets, thresholds)
        for day in routine.days
    ]


def analyze_frequency(muscle_volumes) -> Dict[str, list]:
    """
    Bucket trained muscles by weekly frequency.

    - suboptimal: trained in one session
    - optimal: two or three sessions
    - high: more than three sessions

    Muscles with no volume are left out of every bucket.
    """
    buckets = {"suboptimal": [], "optimal": [], "high": []}

    for mv in muscle_volumes:
        if mv.total_sets <= 0:
            continue
        if mv.frequency == 1:
            buckets["suboptimal"].append(mv)
        elif 2 <= mv.frequency <= 3:
            buckets["optimal"].append(mv)
        elif mv.frequency > 3:
            buckets["high"].append(mv)

    return buckets


def summarize_fatigue(session_analyses, frequency_analysis) -> Dict[str, int]:
    """Headline counters for the fatigue view."""
    return {
        "high_fatigue_sessions": sum(
            1 for s in session_analyses if s.level == "extreme"
        ),
        "junk_volume_risks": sum(len(s.high_volume_muscles) for s in session_analyses),
        "frequency_warnings": len(frequency_analysis["suboptimal"]),
    }


@dataclass(frozen=True)
class FatigueReport:
    sessions: List[SessionAnalysis]
    frequency: Dict[str, list]
    summary: Dict[str, int]


def analyze_fatigue(
    routine,
    muscle_volumes,
    exercises,
    max_muscle_sets=MAX_MUSCLE_SETS_PER_SESSION,
    thresholds=FATIGUE_THRESHOLDS,
) -> FatigueReport:
    """Session analysis, frequency buckets and counters in one pass."""
    sessions = analyze_sessions(routine, exercises, max_muscle_sets, thresholds)
    frequency = analyze_frequency(muscle_volumes)
    return FatigueReport(
        sessions=sessions,
        frequency=frequency,
        summary=summarize_fatigue(sessions, frequency),
    )
