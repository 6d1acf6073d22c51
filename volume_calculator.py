"""
Weekly volume calculation and classification.

Converts a routine into per-muscle fractional sets (sets x weighting), places
each muscle's weekly total on the MV/MEV/MAV/MRV landmark ladder, and provides
the summary and ordering helpers the volume view needs.
"""

import logging
from collections import defaultdict
from typing import Dict, List

from constants import (
    DEFAULT_ZONE,
    TIER_ORDER,
    ZONE_ABOVE_MRV,
    ZONE_BELOW_MV,
    ZONE_MAV,
    ZONE_MAV_MRV,
    ZONE_MEV_MAV,
    ZONE_MV_MEV,
)
from exercise_library import build_exercise_index
from models import MovementPatternVolume, MuscleVolume

logger = logging.getLogger(__name__)


def get_total_session_sets(day_exercises) -> int:
    """Raw number of sets in a session, regardless of muscles trained."""
    return sum(entry.sets for entry in day_exercises)


def calculate_day_muscle_volumes(day, exercise_index) -> Dict[str, float]:
    """
    Fractional sets per muscle for a single session.

    Args:
        day: WorkoutDay
        exercise_index: Dict of exercise id -> Exercise

    Returns:
        Dict of muscle -> sum of sets x weighting, containing only muscles
        that receive volume (> 0) in the session. Unknown exercise ids
        contribute nothing.
    """
    volumes = defaultdict(float)

    for entry in day.exercises:
        exercise = exercise_index.get(entry.exercise_id)
        if exercise is None:
            logger.debug(
                "Skipping unknown exercise id %r in %s", entry.exercise_id, day.name
            )
            continue

        for mw in exercise.muscle_weightings:
            volumes[mw.muscle] += entry.sets * mw.weighting

    return {muscle: volume for muscle, volume in volumes.items() if volume > 0}


def calculate_muscle_volumes(routine, exercises) -> List[MuscleVolume]:
    """
    Calculate weekly volume for every muscle in the catalog.

    Every muscle referenced by the catalog appears in the result, with
    total_sets=0 and frequency=0 when the routine does not train it. Each
    day that gives a muscle volume adds its volume to total_sets, counts once
    toward frequency and appends to session_volumes (in day order).

    Result order follows first appearance of each muscle in the catalog;
    sort explicitly before display.
    """
    exercise_index = build_exercise_index(exercises)

    muscle_data = {}
    for ex in exercises:
        for mw in ex.muscle_weightings:
            if mw.muscle not in muscle_data:
                muscle_data[mw.muscle] = {
                    "total_sets": 0.0,
                    "frequency": 0,
                    "session_volumes": [],
                }

    for day in routine.days:
        day_volumes = calculate_day_muscle_volumes(day, exercise_index)

        for muscle, volume in day_volumes.items():
            data = muscle_data[muscle]
            data["total_sets"] += volume
            data["frequency"] += 1
            data["session_volumes"].append(volume)

    return [
        MuscleVolume(
            muscle=muscle,
            total_sets=data["total_sets"],
            frequency=data["frequency"],
            session_volumes=tuple(data["session_volumes"]),
        )
        for muscle, data in muscle_data.items()
    ]


def get_volume_zone(sets, landmarks, muscle) -> str:
    """
    Classify weekly sets against a muscle's volume landmarks.

    Intervals are half-open and checked lowest first:
    below-mv (< mv), mv-mev (< mev), mev-mav (< mav_min),
    mav (<= mav_max), mav-mrv (<= mrv), above-mrv.

    A muscle without a landmark entry gets DEFAULT_ZONE ("mev-mav") and a
    logged warning, so missing data shows up in the logs instead of crashing.
    """
    landmark = landmarks.get(muscle)
    if landmark is None:
        logger.warning(
            "No volume landmarks for %r; using default zone %r", muscle, DEFAULT_ZONE
        )
        return DEFAULT_ZONE

    if sets < landmark.mv:
        return ZONE_BELOW_MV
    if sets < landmark.mev:
        return ZONE_MV_MEV
    if sets < landmark.mav_min:
        return ZONE_MEV_MAV
    if sets <= landmark.mav_max:
        return ZONE_MAV
    if sets <= landmark.mrv:
        return ZONE_MAV_MRV
    return ZONE_ABOVE_MRV


def summarize_volume_zones(muscle_volumes, landmarks) -> Dict[str, int]:
    """
    Count muscles per headline bucket for the volume overview.

    Returns dict with:
    - optimal: muscles in the MAV sweet spot
    - growth: muscles in mev-mav or mav-mrv
    - needs_attention: muscles below MV or above MRV

    Muscles without landmarks or without any volume are not counted.
    """
    summary = {"optimal": 0, "growth": 0, "needs_attention": 0}

    for mv in muscle_volumes:
        if mv.muscle not in landmarks or mv.total_sets == 0:
            continue
        zone = get_volume_zone(mv.total_sets, landmarks, mv.muscle)
        if zone == ZONE_MAV:
            summary["optimal"] += 1
        elif zone in (ZONE_MEV_MAV, ZONE_MAV_MRV):
            summary["growth"] += 1
        elif zone in (ZONE_BELOW_MV, ZONE_ABOVE_MRV):
            summary["needs_attention"] += 1

    return summary


VOLUME_SORT_OPTIONS = {
    "volume-high": "Volume: High to Low",
    "volume-low": "Volume: Low to High",
    "alphabetical": "Alphabetical",
    "priority": "Priority",
}


def sort_muscle_volumes(muscle_volumes, sort_by="volume-high", priority_map=None):
    """
    Return muscle volumes in display order. The sort is stable.

    Args:
        muscle_volumes: List of MuscleVolume
        sort_by: One of VOLUME_SORT_OPTIONS
        priority_map: Dict of muscle -> tier, used by "priority" (muscles
            without a tier go last)
    """
    if sort_by == "volume-high":
        return sorted(muscle_volumes, key=lambda mv: -mv.total_sets)
    if sort_by == "volume-low":
        return sorted(muscle_volumes, key=lambda mv: mv.total_sets)
    if sort_by == "alphabetical":
        return sorted(muscle_volumes, key=lambda mv: mv.muscle.lower())
    if sort_by == "priority":
        priority_map = priority_map or {}
        unranked = len(TIER_ORDER)
        return sorted(
            muscle_volumes,
            key=lambda mv: TIER_ORDER.get(priority_map.get(mv.muscle), unranked),
        )
    raise ValueError(f"Unknown sort option: {sort_by!r}")


def calculate_movement_pattern_volumes(routine, exercises) -> List[MovementPatternVolume]:
    """
    Raw weekly sets per movement pattern (e.g. horizontal push, hinge).

    Patterns are listed in order of first appearance in the routine.
    """
    exercise_index = build_exercise_index(exercises)
    pattern_sets = {}

    for day in routine.days:
        for entry in day.exercises:
            exercise = exercise_index.get(entry.exercise_id)
            if exercise is None or not exercise.movement_pattern:
                continue
            pattern = exercise.movement_pattern
            pattern_sets[pattern] = pattern_sets.get(pattern, 0) + entry.sets

    return [
        MovementPatternVolume(pattern=pattern, sets=sets)
        for pattern, sets in pattern_sets.items()
    ]
