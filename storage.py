"""
Loading reference data and persisting the user's routine and priorities.

Reference data (exercise catalog, volume landmarks, priority presets) lives in
JSON files under data/. The routine and priorities are kept in a small
key-value JSON store. Anything read back from disk is validated here, so the
analysis modules only ever see well-typed values.
"""

import json
import logging
import os
from pathlib import Path

from constants import PRIORITY_TIERS
from models import Exercise, Routine, VolumeLandmark

logger = logging.getLogger(__name__)

ROUTINE_KEY = "workout-analyzer-routine"
PRIORITIES_KEY = "workout-analyzer-priorities"
SORT_OPTION_KEY = "volumeSortOption"

EXPORT_FORMAT_VERSION = "1.0"

EXERCISES_FILE = "exercises.json"
LANDMARKS_FILE = "volume-landmarks.json"
PRESETS_FILE = "priority-presets.json"


class StorageError(ValueError):
    """Persisted data does not match the expected schema."""


# =============================================================================
# Reference data files
# =============================================================================


def find_data_file(filename, data_dir=None):
    """Return the first existing path for a data file, or None."""
    possible_paths = [
        Path(__file__).parent / "data" / filename,
        Path("data") / filename,
    ]
    if data_dir:
        possible_paths.insert(0, Path(data_dir) / filename)

    for path in possible_paths:
        if path.exists():
            return path
    return None


def _read_data_file(filename, data_dir=None):
    path = find_data_file(filename, data_dir)
    if path is None:
        logger.error("Data file %s not found", filename)
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading %s: %s", path, e)
        return None


def load_exercise_library(data_dir=None):
    """Load the exercise catalog. Returns [] if the file is missing or invalid."""
    data = _read_data_file(EXERCISES_FILE, data_dir)
    if data is None:
        return []
    try:
        return [Exercise.from_dict(ex) for ex in data]
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Invalid exercise library: %s", e)
        return []


def load_volume_landmarks(data_dir=None):
    """Load muscle -> VolumeLandmark. Returns {} if the file is missing or invalid."""
    data = _read_data_file(LANDMARKS_FILE, data_dir)
    if data is None:
        return {}
    try:
        landmarks = {
            muscle: VolumeLandmark.from_dict(values) for muscle, values in data.items()
        }
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.error("Invalid volume landmarks: %s", e)
        return {}

    for muscle, lm in landmarks.items():
        if not lm.mv <= lm.mev <= lm.mav_min <= lm.mav_max <= lm.mrv:
            logger.warning("Landmarks for %r are not in ascending order", muscle)
    return landmarks


def load_priority_presets(data_dir=None):
    """Load priority presets as [{id, name, tiers}]. Invalid presets are dropped."""
    data = _read_data_file(PRESETS_FILE, data_dir)
    if not isinstance(data, list):
        return []

    presets = []
    for preset in data:
        try:
            presets.append(
                {
                    "id": str(preset["id"]),
                    "name": str(preset["name"]),
                    "tiers": normalize_priorities(preset["tiers"]),
                }
            )
        except (KeyError, TypeError, StorageError) as e:
            logger.warning("Skipping invalid priority preset: %s", e)
    return presets


# =============================================================================
# Validation of persisted values
# =============================================================================


def parse_routine(data):
    """Validate raw JSON and build a Routine. Raises StorageError."""
    if not isinstance(data, dict):
        raise StorageError("routine must be an object")
    try:
        return Routine.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StorageError(f"invalid routine: {e}") from e


def normalize_priorities(data):
    """
    Validate raw tier -> muscles JSON.

    Returns a dict with every tier in rank order. A muscle listed in several
    tiers is kept only in the highest one. Raises StorageError.
    """
    if not isinstance(data, dict):
        raise StorageError("priorities must be an object")

    unknown = [tier for tier in data if tier not in PRIORITY_TIERS]
    if unknown:
        raise StorageError(f"unknown priority tiers: {', '.join(map(str, unknown))}")

    priorities = {tier: [] for tier in PRIORITY_TIERS}
    seen = set()
    for tier in PRIORITY_TIERS:
        muscles = data.get(tier) or []
        if not isinstance(muscles, list):
            raise StorageError(f"tier {tier} must be a list of muscle names")
        for muscle in muscles:
            if not isinstance(muscle, str):
                raise StorageError(f"tier {tier} contains a non-string entry: {muscle!r}")
            if muscle in seen:
                logger.warning("Dropping duplicate %r from tier %s", muscle, tier)
                continue
            seen.add(muscle)
            priorities[tier].append(muscle)
    return priorities


# =============================================================================
# Key-value store
# =============================================================================


class JsonStore:
    """Key-value storage backed by a single JSON file."""

    def __init__(self, path="volume_planner.json") -> None:
        self.path = path

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict) -> None:
        text = json.dumps(data, indent=2)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def load(self, key):
        """Return the stored value, or None if missing or unreadable."""
        try:
            return self._read().get(key)
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", key, e)
            return None

    def save(self, key, value) -> bool:
        try:
            data = self._read()
            data[key] = value
            self._write(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to save %s: %s", key, e)
            return False

    def remove(self, key) -> bool:
        try:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)
            return True
        except (OSError, ValueError) as e:
            logger.error("Failed to remove %s: %s", key, e)
            return False

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)


def save_routine(store, routine) -> bool:
    return store.save(ROUTINE_KEY, routine.to_dict())


def load_routine(store):
    """Stored routine, or None if nothing valid is stored."""
    data = store.load(ROUTINE_KEY)
    if data is None:
        return None
    try:
        return parse_routine(data)
    except StorageError as e:
        logger.error("Failed to load routine: %s", e)
        return None


def save_priorities(store, priorities) -> bool:
    return store.save(PRIORITIES_KEY, priorities)


def load_priorities(store):
    """Stored priorities, or None if nothing valid is stored."""
    data = store.load(PRIORITIES_KEY)
    if data is None:
        return None
    try:
        return normalize_priorities(data)
    except StorageError as e:
        logger.error("Failed to load priorities: %s", e)
        return None


def save_sort_option(store, sort_by) -> bool:
    return store.save(SORT_OPTION_KEY, sort_by)


def load_sort_option(store, default="volume-high"):
    value = store.load(SORT_OPTION_KEY)
    return value if isinstance(value, str) else default


def has_stored_data(store) -> bool:
    return store.load(ROUTINE_KEY) is not None or store.load(PRIORITIES_KEY) is not None


def clear_all_data(store) -> None:
    store.remove(ROUTINE_KEY)
    store.remove(PRIORITIES_KEY)


# =============================================================================
# Import / export
# =============================================================================


def export_routine_to_json(routine, priorities=None):
    """
    Export routine (and priorities) to a JSON-ready dict.

    Returns:
        dict: {"format_version", "routine", "priorities"}
    """
    return {
        "format_version": EXPORT_FORMAT_VERSION,
        "routine": routine.to_dict(),
        "priorities": priorities or {},
    }


def import_routine_from_json(data):
    """
    Import a routine exported by export_routine_to_json, or a bare routine.

    Returns:
        Tuple of (routine, priorities); priorities is None when the file
        has none. Raises StorageError on invalid data.
    """
    if not isinstance(data, dict):
        raise StorageError("import file must contain a JSON object")

    if "routine" in data:
        routine = parse_routine(data["routine"])
        priorities = data.get("priorities")
        return routine, normalize_priorities(priorities) if priorities else None

    return parse_routine(data), None
