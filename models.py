"""
Data model for routines, the exercise catalog and volume landmarks.

All records are immutable. ``from_dict``/``to_dict`` convert to and from the
JSON shapes used by the data files and saved routines (note the camelCase
``exerciseId`` key inside routines).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class MuscleWeighting:
    muscle: str
    weighting: float

    @classmethod
    def from_dict(cls, data: Dict) -> "MuscleWeighting":
        weighting = float(data["weighting"])
        if not 0 < weighting <= 1:
            raise ValueError(
                f"weighting for {data['muscle']!r} must be in (0, 1], got {weighting}"
            )
        return cls(muscle=str(data["muscle"]), weighting=weighting)

    def to_dict(self) -> Dict:
        return {"muscle": self.muscle, "weighting": self.weighting}


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    muscle_weightings: Tuple[MuscleWeighting, ...] = ()
    movement_pattern: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "Exercise":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            muscle_weightings=tuple(
                MuscleWeighting.from_dict(mw) for mw in data.get("muscle_weightings", [])
            ),
            movement_pattern=str(data.get("movement_pattern", "")),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "muscle_weightings": [mw.to_dict() for mw in self.muscle_weightings],
            "movement_pattern": self.movement_pattern,
        }

    @property
    def muscles(self) -> List[str]:
        """Muscle names this exercise trains, in catalog order."""
        return [mw.muscle for mw in self.muscle_weightings]


@dataclass(frozen=True)
class VolumeLandmark:
    """Weekly set landmarks for one muscle (mv <= mev <= mav_min <= mav_max <= mrv)."""

    mv: float
    mev: float
    mav_min: float
    mav_max: float
    mrv: float

    @classmethod
    def from_dict(cls, data: Dict) -> "VolumeLandmark":
        return cls(
            mv=float(data["mv"]),
            mev=float(data["mev"]),
            mav_min=float(data["mav_min"]),
            mav_max=float(data["mav_max"]),
            mrv=float(data["mrv"]),
        )

    def to_dict(self) -> Dict:
        return {
            "mv": self.mv,
            "mev": self.mev,
            "mav_min": self.mav_min,
            "mav_max": self.mav_max,
            "mrv": self.mrv,
        }


@dataclass(frozen=True)
class RoutineExercise:
    exercise_id: str
    sets: int

    @classmethod
    def from_dict(cls, data: Dict) -> "RoutineExercise":
        sets = data["sets"]
        if isinstance(sets, bool) or not isinstance(sets, int):
            raise TypeError(f"sets must be an integer, got {sets!r}")
        if sets < 0:
            raise ValueError(f"sets must not be negative, got {sets}")
        return cls(exercise_id=str(data["exerciseId"]), sets=sets)

    def to_dict(self) -> Dict:
        return {"exerciseId": self.exercise_id, "sets": self.sets}


@dataclass(frozen=True)
class WorkoutDay:
    """One training session per week; exercise order is display order only."""

    id: str
    name: str
    exercises: Tuple[RoutineExercise, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "WorkoutDay":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            exercises=tuple(
                RoutineExercise.from_dict(ex) for ex in data.get("exercises", [])
            ),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


@dataclass(frozen=True)
class Routine:
    id: str
    name: str
    days: Tuple[WorkoutDay, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "Routine":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            days=tuple(WorkoutDay.from_dict(day) for day in data.get("days", [])),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "days": [day.to_dict() for day in self.days],
        }


@dataclass(frozen=True)
class MuscleVolume:
    """Weekly volume for one muscle, derived from a routine. Never stored."""

    muscle: str
    total_sets: float = 0.0
    frequency: int = 0
    session_volumes: Tuple[float, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            "muscle": self.muscle,
            "totalSets": self.total_sets,
            "frequency": self.frequency,
            "sessionVolumes": list(self.session_volumes),
        }


@dataclass(frozen=True)
class MovementPatternVolume:
    pattern: str
    sets: int
