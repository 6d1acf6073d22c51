"""
Priority alignment analysis.

Each muscle the user ranks in a tier (S, A, B, C, D, F) gets a status and a
recommendation from comparing its weekly volume zone with what the tier asks
for. The decision list lives in PRIORITY_RULES: the first rule whose tier,
zone and condition all match decides the status and message.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from constants import (
    PRIORITY_TIERS,
    STATUS_ORDER,
    TARGET_ZONE_RANGES,
    TIER_ORDER,
    TIER_TARGETS,
    ZONE_ABOVE_MRV,
    ZONE_BELOW_MV,
    ZONE_MAV,
    ZONE_MAV_MRV,
    ZONE_MEV_MAV,
    ZONE_MV_MEV,
)
from volume_calculator import get_volume_zone

logger = logging.getLogger(__name__)

# Chart headroom above the larger of target max and current volume
DISPLAY_HEADROOM = 1.2

# Ordered decision list. Keys:
#   tiers      - tiers the rule applies to (None for any)
#   zones      - zones the rule applies to (None for any)
#   when       - extra condition on (current_sets, landmark), optional
#   deficit    - landmark field to compute sets_needed against, optional
PRIORITY_RULES = [
    {
        "name": "above-mrv",
        "tiers": None,
        "zones": {ZONE_ABOVE_MRV},
        "status": "critical",
        "message": (
            "Exceeding MRV ({mrv:g} sets). This is unsustainable and risks injury. "
            "Reduce volume immediately."
        ),
    },
    {
        "name": "avoid-stimulus",
        "tiers": {"F"},
        "zones": None,
        "when": lambda current, landmark: current > landmark.mv,
        "status": "warning",
        "message": (
            "Receiving {current:.1f} sets of stimulus. To minimize growth, "
            "reduce indirect work from other lifts."
        ),
    },
    {
        "name": "high-priority-optimal",
        "tiers": {"S", "A"},
        "zones": {ZONE_MAV},
        "status": "optimal",
        "message": "Perfect! Volume is in the optimal range for maximum growth.",
    },
    {
        "name": "high-priority-productive",
        "tiers": {"S", "A"},
        "zones": {ZONE_MEV_MAV, ZONE_MAV_MRV},
        "status": "good",
        "message": (
            "Great work! You're in a productive growth zone. "
            "Aim for the MAV sweet spot for the best results."
        ),
    },
    {
        "name": "high-priority-undertrained",
        "tiers": {"S", "A"},
        "zones": {ZONE_BELOW_MV, ZONE_MV_MEV},
        "deficit": "mav_min",
        "status": "critical",
        "message": (
            "CRITICAL: High priority, but volume is too low. "
            "Add ~{sets_needed:.1f} sets to reach the optimal MAV range."
        ),
    },
    {
        "name": "moderate-priority-on-target",
        "tiers": {"B"},
        "zones": {ZONE_MEV_MAV, ZONE_MAV, ZONE_MAV_MRV},
        "status": "optimal",
        "message": "Excellent! You've hit the target zone for steady progress.",
    },
    {
        "name": "moderate-priority-undertrained",
        "tiers": {"B"},
        "zones": {ZONE_BELOW_MV, ZONE_MV_MEV},
        "deficit": "mev",
        "status": "warning",
        "message": (
            "Volume is below target. Add ~{sets_needed:.1f} sets "
            "to stimulate consistent growth."
        ),
    },
    {
        "name": "maintenance-below-mv",
        "tiers": {"C", "D"},
        "zones": {ZONE_BELOW_MV},
        "status": "warning",
        "message": "Volume is below maintenance, risking muscle loss for this group.",
    },
    {
        "name": "maintenance-on-target",
        "tiers": {"C", "D"},
        "zones": {ZONE_MV_MEV},
        "status": "optimal",
        "message": (
            "Perfect! Volume is ideal for this priority level, "
            "allowing you to focus on your main goals."
        ),
    },
    {
        # Leniency zone: a little above target is acceptable for low tiers
        "name": "maintenance-lenient",
        "tiers": {"C", "D"},
        "zones": {ZONE_MEV_MAV},
        "status": "good",
        "message": (
            "Good. Volume is slightly high for this priority, but acceptable. "
            "You can consider reducing it to optimize recovery."
        ),
    },
    {
        "name": "maintenance-over-invested",
        "tiers": {"C", "D"},
        "zones": {ZONE_MAV, ZONE_MAV_MRV},
        "status": "warning",
        "message": (
            "Warning: Volume is unnecessarily high. "
            "This may be stealing recovery capacity from your main goals."
        ),
    },
    {
        # F-tier muscles at or below MV
        "name": "avoid-minimal",
        "tiers": None,
        "zones": None,
        "status": "good",
        "message": "Volume is minimal, in line with this priority.",
    },
]


def match_priority_rule(tier, zone, current_sets, landmark, rules=PRIORITY_RULES) -> Dict:
    """Return the first rule matching tier, zone and condition."""
    for rule in rules:
        if rule["tiers"] is not None and tier not in rule["tiers"]:
            continue
        if rule["zones"] is not None and zone not in rule["zones"]:
            continue
        when = rule.get("when")
        if when is not None and not when(current_sets, landmark):
            continue
        return rule
    raise LookupError(f"No priority rule matches tier={tier!r} zone={zone!r}")


def has_priorities(priorities) -> bool:
    """True if any tier lists at least one muscle."""
    return any(muscles for muscles in priorities.values())


def build_priority_map(priorities) -> Dict[str, str]:
    """
    Flatten tier -> muscles into muscle -> tier.

    Tiers are read in the mapping's own order. A muscle listed in more than
    one tier keeps the first tier it was found in.
    """
    priority_map = {}
    for tier, muscles in priorities.items():
        for muscle in muscles or []:
            existing = priority_map.get(muscle)
            if existing is None:
                priority_map[muscle] = tier
            elif existing != tier:
                logger.warning(
                    "%r is listed in tiers %s and %s; keeping %s",
                    muscle,
                    existing,
                    tier,
                    existing,
                )
    return priority_map


def priorities_from_map(priority_map) -> Dict[str, List[str]]:
    """Inverse of build_priority_map, keyed by every tier in rank order."""
    priorities = {tier: [] for tier in PRIORITY_TIERS}
    for muscle, tier in priority_map.items():
        priorities[tier].append(muscle)
    return priorities


def get_target_range(tier, landmark):
    """(target_min, target_max) for a tier's target zone."""
    min_field, max_field = TARGET_ZONE_RANGES[TIER_TARGETS[tier]["target_zone"]]
    return getattr(landmark, min_field), getattr(landmark, max_field)


@dataclass(frozen=True)
class PriorityAnalysis:
    tier: str
    muscle: str
    current_sets: float
    zone: str
    status: str
    recommendation: str
    target_zone: str
    target_min: float
    target_max: float
    display_max: float
    sets_needed: Optional[float] = None
    rule: str = ""


def analyze_muscle_priority(muscle, tier, current_sets, landmarks) -> Optional[PriorityAnalysis]:
    """
    Analyze a single ranked muscle. Returns None when it has no landmarks.
    """
    landmark = landmarks.get(muscle)
    if landmark is None:
        return None

    zone = get_volume_zone(current_sets, landmarks, muscle)
    rule = match_priority_rule(tier, zone, current_sets, landmark)

    sets_needed = None
    if rule.get("deficit"):
        sets_needed = getattr(landmark, rule["deficit"]) - current_sets

    recommendation = rule["message"].format(
        mrv=landmark.mrv,
        current=current_sets,
        sets_needed=sets_needed if sets_needed is not None else 0.0,
    )

    target_min, target_max = get_target_range(tier, landmark)

    return PriorityAnalysis(
        tier=tier,
        muscle=muscle,
        current_sets=current_sets,
        zone=zone,
        status=rule["status"],
        recommendation=recommendation,
        target_zone=TIER_TARGETS[tier]["target_zone"],
        target_min=target_min,
        target_max=target_max,
        display_max=max(target_max, current_sets) * DISPLAY_HEADROOM,
        sets_needed=sets_needed,
        rule=rule["name"],
    )


def analyze_priority_map(muscle_volumes, priority_map, landmarks) -> List[PriorityAnalysis]:
    """Analyze every muscle in a muscle -> tier map, in map order."""
    current = {mv.muscle: mv.total_sets for mv in muscle_volumes}
    results = []

    for muscle, tier in priority_map.items():
        analysis = analyze_muscle_priority(
            muscle, tier, current.get(muscle, 0.0), landmarks
        )
        if analysis is None:
            logger.debug("Skipping %r: no volume landmarks", muscle)
            continue
        results.append(analysis)

    return results


def analyze_priorities(muscle_volumes, priorities, landmarks) -> List[PriorityAnalysis]:
    """
    Analyze volume against user priorities.

    Args:
        muscle_volumes: List of MuscleVolume (missing muscles count as 0 sets)
        priorities: Dict of tier -> list of muscle names
        landmarks: Dict of muscle -> VolumeLandmark

    Returns:
        One PriorityAnalysis per ranked muscle with landmarks, in the order
        muscles appear in the tier lists. Empty when nothing is ranked.
    """
    if not has_priorities(priorities):
        return []
    return analyze_priority_map(muscle_volumes, build_priority_map(priorities), landmarks)


PRIORITY_SORT_OPTIONS = {
    "status": "Sort by Status",
    "priority": "Sort by Priority",
    "volume-high": "Sort by Volume (High-Low)",
    "volume-low": "Sort by Volume (Low-High)",
}

PRIORITY_SORT_KEYS = {
    "status": lambda a: STATUS_ORDER[a.status],
    "priority": lambda a: TIER_ORDER[a.tier],
    "volume-high": lambda a: -a.current_sets,
    "volume-low": lambda a: a.current_sets,
}


def sort_priority_analysis(analysis, sort_by="status") -> List[PriorityAnalysis]:
    """Stable sort of analysis records by one of PRIORITY_SORT_OPTIONS."""
    try:
        key = PRIORITY_SORT_KEYS[sort_by]
    except KeyError:
        raise ValueError(f"Unknown sort option: {sort_by!r}") from None
    return sorted(analysis, key=key)


def summarize_priority_analysis(analysis) -> Dict[str, int]:
    """Count records per status."""
    counts = {status: 0 for status in STATUS_ORDER}
    for a in analysis:
        counts[a.status] += 1
    return counts


def get_priority_verdict(summary) -> str:
    """
    Routine-level verdict from status counts.

    "critical" if anything is critical, else "suggestions" if anything
    needs a tweak, else "success".
    """
    if summary["critical"] > 0:
        return "critical"
    if summary["warning"] > 0:
        return "suggestions"
    return "success"
