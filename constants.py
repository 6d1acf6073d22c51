"""
Shared constants for the volume planner.

Muscle names, priority tiers, volume zones and the fixed thresholds used by
the fatigue and priority analysis.
"""

# All muscle groups the planner knows about (order used for display)
ALL_MUSCLES = [
    "Chest",
    "Lats",
    "Middle Back",
    "Lower Back",
    "Quads",
    "Hamstrings",
    "Glutes",
    "Side Delts",
    "Front Delts",
    "Rear Delts",
    "Biceps",
    "Triceps",
    "Calves",
    "Forearms",
    "Abs",
    "Traps",
]

# Priority tiers, highest first
PRIORITY_TIERS = ["S", "A", "B", "C", "D", "F"]

TIER_ORDER = {tier: rank for rank, tier in enumerate(PRIORITY_TIERS)}

# Session caps
MAX_SETS_PER_SESSION = 25
MAX_MUSCLE_SETS_PER_SESSION = 12

# Fatigue tiers below the session cap
FATIGUE_LOW_MAX_SETS = 12
FATIGUE_MODERATE_MAX_SETS = 18

# Volume zones, lowest first
ZONE_BELOW_MV = "below-mv"
ZONE_MV_MEV = "mv-mev"
ZONE_MEV_MAV = "mev-mav"
ZONE_MAV = "mav"
ZONE_MAV_MRV = "mav-mrv"
ZONE_ABOVE_MRV = "above-mrv"

VOLUME_ZONES = [
    ZONE_BELOW_MV,
    ZONE_MV_MEV,
    ZONE_MEV_MAV,
    ZONE_MAV,
    ZONE_MAV_MRV,
    ZONE_ABOVE_MRV,
]

# Zone returned for muscles that have no landmark entry
DEFAULT_ZONE = ZONE_MEV_MAV

ZONE_CONFIG = {
    ZONE_BELOW_MV: {
        "label": "Below MV",
        "description": "Not enough volume to maintain muscle",
        "color": "#F44336",  # Red
    },
    ZONE_MV_MEV: {
        "label": "MV-MEV",
        "description": "Maintenance volume, little growth stimulus",
        "color": "#FFC107",  # Amber
    },
    ZONE_MEV_MAV: {
        "label": "MEV-MAV",
        "description": "Productive growth stimulus",
        "color": "#4CAF50",  # Green
    },
    ZONE_MAV: {
        "label": "MAV (Optimal)",
        "description": "Maximum adaptive volume sweet spot",
        "color": "#03A9F4",  # Sky blue
    },
    ZONE_MAV_MRV: {
        "label": "MAV-MRV",
        "description": "High volume, recovery is getting expensive",
        "color": "#FF9800",  # Orange
    },
    ZONE_ABOVE_MRV: {
        "label": "Above MRV",
        "description": "More volume than you can recover from",
        "color": "#B71C1C",  # Dark red
    },
}

# Fatigue levels by raw sets per session (scanned in ascending max_sets order)
FATIGUE_LEVELS = {
    "low": {
        "label": "Low",
        "description": "Great session length. Recovery should be quick and manageable.",
        "color": "#4CAF50",
    },
    "moderate": {
        "label": "Moderate",
        "description": "Solid session volume. This is a productive workload for driving growth.",
        "color": "#03A9F4",
    },
    "high": {
        "label": "High",
        "description": (
            "High fatigue session. Performance on later exercises may decline. "
            "Ensure adequate nutrition and sleep."
        ),
        "color": "#FFC107",
    },
    "extreme": {
        "label": "Extreme",
        "description": (
            "Very high fatigue. High risk of 'junk volume' and impaired recovery. "
            "Consider moving some exercises to another day."
        ),
        "color": "#F44336",
    },
}

# Weekly frequency buckets
FREQUENCY_STATUS = {
    "suboptimal": {"label": "Suboptimal", "color": "#FFC107"},
    "optimal": {"label": "Optimal", "color": "#4CAF50"},
    "high": {"label": "High", "color": "#03A9F4"},
}

# Target zone per priority tier
TIER_TARGETS = {
    "S": {
        "target_zone": ZONE_MAV,
        "description": "Maximize growth with optimal MAV stimulus.",
    },
    "A": {
        "target_zone": ZONE_MAV,
        "description": "Target the MAV range for strong growth.",
    },
    "B": {
        "target_zone": ZONE_MEV_MAV,
        "description": "Aim for the MEV-MAV range for steady progress.",
    },
    "C": {
        "target_zone": ZONE_MV_MEV,
        "description": "Maintain muscle with volume above MV.",
    },
    "D": {
        "target_zone": ZONE_MV_MEV,
        "description": "Acceptable to be at MV; focus on higher tiers.",
    },
    "F": {
        "target_zone": ZONE_MV_MEV,
        "description": "Avoid direct work; minimize indirect stimulus.",
    },
}

# Landmark fields bounding each target zone (min field, max field)
TARGET_ZONE_RANGES = {
    ZONE_MAV: ("mav_min", "mav_max"),
    ZONE_MEV_MAV: ("mev", "mav_max"),
    ZONE_MV_MEV: ("mv", "mev"),
}

TIER_INFO = {
    "S": {"label": "S-Tier", "description": "Highest priority - Target high MAV", "color": "#D32F2F"},
    "A": {"label": "A-Tier", "description": "High priority - Target MAV range", "color": "#F57C00"},
    "B": {"label": "B-Tier", "description": "Moderate priority - Target MEV-MAV", "color": "#FBC02D"},
    "C": {"label": "C-Tier", "description": "Maintenance - Target above MV", "color": "#388E3C"},
    "D": {"label": "D-Tier", "description": "Low priority - MV acceptable", "color": "#1976D2"},
    "F": {"label": "F-Tier", "description": "Avoid - Flag any volume", "color": "#C2185B"},
}

# Priority analysis statuses, most severe first
STATUS_ORDER = {"critical": 0, "warning": 1, "good": 2, "optimal": 3}

# Set picker range in the routine builder
MIN_SETS = 1
MAX_SETS = 10
DEFAULT_SETS = 3
