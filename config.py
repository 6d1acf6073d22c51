"""
Settings for the volume planner.

Settings are read from and written to a YAML file (PyYAML). The file path comes
from ``VOLUME_PLANNER_SETTINGS`` or defaults to ``settings.yaml``. Logging is
configured from the loaded ``log_level``.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from constants import (
    FATIGUE_LOW_MAX_SETS,
    FATIGUE_MODERATE_MAX_SETS,
    MAX_MUSCLE_SETS_PER_SESSION,
    MAX_SETS_PER_SESSION,
)
from fatigue_analysis import build_fatigue_thresholds

APP_VERSION = "1.0.0"

SETTINGS_ENV_VAR = "VOLUME_PLANNER_SETTINGS"

DEFAULT_DATA_DIR = str(Path(__file__).parent / "data")

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    max_sets_per_session: float = MAX_SETS_PER_SESSION
    max_muscle_sets_per_session: float = MAX_MUSCLE_SETS_PER_SESSION
    fatigue_low_max: float = FATIGUE_LOW_MAX_SETS
    fatigue_moderate_max: float = FATIGUE_MODERATE_MAX_SETS
    data_dir: str = DEFAULT_DATA_DIR
    storage_path: str = "volume_planner.json"
    log_level: str = "INFO"

    def fatigue_thresholds(self) -> list:
        return build_fatigue_thresholds(
            low_max=self.fatigue_low_max,
            moderate_max=self.fatigue_moderate_max,
            session_max=self.max_sets_per_session,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        known = {f.name for f in fields(cls)}
        ignored = sorted(set(data) - known)
        if ignored:
            logger.warning("Ignoring unknown settings: %s", ", ".join(ignored))
        values = {k: v for k, v in data.items() if k in known}
        for name in NUMERIC_SETTINGS:
            if name in values:
                values[name] = _as_number(name, values[name])
        return cls(**values)


NUMERIC_SETTINGS = (
    "max_sets_per_session",
    "max_muscle_sets_per_session",
    "fatigue_low_max",
    "fatigue_moderate_max",
)


def _as_number(name: str, value) -> float:
    if isinstance(value, bool):
        raise ValueError(f"setting {name!r} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"setting {name!r} must be a number, got {value!r}") from None


class YamlConfig:
    """Load and save settings to a YAML file."""

    def __init__(self, path: str = None) -> None:
        self.path = path or os.environ.get(SETTINGS_ENV_VAR, "settings.yaml")

    def load(self) -> Settings:
        if not os.path.exists(self.path):
            return Settings()
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping of settings")
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(asdict(settings), f)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
