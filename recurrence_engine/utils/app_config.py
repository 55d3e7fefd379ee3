"""Optional engine settings. Zero imports from the services layer.

The host application may keep overrides for the engine's defaults in
~/.budget/recurrence.json. The engine only ever reads this file, and only
when the host asks for it; resolution itself never touches the disk.
"""
import json
from dataclasses import dataclass
from pathlib import Path

from recurrence_engine.utils.constants import (
    MAX_RANGE_ITERATIONS,
    UPCOMING_DUE_DAYS,
)

CONFIG_DIR = Path.home() / ".budget"
CONFIG_FILE = CONFIG_DIR / "recurrence.json"


@dataclass(frozen=True)
class RecurrenceSettings:
    max_iterations: int = MAX_RANGE_ITERATIONS
    upcoming_days: int = UPCOMING_DUE_DAYS


def load_config(path: Path | str | None = None) -> dict:
    """Returns {} on a missing or corrupt file; never raises."""
    target = Path(path) if path is not None else CONFIG_FILE
    try:
        with open(target, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int(value, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def get_settings(path: Path | str | None = None) -> RecurrenceSettings:
    """Build settings from the config file, keeping defaults for bad or missing keys."""
    config = load_config(path)
    defaults = RecurrenceSettings()
    return RecurrenceSettings(
        max_iterations=_positive_int(config.get("max_iterations"), defaults.max_iterations),
        upcoming_days=_positive_int(config.get("upcoming_days"), defaults.upcoming_days),
    )
