"""Application settings for MindPad."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

from mindpad.storage import get_data_dir, write_text
from mindpad.undo import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

_INVALID = object()

_RANGE_CHECKS = {
    "history_limit": lambda v: v >= 1,
    "zoom_smoothness": lambda v: 0 < v <= 1,
    "pan_smoothness": lambda v: 0 < v <= 1,
}


def _coerce(default: Any, value: Any) -> Any:
    """Return ``value`` if it has the type of ``default``, else ``_INVALID``.

    Ints are accepted for float settings; bools are never taken as numbers.
    A ``None`` default means an optional string.
    """
    if default is None:
        return value if value is None or isinstance(value, str) else _INVALID
    if isinstance(default, bool) or isinstance(value, bool):
        return value if isinstance(default, bool) and isinstance(value, bool) else _INVALID
    if isinstance(default, float) and isinstance(value, (int, float)):
        return float(value)
    return value if type(value) is type(default) else _INVALID


@dataclass
class AppSettings:
    """User preferences, stored as JSON in the data directory."""
    history_limit: int = DEFAULT_HISTORY_LIMIT
    default_root_label: str = "Root"
    default_filename: str = "mindmap.json"
    show_grid: bool = True
    zoom_smoothness: float = 0.15
    pan_smoothness: float = 0.15
    log_level: str = "WARNING"
    last_file: Optional[str] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: Optional[str]) -> "AppSettings":
        """Parse stored settings; unknown keys are dropped and bad values reset."""
        if not data:
            return cls()
        try:
            d = json.loads(data)
        except json.JSONDecodeError:
            return cls()
        if not isinstance(d, dict):
            return cls()

        defaults = cls()
        values = {}
        # Filter to only known fields to handle schema evolution
        for f in fields(cls):
            if f.name not in d:
                continue
            value = _coerce(getattr(defaults, f.name), d[f.name])
            check = _RANGE_CHECKS.get(f.name)
            if value is _INVALID or (check and not check(value)):
                logger.warning("Ignoring invalid setting %s=%r", f.name, d[f.name])
                continue
            values[f.name] = value
        return cls(**values)


def get_settings_path() -> Path:
    """Get the settings file path."""
    return get_data_dir() / "settings.json"


def load_settings() -> AppSettings:
    """Load settings from disk, falling back to defaults.

    ``MINDPAD_LOG_LEVEL`` takes precedence over the stored log level.
    """
    path = get_settings_path()
    try:
        settings = AppSettings.from_json(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        settings = AppSettings()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        settings = AppSettings()

    env_level = os.environ.get("MINDPAD_LOG_LEVEL")
    if env_level:
        settings.log_level = env_level.upper()
    return settings


def save_settings(settings: AppSettings) -> Path:
    """Write settings to disk."""
    return write_text(get_settings_path(), settings.to_json())
