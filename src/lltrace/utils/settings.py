"""
Settings management for lltrace
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from typing import Optional

from .logger import get_logger

logger = get_logger("settings")

CONFIG_DIR = os.path.expanduser("~/.config/lltrace")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")


@dataclass
class Settings:
    """Viewer settings"""

    # Bars narrower than this (percent of row width) are considered invisible
    visibility_threshold_pct: float = 0.1

    # Width given to invisible bars so zero-duration spans still show
    min_visible_span_pct: float = 2.0

    # Separator between path segments in span names
    name_separator: str = ":"

    # Toggled from the viewer toolbar
    expand_all_on_open: bool = False

    def save(self) -> None:
        """Write settings to CONFIG_FILE, creating its directory."""
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)
        logger.debug(f"Saved settings to {CONFIG_FILE}")

    @classmethod
    def load(cls) -> "Settings":
        """Read CONFIG_FILE; defaults when it is missing or unreadable.

        Keys that are not settings fields are dropped, so files written by
        other versions still load.
        """
        if not os.path.exists(CONFIG_FILE):
            return cls()

        try:
            with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
            known = {field.name for field in fields(cls)}
            return cls(**{k: v for k, v in data.items() if k in known})
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable settings {CONFIG_FILE}: {e}")
            return cls()


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
