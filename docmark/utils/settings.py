"""
User settings persisted as JSON in the config directory.
"""
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from .resource_loader import get_config_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


@dataclass
class AppSettings:
    """Tunable application settings."""
    render_zoom: float = 1.5  # PDF preview scale
    flowed_width: int = 800  # HTML preview width in pixels
    log_level: str = "INFO"
    last_open_dir: str = ""
    dark_mode: bool = True

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'AppSettings':
        """
        Read settings, falling back to defaults for a missing or unreadable
        file. Unknown keys are ignored.
        """
        path = path or get_config_dir() / SETTINGS_FILE
        if not path.exists():
            return cls()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            return cls()

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed settings file %s", path)
            return cls()

        known = {f.name for f in fields(cls)}
        settings = cls(**{k: v for k, v in data.items() if k in known})
        settings._validate()
        return settings

    def save(self, path: Optional[Path] = None) -> None:
        path = path or get_config_dir() / SETTINGS_FILE
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)
        logger.debug("Saved settings to %s", path)

    def _validate(self) -> None:
        defaults = AppSettings()
        if not isinstance(self.render_zoom, (int, float)) or self.render_zoom <= 0:
            self.render_zoom = defaults.render_zoom
        if not isinstance(self.flowed_width, int) or self.flowed_width <= 0:
            self.flowed_width = defaults.flowed_width
