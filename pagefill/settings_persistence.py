"""Persistent user defaults for formatting parameters.

The starting parameters used by the command line tool are stored in an
OS-appropriate config directory and survive between runs. A missing or
damaged settings file is never fatal: the built-in defaults are used.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .errors import FormatError
from .settings import FormatSettings

logger = logging.getLogger(__name__)

DEFAULTS_KEY = "defaults"

INT_SETTINGS = ('text_width', 'text_height', 'indentation',
                'paragraph_indentation', 'paragraph_skip')
BOOL_SETTINGS = ('fill', 'justify')


class SettingsPersistence:
    """Manages the settings file holding the user's default parameters.

    The file is a JSON object with a single "defaults" entry mapping
    FormatSettings field names to values.
    """

    def __init__(self):
        self._config_dir = Path(platformdirs.user_config_dir("pagefill"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all(self) -> Dict[str, Any]:
        """Load the settings document from disk, or {} if unusable."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        self._settings_cache = data
        return self._settings_cache

    def _save_all(self, data: Dict[str, Any]) -> bool:
        """Write the settings document atomically (temp file + rename)."""
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = data
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_defaults(self) -> FormatSettings:
        """Return the stored default parameters.

        Invalid entries are dropped with a warning; if the remaining
        values break an invariant, the built-in defaults are returned.
        """
        stored = self._load_all().get(DEFAULTS_KEY, {})
        if not isinstance(stored, dict):
            logger.warning("Stored defaults are not a dict, ignoring")
            return FormatSettings()

        values = {}
        for key, value in stored.items():
            if self.validate_setting(key, value):
                values[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")

        try:
            return FormatSettings.from_dict(values)
        except FormatError as e:
            logger.warning(f"Stored defaults are inconsistent ({e}), using built-in defaults")
            return FormatSettings()

    def save_defaults(self, settings: FormatSettings) -> bool:
        """Store SETTINGS as the new defaults. Returns True on success."""
        data = dict(self._load_all())
        data[DEFAULTS_KEY] = settings.to_dict()
        return self._save_all(data)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check the type and range of a single setting."""
        if key in INT_SETTINGS:
            # bool is an int subclass but never a valid dimension
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            if key == 'text_height':
                return value > 0
            if key == 'paragraph_indentation':
                return True
            return value >= 0

        if key in BOOL_SETTINGS:
            return isinstance(value, bool)

        # Unknown settings are rejected; they would never be used
        return False

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
