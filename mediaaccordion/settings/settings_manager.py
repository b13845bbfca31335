# mediaaccordion/settings/settings_manager.py
import json
import os
import logging
from ..utils.paths import get_settings_file_path
from ..utils.schemas import (
    SETTINGS_SCHEMA, DEFAULT_ANIMATION_DURATION_MS, DEFAULT_RESIZE_DEBOUNCE_MS,
    DEFAULT_SLIDER_SPACING, DEFAULT_VISIBILITY_THRESHOLD, DEFAULT_VISIBILITY_POLL_MS
)
from ..utils.json_validator import validate_json

logger = logging.getLogger(__name__)


class SettingsManager:
    def __init__(self, settings_file=None):
        self.settings_file = settings_file or get_settings_file_path()
        self.settings = self._load_defaults()
        self.load_settings()

    def _load_defaults(self):
        """Returns the default settings dictionary."""
        return {
            "page_definition_path": None,
            "log_level": "INFO",
            "log_to_file": False,
            "log_file_path": "mediaaccordion.log",
            "default_duration_ms": DEFAULT_ANIMATION_DURATION_MS,
            "resize_debounce_ms": DEFAULT_RESIZE_DEBOUNCE_MS,
            "slider_spacing": DEFAULT_SLIDER_SPACING,
            "visibility_threshold": DEFAULT_VISIBILITY_THRESHOLD,
            "visibility_poll_ms": DEFAULT_VISIBILITY_POLL_MS,
        }

    def load_settings(self):
        """Loads settings from the JSON file, merging with defaults."""
        try:
            if os.path.exists(self.settings_file):
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)

                is_valid, _ = validate_json(loaded_settings, SETTINGS_SCHEMA, "Settings file")
                if not is_valid:
                    logger.warning("Settings file format is not fully valid. "
                                   "Attempting to load usable parts.")

                self.settings = self._load_defaults()
                if isinstance(loaded_settings, dict):
                    for key, default_value in self._load_defaults().items():
                        if key not in loaded_settings:
                            continue
                        value = loaded_settings[key]
                        if default_value is None or isinstance(value, type(default_value)) \
                                or (isinstance(default_value, float) and isinstance(value, int)):
                            self.settings[key] = value
                        else:
                            logger.warning(f"Ignoring setting '{key}': expected "
                                           f"{type(default_value).__name__}, got {value!r}")
            else:
                logger.info("No settings file found, creating with defaults.")
                self.settings = self._load_defaults()
                self.save_settings()
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Error loading settings from {self.settings_file}: {e}. Using defaults.", exc_info=True)
            self.settings = self._load_defaults()

    def save_settings(self):
        """Saves current settings to the JSON file."""
        try:
            settings_dir = os.path.dirname(self.settings_file)
            if settings_dir:
                os.makedirs(settings_dir, exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=4)
            logger.info("Settings saved.")
        except IOError as e:
            logger.error(f"Error saving settings to {self.settings_file}: {e}", exc_info=True)

    def get_setting(self, key, default=None):
        """Gets a specific setting value."""
        return self.settings.get(key, default)

    def set_setting(self, key, value):
        """Sets a specific setting value and saves immediately."""
        if key in self._load_defaults():
            self.settings[key] = value
            self.save_settings()
        else:
            logger.warning(f"Attempted to set unknown setting key '{key}'")

    def get_page_definition_path(self):
        """Gets the path to the last used page definition, if it still exists."""
        path = self.get_setting("page_definition_path")
        return path if path and os.path.exists(path) else None
