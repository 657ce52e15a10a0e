import json
import logging
from datetime import datetime
from sw.common.logger import log
from sw.common.setup import PATHS, ensure_directory
from sw.core.timespec import InvalidFormat, parse_time_spec


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Default values for every user-facing setting.
_SETTINGS_DEFAULTS = {
    "max_time": "5m",
    "always_on_top": True,
    "log_level": "INFO",
    "console_log": False,
}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    settings = dict(_SETTINGS_DEFAULTS)
    settings["schema_version"] = _SCHEMA_VERSION
    return settings

# Returns True if the given value is acceptable for the given settings key.
def _is_valid(key, value):
    if key == "max_time":
        try:
            parse_time_spec(value)
        except InvalidFormat:
            return False
        return True
    if key == "log_level":
        return value in _LOG_LEVELS
    return isinstance(value, type(_SETTINGS_DEFAULTS[key]))

# Turns the configured level name into the logging module's numeric level.
def log_level(settings):
    return getattr(logging, settings.get("log_level", "INFO"), logging.INFO)

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads the settings from SETTINGS_PATH, replacing anything missing or invalid with its default.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info(f"No existing settings found at '{SETTINGS_PATH}', loading default settings.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise TypeError(f"Expected a JSON object in '{SETTINGS_PATH}', got {type(settings).__name__}")

        defaulted_values = set()
        if not isinstance(settings.get("schema_version"), int):
            defaulted_values.add("schema_version")
            settings["schema_version"] = _SCHEMA_VERSION
        for key, default in _SETTINGS_DEFAULTS.items():
            if key not in settings or not _is_valid(key, settings[key]):
                defaulted_values.add(key)
                settings[key] = default

        # Log results
        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return settings
    # Fall back to fresh settings in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return build_default_settings()
# Write the given settings to disk under SETTINGS_PATH
def save_settings(settings):
    settings["saved_at"] = now_iso()
    ensure_directory(SETTINGS_PATH.parent)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
