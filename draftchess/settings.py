"""Settings management - saves and loads user preferences."""
import json
import logging
from pathlib import Path

from .constants import AI_DELAY_MS, WINDOW_WIDTH, WINDOW_HEIGHT

logger = logging.getLogger(__name__)

# Settings file location (in user's home directory)
SETTINGS_DIR = Path.home() / ".draftchess"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

# Default settings
DEFAULT_SETTINGS = {
    "resolution": [WINDOW_WIDTH, WINDOW_HEIGHT],
    "fullscreen": False,
    "ai_delay_ms": AI_DELAY_MS,
    "vs_ai": False,
    "random_draft": False,
}


def ensure_settings_dir():
    """Create settings directory if it doesn't exist."""
    SETTINGS_DIR.mkdir(parents=True, exist_ok=True)


def load_settings() -> dict:
    """Load settings from file, or return defaults if file doesn't exist."""
    try:
        if SETTINGS_FILE.exists():
            with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
                saved = json.load(f)
                # Merge with defaults (in case new settings were added)
                settings = DEFAULT_SETTINGS.copy()
                settings.update(saved)
                logger.debug("Settings loaded from %s: %s", SETTINGS_FILE, settings)
                return settings
        logger.debug("Settings file not found at %s, using defaults", SETTINGS_FILE)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load settings: %s", e)
    return DEFAULT_SETTINGS.copy()


def save_settings(settings: dict):
    """Save settings to file."""
    try:
        ensure_settings_dir()
        with open(SETTINGS_FILE, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug("Settings saved to %s", SETTINGS_FILE)
    except OSError as e:
        logger.warning("Failed to save settings: %s", e)


def set_mode_defaults(vs_ai: bool, random_draft: bool):
    """Remember the last chosen mode for the next start."""
    settings = load_settings()
    settings["vs_ai"] = vs_ai
    settings["random_draft"] = random_draft
    save_settings(settings)
