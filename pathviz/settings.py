"""
Settings Module for the Pathfinding Visualizer

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
Search results are never persisted.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "grid_size": 7,
    "algorithm": "dfs",
    "heuristic": "manhattan",
    "animation_speed_ms": 100,
    "obstacle_mode": "manual",
    "obstacle_density": 0.3,
    "obstacle_seed": 42,
    "debug_enabled": False,
}


def load_settings(path: Path = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError(f"expected an object, got {type(settings).__name__}")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, OSError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Path = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")


def is_debug_enabled(settings: Dict[str, Any], cli_debug: bool = False) -> bool:
    """Effective debug mode: the CLI flag overrides the saved setting."""
    if cli_debug:
        return True
    return bool(settings.get("debug_enabled", False))


def apply_log_level(debug: bool) -> None:
    """Switch the root logger between DEBUG and INFO."""
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)
    logger.info(f"Log level set to {'DEBUG' if debug else 'INFO'}")
