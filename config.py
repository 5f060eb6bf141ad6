"""
Game configuration - title, version, and user settings file
"""

import copy
import json
from pathlib import Path

from utils.constants import (
    INITIAL_BPM, FPS, LEADERBOARD_FILE,
    BEAT_TIMING_TOLERANCE, BEAT_SAFETY_MULTIPLIER, AUDIO_BEAT_PHASE_THRESHOLD
)

GAME_TITLE = "Lumen Maze"
GAME_VERSION = "1.0.0"

DEFAULT_SETTINGS = {
    "base_bpm": INITIAL_BPM,
    "music": None,  # {"path": "track.ogg", "bpm": 128}
    "leaderboard_path": LEADERBOARD_FILE,
    "player_name": "",
    "fps": FPS,
    "log_level": "INFO",
    "timing": {
        "tolerance": BEAT_TIMING_TOLERANCE,
        "safety_multiplier": BEAT_SAFETY_MULTIPLIER,
        "audio_phase_threshold": AUDIO_BEAT_PHASE_THRESHOLD,
    },
}


def merge_settings(defaults, overrides):
    """Recursively merge overrides on top of defaults (returns a new dict)"""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path=None):
    """
    Load settings from a JSON file on top of the defaults

    Args:
        path: Settings file; None or a missing file means defaults

    Returns:
        dict of settings

    Raises:
        SystemExit: If the file is not valid JSON, with a friendly message
    """
    if path is None:
        return copy.deepcopy(DEFAULT_SETTINGS)

    path = Path(path)
    if not path.exists():
        return copy.deepcopy(DEFAULT_SETTINGS)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(
            f"\nERROR: Your config is not valid JSON.\n"
            f"File: {path}\n"
            f"Line {e.lineno}, Col {e.colno}\n"
            f"{e.msg}\n"
        )

    if not isinstance(raw, dict):
        raise SystemExit(f"\nERROR: {path} must contain a JSON object.\n")

    return merge_settings(DEFAULT_SETTINGS, raw)
