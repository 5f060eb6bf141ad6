"""
Difficulty scaling for Lumen Maze
Maps a level number to its maze size, tempo, battery drain and light
"""

from dataclasses import dataclass

from utils.constants import (
    INITIAL_BPM, INITIAL_BATTERY, BPM_INCREASE_PER_LEVEL, BATTERY_GAIN_PER_LEVEL,
    BATTERY_DRAIN_BASE, BATTERY_DRAIN_INCREASE,
    WALL_PENALTY_BASE, WALL_PENALTY_INCREASE,
    MAZE_SIZE_PROGRESSION, MAZE_SIZE_FORMULA_BASE, MAZE_SIZE_MAX,
    BASE_LIGHT_RADIUS, FLASH_DURATION_FACTOR, MIN_FLASH_DURATION, MAX_CANVAS_SIZE
)


@dataclass(frozen=True)
class LevelParameters:
    """Read-only parameters for a single level"""
    level: int
    rows: int
    cols: int
    bpm: float
    battery_drain_rate: float
    wall_penalty: int
    base_light_radius: float
    beat_length_ms: float
    flash_duration_ms: float
    tile_size: int


def _check_level(level):
    if level < 1:
        raise ValueError(f"levels start at 1, got {level}")


def _lookup(rules, level):
    """First (max_level, value) rule covering level; None max_level is open-ended"""
    for max_level, value in rules:
        if max_level is None or level <= max_level:
            return value
    return rules[-1][1]


# ========== PER-LEVEL RULES ==========

def maze_size_for_level(level):
    """
    Maze dimensions for a level

    Returns:
        (rows, cols) tuple - mazes are always square
    """
    _check_level(level)
    size = _lookup(MAZE_SIZE_PROGRESSION, level)
    if size is None:
        size = min(MAZE_SIZE_MAX, MAZE_SIZE_FORMULA_BASE + level // 2)
    return size, size


def bpm_for_level(level, base_bpm=INITIAL_BPM):
    _check_level(level)
    return base_bpm + (level - 1) * BPM_INCREASE_PER_LEVEL


def battery_drain_for_level(level):
    """Battery drain in percent per second"""
    _check_level(level)
    return BATTERY_DRAIN_BASE + (level - 1) * BATTERY_DRAIN_INCREASE


def wall_penalty_for_level(level):
    """Battery lost per failed move"""
    _check_level(level)
    return WALL_PENALTY_BASE + (level - 1) * WALL_PENALTY_INCREASE


def base_light_radius(level):
    """Light radius in cells before any streak bonus"""
    _check_level(level)
    return _lookup(BASE_LIGHT_RADIUS, level)


def battery_for_level(level, previous_battery):
    """
    Battery at the start of a level

    Level 1 always starts full; later levels top up the remaining
    battery, capped at full charge.
    """
    _check_level(level)
    if level == 1:
        return INITIAL_BATTERY
    return min(previous_battery + BATTERY_GAIN_PER_LEVEL, INITIAL_BATTERY)


def beat_length_ms(bpm):
    return 60000 / bpm


def flash_duration_ms(bpm):
    """How long the beat flash stays visible"""
    return max(FLASH_DURATION_FACTOR / bpm, MIN_FLASH_DURATION)


def tile_size_for(rows, cols):
    """Pixel size of one cell so the maze fits the canvas"""
    return MAX_CANVAS_SIZE // max(rows, cols)


def get_level_parameters(level, base_bpm=INITIAL_BPM):
    """
    Compute all parameters for a level

    Args:
        level: Level number (>= 1)
        base_bpm: Level 1 tempo, usually the loaded track's BPM

    Returns:
        LevelParameters
    """
    rows, cols = maze_size_for_level(level)
    bpm = bpm_for_level(level, base_bpm)
    return LevelParameters(
        level=level,
        rows=rows,
        cols=cols,
        bpm=bpm,
        battery_drain_rate=battery_drain_for_level(level),
        wall_penalty=wall_penalty_for_level(level),
        base_light_radius=base_light_radius(level),
        beat_length_ms=beat_length_ms(bpm),
        flash_duration_ms=flash_duration_ms(bpm),
        tile_size=tile_size_for(rows, cols),
    )


def describe_level(params):
    """Get a one-line description of a level"""
    return (
        f"Level {params.level}: maze {params.cols}x{params.rows}, "
        f"{params.bpm:g} BPM, drain {params.battery_drain_rate:.1f}%/s, "
        f"wall penalty {params.wall_penalty}, light {params.base_light_radius}"
    )
