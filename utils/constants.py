"""
Global constants for Lumen Maze
"""

# Screen settings
FPS = 60
MAX_CANVAS_SIZE = 600
WALL_THICK = 2

# HUD panel height
PANEL_H = 90

# Passage bit flags (a set bit means the side is OPEN)
N = 1
S = 2
E = 4
W = 8

# Direction vectors with passage bits
DIRS = [
    (0, -1, N, S),    # north
    (0, 1, S, N),     # south
    (1, 0, E, W),     # east
    (-1, 0, W, E),    # west
]

DX = {N: 0, S: 0, E: 1, W: -1}
DY = {N: -1, S: 1, E: 0, W: 0}
OPPOSITE = {N: S, S: N, E: W, W: E}

DIRECTION_NAMES = {N: "N", S: "S", E: "E", W: "W"}

# Core game values
INITIAL_BATTERY = 100
INITIAL_BPM = 120
INITIAL_LEVEL = 1
INITIAL_SCORE = 0
START_POS = (0, 0)

# Difficulty scaling
BPM_INCREASE_PER_LEVEL = 15
BATTERY_GAIN_PER_LEVEL = 25
BATTERY_DRAIN_BASE = 1.0
BATTERY_DRAIN_INCREASE = 0.3
WALL_PENALTY_BASE = 5
WALL_PENALTY_INCREASE = 2

# Extra battery cost for walking on later levels
MOVE_COST_MIN_LEVEL = 5
MOVE_COST_INTERVAL = 10
MOVE_COST_LEVEL_DIVISOR = 5

# Maze size progression: (max_level, size); None size means formula
MAZE_SIZE_PROGRESSION = [
    (3, 15),
    (6, 18),
    (10, 20),
    (None, None),
]
MAZE_SIZE_FORMULA_BASE = 15
MAZE_SIZE_MAX = 25

# Light radius (in cells): (max_level, radius), None = every later level
BASE_LIGHT_RADIUS = [
    (3, 2.5),     # early
    (6, 2.0),     # normal
    (10, 1.8),    # reduced
    (15, 1.5),    # tight
    (None, 1.2),  # minimal
]

STREAK_BONUS_MULTIPLIER = 0.3
MAX_STREAK_BONUS = 4.5
PULSE_AMPLITUDE = 0.1
PULSE_SPEED = 0.01

# Exit placement
EXIT_MIN_DISTANCE = 4
EXIT_DISTANCE_DIVISOR = 3

# Score
SCORE_BATTERY_MULTIPLIER = 100
SCORE_LEVEL_MULTIPLIER = 1000

# Beat timing
BEAT_TIMING_TOLERANCE = 0.8
BEAT_SAFETY_MULTIPLIER = 1.5
AUDIO_BEAT_PHASE_THRESHOLD = 0.9
FLASH_DURATION_FACTOR = 8000
MIN_FLASH_DURATION = 50

# Beat feedback sound
BEAT_SOUND_DURATION = 0.2
BEAT_SOUND_FREQUENCY = 60
AUDIO_VOLUME = 0.3
AUDIO_SAMPLE_RATE = 44100

# BPM range accepted for a track
BPM_MIN = 60
BPM_MAX = 300

# Leaderboard
LEADERBOARD_FILE = "leaderboard.json"
LEADERBOARD_SIZE = 10
MAX_NAME_LENGTH = 24
MAX_SCORE = 20000
