"""
Input Gate - classifies a single directional move against the maze
"""

from enum import Enum, auto

from utils.constants import DX
from maze.maze_core import step


class MoveCheck(Enum):
    """Outcome of checking one step"""
    OK = auto()
    WALL = auto()
    OUT_OF_BOUNDS = auto()


def is_direction(direction):
    """True for one of the four passage bits"""
    return direction in DX


def check_move(maze, position, direction):
    """
    Classify a step from position toward direction

    Bounds are checked before walls.

    Returns:
        (MoveCheck, destination) tuple
    """
    dest = step(position, direction)
    if not maze.in_bounds(dest.x, dest.y):
        return MoveCheck.OUT_OF_BOUNDS, dest
    if not maze.can_move(position[0], position[1], direction):
        return MoveCheck.WALL, dest
    return MoveCheck.OK, dest
