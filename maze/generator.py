"""
Maze generation - randomized depth-first backtracker and exit placement
"""

import random
from utils.constants import (
    N, S, E, W, DX, DY, OPPOSITE,
    START_POS, EXIT_MIN_DISTANCE, EXIT_DISTANCE_DIVISOR
)
from utils.helpers import distance
from maze.maze_core import Maze, Position


def _make_rng(seed=None, rng=None):
    if rng is not None:
        return rng
    return random.Random(seed)


# ========== GENERATOR: DFS BACKTRACKER ==========

def gen_dfs_backtracker(rows, cols, rng):
    """
    Depth-First Search with backtracking - step generator

    Yields a progress dict after every carve or backtrack. The last
    dict has done=True and holds the finished grid.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"maze needs at least one cell, got {cols}x{rows}")

    grid = [[0] * cols for _ in range(rows)]
    visited = [[False] * cols for _ in range(rows)]

    sx, sy = START_POS
    stack = [(sx, sy)]
    visited[sy][sx] = True

    yield {"grid": grid, "current": (sx, sy), "carved": None, "done": False}

    while stack:
        cx, cy = stack[-1]
        dirs = [N, S, E, W]
        rng.shuffle(dirs)

        for d in dirs:
            nx, ny = cx + DX[d], cy + DY[d]
            if not (0 <= nx < cols and 0 <= ny < rows) or visited[ny][nx]:
                continue

            grid[cy][cx] |= d
            grid[ny][nx] |= OPPOSITE[d]
            visited[ny][nx] = True
            stack.append((nx, ny))
            yield {"grid": grid, "current": (nx, ny), "carved": ((cx, cy), (nx, ny)), "done": False}
            break
        else:
            stack.pop()
            yield {"grid": grid, "current": (cx, cy), "carved": None, "done": False}

    yield {"grid": grid, "current": (sx, sy), "carved": None, "done": True}


def generate_maze(rows, cols, seed=None, rng=None):
    """
    Generate a perfect maze instantly

    Args:
        rows, cols: Maze dimensions (>= 1)
        seed: Optional seed for a private random source
        rng: Optional random.Random to draw from (wins over seed)

    Returns:
        Maze with exactly rows * cols - 1 passages
    """
    rng = _make_rng(seed, rng)
    last_state = None
    for state in gen_dfs_backtracker(rows, cols, rng):
        last_state = state
    return Maze(rows, cols, last_state["grid"])


# ========== EXIT PLACEMENT ==========

def perimeter_cells(rows, cols):
    """Distinct border cells in scan order, start cell excluded"""
    cells = []
    seen = set()
    for y in range(rows):
        for x in range(cols):
            if x in (0, cols - 1) or y in (0, rows - 1):
                pos = Position(x, y)
                if pos != START_POS and pos not in seen:
                    seen.add(pos)
                    cells.append(pos)
    return cells


def exit_min_distance(rows, cols):
    """Minimum Euclidean distance between start and exit"""
    return min(EXIT_MIN_DISTANCE, min(rows, cols) // EXIT_DISTANCE_DIVISOR)


def generate_exit(rows, cols, seed=None, rng=None):
    """
    Pick a random perimeter cell far enough from the start

    Falls back to the far corner when no border cell qualifies.
    """
    rng = _make_rng(seed, rng)
    min_dist = exit_min_distance(rows, cols)
    sx, sy = START_POS

    candidates = [
        pos for pos in perimeter_cells(rows, cols)
        if distance(sx, sy, pos.x, pos.y) >= min_dist
    ]

    if not candidates:
        return Position(cols - 1, rows - 1)

    return rng.choice(candidates)


def can_move(maze, x, y, direction):
    """True iff the direction bit is set on cell (x, y)"""
    return maze.can_move(x, y, direction)
