"""
Tests for maze generation and exit placement
"""

import random

import pytest

from maze.generator import (
    gen_dfs_backtracker, generate_maze, generate_exit, perimeter_cells,
    exit_min_distance, can_move
)
from maze.maze_core import Maze, Position
from utils.constants import N, S, E, W, DIRS


SIZES = [(2, 2), (3, 7), (15, 15), (18, 18), (25, 25), (1, 6)]


@pytest.mark.parametrize("rows,cols", SIZES)
def test_maze_is_perfect(rows, cols):
    maze = generate_maze(rows, cols, seed=rows * 31 + cols)

    assert maze.passage_count() == rows * cols - 1
    assert len(maze.reachable_from((0, 0))) == rows * cols


def test_15x15_has_224_passages_and_visits_all_cells():
    maze = generate_maze(15, 15, seed=2024)

    assert maze.passage_count() == 224
    assert len(maze.reachable_from(Position(0, 0))) == 225


@pytest.mark.parametrize("seed", range(5))
def test_passages_are_reciprocal(seed):
    maze = generate_maze(12, 9, seed=seed)

    for y in range(maze.rows):
        for x in range(maze.cols):
            for dx, dy, bit, opposite in DIRS:
                nx, ny = x + dx, y + dy
                if not maze.in_bounds(nx, ny):
                    assert not maze.can_move(x, y, bit)
                    continue
                assert maze.can_move(x, y, bit) == maze.can_move(nx, ny, opposite)


def test_same_seed_gives_same_maze():
    assert generate_maze(10, 10, seed=42) == generate_maze(10, 10, seed=42)


def test_rng_wins_over_seed():
    a = generate_maze(8, 8, seed=1, rng=random.Random(99))
    b = generate_maze(8, 8, seed=2, rng=random.Random(99))
    assert a == b


def test_single_cell_maze_has_no_passages():
    maze = generate_maze(1, 1, seed=0)

    assert maze.cell(0, 0) == 0
    assert maze.passage_count() == 0


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3)])
def test_bad_size_raises(rows, cols):
    with pytest.raises(ValueError):
        generate_maze(rows, cols)


def test_step_generator_finishes_with_done():
    states = list(gen_dfs_backtracker(4, 4, random.Random(3)))

    assert states[-1]["done"] is True
    assert all(not s["done"] for s in states[:-1])
    carved = [s["carved"] for s in states if s["carved"]]
    assert len(carved) == 15


def test_can_move_reads_passage_bit():
    maze = Maze(1, 2, [[E, W]])

    assert can_move(maze, 0, 0, E)
    assert not can_move(maze, 0, 0, W)
    assert not can_move(maze, 0, 0, N)
    assert can_move(maze, 1, 0, W)


# ========== EXIT ==========

def test_perimeter_cells_are_distinct_and_skip_start():
    cells = perimeter_cells(4, 5)

    assert len(cells) == len(set(cells))
    assert Position(0, 0) not in cells
    assert len(cells) == 2 * 5 + 2 * 2 - 1


def test_exit_min_distance():
    assert exit_min_distance(15, 15) == 4
    assert exit_min_distance(9, 9) == 3
    assert exit_min_distance(2, 2) == 0


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("rows,cols", [(15, 15), (18, 18), (5, 8)])
def test_exit_on_perimeter_and_far_enough(seed, rows, cols):
    ex = generate_exit(rows, cols, seed=seed)

    assert ex != Position(0, 0)
    assert ex.x in (0, cols - 1) or ex.y in (0, rows - 1)
    assert 0 <= ex.x < cols and 0 <= ex.y < rows
    dist = (ex.x ** 2 + ex.y ** 2) ** 0.5
    assert dist >= exit_min_distance(rows, cols)


def test_exit_falls_back_to_far_corner_for_single_cell():
    assert generate_exit(1, 1, seed=0) == Position(0, 0)


def test_exit_on_tiny_maze_is_not_start():
    for seed in range(10):
        ex = generate_exit(2, 2, seed=seed)
        assert ex in {Position(1, 0), Position(0, 1), Position(1, 1)}


def test_exit_reachable_from_start():
    rng = random.Random(5)
    maze = generate_maze(15, 15, rng=rng)
    ex = generate_exit(15, 15, rng=rng)

    path = maze.shortest_path((0, 0), ex)
    assert path[0] == Position(0, 0)
    assert path[-1] == ex
