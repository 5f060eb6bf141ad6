"""
Tests for level scaling
"""

import pytest

from maze.difficulty import (
    get_level_parameters, maze_size_for_level, bpm_for_level,
    battery_drain_for_level, wall_penalty_for_level, base_light_radius,
    battery_for_level, beat_length_ms, flash_duration_ms, tile_size_for,
    describe_level
)


def test_level_6_parameters():
    params = get_level_parameters(6, base_bpm=120)

    assert (params.rows, params.cols) == (18, 18)
    assert params.bpm == 120 + 75
    assert params.wall_penalty == 15
    assert params.battery_drain_rate == pytest.approx(2.5)


@pytest.mark.parametrize("level,size", [
    (1, 15), (3, 15), (4, 18), (6, 18), (7, 20), (10, 20),
    (11, 20), (12, 21), (20, 25), (40, 25),
])
def test_maze_size_progression(level, size):
    assert maze_size_for_level(level) == (size, size)


@pytest.mark.parametrize("level,radius", [
    (1, 2.5), (3, 2.5), (4, 2.0), (6, 2.0), (7, 1.8), (10, 1.8),
    (11, 1.5), (15, 1.5), (16, 1.2), (99, 1.2),
])
def test_base_light_radius_tiers(level, radius):
    assert base_light_radius(level) == radius


def test_linear_rules():
    assert bpm_for_level(1) == 120
    assert bpm_for_level(3, base_bpm=100) == 130
    assert battery_drain_for_level(1) == 1.0
    assert wall_penalty_for_level(1) == 5
    assert wall_penalty_for_level(4) == 11


def test_battery_for_level():
    assert battery_for_level(1, 10) == 100
    assert battery_for_level(2, 40) == 65
    assert battery_for_level(3, 90) == 100


def test_timing_helpers():
    assert beat_length_ms(120) == 500
    assert flash_duration_ms(120) == pytest.approx(8000 / 120)
    assert flash_duration_ms(300) == 50
    assert tile_size_for(15, 15) == 40
    assert tile_size_for(18, 18) == 33


@pytest.mark.parametrize("level", [0, -3])
def test_level_below_one_raises(level):
    with pytest.raises(ValueError):
        get_level_parameters(level)


def test_describe_level_mentions_size_and_tempo():
    text = describe_level(get_level_parameters(2))
    assert "15x15" in text
    assert "135 BPM" in text
