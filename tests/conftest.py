"""
Shared fixtures: a controllable clock and a scripted audio link
"""

import random

import pytest

from game.audio_link import AudioLink
from game.beat_clock import AudioSignal
from game.game_state import GameState
from maze.maze_core import Maze, Position
from utils.constants import N, S, E, W


class FakeClock:
    """Millisecond time source that only moves when told to"""
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


class FakeAudio(AudioLink):
    """Audio link whose track position is set by the test"""
    def __init__(self, bpm=120, has_track=True):
        super().__init__()
        self._bpm = bpm
        self._has_track = has_track
        self.position_seconds = 0.0
        self.is_playing = True
        self.paused_calls = 0
        self.resumed_calls = 0

    @property
    def has_track(self):
        return self._has_track

    @property
    def base_bpm(self):
        return self._bpm

    def signal(self):
        if not self._has_track:
            return None
        return AudioSignal(
            current_song_bpm=self._bpm,
            position_seconds=self.position_seconds,
            is_playing=self.is_playing,
            is_buffered=True,
            playback_rate=self.playback_rate,
        )

    def pause(self):
        self.paused_calls += 1

    def resume(self):
        self.resumed_calls += 1


def corridor_maze(length):
    """1 x length maze: a straight east-west corridor"""
    row = []
    for x in range(length):
        w = 0
        if x > 0:
            w |= W
        if x < length - 1:
            w |= E
        row.append(w)
    return Maze(1, length, [row])


def open_column_maze(rows, cols):
    """Maze where every column is a north-south corridor joined along row 0"""
    cells = [[0] * cols for _ in range(rows)]
    for y in range(rows):
        for x in range(cols):
            if y > 0:
                cells[y][x] |= N
            if y < rows - 1:
                cells[y][x] |= S
            if y == 0 and x > 0:
                cells[y][x] |= W
            if y == 0 and x < cols - 1:
                cells[y][x] |= E
    return Maze(rows, cols, cells)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_audio():
    return FakeAudio()


@pytest.fixture
def state(clock):
    """Running game on level 1 with the wall clock driving beats"""
    game = GameState(time_source=clock, rng=random.Random(7))
    game.start()
    return game


@pytest.fixture
def corridor_state(state):
    """Running game whose maze is a 1x10 corridor with the exit at the far end"""
    state.maze = corridor_maze(10)
    state.exit = Position(9, 0)
    return state
