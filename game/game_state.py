"""
Game State Machine - battery, streak, beats and level progression
"""

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, auto

from game.audio_link import AudioLink
from game.beat_clock import BeatClock
from game.input_gate import MoveCheck, check_move, is_direction
from maze.difficulty import (
    get_level_parameters, battery_for_level, describe_level
)
from maze.generator import generate_maze, generate_exit
from maze.maze_core import Position
from utils.constants import (
    INITIAL_BATTERY, INITIAL_BPM, INITIAL_LEVEL, INITIAL_SCORE, START_POS,
    MOVE_COST_MIN_LEVEL, MOVE_COST_INTERVAL, MOVE_COST_LEVEL_DIVISOR, DIRECTION_NAMES,
    STREAK_BONUS_MULTIPLIER, MAX_STREAK_BONUS, PULSE_AMPLITUDE, PULSE_SPEED,
    SCORE_BATTERY_MULTIPLIER, SCORE_LEVEL_MULTIPLIER
)
from utils.helpers import clamp, pulse

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Game phases"""
    MAIN_MENU = auto()
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class MoveOutcome(Enum):
    IGNORED = auto()
    MOVED = auto()
    BLOCKED = auto()
    LEVEL_COMPLETE = auto()


@dataclass(frozen=True)
class MoveResult:
    outcome: MoveOutcome
    check: MoveCheck = None
    battery_changed: bool = False

    @property
    def level_completed(self):
        return self.outcome is MoveOutcome.LEVEL_COMPLETE


@dataclass(frozen=True)
class BeatResult:
    game_over: bool = False
    streak_reset: bool = False


@dataclass(frozen=True)
class FrameResult:
    beat: bool = False
    game_over: bool = False
    streak_reset: bool = False
    battery_changed: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game for rendering and the HUD"""
    phase: GamePhase
    running: bool
    paused: bool
    score: int
    level: int
    battery: int
    bpm: float
    streak: int
    max_streak: int
    move_ready: bool
    player: Position
    exit: Position
    maze: object
    light_radius: float
    effective_light_radius: float
    tile_size: int
    beat_length_ms: float
    flash_duration_ms: float
    since_last_beat_ms: float


def _default_time_source():
    return time.perf_counter() * 1000


class GameState:
    """
    Central state machine for one play session

    Collaborators are passed in: an audio link (silent by default), a
    millisecond time source and the beat timing factors. A single
    frame driver calls update_frame() and key handlers call
    on_move_attempt(); nothing here is thread-safe.
    """
    def __init__(self, audio=None, time_source=None, timing=None,
                 base_bpm=INITIAL_BPM, rng=None):
        self.audio = audio or AudioLink()
        self.time_source = time_source or _default_time_source
        self.clock = BeatClock(timing)
        self.default_bpm = base_bpm
        self.rng = rng or random.Random()
        self.phase = GamePhase.MAIN_MENU
        self.reset()

    # ========== LIFECYCLE ==========

    def reset(self):
        """Reset the game state to initial values"""
        self.score = INITIAL_SCORE
        self.level = INITIAL_LEVEL
        self.battery = INITIAL_BATTERY
        self.level_start_battery = INITIAL_BATTERY

        self.running = False
        self.paused = False
        self.paused_at = None

        self.params = get_level_parameters(self.level, self.default_bpm)
        self.clock.reset(0.0, self.params.bpm)
        self.beat_count = 0

        self.player = Position(*START_POS)
        self.move_ready = True
        self.moved_this_beat = False
        self.move_count = 0

        self.streak = 0
        self.max_streak = 0
        self.current_light_radius = self.params.base_light_radius

        self.maze = None
        self.exit = None

        if self.phase is not GamePhase.MAIN_MENU:
            self.transition_to(GamePhase.MAIN_MENU)

    def transition_to(self, new_phase):
        logger.debug("Phase %s -> %s", self.phase.name, new_phase.name)
        self.phase = new_phase

    def now(self):
        return self.time_source()

    def start(self):
        """Start a new run from level 1"""
        if self.phase is not GamePhase.MAIN_MENU:
            self.reset()
        self.running = True
        self.paused = False
        self.transition_to(GamePhase.RUNNING)
        self.init_level()

    def init_level(self):
        """Build the maze and reset per-level state for the current level"""
        base_bpm = self.audio.base_bpm if self.audio.has_track else self.default_bpm
        self.params = get_level_parameters(self.level, base_bpm)

        if self.audio.has_track:
            self.audio.set_playback_rate(self.params.bpm / base_bpm)

        self.maze = generate_maze(self.params.rows, self.params.cols, rng=self.rng)
        self.exit = generate_exit(self.params.rows, self.params.cols, rng=self.rng)
        self.player = Position(*START_POS)

        self.battery = battery_for_level(self.level, self.battery)
        self.level_start_battery = self.battery

        self._reset_streak_system()
        self.clock.reset(self.now(), self.params.bpm)
        self.beat_count = 0
        self.move_count = 0

        path = self.maze.shortest_path(self.player, self.exit)
        logger.info("%s; exit at (%d, %d), %d steps away",
                    describe_level(self.params), self.exit.x, self.exit.y, len(path) - 1)

    def _reset_streak_system(self):
        self.streak = 0
        self.max_streak = 0
        self.current_light_radius = self.params.base_light_radius
        self.moved_this_beat = False
        self.move_ready = True

    def _reset_streak(self):
        self.streak = 0
        self.current_light_radius = self.params.base_light_radius

    def pause(self, now=None):
        """Pause a running game"""
        if self.phase is not GamePhase.RUNNING:
            return False
        self.paused = True
        self.paused_at = self.now() if now is None else now
        self.audio.pause()
        self.transition_to(GamePhase.PAUSED)
        return True

    def resume(self, now=None):
        """Resume a paused game, shifting timing anchors past the pause"""
        if self.phase is not GamePhase.PAUSED:
            return False
        now = self.now() if now is None else now
        if self.paused_at is not None:
            self.clock.shift(now - self.paused_at)
        self.paused = False
        self.paused_at = None
        self.audio.resume()
        self.transition_to(GamePhase.RUNNING)
        return True

    def toggle_pause(self, now=None):
        if self.paused:
            return self.resume(now)
        return self.pause(now)

    def game_over(self):
        """End the run; fields stay readable for scoring"""
        self.running = False
        self.paused = False
        self.paused_at = None
        self.audio.pause()
        self.transition_to(GamePhase.GAME_OVER)
        logger.info("Game over at level %d with score %d (best streak %d)",
                    self.level, self.score, self.max_streak)

    def quit_to_menu(self):
        """Abandon the run and return to the main menu"""
        self.reset()
        self.audio.pause()

    def next_level(self):
        """Bank the level bonus and move on"""
        bonus = self.battery * SCORE_BATTERY_MULTIPLIER + self.level * SCORE_LEVEL_MULTIPLIER
        self.score += bonus
        logger.info("Level %d complete, +%d points", self.level, bonus)
        self.level += 1
        self.init_level()

    @property
    def active(self):
        return self.running and not self.paused

    # ========== MOVES ==========

    def on_move_attempt(self, direction):
        """
        Try to move the player one cell

        Args:
            direction: One of N, S, E, W

        Returns:
            MoveResult
        """
        if not (self.active and self.move_ready) or not is_direction(direction):
            return MoveResult(MoveOutcome.IGNORED)

        check, dest = check_move(self.maze, self.player, direction)
        if check is not MoveCheck.OK:
            logger.debug("Move %s from (%d, %d) blocked: %s",
                         DIRECTION_NAMES[direction], self.player.x, self.player.y, check.name)
            self._on_failed_move()
            return MoveResult(MoveOutcome.BLOCKED, check, battery_changed=True)

        self.player = dest
        self.move_ready = False
        if self._on_successful_move():
            return MoveResult(MoveOutcome.LEVEL_COMPLETE, check, battery_changed=True)
        return MoveResult(MoveOutcome.MOVED, check)

    def _on_failed_move(self):
        # move_ready is left alone; a mis-tap costs battery, not the beat
        self.battery = max(0, self.battery - self.params.wall_penalty)
        self._reset_streak()
        self.moved_this_beat = True

    def _on_successful_move(self):
        self.moved_this_beat = True

        if self.player == self.exit:
            self.next_level()
            return True

        self.move_count += 1
        if self.level > MOVE_COST_MIN_LEVEL and self.move_count % MOVE_COST_INTERVAL == 0:
            cost = self.level // MOVE_COST_LEVEL_DIVISOR
            self.battery = max(0, self.battery - cost)

        self.streak += 1
        self.max_streak = max(self.max_streak, self.streak)
        bonus = min(MAX_STREAK_BONUS, self.streak * STREAK_BONUS_MULTIPLIER)
        self.current_light_radius = self.params.base_light_radius + bonus

        self.audio.play_beat_sound()
        return False

    # ========== BEATS ==========

    def on_beat(self):
        """
        Process one beat

        Returns:
            BeatResult
        """
        if not self.active:
            return BeatResult()

        self.beat_count += 1
        streak_reset = False

        # An unused move opportunity breaks the streak
        if self.move_ready and not self.moved_this_beat:
            self._reset_streak()
            streak_reset = True

        self.moved_this_beat = False
        self.move_ready = True

        if self.battery <= 0:
            self.game_over()
            return BeatResult(game_over=True)

        return BeatResult(streak_reset=streak_reset)

    def should_trigger_beat(self, now):
        """Poll the beat clock and unstick move_ready after a missed beat"""
        fired = self.clock.poll(now, self.audio.signal())

        if not self.move_ready and self.clock.is_stalled(now):
            logger.warning("Beat timing safety trigger activated (%.0f ms since last beat)",
                           self.clock.since_last_beat(now))
            self.move_ready = True

        return fired

    def update_battery_drain(self, now):
        """
        Apply time-based drain since the level started

        Returns:
            bool: True if the battery dropped
        """
        if not self.active:
            return False

        elapsed = now - self.clock.level_start_ts
        expected = max(0, self.level_start_battery - int(elapsed * self.params.battery_drain_rate // 1000))

        if self.battery > expected:
            self.battery = expected
            return True
        return False

    def update_frame(self, now=None):
        """
        Per-frame update: beat check then battery drain

        Returns:
            FrameResult
        """
        if not self.active:
            return FrameResult()

        now = self.now() if now is None else now
        beat = self.should_trigger_beat(now)
        beat_result = self.on_beat() if beat else BeatResult()
        if beat_result.game_over:
            return FrameResult(beat=True, game_over=True)

        battery_changed = self.update_battery_drain(now)
        return FrameResult(
            beat=beat,
            streak_reset=beat_result.streak_reset,
            battery_changed=battery_changed,
        )

    # ========== VIEWS ==========

    @property
    def timing(self):
        return self.clock.timing

    @property
    def last_beat_ts(self):
        return self.clock.last_beat_ts

    @property
    def level_start_ts(self):
        return self.clock.level_start_ts

    @property
    def expected_beat_index(self):
        return self.clock.expected_beat_index

    def effective_light_radius(self, now=None):
        """Light radius with the cosmetic streak pulse applied"""
        if self.streak <= 0:
            return self.current_light_radius
        now = self.now() if now is None else now
        return self.current_light_radius * pulse(now, PULSE_AMPLITUDE, PULSE_SPEED)

    def snapshot(self, now=None):
        now = self.now() if now is None else now
        return GameSnapshot(
            phase=self.phase,
            running=self.running,
            paused=self.paused,
            score=self.score,
            level=self.level,
            battery=clamp(self.battery, 0, INITIAL_BATTERY),
            bpm=self.params.bpm,
            streak=self.streak,
            max_streak=self.max_streak,
            move_ready=self.move_ready,
            player=self.player,
            exit=self.exit,
            maze=self.maze,
            light_radius=self.current_light_radius,
            effective_light_radius=self.effective_light_radius(now),
            tile_size=self.params.tile_size,
            beat_length_ms=self.params.beat_length_ms,
            flash_duration_ms=self.params.flash_duration_ms,
            since_last_beat_ms=self.clock.since_last_beat(now),
        )

    def __repr__(self):
        return f"GameState(phase={self.phase.name}, level={self.level}, battery={self.battery})"
