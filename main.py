"""
Lumen Maze - rhythm maze game
Move on the beat, keep the battery alive, find the exit in the dark
"""

import logging
import os
import sys

os.environ.setdefault('SDL_VIDEO_ALLOW_SCREENSAVER', '1')

import pygame

from game.audio_link import AudioLink
from game.beat_clock import TimingConfig
from game.controls import direction_for_key, is_pause_key
from game.game_state import GameState, GamePhase
from game.leaderboard import Leaderboard, InvalidScoreError
from game.music_player import MusicPlayer
from game.renderer import MazeRenderer, screen_size_for
from utils.constants import MAX_CANVAS_SIZE, PANEL_H, MAX_NAME_LENGTH
from config import GAME_TITLE, GAME_VERSION, load_settings

logger = logging.getLogger(__name__)


class LumenMazeGame:
    """
    Main game class
    """
    def __init__(self, settings):
        pygame.init()
        self.settings = settings

        # Audio
        music = settings.get("music") or {}
        if music.get("path"):
            self.audio = MusicPlayer(music["path"], music.get("bpm"))
        else:
            self.audio = AudioLink()

        # Core state
        self.state = GameState(
            audio=self.audio,
            time_source=pygame.time.get_ticks,
            timing=TimingConfig.from_dict(settings.get("timing", {})),
            base_bpm=settings["base_bpm"],
        )
        self.leaderboard = Leaderboard(settings["leaderboard_path"])
        self.renderer = MazeRenderer()

        # Game over name entry
        self.player_name = settings.get("player_name", "")[:MAX_NAME_LENGTH]
        self.submit_message = ""
        self.submitted = False
        self.top_scores = self.leaderboard.top_scores()

        self.screen = None
        self.screen_size = None
        self._create_screen(MAX_CANVAS_SIZE, MAX_CANVAS_SIZE + PANEL_H)

        self.clock = pygame.time.Clock()
        self.fps = settings["fps"]
        self.running = True

    def _create_screen(self, width, height):
        """Create or resize the window"""
        if self.screen_size == (width, height):
            return
        self.screen_size = (width, height)
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(f"{GAME_TITLE} v{GAME_VERSION}")

    def _resize_screen_for_level(self):
        """Fit the window to the current maze"""
        snapshot = self.state.snapshot()
        if snapshot.maze is not None:
            self._create_screen(*screen_size_for(snapshot))

    # ========== INPUT ==========

    def handle_events(self):
        """Handle input events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event):
        """Handle key press based on current phase"""
        phase = self.state.phase
        key = event.key

        if phase is GamePhase.MAIN_MENU:
            if key == pygame.K_RETURN:
                self._start_new_game()
            elif key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False

        elif phase is GamePhase.RUNNING:
            if is_pause_key(key):
                self.state.pause()
            elif key == pygame.K_q:
                self._return_to_menu()
            else:
                direction = direction_for_key(key)
                if direction is not None:
                    self._handle_move(direction)

        elif phase is GamePhase.PAUSED:
            if is_pause_key(key):
                self.state.resume()
            elif key == pygame.K_q:
                self._return_to_menu()

        elif phase is GamePhase.GAME_OVER:
            self._handle_name_entry(event)

    def _handle_move(self, direction):
        result = self.state.on_move_attempt(direction)
        if result.level_completed:
            self._resize_screen_for_level()

    def _handle_name_entry(self, event):
        """Typing, backspace, Enter to submit, Escape to leave"""
        key = event.key
        if key == pygame.K_ESCAPE:
            self._return_to_menu()
        elif key == pygame.K_RETURN:
            if self.submitted:
                self._return_to_menu()
            else:
                self._submit_score()
        elif key == pygame.K_BACKSPACE:
            self.player_name = self.player_name[:-1]
        elif event.unicode and event.unicode.isprintable() and len(self.player_name) < MAX_NAME_LENGTH:
            self.player_name += event.unicode

    def _submit_score(self):
        try:
            entry = self.leaderboard.submit(self.player_name, self.state.score)
        except InvalidScoreError as e:
            logger.warning("Score rejected: %s", e)
            self.submit_message = str(e)
            return
        except OSError as e:
            logger.error("Could not save score: %s", e)
            self.submit_message = "Could not save score"
            return
        self.top_scores = self.leaderboard.top_scores()
        self.submit_message = f"Saved! Rank #{self._rank_of(entry)}. ENTER for menu"
        self.submitted = True

    def _rank_of(self, entry):
        for i, other in enumerate(self.top_scores):
            if other == entry:
                return i + 1
        return self.leaderboard.rank_for(entry.score)

    # ========== FLOW ==========

    def _start_new_game(self):
        """Start a new run"""
        self.submit_message = ""
        self.submitted = False
        self.state.start()
        if isinstance(self.audio, MusicPlayer):
            self.audio.start()
        self._resize_screen_for_level()

    def _return_to_menu(self):
        self.state.quit_to_menu()
        self.top_scores = self.leaderboard.top_scores()
        self._create_screen(MAX_CANVAS_SIZE, MAX_CANVAS_SIZE + PANEL_H)

    def update(self):
        """Advance beats and battery drain"""
        result = self.state.update_frame()
        if result.game_over:
            self.submit_message = ""
            self.submitted = False

    def render(self):
        snapshot = self.state.snapshot()
        self.renderer.render(
            self.screen, snapshot,
            title=GAME_TITLE,
            subtitle=f"v{GAME_VERSION}",
            name=self.player_name,
            message=self.submit_message,
            top_scores=self.top_scores,
        )
        pygame.display.flip()

    def run(self):
        """Main game loop"""
        while self.running:
            self.clock.tick(self.fps)

            self.handle_events()
            self.update()
            self.render()

        if isinstance(self.audio, MusicPlayer):
            self.audio.stop()
        pygame.quit()


def main(argv=None):
    """Entry point: optional path to a JSON settings file"""
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings(argv[0] if argv else None)

    logging.basicConfig(
        level=getattr(logging, str(settings["log_level"]).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = LumenMazeGame(settings)
    game.run()


if __name__ == "__main__":
    main()
