"""
Maze Renderer - draws the lit maze, HUD, and menu screens
"""

import pygame

from game.game_state import GamePhase
from utils.colors import (
    COLOR_BG, COLOR_MAZE_BG, COLOR_PANEL_BG, COLOR_WALL, COLOR_TEXT,
    COLOR_TEXT_HIGHLIGHT, COLOR_TEXT_DIM, COLOR_PLAYER, COLOR_EXIT,
    COLOR_BATTERY_BG, COLOR_BATTERY_FULL, COLOR_BATTERY_MID, COLOR_BATTERY_LOW,
    COLOR_BEAT_FLASH, COLOR_MENU_OVERLAY, COLOR_MENU_SELECTION
)
from utils.constants import N, S, E, W, PANEL_H, WALL_THICK
from utils.helpers import distance, color_lerp, format_score


def cell_visibility(x, y, player_x, player_y, radius):
    """
    Visibility of a cell (0.0 = dark, 1.0 = fully lit)

    Fades linearly to zero at the light radius; the player's own
    and adjacent cells never drop below 0.3.
    """
    dist = distance(x, y, player_x, player_y)
    if radius <= 0:
        alpha = 0.0
    else:
        alpha = max(0.0, 1 - dist / radius)
    if dist <= 1:
        alpha = max(alpha, 0.3)
    return alpha


def screen_size_for(snapshot):
    """Window size needed for the current maze"""
    maze = snapshot.maze
    return maze.cols * snapshot.tile_size, maze.rows * snapshot.tile_size + PANEL_H


class MazeRenderer:
    """
    Renders game snapshots
    """
    def __init__(self):
        self.font_small = None
        self.font_medium = None
        self.font_large = None
        self.font_title = None
        self._init_fonts()

    def _init_fonts(self):
        """Initialize fonts"""
        pygame.font.init()
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_medium = pygame.font.SysFont("consolas", 18)
        self.font_large = pygame.font.SysFont("consolas", 28, bold=True)
        self.font_title = pygame.font.SysFont("consolas", 48, bold=True)

    # ========== PLAYING ==========

    def render_playing(self, screen, snapshot):
        """Draw maze, exit, player, beat flash and HUD"""
        screen.fill(COLOR_BG)
        if snapshot.maze is None:
            return

        tile = snapshot.tile_size
        maze_w = snapshot.maze.cols * tile
        maze_h = snapshot.maze.rows * tile
        pygame.draw.rect(screen, COLOR_MAZE_BG, (0, 0, maze_w, maze_h))

        radius = snapshot.effective_light_radius
        self._draw_maze(screen, snapshot, radius)
        self._draw_exit(screen, snapshot, radius)
        self._draw_cell(screen, snapshot.player.x, snapshot.player.y, tile, COLOR_PLAYER)

        if snapshot.since_last_beat_ms < snapshot.flash_duration_ms:
            flash = pygame.Surface((maze_w, maze_h), pygame.SRCALPHA)
            flash.fill(COLOR_BEAT_FLASH)
            screen.blit(flash, (0, 0))

        self.draw_hud(screen, snapshot, maze_h, max(maze_w, screen.get_width()))

    def _draw_maze(self, screen, snapshot, radius):
        """Draw walls where passages are missing, dimmed by distance"""
        maze = snapshot.maze
        tile = snapshot.tile_size
        px, py = snapshot.player

        for y in range(maze.rows):
            for x in range(maze.cols):
                alpha = cell_visibility(x, y, px, py, radius)
                if alpha <= 0.05:
                    continue

                color = color_lerp(COLOR_MAZE_BG, COLOR_WALL, alpha)
                w = maze.cell(x, y)
                x0, y0 = x * tile, y * tile
                x1, y1 = x0 + tile, y0 + tile

                if not w & N:
                    pygame.draw.line(screen, color, (x0, y0), (x1, y0), WALL_THICK)
                if not w & W:
                    pygame.draw.line(screen, color, (x0, y0), (x0, y1), WALL_THICK)
                if y == maze.rows - 1 and not w & S:
                    pygame.draw.line(screen, color, (x0, y1), (x1, y1), WALL_THICK)
                if x == maze.cols - 1 and not w & E:
                    pygame.draw.line(screen, color, (x1, y0), (x1, y1), WALL_THICK)

    def _draw_exit(self, screen, snapshot, radius):
        """Exit is only drawn inside the light"""
        ex, ey = snapshot.exit
        px, py = snapshot.player
        dist = distance(ex, ey, px, py)
        if dist > radius:
            return
        alpha = max(0.3, 1 - dist / radius) if radius > 0 else 0.3
        color = color_lerp(COLOR_MAZE_BG, COLOR_EXIT, alpha)
        self._draw_cell(screen, ex, ey, snapshot.tile_size, color)

    def _draw_cell(self, screen, x, y, tile, color):
        """Draw filled cell"""
        pad = max(2, tile // 5)
        rect = (x * tile + pad, y * tile + pad, tile - pad * 2, tile - pad * 2)
        pygame.draw.rect(screen, color, rect, border_radius=max(2, tile // 8))

    def draw_hud(self, screen, snapshot, panel_y, screen_w):
        """Draw HUD panel below the maze"""
        pygame.draw.rect(screen, COLOR_PANEL_BG, (0, panel_y, screen_w, PANEL_H))
        self._draw_battery_bar(screen, snapshot.battery, 10, panel_y + 10, 200, 18)

        lines = [
            f"Level {snapshot.level}   Score {format_score(snapshot.score)}   {snapshot.bpm:g} BPM",
            f"Streak {snapshot.streak} (best {snapshot.max_streak})   "
            f"Light {snapshot.light_radius:.1f}",
        ]
        for i, line in enumerate(lines):
            text = self.font_small.render(line, True, COLOR_TEXT)
            screen.blit(text, (10, panel_y + 36 + i * 18))

        ready = "MOVE" if snapshot.move_ready else "WAIT"
        color = COLOR_TEXT_HIGHLIGHT if snapshot.move_ready else COLOR_TEXT_DIM
        text = self.font_medium.render(ready, True, color)
        screen.blit(text, (screen_w - text.get_width() - 10, panel_y + 10))

    def _draw_battery_bar(self, screen, battery, x, y, width, height):
        """Draw battery bar"""
        pygame.draw.rect(screen, COLOR_BATTERY_BG, (x, y, width, height), border_radius=4)

        percent = battery / 100
        if percent > 0.5:
            color = COLOR_BATTERY_FULL
        elif percent > 0.25:
            color = COLOR_BATTERY_MID
        else:
            color = COLOR_BATTERY_LOW

        fill_width = int(width * percent)
        if fill_width > 0:
            pygame.draw.rect(screen, color, (x, y, fill_width, height), border_radius=4)
        pygame.draw.rect(screen, (200, 200, 200), (x, y, width, height), 2, border_radius=4)

        text = self.font_small.render(f"Battery: {battery}%", True, COLOR_TEXT)
        screen.blit(text, (x + width + 10, y + 2))

    # ========== OVERLAYS ==========

    def _overlay(self, screen):
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill(COLOR_MENU_OVERLAY)
        screen.blit(overlay, (0, 0))

    def _center_text(self, screen, font, text, y, color=COLOR_TEXT):
        surf = font.render(text, True, color)
        rect = surf.get_rect(center=(screen.get_width() // 2, y))
        screen.blit(surf, rect)

    def draw_menu(self, screen, title, subtitle, top_scores):
        """Draw main menu with the leaderboard"""
        screen.fill(COLOR_BG)
        h = screen.get_height()
        self._center_text(screen, self.font_title, title, h // 6, COLOR_MENU_SELECTION)
        self._center_text(screen, self.font_small, subtitle, h // 6 + 40, COLOR_TEXT_DIM)
        self._center_text(screen, self.font_medium, "ENTER: start   ESC/P: pause   Q: quit", h // 3)
        self._draw_scores(screen, top_scores, h // 3 + 50)

    def draw_paused(self, screen):
        self._overlay(screen)
        h = screen.get_height()
        self._center_text(screen, self.font_large, "PAUSED", h // 2, COLOR_TEXT_HIGHLIGHT)
        self._center_text(screen, self.font_small, "ESC/P: resume   Q: menu", h // 2 + 40)

    def draw_game_over(self, screen, snapshot, name, message, top_scores):
        """Draw game over screen with name entry"""
        self._overlay(screen)
        h = screen.get_height()
        self._center_text(screen, self.font_large, "GAME OVER", h // 8, (255, 100, 100))
        self._center_text(
            screen, self.font_medium,
            f"Score {format_score(snapshot.score)}   Level {snapshot.level}   "
            f"Best streak {snapshot.max_streak}",
            h // 8 + 40
        )
        self._center_text(screen, self.font_medium, f"Name: {name}_", h // 8 + 80, COLOR_TEXT_HIGHLIGHT)
        if message:
            self._center_text(screen, self.font_small, message, h // 8 + 110, COLOR_TEXT_DIM)
        self._center_text(screen, self.font_small, "ENTER: submit   ESC: menu", h // 8 + 130)
        self._draw_scores(screen, top_scores, h // 8 + 170)

    def _draw_scores(self, screen, top_scores, y):
        if not top_scores:
            self._center_text(screen, self.font_small, "No scores yet", y, COLOR_TEXT_DIM)
            return
        self._center_text(screen, self.font_medium, "TOP SCORES", y, COLOR_MENU_SELECTION)
        for i, entry in enumerate(top_scores):
            line = f"{i + 1:>2}. {entry.name:<24} {format_score(entry.score):>7}"
            self._center_text(screen, self.font_small, line, y + 26 + i * 18)

    def render(self, screen, snapshot, title="", subtitle="", name="", message="", top_scores=()):
        """Draw whatever the current phase needs"""
        if snapshot.phase is GamePhase.MAIN_MENU:
            self.draw_menu(screen, title, subtitle, top_scores)
        elif snapshot.phase is GamePhase.RUNNING:
            self.render_playing(screen, snapshot)
        elif snapshot.phase is GamePhase.PAUSED:
            self.render_playing(screen, snapshot)
            self.draw_paused(screen)
        elif snapshot.phase is GamePhase.GAME_OVER:
            self.render_playing(screen, snapshot)
            self.draw_game_over(screen, snapshot, name, message, top_scores)
