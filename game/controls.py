"""
Keyboard controls - maps pygame keys to maze directions
"""

import pygame

from utils.constants import N, S, E, W

KEY_MAPPINGS = {
    pygame.K_UP: N,
    pygame.K_w: N,
    pygame.K_DOWN: S,
    pygame.K_s: S,
    pygame.K_RIGHT: E,
    pygame.K_d: E,
    pygame.K_LEFT: W,
    pygame.K_a: W,
}

PAUSE_KEYS = (pygame.K_ESCAPE, pygame.K_p)


def direction_for_key(key):
    """Direction bit for a key, or None for unmapped keys"""
    return KEY_MAPPINGS.get(key)


def is_pause_key(key):
    return key in PAUSE_KEYS
