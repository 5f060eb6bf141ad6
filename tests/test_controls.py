"""
Tests for keyboard mapping
"""

import pygame
import pytest

from game.controls import direction_for_key, is_pause_key
from utils.constants import N, S, E, W


@pytest.mark.parametrize("key,direction", [
    (pygame.K_UP, N), (pygame.K_w, N),
    (pygame.K_DOWN, S), (pygame.K_s, S),
    (pygame.K_RIGHT, E), (pygame.K_d, E),
    (pygame.K_LEFT, W), (pygame.K_a, W),
])
def test_direction_keys(key, direction):
    assert direction_for_key(key) == direction


def test_unmapped_key():
    assert direction_for_key(pygame.K_SPACE) is None


def test_pause_keys():
    assert is_pause_key(pygame.K_ESCAPE)
    assert is_pause_key(pygame.K_p)
    assert not is_pause_key(pygame.K_RETURN)
