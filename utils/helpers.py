"""
Helper utility functions for Lumen Maze
"""

import math


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def distance(x1, y1, x2, y2):
    """Calculate Euclidean distance between two points"""
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def pulse(time_ms, amplitude, speed):
    """Oscillating factor around 1.0 used for the light pulse"""
    return 1 + amplitude * math.sin(time_ms * speed)


def format_score(score):
    """Format score with thousands separator"""
    return f"{score:,}"


def lerp(a, b, t):
    """Linear interpolation between a and b by factor t (0-1)"""
    return a + (b - a) * t


def color_lerp(color1, color2, t):
    """Interpolate between two RGB colors"""
    r = int(lerp(color1[0], color2[0], t))
    g = int(lerp(color1[1], color2[1], t))
    b = int(lerp(color1[2], color2[2], t))
    return (r, g, b)
