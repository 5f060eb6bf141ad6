"""
Color palette for Lumen Maze
"""

# Background colors
COLOR_BG = (8, 9, 14)             # Main background
COLOR_MAZE_BG = (14, 16, 24)      # Maze floor
COLOR_PANEL_BG = (12, 14, 18)     # HUD panel

# UI colors
COLOR_WALL = (120, 200, 255)      # Maze walls
COLOR_TEXT = (210, 210, 210)      # Normal text
COLOR_TEXT_HIGHLIGHT = (255, 230, 160)
COLOR_TEXT_DIM = (150, 150, 150)

# Entity colors
COLOR_PLAYER = (255, 240, 120)
COLOR_EXIT = (60, 200, 120)

# Battery bar
COLOR_BATTERY_BG = (60, 60, 60)
COLOR_BATTERY_FULL = (80, 220, 120)
COLOR_BATTERY_MID = (220, 200, 80)
COLOR_BATTERY_LOW = (220, 80, 80)

# Beat flash
COLOR_BEAT_FLASH = (255, 255, 255, 40)

# Menu colors
COLOR_MENU_OVERLAY = (10, 12, 16, 200)
COLOR_MENU_SELECTION = (255, 220, 120)
