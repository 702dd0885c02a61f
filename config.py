"""
Flipboard Configuration

Central configuration file for all constants and settings.
"""
import os

# Board configuration file (YAML, optional)
BOARD_CONFIG_PATH = os.getenv("FLIPBOARD_CONFIG", "flipboard.yaml")

# Seconds between two flips of the same cell; overrides the board config when set
STEP_INTERVAL = os.getenv("FLIPBOARD_STEP_INTERVAL")

# Canvas used until the first canvas-size event arrives
DEFAULT_CANVAS_WIDTH = int(os.getenv("FLIPBOARD_CANVAS_WIDTH", "1920"))
DEFAULT_CANVAS_HEIGHT = int(os.getenv("FLIPBOARD_CANVAS_HEIGHT", "1080"))

# Server Configuration
DEFAULT_PORT = 8000
PRODUCTION_PORT = 80
