"""
Constants for the Yamaha receiver integration.

This module defines constants used throughout the Yamaha integration.
"""

# Network settings
DEFAULT_PORT = 80
CONTROL_PATH = "/YamahaRemoteControl/ctrl"
DEFAULT_TIMEOUT = 3.0  # seconds

# Root element of every request and response
ROOT_TAG = "YAMAHA_AV"

# Menu readiness polling
MENU_RETRY_DELAY = 0.5  # seconds
MENU_MAX_WAITING_TIME = 5.0  # seconds
MENU_STATUS_READY = "Ready"

# Menus are paged by the device, 8 lines per page
MAX_PER_PAGE = 8

# Sentinel values
NOT_AVAILABLE = "N/A"
PRESET_NOT_REPORTED = -1

# Input identifiers
TUNER_INPUT = "TUNER"

NAVIGATION_INPUTS = frozenset([
    "NET_RADIO",
    "USB",
    "DOCK",
    "iPOD_USB",
    "PC",
    "Napster",
    "Pandora",
    "SIRIUS",
    "Rhapsody",
    "iPod",
    "HD_RADIO",
])

PLAY_CONTROL_INPUTS = NAVIGATION_INPUTS | frozenset([
    TUNER_INPUT,
    "Bluetooth",
])

# Cursor commands
CURSOR_UP = "Up"
CURSOR_DOWN = "Down"
CURSOR_LEFT = "Left"
CURSOR_RIGHT = "Right"
CURSOR_BACK = "Back"
CURSOR_SELECT = "Select"
CURSOR_HOME = "Back to Home"
CURSOR_HOME_ALTERNATE = "Return to Home"

# Playback commands
PLAYBACK_PLAY = "Play"
PLAYBACK_STOP = "Stop"
PLAYBACK_PAUSE = "Pause"
PLAYBACK_SKIP_FWD = "Skip Fwd"
PLAYBACK_SKIP_REV = "Skip Rev"
PLAYBACK_NEXT = ">>|"
PLAYBACK_PREVIOUS = "|<<"

# Parameter queries
GET_PARAM = "GetParam"
