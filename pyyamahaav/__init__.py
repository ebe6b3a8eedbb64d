"""
Python library for controlling Yamaha A/V receivers.

This library allows you to navigate the menus of and control the playback on
the inputs of Yamaha A/V receivers that speak the XML-over-HTTP protocol.
"""

from .yamaha_types import (
    NavigationState,
    PlayControlState,
    PlayInfoState,
    PlaybackMode,
    YamahaConfig,
)
from .network import HttpXmlTransport
from .navigation import MenuNavigator
from .playback import PlaybackController
from .exceptions import YamahaError

__version__ = "0.1.0"
__all__ = [
    "HttpXmlTransport",
    "MenuNavigator",
    "NavigationState",
    "PlayControlState",
    "PlayInfoState",
    "PlaybackController",
    "PlaybackMode",
    "YamahaConfig",
    "YamahaError",
]
