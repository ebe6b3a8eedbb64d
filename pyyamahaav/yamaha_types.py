"""
Type definitions for the Yamaha integration.

This module defines the state snapshots, listener interfaces and configuration
used throughout the Yamaha integration.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Protocol, Union
import xml.etree.ElementTree as ET

from .constants import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    MAX_PER_PAGE,
    MENU_MAX_WAITING_TIME,
    MENU_RETRY_DELAY,
    NOT_AVAILABLE,
    PRESET_NOT_REPORTED,
)


class PlaybackMode(str, Enum):
    """Playback modes reported by the device."""
    PLAY = "Play"
    STOP = "Stop"
    PAUSE = "Pause"

    @classmethod
    def from_device(cls, value: str) -> Union["PlaybackMode", str]:
        """
        Map a device reported playback mode to a member.

        Args:
            value: Text of the Playback_Info node

        Returns:
            The matching member, or the raw text for modes we do not know
        """
        try:
            return cls(value)
        except ValueError:
            return value


@dataclass
class NavigationState:
    """
    Cached menu state of a navigable input.

    Only the currently loaded page is held in ``items``; it always has
    exactly MAX_PER_PAGE slots, unused slots are None.
    """
    name: Optional[str] = None
    layer: int = -1
    current_line: int = 0
    max_line: int = 0
    items: List[Optional[str]] = field(default_factory=lambda: [None] * MAX_PER_PAGE)

    @property
    def current_item_name(self) -> str:
        """Label of the item at the current line, or an empty string."""
        if self.current_line < 1 or self.current_line > self.max_line:
            return ""
        return self.items[(self.current_line - 1) % MAX_PER_PAGE] or ""

    def all_item_labels(self) -> str:
        """Comma separated labels of the visible page."""
        return ",".join(item for item in self.items if item)

    def clear_items(self) -> None:
        for i in range(MAX_PER_PAGE):
            self.items[i] = None

    def invalidate(self) -> None:
        """Reset to the sentinel values used when the menu is unavailable."""
        self.name = NOT_AVAILABLE
        self.layer = 0
        self.current_line = 0
        self.max_line = 0

    def copy(self) -> "NavigationState":
        return replace(self, items=list(self.items))


@dataclass
class PlayInfoState:
    """Snapshot of the playback information of an input."""
    station: str = ""
    artist: str = ""
    album: str = ""
    song: str = ""
    playback_mode: Union[PlaybackMode, str] = PlaybackMode.STOP

    def invalidate(self) -> None:
        self.playback_mode = NOT_AVAILABLE
        self.station = NOT_AVAILABLE
        self.artist = NOT_AVAILABLE
        self.album = NOT_AVAILABLE
        self.song = NOT_AVAILABLE


@dataclass
class PlayControlState:
    """Snapshot of the preset selection of an input."""
    preset_channel: int = PRESET_NOT_REPORTED

    def invalidate(self) -> None:
        self.preset_channel = PRESET_NOT_REPORTED


class NavigationListener(Protocol):
    """Protocol for navigation listeners."""

    def navigation_updated(self, state: NavigationState) -> None:
        """
        Handle a refreshed menu state.

        Args:
            state: A copy of the navigation cache
        """
        ...

    def navigation_error(self, message: str) -> None:
        """
        Handle a recoverable navigation failure, like an item that is not in the menu.

        Args:
            message: Human readable description of the failure
        """
        ...


class PlayListener(Protocol):
    """Protocol for playback listeners."""

    def play_info_updated(self, state: PlayInfoState) -> None:
        ...

    def play_control_updated(self, state: PlayControlState) -> None:
        ...


class XmlTransport(Protocol):
    """Protocol for the object that exchanges XML messages with the device."""

    def send(self, body: str) -> str:
        """Send a query and return the response text."""
        ...

    def send_only(self, body: str) -> None:
        """Send a command, the response carries no state."""
        ...

    def parse(self, response: str) -> ET.Element:
        ...

    def lookup(self, tree: ET.Element, path: str) -> Optional[ET.Element]:
        ...


# Configuration types
@dataclass
class YamahaConfig:
    """Configuration for a Yamaha receiver connection."""
    host: str = ""
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    menu_retry_delay: float = MENU_RETRY_DELAY
    menu_max_wait: float = MENU_MAX_WAITING_TIME
    legacy_page_jump: bool = False

    def __post_init__(self):
        if self.menu_retry_delay <= 0:
            raise ValueError("menu_retry_delay must be greater than zero")
        if self.menu_max_wait <= 0:
            raise ValueError("menu_max_wait must be greater than zero")
