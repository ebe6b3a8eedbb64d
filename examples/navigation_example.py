#!/usr/bin/env python
"""
Navigation Example

This example demonstrates how to use the pyyamahaav package to navigate to a
station in the NET_RADIO menu of a receiver and start its playback. It shows
how to write a listener that receives menu and playback updates.

Usage: navigation_example.py HOST "Bookmarks/My Favorites/Radio Paradise"
"""

import logging
import sys
import threading

from pyyamahaav import HttpXmlTransport, MenuNavigator, PlaybackController, YamahaError
from pyyamahaav.yamaha_types import NavigationState, PlayControlState, PlayInfoState

# Set up logging
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
_LOGGER = logging.getLogger(__name__)


class LoggingListener:
    """
    Example listener that logs every update it receives.
    """

    def navigation_updated(self, state: NavigationState) -> None:
        _LOGGER.info("Menu %s at level %d: %s", state.name, state.layer, state.all_item_labels())

    def navigation_error(self, message: str) -> None:
        _LOGGER.warning("Navigation failed: %s", message)

    def play_info_updated(self, state: PlayInfoState) -> None:
        _LOGGER.info("Playing %s on %s", state.song or "-", state.station)

    def play_control_updated(self, state: PlayControlState) -> None:
        _LOGGER.info("Preset %d selected", state.preset_channel)


def main() -> int:
    """Navigate to a station and play it."""
    if len(sys.argv) != 3:
        print(__doc__)
        return 1
    host, path = sys.argv[1], sys.argv[2]

    listener = LoggingListener()
    # One lock per receiver, it accepts only one request at a time
    device_lock = threading.Lock()

    try:
        with HttpXmlTransport(host) as transport:
            navigator = MenuNavigator("NET_RADIO", transport, listener)
            playback = PlaybackController("NET_RADIO", transport, listener)

            with device_lock:
                if not navigator.select_item_full_path(path):
                    return 1
                playback.play()
    except YamahaError as e:
        _LOGGER.error("Error: %s", e)
        return 1

    _LOGGER.info("Example completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
