"""
Command-line interface for the pyyamahaav package.

This module provides a command-line interface for navigating the menus of and
controlling the playback on Yamaha A/V receivers.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .constants import DEFAULT_PORT, DEFAULT_TIMEOUT
from .exceptions import YamahaError
from .navigation import MenuNavigator
from .network import HttpXmlTransport
from .playback import PlaybackController
from .yamaha_types import NavigationState, PlayControlState, PlayInfoState, YamahaConfig

_LOGGER = logging.getLogger(__name__)

CURSOR_COMMANDS = ["up", "down", "left", "right", "back", "select"]
PLAYBACK_COMMANDS = ["play", "stop", "pause", "next", "previous", "skip-fwd", "skip-rev"]


class ConsoleListener:
    """Listener that prints navigation and playback updates to the console."""

    def navigation_updated(self, state: NavigationState) -> None:
        print(f"Menu: {state.name} (level {state.layer}), line {state.current_line}/{state.max_line}")
        for i, item in enumerate(state.items, start=1):
            if item:
                print(f"  {i}: {item}")

    def navigation_error(self, message: str) -> None:
        print(f"Navigation error: {message}")

    def play_info_updated(self, state: PlayInfoState) -> None:
        mode = getattr(state.playback_mode, "value", state.playback_mode)
        print(f"Playback: {mode}")
        print(f"  Station: {state.station}")
        print(f"  Artist: {state.artist}")
        print(f"  Album: {state.album}")
        print(f"  Song: {state.song}")

    def play_control_updated(self, state: PlayControlState) -> None:
        print(f"Preset: {state.preset_channel}")


def positive_float(value: str) -> float:
    """Parse a positive number of seconds."""
    try:
        result = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} must be a number")
    if result <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than zero")
    return result


def positive_int(value: str) -> int:
    """Parse a 1-based page or preset number."""
    try:
        result = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} must be a whole number")
    if result < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be 1 or greater")
    return result


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyyamahaav",
        description="Navigate menus and control playback of Yamaha A/V receivers"
    )
    parser.add_argument("--host", required=True, help="Hostname or IP address of the receiver")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="HTTP port of the receiver")
    parser.add_argument("--input", default="NET_RADIO", help="Input to control, like NET_RADIO or USB")
    parser.add_argument(
        "--timeout", type=positive_float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="cmd", required=True, help="Command to execute")

    subparsers.add_parser("menu", help="Show the current menu page")
    for name in CURSOR_COMMANDS:
        subparsers.add_parser(name, help=f"Move the menu cursor: {name}")
    subparsers.add_parser("root", help="Return to the root menu")

    page_parser = subparsers.add_parser("page", help="Jump to a menu page")
    page_parser.add_argument("number", type=positive_int, help="1-based page number")

    item_parser = subparsers.add_parser("item", help="Select an item of the current menu")
    item_parser.add_argument("name", help="Label of the item")

    path_parser = subparsers.add_parser("path", help="Select an item by its menu path")
    path_parser.add_argument("path", help="Slash separated labels, like Bookmarks/Favorites/Radio 1")

    for name in PLAYBACK_COMMANDS:
        subparsers.add_parser(name, help=f"Playback command: {name}")

    preset_parser = subparsers.add_parser("preset", help="Select a preset")
    preset_parser.add_argument("number", type=positive_int, help="Preset position")

    subparsers.add_parser("info", help="Show the playback information")
    subparsers.add_parser("preset-info", help="Show the selected preset")

    return parser


def do_navigation(navigator: MenuNavigator, args: argparse.Namespace) -> int:
    """Run a menu navigation command."""
    if args.cmd == "menu":
        navigator.update_navigation_state()
    elif args.cmd in CURSOR_COMMANDS:
        actions = {
            "up": navigator.go_up,
            "down": navigator.go_down,
            "left": navigator.go_left,
            "right": navigator.go_right,
            "back": navigator.go_back,
            "select": navigator.select_current_item,
        }
        actions[args.cmd]()
    elif args.cmd == "root":
        if not navigator.go_to_root():
            return 1
    elif args.cmd == "page":
        navigator.go_to_page(args.number)
    elif args.cmd == "item":
        navigator.update_navigation_state()
        if not navigator.select_item(args.name):
            print(f"Item '{args.name}' not found in menu {navigator.menu_name}")
            return 1
    elif args.cmd == "path":
        if not navigator.select_item_full_path(args.path):
            return 1
    return 0


def do_playback(controller: PlaybackController, args: argparse.Namespace) -> int:
    """Run a playback command."""
    actions = {
        "play": controller.play,
        "stop": controller.stop,
        "pause": controller.pause,
        "next": controller.next_track,
        "previous": controller.previous_track,
        "skip-fwd": controller.skip_ff,
        "skip-rev": controller.skip_rev,
        "info": controller.update_playback_information,
        "preset-info": controller.update_preset_information,
    }
    if args.cmd == "preset":
        controller.select_item_by_preset_number(args.number)
    else:
        actions[args.cmd]()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = YamahaConfig(host=args.host, port=args.port, timeout=args.timeout)
    listener = ConsoleListener()

    try:
        with HttpXmlTransport.from_config(config) as transport:
            if args.cmd in PLAYBACK_COMMANDS or args.cmd in ("preset", "info", "preset-info"):
                controller = PlaybackController(args.input, transport, listener)
                return do_playback(controller, args)
            navigator = MenuNavigator(args.input, transport, listener, config)
            return do_navigation(navigator, args)
    except YamahaError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        _LOGGER.exception("Unexpected error")
        print(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
