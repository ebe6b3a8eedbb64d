"""Test cases for pyyamahaav.cli module."""

import argparse
from unittest.mock import MagicMock, patch

import pytest

from pyyamahaav.cli import (
    ConsoleListener,
    build_parser,
    do_navigation,
    do_playback,
    main,
    positive_float,
    positive_int,
)
from pyyamahaav.exceptions import YamahaNetworkError
from pyyamahaav.yamaha_types import NavigationState, PlayInfoState, PlaybackMode


class TestPositiveFloat:
    """Test cases for positive_float function."""

    def test_valid(self):
        assert positive_float("2.5") == 2.5

    @pytest.mark.parametrize("value", ["0", "-1", "not_a_number", ""])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            positive_float(value)


class TestPositiveInt:
    """Test cases for positive_int function."""

    def test_valid(self):
        assert positive_int("3") == 3

    @pytest.mark.parametrize("value", ["0", "-1", "1.5", "two"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int(value)


class TestBuildParser:
    """Test cases for build_parser function."""

    @pytest.fixture
    def parser(self):
        """Create a parser instance."""
        return build_parser()

    def test_parser_creation(self, parser):
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "pyyamahaav"

    def test_parser_requires_host(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["menu"])

    def test_defaults(self, parser):
        args = parser.parse_args(["--host", "192.168.1.50", "menu"])
        assert args.port == 80
        assert args.input == "NET_RADIO"
        assert args.timeout == 3.0
        assert args.cmd == "menu"

    def test_path_command(self, parser):
        args = parser.parse_args(["--host", "r", "--input", "USB", "path", "Music/Artist/Album"])
        assert args.input == "USB"
        assert args.cmd == "path"
        assert args.path == "Music/Artist/Album"

    def test_page_requires_number(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["--host", "r", "page", "two"])

    @pytest.mark.parametrize("cmd", ["page", "preset"])
    def test_number_must_be_positive(self, parser, cmd):
        with pytest.raises(SystemExit):
            parser.parse_args(["--host", "r", cmd, "0"])


class TestDoNavigation:
    """Test cases for do_navigation function."""

    @pytest.fixture
    def navigator(self):
        return MagicMock()

    @pytest.mark.parametrize("cmd,method", [
        ("up", "go_up"),
        ("down", "go_down"),
        ("left", "go_left"),
        ("right", "go_right"),
        ("back", "go_back"),
        ("select", "select_current_item"),
        ("menu", "update_navigation_state"),
    ])
    def test_simple_commands(self, navigator, cmd, method):
        assert do_navigation(navigator, argparse.Namespace(cmd=cmd)) == 0
        getattr(navigator, method).assert_called_once_with()

    def test_page(self, navigator):
        assert do_navigation(navigator, argparse.Namespace(cmd="page", number=2)) == 0
        navigator.go_to_page.assert_called_once_with(2)

    def test_root_failure(self, navigator):
        navigator.go_to_root.return_value = False
        assert do_navigation(navigator, argparse.Namespace(cmd="root")) == 1

    def test_item_refreshes_first(self, navigator):
        navigator.select_item.return_value = True
        assert do_navigation(navigator, argparse.Namespace(cmd="item", name="Jazz")) == 0
        navigator.update_navigation_state.assert_called_once_with()
        navigator.select_item.assert_called_once_with("Jazz")

    def test_item_not_found(self, navigator, capsys):
        navigator.select_item.return_value = False
        navigator.menu_name = "Genres"
        assert do_navigation(navigator, argparse.Namespace(cmd="item", name="Jazz")) == 1
        assert "Item 'Jazz' not found in menu Genres" in capsys.readouterr().out

    def test_path(self, navigator):
        navigator.select_item_full_path.return_value = False
        assert do_navigation(navigator, argparse.Namespace(cmd="path", path="A/B")) == 1
        navigator.select_item_full_path.assert_called_once_with("A/B")


class TestDoPlayback:
    """Test cases for do_playback function."""

    @pytest.mark.parametrize("cmd,method", [
        ("play", "play"),
        ("stop", "stop"),
        ("pause", "pause"),
        ("next", "next_track"),
        ("previous", "previous_track"),
        ("skip-fwd", "skip_ff"),
        ("skip-rev", "skip_rev"),
        ("info", "update_playback_information"),
        ("preset-info", "update_preset_information"),
    ])
    def test_commands(self, cmd, method):
        controller = MagicMock()
        assert do_playback(controller, argparse.Namespace(cmd=cmd)) == 0
        getattr(controller, method).assert_called_once_with()

    def test_preset(self):
        controller = MagicMock()
        assert do_playback(controller, argparse.Namespace(cmd="preset", number=4)) == 0
        controller.select_item_by_preset_number.assert_called_once_with(4)


class TestConsoleListener:
    """Test cases for ConsoleListener."""

    def test_navigation_updated(self, capsys):
        state = NavigationState(name="Bookmarks", layer=1, current_line=1, max_line=2)
        state.items[:2] = ["Favorites", "Recent"]
        ConsoleListener().navigation_updated(state)
        out = capsys.readouterr().out
        assert "Menu: Bookmarks (level 1), line 1/2" in out
        assert "  2: Recent" in out

    def test_play_info_updated(self, capsys):
        ConsoleListener().play_info_updated(PlayInfoState(station="Radio", playback_mode=PlaybackMode.PAUSE))
        out = capsys.readouterr().out
        assert "Playback: Pause" in out
        assert "Station: Radio" in out


class TestMain:
    """Test cases for main function."""

    @patch("pyyamahaav.cli.HttpXmlTransport")
    @patch("pyyamahaav.cli.PlaybackController")
    def test_playback_command(self, mock_controller, mock_transport):
        assert main(["--host", "192.168.1.50", "--input", "USB", "play"]) == 0
        transport = mock_transport.from_config.return_value.__enter__.return_value
        mock_controller.assert_called_once()
        assert mock_controller.call_args.args[:2] == ("USB", transport)
        mock_controller.return_value.play.assert_called_once_with()

    @patch("pyyamahaav.cli.HttpXmlTransport")
    @patch("pyyamahaav.cli.MenuNavigator")
    def test_navigation_command(self, mock_navigator, mock_transport):
        mock_navigator.return_value.select_item_full_path.return_value = True
        assert main(["--host", "192.168.1.50", "path", "Bookmarks/Favorites"]) == 0
        mock_navigator.return_value.select_item_full_path.assert_called_once_with("Bookmarks/Favorites")

    @patch("pyyamahaav.cli.HttpXmlTransport")
    @patch("pyyamahaav.cli.MenuNavigator")
    def test_error_exit_code(self, mock_navigator, mock_transport, capsys):
        mock_navigator.return_value.go_up.side_effect = YamahaNetworkError("unreachable")
        assert main(["--host", "192.168.1.50", "up"]) == 1
        assert "Error: unreachable" in capsys.readouterr().out
