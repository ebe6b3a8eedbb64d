"""Pytest configuration and common fixtures for pyyamahaav tests."""

import re
from xml.sax.saxutils import escape

import pytest

from pyyamahaav.utils import find_node, parse_response


class FakeTransport:
    """Transport double that records every request and answers with a handler or a script."""

    def __init__(self, responses=None, handler=None, put_handler=None):
        self.sent = []
        self.responses = list(responses or [])
        self.handler = handler
        self.put_handler = put_handler

    def send(self, body):
        self.sent.append(("GET", body))
        if self.handler is not None:
            return self.handler(body)
        return self.responses.pop(0)

    def send_only(self, body):
        self.sent.append(("PUT", body))
        if self.put_handler is not None:
            self.put_handler(body)

    def parse(self, response):
        return parse_response(response)

    def lookup(self, tree, path):
        return find_node(tree, path)

    def bodies(self, kind=None):
        return [body for k, body in self.sent if kind is None or k == kind]


class FakeMenuDevice:
    """
    Simulates the menu of one input of a receiver.

    ``menus`` maps a menu name to its item labels. Selecting an item whose
    label is a menu name enters that menu; any other selection is recorded
    in ``selected``.
    """

    def __init__(self, input_id, menus, root, home_commands=("Back to Home",), not_ready=0):
        self.input_id = input_id
        self.menus = menus
        self.root = root
        self.stack = [root]
        self.current_line = 1 if menus[root] else 0
        self.home_commands = set(home_commands)
        self.not_ready = not_ready
        self.selected = []
        self.transport = FakeTransport(handler=self.get, put_handler=self.put)

    @property
    def items(self):
        return self.menus[self.stack[-1]]

    def enter(self, menu):
        self.stack.append(menu)
        self.current_line = 1 if self.menus[menu] else 0

    def get(self, body):
        assert "<List_Info>GetParam</List_Info>" in body
        status = "Ready"
        if self.not_ready > 0:
            self.not_ready -= 1
            status = "Busy"
        page_start = max(self.current_line - 1, 0) // 8 * 8
        lines = []
        for i in range(8):
            index = page_start + i
            text = escape(self.items[index]) if index < len(self.items) else ""
            lines.append("<Line_{0}><Txt>{1}</Txt><Attribute>Item</Attribute></Line_{0}>".format(i + 1, text))
        return (
            '<YAMAHA_AV rsp="GET" RC="0"><{input}><List_Info>'
            "<Menu_Status>{status}</Menu_Status>"
            "<Menu_Layer>{layer}</Menu_Layer>"
            "<Menu_Name>{name}</Menu_Name>"
            "<Current_List>{lines}</Current_List>"
            "<Cursor_Position><Current_Line>{line}</Current_Line><Max_Line>{max}</Max_Line></Cursor_Position>"
            "</List_Info></{input}></YAMAHA_AV>"
        ).format(
            input=self.input_id,
            status=status,
            layer=len(self.stack),
            name=escape(self.stack[-1]),
            lines="".join(lines),
            line=self.current_line,
            max=len(self.items),
        )

    def put(self, body):
        match = re.search(r"<Jump_Line>(-?\d+)</Jump_Line>", body)
        if match:
            line = int(match.group(1))
            self.current_line = min(max(line, 1), len(self.items))
            return
        match = re.search(r"<Direct_Sel>Line_(\d)</Direct_Sel>", body)
        if match:
            page_start = (self.current_line - 1) // 8 * 8
            label = self.items[page_start + int(match.group(1)) - 1]
            if label in self.menus:
                self.enter(label)
            else:
                self.selected.append(label)
            return
        match = re.search(r"<Cursor>([^<]+)</Cursor>", body)
        if match:
            command = match.group(1)
            if command in self.home_commands:
                self.stack = [self.root]
                self.current_line = 1
            elif command == "Down":
                self.current_line = min(self.current_line + 1, len(self.items))
            elif command == "Up":
                self.current_line = max(self.current_line - 1, 1)
            elif command == "Back" and len(self.stack) > 1:
                self.stack.pop()
                self.current_line = 1
            elif command == "Select":
                label = self.items[self.current_line - 1]
                if label in self.menus:
                    self.enter(label)
                else:
                    self.selected.append(label)


class RecordingListener:
    """Listener that keeps everything it is handed."""

    def __init__(self):
        self.navigation_states = []
        self.navigation_errors = []
        self.play_infos = []
        self.play_controls = []

    def navigation_updated(self, state):
        self.navigation_states.append(state)

    def navigation_error(self, message):
        self.navigation_errors.append(message)

    def play_info_updated(self, state):
        self.play_infos.append(state)

    def play_control_updated(self, state):
        self.play_controls.append(state)


@pytest.fixture
def listener():
    """Create a recording listener."""
    return RecordingListener()


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace the poll delay of the navigator, returns the list of requested delays."""
    delays = []
    monkeypatch.setattr("pyyamahaav.navigation.time.sleep", delays.append)
    return delays


@pytest.fixture
def radio_menus():
    """A NET_RADIO menu tree with a paged station list."""
    stations = ["Station {}".format(i) for i in range(1, 11)]
    return {
        "NET RADIO": ["Bookmarks", "Locations", "Genres"],
        "Bookmarks": ["My Favorites"],
        "My Favorites": stations,
        "Locations": ["Europe", "America"],
        "Genres": [],
    }
