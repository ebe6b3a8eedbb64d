"""
Menu navigation for Yamaha receivers.

USB, NET_RADIO, iPod and other inputs share one way of navigating through
their menus. A menu is organised hierarchically and its entries are divided
into pages of 8 lines. The <List_Control> and <List_Info> nodes are used.

In contrast to the playback control, a navigator keeps state: it caches the
last <List_Info> answer of the device.

Example:

    navigator = MenuNavigator("NET_RADIO", transport, listener)
    navigator.select_item_full_path("Bookmarks/My Favorites/Radio 1")
"""

import logging
import math
import threading
import time
import weakref
from fractions import Fraction
from typing import Optional

from .constants import (
    CURSOR_BACK,
    CURSOR_DOWN,
    CURSOR_HOME,
    CURSOR_HOME_ALTERNATE,
    CURSOR_LEFT,
    CURSOR_RIGHT,
    CURSOR_SELECT,
    CURSOR_UP,
    GET_PARAM,
    MAX_PER_PAGE,
    MENU_MAX_WAITING_TIME,
    MENU_RETRY_DELAY,
    MENU_STATUS_READY,
    NAVIGATION_INPUTS,
)
from .exceptions import ConnectionLostError, InvalidResponseError, MenuNotReadyError
from .utils import node_text, wrap_input
from .yamaha_types import NavigationListener, NavigationState, XmlTransport, YamahaConfig

_LOGGER = logging.getLogger(__name__)


class MenuNavigator:
    """
    Navigates the menu of a single input.

    All operations block until the device answered. Operations that change the
    menu position refresh the cached state afterwards and publish a copy of it
    to the listener.

    Attributes:
        input_id (str): Input identifier like USB or NET_RADIO
        listener (Optional[NavigationListener]): Receiver of state updates and navigation errors
    """

    supported_inputs = NAVIGATION_INPUTS

    def __init__(
        self,
        input_id: str,
        transport: XmlTransport,
        listener: Optional[NavigationListener] = None,
        config: Optional[YamahaConfig] = None
    ) -> None:
        """
        Initialize the navigator.

        The transport is referenced weakly, its owner controls its lifetime.

        Args:
            input_id: Input identifier like USB or NET_RADIO
            transport: Transport used to talk to the receiver
            listener: Receiver of state updates and navigation errors
            config: Optional configuration with polling and paging settings
        """
        self.input_id = input_id
        self.listener = listener
        self._transport_ref = weakref.ref(transport)
        self._cache = NavigationState()
        self._lock = threading.RLock()
        self._use_alternative_home_cmd = False

        if config is not None:
            self._retry_delay = config.menu_retry_delay
            self._max_wait = config.menu_max_wait
            self._legacy_page_jump = config.legacy_page_jump
        else:
            self._retry_delay = MENU_RETRY_DELAY
            self._max_wait = MENU_MAX_WAITING_TIME
            self._legacy_page_jump = False
        if self._retry_delay <= 0 or self._max_wait <= 0:
            raise ValueError("Menu retry delay and maximum waiting time must be greater than zero")

    def _com(self) -> XmlTransport:
        transport = self._transport_ref()
        if transport is None:
            raise ConnectionLostError("Transport of input {} is gone".format(self.input_id))
        return transport

    def _wrap(self, message: str) -> str:
        return wrap_input(self.input_id, message)

    def _send_list_control(self, message: str) -> None:
        self._com().send_only(self._wrap("<List_Control>{}</List_Control>".format(message)))

    def _cursor(self, command: str) -> NavigationState:
        with self._lock:
            self._send_list_control("<Cursor>{}</Cursor>".format(command))
            return self.update_navigation_state()

    def _report_error(self, message: str) -> None:
        _LOGGER.warning("Navigation error on %s: %s", self.input_id, message)
        if self.listener is not None:
            self.listener.navigation_error(message)

    def go_back(self) -> NavigationState:
        return self._cursor(CURSOR_BACK)

    def go_up(self) -> NavigationState:
        return self._cursor(CURSOR_UP)

    def go_down(self) -> NavigationState:
        return self._cursor(CURSOR_DOWN)

    def go_left(self) -> NavigationState:
        """Navigate left. Not available on all inputs."""
        return self._cursor(CURSOR_LEFT)

    def go_right(self) -> NavigationState:
        """Navigate right. Not available on all inputs."""
        return self._cursor(CURSOR_RIGHT)

    def select_current_item(self) -> NavigationState:
        return self._cursor(CURSOR_SELECT)

    def go_to_root(self) -> bool:
        """
        Navigate to the root menu.

        Firmware revisions disagree on the wording of this command. The primary
        wording is tried first; if the menu is not at the root afterwards, the
        alternate wording is used from then on.

        Returns:
            bool: True if the root menu was reached
        """
        with self._lock:
            if not self._use_alternative_home_cmd:
                self._cursor(CURSOR_HOME)
                if self._cache.layer <= 0:
                    return True
                _LOGGER.warning(
                    "Going back to root failed for %s, trying a different command", self.input_id
                )
                self._use_alternative_home_cmd = True

            self._cursor(CURSOR_HOME_ALTERNATE)
            if self._cache.layer > 0:
                self._report_error("Both going back to root commands failed for your receiver!")
                return False
            return True

    @property
    def uses_alternative_home_command(self) -> bool:
        return self._use_alternative_home_cmd

    def go_to_page(self, page: int) -> NavigationState:
        """
        Jump to the first line of a page.

        Args:
            page: 1-based page number

        Returns:
            NavigationState: The refreshed state

        Raises:
            ValueError: If the page number is lower than 1
        """
        if page < 1:
            raise ValueError("Page number must be 1 or greater, got {}".format(page))
        line = (page - 1) * MAX_PER_PAGE + 1
        with self._lock:
            self._send_list_control("<Jump_Line>{}</Jump_Line>".format(line))
            return self.update_navigation_state()

    def _find_item_on_current_page(self, name: str) -> int:
        for i, item in enumerate(self._cache.items):
            if item == name:
                return i + 1
        return -1

    def select_item(self, name: str) -> bool:
        """
        Search the menu for an item and select it.

        The search starts at the current page, continues to the last page and
        wraps around to the first. Operates on the cached state, call
        update_navigation_state() first for up-to-date information.

        Args:
            name: Exact label of the item

        Returns:
            bool: True if the item was found and selected
        """
        with self._lock:
            page_count = math.ceil(self._cache.max_line / MAX_PER_PAGE)
            current_page = max(self._cache.current_line - 1, 0) // MAX_PER_PAGE
            loaded_page = current_page

            for page_index in range(page_count):
                real_page = (current_page + page_index) % page_count
                if real_page != loaded_page:
                    if self._legacy_page_jump:
                        # Legacy behaviour: jump to the loop offset, not the wrapped page
                        self.go_to_page(page_index)
                    else:
                        self.go_to_page(real_page + 1)
                    loaded_page = real_page

                index = self._find_item_on_current_page(name)
                if index > 0:
                    _LOGGER.debug("Found '%s' on page %d line %d", name, real_page + 1, index)
                    self._send_list_control("<Direct_Sel>Line_{}</Direct_Sel>".format(index))
                    self.update_navigation_state()
                    return True

            return False

    def select_item_full_path(self, full_path: str) -> bool:
        """
        Select an item by its menu path, like "Bookmarks/Favorites/Radio 1".

        The device does not report the full path of the current menu, so the
        target menu is guessed from the last two path elements and the number
        of elements. If the current menu matches, only the last element is
        selected; otherwise navigation starts over from the root menu.
        Missing items are reported to the listener.

        Args:
            full_path: Slash separated item labels

        Returns:
            bool: True if every element of the path was selected
        """
        with self._lock:
            self.update_navigation_state()

            path = full_path.strip("/").split("/")

            if len(path) < 2:
                if not self.select_item(path[0]):
                    self._report_error(
                        "Item '{}' doesn't exist in menu {}".format(path[0], self._cache.name)
                    )
                    return False
                return True

            select_menu_name = path[-2]
            select_item_name = path[-1]
            select_menu_level = len(path) - 1

            same_menu = self._cache.name == select_menu_name and self._cache.layer == select_menu_level
            if same_menu:
                if not self.select_item(select_item_name):
                    self._report_missing(select_item_name)
                    return False
                return True

            if self._cache.layer > 0:
                if not self.go_to_root():
                    return False

            for element in path:
                if not self.select_item(element):
                    self._report_missing(element)
                    return False
            return True

    def _report_missing(self, item: str) -> None:
        self._report_error(
            "Item '{}' doesn't exist in menu {} at level {}. Available options are: {}".format(
                item, self._cache.name, self._cache.layer, self._cache.all_item_labels()
            )
        )

    def update_navigation_state(self) -> NavigationState:
        """
        Refresh the cached menu state.

        The menu status is polled until the device reports it ready, for up to
        the maximum waiting time.

        Returns:
            NavigationState: A copy of the refreshed state

        Raises:
            ConnectionLostError: If the transport is gone
            YamahaNetworkError: If the device cannot be reached
            InvalidResponseError: If the response lacks a required node
            MenuNotReadyError: If the menu is not ready within the maximum waiting time
        """
        with self._lock:
            com = self._com()
            # Exact sums, three waits of 0.1s must not exceed 0.3s
            retry_delay = Fraction(str(self._retry_delay))
            max_wait = Fraction(str(self._max_wait))
            attempts = 0

            while True:
                response = com.send(self._wrap("<List_Info>{}</List_Info>".format(GET_PARAM)))
                current_menu = com.lookup(com.parse(response), "List_Info")
                if current_menu is None:
                    raise InvalidResponseError("<List_Info>GetParam response invalid: {}".format(response))

                menu_status = com.lookup(current_menu, "Menu_Status")
                if menu_status is None or node_text(menu_status) == MENU_STATUS_READY:
                    break

                attempts += 1
                if attempts * retry_delay > max_wait:
                    raise MenuNotReadyError(
                        "Menu still not ready after {:.1f}s".format(self._max_wait)
                    )
                _LOGGER.debug("Menu of %s is %s, retrying", self.input_id, node_text(menu_status))
                time.sleep(self._retry_delay)

            name = node_text(self._required(com, current_menu, "Menu_Name"))
            layer = self._required_int(com, current_menu, "Menu_Layer") - 1
            current_line = self._required_int(com, current_menu, "Cursor_Position/Current_Line")
            max_line = self._required_int(com, current_menu, "Cursor_Position/Max_Line")

            if max_line < 0:
                max_line = 0
            if current_line < 0 or current_line > max_line:
                _LOGGER.debug("Current line %d out of range, max line %d", current_line, max_line)
                current_line = min(max(current_line, 0), max_line)

            self._cache.name = name
            self._cache.layer = layer
            self._cache.current_line = current_line
            self._cache.max_line = max_line
            self._cache.clear_items()
            for i in range(1, MAX_PER_PAGE + 1):
                node = com.lookup(current_menu, "Current_List/Line_{}/Txt".format(i))
                self._cache.items[i - 1] = node_text(node) or None

            _LOGGER.debug(
                "Menu of %s: %s, layer %d, line %d/%d",
                self.input_id, name, layer, current_line, max_line
            )

            state = self._cache.copy()
            if self.listener is not None:
                self.listener.navigation_updated(self._cache.copy())
            return state

    def _required(self, com: XmlTransport, parent, path: str):
        node = com.lookup(parent, path)
        if node is None:
            raise InvalidResponseError("{} child in parent node missing!".format(path))
        return node

    def _required_int(self, com: XmlTransport, parent, path: str) -> int:
        text = node_text(self._required(com, parent, path))
        try:
            return int(text)
        except ValueError as e:
            raise InvalidResponseError("{} is not a number: {!r}".format(path, text)) from e

    def invalidate(self) -> None:
        """Reset the cached state to sentinel values."""
        with self._lock:
            self._cache.invalidate()

    @property
    def state(self) -> NavigationState:
        """A copy of the cached state."""
        return self._cache.copy()

    @property
    def menu_name(self) -> Optional[str]:
        return self._cache.name

    @property
    def level(self) -> int:
        """Menu level, -1 if unknown, 0 is the root menu."""
        return self._cache.layer

    @property
    def current_item_number(self) -> int:
        return self._cache.current_line

    @property
    def number_of_items(self) -> int:
        return self._cache.max_line

    @property
    def current_item_name(self) -> str:
        return self._cache.current_item_name
