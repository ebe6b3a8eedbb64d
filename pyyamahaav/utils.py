"""
Utility functions for working with Yamaha device communication.

This module contains utility functions for formatting requests,
parsing responses, and general XML handling for Yamaha A/V receivers.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from .constants import ROOT_TAG
from .exceptions import InvalidResponseError

_LOGGER = logging.getLogger(__name__)


def wrap_input(input_id: str, message: str) -> str:
    """
    Wrap a message into the tags of an input.

    Example with input_id="NET_RADIO": <NET_RADIO>message</NET_RADIO>

    Args:
        input_id: Input identifier like USB or NET_RADIO
        message: Inner XML message

    Returns:
        str: The input scoped message
    """
    return "<{0}>{1}</{0}>".format(input_id, message)


def format_request(body: str, cmd: str = "GET") -> bytes:
    """
    Format a request as the device expects it.

    Args:
        body: Input scoped XML message
        cmd: "GET" for queries, "PUT" for commands

    Returns:
        bytes: UTF-8 encoded request document
    """
    request = '<{0} cmd="{1}">{2}</{0}>'.format(ROOT_TAG, cmd, body)
    _LOGGER.debug("Formatted request: %s", request)
    return request.encode("utf-8")


def parse_response(data: str) -> ET.Element:
    """
    Parse XML response data.

    Args:
        data: Raw XML response text

    Returns:
        ET.Element: Root element of the response

    Raises:
        InvalidResponseError: If the response is empty or not well formed
    """
    if not data or not data.strip():
        raise InvalidResponseError("Empty response, root element missing")
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        _LOGGER.error("Failed to parse response: %s", e)
        raise InvalidResponseError("Failed to parse response: {}".format(e)) from e


def find_node(tree: Optional[ET.Element], path: str) -> Optional[ET.Element]:
    """
    Find the first descendant matching a slash separated tag path.

    The first tag may be at any depth below ``tree``, the following tags are
    direct children. Repeated siblings can be addressed with a ``[n]`` suffix.

    Args:
        tree: Element to search in, may be None
        path: Path like "List_Info/Cursor_Position/Max_Line"

    Returns:
        Optional[ET.Element]: The matching element or None
    """
    if tree is None:
        return None
    return tree.find(".//" + path)


def node_text(node: Optional[ET.Element], default: str = "") -> str:
    """Text content of a node, ``default`` if the node is missing."""
    if node is None:
        return default
    return node.text or ""
