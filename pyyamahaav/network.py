"""
Network communication utilities for the Yamaha integration.

This module provides the HTTP transport used to exchange XML messages with
Yamaha A/V receivers.
"""

import logging
import threading
import xml.etree.ElementTree as ET
from typing import Optional

import requests

from .constants import CONTROL_PATH, DEFAULT_PORT, DEFAULT_TIMEOUT
from .exceptions import InvalidCommandResponseError, YamahaNetworkError
from .utils import find_node, format_request, parse_response
from .yamaha_types import YamahaConfig

_LOGGER = logging.getLogger(__name__)

HEADERS = {"Content-Type": "text/xml", "Accept": "*/*"}


class HttpXmlTransport:
    """
    HTTP transport for Yamaha receivers.

    Every message is POSTed to the control endpoint of the receiver, wrapped in
    a ``<YAMAHA_AV cmd="GET|PUT">`` document. A device accepts one request at a
    time, so requests are serialized with a lock.

    Attributes:
        host (str): Hostname or IP address of the receiver
        port (int): HTTP port of the receiver
        timeout (float): Timeout of a single HTTP request in seconds
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ) -> None:
        """
        Initialize the transport.

        Args:
            host: Hostname or IP address of the receiver
            port: HTTP port of the receiver
            timeout: Timeout of a single HTTP request in seconds
            session: Optional requests session to use instead of a private one
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._lock = threading.Lock()

        _LOGGER.debug("Initialized transport for %s:%d, timeout: %.1f", host, port, timeout)

    @classmethod
    def from_config(cls, config: YamahaConfig) -> "HttpXmlTransport":
        """
        Create a transport from a configuration object.

        Args:
            config: Configuration object with device settings

        Returns:
            HttpXmlTransport: A transport for the configured receiver
        """
        return cls(config.host, port=config.port, timeout=config.timeout)

    @property
    def url(self) -> str:
        return "http://{}:{}{}".format(self.host, self.port, CONTROL_PATH)

    def _post(self, body: str, cmd: str) -> str:
        """
        POST a message and return the response text.

        Args:
            body: Input scoped XML message
            cmd: "GET" or "PUT"

        Returns:
            str: Response text

        Raises:
            YamahaNetworkError: If the receiver cannot be reached or answers with an HTTP error
        """
        data = format_request(body, cmd)
        with self._lock:
            try:
                response = self._session.post(self.url, data=data, headers=HEADERS, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                _LOGGER.error("Failed to send request to %s: %s", self.url, e)
                raise YamahaNetworkError("Request to {} failed: {}".format(self.url, e)) from e

        _LOGGER.debug("Received response: %s", response.text)
        return response.text

    def _check_return_code(self, tree: ET.Element) -> None:
        code = tree.get("RC")
        if code is not None and code != "0":
            raise InvalidCommandResponseError("Device rejected the request with return code {}".format(code))

    def send(self, body: str) -> str:
        """
        Send a query to the receiver.

        Args:
            body: Input scoped XML message, like <USB><List_Info>GetParam</List_Info></USB>

        Returns:
            str: Response text

        Raises:
            YamahaNetworkError: If the request fails
            InvalidCommandResponseError: If the device rejects the query
        """
        text = self._post(body, "GET")
        self._check_return_code(self.parse(text))
        return text

    def send_only(self, body: str) -> None:
        """
        Send a command to the receiver.

        Args:
            body: Input scoped XML message

        Raises:
            YamahaNetworkError: If the request fails
            InvalidCommandResponseError: If the device rejects the command
        """
        text = self._post(body, "PUT")
        if text.strip():
            self._check_return_code(self.parse(text))

    def parse(self, response: str) -> ET.Element:
        return parse_response(response)

    def lookup(self, tree: Optional[ET.Element], path: str) -> Optional[ET.Element]:
        return find_node(tree, path)

    def close(self) -> None:
        """Close the underlying HTTP session if this transport created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "HttpXmlTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
