"""
Exceptions for the Yamaha integration.

This module defines custom exceptions used throughout the Yamaha integration.
"""


class YamahaError(Exception):
    """Base exception for all Yamaha-related errors."""
    pass


class YamahaNetworkError(YamahaError):
    """Exception raised for network-related errors."""
    pass


class ConnectionLostError(YamahaNetworkError):
    """Exception raised when the transport of a control object is gone."""
    pass


class InvalidResponseError(YamahaError):
    """Exception raised when a response cannot be parsed or lacks a required node."""
    pass


class InvalidCommandResponseError(InvalidResponseError):
    """Exception raised when the device rejects a command with a non-zero return code."""
    pass


class MenuNotReadyError(YamahaError, TimeoutError):
    """Exception raised when a menu does not report ready within the maximum waiting time."""
    pass
