"""
Playback control for Yamaha receivers.

USB, NET_RADIO, iPod and other inputs share one way of controlling the
playback. The <Play_Info> and <Play_Control> nodes are used.

No state is kept in here. Every query produces a fresh PlayInfoState or
PlayControlState which is handed to the listener.
"""

import logging
import threading
import weakref
from typing import Optional

from .constants import (
    GET_PARAM,
    PLAYBACK_NEXT,
    PLAYBACK_PAUSE,
    PLAYBACK_PLAY,
    PLAYBACK_PREVIOUS,
    PLAYBACK_SKIP_FWD,
    PLAYBACK_SKIP_REV,
    PLAYBACK_STOP,
    PLAY_CONTROL_INPUTS,
    PRESET_NOT_REPORTED,
    TUNER_INPUT,
)
from .exceptions import ConnectionLostError, InvalidResponseError
from .utils import node_text, wrap_input
from .yamaha_types import PlayControlState, PlayInfoState, PlayListener, PlaybackMode, XmlTransport

_LOGGER = logging.getLogger(__name__)


class PlaybackController:
    """
    Controls the playback and preset selection of a single input.

    Attributes:
        input_id (str): Input identifier like TUNER or NET_RADIO
        listener (Optional[PlayListener]): Receiver of playback and preset updates
    """

    supported_inputs = PLAY_CONTROL_INPUTS

    def __init__(
        self,
        input_id: str,
        transport: XmlTransport,
        listener: Optional[PlayListener] = None
    ) -> None:
        """
        Initialize the controller.

        Args:
            input_id: Input identifier like TUNER or NET_RADIO
            transport: Transport used to talk to the receiver, referenced weakly
            listener: Receiver of playback and preset updates
        """
        self.input_id = input_id
        self.listener = listener
        self._transport_ref = weakref.ref(transport)
        self._lock = threading.RLock()

    def _com(self) -> XmlTransport:
        transport = self._transport_ref()
        if transport is None:
            raise ConnectionLostError("Transport of input {} is gone".format(self.input_id))
        return transport

    def _wrap(self, message: str) -> str:
        return wrap_input(self.input_id, message)

    def _query(self, com: XmlTransport, tag: str):
        response = com.send(self._wrap("<{0}>{1}</{0}>".format(tag, GET_PARAM)))
        tree = com.parse(response)
        if com.lookup(tree, tag) is None:
            raise InvalidResponseError("<{}>{} response invalid: {}".format(tag, GET_PARAM, response))
        return tree

    def update_playback_information(self) -> Optional[PlayInfoState]:
        """
        Query the playback information and publish it to the listener.

        The tuner reports its station in Radio_Text_A, all other inputs in Station.

        Returns:
            Optional[PlayInfoState]: The published state, None if no listener is registered
        """
        with self._lock:
            com = self._com()
            if self.listener is None:
                return None

            tree = self._query(com, "Play_Info")

            msg = PlayInfoState()
            msg.playback_mode = PlaybackMode.from_device(
                node_text(com.lookup(tree, "Play_Info/Playback_Info"))
            )

            meta_info = com.lookup(tree, "Play_Info/Meta_Info")
            station_field = "Radio_Text_A" if self.input_id == TUNER_INPUT else "Station"
            msg.station = node_text(com.lookup(meta_info, station_field))
            msg.artist = node_text(com.lookup(meta_info, "Artist"))
            msg.album = node_text(com.lookup(meta_info, "Album"))
            msg.song = node_text(com.lookup(meta_info, "Song"))

            _LOGGER.debug("Playback of %s: %s", self.input_id, msg)
            self.listener.play_info_updated(msg)
            return msg

    def update_preset_information(self) -> Optional[PlayControlState]:
        """
        Query the selected preset and publish it to the listener.

        Returns:
            Optional[PlayControlState]: The published state, None if no listener is registered
        """
        with self._lock:
            com = self._com()
            if self.listener is None:
                return None

            tree = self._query(com, "Play_Control")

            msg = PlayControlState()
            node = com.lookup(tree, "Play_Control/Preset/Preset_Sel")
            if node is None:
                msg.preset_channel = PRESET_NOT_REPORTED
            else:
                text = node_text(node)
                try:
                    msg.preset_channel = int(text)
                except ValueError as e:
                    raise InvalidResponseError("Preset_Sel is not a number: {!r}".format(text)) from e

            _LOGGER.debug("Preset of %s: %d", self.input_id, msg.preset_channel)
            self.listener.play_control_updated(msg)
            return msg

    def select_item_by_preset_number(self, preset_channel: int) -> None:
        """
        Select a preset channel.

        Args:
            preset_channel: The preset position, usually [1,40]
        """
        with self._lock:
            self._com().send_only(self._wrap(
                "<Play_Control><Preset><Preset_Sel>{}</Preset_Sel></Preset></Play_Control>".format(preset_channel)
            ))
            self.update_preset_information()

    def _playback(self, command: str) -> None:
        self._com().send_only(self._wrap(
            "<Play_Control><Playback>{}</Playback></Play_Control>".format(command)
        ))

    def play(self) -> None:
        """
        Start the playback of the content selected by the navigation, or
        stopped by stop().
        """
        with self._lock:
            self._playback(PLAYBACK_PLAY)
            self.update_playback_information()

    def stop(self) -> None:
        with self._lock:
            self._playback(PLAYBACK_STOP)
            self.update_playback_information()

    def pause(self) -> None:
        """Pause the playback. Not available for streaming content like NET_RADIO."""
        with self._lock:
            self._playback(PLAYBACK_PAUSE)
            self.update_playback_information()

    def skip_ff(self) -> None:
        """Skip forward. The playback information is not refreshed."""
        with self._lock:
            self._playback(PLAYBACK_SKIP_FWD)

    def skip_rev(self) -> None:
        """Skip reverse. The playback information is not refreshed."""
        with self._lock:
            self._playback(PLAYBACK_SKIP_REV)

    def next_track(self) -> None:
        with self._lock:
            self._playback(PLAYBACK_NEXT)
            self.update_playback_information()

    def previous_track(self) -> None:
        with self._lock:
            self._playback(PLAYBACK_PREVIOUS)
            self.update_playback_information()
