"""
MDC protocol command codes and constants.

Opcodes and marker bytes follow the Samsung MDC protocol as spoken by
large-format displays on RS-232C chains and on TCP port 1515.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class CommandCode(IntEnum):
    """
    MDC command codes.

    Most commands share one opcode for "get" and "set": a packet with an
    empty payload reads the value, a packet with a payload writes it.
    Only the commands in the built-in catalog are listed; any other
    opcode byte can still be sent through the session.
    """

    STATUS = 0x00
    """Combined status: power, volume, mute, input, aspect, timers."""

    SERIAL_NUMBER = 0x0B
    """Serial number (ASCII)."""

    SOFTWARE_VERSION = 0x0E
    """Firmware version (ASCII)."""

    POWER = 0x11
    """Power control."""

    VOLUME = 0x12
    """Volume level (0-100)."""

    MUTE = 0x13
    """Audio mute."""

    INPUT_SOURCE = 0x14
    """Input source selection."""

    MODEL_NAME = 0x8A
    """Model name (ASCII)."""

    PANEL = 0xF9
    """Panel (backlight) on/off."""


class ProtocolConstants:
    """
    MDC protocol constants.

    Contains framing bytes, addressing limits, timing defaults and
    transport defaults used throughout the implementation.
    """

    # ===== Framing =====

    HEADER: Final[int] = 0xAA
    """First byte of every command and response packet."""

    RESPONSE: Final[int] = 0xFF
    """Second byte of a response packet (in place of the command code)."""

    ACK: Final[int] = 0x41
    """ASCII 'A': first response data byte of a positive acknowledgement."""

    NAK: Final[int] = 0x4E
    """ASCII 'N': first response data byte of a negative acknowledgement."""

    HEADER_SIZE: Final[int] = 4
    """Header, command, display id and length bytes."""

    CHECKSUM_SIZE: Final[int] = 1

    MAX_PAYLOAD: Final[int] = 255
    """The length field is a single byte."""

    MIN_RESPONSE_DATA: Final[int] = 2
    """ACK/NAK marker plus the echoed command."""

    # ===== Addressing =====

    BROADCAST_ID: Final[int] = 0xFE
    """Address every display on the chain; displays do not reply."""

    MAX_DISPLAY_ID: Final[int] = 0xFE

    # ===== Timing Constants (in seconds) =====

    DEFAULT_RECEIVE_TIMEOUT: Final[float] = 3.0
    """Default response timeout in seconds."""

    MAX_RETRIES: Final[int] = 2
    """Extra attempts after a corrupted or mismatched response."""

    DRAIN_QUIET_PERIOD: Final[float] = 0.1
    """Silence required on the line before a drain is considered complete."""

    DRAIN_LIMIT: Final[float] = 2.0
    """Longest time spent draining before the session gives up."""

    # ===== Buffer Sizes =====

    READ_CHUNK_SIZE: Final[int] = 1024
    """Maximum number of bytes requested from the transport per read."""

    # ===== Transport Defaults =====

    DEFAULT_TCP_PORT: Final[int] = 1515
    """MDC over Ethernet listens on this port."""

    DEFAULT_BAUD_RATE: Final[int] = 9600
    """Default baud rate for RS-232C daisy chains."""


BROADCAST_ID: Final[int] = ProtocolConstants.BROADCAST_ID
"""Module-level alias for the broadcast display id."""

ACKNOWLEDGMENT_MARKERS: Final[frozenset[int]] = frozenset({
    ProtocolConstants.ACK,
    ProtocolConstants.NAK,
})
"""Valid first data bytes of a response."""
