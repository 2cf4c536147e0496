"""
Protocol layer for MDC communication.

This module contains the low-level protocol handling:
- Command codes and protocol constants
- Checksum calculation and validation
- Command and response packet encoding
- Response parsing and correlation checks
"""

from samsung_mdc.protocol.checksums import append_checksum, calculate_checksum, validate_checksum
from samsung_mdc.protocol.constants import (
    ACKNOWLEDGMENT_MARKERS,
    BROADCAST_ID,
    CommandCode,
    ProtocolConstants,
)
from samsung_mdc.protocol.frame_reader import (
    DEFAULT_FRAME_READER,
    FrameReader,
    ResponsePacket,
    decode_response,
)
from samsung_mdc.protocol.frames import CommandPacket, encode_command, encode_response

__all__ = [
    # Constants
    "CommandCode",
    "ProtocolConstants",
    "BROADCAST_ID",
    "ACKNOWLEDGMENT_MARKERS",
    # Checksums
    "calculate_checksum",
    "validate_checksum",
    "append_checksum",
    # Encoding
    "CommandPacket",
    "encode_command",
    "encode_response",
    # Parsing
    "FrameReader",
    "ResponsePacket",
    "decode_response",
    "DEFAULT_FRAME_READER",
]
