"""
MDC response packet parsing.

This module turns a byte buffer into a structured response. Parsing is a
pure function over an in-memory buffer: the caller owns the reads and
keeps calling the reader with a growing buffer until it returns a packet
or raises something other than TruncatedPacketError.

Validation order:

1. Header byte must be 0xAA                      -> FramingError
2. Second byte must be the response marker 0xFF  -> FramingError
3. Declared length must be fully present         -> TruncatedPacketError
4. Data must start with 'A' or 'N' + command     -> FramingError
5. Checksum over [marker .. end of data]         -> ChecksumError
6. Display id / echoed command / subcommand      -> CorrelationError

Correlation is checked last so that a corrupted display id byte is
reported as a checksum failure rather than as a stray reply.

Only 0xFF is accepted as the response marker. Some protocol tables list
0xAB as an alternative, but displays answer with 0xFF, so 0xAB is
treated as a framing error like any other value.
"""

from __future__ import annotations

from dataclasses import dataclass

from samsung_mdc.exceptions import (
    ChecksumError,
    CorrelationError,
    FramingError,
    TruncatedPacketError,
)
from samsung_mdc.protocol.checksums import calculate_checksum
from samsung_mdc.protocol.constants import (
    ACKNOWLEDGMENT_MARKERS,
    CommandCode,
    ProtocolConstants,
)


@dataclass(frozen=True)
class ResponsePacket:
    """
    A successfully parsed response packet.

    Attributes:
        display_id: Display that answered.
        command: Command code echoed by the display.
        ack: True for a positive acknowledgement, False for a NAK.
        data: Complete payload, starting with the ACK/NAK marker.
        raw: Complete raw packet bytes as received.
        bytes_consumed: Number of bytes consumed from the input buffer.
    """

    display_id: int
    command: int
    ack: bool
    data: bytes
    raw: bytes
    bytes_consumed: int

    @property
    def values(self) -> bytes:
        """Reply values following the ACK/NAK marker and echoed command."""
        return self.data[ProtocolConstants.MIN_RESPONSE_DATA:]

    @property
    def error_code(self) -> int | None:
        """Error code carried by a NAK, None for an ACK."""
        if self.ack or not self.values:
            return None
        return self.values[0]

    @property
    def command_code(self) -> CommandCode | int:
        """Get command as CommandCode enum if recognized, else raw int."""
        try:
            return CommandCode(self.command)
        except ValueError:
            return self.command

    def __repr__(self) -> str:
        code = self.command_code
        name = code.name if isinstance(code, CommandCode) else f"0x{self.command:02X}"
        status = "ACK" if self.ack else "NAK"
        return (
            f"ResponsePacket({status} {name}, display_id=0x{self.display_id:02X}, "
            f"values={self.values.hex(' ') if self.values else '(empty)'})"
        )


class FrameReader:
    """
    MDC response parser.

    The parser is stateless and can be reused for multiple parse
    operations and across sessions.

    Example:
        >>> reader = FrameReader()
        >>> packet = reader.parse(bytes.fromhex("aa ff 00 03 41 11 01 55"))
        >>> packet.values
        b'\\x01'
    """

    def parse(
        self,
        buffer: bytes | bytearray | memoryview,
        *,
        display_id: int | None = None,
        command: int | None = None,
        subcommand: int | None = None,
    ) -> ResponsePacket:
        """
        Parse one response packet from the start of the buffer.

        Bytes past the end of the packet are left alone; bytes_consumed
        tells the caller where the packet ended.

        Args:
            buffer: Bytes received so far.
            display_id: Expected display id, None to skip the check.
            command: Expected echoed command, None to skip the check.
            subcommand: Expected echoed subcommand (ACK only), None to skip.

        Returns:
            The parsed ResponsePacket.

        Raises:
            TruncatedPacketError: More bytes are needed.
            FramingError: The bytes do not follow the response grammar.
            ChecksumError: The checksum byte does not match.
            CorrelationError: The packet answers a different request.
        """
        available = len(buffer)
        header_size = ProtocolConstants.HEADER_SIZE

        if available < 1:
            raise TruncatedPacketError("Buffer is empty", needed=1, available=0)

        if buffer[0] != ProtocolConstants.HEADER:
            raise FramingError(
                f"Invalid header byte 0x{buffer[0]:02X}",
                raw=bytes(buffer[:header_size]),
            )

        if available < header_size:
            raise TruncatedPacketError(
                f"Incomplete header (need {header_size}, have {available})",
                needed=header_size,
                available=available,
                raw=bytes(buffer),
            )

        if buffer[1] != ProtocolConstants.RESPONSE:
            raise FramingError(
                f"Invalid response marker 0x{buffer[1]:02X}",
                display_id=buffer[2],
                raw=bytes(buffer[:header_size]),
            )

        packet_display_id = buffer[2]
        data_length = buffer[3]
        expected_size = header_size + data_length + ProtocolConstants.CHECKSUM_SIZE

        if available < expected_size:
            raise TruncatedPacketError(
                f"Incomplete packet (need {expected_size}, have {available})",
                needed=expected_size,
                available=available,
                raw=bytes(buffer),
            )

        raw = bytes(buffer[:expected_size])
        data = raw[header_size:header_size + data_length]

        if data_length < ProtocolConstants.MIN_RESPONSE_DATA:
            raise FramingError(
                f"Response data too short ({data_length} bytes)",
                display_id=packet_display_id,
                raw=raw,
            )

        marker, packet_command = data[0], data[1]
        if marker not in ACKNOWLEDGMENT_MARKERS:
            raise FramingError(
                f"Invalid ACK/NAK marker 0x{marker:02X}",
                display_id=packet_display_id,
                command=packet_command,
                raw=raw,
            )

        received = raw[-1]
        calculated = calculate_checksum(raw[1:-1])
        if calculated != received:
            raise ChecksumError(
                expected=calculated,
                received=received,
                display_id=packet_display_id,
                command=packet_command,
                raw=raw,
            )

        if display_id is not None and packet_display_id != display_id:
            raise CorrelationError(
                "Response from unexpected display",
                expected=display_id,
                received=packet_display_id,
                display_id=packet_display_id,
                command=packet_command,
                raw=raw,
            )

        if command is not None and packet_command != command:
            raise CorrelationError(
                "Response echoes unexpected command",
                expected=command,
                received=packet_command,
                display_id=packet_display_id,
                command=packet_command,
                raw=raw,
            )

        ack = marker == ProtocolConstants.ACK
        values = data[ProtocolConstants.MIN_RESPONSE_DATA:]
        if ack and subcommand is not None and (not values or values[0] != subcommand):
            raise CorrelationError(
                "Response echoes unexpected subcommand",
                expected=subcommand,
                received=values[0] if values else None,
                display_id=packet_display_id,
                command=packet_command,
                raw=raw,
            )

        return ResponsePacket(
            display_id=packet_display_id,
            command=packet_command,
            ack=ack,
            data=data,
            raw=raw,
            bytes_consumed=expected_size,
        )


DEFAULT_FRAME_READER = FrameReader()
"""Shared stateless reader instance."""


def decode_response(
    buffer: bytes | bytearray | memoryview,
    *,
    display_id: int | None = None,
    command: int | None = None,
    subcommand: int | None = None,
) -> ResponsePacket:
    """
    Convenience function to parse a response using the default reader.

    See FrameReader.parse for arguments and errors.
    """
    return DEFAULT_FRAME_READER.parse(
        buffer,
        display_id=display_id,
        command=command,
        subcommand=subcommand,
    )
