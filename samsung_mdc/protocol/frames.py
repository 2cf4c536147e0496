"""
MDC packet encoding.

Command packet::

    [0xAA][CMD][DISPLAY_ID][LEN][DATA(0..LEN)][CHECKSUM]

Response packet::

    [0xAA][0xFF][DISPLAY_ID][LEN]['A'|'N'][CMD][VALUES(0..LEN-2)][CHECKSUM]

The checksum covers every byte between the header and the checksum
itself. Commands with a subcommand carry it as the first data byte, and
the display echoes it as the first value byte of its reply.
"""

from __future__ import annotations

from dataclasses import dataclass

from samsung_mdc.exceptions import ConstraintError
from samsung_mdc.protocol.checksums import calculate_checksum
from samsung_mdc.protocol.constants import ProtocolConstants


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ConstraintError(f"{name} must be 0-255, got {value}")


def _check_display_id(display_id: int) -> None:
    if not 0 <= display_id <= ProtocolConstants.MAX_DISPLAY_ID:
        raise ConstraintError(
            f"Display id must be 0-{ProtocolConstants.MAX_DISPLAY_ID}, got {display_id}"
        )


def _check_payload(data: bytes) -> None:
    if len(data) > ProtocolConstants.MAX_PAYLOAD:
        raise ConstraintError(
            f"Payload must be at most {ProtocolConstants.MAX_PAYLOAD} bytes, got {len(data)}"
        )


@dataclass(frozen=True)
class CommandPacket:
    """
    An outgoing command, before framing.

    Attributes:
        command: Opcode byte.
        display_id: Target display (0xFE for broadcast).
        data: Payload bytes, subcommand already folded in.
    """

    command: int
    display_id: int
    data: bytes = b""

    def __post_init__(self) -> None:
        _check_byte("Command", self.command)
        _check_display_id(self.display_id)
        _check_payload(self.data)

    @property
    def checksum(self) -> int:
        """Checksum over command, display id, length and data."""
        return calculate_checksum(self._body())

    def _body(self) -> bytes:
        return bytes([self.command, self.display_id, len(self.data)]) + self.data

    def to_bytes(self) -> bytes:
        """Serialize to the exact wire byte sequence."""
        body = self._body()
        return bytes([ProtocolConstants.HEADER]) + body + bytes([calculate_checksum(body)])

    def __repr__(self) -> str:
        return (
            f"CommandPacket(command=0x{self.command:02X}, "
            f"display_id=0x{self.display_id:02X}, "
            f"data={self.data.hex(' ') if self.data else '(empty)'})"
        )


def encode_command(
    command: int,
    display_id: int,
    data: bytes = b"",
    *,
    subcommand: int | None = None,
) -> bytes:
    """
    Build a command packet.

    Args:
        command: Opcode byte.
        display_id: Target display, 0-254 (254 is broadcast).
        data: Payload bytes.
        subcommand: Optional second discriminator, sent as the first
            payload byte.

    Returns:
        Complete packet bytes ready to be written.

    Raises:
        ConstraintError: If a field is out of range or the payload
            (including the subcommand) is longer than 255 bytes.

    Example:
        >>> encode_command(0x11, 0, b"\\x00").hex(" ")
        'aa 11 00 01 00 12'
    """
    if subcommand is not None:
        _check_byte("Subcommand", subcommand)
        data = bytes([subcommand]) + bytes(data)
    return CommandPacket(command=command, display_id=display_id, data=bytes(data)).to_bytes()


def encode_response(
    display_id: int,
    command: int,
    values: bytes = b"",
    *,
    ack: bool = True,
) -> bytes:
    """
    Build a response packet as a display would send it.

    Used by simulators and tests; the session never sends responses.

    Args:
        display_id: Display answering.
        command: Command being answered.
        values: Reply values following the echoed command.
        ack: True for 'A', False for 'N'.

    Returns:
        Complete response packet bytes.

    Raises:
        ConstraintError: If a field is out of range or the values are
            longer than 253 bytes.
    """
    _check_byte("Command", command)
    _check_byte("Display id", display_id)
    marker = ProtocolConstants.ACK if ack else ProtocolConstants.NAK
    data = bytes([marker, command]) + bytes(values)
    _check_payload(data)
    body = bytes([ProtocolConstants.RESPONSE, display_id, len(data)]) + data
    return bytes([ProtocolConstants.HEADER]) + body + bytes([calculate_checksum(body)])
