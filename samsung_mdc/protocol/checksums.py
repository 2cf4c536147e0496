"""
8-bit additive checksum calculation and validation.

The MDC protocol uses a simple additive checksum:
- Sum every byte from the command code through the end of the payload
  (command, display id, length and data)
- Keep only the lower 8 bits (modulo 256)
- Send it as one raw byte

The header byte (0xAA) is never part of the sum, and the checksum is the
last byte of the packet. A single flipped bit always changes the sum;
two corruptions can cancel out, which the protocol accepts.
"""

from __future__ import annotations


def calculate_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate 8-bit additive checksum over the specified data.

    Algorithm: Sum all bytes, keep only lower 8 bits.

    Args:
        data: Data to checksum (excludes header and checksum bytes).

    Returns:
        8-bit checksum value (0-255).

    Example:
        >>> hex(calculate_checksum(b"\\x11\\x00\\x01\\x00"))
        '0x12'
    """
    # The & operation is applied once at the end rather than per-byte
    return sum(data) & 0xFF


def validate_checksum(data: bytes | bytearray | memoryview, expected: int) -> bool:
    """
    Check that data sums to the given checksum.

    Args:
        data: The checksummed span of a packet.
        expected: Checksum byte received with the packet.

    Returns:
        True if checksum is valid, False otherwise.
    """
    return calculate_checksum(data) == expected


def append_checksum(data: bytes | bytearray) -> bytes:
    """
    Calculate checksum and append it as a single byte.

    Args:
        data: Data to checksum.

    Returns:
        Original data with the checksum byte appended.

    Example:
        >>> append_checksum(b"\\x4A\\x00\\x01\\x00").hex()
        '4a0001004b'
    """
    return bytes(data) + bytes([calculate_checksum(data)])
