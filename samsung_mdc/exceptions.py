"""
Exception hierarchy for samsung_mdc.

All exceptions inherit from MDCError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Malformed packets (framing, checksum, correlation) are distinct from
   device refusals (NAK) and from dead streams (transport errors)
2. Device-reported refusals carry the error code returned in the NAK
3. Every error carries the display id, command and raw bytes when known
4. All exceptions provide meaningful error messages
"""

from __future__ import annotations


def _format_context(
    display_id: int | None,
    command: int | None,
    raw: bytes | None,
) -> list[str]:
    parts = []
    if display_id is not None:
        parts.append(f"display=0x{display_id:02X}")
    if command is not None:
        parts.append(f"command=0x{command:02X}")
    if raw:
        # Truncate raw data for display
        shown = raw[:32].hex(" ")
        parts.append(f"raw={shown}..." if len(raw) > 32 else f"raw={shown}")
    return parts


class MDCError(Exception):
    """
    Base exception for all samsung_mdc errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all MDC errors with a single except clause.
    """

    pass


class ConstraintError(MDCError, ValueError):
    """
    A packet could not be built because a field is out of range.

    Raised before any byte is written, e.g. for a payload longer than
    255 bytes or a display id above 254.
    """

    pass


class ProtocolError(MDCError):
    """
    Protocol-level error.

    Raised when a received byte sequence violates the MDC packet grammar
    or does not answer the outstanding request.
    """

    def __init__(
        self,
        message: str,
        *,
        display_id: int | None = None,
        command: int | None = None,
        raw: bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.display_id = display_id
        self.command = command
        self.raw = raw

    def __str__(self) -> str:
        parts = [super().__str__()]
        parts.extend(_format_context(self.display_id, self.command, self.raw))
        return " ".join(parts)


class FramingError(ProtocolError):
    """
    Packet structure error.

    Raised when the header byte, the response marker, the ACK/NAK marker
    or the declared length does not match the grammar.
    """

    pass


class TruncatedPacketError(ProtocolError):
    """
    The buffer holds the start of a packet but not all of it.

    This is a "read more bytes" signal used between the frame reader and
    the session; it never reaches callers of the session.
    """

    def __init__(
        self,
        message: str = "Incomplete packet",
        *,
        needed: int | None = None,
        available: int | None = None,
        raw: bytes | None = None,
    ) -> None:
        super().__init__(message, raw=raw)
        self.needed = needed
        self.available = available


class ChecksumError(ProtocolError):
    """
    Checksum validation failure.

    Raised when a received packet's checksum doesn't match the calculated value.
    This typically indicates data corruption on the line.
    """

    def __init__(
        self,
        message: str = "Checksum validation failed",
        *,
        expected: int | None = None,
        received: int | None = None,
        display_id: int | None = None,
        command: int | None = None,
        raw: bytes | None = None,
    ) -> None:
        super().__init__(message, display_id=display_id, command=command, raw=raw)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class CorrelationError(ProtocolError):
    """
    A well-formed response that does not answer the outstanding request.

    The display id, echoed command or echoed subcommand differs from what
    was sent. Usually a late reply from an earlier, abandoned exchange.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int | None = None,
        received: int | None = None,
        display_id: int | None = None,
        command: int | None = None,
        raw: bytes | None = None,
    ) -> None:
        super().__init__(message, display_id=display_id, command=command, raw=raw)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class DeviceRejected(MDCError):
    """
    Negative acknowledgement from the display.

    The display understood the packet and refused the command. The
    error_code attribute holds the code the display returned, if any.
    """

    def __init__(
        self,
        display_id: int,
        command: int,
        error_code: int | None = None,
        *,
        response: object | None = None,
    ) -> None:
        self.display_id = display_id
        self.command = command
        self.error_code = error_code
        self.response = response
        message = f"Display 0x{display_id:02X} rejected command 0x{command:02X}"
        if error_code is not None:
            message += f" (error code 0x{error_code:02X})"
        super().__init__(message)


class TimeoutError(MDCError):  # noqa: A001 - intentionally shadows builtin
    """
    Communication timeout.

    Raised when a complete response is not received within the configured
    window. The display may be off the bus or busy.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
        display_id: int | None = None,
        command: int | None = None,
        raw: bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds
        self.display_id = display_id
        self.command = command
        self.raw = raw

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.timeout_seconds is not None:
            parts[0] = f"{parts[0]} (after {self.timeout_seconds:.1f}s)"
        parts.extend(_format_context(self.display_id, self.command, self.raw))
        return " ".join(parts)


class TransportError(MDCError):
    """
    Transport-level error.

    Raised for low-level stream issues:
    - Serial port or socket errors
    - I/O errors
    - Connection closed by the peer
    """

    pass


class SessionPoisonedError(TransportError):
    """
    The session can no longer be used.

    Raised when the stream died, or when stale bytes from an abandoned
    exchange could not be drained, so a fresh reply could not be told
    apart from a late one.
    """

    pass
