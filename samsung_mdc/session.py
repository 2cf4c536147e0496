"""
MDC session.

This module turns a raw byte stream into typed command/response
exchanges with Samsung displays. A session owns its transport and allows
one exchange in flight at a time.

Exchange sequence:
    encode -> write -> read/parse until a packet, an error or the timeout
    -> correlate -> ACK returns the packet, NAK raises DeviceRejected

Failure handling:
    - Malformed or mismatched replies are retried (drain, then resend)
    - Timeouts are raised at once and leave the line marked stale
    - A stale line is drained before the next write
    - Transport failures, and lines that never go quiet, poison the session

Example:
    >>> from samsung_mdc import MDCSession
    >>>
    >>> with MDCSession.open_tcp("10.0.0.5") as session:
    ...     display = session.display(1)
    ...     display.power_on()
    ...     print(display.get_volume())
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import TYPE_CHECKING

from samsung_mdc.config import SessionConfig
from samsung_mdc.exceptions import (
    ChecksumError,
    CorrelationError,
    DeviceRejected,
    FramingError,
    ProtocolError,
    SessionPoisonedError,
    TimeoutError,
    TransportError,
    TruncatedPacketError,
)
from samsung_mdc.protocol.constants import BROADCAST_ID, ProtocolConstants
from samsung_mdc.protocol.frame_reader import FrameReader, ResponsePacket
from samsung_mdc.protocol.frames import encode_command
from samsung_mdc.transport.serial_port import TcpTransport

if TYPE_CHECKING:
    from types import TracebackType

    from samsung_mdc.commands.registry import CommandRegistry
    from samsung_mdc.display import DisplayHandle
    from samsung_mdc.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (FramingError, ChecksumError, CorrelationError)


class MDCSession:
    """
    Request/response session over one byte stream.

    The session is synchronous: every call blocks until the reply is
    decoded, an error is raised or the timeout elapses. It may be shared
    between threads; exchanges are serialized by an internal lock.

    Attributes:
        transport: The underlying transport layer.
        config: Timing and retry configuration.
        is_poisoned: True once the session can no longer be used.
        requests_sent: Number of packets written so far.

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0")
        >>> with MDCSession(transport) as session:
        ...     response = session.exchange(0, CommandCode.POWER)
        ...     print(response.values)
    """

    def __init__(
        self,
        transport: AbstractTransport,
        config: SessionConfig | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            transport: Transport layer for communication. May be opened
                later, e.g. by entering the session as a context manager.
            config: Timing and retry configuration (defaults if None).
            registry: Command registry handed to display handles. None
                uses the built-in catalog.
        """
        self._transport = transport
        self._config = config or SessionConfig()
        self._registry = registry
        self._frame_reader = FrameReader()
        self._lock = threading.Lock()
        self._request_ids = itertools.count(1)
        self._requests_sent = 0
        self._rx_buffer = bytearray()
        self._stale = False
        self._poisoned = False

    @classmethod
    def open_tcp(
        cls,
        host: str,
        port: int = ProtocolConstants.DEFAULT_TCP_PORT,
        config: SessionConfig | None = None,
    ) -> MDCSession:
        """
        Open a TCP connection to a display and wrap it in a session.

        Args:
            host: Display IP address or host name.
            port: MDC TCP port (default: 1515).
            config: Session configuration.

        Raises:
            TransportError: If the connection cannot be established.
        """
        config = config or SessionConfig()
        transport = TcpTransport(host, port, default_timeout=config.timeout)
        transport.open()
        return cls(transport, config)

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    @property
    def config(self) -> SessionConfig:
        """Get the session configuration."""
        return self._config

    @property
    def is_poisoned(self) -> bool:
        """Check if the session has been poisoned."""
        return self._poisoned

    @property
    def requests_sent(self) -> int:
        """Get the number of packets written."""
        return self._requests_sent

    def display(self, display_id: int) -> DisplayHandle:
        """
        Get a handle addressing one display.

        Args:
            display_id: Display address, 0-254 (254 is broadcast).
        """
        from samsung_mdc.display import DisplayHandle

        return DisplayHandle(self, display_id, registry=self._registry)

    def all_displays(self) -> DisplayHandle:
        """Get a handle addressing every display on the chain."""
        return self.display(BROADCAST_ID)

    def exchange(
        self,
        display_id: int,
        command: int,
        data: bytes = b"",
        *,
        subcommand: int | None = None,
    ) -> ResponsePacket | None:
        """
        Send one command and wait for its reply.

        Args:
            display_id: Target display, 0-254. 254 broadcasts and returns
                without waiting for a reply.
            command: Opcode byte.
            data: Payload bytes.
            subcommand: Optional subcommand, sent as the first payload byte.

        Returns:
            The acknowledged ResponsePacket, or None for a broadcast.

        Raises:
            ConstraintError: If the packet cannot be built. Nothing is sent.
            DeviceRejected: If the display answered with a NAK.
            TimeoutError: If no complete reply arrived in time.
            FramingError, ChecksumError, CorrelationError: If every
                attempt produced a bad reply.
            TransportError: If the stream failed.
            SessionPoisonedError: If the session is no longer usable.
        """
        packet = encode_command(command, display_id, data, subcommand=subcommand)

        with self._lock:
            self._ensure_usable()
            request_id = next(self._request_ids)
            attempts = self._config.retries + 1
            last_error: ProtocolError | None = None

            for attempt in range(attempts):
                if attempt > 0:
                    logger.warning(
                        "Retrying request #%d (attempt %d/%d) after %s",
                        request_id,
                        attempt + 1,
                        attempts,
                        type(last_error).__name__,
                    )

                self._prepare_line()
                self._write(packet, request_id)

                if display_id == BROADCAST_ID:
                    logger.debug("Request #%d broadcast, not waiting for a reply", request_id)
                    return None

                try:
                    response = self._receive(
                        request_id,
                        display_id=display_id,
                        command=command,
                        subcommand=subcommand,
                        timeout=self._config.timeout,
                    )
                except RETRYABLE_ERRORS as e:
                    self._stale = True
                    last_error = e
                    logger.warning("Request #%d got a bad reply: %s", request_id, e)
                    continue

                if not response.ack:
                    logger.debug(
                        "Request #%d rejected by display 0x%02X",
                        request_id,
                        response.display_id,
                    )
                    raise DeviceRejected(
                        response.display_id,
                        response.command,
                        response.error_code,
                        response=response,
                    )

                return response

            logger.error("Request #%d failed after %d attempts", request_id, attempts)
            raise last_error or ProtocolError("No valid response")

    def send_packet(
        self,
        display_id: int,
        command: int,
        data: bytes = b"",
        *,
        subcommand: int | None = None,
    ) -> None:
        """
        Write one command packet without waiting for a reply.

        Pair with receive_packet() for manual exchanges.

        Raises:
            ConstraintError: If the packet cannot be built.
            TransportError: If the stream failed.
            SessionPoisonedError: If the session is no longer usable.
        """
        packet = encode_command(command, display_id, data, subcommand=subcommand)

        with self._lock:
            self._ensure_usable()
            self._prepare_line()
            self._write(packet, next(self._request_ids))

    def receive_packet(
        self,
        *,
        display_id: int | None = None,
        command: int | None = None,
        subcommand: int | None = None,
        timeout: float | None = None,
    ) -> ResponsePacket:
        """
        Read one response packet.

        Unlike exchange(), a NAK is returned as a packet with ack=False
        and bad replies are not retried. When one read delivers several
        packets, the extra ones are returned by later calls.

        Args:
            display_id: Expected display id, None to accept any.
            command: Expected echoed command, None to accept any.
            subcommand: Expected echoed subcommand, None to accept any.
            timeout: Seconds to wait; None uses the configured timeout.

        Raises:
            TimeoutError: If no complete packet arrived in time.
            FramingError, ChecksumError, CorrelationError: Bad packet.
            TransportError: If the stream failed.
            SessionPoisonedError: If the session is no longer usable.
        """
        with self._lock:
            self._ensure_usable()
            try:
                return self._receive(
                    self._requests_sent,
                    display_id=display_id,
                    command=command,
                    subcommand=subcommand,
                    timeout=timeout if timeout is not None else self._config.timeout,
                )
            except RETRYABLE_ERRORS:
                self._stale = True
                raise

    def close(self) -> None:
        """Close the underlying transport."""
        if self._transport.is_open:
            self._transport.close()
            logger.info("Session on %s closed", self._transport.port_name)

    def _ensure_usable(self) -> None:
        if self._poisoned:
            raise SessionPoisonedError(
                f"Session on {self._transport.port_name} is poisoned; open a new one"
            )
        if not self._transport.is_open:
            raise TransportError(f"Transport {self._transport.port_name} is not open")

    def _poison(self, reason: str) -> None:
        self._poisoned = True
        logger.error("Session on %s poisoned: %s", self._transport.port_name, reason)

    def _prepare_line(self) -> None:
        if self._stale:
            self._drain()

    def _drain(self) -> None:
        """
        Discard stale input until the line stays quiet.

        Raises:
            SessionPoisonedError: If the line is still busy after
                drain_limit seconds.
        """
        quiet = self._config.drain_quiet
        deadline = time.monotonic() + self._config.drain_limit
        discarded = len(self._rx_buffer)

        self._rx_buffer.clear()
        self._transport.discard_buffers()
        while True:
            chunk = self._read(ProtocolConstants.READ_CHUNK_SIZE, quiet)
            if not chunk:
                break
            discarded += len(chunk)
            if time.monotonic() >= deadline:
                self._poison(f"line not quiet after {self._config.drain_limit:.1f}s")
                raise SessionPoisonedError(
                    f"Could not drain {self._transport.port_name}: "
                    f"{discarded} byte(s) kept arriving"
                )

        self._stale = False
        if discarded:
            logger.warning("Drained %d stale byte(s)", discarded)
        else:
            logger.debug("Line drained")

    def _write(self, packet: bytes, request_id: int) -> None:
        logger.debug("TX #%d: %s", request_id, packet.hex(" "))
        try:
            self._transport.write(packet)
        except TransportError as e:
            self._poison(f"write failed: {e}")
            raise
        self._requests_sent += 1

    def _read(self, size: int, timeout: float) -> bytes:
        try:
            return self._transport.read(size, timeout)
        except TransportError as e:
            self._poison(f"read failed: {e}")
            raise

    def _receive(
        self,
        request_id: int,
        *,
        display_id: int | None,
        command: int | None,
        subcommand: int | None,
        timeout: float,
    ) -> ResponsePacket:
        """
        Accumulate bytes until one response packet parses.

        Bytes past the end of the packet stay in the receive buffer for
        the next receive_packet() call. A bad packet clears the buffer.

        Raises:
            TimeoutError: If the deadline passes first.
            FramingError, ChecksumError, CorrelationError: Bad packet.
        """
        deadline = time.monotonic() + timeout
        buffer = self._rx_buffer

        while True:
            if buffer:
                try:
                    response = self._frame_reader.parse(
                        buffer,
                        display_id=display_id,
                        command=command,
                        subcommand=subcommand,
                    )
                except TruncatedPacketError:
                    pass
                except RETRYABLE_ERRORS:
                    buffer.clear()
                    raise
                else:
                    del buffer[:response.bytes_consumed]
                    logger.debug("RX #%d: %s", request_id, response.raw.hex(" "))
                    if buffer:
                        # Kept for receive_packet; exchange drains before its next write
                        self._stale = True
                        logger.debug(
                            "Request #%d: %d byte(s) buffered after response",
                            request_id,
                            len(buffer),
                        )
                    return response

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._stale = True
                logger.warning(
                    "Request #%d timed out after %.1fs (%d byte(s) received)",
                    request_id,
                    timeout,
                    len(buffer),
                )
                raise TimeoutError(
                    "No complete response",
                    timeout_seconds=timeout,
                    display_id=display_id,
                    command=command,
                    raw=bytes(buffer) or None,
                )

            chunk = self._read(ProtocolConstants.READ_CHUNK_SIZE, remaining)
            buffer.extend(chunk)

    def __enter__(self) -> MDCSession:
        """Context manager entry - opens the transport if needed."""
        if not self._transport.is_open:
            self._transport.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - closes the transport."""
        self.close()

    def __repr__(self) -> str:
        state = "poisoned" if self._poisoned else ("stale" if self._stale else "ready")
        return (
            f"MDCSession({self._transport.port_name!r}, {state}, "
            f"requests_sent={self._requests_sent})"
        )
