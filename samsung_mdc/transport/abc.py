"""
Abstract transport interface for MDC protocol communication.

This module defines the abstract base class for all transport implementations.
Transports handle the low-level byte stream to a display chain over a
serial port, a TCP socket or a test double.

The transport layer is responsible for:
- Opening/closing the physical connection
- Reading and writing raw bytes
- Blocking reads bounded by a timeout
- Discarding buffered input

Implementations:
- SerialTransport: pyserial URL (serial device, socket://, loop://)
- TcpTransport: SerialTransport preset for socket://host:1515
- MockTransport: For testing without hardware
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for MDC protocol transports.

    Transports provide blocking read/write operations. All transport
    implementations must inherit from this class and implement all
    abstract methods.

    Transports support the context manager protocol for safe resource
    management:

        with TcpTransport("10.0.0.5") as transport:
            transport.write(packet)
            response = transport.read(1024, timeout=3.0)

    Attributes:
        is_open: Whether the transport connection is currently open.
        port_name: Identifier for the transport (e.g., serial port name).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """
        Get the transport identifier.

        Returns:
            Port name or identifier string (e.g., "/dev/ttyUSB0", "socket://10.0.0.5:1515").
        """
        ...

    @abstractmethod
    def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Close the transport connection.

        Releases the physical connection and any associated resources.
        Safe to call multiple times (idempotent).
        """
        ...

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write data to the transport.

        The data is a complete packet and is written in full before
        this method returns.

        Args:
            data: Bytes to send.

        Raises:
            TransportError: If the transport is not open or write fails.
        """
        ...

    @abstractmethod
    def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read up to size bytes from the transport.

        Blocks until at least one byte is available or the timeout
        expires, then returns whatever is available (at most size bytes).

        Args:
            size: Maximum number of bytes to return.
            timeout: Read timeout in seconds. None uses transport default.

        Returns:
            Between 1 and size bytes, or b"" if the timeout expired with
            nothing received.

        Raises:
            TransportError: If the transport is not open, the peer closed
                the connection, or the read fails.
        """
        ...

    @abstractmethod
    def discard_buffers(self) -> None:
        """
        Discard any pending data in the input buffer.

        Useful for resynchronizing after errors.
        """
        ...

    def __enter__(self) -> AbstractTransport:
        """Context manager entry - opens the transport."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - closes the transport."""
        self.close()
