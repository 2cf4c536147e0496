"""
Blocking byte-stream transport using pyserial.

pyserial opens more than local serial ports: serial_for_url() also
understands ``socket://host:port`` for raw TCP and ``loop://`` for an
in-process loopback. MDC displays accept the same byte stream on
RS-232C and on TCP port 1515, so one transport covers both.

Serial Configuration (MDC RS-232C):
- Baud rate: 9600 (default)
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None

Example:
    >>> with TcpTransport("10.0.0.5") as transport:
    ...     transport.write(packet)
    ...     response = transport.read(1024, timeout=3.0)
"""

from __future__ import annotations

import logging

import serial

from samsung_mdc.exceptions import TransportError
from samsung_mdc.protocol.constants import ProtocolConstants
from samsung_mdc.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


class SerialTransport(AbstractTransport):
    """
    Blocking transport over any pyserial URL.

    Attributes:
        port_name: Serial port path or URL (e.g., "/dev/ttyUSB0", "COM3",
            "socket://10.0.0.5:1515", "loop://").
        is_open: Whether the port is currently open.

    Example:
        >>> transport = SerialTransport("/dev/ttyUSB0", baudrate=9600)
        >>> transport.open()
        >>> try:
        ...     transport.write(b"\\xaa\\x11\\x00\\x00\\x11")
        ...     response = transport.read(1024, timeout=3.0)
        ... finally:
        ...     transport.close()
    """

    def __init__(
        self,
        url: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        default_timeout: float = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
        write_timeout: float | None = None,
    ) -> None:
        """
        Initialize the serial transport.

        Args:
            url: Serial port path or pyserial URL.
            baudrate: Baud rate (default: 9600, ignored for socket://).
            default_timeout: Default read timeout in seconds (default: 3.0).
            write_timeout: Write timeout in seconds. None uses default_timeout.
        """
        self._url = url
        self._baudrate = baudrate
        self._default_timeout = default_timeout
        self._write_timeout = write_timeout if write_timeout is not None else default_timeout
        self._serial: serial.SerialBase | None = None

    @property
    def is_open(self) -> bool:
        """Check if the port is currently open."""
        return self._serial is not None and self._serial.is_open

    @property
    def port_name(self) -> str:
        """Get the port path or URL."""
        return self._url

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    def open(self) -> None:
        """
        Open the port.

        Raises:
            TransportError: If the port cannot be opened.
        """
        if self.is_open:
            return

        try:
            self._serial = serial.serial_for_url(
                self._url,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._default_timeout,
                write_timeout=self._write_timeout,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open {self._url}: {e}") from e
        except (OSError, ValueError) as e:
            raise TransportError(f"Error opening {self._url}: {e}") from e

        logger.info("Opened %s", self._url)

    def close(self) -> None:
        """
        Close the port.

        Safe to call multiple times.
        """
        if self._serial is not None:
            try:
                self._serial.close()
            except (serial.SerialException, OSError) as e:
                logger.debug("Error while closing %s: %s", self._url, e)
            logger.info("Closed %s", self._url)

        self._serial = None

    def write(self, data: bytes) -> None:
        """
        Write data and wait until it has been handed to the OS.

        Args:
            data: Bytes to transmit.

        Raises:
            TransportError: If the port is not open or write fails.
        """
        port = self._require_open()

        try:
            port.write(data)
            port.flush()
        except serial.SerialTimeoutException as e:
            raise TransportError(f"Write timed out on {self._url}") from e
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Write failed on {self._url}: {e}") from e

    def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read up to size bytes.

        Waits for the first byte, then returns it together with whatever
        else is already buffered.

        Args:
            size: Maximum number of bytes to return.
            timeout: Read timeout in seconds. None uses default timeout.

        Returns:
            1 to size bytes, or b"" if nothing arrived before the timeout.

        Raises:
            TransportError: If the port is not open or read fails.
        """
        port = self._require_open()

        if size <= 0:
            return b""

        effective_timeout = timeout if timeout is not None else self._default_timeout

        try:
            port.timeout = effective_timeout
            first = port.read(1)
            if not first:
                return b""

            waiting = port.in_waiting
            if waiting and size > 1:
                return first + port.read(min(waiting, size - 1))
            return first

        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Read failed on {self._url}: {e}") from e

    def discard_buffers(self) -> None:
        """
        Discard any pending data in the input buffer.

        Errors are ignored: the port may already be closed.
        """
        if self._serial is not None:
            try:
                self._serial.reset_input_buffer()
            except (serial.SerialException, OSError) as e:
                logger.debug("Could not reset input buffer on %s: %s", self._url, e)

    def _require_open(self) -> serial.SerialBase:
        if self._serial is None or not self._serial.is_open:
            raise TransportError(f"{self._url} is not open")
        return self._serial

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"{type(self).__name__}({self._url!r}, {status})"


class TcpTransport(SerialTransport):
    """
    MDC over Ethernet.

    A SerialTransport bound to ``socket://host:port``.

    Example:
        >>> transport = TcpTransport("10.0.0.5")
        >>> transport.port_name
        'socket://10.0.0.5:1515'
    """

    def __init__(
        self,
        host: str,
        port: int = ProtocolConstants.DEFAULT_TCP_PORT,
        default_timeout: float = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT,
    ) -> None:
        """
        Initialize the TCP transport.

        Args:
            host: Display IP address or host name.
            port: TCP port (default: 1515).
            default_timeout: Default read timeout in seconds.
        """
        super().__init__(f"socket://{host}:{port}", default_timeout=default_timeout)
        self._host = host
        self._port = port

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port
