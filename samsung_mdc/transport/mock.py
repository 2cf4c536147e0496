"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
the MDC session without actual hardware. Responses can be pre-configured
or dynamically generated using callback functions.

Queued responses behave like a display on the line: each write releases
the next queued response into the read buffer, so nothing is readable
before a request has been sent.

Example:
    >>> from samsung_mdc.transport import MockTransport
    >>> from samsung_mdc import MDCSession
    >>> from samsung_mdc.protocol import encode_response
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(encode_response(0, 0x11, b"\\x01"))
    >>>
    >>> with MDCSession(mock) as session:
    ...     session.display(0).get_power()
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

from samsung_mdc.exceptions import TransportError
from samsung_mdc.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    This transport simulates the byte stream by providing pre-configured
    responses. It records all written data for verification in tests.

    Attributes:
        written_data: List of all bytes written to the transport.
        chunk_size: Maximum bytes returned per read, to simulate a
            response arriving in fragments. None returns everything.

    Example:
        >>> mock = MockTransport()
        >>> mock.add_response(b"\\xaa\\xff\\x00\\x03\\x41\\x11\\x01\\x55")
        >>>
        >>> with mock:
        ...     mock.write(b"\\xaa\\x11\\x00\\x00\\x11")
        ...     response = mock.read(1024)
        ...     assert mock.written_data == [b"\\xaa\\x11\\x00\\x00\\x11"]
    """

    def __init__(
        self,
        port_name: str = "mock://test",
        default_timeout: float = 0.05,
        chunk_size: int | None = None,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock transport.
            default_timeout: How long an empty read blocks before
                returning b"".
            chunk_size: Maximum bytes per read (None for no limit).
        """
        self._port_name = port_name
        self._default_timeout = default_timeout
        self.chunk_size = chunk_size
        self._is_open = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_buffer = bytearray()
        self._response_callback: Callable[[bytes], bytes | None] | None = None
        self.discard_count = 0

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def port_name(self) -> str:
        """Get the mock port name."""
        return self._port_name

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def pending(self) -> int:
        """Number of bytes currently readable."""
        return len(self._read_buffer)

    def add_response(self, response: bytes) -> None:
        """
        Add a response to the queue.

        Responses are released in FIFO order, one per write.

        Args:
            response: Bytes made readable by the next write.
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        """
        Add multiple responses to the queue.

        Args:
            *responses: Multiple byte responses to add.
        """
        for response in responses:
            self._responses.append(response)

    def inject(self, data: bytes) -> None:
        """Make bytes readable immediately, without a preceding write."""
        self._read_buffer.extend(data)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate responses.

        The callback receives the written data and should return the response
        bytes. If it returns None, the next queued response is used instead.

        Args:
            callback: Function that takes written bytes and returns response.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear all written data and pending responses."""
        self._written_data.clear()
        self._responses.clear()
        self._read_buffer.clear()

    def clear_written(self) -> None:
        """Clear only the written data history."""
        self._written_data.clear()

    def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    def close(self) -> None:
        """Close the mock transport."""
        self._is_open = False

    def write(self, data: bytes) -> None:
        """
        Write data to the mock transport.

        Records the written data and releases the next response.

        Args:
            data: Bytes to write.

        Raises:
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._written_data.append(bytes(data))
        self._release_response(bytes(data))

    def _release_response(self, data: bytes) -> None:
        if self._response_callback:
            response = self._response_callback(data)
            if response is not None:
                self._read_buffer.extend(response)
                return

        if self._responses:
            self._read_buffer.extend(self._responses.popleft())

    def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read up to size bytes.

        Args:
            size: Maximum number of bytes to return.
            timeout: How long to block when nothing is readable.

        Returns:
            Available bytes (limited by size and chunk_size), or b"" after
            sleeping for the timeout when nothing is readable.

        Raises:
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        if not self._read_buffer:
            time.sleep(timeout if timeout is not None else self._default_timeout)
            return b""

        limit = size if self.chunk_size is None else min(size, self.chunk_size)
        result = bytes(self._read_buffer[:limit])
        del self._read_buffer[:limit]
        return result

    def discard_buffers(self) -> None:
        """Discard pending data in buffers."""
        self.discard_count += 1
        self._read_buffer.clear()

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of write operations.

        Args:
            expected: Expected number of writes.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")


class ScriptedMockTransport(MockTransport):
    """
    Mock transport with scripted request/response pairs.

    This variant allows defining expected request/response sequences
    for more structured testing scenarios.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(request=encode_command(0x11, 0), response=encode_response(0, 0x11, b"\\x01"))
        >>> mock.expect(request=encode_command(0x12, 0), response=encode_response(0, 0x12, b"\\x0a"))
    """

    def __init__(self, port_name: str = "mock://scripted") -> None:
        super().__init__(port_name)
        self._script: list[tuple[bytes | None, bytes]] = []
        self._script_index = 0

    def expect(
        self,
        response: bytes,
        request: bytes | None = None,
    ) -> None:
        """
        Add an expected request/response pair.

        Args:
            response: Response to return.
            request: Expected request (None to match any).
        """
        self._script.append((request, response))

    @property
    def script_complete(self) -> bool:
        """True once every scripted step has been consumed."""
        return self._script_index >= len(self._script)

    def write(self, data: bytes) -> None:
        """Write with script validation."""
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._written_data.append(bytes(data))

        if self._script_index < len(self._script):
            expected_request, response = self._script[self._script_index]

            if expected_request is not None and data != expected_request:
                raise AssertionError(
                    f"Script mismatch at step {self._script_index}: "
                    f"expected {expected_request!r}, got {data!r}"
                )

            self._read_buffer.extend(response)
            self._script_index += 1

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0
        self._read_buffer.clear()

    def clear_script(self) -> None:
        """Clear all scripted expectations."""
        self._script.clear()
        self._script_index = 0
