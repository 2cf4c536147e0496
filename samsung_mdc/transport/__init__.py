"""
Transport layer for MDC protocol communication.

This module provides transport implementations for carrying MDC packets
to Samsung displays over RS-232C, Ethernet, or a mock for testing.

Available transports:
- SerialTransport: any pyserial URL (device path, socket://, loop://)
- TcpTransport: MDC over Ethernet, port 1515 by default
- MockTransport: Mock transport for unit testing

Example:
    >>> from samsung_mdc.transport import SerialTransport
    >>>
    >>> with SerialTransport("/dev/ttyUSB0") as transport:
    ...     transport.write(packet)
    ...     response = transport.read(1024, timeout=3.0)
"""

from samsung_mdc.transport.abc import AbstractTransport
from samsung_mdc.transport.mock import MockTransport, ScriptedMockTransport
from samsung_mdc.transport.serial_port import SerialTransport, TcpTransport

__all__ = [
    "AbstractTransport",
    "SerialTransport",
    "TcpTransport",
    "MockTransport",
    "ScriptedMockTransport",
]
