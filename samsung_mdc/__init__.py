"""
samsung_mdc - Python library for controlling Samsung displays over MDC.

This library speaks the Samsung Multiple Display Control (MDC) binary
protocol over RS-232C or TCP port 1515: packet framing, checksums,
request/response correlation, and a blocking session with defined
failure semantics.

Example:
    >>> from samsung_mdc import MDCSession, InputSource
    >>>
    >>> with MDCSession.open_tcp("10.0.0.5") as session:
    ...     display = session.display(1)
    ...     display.power_on()
    ...     display.set_input_source(InputSource.HDMI1)
    ...     print(display.get_status())
"""

from samsung_mdc.commands import CommandDescriptor, CommandRegistry, create_default_registry
from samsung_mdc.config import SessionConfig, Settings
from samsung_mdc.display import DisplayHandle
from samsung_mdc.exceptions import (
    ChecksumError,
    ConstraintError,
    CorrelationError,
    DeviceRejected,
    FramingError,
    MDCError,
    ProtocolError,
    SessionPoisonedError,
    TimeoutError,
    TransportError,
    TruncatedPacketError,
)
from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    Unknown,
)
from samsung_mdc.protocol import (
    BROADCAST_ID,
    CommandCode,
    ResponsePacket,
    decode_response,
    encode_command,
    encode_response,
)
from samsung_mdc.session import MDCSession
from samsung_mdc.transport import AbstractTransport, SerialTransport, TcpTransport

__version__ = "0.1.0"
__all__ = [
    # Session
    "MDCSession",
    "DisplayHandle",
    "SessionConfig",
    "Settings",
    # Protocol
    "CommandCode",
    "BROADCAST_ID",
    "ResponsePacket",
    "encode_command",
    "encode_response",
    "decode_response",
    # Commands
    "CommandDescriptor",
    "CommandRegistry",
    "create_default_registry",
    # Models
    "PowerState",
    "PanelState",
    "MuteState",
    "InputSource",
    "Unknown",
    "DisplayStatus",
    # Exceptions
    "MDCError",
    "ConstraintError",
    "ProtocolError",
    "FramingError",
    "TruncatedPacketError",
    "ChecksumError",
    "CorrelationError",
    "DeviceRejected",
    "TimeoutError",
    "TransportError",
    "SessionPoisonedError",
    # Transport
    "AbstractTransport",
    "SerialTransport",
    "TcpTransport",
    # Version
    "__version__",
]
