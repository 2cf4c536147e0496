"""Session and connection configuration using pydantic and pydantic-settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from samsung_mdc.protocol.constants import ProtocolConstants
from samsung_mdc.transport.abc import AbstractTransport
from samsung_mdc.transport.serial_port import SerialTransport, TcpTransport

if TYPE_CHECKING:
    from samsung_mdc.display import DisplayHandle


class SessionConfig(BaseModel):
    """
    Timing and retry behaviour of an MDCSession.

    Attributes:
        timeout: Seconds to wait for a complete reply.
        retries: Extra attempts after a malformed or mismatched reply.
        drain_quiet: Seconds of silence that count as a drained line.
        drain_limit: Longest a drain may take before the session is poisoned.
    """

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT, gt=0)
    retries: int = Field(default=ProtocolConstants.MAX_RETRIES, ge=0)
    drain_quiet: float = Field(default=ProtocolConstants.DRAIN_QUIET_PERIOD, gt=0)
    drain_limit: float = Field(default=ProtocolConstants.DRAIN_LIMIT, gt=0)


class Settings(BaseSettings):
    """Connection settings loaded from environment variables.

    All settings can be overridden via environment variables
    prefixed with MDC_ (e.g., MDC_HOST, MDC_SERIAL_PORT).
    """

    host: str | None = None
    port: int = ProtocolConstants.DEFAULT_TCP_PORT
    serial_port: str | None = None
    baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE
    timeout: float = ProtocolConstants.DEFAULT_RECEIVE_TIMEOUT
    retries: int = ProtocolConstants.MAX_RETRIES
    display_id: int = Field(default=0, ge=0, le=ProtocolConstants.MAX_DISPLAY_ID)

    model_config = SettingsConfigDict(env_prefix="MDC_")

    def session_config(self) -> SessionConfig:
        """Build the SessionConfig matching these settings."""
        return SessionConfig(timeout=self.timeout, retries=self.retries)

    def create_transport(self) -> AbstractTransport:
        """
        Build an unopened transport.

        A host selects TCP; otherwise the serial port is used.

        Raises:
            ValueError: If neither a host nor a serial port is configured.
        """
        if self.host:
            return TcpTransport(self.host, self.port, default_timeout=self.timeout)
        if self.serial_port:
            return SerialTransport(
                self.serial_port,
                baudrate=self.baudrate,
                default_timeout=self.timeout,
            )
        raise ValueError("Set MDC_HOST or MDC_SERIAL_PORT to choose a connection")

    def open_display(self) -> DisplayHandle:
        """
        Open the configured connection and address the configured display.

        The returned handle's session owns the opened transport; close it
        with ``handle.session.close()``.

        Raises:
            ValueError: If neither a host nor a serial port is configured.
            TransportError: If the connection cannot be established.
        """
        from samsung_mdc.session import MDCSession

        transport = self.create_transport()
        transport.open()
        session = MDCSession(transport, self.session_config())
        return session.display(self.display_id)
