"""
Per-display command facade.

A DisplayHandle binds a session to one display address and exposes the
command catalog as methods. Handles hold no state of their own: every
call is a fresh wire exchange.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from samsung_mdc.commands import catalog
from samsung_mdc.commands.registry import CommandDescriptor, CommandRegistry, create_default_registry
from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    Unknown,
)
from samsung_mdc.protocol.constants import BROADCAST_ID

if TYPE_CHECKING:
    from samsung_mdc.session import MDCSession


class DisplayHandle:
    """
    Commands addressed to one display (or to all, via the broadcast id).

    Getters return the decoded value. Setters return the value echoed by
    the display, or None when it echoes nothing. On a broadcast handle
    setters always return None and getters raise ValueError, since no
    display answers a broadcast.

    Example:
        >>> display = session.display(1)
        >>> display.set_volume(20)
        20
        >>> display.get_input_source()
        <InputSource.HDMI1: 33>
    """

    def __init__(
        self,
        session: MDCSession,
        display_id: int,
        registry: CommandRegistry | None = None,
    ) -> None:
        self._session = session
        self._display_id = display_id
        self._registry = registry if registry is not None else create_default_registry()

    @property
    def session(self) -> MDCSession:
        return self._session

    @property
    def display_id(self) -> int:
        return self._display_id

    @property
    def is_broadcast(self) -> bool:
        return self._display_id == BROADCAST_ID

    def execute(self, command: CommandDescriptor[Any] | str, *args: Any, **kwargs: Any) -> Any:
        """
        Run any descriptor against this display.

        Args:
            command: A CommandDescriptor, or the name of a registered one.
            *args: Passed to the descriptor's encoder.

        Returns:
            The decoded reply, or None for a broadcast.

        Raises:
            KeyError: If no descriptor is registered under the name.
            ValueError: If a query is sent to the broadcast address, or
                the arguments are out of range.
        """
        descriptor = self._resolve(command)
        if descriptor.query and self.is_broadcast:
            raise ValueError(f"{descriptor.name} needs a reply and cannot be broadcast")

        payload = descriptor.encode(*args, **kwargs)
        response = self._session.exchange(
            self._display_id,
            descriptor.command,
            payload,
            subcommand=descriptor.subcommand,
        )
        if response is None:
            return None
        return descriptor.decode(response.values)

    def _resolve(self, command: CommandDescriptor[Any] | str) -> CommandDescriptor[Any]:
        if isinstance(command, CommandDescriptor):
            return command
        descriptor = self._registry.get(command)
        if descriptor is None:
            raise KeyError(f"Unknown command: {command!r}")
        return descriptor

    # ===== Information =====

    def get_status(self) -> DisplayStatus:
        return self.execute(catalog.GET_STATUS)

    def get_serial_number(self) -> str:
        return self.execute(catalog.GET_SERIAL_NUMBER)

    def get_software_version(self) -> str:
        return self.execute(catalog.GET_SOFTWARE_VERSION)

    def get_model_name(self) -> str:
        return self.execute(catalog.GET_MODEL_NAME)

    # ===== Power =====

    def get_power(self) -> PowerState | Unknown:
        return self.execute(catalog.GET_POWER)

    def set_power(self, on: bool) -> PowerState | Unknown | None:
        return self.execute(catalog.SET_POWER, on)

    def power_on(self) -> PowerState | Unknown | None:
        return self.set_power(True)

    def power_off(self) -> PowerState | Unknown | None:
        return self.set_power(False)

    def reboot(self) -> PowerState | Unknown | None:
        return self.execute(catalog.REBOOT)

    # ===== Panel =====

    def get_panel(self) -> PanelState | Unknown:
        return self.execute(catalog.GET_PANEL)

    def set_panel(self, on: bool) -> PanelState | Unknown | None:
        """Switch the panel backlight without changing the power state."""
        return self.execute(catalog.SET_PANEL, on)

    def panel_on(self) -> PanelState | Unknown | None:
        return self.set_panel(True)

    def panel_off(self) -> PanelState | Unknown | None:
        return self.set_panel(False)

    # ===== Audio =====

    def get_volume(self) -> int:
        return self.execute(catalog.GET_VOLUME)

    def set_volume(self, level: int) -> int | None:
        """Set the volume, 0-100."""
        return self.execute(catalog.SET_VOLUME, level)

    def get_mute(self) -> MuteState | Unknown:
        return self.execute(catalog.GET_MUTE)

    def set_mute(self, on: bool) -> MuteState | Unknown | None:
        return self.execute(catalog.SET_MUTE, on)

    # ===== Input =====

    def get_input_source(self) -> InputSource | Unknown:
        return self.execute(catalog.GET_INPUT_SOURCE)

    def set_input_source(self, source: InputSource | Unknown | int) -> InputSource | Unknown | None:
        return self.execute(catalog.SET_INPUT_SOURCE, source)

    def __repr__(self) -> str:
        target = "broadcast" if self.is_broadcast else f"0x{self._display_id:02X}"
        return f"DisplayHandle({target})"
