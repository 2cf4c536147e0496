"""
Built-in MDC command catalog.

One descriptor per operation. Getters send an empty payload; setters
send the new value and the display echoes the applied value back.
Some firmware acknowledges a set without echoing it, so setter decoders
return None for an empty reply.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from samsung_mdc.commands.registry import (
    CommandDescriptor,
    CommandRegistry,
    bool_encoder,
    decode_ascii,
    decode_byte,
    encode_nothing,
    enum_decoder,
    enum_encoder,
    range_encoder,
    require_values,
)
from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    enum_or_unknown,
)
from samsung_mdc.protocol.constants import CommandCode

T = TypeVar("T")

MAX_VOLUME = 100


def optional(decoder: Callable[[bytes], T]) -> Callable[[bytes], T | None]:
    """Wrap a decoder so an empty reply decodes to None."""

    def decode(values: bytes) -> T | None:
        if not values:
            return None
        return decoder(values)

    return decode


def decode_status(values: bytes) -> DisplayStatus:
    """Decode the 7-byte STATUS reply."""
    require_values(values, 7, "Status")
    return DisplayStatus(
        power=enum_or_unknown(PowerState, values[0]),
        volume=values[1],
        mute=enum_or_unknown(MuteState, values[2]),
        input_source=enum_or_unknown(InputSource, values[3]),
        aspect=values[4],
        n_time_nf=values[5],
        f_time_nf=values[6],
    )


# ===== Information =====

GET_STATUS = CommandDescriptor(
    name="get_status",
    command=CommandCode.STATUS,
    encoder=encode_nothing,
    decoder=decode_status,
    query=True,
)

GET_SERIAL_NUMBER = CommandDescriptor(
    name="get_serial_number",
    command=CommandCode.SERIAL_NUMBER,
    encoder=encode_nothing,
    decoder=decode_ascii,
    query=True,
)

GET_SOFTWARE_VERSION = CommandDescriptor(
    name="get_software_version",
    command=CommandCode.SOFTWARE_VERSION,
    encoder=encode_nothing,
    decoder=decode_ascii,
    query=True,
)

GET_MODEL_NAME = CommandDescriptor(
    name="get_model_name",
    command=CommandCode.MODEL_NAME,
    encoder=encode_nothing,
    decoder=decode_ascii,
    query=True,
)

# ===== Power =====

GET_POWER = CommandDescriptor(
    name="get_power",
    command=CommandCode.POWER,
    encoder=encode_nothing,
    decoder=enum_decoder(PowerState),
    query=True,
)

SET_POWER = CommandDescriptor(
    name="set_power",
    command=CommandCode.POWER,
    encoder=bool_encoder(on=PowerState.ON, off=PowerState.OFF),
    decoder=optional(enum_decoder(PowerState)),
)

REBOOT = CommandDescriptor(
    name="reboot",
    command=CommandCode.POWER,
    encoder=lambda: bytes([PowerState.REBOOT]),
    decoder=optional(enum_decoder(PowerState)),
)

# ===== Panel =====

GET_PANEL = CommandDescriptor(
    name="get_panel",
    command=CommandCode.PANEL,
    encoder=encode_nothing,
    decoder=enum_decoder(PanelState),
    query=True,
)

SET_PANEL = CommandDescriptor(
    name="set_panel",
    command=CommandCode.PANEL,
    encoder=bool_encoder(on=PanelState.ON, off=PanelState.OFF),
    decoder=optional(enum_decoder(PanelState)),
)

# ===== Audio =====

GET_VOLUME = CommandDescriptor(
    name="get_volume",
    command=CommandCode.VOLUME,
    encoder=encode_nothing,
    decoder=decode_byte,
    query=True,
)

SET_VOLUME = CommandDescriptor(
    name="set_volume",
    command=CommandCode.VOLUME,
    encoder=range_encoder(0, MAX_VOLUME, "Volume"),
    decoder=optional(decode_byte),
)

GET_MUTE = CommandDescriptor(
    name="get_mute",
    command=CommandCode.MUTE,
    encoder=encode_nothing,
    decoder=enum_decoder(MuteState),
    query=True,
)

SET_MUTE = CommandDescriptor(
    name="set_mute",
    command=CommandCode.MUTE,
    encoder=bool_encoder(on=MuteState.ON, off=MuteState.OFF),
    decoder=optional(enum_decoder(MuteState)),
)

# ===== Input =====

GET_INPUT_SOURCE = CommandDescriptor(
    name="get_input_source",
    command=CommandCode.INPUT_SOURCE,
    encoder=encode_nothing,
    decoder=enum_decoder(InputSource),
    query=True,
)

SET_INPUT_SOURCE = CommandDescriptor(
    name="set_input_source",
    command=CommandCode.INPUT_SOURCE,
    encoder=enum_encoder(InputSource),
    decoder=optional(enum_decoder(InputSource)),
)


BUILTIN_COMMANDS: tuple[CommandDescriptor, ...] = (
    GET_STATUS,
    GET_SERIAL_NUMBER,
    GET_SOFTWARE_VERSION,
    GET_MODEL_NAME,
    GET_POWER,
    SET_POWER,
    REBOOT,
    GET_PANEL,
    SET_PANEL,
    GET_VOLUME,
    SET_VOLUME,
    GET_MUTE,
    SET_MUTE,
    GET_INPUT_SOURCE,
    SET_INPUT_SOURCE,
)


def register_all_commands(registry: CommandRegistry) -> None:
    """Register every built-in descriptor with the registry."""
    for descriptor in BUILTIN_COMMANDS:
        registry.register(descriptor)
