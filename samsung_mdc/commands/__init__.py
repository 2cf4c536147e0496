"""
Command catalog for MDC displays.

Commands are described declaratively by CommandDescriptor records and
looked up through a CommandRegistry. The built-in catalog covers status,
identification, power, panel, volume, mute and input source; further
commands are added by registering new descriptors.

Example:
    >>> from samsung_mdc.commands import CommandDescriptor, create_default_registry
    >>> from samsung_mdc.commands.registry import decode_byte, encode_nothing
    >>>
    >>> registry = create_default_registry()
    >>> registry.register(CommandDescriptor(
    ...     name="get_brightness",
    ...     command=0x25,
    ...     encoder=encode_nothing,
    ...     decoder=decode_byte,
    ...     query=True,
    ... ))
"""

from samsung_mdc.commands.catalog import (
    BUILTIN_COMMANDS,
    GET_INPUT_SOURCE,
    GET_MODEL_NAME,
    GET_MUTE,
    GET_PANEL,
    GET_POWER,
    GET_SERIAL_NUMBER,
    GET_SOFTWARE_VERSION,
    GET_STATUS,
    GET_VOLUME,
    REBOOT,
    SET_INPUT_SOURCE,
    SET_MUTE,
    SET_PANEL,
    SET_POWER,
    SET_VOLUME,
    register_all_commands,
)
from samsung_mdc.commands.registry import (
    CommandDescriptor,
    CommandRegistry,
    create_default_registry,
)

__all__ = [
    # Registry
    "CommandDescriptor",
    "CommandRegistry",
    "create_default_registry",
    "register_all_commands",
    "BUILTIN_COMMANDS",
    # Built-in descriptors
    "GET_STATUS",
    "GET_SERIAL_NUMBER",
    "GET_SOFTWARE_VERSION",
    "GET_MODEL_NAME",
    "GET_POWER",
    "SET_POWER",
    "REBOOT",
    "GET_PANEL",
    "SET_PANEL",
    "GET_VOLUME",
    "SET_VOLUME",
    "GET_MUTE",
    "SET_MUTE",
    "GET_INPUT_SOURCE",
    "SET_INPUT_SOURCE",
]
