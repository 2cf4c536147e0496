"""
Command descriptors and the command registry.

Each supported operation is a CommandDescriptor: a flat record holding
the opcode, an optional subcommand, a payload encoder and a reply
decoder. The session and codec never look inside descriptors, so adding
a command means adding a descriptor and nothing else.

Architecture:
    CommandRegistry
        ├── get_power      (POWER, query)
        ├── set_power      (POWER, encoder=bool)
        ├── get_volume     (VOLUME, query)
        └── ...

Encoders turn typed arguments into payload bytes. Decoders receive the
reply values (after the ACK marker, echoed command and echoed
subcommand) and return a typed result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Generic, TypeVar

from samsung_mdc.exceptions import FramingError
from samsung_mdc.models.records import Unknown, enum_or_unknown

T = TypeVar("T")
E = TypeVar("E", bound=IntEnum)

Encoder = Callable[..., bytes]
Decoder = Callable[[bytes], Any]


# ===== Encoders =====


def encode_nothing() -> bytes:
    """Encoder for queries: an empty payload reads the value."""
    return b""


def bool_encoder(on: int = 0x01, off: int = 0x00) -> Encoder:
    """
    Build an encoder for a single on/off byte.

    Args:
        on: Byte sent for True.
        off: Byte sent for False.
    """

    def encode(value: bool) -> bytes:
        return bytes([on if value else off])

    return encode


def enum_encoder(enum_cls: type[IntEnum]) -> Encoder:
    """
    Build an encoder for a single enumerated byte.

    Accepts a member of enum_cls, an Unknown, or a raw int (sent as-is
    so undocumented vendor values can still be set).
    """

    def encode(value: IntEnum | Unknown | int) -> bytes:
        raw = value.value if isinstance(value, Unknown) else int(value)
        if not 0 <= raw <= 0xFF:
            raise ValueError(f"{enum_cls.__name__} value must be 0-255, got {raw}")
        return bytes([raw])

    return encode


def range_encoder(minimum: int, maximum: int, name: str = "value") -> Encoder:
    """Build an encoder for a single bounded integer byte."""

    def encode(value: int) -> bytes:
        if not minimum <= value <= maximum:
            raise ValueError(f"{name} must be {minimum}-{maximum}, got {value}")
        return bytes([value])

    return encode


# ===== Decoders =====


def require_values(values: bytes, size: int, what: str) -> None:
    """Raise FramingError if a reply carries fewer than size value bytes."""
    if len(values) < size:
        raise FramingError(
            f"{what} reply needs {size} value byte(s), got {len(values)}",
            raw=bytes(values),
        )


def enum_decoder(enum_cls: type[E]) -> Callable[[bytes], E | Unknown]:
    """Build a decoder for a single enumerated byte."""

    def decode(values: bytes) -> E | Unknown:
        require_values(values, 1, enum_cls.__name__)
        return enum_or_unknown(enum_cls, values[0])

    return decode


def decode_byte(values: bytes) -> int:
    """Decode a single unsigned byte."""
    require_values(values, 1, "Byte")
    return values[0]


def decode_ascii(values: bytes) -> str:
    """Decode an ASCII string, dropping NUL padding and surrounding spaces."""
    return values.decode("ascii", errors="replace").replace("\x00", "").strip()


# ===== Descriptor =====


@dataclass(frozen=True)
class CommandDescriptor(Generic[T]):
    """
    Declarative description of one MDC operation.

    Attributes:
        name: Registry key, e.g. "set_power".
        command: Opcode byte.
        encoder: Turns call arguments into payload bytes.
        decoder: Turns reply values into the typed result.
        subcommand: Optional second discriminator byte.
        query: True when the operation only reads state. Queries need a
            reply, so they cannot be broadcast.
    """

    name: str
    command: int
    encoder: Encoder
    decoder: Callable[[bytes], T]
    subcommand: int | None = None
    query: bool = False

    def encode(self, *args: Any, **kwargs: Any) -> bytes:
        """Encode call arguments into the payload (subcommand excluded)."""
        return self.encoder(*args, **kwargs)

    def decode(self, values: bytes) -> T:
        """
        Decode reply values into the typed result.

        Args:
            values: ResponsePacket.values, which still starts with the
                echoed subcommand when the descriptor has one.
        """
        if self.subcommand is not None:
            values = values[1:]
        return self.decoder(values)

    def __repr__(self) -> str:
        sub = f", subcommand=0x{self.subcommand:02X}" if self.subcommand is not None else ""
        return f"CommandDescriptor({self.name!r}, command=0x{self.command:02X}{sub})"


class CommandRegistry:
    """
    Registry of command descriptors keyed by name.

    Example:
        >>> from samsung_mdc.commands.catalog import GET_POWER
        >>> registry = CommandRegistry()
        >>> registry.register(GET_POWER)
        >>> registry.get("get_power").command
        17
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._descriptors: dict[str, CommandDescriptor[Any]] = {}

    def register(self, descriptor: CommandDescriptor[Any]) -> None:
        """
        Register a descriptor.

        Note:
            Replaces any existing descriptor with the same name.
        """
        self._descriptors[descriptor.name] = descriptor

    def get(self, name: str) -> CommandDescriptor[Any] | None:
        """Get a descriptor by name, None if not registered."""
        return self._descriptors.get(name)

    def has(self, name: str) -> bool:
        """Check if a descriptor is registered."""
        return name in self._descriptors

    def by_command(self, command: int) -> list[CommandDescriptor[Any]]:
        """Get every descriptor using the given opcode."""
        return [d for d in self._descriptors.values() if d.command == command]

    @property
    def names(self) -> frozenset[str]:
        """Get all registered descriptor names."""
        return frozenset(self._descriptors.keys())

    def unregister(self, name: str) -> bool:
        """
        Remove a descriptor.

        Returns:
            True if a descriptor was removed, False if none was registered.
        """
        if name in self._descriptors:
            del self._descriptors[name]
            return True
        return False

    def clear(self) -> None:
        """Remove all registered descriptors."""
        self._descriptors.clear()

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors.values())

    def __repr__(self) -> str:
        return f"CommandRegistry(commands={len(self._descriptors)})"


def create_default_registry() -> CommandRegistry:
    """
    Create a new registry with all built-in descriptors registered.

    Returns:
        CommandRegistry holding the built-in catalog.
    """
    from samsung_mdc.commands.catalog import register_all_commands

    registry = CommandRegistry()
    register_all_commands(registry)
    return registry
