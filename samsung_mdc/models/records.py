"""
Pydantic models for MDC command values.

This module defines the typed results produced by the command catalog,
implemented as immutable Pydantic models and enums.

Design principles:
- All models are frozen (immutable)
- Enumerated values a display reports outside the documented set are
  kept as Unknown(value) instead of raising, since firmware revisions
  add vendor values that are not in the public protocol documents
- Records mirror the field order of the wire format
"""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


class PowerState(IntEnum):
    """Display power state (command 0x11)."""

    OFF = 0x00
    ON = 0x01
    REBOOT = 0x02
    """Only valid as a set value; the display restarts."""


class PanelState(IntEnum):
    """
    Panel (backlight) state (command 0xF9).

    Note the inverted encoding: 0 means the panel is lit.
    """

    ON = 0x00
    OFF = 0x01


class MuteState(IntEnum):
    """Audio mute state (command 0x13)."""

    OFF = 0x00
    ON = 0x01


class InputSource(IntEnum):
    """Input sources (command 0x14)."""

    NONE = 0x00
    S_VIDEO = 0x04
    COMPONENT = 0x08
    AV = 0x0C
    AV2 = 0x0D
    PC = 0x14
    DVI = 0x18
    BNC = 0x1E
    DVI_VIDEO = 0x1F
    MAGIC_INFO = 0x20
    HDMI1 = 0x21
    HDMI1_PC = 0x22
    HDMI2 = 0x23
    HDMI2_PC = 0x24
    DISPLAY_PORT_1 = 0x25
    DISPLAY_PORT_2 = 0x26
    DISPLAY_PORT_3 = 0x27
    RF_TV = 0x30
    HDMI3 = 0x31
    HDMI3_PC = 0x32
    HDMI4 = 0x33
    HDMI4_PC = 0x34
    TV_DTV = 0x40
    MEDIA_MAGIC_INFO_S = 0x60
    SCREEN_MIRRORING = 0x61
    INTERNAL_USB = 0x62
    URL_LAUNCHER = 0x63
    WEB_BROWSER = 0x65


class Unknown(BaseModel):
    """
    A byte reported by the display that is not a documented value.

    Example:
        >>> Unknown(value=0x07)
        Unknown(0x07)
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0, le=255, description="Raw byte as received")

    def __repr__(self) -> str:
        return f"Unknown(0x{self.value:02X})"

    def __str__(self) -> str:
        return repr(self)


E = TypeVar("E", bound=IntEnum)


def enum_or_unknown(enum_cls: type[E], value: int) -> E | Unknown:
    """
    Map a raw byte to an enum member, or Unknown if it has none.

    Args:
        enum_cls: IntEnum to look the value up in.
        value: Raw byte.

    Returns:
        The matching member, or Unknown(value).
    """
    try:
        return enum_cls(value)
    except ValueError:
        return Unknown(value=value)


class DisplayStatus(BaseModel):
    """
    Combined status returned by the STATUS command (0x00).

    Field order matches the reply: power, volume, mute, input source,
    picture aspect, then the two timer state bytes.
    """

    model_config = ConfigDict(frozen=True)

    power: Union[PowerState, Unknown]
    volume: int = Field(ge=0, le=255)
    mute: Union[MuteState, Unknown]
    input_source: Union[InputSource, Unknown]
    aspect: int = Field(ge=0, le=255, description="Raw picture aspect byte")
    n_time_nf: int = Field(ge=0, le=255, description="On-timer state byte")
    f_time_nf: int = Field(ge=0, le=255, description="Off-timer state byte")

    @property
    def is_on(self) -> bool:
        """True when the display reports power on."""
        return self.power == PowerState.ON

    @property
    def is_muted(self) -> bool:
        """True when audio is muted."""
        return self.mute == MuteState.ON
