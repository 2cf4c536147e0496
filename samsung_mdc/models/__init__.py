"""
Data models for MDC command values.

This module contains the typed values decoded from display replies:

- Enumerations (power, panel, mute, input source)
- The Unknown wrapper for undocumented bytes
- The combined display status record
"""

from samsung_mdc.models.records import (
    DisplayStatus,
    InputSource,
    MuteState,
    PanelState,
    PowerState,
    Unknown,
    enum_or_unknown,
)

__all__ = [
    # Enums
    "PowerState",
    "PanelState",
    "MuteState",
    "InputSource",
    # Values
    "Unknown",
    "enum_or_unknown",
    # Records
    "DisplayStatus",
]
