"""Bounded MIDI value types.

Every type is an immutable ``int``.  Calling the type builds it from any
integer; ``from_byte`` builds it from a single raw byte and applies the
same bounds.  Channel, Note, Program and PitchBend reject out-of-range
input; Velocity and Pressure clamp it.
"""
from __future__ import annotations

from midi.errors import (
    InvalidChannelError, InvalidNoteError, InvalidPitchBendError,
    InvalidProgramError, InvalidValueError,
)

MIN_CHANNEL = 0     # channel 1
MAX_CHANNEL = 15    # channel 16

MIN_NOTE = 0
MAX_NOTE = 127

MIN_PROGRAM = 0
MAX_PROGRAM = 127

ZERO_VELOCITY = 0
LOW_VELOCITY = 31
MIDDLE_VELOCITY = 63
HIGH_VELOCITY = 95
FULL_VELOCITY = 127

ZERO_PRESSURE = 0
LOW_PRESSURE = 31
MIDDLE_PRESSURE = 63
HIGH_PRESSURE = 95
FULL_PRESSURE = 127

MIN_PITCH_BEND = -8192
MAX_PITCH_BEND = 8192
ZERO_PITCH_BEND = 0

BYTE_MASK = 0xFF


def _check_byte(value: int) -> int:
    if not (0 <= value <= BYTE_MASK):
        raise ValueError(f"Expected a single byte (0-255), got {value}")
    return value


class _RejectingValue(int):
    """Integer domain that refuses values outside [MINIMUM, MAXIMUM]."""

    MINIMUM = 0
    MAXIMUM = 0
    error: type[InvalidValueError] = InvalidValueError

    def __new__(cls, value: int = 0):
        value = int(value)
        if not (cls.MINIMUM <= value <= cls.MAXIMUM):
            raise cls.error(value, cls.MINIMUM, cls.MAXIMUM)
        return super().__new__(cls, value)

    @classmethod
    def from_byte(cls, value: int):
        return cls(_check_byte(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class _ClampingValue(int):
    """Integer domain that saturates silently at its nearest bound."""

    MINIMUM = 0
    MAXIMUM = 127

    def __new__(cls, value: int = 0):
        value = max(cls.MINIMUM, min(cls.MAXIMUM, int(value)))
        return super().__new__(cls, value)

    @classmethod
    def from_byte(cls, value: int):
        return cls(_check_byte(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Channel(_RejectingValue):
    """Low nibble of a status byte (index 0 is channel 1)."""

    MINIMUM = MIN_CHANNEL
    MAXIMUM = MAX_CHANNEL
    error = InvalidChannelError


class Note(_RejectingValue):
    MINIMUM = MIN_NOTE
    MAXIMUM = MAX_NOTE
    error = InvalidNoteError


class Program(_RejectingValue):
    """Program number, only carried by Program Change messages."""

    MINIMUM = MIN_PROGRAM
    MAXIMUM = MAX_PROGRAM
    error = InvalidProgramError


class Velocity(_ClampingValue):
    """Strength of a note, clamped to 0-127."""

    MINIMUM = ZERO_VELOCITY
    MAXIMUM = FULL_VELOCITY


class Pressure(_ClampingValue):
    """Pressure applied to a note, clamped to 0-127."""

    MINIMUM = ZERO_PRESSURE
    MAXIMUM = FULL_PRESSURE


class PitchBend(_RejectingValue):
    """Signed pitch bend amount between -8192 and 8192 inclusive.

    On the wire the value travels as two bytes: the low byte first, then
    the high byte of its 16-bit two's-complement form.  7650 (0x1DE2) is
    sent as LSB 0xE2, MSB 0x1D; -8192 as LSB 0x00, MSB 0xE0.
    """

    MINIMUM = MIN_PITCH_BEND
    MAXIMUM = MAX_PITCH_BEND
    error = InvalidPitchBendError

    @classmethod
    def from_bytes(cls, lsb: int, msb: int) -> PitchBend:
        """Rebuild a pitch bend from its least- and most-significant bytes."""
        raw = (_check_byte(msb) << 8) | _check_byte(lsb)
        if raw & 0x8000:
            raw -= 0x10000
        return cls(raw)

    @property
    def lsb(self) -> int:
        return int(self) & BYTE_MASK

    @property
    def msb(self) -> int:
        return (int(self) >> 8) & BYTE_MASK
