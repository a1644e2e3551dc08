"""Channel Voice messages and their byte layouts.

Every message encodes to a fixed number of bytes: a status byte (message
code OR-ed with the channel) followed by its data bytes.  The running
status form drops the status byte, so it is always one byte shorter and
decodes with the channel left at its default.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Sequence

from midi.errors import UnmarshallingError
from midi.status import (
    CHANNEL_PRESSURE_STATUS, NOTE_OFF_STATUS, NOTE_ON_STATUS,
    PITCH_BEND_CHANGE_STATUS, POLYPHONIC_KEY_PRESSURE_STATUS,
    PROGRAM_CHANGE_STATUS, has_status_msb, make_status_byte,
    parse_channel_from_status_byte,
)
from midi.values import (
    MIN_CHANNEL, MIN_NOTE, MIN_PROGRAM, ZERO_PITCH_BEND, ZERO_PRESSURE,
    ZERO_VELOCITY, Channel, Note, PitchBend, Pressure, Program, Velocity,
)

MESSAGE_VERSION = "v1"


def _decode_value(kind, b: int, label: str, running: bool):
    try:
        return kind.from_byte(b)
    except ValueError as exc:
        where = "running status " if running else ""
        raise UnmarshallingError(
            f"invalid {label} {b!r} ({exc}) from {where}{label} byte"
        ) from exc


@dataclass(frozen=True)
class ChannelVoiceMessageBase:
    """Fields and codec behaviour shared by all Channel Voice messages.

    Subclasses set ``STATUS``, ``LENGTH`` and ``NAME`` and implement
    ``_data_bytes`` / ``_decode_data`` for their own data bytes.
    """

    channel: Channel = Channel(MIN_CHANNEL)

    STATUS = 0
    LENGTH = 0
    NAME = ""

    def __post_init__(self) -> None:
        # Every field defaults to an instance of its own value type, so the
        # default's type is the constructor to validate (or clamp) with.
        for f in fields(self):
            kind = type(f.default)
            object.__setattr__(self, f.name, kind(getattr(self, f.name)))

    @property
    def name(self) -> str:
        return self.NAME

    def encode(self) -> bytes:
        return bytes([make_status_byte(self.STATUS, self.channel), *self._data_bytes()])

    def encode_running_status(self) -> bytes:
        return bytes(self._data_bytes())

    @classmethod
    def decode(cls, data: Sequence[int]):
        cls._check_length(data, cls.LENGTH, running=False)
        if not has_status_msb(data[0]):
            raise UnmarshallingError(f"{cls.NAME.lower()} messages must have a status MSB")
        channel = parse_channel_from_status_byte(data[0])
        return cls(channel=channel, **cls._decode_data(data[1:], running=False))

    @classmethod
    def decode_running_status(cls, data: Sequence[int]):
        cls._check_length(data, cls.LENGTH - 1, running=True)
        return cls(**cls._decode_data(data, running=True))

    @classmethod
    def _check_length(cls, data: Sequence[int], expected: int, running: bool) -> None:
        if len(data) != expected:
            kind = "running status messages" if running else "messages"
            raise UnmarshallingError(
                f"{cls.NAME.lower()} {kind} are made up of {expected} bytes, "
                f"received {len(data)} byte(s)"
            )

    def _data_bytes(self) -> list[int]:
        raise NotImplementedError

    @classmethod
    def _decode_data(cls, data: Sequence[int], running: bool) -> dict:
        raise NotImplementedError

    def __str__(self) -> str:
        parts = [MESSAGE_VERSION, self.NAME]
        parts.extend(str(int(getattr(self, f.name))) for f in fields(self))
        return ":".join(parts)


@dataclass(frozen=True)
class _NoteVelocityMessage(ChannelVoiceMessageBase):
    note: Note = Note(MIN_NOTE)
    velocity: Velocity = Velocity(ZERO_VELOCITY)

    def _data_bytes(self) -> list[int]:
        return [int(self.note), int(self.velocity)]

    @classmethod
    def _decode_data(cls, data: Sequence[int], running: bool) -> dict:
        note = _decode_value(Note, data[0], "note number", running)
        velocity = _decode_value(Velocity, data[1], "velocity", running)
        return {"note": note, "velocity": velocity}


@dataclass(frozen=True)
class _NotePressureMessage(ChannelVoiceMessageBase):
    note: Note = Note(MIN_NOTE)
    pressure: Pressure = Pressure(ZERO_PRESSURE)

    def _data_bytes(self) -> list[int]:
        return [int(self.note), int(self.pressure)]

    @classmethod
    def _decode_data(cls, data: Sequence[int], running: bool) -> dict:
        note = _decode_value(Note, data[0], "note number", running)
        pressure = _decode_value(Pressure, data[1], "pressure", running)
        return {"note": note, "pressure": pressure}


@dataclass(frozen=True)
class NoteOffMessage(_NoteVelocityMessage):
    """Note-Off: status/channel, note number, velocity.

    ``[0b10000001, 0b01000000, 0b00100000]`` is a Note-Off on channel 2
    (index 1) for note 64 at velocity 32.
    """

    STATUS = NOTE_OFF_STATUS
    LENGTH = 3
    NAME = "Note-Off"


@dataclass(frozen=True)
class NoteOnMessage(_NoteVelocityMessage):
    """Note-On: status/channel, note number, velocity.

    ``[0b10010001, 0b01000000, 0b00100000]`` is a Note-On on channel 2
    (index 1) for note 64 at velocity 32.
    """

    STATUS = NOTE_ON_STATUS
    LENGTH = 3
    NAME = "Note-On"


@dataclass(frozen=True)
class PolyphonicKeyPressureMessage(_NotePressureMessage):
    """Polyphonic Key Pressure: status/channel, note number, pressure."""

    STATUS = POLYPHONIC_KEY_PRESSURE_STATUS
    LENGTH = 3
    NAME = "Polyphonic Key Pressure"


@dataclass(frozen=True)
class ChannelPressureMessage(_NotePressureMessage):
    """Channel Pressure: status/channel, note number, pressure.

    ``[0b11010001, 0b01000000, 0b00100000]`` is a Channel Pressure message
    on channel 2 (index 1) for note 64 at pressure 32.
    """

    STATUS = CHANNEL_PRESSURE_STATUS
    LENGTH = 3
    NAME = "Channel Pressure"


@dataclass(frozen=True)
class ProgramChangeMessage(ChannelVoiceMessageBase):
    """Program Change: status/channel, program number.

    ``[0b11000001, 0b01100010]`` selects program 98 on channel 2 (index 1).
    """

    program: Program = Program(MIN_PROGRAM)

    STATUS = PROGRAM_CHANGE_STATUS
    LENGTH = 2
    NAME = "Program Change"

    def _data_bytes(self) -> list[int]:
        return [int(self.program)]

    @classmethod
    def _decode_data(cls, data: Sequence[int], running: bool) -> dict:
        return {"program": _decode_value(Program, data[0], "program number", running)}


@dataclass(frozen=True)
class PitchBendChangeMessage(ChannelVoiceMessageBase):
    """Pitch Bend Change: status/channel, pitch bend LSB, pitch bend MSB.

    ``[0b11110001, 0b11100010, 0b00011101]`` bends channel 2 (index 1) by
    7650 (LSB 0xE2, MSB 0x1D).
    """

    pitch_bend: PitchBend = PitchBend(ZERO_PITCH_BEND)

    STATUS = PITCH_BEND_CHANGE_STATUS
    LENGTH = 3
    NAME = "Pitch Bend Change"

    def _data_bytes(self) -> list[int]:
        return [self.pitch_bend.lsb, self.pitch_bend.msb]

    @classmethod
    def _decode_data(cls, data: Sequence[int], running: bool) -> dict:
        try:
            pitch_bend = PitchBend.from_bytes(data[0], data[1])
        except ValueError as exc:
            where = "running status " if running else ""
            raise UnmarshallingError(
                f"invalid pitch bend ({exc}) from {where}LSB 0x{data[0]:02X}, MSB 0x{data[1]:02X}"
            ) from exc
        return {"pitch_bend": pitch_bend}
