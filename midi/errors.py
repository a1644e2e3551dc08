from __future__ import annotations


class MidiError(Exception):
    """Base class for every error raised by the MIDI codec."""


class MarshallingError(MidiError):
    """A MIDI message could not be encoded into raw bytes."""


class UnmarshallingError(MidiError):
    """Raw bytes could not be decoded into a MIDI message."""


class InvalidValueError(MidiError, ValueError):
    """A value fell outside the inclusive range of its MIDI domain."""

    domain = "MIDI value"

    def __init__(self, value: int, minimum: int, maximum: int) -> None:
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"invalid {self.domain} {value}: valid values are between "
            f"{minimum} and {maximum}, inclusive"
        )


class InvalidChannelError(InvalidValueError):
    domain = "MIDI channel"


class InvalidNoteError(InvalidValueError):
    domain = "MIDI note"


class InvalidProgramError(InvalidValueError):
    domain = "MIDI program number"


class InvalidPitchBendError(InvalidValueError):
    domain = "MIDI pitch bend"


class RandomVelocityError(MidiError):
    """A random velocity could not be generated from the requested range."""
