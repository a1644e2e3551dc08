from __future__ import annotations

from midi.errors import InvalidChannelError, UnmarshallingError
from midi.values import MAX_CHANNEL, Channel

STATUS_MSB = 0b10000000  # status bytes have their most-significant bit set
DATA_MSB = 0b00000000

STATUS_NIBBLE_MASK = 0xF0
CHANNEL_MASK = MAX_CHANNEL

# Message codes within the upper nibble, before the status MSB is OR-ed in.
NOTE_OFF_CODE = 0b00000000
NOTE_ON_CODE = 0b00010000
POLYPHONIC_KEY_PRESSURE_CODE = 0b00100000
PROGRAM_CHANGE_CODE = 0b01000000
CHANNEL_PRESSURE_CODE = 0b01010000
PITCH_BEND_CHANGE_CODE = 0b01110000

NOTE_OFF_STATUS = STATUS_MSB | NOTE_OFF_CODE
NOTE_ON_STATUS = STATUS_MSB | NOTE_ON_CODE
POLYPHONIC_KEY_PRESSURE_STATUS = STATUS_MSB | POLYPHONIC_KEY_PRESSURE_CODE
PROGRAM_CHANGE_STATUS = STATUS_MSB | PROGRAM_CHANGE_CODE
CHANNEL_PRESSURE_STATUS = STATUS_MSB | CHANNEL_PRESSURE_CODE
PITCH_BEND_CHANGE_STATUS = STATUS_MSB | PITCH_BEND_CHANGE_CODE


def has_status_msb(b: int) -> bool:
    return (b & STATUS_MSB) == STATUS_MSB


def has_data_msb(b: int) -> bool:
    return not has_status_msb(b)


def make_status_byte(status: int, channel: Channel) -> int:
    """OR a status nibble (MSB already set) with the channel's low bits."""
    return status | (int(channel) & CHANNEL_MASK)


def parse_status_nibble(status_byte: int) -> int:
    return status_byte & STATUS_NIBBLE_MASK


def parse_channel_from_status_byte(status_byte: int) -> Channel:
    try:
        return Channel.from_byte(status_byte & CHANNEL_MASK)
    except InvalidChannelError as exc:
        raise UnmarshallingError(
            f"invalid channel ({exc}) from status byte 0x{status_byte:02X}"
        ) from exc
