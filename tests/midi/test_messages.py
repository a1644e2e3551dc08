import dataclasses

import mido
import pytest

from midi.errors import (
    InvalidNoteError, InvalidPitchBendError, InvalidProgramError,
    UnmarshallingError,
)
from midi.messages import (
    MESSAGE_VERSION, ChannelPressureMessage, NoteOffMessage, NoteOnMessage,
    PitchBendChangeMessage, PolyphonicKeyPressureMessage, ProgramChangeMessage,
)
from midi.values import Channel, Note, PitchBend, Pressure, Program, Velocity


SAMPLES = [
    NoteOffMessage(channel=1, note=64, velocity=32),
    NoteOnMessage(channel=1, note=64, velocity=32),
    PolyphonicKeyPressureMessage(channel=9, note=36, pressure=100),
    ProgramChangeMessage(channel=15, program=98),
    ChannelPressureMessage(channel=1, note=64, pressure=32),
    PitchBendChangeMessage(channel=1, pitch_bend=7650),
    PitchBendChangeMessage(channel=0, pitch_bend=-8192),
]

LENGTHS = {
    NoteOffMessage: 3,
    NoteOnMessage: 3,
    PolyphonicKeyPressureMessage: 3,
    ProgramChangeMessage: 2,
    ChannelPressureMessage: 3,
    PitchBendChangeMessage: 3,
}


def _ids(msg):
    return type(msg).__name__


@pytest.mark.parametrize("message", SAMPLES, ids=_ids)
def test_encoded_length(message):
    assert len(message.encode()) == LENGTHS[type(message)]
    assert len(message.encode_running_status()) == LENGTHS[type(message)] - 1


@pytest.mark.parametrize("message", SAMPLES, ids=_ids)
def test_round_trip(message):
    cls = type(message)
    assert cls.decode(message.encode()) == message


@pytest.mark.parametrize("message", SAMPLES, ids=_ids)
def test_running_status_round_trip_with_default_channel(message):
    cls = type(message)
    at_default = dataclasses.replace(message, channel=0)
    decoded = cls.decode_running_status(at_default.encode_running_status())
    assert decoded == at_default
    assert decoded.channel == 0


@pytest.mark.parametrize("message", SAMPLES, ids=_ids)
def test_running_status_drops_status_byte(message):
    assert message.encode_running_status() == message.encode()[1:]


@pytest.mark.parametrize("cls", list(LENGTHS), ids=lambda c: c.__name__)
def test_decode_wrong_length(cls):
    length = LENGTHS[cls]
    for size in (length - 1, length + 1):
        with pytest.raises(UnmarshallingError, match=f"made up of {length} bytes"):
            cls.decode(bytes([0x90] + [0x00] * (size - 1)))
    for size in (length - 2, length):
        with pytest.raises(UnmarshallingError, match="running status"):
            cls.decode_running_status(bytes([0x00] * size))


@pytest.mark.parametrize("cls", list(LENGTHS), ids=lambda c: c.__name__)
def test_decode_requires_status_msb(cls):
    data = bytes([0b00010001] + [0x00] * (LENGTHS[cls] - 1))
    with pytest.raises(UnmarshallingError, match="status MSB"):
        cls.decode(data)


def test_note_on_vector():
    data = bytes([0b10010001, 0b01000000, 0b00100000])
    message = NoteOnMessage.decode(data)
    assert message == NoteOnMessage(channel=1, note=64, velocity=32)
    assert message.channel == 1
    assert message.note == 64
    assert message.velocity == 32
    assert message.encode() == data


def test_note_on_without_status_msb_fails():
    with pytest.raises(UnmarshallingError):
        NoteOnMessage.decode([0b00010001, 0b01000000, 0b00100000])


def test_pitch_bend_vector():
    message = PitchBendChangeMessage(channel=1, pitch_bend=7650)
    assert message.encode() == bytes([0b11010001 | 0xF0, 0b11100010, 0b00011101])
    assert message.encode_running_status() == bytes([0xE2, 0x1D])


def test_program_change_vector():
    message = ProgramChangeMessage.decode([0b11000001, 0b01100010])
    assert message == ProgramChangeMessage(channel=1, program=98)


def test_channel_pressure_vector():
    message = ChannelPressureMessage.decode([0b11010001, 0b01000000, 0b00100000])
    assert message.channel == 1
    assert message.note == 64
    assert message.pressure == 32


def test_invalid_note_byte_wraps_domain_error():
    with pytest.raises(UnmarshallingError) as excinfo:
        NoteOnMessage.decode([0x91, 0xC8, 0x20])
    assert isinstance(excinfo.value.__cause__, InvalidNoteError)

    with pytest.raises(UnmarshallingError) as excinfo:
        PolyphonicKeyPressureMessage.decode_running_status([0x80, 0x20])
    assert isinstance(excinfo.value.__cause__, InvalidNoteError)


def test_invalid_program_byte_wraps_domain_error():
    with pytest.raises(UnmarshallingError) as excinfo:
        ProgramChangeMessage.decode_running_status([0x80])
    assert isinstance(excinfo.value.__cause__, InvalidProgramError)


def test_invalid_pitch_bend_bytes_wrap_domain_error():
    with pytest.raises(UnmarshallingError) as excinfo:
        PitchBendChangeMessage.decode([0xF1, 0x7F, 0x7F])
    assert isinstance(excinfo.value.__cause__, InvalidPitchBendError)


def test_velocity_and_pressure_bytes_clamp_on_decode():
    assert NoteOffMessage.decode([0x80, 0x40, 0xFF]).velocity == 127
    assert ChannelPressureMessage.decode_running_status([0x40, 0xFF]).pressure == 127


def test_fields_are_coerced_to_value_types():
    message = NoteOnMessage(channel=2, note=60, velocity=300)
    assert isinstance(message.channel, Channel)
    assert isinstance(message.note, Note)
    assert isinstance(message.velocity, Velocity)
    assert message.velocity == 127
    assert isinstance(PolyphonicKeyPressureMessage(pressure=5).pressure, Pressure)
    assert isinstance(ProgramChangeMessage(program=5).program, Program)
    assert isinstance(PitchBendChangeMessage(pitch_bend=5).pitch_bend, PitchBend)


def test_construction_rejects_invalid_fields():
    with pytest.raises(InvalidNoteError):
        NoteOnMessage(note=128)
    with pytest.raises(InvalidPitchBendError):
        PitchBendChangeMessage(pitch_bend=9000)


def test_messages_are_immutable():
    message = NoteOnMessage(channel=1, note=64, velocity=32)
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.note = 65


def test_default_message_encodes_zero_fields():
    assert NoteOffMessage().encode() == bytes([0x80, 0x00, 0x00])
    assert PitchBendChangeMessage().encode() == bytes([0xF0, 0x00, 0x00])


def test_variants_with_same_fields_are_not_equal():
    assert NoteOnMessage(note=64) != NoteOffMessage(note=64)


def test_message_names():
    assert NoteOffMessage().name == "Note-Off"
    assert NoteOnMessage().name == "Note-On"
    assert PolyphonicKeyPressureMessage().name == "Polyphonic Key Pressure"
    assert ProgramChangeMessage().name == "Program Change"
    assert ChannelPressureMessage().name == "Channel Pressure"
    assert PitchBendChangeMessage().name == "Pitch Bend Change"


def test_message_strings():
    assert MESSAGE_VERSION == "v1"
    assert str(NoteOffMessage(channel=1, note=64, velocity=32)) == "v1:Note-Off:1:64:32"
    assert str(ProgramChangeMessage(channel=1, program=64)) == "v1:Program Change:1:64"
    assert str(PitchBendChangeMessage(channel=1, pitch_bend=-20)) == "v1:Pitch Bend Change:1:-20"
    assert str(ChannelPressureMessage(channel=3, note=60, pressure=10)) == "v1:Channel Pressure:3:60:10"


@pytest.mark.parametrize("message, reference", [
    (NoteOffMessage(channel=3, note=60, velocity=100),
     mido.Message("note_off", channel=3, note=60, velocity=100)),
    (NoteOnMessage(channel=0, note=127, velocity=1),
     mido.Message("note_on", channel=0, note=127, velocity=1)),
    (PolyphonicKeyPressureMessage(channel=2, note=60, pressure=90),
     mido.Message("polytouch", channel=2, note=60, value=90)),
    (ProgramChangeMessage(channel=15, program=127),
     mido.Message("program_change", channel=15, program=127)),
])
def test_matches_mido_encoding(message, reference):
    assert message.encode() == bytes(reference.bytes())
    assert type(message).decode(reference.bytes()) == message
