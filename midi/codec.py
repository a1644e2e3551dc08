from __future__ import annotations

from dataclasses import replace
from typing import Protocol, Sequence, Union

from core.logger import AppLogger
from midi.errors import MarshallingError, UnmarshallingError
from midi.messages import (
    ChannelPressureMessage, NoteOffMessage, NoteOnMessage,
    PitchBendChangeMessage, PolyphonicKeyPressureMessage, ProgramChangeMessage,
)
from midi.status import has_status_msb, parse_channel_from_status_byte, parse_status_nibble


class MessageMarshaler(Protocol):
    def encode(self) -> bytes: ...


class MessageUnmarshaler(Protocol):
    @classmethod
    def decode(cls, data: Sequence[int]): ...


class RunningStatusMessageMarshaler(Protocol):
    def encode_running_status(self) -> bytes: ...


class RunningStatusMessageUnmarshaler(Protocol):
    @classmethod
    def decode_running_status(cls, data: Sequence[int]): ...


class MessageBuilder(MessageMarshaler, MessageUnmarshaler, Protocol):
    pass


class RunningStatusMessageBuilder(
    RunningStatusMessageMarshaler, RunningStatusMessageUnmarshaler, Protocol,
):
    pass


ChannelVoiceMessage = Union[
    NoteOffMessage,
    NoteOnMessage,
    PolyphonicKeyPressureMessage,
    ProgramChangeMessage,
    ChannelPressureMessage,
    PitchBendChangeMessage,
]

# Closed set of supported variants, keyed by status nibble.
MESSAGE_TYPES: dict[int, type] = {
    cls.STATUS: cls
    for cls in (
        NoteOffMessage,
        NoteOnMessage,
        PolyphonicKeyPressureMessage,
        ProgramChangeMessage,
        ChannelPressureMessage,
        PitchBendChangeMessage,
    )
}


def _message_type_for(status: int) -> type:
    cls = MESSAGE_TYPES.get(parse_status_nibble(status))
    if cls is None:
        raise UnmarshallingError(
            f"status byte 0x{status:02X} is not a supported Channel Voice message"
        )
    return cls


def _check_message(message: object) -> None:
    if type(message) not in MESSAGE_TYPES.values():
        raise MarshallingError(
            f"{type(message).__name__} is not a Channel Voice message"
        )


def encode(message: ChannelVoiceMessage) -> bytes:
    _check_message(message)
    return message.encode()


def encode_running_status(message: ChannelVoiceMessage) -> bytes:
    _check_message(message)
    return message.encode_running_status()


def decode(data: Sequence[int]) -> ChannelVoiceMessage:
    """Decode a full message, picking its variant from the status byte."""
    if len(data) == 0:
        raise UnmarshallingError("cannot decode an empty MIDI message")
    if not has_status_msb(data[0]):
        raise UnmarshallingError(
            f"first byte 0x{data[0]:02X} of a MIDI message must have a status MSB"
        )
    return _message_type_for(data[0]).decode(data)


def decode_running_status(status: int, data: Sequence[int]) -> ChannelVoiceMessage:
    """Decode running status data bytes under a previously seen status byte.

    The status byte supplies both the variant and the channel, which the
    data bytes alone do not carry.
    """
    if not has_status_msb(status):
        raise UnmarshallingError(
            f"running status context 0x{status:02X} is not a status byte"
        )
    cls = _message_type_for(status)
    channel = parse_channel_from_status_byte(status)
    return replace(cls.decode_running_status(data), channel=channel)


def format_bytes(data: bytes | Sequence[int]) -> str:
    return " ".join(f"{b:02X}" for b in data)


class MessageCodec:
    """Encodes and decodes Channel Voice messages, logging the traffic."""

    def __init__(self, logger: AppLogger | None = None) -> None:
        self._logger = logger or AppLogger()

    def encode(self, message: ChannelVoiceMessage) -> bytes:
        data = encode(message)
        self._logger.midi(f"TX: {format_bytes(data)} ({message})")
        return data

    def encode_running_status(self, message: ChannelVoiceMessage) -> bytes:
        data = encode_running_status(message)
        self._logger.midi(f"TX running status: {format_bytes(data)} ({message})")
        return data

    def decode(self, data: Sequence[int]) -> ChannelVoiceMessage:
        try:
            message = decode(data)
        except UnmarshallingError as exc:
            self._logger.midi(f"RX error: {format_bytes(data)}: {exc}")
            raise
        self._logger.midi(f"RX: {format_bytes(data)} ({message})")
        return message

    def decode_running_status(self, status: int, data: Sequence[int]) -> ChannelVoiceMessage:
        try:
            message = decode_running_status(status, data)
        except UnmarshallingError as exc:
            self._logger.midi(f"RX error: [{status:02X}] {format_bytes(data)}: {exc}")
            raise
        self._logger.midi(f"RX running status: [{status:02X}] {format_bytes(data)} ({message})")
        return message
