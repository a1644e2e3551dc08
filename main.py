from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from core.config import AppConfig
from core.logger import AppLogger
from midi.codec import MessageCodec, format_bytes
from midi.errors import MidiError
from midi.messages import NoteOnMessage
from midi.values import Channel, Note, Velocity
from midi.velocity import VelocityRandomizer


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyboard-io",
        description="Encode a Note-On message with a random velocity, or decode raw MIDI bytes",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help=f"Config file (default: {config.path})")
    parser.add_argument("--note", type=int, default=config.note,
                        help=f"MIDI note number (default: {config.note})")
    parser.add_argument("--vel", type=int, default=config.velocity,
                        help=f"MIDI note velocity, clamped to 0-127 (default: {config.velocity})")
    parser.add_argument("--channel", type=int, default=config.channel,
                        help=f"MIDI channel index 0-15 (default: {config.channel})")
    parser.add_argument("--min-vel", type=int, default=config.min_velocity,
                        help="Lowest random velocity (inclusive)")
    parser.add_argument("--max-vel", type=int, default=config.max_velocity,
                        help="Highest random velocity (inclusive)")
    parser.add_argument("--seed", type=int, default=config.random_seed,
                        help="Seed for the velocity randomizer")
    parser.add_argument("--running-status", action="store_true",
                        default=config.running_status,
                        help="Print the Note-On bytes without the status byte")
    parser.add_argument("--decode", metavar="HEX", default=None,
                        help="Decode a hex byte string such as '91 40 20' and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Echo MIDI log lines")
    return parser


def _config_path(argv: list[str] | None) -> Path | None:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path, default=None)
    known, _ = pre.parse_known_args(argv)
    return known.config


def run(args: argparse.Namespace) -> None:
    logger = AppLogger(quiet=not args.verbose)
    codec = MessageCodec(logger=logger)

    if args.decode is not None:
        try:
            data = bytes.fromhex(args.decode)
        except ValueError as exc:
            raise MidiError(f"'{args.decode}' is not a hex byte string") from exc
        print(codec.decode(data))
        return

    rng = random.Random(args.seed) if args.seed is not None else None
    randomizer = VelocityRandomizer(rng=rng, logger=logger)

    print(f"MIDI note number: {args.note}")
    print(f"MIDI note velocity: {int(Velocity(args.vel))}")

    random_vel = randomizer.safe_random_velocity_in_range(args.min_vel, args.max_vel)
    print(f"Random MIDI note velocity: {int(random_vel)}")

    message = NoteOnMessage(
        channel=Channel(args.channel), note=Note(args.note), velocity=random_vel,
    )
    if args.running_status:
        data = codec.encode_running_status(message)
    else:
        data = codec.encode(message)
    print(f"{message.name} bytes: {format_bytes(data)}")


def main(argv: list[str] | None = None) -> None:
    config = AppConfig(path=_config_path(argv))
    args = build_parser(config).parse_args(argv)
    try:
        run(args)
    except MidiError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
