#!/usr/bin/env python3
"""
radio-clock: DCF77 Time Code Tool

Command line entry point. Decodes frames handed over by a receiver, encodes
datetimes into frames, and writes simulated DCF77 signals.

Usage:
    # Decode one or more frames (bit 0 first)
    radio-clock decode 000010100101001000101110010011000001010010001100010000010000

    # Same, as JSON reports
    radio-clock decode --json <bits> <bits>

    # Encode a Central-European wall-clock time (or any ISO time with offset)
    radio-clock encode 2025-07-17T20:48

    # Write a 60-second envelope for the current minute
    radio-clock simulate --output minute.npy --sample-rate 1000

    # Use a configuration file
    radio-clock --config /etc/radio-clock/config.toml decode <bits>
"""

import argparse
import copy
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import toml

# Set up logging before imports that use it
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('radio-clock')

from .interfaces.errors import DecodeError
from .interfaces.frame_report import FrameReport
from .timing.dcf77_decoder import describe
from .timing.dcf77_encoder import DCF77Encoder
from .timing.dcf77_signal import DCF77SignalGenerator
from .timing.dst import CENTRAL_EUROPE

DEFAULT_CONFIG: Dict[str, Any] = {
    'general': {
        'log_level': 'INFO',
    },
    'decoder': {
        'strict_bcd': False,
    },
    'signal': {
        'sample_rate': 1000,
        'carrier_hz': 0,
        'low_amplitude': 0.15,
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from TOML file.

    Sections missing from the file keep their defaults; a missing file gives
    the defaults unchanged.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            loaded = toml.load(f)
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using defaults")

    return config


def parse_datetime(text: Optional[str]) -> datetime:
    """
    Parse an ISO 8601 datetime for encoding.

    Values without an offset are Central-European wall-clock times; no value
    means now.
    """
    if not text:
        return datetime.now(tz=CENTRAL_EUROPE)

    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=CENTRAL_EUROPE)
    return dt


def cmd_decode(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    strict_bcd = args.strict_bcd or config['decoder'].get('strict_bcd', False)
    failures = 0

    for bits in args.frames:
        try:
            report = describe(bits, strict_bcd=strict_bcd)
        except DecodeError as e:
            logger.error(f"Rejected input {bits!r}: {e}")
            failures += 1
            continue

        if not report.valid:
            failures += 1
            logger.info(f"Invalid frame ({report.status.value}): {report.error_field}")

        if args.json:
            print(report.to_json())
        else:
            print(_render(report))

    return 1 if failures else 0


def _render(report: FrameReport) -> str:
    """Two-line pretty print, same layout as str(Frame)"""
    date = report.datetime if report.valid else "Invalid date"
    return f"Date: {date}\nBinary representation: {report.bits}"


def cmd_encode(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    try:
        dt = parse_datetime(args.datetime)
    except ValueError as e:
        logger.error(f"Invalid datetime {args.datetime!r}: {e}")
        return 1
    frame = DCF77Encoder().encode(dt)

    if args.verbose:
        print(frame)
    else:
        print(frame.to_bitstring())
    return 0


def cmd_simulate(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    signal_config = config['signal']
    sample_rate = args.sample_rate or signal_config.get('sample_rate', 1000)
    carrier_hz = args.carrier if args.carrier is not None else signal_config.get('carrier_hz', 0)

    generator = DCF77SignalGenerator(
        sample_rate=sample_rate,
        carrier_hz=carrier_hz or None,
        low_amplitude=signal_config.get('low_amplitude', 0.15),
    )

    try:
        dt = parse_datetime(args.datetime)
    except ValueError as e:
        logger.error(f"Invalid datetime {args.datetime!r}: {e}")
        return 1
    waveform = generator.encode_minute(dt, envelope_only=not carrier_hz)

    output = Path(args.output)
    np.save(output, waveform)
    logger.info(
        f"Wrote {len(waveform)} samples ({len(waveform) / sample_rate:.0f} s) "
        f"for {dt.astimezone(CENTRAL_EUROPE).strftime('%Y-%m-%d %H:%M %Z')} to {output}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='radio-clock: DCF77 time code decoder and encoder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    radio-clock decode 000010100101001000101110010011000001010010001100010000010000
    radio-clock encode 2019-10-27T02:30+01:00
    radio-clock simulate 2025-07-17T20:48 --output minute.npy
        """
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to TOML configuration file'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    decode_parser = subparsers.add_parser('decode', help='Decode DCF77 frames')
    decode_parser.add_argument(
        'frames',
        nargs='+',
        help="Frames as 60 characters of 0/1, second 0 first"
    )
    decode_parser.add_argument(
        '--json',
        action='store_true',
        help='Print a JSON report per frame'
    )
    decode_parser.add_argument(
        '--strict-bcd',
        action='store_true',
        help='Reject BCD digits above 9'
    )
    decode_parser.set_defaults(func=cmd_decode)

    encode_parser = subparsers.add_parser('encode', help='Encode a datetime as a DCF77 frame')
    encode_parser.add_argument(
        'datetime',
        nargs='?',
        help='ISO 8601 datetime (default: now; no offset = Central-European time)'
    )
    encode_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print the decoded date along with the bits'
    )
    encode_parser.set_defaults(func=cmd_encode)

    simulate_parser = subparsers.add_parser('simulate', help='Write a simulated DCF77 minute')
    simulate_parser.add_argument(
        'datetime',
        nargs='?',
        help='ISO 8601 datetime (default: now)'
    )
    simulate_parser.add_argument(
        '--output', '-o',
        required=True,
        help='Output .npy file'
    )
    simulate_parser.add_argument(
        '--sample-rate',
        type=int,
        help='Sample rate in Hz (overrides config)'
    )
    simulate_parser.add_argument(
        '--carrier',
        type=float,
        help='Carrier frequency in Hz, 0 for envelope only (overrides config)'
    )
    simulate_parser.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    log_level = str(config['general'].get('log_level', 'INFO')).upper()
    if args.debug:
        log_level = 'DEBUG'
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning(f"Unknown log_level {log_level!r} in config, using INFO")
        log_level = 'INFO'
    logging.getLogger().setLevel(log_level)

    return args.func(args, config)


if __name__ == '__main__':
    sys.exit(main())
