"""
Pytest configuration and fixtures for radio-clock tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


@pytest.fixture
def winter_bits():
    """Known frame: Thursday 2020-11-12 01:13 CET."""
    return "000010100101001000101110010011000001010010001100010000010000"


@pytest.fixture
def summer_bits():
    """Known frame: Thursday 2025-07-17 20:48 CEST."""
    return "000000000000000001001000100100000011111010001111001010010010"


@pytest.fixture
def flip():
    """Return a bit string with the given seconds inverted."""
    def _flip(bits, *seconds):
        chars = list(bits)
        for second in seconds:
            chars[second] = '1' if chars[second] == '0' else '0'
        return ''.join(chars)
    return _flip


@pytest.fixture
def central_europe():
    """Europe/Berlin zone used by the decoder."""
    from radio_clock.timing.dst import CENTRAL_EUROPE
    return CENTRAL_EUROPE


@pytest.fixture
def build_frame():
    """
    Build a frame from raw field values, with correct parity unless a parity
    bit is given explicitly. Unspecified fields default to 2020-11-12 01:13 CET.
    """
    from radio_clock.timing.bitfield import check_parity
    from radio_clock.timing.dcf77_constants import FRAME_FIELDS, PARITY_FIELDS
    from radio_clock.timing.dcf77_frame import Frame

    def _build(**fields):
        values = {
            'cet': 1,
            'start_of_time': 1,
            'minute': 0x13,
            'hour': 0x01,
            'day': 0x12,
            'weekday': 4,
            'month': 0x11,
            'year': 0x20,
        }
        parities = {name: fields.pop(name) for name in list(fields) if name in PARITY_FIELDS}
        values.update(fields)

        value = 0
        for name, raw in values.items():
            value |= raw << FRAME_FIELDS[name].lo
        for name, (lo, hi) in PARITY_FIELDS.items():
            bit = parities.get(name, int(check_parity(value, lo, hi)))
            value |= bit << FRAME_FIELDS[name].lo
        return Frame(value)

    return _build
