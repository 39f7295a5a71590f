#!/usr/bin/env python3
"""
DCF77 Time Code Encoder

Builds the 60-bit DCF77 frame for a given minute. Used by the tests as the
inverse of the decoder and by the signal generator to simulate a transmitter.

    encoder = DCF77Encoder()
    frame = encoder.encode(datetime(2025, 7, 17, 20, 48, tzinfo=CENTRAL_EUROPE))
    frame.to_bitstring()
    # '000000000000000001001000100100000011111010001111001010010010'

Bits 0, 15, 19, 59 and the civil-warning block (1-14) are always 0: this
encoder never announces leap seconds or transmits weather data.

Only the year within the century is encoded, so frames for years outside
2000-2099 decode to the wrong century. This is not checked.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .bitfield import check_parity, encode_bcd
from .dcf77_constants import CEST_OFFSET, FRAME_FIELDS, PARITY_FIELDS
from .dcf77_frame import Frame
from .dst import CENTRAL_EUROPE, transition_within

logger = logging.getLogger(__name__)


class DCF77Encoder:
    """Encoder for DCF77 minute frames"""

    def encode(self, dt: datetime) -> Frame:
        """
        Encode the minute containing dt.

        Args:
            dt: Timezone-aware datetime (any zone); seconds are ignored

        Returns:
            Frame for that minute in Central-European time
        """
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError(f"Cannot encode naive datetime {dt.isoformat()}")

        # Through UTC so wall-clock times inside the spring gap are normalised
        local = dt.astimezone(timezone.utc).astimezone(CENTRAL_EUROPE)
        local = local.replace(second=0, microsecond=0)
        cest = local.utcoffset() == CEST_OFFSET

        value = 0

        def set_field(name: str, bits: int):
            nonlocal value
            bit_range = FRAME_FIELDS[name]
            mask = (1 << bit_range.width) - 1
            value |= (bits & mask) << bit_range.lo

        set_field('summer_time_announcement', int(transition_within(local)))
        set_field('cest', int(cest))
        set_field('cet', int(not cest))
        set_field('start_of_time', 1)

        set_field('minute', encode_bcd(local.minute))
        set_field('hour', encode_bcd(local.hour))
        set_field('day', encode_bcd(local.day))
        set_field('weekday', encode_bcd(local.isoweekday()))
        set_field('month', encode_bcd(local.month))
        set_field('year', encode_bcd(local.year % 100))

        # Parity bits cover the fields written above
        for parity_bit, (lo, hi) in PARITY_FIELDS.items():
            set_field(parity_bit, int(check_parity(value, lo, hi)))

        frame = Frame(value)
        logger.debug(f"Encoded {local.isoformat()} as {frame.to_bitstring()}")
        return frame

    def encode_components(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        cest: Optional[bool] = None
    ) -> Frame:
        """
        Encode a Central-European wall-clock minute.

        Args:
            cest: For the repeated autumn hour, False selects the second
                  (CET) occurrence; None or True the first (CEST) one.
                  Ignored for unambiguous times.
        """
        fold = 1 if cest is False else 0
        dt = datetime(year, month, day, hour, minute, tzinfo=CENTRAL_EUROPE, fold=fold)
        return self.encode(dt)


def encode(dt: datetime) -> Frame:
    """Encode one minute with a default encoder"""
    return DCF77Encoder().encode(dt)


def encode_components(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    cest: Optional[bool] = None
) -> Frame:
    """Encode Central-European wall-clock components with a default encoder"""
    return DCF77Encoder().encode_components(year, month, day, hour, minute, cest)


def encode_utc_timestamp(timestamp: float) -> Frame:
    """Encode the minute containing a Unix timestamp"""
    return encode(datetime.fromtimestamp(timestamp, tz=timezone.utc))
