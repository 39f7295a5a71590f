#!/usr/bin/env python3
"""
DCF77 Time Code Decoder

Turns one 60-bit DCF77 frame into a timezone-aware Central-European datetime.

================================================================================
VALIDATION CHAIN
================================================================================
Checks run in a fixed order and the first failure is raised; nothing after
it is evaluated. Callers and tests may rely on this order.

     #  │ Check                                 │ Error
    ────┼───────────────────────────────────────┼──────────────────────────────
     1  │ second 0 is 0                         │ StructuralError start-of-minute marker
     2  │ CEST bit != CET bit                   │ ConsistencyError CET/CEST flags
     3  │ second 20 is 1                        │ StructuralError start-of-time marker
     4  │ minute parity (P1)                    │ ParityError minutes
     5  │ hour parity (P2)                      │ ParityError hours
     6  │ read day, weekday, month, year        │ (none)
     7  │ date parity (P3)                      │ ParityError date
     8  │ second 59 is 0                        │ StructuralError end-of-minute marker
     9  │ fields form a real local time         │ StructuralError invalid calendar date
    10  │ weekday matches the date              │ ConsistencyError weekday
    11  │ UTC offset matches CET/CEST bits      │ ConsistencyError timezone offset
    12  │ A1 set iff a change is <= 1 h away    │ ConsistencyError summer-time announcement

Check 12 is skipped when no offset change is found ahead.

================================================================================
AMBIGUITIES
================================================================================
Autumn fallback: 02:00-02:59 local occurs twice. The CEST bit picks the
occurrence (datetime fold 0 = CEST, fold 1 = CET).

Century: only the year within the century is transmitted. Years are taken as
2000-2099. Working the century out from the weekday (a 400-year cycle) would
be possible but is not done.

BCD digits: nibbles 10-15 are decoded silently as numbers (0x1F -> 25) unless
strict_bcd is enabled, in which case they are rejected before the datetime is
built. Most such values fail the calendar check anyway.

================================================================================
USAGE
================================================================================
    dt = decode("000010100101001000101110010011000001010010001100010000010000")
    # 2020-11-12 01:13:00+01:00

    decoder = DCF77Decoder(strict_bcd=True)
    try:
        dt = decoder.decode(frame)
    except ParityError as e:
        print(e.field)  # 'minutes', 'hours' or 'date'
"""

import logging
from datetime import datetime, timezone
from typing import Type, Union

from ..interfaces.errors import (
    ConsistencyError,
    DecodeError,
    ParityError,
    StructuralError,
)
from ..interfaces.frame_report import DecodeStatus, FrameReport
from .bitfield import check_parity, decode_2digit_bcd, is_valid_bcd
from .dcf77_constants import (
    ANNOUNCEMENT_WINDOW,
    BCD_FIELDS,
    CENTURY,
    CEST_OFFSET,
    CET_OFFSET,
    PARITY_FIELDS,
)
from .dcf77_frame import Frame
from .dst import CENTRAL_EUROPE, next_transition

logger = logging.getLogger(__name__)


class DCF77Decoder:
    """
    Decode DCF77 frames into Central-European datetimes.

    Usage:
        decoder = DCF77Decoder()
        dt = decoder.decode(frame)
    """

    def __init__(self, strict_bcd: bool = False):
        """
        Args:
            strict_bcd: Reject BCD nibbles above 9 instead of decoding them
        """
        self.strict_bcd = strict_bcd

    def _reject(
        self,
        error_cls: Type[DecodeError],
        field: str,
        frame: Frame,
        detail: str = ""
    ) -> DecodeError:
        error = error_cls(field, frame.value, detail)
        logger.debug(f"DCF77 frame rejected: {error}")
        return error

    def _bcd(self, frame: Frame, name: str) -> int:
        return decode_2digit_bcd(frame.field(name))

    def _parity_ok(self, frame: Frame, parity_bit: str) -> bool:
        lo, hi = PARITY_FIELDS[parity_bit]
        return check_parity(frame.value, lo, hi) == bool(frame.field(parity_bit))

    def decode(self, data: Union[Frame, int, str]) -> datetime:
        """
        Decode one frame.

        Args:
            data: Frame, 60-bit integer or 60-character bit string

        Returns:
            Aware datetime in Europe/Berlin at minute resolution

        Raises:
            StructuralError, ParityError, ConsistencyError
        """
        frame = Frame.parse(data)

        if frame.field('start_of_minute') != 0:
            raise self._reject(StructuralError, "start-of-minute marker", frame)

        summer_time_announcement = bool(frame.field('summer_time_announcement'))
        cest_in_effect = bool(frame.field('cest'))
        cet_in_effect = bool(frame.field('cet'))
        if cest_in_effect == cet_in_effect:
            raise self._reject(ConsistencyError, "CET/CEST flags", frame)

        if frame.field('start_of_time') != 1:
            raise self._reject(StructuralError, "start-of-time marker", frame)

        minute = self._bcd(frame, 'minute')
        if not self._parity_ok(frame, 'minute_parity'):
            raise self._reject(ParityError, "minutes", frame)

        hour = self._bcd(frame, 'hour')
        if not self._parity_ok(frame, 'hour_parity'):
            raise self._reject(ParityError, "hours", frame)

        day = self._bcd(frame, 'day')
        weekday = self._bcd(frame, 'weekday')
        month = self._bcd(frame, 'month')
        year = self._bcd(frame, 'year') + CENTURY

        if not self._parity_ok(frame, 'date_parity'):
            raise self._reject(ParityError, "date", frame)

        if frame.field('end_of_minute') != 0:
            raise self._reject(StructuralError, "end-of-minute marker", frame)

        if self.strict_bcd:
            for name in BCD_FIELDS:
                if not is_valid_bcd(frame.field(name)):
                    raise self._reject(StructuralError, "invalid BCD digit", frame, name)

        # The leap second bit (A2) is reported by describe() but not validated

        dt = self._build_datetime(frame, year, month, day, hour, minute, cest_in_effect)

        if dt.isoweekday() != weekday:
            raise self._reject(
                ConsistencyError, "weekday", frame,
                f"frame says {weekday}, {dt.date()} is {dt.isoweekday()}"
            )

        expected_offset = CEST_OFFSET if cest_in_effect else CET_OFFSET
        if dt.utcoffset() != expected_offset:
            raise self._reject(
                ConsistencyError, "timezone offset", frame,
                f"{dt.isoformat()} has offset {dt.utcoffset()}"
            )

        transition = next_transition(dt)
        if transition is not None:
            change_due = transition - dt <= ANNOUNCEMENT_WINDOW
            if change_due != summer_time_announcement:
                raise self._reject(
                    ConsistencyError, "summer-time announcement", frame,
                    f"next change at {transition.isoformat()}"
                )

        logger.debug(f"DCF77 frame decoded: {dt.isoformat()}")
        return dt

    def _build_datetime(
        self,
        frame: Frame,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        cest_in_effect: bool
    ) -> datetime:
        # fold=0 is the first (CEST) pass through the fallback hour
        fold = 0 if cest_in_effect else 1
        try:
            dt = datetime(year, month, day, hour, minute, tzinfo=CENTRAL_EUROPE, fold=fold)
        except ValueError as e:
            raise self._reject(StructuralError, "invalid calendar date", frame, str(e)) from e

        # Wall-clock times inside the spring-forward gap do not survive a UTC round trip
        canonical = dt.astimezone(timezone.utc).astimezone(CENTRAL_EUROPE)
        if canonical.replace(tzinfo=None) != dt.replace(tzinfo=None):
            raise self._reject(
                StructuralError, "invalid calendar date", frame,
                f"{dt.replace(tzinfo=None).isoformat()} does not exist in {CENTRAL_EUROPE.key}"
            )

        return canonical


def decode(data: Union[Frame, int, str], strict_bcd: bool = False) -> datetime:
    """Decode one DCF77 frame with a default decoder"""
    return DCF77Decoder(strict_bcd=strict_bcd).decode(data)


def describe(data: Union[Frame, int, str], strict_bcd: bool = False) -> FrameReport:
    """
    Decode a frame into a FrameReport without raising on invalid content.

    Structural errors from building the Frame itself (wrong length, top bits
    set) still propagate: there is nothing to report on.
    """
    frame = Frame.parse(data)
    report = FrameReport(
        bits=frame.to_bitstring(),
        value=frame.value,
        summer_time=bool(frame.field('cest')),
        summer_time_announcement=bool(frame.field('summer_time_announcement')),
        leap_second_announcement=bool(frame.field('leap_second_announcement')),
        call_bit=bool(frame.field('call_bit')),
        civil_warning=frame.field('civil_warning'),
    )

    try:
        dt = DCF77Decoder(strict_bcd=strict_bcd).decode(frame)
    except DecodeError as e:
        report.status = DecodeStatus.from_error(e)
        report.error_field = e.field
        report.error_message = str(e)
        return report

    report.datetime = dt.isoformat()
    report.utc_offset_hours = dt.utcoffset().total_seconds() / 3600
    return report
