#!/usr/bin/env python3
"""
DCF77 Shared Constants - Frame Layout Reference

================================================================================
PURPOSE
================================================================================
Single source of truth for the DCF77 time-code bit layout. The decoder, the
encoder, the frame report and the signal generator all read field positions
from FRAME_FIELDS instead of hard-coding second numbers.

================================================================================
STATION
================================================================================
DCF77 - Physikalisch-Technische Bundesanstalt, Mainflingen, Germany
    Carrier: 77.5 kHz longwave
    Coordinates: 50.0156°N, 9.0108°E
    Time code: one 60-bit frame per minute, one bit per second
    Modulation: carrier amplitude reduced to ~15% at the start of each second,
                100 ms for binary 0, 200 ms for binary 1, no reduction at
                second 59 (minute mark)

================================================================================
TIME CODE FIELD LAYOUT (60 seconds)
================================================================================
    Second  │ Content                    │ Notes
    ────────┼────────────────────────────┼──────────────────────────────
    0       │ Start of minute (M)        │ Always 0
    1-14    │ Civil warning / weather    │ Encrypted, not decoded
    15      │ Call bit (R)               │ Abnormal transmitter operation
    16      │ A1                         │ Summer time change announced
    17      │ Z1                         │ CEST in effect
    18      │ Z2                         │ CET in effect (Z1 != Z2)
    19      │ A2                         │ Leap second announced
    20      │ Start of time (S)          │ Always 1
    21-27   │ Minute                     │ BCD, ones then tens
    28      │ P1                         │ Parity over 21-27
    29-34   │ Hour                       │ BCD, ones then tens
    35      │ P2                         │ Parity over 29-34
    36-41   │ Day of month               │ BCD, ones then tens
    42-44   │ Day of week                │ 1 = Monday .. 7 = Sunday
    45-49   │ Month                      │ BCD, ones then tens
    50-57   │ Year within century        │ BCD, ones then tens
    58      │ P3                         │ Parity over 36-57
    59      │ End of minute              │ No amplitude reduction, read as 0

A parity bit equals the parity of its data range, so data plus parity bit
always hold an even number of ones.

================================================================================
REFERENCES
================================================================================
- PTB, "DCF77 time code", ptb.de dissemination of legal time
- https://en.wikipedia.org/wiki/DCF77#Time_code_interpretation
"""

from datetime import timedelta
from typing import Dict, NamedTuple


class BitRange(NamedTuple):
    """Inclusive range of seconds (bit positions) within a frame"""
    lo: int
    hi: int

    @property
    def width(self) -> int:
        return self.hi - self.lo + 1


# =============================================================================
# FRAME GEOMETRY
# =============================================================================

FRAME_BITS = 60
FRAME_MAX = 1 << FRAME_BITS  # Bits 60-63 of a 64-bit word must be zero

# =============================================================================
# FIELD LAYOUT
# =============================================================================

FRAME_FIELDS: Dict[str, BitRange] = {
    'start_of_minute': BitRange(0, 0),
    'civil_warning': BitRange(1, 14),
    'call_bit': BitRange(15, 15),
    'summer_time_announcement': BitRange(16, 16),
    'cest': BitRange(17, 17),
    'cet': BitRange(18, 18),
    'leap_second_announcement': BitRange(19, 19),
    'start_of_time': BitRange(20, 20),
    'minute': BitRange(21, 27),
    'minute_parity': BitRange(28, 28),
    'hour': BitRange(29, 34),
    'hour_parity': BitRange(35, 35),
    'day': BitRange(36, 41),
    'weekday': BitRange(42, 44),
    'month': BitRange(45, 49),
    'year': BitRange(50, 57),
    'date_parity': BitRange(58, 58),
    'end_of_minute': BitRange(59, 59),
}

# Parity bit -> data range it covers
PARITY_FIELDS: Dict[str, BitRange] = {
    'minute_parity': BitRange(21, 27),
    'hour_parity': BitRange(29, 34),
    'date_parity': BitRange(36, 57),
}

# Fields holding BCD numbers, in transmission order
BCD_FIELDS = ('minute', 'hour', 'day', 'weekday', 'month', 'year')

# =============================================================================
# TIME ZONE
# =============================================================================

TIMEZONE_NAME = 'Europe/Berlin'
CET_OFFSET = timedelta(hours=1)
CEST_OFFSET = timedelta(hours=2)

# Announcement bit A1 is transmitted during the hour before a change
ANNOUNCEMENT_WINDOW = timedelta(hours=1)

# Only the year within the century is transmitted
CENTURY = 2000

# =============================================================================
# SIGNAL PARAMETERS
# =============================================================================

CARRIER_HZ = 77500.0
LOW_AMPLITUDE = 0.15      # Reduced carrier level, relative to full amplitude
ZERO_PULSE_S = 0.1        # Reduction length for binary 0
ONE_PULSE_S = 0.2         # Reduction length for binary 1
