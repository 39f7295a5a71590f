"""
radio-clock: DCF77 Time Code Decoder and Encoder

This package converts between DCF77 longwave time-code frames and
timezone-aware Central-European datetimes. A frame is the 60-bit payload
broadcast during one minute, one bit per second.

Architecture:
    receiver (external) → Frame → decode() → datetime
    datetime → encode() → Frame → DCF77SignalGenerator → simulated signal

Reading the radio signal itself (sampling, pulse classification, minute
alignment) is left to the caller; this package starts at the finished frame.

Version: 1.0.0
"""

__version__ = "1.0.0"

from .interfaces.errors import (
    DecodeError,
    StructuralError,
    ParityError,
    ConsistencyError,
)
from .interfaces.frame_report import DecodeStatus, FrameReport
from .timing.dcf77_frame import Frame
from .timing.dcf77_decoder import DCF77Decoder, decode, describe
from .timing.dcf77_encoder import DCF77Encoder, encode, encode_components

__all__ = [
    "Frame",
    "DCF77Decoder",
    "DCF77Encoder",
    "decode",
    "describe",
    "encode",
    "encode_components",
    "DecodeError",
    "StructuralError",
    "ParityError",
    "ConsistencyError",
    "DecodeStatus",
    "FrameReport",
    "__version__",
]
