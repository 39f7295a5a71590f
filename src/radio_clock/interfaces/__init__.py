"""Data contracts shared with consumers - error types and frame reports."""

from .errors import DecodeError, StructuralError, ParityError, ConsistencyError
from .frame_report import DecodeStatus, FrameReport

__all__ = [
    'DecodeError', 'StructuralError', 'ParityError', 'ConsistencyError',
    'DecodeStatus', 'FrameReport',
]
