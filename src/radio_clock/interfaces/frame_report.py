"""
Frame Report Data Model

Summary of one received DCF77 frame as seen by the decoder, whether or not it
decoded. This is what the command line prints with --json and what logging
consumers can store per minute.

Contract Version: 1.0.0
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional
import json

from .errors import ConsistencyError, DecodeError, ParityError, StructuralError


class DecodeStatus(str, Enum):
    """Outcome of decoding a frame."""
    VALID = "VALID"
    STRUCTURAL_ERROR = "STRUCTURAL_ERROR"
    PARITY_ERROR = "PARITY_ERROR"
    CONSISTENCY_ERROR = "CONSISTENCY_ERROR"

    @classmethod
    def from_error(cls, error: DecodeError) -> "DecodeStatus":
        if isinstance(error, ParityError):
            return cls.PARITY_ERROR
        if isinstance(error, ConsistencyError):
            return cls.CONSISTENCY_ERROR
        if isinstance(error, StructuralError):
            return cls.STRUCTURAL_ERROR
        raise TypeError(f"Unknown decode error type {type(error).__name__}")


@dataclass
class FrameReport:
    """
    Decoded view of a single frame.

    Flag fields are the raw transmitted bits; they are filled in even when
    the frame failed validation.
    """
    bits: str                            # 60 characters, second 0 first
    value: int
    status: DecodeStatus = DecodeStatus.VALID

    # Decoded time (VALID only)
    datetime: Optional[str] = None       # ISO 8601 with offset
    utc_offset_hours: Optional[float] = None

    # Raw flags
    summer_time: bool = False            # CEST bit
    summer_time_announcement: bool = False
    leap_second_announcement: bool = False
    call_bit: bool = False
    civil_warning: int = 0               # Seconds 1-14, undecoded

    # Failure details
    error_field: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.status == DecodeStatus.VALID

    def to_dict(self) -> dict:
        data = asdict(self)
        data['status'] = self.status.value
        return data

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "FrameReport":
        """Deserialize from JSON."""
        data = json.loads(json_str)
        data['status'] = DecodeStatus(data.get('status', 'VALID'))
        return cls(**data)
