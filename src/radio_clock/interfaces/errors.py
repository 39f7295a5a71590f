"""
Decode Error Types

Every frame rejection raised by the DCF77 decoder is a DecodeError. The
subclass tells which kind of invariant failed, `field` names the implicated
marker or field, and `frame` keeps the raw 60-bit value for diagnosis.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base class for frames that cannot be turned into a datetime."""

    kind = "decode"

    def __init__(self, field: str, frame: Optional[int] = None, detail: str = ""):
        self.field = field
        self.frame = frame
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"{self.kind} error: {self.field}"
        if self.detail:
            message += f" ({self.detail})"
        if self.frame is not None:
            bits = ''.join(str((self.frame >> i) & 1) for i in range(60))
            message += f" [frame {bits}]"
        return message


class StructuralError(DecodeError):
    """Marker bit wrong, frame malformed, or fields not a calendar date."""
    kind = "structural"


class ParityError(DecodeError):
    """Transmitted parity bit disagrees with its data range."""
    kind = "parity"


class ConsistencyError(DecodeError):
    """Two independently derived pieces of information disagree."""
    kind = "consistency"
