"""
DCF77 Frame Data Model

One minute of DCF77 time code held as an immutable integer. Bit i is the
value transmitted in second i of the minute.

Usage:
    frame = Frame.from_string("0000101001010010001011100100110000010100...")
    frame[20]          # start-of-time marker, 1
    frame.bits(21, 27) # raw minute field (BCD)
    frame[21:28]       # same field, Python slice form
    print(frame)       # "Date: ..." / "Binary representation: ..."
"""

import operator
from dataclasses import dataclass
from typing import Union

from ..interfaces.errors import DecodeError, StructuralError
from .bitfield import extract_bits
from .dcf77_constants import FRAME_BITS, FRAME_MAX, FRAME_FIELDS


@dataclass(frozen=True)
class Frame:
    """Validated 60-bit DCF77 frame"""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool):
            raise TypeError("Frame value must be an int, got bool")
        try:
            value = operator.index(self.value)
        except TypeError:
            raise TypeError(
                f"Frame value must be an int, got {type(self.value).__name__}"
            ) from None
        # numpy integers and other int-likes are stored as plain int
        object.__setattr__(self, 'value', value)

        if self.value < 0:
            raise StructuralError("frame shape", detail=f"negative value {self.value}")
        if self.value >= FRAME_MAX:
            raise StructuralError(
                "frame shape",
                detail=f"top 4 bits must be zero, got {self.value:#018x}"
            )

    @classmethod
    def from_int(cls, value: int) -> "Frame":
        return cls(value)

    @classmethod
    def from_string(cls, bits: str) -> "Frame":
        """
        Build a frame from 60 characters of '0'/'1'.

        Character i (left to right) is bit i, so the string reads in
        transmission order.
        """
        if len(bits) != FRAME_BITS:
            raise StructuralError(
                "frame shape",
                detail=f"expected {FRAME_BITS} characters, got {len(bits)}"
            )
        if set(bits) - {'0', '1'}:
            raise StructuralError("frame shape", detail="characters must be '0' or '1'")
        # Reverse so that the first character lands in the least significant bit
        return cls(int(bits[::-1], 2))

    @classmethod
    def parse(cls, data: Union["Frame", int, str]) -> "Frame":
        """Accept a Frame, an integer or a bit string"""
        if isinstance(data, Frame):
            return data
        if isinstance(data, str):
            return cls.from_string(data.strip())
        return cls(data)

    def __getitem__(self, key: Union[int, slice]) -> int:
        if isinstance(key, slice):
            start, stop, step = key.indices(FRAME_BITS)
            if step != 1:
                raise ValueError("Frame slices do not support a step")
            if stop <= start:
                raise ValueError(f"Empty bit range {start}:{stop}")
            return self.bits(start, stop - 1)
        if not 0 <= key < FRAME_BITS:
            raise IndexError(f"Second {key} out of range 0..{FRAME_BITS - 1}")
        return (self.value >> key) & 1

    def bits(self, lo: int, hi: int) -> int:
        """Bits lo..hi inclusive, right aligned"""
        if hi >= FRAME_BITS:
            raise IndexError(f"Second {hi} out of range 0..{FRAME_BITS - 1}")
        return extract_bits(self.value, lo, hi)

    def field(self, name: str) -> int:
        """Raw value of a named field from FRAME_FIELDS"""
        lo, hi = FRAME_FIELDS[name]
        return self.bits(lo, hi)

    def to_bitstring(self) -> str:
        return ''.join(str((self.value >> i) & 1) for i in range(FRAME_BITS))

    def __int__(self) -> int:
        return self.value

    def __len__(self) -> int:
        return FRAME_BITS

    def __str__(self) -> str:
        from .dcf77_decoder import decode

        try:
            date = decode(self).isoformat()
        except DecodeError:
            date = "Invalid date"
        return f"Date: {date}\nBinary representation: {self.to_bitstring()}"
