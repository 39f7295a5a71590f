"""
Bit-field primitives for radio time codes

Generic helpers shared by the DCF77 decoder and encoder: bit-range
extraction, 2-digit BCD decoding, BCD encoding and parity.

Bit positions are 0-based with bit 0 the least significant bit, which for
DCF77 is also second 0 of the minute.

Example: minute 37 in DCF77 seconds 21-27
    - Ones digit (7): 0111 → seconds 21,22,23,24 = 1,1,1,0
    - Tens digit (3): 011  → seconds 25,26,27    = 1,1,0
    - extract_bits(frame, 21, 27) == 0x37, decode_2digit_bcd(0x37) == 37
"""


def extract_bits(x: int, lo: int, hi: int) -> int:
    """
    Extract bits lo..hi (inclusive) of x, shifted down to bit 0.

    Args:
        x: Integer to read from
        lo: Lowest bit position (0-based, inclusive)
        hi: Highest bit position (0-based, inclusive)

    Returns:
        The hi - lo + 1 bit wide field as a non-negative integer

    Examples:
        extract_bits(0b101010, 3, 5) -> 0b101
        extract_bits(0x12345678, 16, 23) -> 0x34
    """
    if lo < 0 or hi < lo:
        raise ValueError(f"Invalid bit range {lo}..{hi}")
    nbits = hi - lo + 1
    mask = (1 << nbits) - 1
    return (x >> lo) & mask


def decode_2digit_bcd(bits: int) -> int:
    """
    Decode a 2-digit BCD value (up to 8 bits): high nibble × 10 + low nibble.

    Nibbles of 10-15 are not rejected; they produce an out-of-range number
    (e.g. 0x1F -> 25). Use is_valid_bcd() first when that matters.
    """
    high_nibble = (bits & 0xF0) >> 4
    low_nibble = bits & 0x0F
    return high_nibble * 10 + low_nibble


def is_valid_bcd(bits: int) -> bool:
    """True if every 4-bit nibble of bits holds a decimal digit (0-9)"""
    while bits:
        if bits & 0x0F > 9:
            return False
        bits >>= 4
    return True


def encode_bcd(n: int) -> int:
    """
    Encode a non-negative integer as packed BCD.

    Each decimal digit takes one nibble, least significant digit in the
    lowest nibble: encode_bcd(123) == 0x123, encode_bcd(0) == 0.
    """
    if n < 0:
        raise ValueError(f"Cannot BCD-encode negative value {n}")

    result = 0
    shift = 0
    while n:
        n, digit = divmod(n, 10)
        result |= digit << shift
        shift += 4  # Each BCD digit uses 4 bits

    return result


def parity(x: int) -> bool:
    """True if x has an odd number of 1-bits"""
    return bin(x).count('1') % 2 == 1


def check_parity(x: int, lo: int, hi: int) -> bool:
    """Parity of bits lo..hi (inclusive) of x"""
    return parity(extract_bits(x, lo, hi))
