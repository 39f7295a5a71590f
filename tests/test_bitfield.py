"""
Unit tests for bit-field primitives.

Tests bit extraction, BCD decoding/encoding and parity against plain
integer arithmetic.
"""

import pytest


class TestExtractBits:
    """Test bit-range extraction."""

    def test_documented_examples(self):
        from radio_clock.timing.bitfield import extract_bits

        assert extract_bits(0b101010, 3, 5) == 0b101
        assert extract_bits(0x12345678, 0, 7) == 0x78
        assert extract_bits(0x12345678, 16, 23) == 0x34

    def test_matches_shift_and_mask(self):
        """extract_bits(x, lo, hi) == (x >> lo) & ((1 << (hi-lo+1)) - 1)"""
        from radio_clock.timing.bitfield import extract_bits

        values = [0, 1, 0xFF, 0x0123456789ABCDE, (1 << 60) - 1, 0x5A5A5A5A5A5A5A5]
        for x in values:
            for lo in range(0, 60, 7):
                for hi in range(lo, 60, 5):
                    expected = (x >> lo) & ((1 << (hi - lo + 1)) - 1)
                    assert extract_bits(x, lo, hi) == expected

    def test_single_bit(self):
        from radio_clock.timing.bitfield import extract_bits

        assert extract_bits(1 << 20, 20, 20) == 1
        assert extract_bits(1 << 20, 19, 19) == 0

    def test_invalid_range_rejected(self):
        from radio_clock.timing.bitfield import extract_bits

        with pytest.raises(ValueError):
            extract_bits(0xFF, 5, 4)
        with pytest.raises(ValueError):
            extract_bits(0xFF, -1, 4)


class TestBCD:
    """Test BCD decoding and encoding."""

    def test_decode_known_value(self):
        from radio_clock.timing.bitfield import decode_2digit_bcd

        assert decode_2digit_bcd(0x23) == 23
        assert decode_2digit_bcd(0x00) == 0
        assert decode_2digit_bcd(0x99) == 99

    def test_round_trip_0_to_99(self):
        from radio_clock.timing.bitfield import decode_2digit_bcd, encode_bcd

        for n in range(100):
            assert decode_2digit_bcd(encode_bcd(n)) == n

    def test_encode_multi_digit(self):
        from radio_clock.timing.bitfield import encode_bcd

        assert encode_bcd(0) == 0
        assert encode_bcd(7) == 0x7
        assert encode_bcd(123) == 0x123
        assert encode_bcd(4296) == 0x4296

    def test_encode_negative_rejected(self):
        from radio_clock.timing.bitfield import encode_bcd

        with pytest.raises(ValueError):
            encode_bcd(-1)

    def test_invalid_nibble_is_not_rejected(self):
        """Nibbles above 9 decode to an out-of-range number."""
        from radio_clock.timing.bitfield import decode_2digit_bcd

        assert decode_2digit_bcd(0x1F) == 25
        assert decode_2digit_bcd(0xA0) == 100

    def test_is_valid_bcd(self):
        from radio_clock.timing.bitfield import is_valid_bcd, encode_bcd

        for n in range(100):
            assert is_valid_bcd(encode_bcd(n))
        assert not is_valid_bcd(0x1A)
        assert not is_valid_bcd(0xF0)
        assert not is_valid_bcd(0x5C)


class TestParity:
    """Test parity computation."""

    def test_parity_counts_ones(self):
        from radio_clock.timing.bitfield import parity

        assert parity(0b101010) is True
        assert parity(0b011101) is False
        assert parity(0) is False

    def test_parity_0_to_99(self):
        from radio_clock.timing.bitfield import parity

        for x in range(100):
            ones = sum((x >> i) & 1 for i in range(8))
            assert parity(x) == (ones % 2 == 1)

    def test_check_parity_over_ranges(self):
        from radio_clock.timing.bitfield import check_parity

        x = 0b1011_0110_1110_0001
        for lo in range(16):
            for hi in range(lo, 16):
                ones = sum((x >> i) & 1 for i in range(lo, hi + 1))
                assert check_parity(x, lo, hi) == (ones % 2 == 1)
