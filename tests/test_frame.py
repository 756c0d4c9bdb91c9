import pytest

from phasm.errors import FrameCorruptedError
from phasm.frame import (
    FORTRESS_COMPACT_FRAME_OVERHEAD,
    FRAME_OVERHEAD,
    MAX_FRAME_BYTES,
    NONCE_LEN,
    SALT_LEN,
    bits_to_bytes,
    build_fortress_compact_frame,
    build_frame,
    bytes_to_bits,
    parse_fortress_compact_frame,
    parse_frame,
)

FIXED_SALT = bytes(range(SALT_LEN))
FIXED_NONCE = bytes(range(100, 100 + NONCE_LEN))


def test_build_parse_roundtrip():
    salt = bytes([1] * SALT_LEN)
    nonce = bytes([2] * NONCE_LEN)
    ciphertext = bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF,
                        0x11, 0x22, 0x33, 0x44, 0x55, 0x66,
                        0x77, 0x88, 0x99, 0x00, 0xAA, 0xBB])
    frame = build_frame(2, salt, nonce, ciphertext)
    parsed = parse_frame(frame)
    assert parsed.plaintext_len == 2
    assert parsed.salt == salt
    assert parsed.nonce == nonce
    assert parsed.ciphertext == ciphertext


def test_corrupted_crc_detected():
    frame = bytearray(build_frame(4, bytes(SALT_LEN), bytes(NONCE_LEN), bytes(20)))
    frame[-1] ^= 0xFF
    with pytest.raises(FrameCorruptedError):
        parse_frame(bytes(frame))


def test_corrupted_length_detected():
    frame = bytearray(build_frame(4, bytes(SALT_LEN), bytes(NONCE_LEN), bytes(20)))
    frame[0] = 0xFF
    with pytest.raises(FrameCorruptedError):
        parse_frame(bytes(frame))


def test_bytes_bits_roundtrip():
    original = bytes([0xDE, 0xAD, 0xBE, 0xEF])
    bits = bytes_to_bits(original)
    assert len(bits) == 32
    assert bits_to_bytes(bits) == original


@pytest.mark.parametrize("data", [b"\x00", b""])
def test_truncated_data_rejected(data):
    with pytest.raises(FrameCorruptedError):
        parse_frame(data)


def test_frame_no_mode_byte():
    salt = bytes([3] * SALT_LEN)
    nonce = bytes([4] * NONCE_LEN)
    ciphertext = bytes([0x55] * 20)
    frame = build_frame(4, salt, nonce, ciphertext)
    assert frame[0] == 0x00
    assert frame[1] == 0x04
    assert len(frame) == 2 + SALT_LEN + NONCE_LEN + 20 + 4
    parsed = parse_frame(frame)
    assert parsed.plaintext_len == 4
    assert parsed.salt == salt
    assert parsed.nonce == nonce
    assert parsed.ciphertext == ciphertext


def test_frame_with_zero_length_data():
    frame = build_frame(0, bytes(SALT_LEN), bytes(NONCE_LEN), bytes(16))
    parsed = parse_frame(frame)
    assert parsed.plaintext_len == 0
    assert len(parsed.ciphertext) == 16


def test_parse_ignores_trailing_padding():
    ciphertext = bytes([7] * 20)
    frame = build_frame(4, FIXED_SALT, FIXED_NONCE, ciphertext)
    parsed = parse_frame(frame + bytes(40))
    assert parsed.ciphertext == ciphertext


def test_truncated_frame_rejected():
    frame = build_frame(4, FIXED_SALT, FIXED_NONCE, bytes(20))
    with pytest.raises(FrameCorruptedError):
        parse_frame(frame[:-1])


def test_build_rejects_mismatched_ciphertext():
    with pytest.raises(ValueError):
        build_frame(4, FIXED_SALT, FIXED_NONCE, bytes(10))


def test_bits_to_bytes_partial_byte():
    assert bits_to_bytes([1, 0, 1, 1, 0]) == bytes([0xB0])


def test_compact_frame_build_parse_roundtrip():
    ciphertext = bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF,
                        0x11, 0x22, 0x33, 0x44, 0x55, 0x66,
                        0x77, 0x88, 0x99, 0x00, 0xAA, 0xBB,
                        0xCC, 0xDD])
    frame = build_fortress_compact_frame(4, ciphertext)
    assert len(frame) == 2 + 20 + 4
    parsed = parse_fortress_compact_frame(frame, FIXED_SALT, FIXED_NONCE)
    assert parsed.plaintext_len == 4
    assert parsed.ciphertext == ciphertext
    assert parsed.salt == FIXED_SALT
    assert parsed.nonce == FIXED_NONCE


def test_compact_frame_smaller_than_full():
    salt = bytes([1] * SALT_LEN)
    nonce = bytes([2] * NONCE_LEN)
    ciphertext = bytes(20)
    full = build_frame(4, salt, nonce, ciphertext)
    compact = build_fortress_compact_frame(4, ciphertext)
    assert len(full) - len(compact) == SALT_LEN + NONCE_LEN
    assert len(full) - len(compact) == 28


def test_compact_frame_corrupted_crc_detected():
    frame = bytearray(build_fortress_compact_frame(4, bytes(20)))
    frame[-1] ^= 0xFF
    with pytest.raises(FrameCorruptedError):
        parse_fortress_compact_frame(bytes(frame), FIXED_SALT, FIXED_NONCE)


@pytest.mark.parametrize("data", [b"\x00", b""])
def test_compact_frame_truncated_rejected(data):
    with pytest.raises(FrameCorruptedError):
        parse_fortress_compact_frame(data, FIXED_SALT, FIXED_NONCE)


def test_compact_frame_zero_length():
    frame = build_fortress_compact_frame(0, bytes(16))
    parsed = parse_fortress_compact_frame(frame, FIXED_SALT, FIXED_NONCE)
    assert parsed.plaintext_len == 0
    assert len(parsed.ciphertext) == 16


def test_compact_frame_overhead_is_28_less():
    full = build_frame(0, FIXED_SALT, FIXED_NONCE, bytes(16))
    compact = build_fortress_compact_frame(0, bytes(16))
    assert len(compact) == FORTRESS_COMPACT_FRAME_OVERHEAD
    assert len(full) - len(compact) == 28


def test_max_frame_bytes():
    empty = build_frame(0, FIXED_SALT, FIXED_NONCE, bytes(16))
    assert len(empty) == FRAME_OVERHEAD == 50
    largest = build_frame(65_535, FIXED_SALT, FIXED_NONCE, bytes(65_535 + 16))
    assert len(largest) == MAX_FRAME_BYTES == 65_585
    parsed = parse_frame(largest)
    assert parsed.plaintext_len == 65_535