"""Payload frame construction and parsing.

Full frame layout::

    [2 bytes ] plaintext length (big-endian u16)
    [16 bytes] key-derivation salt
    [12 bytes] cipher nonce
    [N bytes ] ciphertext (plaintext length + 16-byte auth tag)
    [4 bytes ] CRC-32 of everything above

The compact fortress frame omits salt and nonce.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Iterable

from phasm.errors import FrameCorruptedError

SALT_LEN = 16
NONCE_LEN = 12
TAG_LEN = 16
CRC_LEN = 4

MODE_GHOST = 0x01
MODE_ARMOR = 0x02

FRAME_OVERHEAD = 2 + SALT_LEN + NONCE_LEN + TAG_LEN + CRC_LEN
MAX_FRAME_BYTES = 65_535 + FRAME_OVERHEAD
MAX_FRAME_BITS = MAX_FRAME_BYTES * 8

FORTRESS_COMPACT_FRAME_OVERHEAD = 2 + TAG_LEN + CRC_LEN


@dataclass(frozen=True)
class ParsedFrame:
    """Fields recovered from a payload frame."""

    plaintext_len: int
    salt: bytes
    nonce: bytes
    ciphertext: bytes


def _check_plaintext_len(plaintext_len: int) -> None:
    if not 0 <= plaintext_len <= 0xFFFF:
        raise ValueError(f"plaintext length {plaintext_len} does not fit in 16 bits")


def _with_crc(body: bytes) -> bytes:
    return body + zlib.crc32(body).to_bytes(4, "big")


def build_frame(plaintext_len: int, salt: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """Build a full payload frame from encrypted components."""
    _check_plaintext_len(plaintext_len)
    if len(salt) != SALT_LEN:
        raise ValueError(f"salt must be {SALT_LEN} bytes")
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"nonce must be {NONCE_LEN} bytes")
    if len(ciphertext) != plaintext_len + TAG_LEN:
        raise ValueError("ciphertext length mismatch")
    body = plaintext_len.to_bytes(2, "big") + bytes(salt) + bytes(nonce) + bytes(ciphertext)
    return _with_crc(body)


def _verified_payload(data: bytes, header_len: int) -> tuple[int, bytes]:
    """Return (plaintext_len, payload without CRC) after length and CRC checks."""
    if len(data) < 2:
        raise FrameCorruptedError()
    plaintext_len = int.from_bytes(data[:2], "big")
    total = 2 + header_len + plaintext_len + TAG_LEN + CRC_LEN
    if total > MAX_FRAME_BYTES or len(data) < total:
        raise FrameCorruptedError()
    payload = data[: total - CRC_LEN]
    stored = int.from_bytes(data[total - CRC_LEN : total], "big")
    if stored != zlib.crc32(payload):
        raise FrameCorruptedError()
    return plaintext_len, payload


def parse_frame(data: bytes) -> ParsedFrame:
    """Parse a full frame; trailing padding after the frame is ignored.

    Raises FrameCorruptedError if the frame is truncated or its CRC fails.
    """
    data = bytes(data)
    plaintext_len, payload = _verified_payload(data, SALT_LEN + NONCE_LEN)
    salt_end = 2 + SALT_LEN
    nonce_end = salt_end + NONCE_LEN
    return ParsedFrame(
        plaintext_len=plaintext_len,
        salt=payload[2:salt_end],
        nonce=payload[salt_end:nonce_end],
        ciphertext=payload[nonce_end:],
    )


def build_fortress_compact_frame(plaintext_len: int, ciphertext: bytes) -> bytes:
    """Build a compact frame carrying no salt or nonce."""
    _check_plaintext_len(plaintext_len)
    return _with_crc(plaintext_len.to_bytes(2, "big") + bytes(ciphertext))


def parse_fortress_compact_frame(data: bytes, salt: bytes, nonce: bytes) -> ParsedFrame:
    """Parse a compact frame, filling in the given fixed salt and nonce."""
    data = bytes(data)
    plaintext_len, payload = _verified_payload(data, 0)
    return ParsedFrame(
        plaintext_len=plaintext_len,
        salt=bytes(salt),
        nonce=bytes(nonce),
        ciphertext=payload[2:],
    )


def bytes_to_bits(data: bytes) -> list[int]:
    """Expand bytes into bits, most significant bit first."""
    return [(byte >> shift) & 1 for byte in bytes(data) for shift in range(7, -1, -1)]


def bits_to_bytes(bits: Iterable[int]) -> bytes:
    """Pack bits (MSB first) into bytes, zero-padding the last byte."""
    bits = list(bits)
    out = bytearray()
    for start in range(0, len(bits), 8):
        byte = 0
        for offset, bit in enumerate(bits[start : start + 8]):
            byte |= (bit & 1) << (7 - offset)
        out.append(byte)
    return bytes(out)