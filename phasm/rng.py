"""Seedable ChaCha20 random number generator.

The output stream is the ChaCha20 keystream for the 32-byte seed used as
key, with a zero nonce and a block counter starting at zero. It is read
as little-endian 32-bit words. Range sampling uses widening-multiply
rejection sampling on 32-bit values, so shuffles and matrices derived
from a seed are identical on every platform.
"""

from __future__ import annotations

import struct

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

SEED_LEN = 32
_U32_MASK = 0xFFFF_FFFF
_BUFFER_WORDS = 64  # four ChaCha blocks per refill
_BUFFER_FORMAT = f"<{_BUFFER_WORDS}I"
_ZERO_BUFFER = bytes(_BUFFER_WORDS * 4)


class ChaCha20Rng:
    """Deterministic 32-bit generator seeded with 32 bytes."""

    def __init__(self, seed: bytes) -> None:
        seed = bytes(seed)
        if len(seed) != SEED_LEN:
            raise ValueError(f"seed must be {SEED_LEN} bytes, got {len(seed)}")
        cipher = Cipher(algorithms.ChaCha20(seed, bytes(16)), mode=None)
        self._encryptor = cipher.encryptor()
        self._words: list[int] = []
        self._index = 0

    def _refill(self) -> None:
        keystream = self._encryptor.update(_ZERO_BUFFER)
        self._words = list(struct.unpack(_BUFFER_FORMAT, keystream))
        self._index = 0

    def next_u32(self) -> int:
        """Return the next 32-bit word of the stream."""
        if self._index >= len(self._words):
            self._refill()
        word = self._words[self._index]
        self._index += 1
        return word

    def gen_range_inclusive(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer in ``[low, high]`` (32-bit)."""
        if not 0 <= low <= high <= _U32_MASK:
            raise ValueError(f"invalid 32-bit range [{low}, {high}]")
        span = (high - low + 1) & _U32_MASK
        if span == 0:
            return self.next_u32()
        leading_zeros = 32 - span.bit_length()
        zone = ((span << leading_zeros) & _U32_MASK) - 1
        while True:
            product = self.next_u32() * span
            if product & _U32_MASK <= zone:
                return (low + (product >> 32)) & _U32_MASK