"""H-hat submatrix generation for syndrome-trellis coding.

The matrix has ``h`` rows and ``w`` columns of 0/1 entries. Every column
has odd Hamming weight so that each column contributes to the syndrome.
It is generated deterministically from a 32-byte seed so that encoder and
decoder agree.
"""

from __future__ import annotations

from typing import Sequence

from phasm.rng import ChaCha20Rng

MAX_CONSTRAINT_LENGTH = 31


def generate_hhat(h: int, w: int, seed: bytes) -> list[list[int]]:
    """Generate an ``h`` x ``w`` H-hat matrix as a list of rows."""
    if not 0 <= h <= MAX_CONSTRAINT_LENGTH:
        raise ValueError(f"constraint length must be in 0..{MAX_CONSTRAINT_LENGTH}")
    if w < 0:
        raise ValueError("width must be non-negative")
    rng = ChaCha20Rng(seed)
    mask = (1 << h) - 1

    columns = []
    for _ in range(w):
        value = rng.next_u32() & mask
        if bin(value).count("1") % 2 == 0:
            value ^= 1
        columns.append(value)

    return [[(column >> row) & 1 for column in columns] for row in range(h)]


def column_packed(hhat: Sequence[Sequence[int]], col: int) -> int:
    """Return column ``col`` packed into an int, row ``r`` at bit ``r``."""
    value = 0
    for row, entries in enumerate(hhat):
        if entries[col]:
            value |= 1 << row
    return value