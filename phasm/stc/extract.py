"""Message extraction by syndrome computation."""

from __future__ import annotations

from typing import Sequence

from phasm.stc.hhat import column_packed


def stc_extract(stego_bits: Sequence[int], hhat: Sequence[Sequence[int]], w: int) -> list[int]:
    """Extract ``ceil(len(stego_bits) / w)`` message bits from stego bits.

    Each block of ``w`` stego bits is folded into the syndrome state using
    the H-hat columns; the low bit of the state is then one message bit and
    the state shifts right by one.
    """
    if w <= 0:
        raise ValueError("width must be positive")
    columns = [column_packed(hhat, c) for c in range(w)]
    message = []
    state = 0
    for start in range(0, len(stego_bits), w):
        for column, bit in zip(columns, stego_bits[start : start + w]):
            if bit & 1:
                state ^= column
        message.append(state & 1)
        state >>= 1
    return message