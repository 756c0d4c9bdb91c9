"""Coefficient position selection and keyed permutation.

Embeddable AC positions are collected from a cost map in raster order and
shuffled with a Fisher-Yates pass driven by a ChaCha20 generator seeded
from the passphrase, so encoder and decoder visit coefficients in the same
pseudo-random order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from phasm.rng import ChaCha20Rng


class CostMapLike(Protocol):
    """Per-coefficient embedding costs laid out as a grid of 8x8 blocks."""

    blocks_wide: int
    blocks_tall: int

    def get(self, br: int, bc: int, i: int, j: int) -> float: ...


@dataclass(frozen=True)
class CoeffPos:
    """An embeddable coefficient: flat grid index and its embedding cost.

    ``flat_idx`` is ``block_index * 64 + row * 8 + col``.
    """

    flat_idx: int
    cost: float


def _collect_positions(cost_map: CostMapLike) -> list[CoeffPos]:
    blocks_wide = cost_map.blocks_wide
    positions = []
    for br in range(cost_map.blocks_tall):
        for bc in range(blocks_wide):
            block_base = (br * blocks_wide + bc) * 64
            for pos in range(1, 64):
                i, j = divmod(pos, 8)
                cost = cost_map.get(br, bc, i, j)
                if math.isfinite(cost):
                    positions.append(CoeffPos(flat_idx=block_base + pos, cost=float(cost)))
    return positions


def _shuffle(positions: list[CoeffPos], seed: bytes) -> None:
    rng = ChaCha20Rng(seed)
    for i in range(len(positions) - 1, 0, -1):
        j = rng.gen_range_inclusive(0, i)
        positions[i], positions[j] = positions[j], positions[i]


def select_and_permute(cost_map: CostMapLike, seed: bytes) -> list[CoeffPos]:
    """Return the finite-cost AC positions in seed-determined order.

    DC positions and positions with non-finite (wet) cost are excluded.
    """
    positions = _collect_positions(cost_map)
    _shuffle(positions, seed)
    return positions