"""Viterbi-based syndrome-trellis embedding.

The trellis has ``2**h`` states holding an h-bit syndrome window. Cover
elements are processed in order; after every ``w`` elements the low bit
of the state is forced to the next message bit and the state shifts right.
The cheapest path yields the stego bits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from phasm.stc.hhat import column_packed

WET_COST = math.inf


@dataclass
class EmbedResult:
    """Stego bit sequence and its total distortion cost."""

    stego_bits: list[int]
    total_cost: float


@dataclass
class _CoverStep:
    prev_state: list[int]
    bit: list[int]


@dataclass
class _ShiftStep:
    pre_shift_state: list[int]


def stc_embed(
    cover_bits: Sequence[int],
    costs: Sequence[float],
    message: Sequence[int],
    hhat_matrix: Sequence[Sequence[int]],
    h: int,
    w: int,
) -> Optional[EmbedResult]:
    """Find the minimum-cost stego bits whose syndrome equals ``message``.

    ``costs[j]`` is the cost of flipping ``cover_bits[j]``; non-finite costs
    mark positions that must not change. Returns None if no stego sequence
    can carry the message.
    """
    if not message:
        return EmbedResult(stego_bits=list(cover_bits), total_cost=0.0)
    if w <= 0:
        raise ValueError("width must be positive")

    num_states = 1 << h
    inf = math.inf
    columns = [column_packed(hhat_matrix, c) for c in range(w)]
    message_len = len(message)

    prev_cost = [inf] * num_states
    prev_cost[0] = 0.0
    steps: list[_CoverStep | _ShiftStep] = []
    msg_idx = 0

    for j, (cover, flip_cost) in enumerate(zip(cover_bits, costs)):
        col_idx = j % w
        column = columns[col_idx]
        cover_bit = cover & 1
        flip_bit = 1 - cover_bit
        can_flip = math.isfinite(flip_cost)

        curr_cost = [inf] * num_states
        step = _CoverStep(prev_state=[0] * num_states, bit=[0] * num_states)

        for s_prev, cost in enumerate(prev_cost):
            if cost == inf:
                continue
            s_keep = s_prev ^ column if cover_bit else s_prev
            if cost < curr_cost[s_keep]:
                curr_cost[s_keep] = cost
                step.prev_state[s_keep] = s_prev
                step.bit[s_keep] = cover_bit
            if can_flip:
                s_flip = s_prev ^ column if flip_bit else s_prev
                cost_flip = cost + flip_cost
                if cost_flip < curr_cost[s_flip]:
                    curr_cost[s_flip] = cost_flip
                    step.prev_state[s_flip] = s_prev
                    step.bit[s_flip] = flip_bit
        steps.append(step)

        if col_idx == w - 1 and msg_idx < message_len:
            required_bit = message[msg_idx] & 1
            shifted_cost = [inf] * num_states
            shift = _ShiftStep(pre_shift_state=[0] * num_states)
            for s, cost in enumerate(curr_cost):
                if cost == inf or (s & 1) != required_bit:
                    continue
                target = s >> 1
                if cost < shifted_cost[target]:
                    shifted_cost[target] = cost
                    shift.pre_shift_state[target] = s
            steps.append(shift)
            prev_cost = shifted_cost
            msg_idx += 1
        else:
            prev_cost = curr_cost

    best_state, best_cost = 0, inf
    for s, cost in enumerate(prev_cost):
        if cost < best_cost:
            best_state, best_cost = s, cost
    if best_cost == inf:
        return None

    stego_bits = []
    state = best_state
    for step in reversed(steps):
        if isinstance(step, _ShiftStep):
            state = step.pre_shift_state[state]
        else:
            stego_bits.append(step.bit[state])
            state = step.prev_state[state]
    stego_bits.reverse()

    return EmbedResult(stego_bits=stego_bits, total_cost=best_cost)