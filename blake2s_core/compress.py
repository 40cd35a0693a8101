"""Generic BLAKE2s compression function.

Pure-Python reference path. Every accelerated backend must produce the same
chain value and counter as :func:`generic_compress` for the same input.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from .constants import BLOCK_BYTES, G_INDEX, IV, ROUNDS, SIGMA, WORD_MASK

if TYPE_CHECKING:
    from .state import Blake2sState

_BLOCK = struct.Struct("<16I")


def increment_counter(state: Blake2sState, inc: int) -> None:
    """Add ``inc`` to the 64-bit byte counter held as two 32-bit words."""

    t0 = (state.t[0] + inc) & WORD_MASK
    state.t[0] = t0
    state.t[1] = (state.t[1] + (t0 < inc)) & WORD_MASK


def generic_compress(state: Blake2sState, blocks: bytes | bytearray | memoryview, nblocks: int, inc: int) -> None:
    """Compress ``nblocks`` consecutive 64-byte blocks into ``state.h``.

    Args:
        state: Hash state whose chain value and counter are updated.
        blocks: Buffer holding at least ``nblocks * 64`` bytes.
        nblocks: Number of blocks to absorb.
        inc: Counter increment per block (64, or the residual length for
            the final block).
    """

    h = state.h
    for n in range(nblocks):
        increment_counter(state, inc)

        m = _BLOCK.unpack_from(blocks, n * BLOCK_BYTES)
        v = h + list(IV)
        v[12] ^= state.t[0]
        v[13] ^= state.t[1]
        v[14] ^= state.f[0]
        v[15] ^= state.f[1]

        for r in range(ROUNDS):
            s = SIGMA[r]
            for i, (ia, ib, ic, id_) in enumerate(G_INDEX):
                a = v[ia]
                b = v[ib]
                c = v[ic]
                d = v[id_]
                a = (a + b + m[s[2 * i]]) & WORD_MASK
                t = d ^ a
                d = (t >> 16) | ((t << 16) & WORD_MASK)
                c = (c + d) & WORD_MASK
                t = b ^ c
                b = (t >> 12) | ((t << 20) & WORD_MASK)
                a = (a + b + m[s[2 * i + 1]]) & WORD_MASK
                t = d ^ a
                d = (t >> 8) | ((t << 24) & WORD_MASK)
                c = (c + d) & WORD_MASK
                t = b ^ c
                b = (t >> 7) | ((t << 25) & WORD_MASK)
                v[ia] = a
                v[ib] = b
                v[ic] = c
                v[id_] = d

        for i in range(8):
            h[i] ^= v[i] ^ v[i + 8]
