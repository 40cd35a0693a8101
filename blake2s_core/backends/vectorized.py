"""Lane-parallel compression backend backed by numpy.

The sixteen working words are held as four rows of four ``uint32`` lanes
(``v[0:4]``, ``v[4:8]``, ``v[8:12]``, ``v[12:16]``). One vectorized mix
covers the four column groups; rotating rows 1-3 left by 1, 2 and 3 lanes
lines up the diagonal groups for the second mix.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

import numpy as np

from ..constants import BLOCK_BYTES, IV, ROUNDS, SIGMA, WORD_MASK

if TYPE_CHECKING:
    from ..state import Blake2sState

_LOGGER: Final = logging.getLogger(__name__)

_SIGMA = np.array(SIGMA, dtype=np.intp)
_COLUMN_X = _SIGMA[:, 0:8:2]
_COLUMN_Y = _SIGMA[:, 1:8:2]
_DIAGONAL_X = _SIGMA[:, 8:16:2]
_DIAGONAL_Y = _SIGMA[:, 9:16:2]

_IV_LOW = np.array(IV[:4], dtype=np.uint32)
_IV_HIGH = np.array(IV[4:], dtype=np.uint32)


def _rotr(x: np.ndarray, n: int) -> np.ndarray:
    return (x >> np.uint32(n)) | (x << np.uint32(32 - n))


def _mix(
    a: np.ndarray, b: np.ndarray, c: np.ndarray, d: np.ndarray, x: np.ndarray, y: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    a = a + b + x
    d = _rotr(d ^ a, 16)
    c = c + d
    b = _rotr(b ^ c, 12)
    a = a + b + y
    d = _rotr(d ^ a, 8)
    c = c + d
    b = _rotr(b ^ c, 7)
    return a, b, c, d


class VectorizedBackend:
    """numpy backend implementing the ``try_compress`` contract.

    Args:
        min_blocks: Batches with fewer blocks are declined.
    """

    name = "numpy-vectorized"

    def __init__(self, min_blocks: int = 1) -> None:
        self.min_blocks = min_blocks

    def available(self) -> bool:
        """Probe that uint32 lane arithmetic wraps modulo 2**32."""

        probe = np.array([WORD_MASK, 1], dtype=np.uint32) + np.array([1, WORD_MASK], dtype=np.uint32)
        ok = probe.dtype == np.uint32 and probe.tolist() == [0, 0]
        if not ok:
            _LOGGER.debug("numpy uint32 arithmetic does not wrap, backend unavailable")
        return ok

    def try_compress(self, state: Blake2sState, blocks: bytes | bytearray | memoryview, nblocks: int, inc: int) -> bool:
        if nblocks < self.min_blocks:
            return False

        messages = (
            np.frombuffer(blocks, dtype="<u4", count=nblocks * (BLOCK_BYTES // 4))
            .astype(np.uint32)
            .reshape(nblocks, 16)
        )
        h = np.array(state.h, dtype=np.uint32)
        t0, t1 = state.t
        f0, f1 = state.f

        for m in messages:
            t0 = (t0 + inc) & WORD_MASK
            t1 = (t1 + (t0 < inc)) & WORD_MASK

            row0 = h[:4]
            row1 = h[4:]
            row2 = _IV_LOW
            row3 = _IV_HIGH ^ np.array([t0, t1, f0, f1], dtype=np.uint32)

            for r in range(ROUNDS):
                row0, row1, row2, row3 = _mix(row0, row1, row2, row3, m[_COLUMN_X[r]], m[_COLUMN_Y[r]])
                row1 = np.roll(row1, -1)
                row2 = np.roll(row2, -2)
                row3 = np.roll(row3, -3)
                row0, row1, row2, row3 = _mix(row0, row1, row2, row3, m[_DIAGONAL_X[r]], m[_DIAGONAL_Y[r]])
                row1 = np.roll(row1, 1)
                row2 = np.roll(row2, 2)
                row3 = np.roll(row3, 3)

            h = np.concatenate((h[:4] ^ row0 ^ row2, h[4:] ^ row1 ^ row3))

        state.h[:] = h.tolist()
        state.t[0] = t0
        state.t[1] = t1
        return True
