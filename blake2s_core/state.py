"""BLAKE2s hash state machine.

A :class:`Blake2sState` goes through ``init -> update* -> final``. Final
wipes every field, after which the state must be initialized again before
it can be reused.
"""

from __future__ import annotations

import struct

from .backends import CompressBackend, active_backend
from .compress import generic_compress
from .constants import BLOCK_BYTES, KEY_BYTES, OUT_BYTES, WORD_MASK
from .errors import ParameterError, StateError
from .memory import wipe, wipe_words
from .params import ParameterBlock

_DIGEST = struct.Struct("<8I")


class Blake2sState:
    """Mutable BLAKE2s state. Not safe for concurrent use.

    Args:
        backend: Pin this state to a specific compression backend instead
            of the process-wide selection.
    """

    __slots__ = ("h", "t", "f", "buf", "buflen", "outlen", "last_node", "backend")

    def __init__(self, backend: CompressBackend | None = None) -> None:
        self.h = [0] * 8
        self.t = [0, 0]
        self.f = [0, 0]
        self.buf = bytearray(BLOCK_BYTES)
        self.buflen = 0
        # Zero means "not initialized" or "already finalized".
        self.outlen = 0
        self.last_node = False
        self.backend = backend

    def copy(self) -> Blake2sState:
        """Return an independent copy of the running state."""

        other = Blake2sState(backend=self.backend)
        other.h[:] = self.h
        other.t[:] = self.t
        other.f[:] = self.f
        other.buf[:] = self.buf
        other.buflen = self.buflen
        other.outlen = self.outlen
        other.last_node = self.last_node
        return other

    def wipe(self) -> None:
        """Zero every field that can hold key-derived material."""

        wipe_words(self.h)
        wipe_words(self.t)
        wipe_words(self.f)
        wipe(self.buf)
        self.buflen = 0
        self.outlen = 0
        self.last_node = False


def _check_outlen(outlen: int) -> None:
    if not 1 <= outlen <= OUT_BYTES:
        raise ParameterError(f"outlen must be in range 1..{OUT_BYTES}")


def _check_live(state: Blake2sState) -> None:
    if state.outlen == 0:
        raise StateError("hash state is not initialized or was already finalized")


def _compress(state: Blake2sState, blocks: bytes | bytearray | memoryview, nblocks: int, inc: int) -> None:
    if nblocks > 1 and inc != BLOCK_BYTES:
        raise ParameterError("multi-block compression requires a full-block increment")

    backend = state.backend if state.backend is not None else active_backend()
    if backend is not None and backend.try_compress(state, blocks, nblocks, inc):
        return
    generic_compress(state, blocks, nblocks, inc)


def blake2s_init_param(
    state: Blake2sState, param: ParameterBlock, key: bytes = b"", *, last_node: bool = False
) -> None:
    """Initialize ``state`` from an explicit parameter block.

    Args:
        state: State to (re)initialize.
        param: Parameter block; its ``key_length`` must equal ``len(key)``.
        key: Optional secret key, absorbed as a zero-padded first block.
        last_node: Mark the state as the rightmost node of a tree.
    """

    key = memoryview(key).cast("B")
    if len(key) != param.key_length:
        raise ParameterError("key length does not match the parameter block")

    state.wipe()
    state.h[:] = param.chain_value()
    state.outlen = param.digest_length
    state.last_node = last_node

    if len(key):
        block = bytearray(BLOCK_BYTES)
        block[: len(key)] = key
        blake2s_update(state, block)
        wipe(block)


def blake2s_init(state: Blake2sState, outlen: int) -> None:
    """Initialize an unkeyed state producing ``outlen`` bytes."""

    _check_outlen(outlen)
    blake2s_init_param(state, ParameterBlock(digest_length=outlen))


def blake2s_init_key(state: Blake2sState, outlen: int, key: bytes) -> None:
    """Initialize a keyed state. ``key`` must be 1..32 bytes."""

    _check_outlen(outlen)
    if not 1 <= len(key) <= KEY_BYTES:
        raise ParameterError(f"key must be 1..{KEY_BYTES} bytes")
    blake2s_init_param(state, ParameterBlock(digest_length=outlen, key_length=len(key)), key)


def blake2s_update(state: Blake2sState, data: bytes | bytearray | memoryview) -> None:
    """Absorb ``data`` into ``state``.

    Full blocks are compressed eagerly except the last one, which stays
    buffered so :func:`blake2s_final` always has a block to flag.
    """

    _check_live(state)
    data = memoryview(data).cast("B")
    inlen = len(data)
    if not inlen:
        return

    fill = BLOCK_BYTES - state.buflen
    if inlen > fill:
        state.buf[state.buflen :] = data[:fill]
        _compress(state, state.buf, 1, BLOCK_BYTES)
        state.buflen = 0
        data = data[fill:]
        inlen -= fill

    if inlen > BLOCK_BYTES:
        nblocks = (inlen + BLOCK_BYTES - 1) // BLOCK_BYTES
        # Hold back one full block.
        _compress(state, data, nblocks - 1, BLOCK_BYTES)
        consumed = BLOCK_BYTES * (nblocks - 1)
        data = data[consumed:]
        inlen -= consumed

    state.buf[state.buflen : state.buflen + inlen] = data
    state.buflen += inlen


def blake2s_final_into(state: Blake2sState, out: bytearray | memoryview, outlen: int | None = None) -> None:
    """Finalize ``state`` and write the digest into ``out``.

    Args:
        state: Initialized state. It is wiped on return.
        out: Writable buffer of at least ``outlen`` bytes.
        outlen: Bytes to emit. Defaults to the length the state was
            initialized with.

    Raises:
        StateError: If ``state`` is not initialized or already finalized.
        ParameterError: If ``outlen`` is out of range or ``out`` too small.
    """

    _check_live(state)
    if outlen is None:
        outlen = state.outlen
    _check_outlen(outlen)
    if len(out) < outlen:
        raise ParameterError(f"output buffer must hold at least {outlen} bytes")

    if state.last_node:
        state.f[1] = WORD_MASK
    state.f[0] = WORD_MASK
    state.buf[state.buflen :] = bytes(BLOCK_BYTES - state.buflen)
    _compress(state, state.buf, 1, state.buflen)

    digest = bytearray(_DIGEST.size)
    _DIGEST.pack_into(digest, 0, *state.h)
    out[:outlen] = memoryview(digest)[:outlen]
    wipe(digest)
    state.wipe()


def blake2s_final(state: Blake2sState, outlen: int | None = None) -> bytes:
    """Finalize ``state`` and return the digest."""

    _check_live(state)
    if outlen is None:
        outlen = state.outlen
    _check_outlen(outlen)

    out = bytearray(outlen)
    blake2s_final_into(state, out, outlen)
    digest = bytes(out)
    wipe(out)
    return digest
