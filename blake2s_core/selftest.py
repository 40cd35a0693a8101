"""Known-answer self-test (RFC 7693, Appendix E).

The test hashes generated inputs of several lengths with several digest
sizes, unkeyed and keyed, folds every result into one BLAKE2s-256 state and
compares that grand hash with the published value.
"""

from __future__ import annotations

import logging
from typing import Final, Optional

from .backends import CompressBackend
from .constants import WORD_MASK
from .state import Blake2sState, blake2s_final, blake2s_init, blake2s_init_key, blake2s_update

_LOGGER: Final = logging.getLogger(__name__)

GRAND_HASH: Final = bytes.fromhex("6a411f08ce25adcdfb02aba641451cec53c598b24f4fc787fbdc88797f4c1dfe")
DIGEST_LENGTHS: Final = (16, 20, 28, 32)
INPUT_LENGTHS: Final = (0, 3, 64, 65, 255, 1024)

EMPTY_256: Final = bytes.fromhex("69217a3079908094e11121d042354a7c1f55b6482ca1a51e1b250dfd1ed0eef9")
ABC_256: Final = bytes.fromhex("508c5e8c327c14e2e1a72ba34eeb452f37458b209ed63a294d999b4c86675982")


def selftest_sequence(length: int, seed: int) -> bytes:
    """Deterministic Fibonacci-style byte sequence used by the RFC test."""

    out = bytearray(length)
    a = (0xDEAD4BAD * seed) & WORD_MASK
    b = 1
    for i in range(length):
        t = (a + b) & WORD_MASK
        a = b
        b = t
        out[i] = (t >> 24) & 0xFF
    return bytes(out)


def _hash(backend: Optional[CompressBackend], outlen: int, data: bytes, key: bytes = b"") -> bytes:
    state = Blake2sState(backend=backend)
    if key:
        blake2s_init_key(state, outlen, key)
    else:
        blake2s_init(state, outlen)
    blake2s_update(state, data)
    return blake2s_final(state)


def blake2s_selftest(backend: Optional[CompressBackend] = None) -> bool:
    """Run the known-answer tests.

    Args:
        backend: Compression backend to pin the test states to. ``None``
            uses the process-wide selection.

    Returns:
        ``True`` if every check matched.
    """

    if _hash(backend, 32, b"") != EMPTY_256:
        _LOGGER.error("BLAKE2s self-test: empty-input vector mismatch")
        return False
    if _hash(backend, 32, b"abc") != ABC_256:
        _LOGGER.error("BLAKE2s self-test: 'abc' vector mismatch")
        return False

    grand = Blake2sState(backend=backend)
    blake2s_init(grand, 32)
    for outlen in DIGEST_LENGTHS:
        for inlen in INPUT_LENGTHS:
            data = selftest_sequence(inlen, inlen)
            blake2s_update(grand, _hash(backend, outlen, data))

            key = selftest_sequence(outlen, outlen)
            blake2s_update(grand, _hash(backend, outlen, data, key))

    if blake2s_final(grand) != GRAND_HASH:
        _LOGGER.error("BLAKE2s self-test: RFC 7693 grand hash mismatch")
        return False
    return True
