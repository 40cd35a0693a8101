"""HMAC-BLAKE2s (RFC 2104).

BLAKE2s has a native keyed mode, but protocols that are specified in terms
of HMAC need the generic construction.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import constant_time

from .constants import BLOCK_BYTES, HMAC_IPAD, HMAC_OPAD, OUT_BYTES
from .errors import ParameterError, VerificationError
from .memory import wipe
from .state import Blake2sState, blake2s_final_into, blake2s_init, blake2s_update


def blake2s_hmac_into(
    out: bytearray | memoryview,
    message: bytes | bytearray | memoryview,
    key: bytes | bytearray | memoryview,
    outlen: int = OUT_BYTES,
) -> None:
    """Compute HMAC-BLAKE2s of ``message`` and write ``outlen`` bytes to ``out``.

    Keys longer than one block are first hashed down to 32 bytes. The padded
    key and the inner digest are wiped before returning.
    """

    if not 1 <= outlen <= OUT_BYTES:
        raise ParameterError(f"outlen must be in range 1..{OUT_BYTES}")
    if len(out) < outlen:
        raise ParameterError(f"output buffer must hold at least {outlen} bytes")

    key = memoryview(key).cast("B")
    state = Blake2sState()
    x_key = bytearray(BLOCK_BYTES)
    i_hash = bytearray(OUT_BYTES)
    try:
        if len(key) > BLOCK_BYTES:
            blake2s_init(state, OUT_BYTES)
            blake2s_update(state, key)
            blake2s_final_into(state, x_key, OUT_BYTES)
        else:
            x_key[: len(key)] = key

        for i in range(BLOCK_BYTES):
            x_key[i] ^= HMAC_IPAD

        blake2s_init(state, OUT_BYTES)
        blake2s_update(state, x_key)
        blake2s_update(state, message)
        blake2s_final_into(state, i_hash, OUT_BYTES)

        for i in range(BLOCK_BYTES):
            x_key[i] ^= HMAC_OPAD ^ HMAC_IPAD

        blake2s_init(state, OUT_BYTES)
        blake2s_update(state, x_key)
        blake2s_update(state, i_hash)
        blake2s_final_into(state, i_hash, OUT_BYTES)

        out[:outlen] = memoryview(i_hash)[:outlen]
    finally:
        wipe(x_key)
        wipe(i_hash)
        state.wipe()


def blake2s_hmac(
    message: bytes | bytearray | memoryview,
    key: bytes | bytearray | memoryview,
    outlen: int = OUT_BYTES,
) -> bytes:
    """Return the HMAC-BLAKE2s tag of ``message`` under ``key``.

    Args:
        message: Data to authenticate.
        key: Secret key of any length.
        outlen: Tag length (1..32).

    Returns:
        Tag bytes of size ``outlen``.
    """

    out = bytearray(OUT_BYTES)
    blake2s_hmac_into(out, message, key, outlen)
    tag = bytes(out[:outlen])
    wipe(out)
    return tag


def hmac_verify(
    tag: bytes,
    message: bytes | bytearray | memoryview,
    key: bytes | bytearray | memoryview,
) -> None:
    """Check ``tag`` against HMAC-BLAKE2s of ``message`` in constant time.

    Raises:
        VerificationError: If the tag does not match.
    """

    if not 1 <= len(tag) <= OUT_BYTES:
        raise VerificationError("tag has an invalid length")
    expected = blake2s_hmac(message, key, len(tag))
    if not constant_time.bytes_eq(expected, bytes(tag)):
        raise VerificationError("HMAC tag mismatch")
