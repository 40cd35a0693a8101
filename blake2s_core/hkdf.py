"""HKDF (RFC 5869) over HMAC-BLAKE2s."""

from __future__ import annotations

from .constants import OUT_BYTES
from .errors import ParameterError
from .hmac import blake2s_hmac

MAX_OUTPUT = 255 * OUT_BYTES


def hkdf_extract(ikm: bytes, *, salt: bytes | None = None) -> bytes:
    """Return the pseudorandom key ``HMAC(salt, ikm)``.

    An absent salt is replaced by 32 zero bytes.
    """

    if salt is None:
        salt = bytes(OUT_BYTES)
    return blake2s_hmac(ikm, salt)


def hkdf_expand(prk: bytes, *, info: bytes = b"", length: int = 32) -> bytes:
    """Expand ``prk`` into ``length`` bytes of output keying material."""

    if not 1 <= length <= MAX_OUTPUT:
        raise ParameterError(f"length must be in range 1..{MAX_OUTPUT}")

    okm = bytearray()
    block = b""
    counter = 1
    while len(okm) < length:
        block = blake2s_hmac(block + info + bytes([counter]), prk)
        okm += block
        counter += 1
    return bytes(okm[:length])


def hkdf_blake2s(
    ikm: bytes,
    *,
    salt: bytes | None = None,
    info: bytes = b"",
    length: int = 32,
) -> bytes:
    """Derive key material from ``ikm`` using HKDF(HMAC-BLAKE2s).

    Args:
        ikm: Input keying material.
        salt: Optional salt; if omitted HKDF uses an all-zero salt.
        info: HKDF info/label.
        length: Output length (1..8160).

    Returns:
        Derived bytes of size ``length``.
    """

    return hkdf_expand(hkdf_extract(ikm, salt=salt), info=info, length=length)
