"""BLAKE2s hash, keyed hashing and HMAC-BLAKE2s.

The low-level state machine (:func:`blake2s_init`, :func:`blake2s_update`,
:func:`blake2s_final`) follows RFC 7693. :class:`Blake2s` wraps it in the
familiar :mod:`hashlib` interface, and :func:`blake2s_hmac` provides the
RFC 2104 construction for protocols that require HMAC.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .backends import CompressBackend, GenericBackend, VectorizedBackend, active_backend, init_backends
from .config import Blake2sConfig
from .constants import BLOCK_BYTES, KEY_BYTES, OUT_BYTES, PERSONAL_BYTES, SALT_BYTES
from .errors import (
    Blake2sError,
    ParameterError,
    SelfTestError,
    StateError,
    VerificationError,
)
from .hashes import Blake2s, blake2s_digest
from .hkdf import hkdf_blake2s, hkdf_expand, hkdf_extract
from .hmac import blake2s_hmac, blake2s_hmac_into, hmac_verify
from .params import ParameterBlock
from .selftest import blake2s_selftest
from .state import (
    Blake2sState,
    blake2s_final,
    blake2s_final_into,
    blake2s_init,
    blake2s_init_key,
    blake2s_init_param,
    blake2s_update,
)

__all__ = [
    "BLOCK_BYTES",
    "Blake2s",
    "Blake2sConfig",
    "Blake2sError",
    "Blake2sState",
    "CompressBackend",
    "GenericBackend",
    "KEY_BYTES",
    "OUT_BYTES",
    "PERSONAL_BYTES",
    "ParameterBlock",
    "ParameterError",
    "SALT_BYTES",
    "SelfTestError",
    "StateError",
    "VectorizedBackend",
    "VerificationError",
    "active_backend",
    "blake2s_digest",
    "blake2s_final",
    "blake2s_final_into",
    "blake2s_hmac",
    "blake2s_hmac_into",
    "blake2s_init",
    "blake2s_init_key",
    "blake2s_init_param",
    "blake2s_selftest",
    "blake2s_update",
    "hkdf_blake2s",
    "hkdf_expand",
    "hkdf_extract",
    "hmac_verify",
    "init_backends",
]
