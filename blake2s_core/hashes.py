"""hashlib-style BLAKE2s objects and one-shot digests."""

from __future__ import annotations

from .constants import BLOCK_BYTES, KEY_BYTES, OUT_BYTES, PERSONAL_BYTES, SALT_BYTES
from .params import ParameterBlock
from .state import Blake2sState, blake2s_final, blake2s_init_param, blake2s_update


class Blake2s:
    """Incremental BLAKE2s hash with the :mod:`hashlib` interface.

    :meth:`digest` finalizes a copy of the running state, so the object can
    keep absorbing data afterwards.

    Args:
        data: Initial data to hash.
        digest_size: Output size (1..32).
        key: Optional key (0..32 bytes) for keyed hashing.
        salt: Optional salt (up to 8 bytes).
        person: Optional personalization string (up to 8 bytes).
        fanout: Tree fanout (0..255).
        depth: Tree depth (1..255).
        leaf_size: Maximal leaf length in bytes.
        node_offset: Node offset (32 bits).
        node_depth: Node depth.
        inner_size: Inner hash size (0..32).
        last_node: Whether this is the last node of its tree level.
    """

    name = "blake2s"
    block_size = BLOCK_BYTES

    MAX_DIGEST_SIZE = OUT_BYTES
    MAX_KEY_SIZE = KEY_BYTES
    SALT_SIZE = SALT_BYTES
    PERSON_SIZE = PERSONAL_BYTES

    def __init__(
        self,
        data: bytes | bytearray | memoryview = b"",
        *,
        digest_size: int = OUT_BYTES,
        key: bytes = b"",
        salt: bytes = b"",
        person: bytes = b"",
        fanout: int = 1,
        depth: int = 1,
        leaf_size: int = 0,
        node_offset: int = 0,
        node_depth: int = 0,
        inner_size: int = 0,
        last_node: bool = False,
    ) -> None:
        param = ParameterBlock(
            digest_length=digest_size,
            key_length=len(key),
            fanout=fanout,
            depth=depth,
            leaf_length=leaf_size,
            node_offset=node_offset,
            node_depth=node_depth,
            inner_length=inner_size,
            salt=salt,
            personal=person,
        )
        self.digest_size = digest_size
        self._state = Blake2sState()
        blake2s_init_param(self._state, param, key, last_node=last_node)
        blake2s_update(self._state, data)

    def update(self, data: bytes | bytearray | memoryview) -> None:
        blake2s_update(self._state, data)

    def digest(self) -> bytes:
        return blake2s_final(self._state.copy())

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> Blake2s:
        other = object.__new__(Blake2s)
        other.digest_size = self.digest_size
        other._state = self._state.copy()
        return other


def blake2s_digest(data: bytes, *, digest_size: int = OUT_BYTES, key: bytes | None = None) -> bytes:
    """Compute a BLAKE2s digest.

    Args:
        data: Data to hash.
        digest_size: Output size (1..32).
        key: Optional key for keyed BLAKE2s (MAC-like usage).

    Returns:
        Digest bytes.
    """

    return Blake2s(data, digest_size=digest_size, key=key or b"").digest()
