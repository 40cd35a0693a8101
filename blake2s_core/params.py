"""BLAKE2s parameter block.

The parameter block is 32 bytes, read as eight little-endian words and
XORed into the IV to form the initial chain value.

Format (binary, little-endian):
- digest_length (1 byte, offset 0)
- key_length (1 byte, offset 1)
- fanout (1 byte, offset 2)
- depth (1 byte, offset 3)
- leaf_length (4 bytes, offset 4)
- node_offset (4 bytes, offset 8)
- xof_length (2 bytes, offset 12)
- node_depth (1 byte, offset 14)
- inner_length (1 byte, offset 15)
- salt (8 bytes, offset 16)
- personal (8 bytes, offset 24)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import IV, KEY_BYTES, OUT_BYTES, PERSONAL_BYTES, SALT_BYTES
from .errors import ParameterError

_PARAM_FORMAT = "<BBBBIIHBB8s8s"
PARAM_BYTES = struct.calcsize(_PARAM_FORMAT)


@dataclass(frozen=True, slots=True)
class ParameterBlock:
    """Tunable hash configuration.

    Only ``digest_length`` and ``key_length`` matter for sequential hashing.
    The tree fields are carried for format compatibility.
    """

    digest_length: int = OUT_BYTES
    key_length: int = 0
    fanout: int = 1
    depth: int = 1
    leaf_length: int = 0
    node_offset: int = 0
    xof_length: int = 0
    node_depth: int = 0
    inner_length: int = 0
    salt: bytes = b""
    personal: bytes = b""

    def __post_init__(self) -> None:
        if not 1 <= self.digest_length <= OUT_BYTES:
            raise ParameterError(f"digest_length must be in range 1..{OUT_BYTES}")
        if not 0 <= self.key_length <= KEY_BYTES:
            raise ParameterError(f"key_length must be in range 0..{KEY_BYTES}")
        if not 0 <= self.inner_length <= OUT_BYTES:
            raise ParameterError(f"inner_length must be in range 0..{OUT_BYTES}")
        for name in ("fanout", "depth", "node_depth"):
            if not 0 <= getattr(self, name) <= 0xFF:
                raise ParameterError(f"{name} must fit in one byte")
        if not 0 <= self.leaf_length <= 0xFFFFFFFF:
            raise ParameterError("leaf_length must fit in 32 bits")
        if not 0 <= self.node_offset <= 0xFFFFFFFF:
            raise ParameterError("node_offset must fit in 32 bits")
        if not 0 <= self.xof_length <= 0xFFFF:
            raise ParameterError("xof_length must fit in 16 bits")
        if len(self.salt) > SALT_BYTES:
            raise ParameterError(f"salt must be at most {SALT_BYTES} bytes")
        if len(self.personal) > PERSONAL_BYTES:
            raise ParameterError(f"personal must be at most {PERSONAL_BYTES} bytes")

    def to_bytes(self) -> bytes:
        """Serialize to the 32-byte wire layout."""

        # struct's "8s" zero-pads short salt/personal values.
        return struct.pack(
            _PARAM_FORMAT,
            self.digest_length,
            self.key_length,
            self.fanout,
            self.depth,
            self.leaf_length,
            self.node_offset,
            self.xof_length,
            self.node_depth,
            self.inner_length,
            bytes(self.salt),
            bytes(self.personal),
        )

    @classmethod
    def from_bytes(cls, blob: bytes) -> ParameterBlock:
        """Parse a block produced by :meth:`to_bytes`."""

        if len(blob) != PARAM_BYTES:
            raise ParameterError(f"parameter block must be {PARAM_BYTES} bytes, got {len(blob)}")
        (
            digest_length,
            key_length,
            fanout,
            depth,
            leaf_length,
            node_offset,
            xof_length,
            node_depth,
            inner_length,
            salt,
            personal,
        ) = struct.unpack(_PARAM_FORMAT, blob)
        return cls(
            digest_length=digest_length,
            key_length=key_length,
            fanout=fanout,
            depth=depth,
            leaf_length=leaf_length,
            node_offset=node_offset,
            xof_length=xof_length,
            node_depth=node_depth,
            inner_length=inner_length,
            salt=salt,
            personal=personal,
        )

    def words(self) -> tuple[int, ...]:
        """Return the block as eight little-endian 32-bit words."""

        return struct.unpack("<8I", self.to_bytes())

    def chain_value(self) -> list[int]:
        """Return the initial chain value ``IV[i] ^ words[i]``."""

        return [iv ^ w for iv, w in zip(IV, self.words(), strict=True)]
