#!/usr/bin/env python3
"""Basic blake2s_core example.

This example demonstrates streaming a file through the BLAKE2s state
machine, keyed hashing, HMAC tags and backend configuration.
"""

import logging
import sys
from pathlib import Path

# Add the parent directory to the path so we can import blake2s_core
sys.path.insert(0, str(Path(__file__).parent.parent))

from blake2s_core import (
    Blake2s,
    Blake2sConfig,
    Blake2sState,
    blake2s_digest,
    blake2s_final,
    blake2s_hmac,
    blake2s_init,
    blake2s_update,
    hkdf_blake2s,
    hmac_verify,
    init_backends,
)


def hash_file(path: Path, chunk_size: int = 64 * 1024) -> bytes:
    """Hash a file in chunks with the low-level API."""
    state = Blake2sState()
    blake2s_init(state, 32)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            blake2s_update(state, chunk)
    return blake2s_final(state)


def basic_example() -> None:
    """Run a basic example of blake2s_core usage."""
    logging.basicConfig(level=logging.DEBUG)

    print("1. Selecting the compression backend...")
    backend = init_backends(Blake2sConfig.from_environment())
    print(f"   Backend: {backend.name if backend else 'generic'}")

    print("\n2. One-shot and incremental digests...")
    print(f"   BLAKE2s-256(''):    {blake2s_digest(b'').hex()}")
    h = Blake2s(digest_size=16, person=b"example")
    h.update(b"hello ")
    h.update(b"world")
    print(f"   personalized-128:   {h.hexdigest()}")

    print("\n3. Hashing this file...")
    print(f"   {Path(__file__).name}: {hash_file(Path(__file__)).hex()}")

    print("\n4. Keyed hash, HMAC and HKDF...")
    key = b"an example key"
    print(f"   keyed BLAKE2s:      {blake2s_digest(b'message', key=key).hex()}")
    tag = blake2s_hmac(b"message", key)
    hmac_verify(tag, b"message", key)
    print(f"   HMAC-BLAKE2s:       {tag.hex()} (verified)")
    print(f"   HKDF-BLAKE2s:       {hkdf_blake2s(key, info=b'example', length=16).hex()}")


if __name__ == "__main__":
    basic_example()
