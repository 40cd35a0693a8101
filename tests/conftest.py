"""Test configuration for the blake2s_core package."""

import random

import pytest

from blake2s_core import (
    Blake2sConfig,
    Blake2sState,
    GenericBackend,
    VectorizedBackend,
    init_backends,
)


@pytest.fixture
def rfc_key() -> bytes:
    """The 32-byte key used by the BLAKE2 known-answer files."""
    return bytes(range(32))


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source for generated inputs."""
    return random.Random(0xB1A4E2)


@pytest.fixture(params=["generic", "vectorized"])
def backend(request):
    """Each compression backend, with the vectorized one accepting every batch."""
    if request.param == "generic":
        return GenericBackend()
    return VectorizedBackend(min_blocks=1)


@pytest.fixture
def make_state(backend):
    """Factory for states pinned to the parametrized backend."""
    def _make() -> Blake2sState:
        return Blake2sState(backend=backend)
    return _make


@pytest.fixture
def restore_backends():
    """Re-run default backend detection after a test changes it."""
    yield
    init_backends(Blake2sConfig())
