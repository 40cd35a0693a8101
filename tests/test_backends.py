from __future__ import annotations

import logging
import random

import pytest

from blake2s_core import (
    BLOCK_BYTES,
    Blake2sConfig,
    Blake2sState,
    GenericBackend,
    ParameterError,
    SelfTestError,
    VectorizedBackend,
    active_backend,
    backends,
    blake2s_init,
    blake2s_selftest,
    blake2s_update,
    init_backends,
)
from blake2s_core.compress import generic_compress
from blake2s_core.selftest import selftest_sequence


def _fresh_state() -> Blake2sState:
    state = Blake2sState(backend=GenericBackend())
    blake2s_init(state, 32)
    return state


@pytest.mark.parametrize("nblocks", [1, 2, 5, 16])
def test_vectorized_matches_generic(rng: random.Random, nblocks: int) -> None:
    blocks = rng.randbytes(nblocks * BLOCK_BYTES)
    expected = _fresh_state()
    generic_compress(expected, blocks, nblocks, BLOCK_BYTES)

    actual = _fresh_state()
    assert VectorizedBackend(min_blocks=1).try_compress(actual, blocks, nblocks, BLOCK_BYTES)
    assert actual.h == expected.h
    assert actual.t == expected.t


def test_vectorized_matches_generic_on_final_block(rng: random.Random) -> None:
    block = rng.randbytes(17) + bytes(BLOCK_BYTES - 17)
    states = [_fresh_state(), _fresh_state()]
    for state in states:
        state.f[:] = [0xFFFFFFFF, 0xFFFFFFFF]
    generic_compress(states[0], block, 1, 17)
    assert VectorizedBackend(min_blocks=1).try_compress(states[1], block, 1, 17)
    assert states[0].h == states[1].h
    assert states[0].t == states[1].t == [17, 0]


def test_vectorized_declines_small_batches_without_side_effects() -> None:
    state = _fresh_state()
    before = (list(state.h), list(state.t))
    assert not VectorizedBackend(min_blocks=4).try_compress(state, bytes(3 * BLOCK_BYTES), 3, BLOCK_BYTES)
    assert (list(state.h), list(state.t)) == before


def test_generic_backend_always_declines() -> None:
    state = _fresh_state()
    assert GenericBackend().try_compress(state, bytes(BLOCK_BYTES), 1, BLOCK_BYTES) is False


def test_vectorized_backend_is_available() -> None:
    assert VectorizedBackend().available()


def test_init_backends_selects_vectorized(restore_backends) -> None:
    backend = init_backends(Blake2sConfig(simd=True, simd_min_blocks=3))
    assert isinstance(backend, VectorizedBackend)
    assert backend.min_blocks == 3
    assert active_backend() is backend


def test_init_backends_respects_nosimd(restore_backends) -> None:
    assert init_backends(Blake2sConfig(simd=False)) is None
    assert active_backend() is None


def test_init_backends_rejects_invalid_config(restore_backends) -> None:
    with pytest.raises(ParameterError):
        init_backends(Blake2sConfig(simd_min_blocks=0))


def test_init_backends_runs_selftest(restore_backends) -> None:
    assert isinstance(init_backends(Blake2sConfig(selftest=True)), VectorizedBackend)


def test_selftest_passes_for_each_backend(backend) -> None:
    assert blake2s_selftest(backend)


def test_selftest_sequence_is_deterministic() -> None:
    assert selftest_sequence(0, 0) == b""
    assert selftest_sequence(16, 16) == selftest_sequence(16, 16)
    assert selftest_sequence(16, 16) != selftest_sequence(16, 20)


class _CorruptingBackend(VectorizedBackend):
    """Accepts every batch but flips a chain-value bit afterwards."""

    name = "corrupting"

    def try_compress(self, state, blocks, nblocks, inc) -> bool:
        generic_compress(state, blocks, nblocks, inc)
        state.h[0] ^= 1
        return True


def test_selftest_reports_mismatch(caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="blake2s_core.selftest"):
        assert blake2s_selftest(_CorruptingBackend()) is False
    assert any(record.levelno == logging.ERROR for record in caplog.records)


# restore_backends is requested first so it tears down after monkeypatch has
# put the real VectorizedBackend back.
def test_init_backends_raises_when_selftest_fails(restore_backends, monkeypatch, caplog) -> None:
    monkeypatch.setattr(backends, "VectorizedBackend", _CorruptingBackend)
    previous = active_backend()

    with caplog.at_level(logging.ERROR, logger="blake2s_core.backends"):
        with pytest.raises(SelfTestError):
            init_backends(Blake2sConfig(selftest=True))

    assert any(
        record.levelno == logging.ERROR and "corrupting" in record.getMessage()
        for record in caplog.records
    )
    assert active_backend() is previous


def _clear_environment(monkeypatch) -> None:
    for var in ("BLAKE2S_NOSIMD", "BLAKE2S_SIMD_MIN_BLOCKS", "BLAKE2S_SELFTEST"):
        monkeypatch.delenv(var, raising=False)


def test_active_backend_detects_on_first_use(restore_backends, monkeypatch) -> None:
    _clear_environment(monkeypatch)
    monkeypatch.setattr(backends, "_initialized", False)
    monkeypatch.setattr(backends, "_selected", None)

    backend = active_backend()

    assert isinstance(backend, VectorizedBackend)
    assert backend.min_blocks == Blake2sConfig().simd_min_blocks
    assert backends._initialized is True
    assert active_backend() is backend


def test_first_update_runs_detection_from_environment(restore_backends, monkeypatch) -> None:
    _clear_environment(monkeypatch)
    monkeypatch.setenv("BLAKE2S_NOSIMD", "1")
    monkeypatch.setattr(backends, "_initialized", False)
    monkeypatch.setattr(backends, "_selected", None)

    state = Blake2sState()
    blake2s_init(state, 32)
    blake2s_update(state, bytes(3 * BLOCK_BYTES))

    assert backends._initialized is True
    assert active_backend() is None


def test_invalid_environment_surfaces_as_parameter_error(restore_backends, monkeypatch) -> None:
    _clear_environment(monkeypatch)
    monkeypatch.setenv("BLAKE2S_SIMD_MIN_BLOCKS", "many")
    monkeypatch.setattr(backends, "_initialized", False)

    state = Blake2sState()
    blake2s_init(state, 32)
    with pytest.raises(ParameterError):
        blake2s_update(state, bytes(3 * BLOCK_BYTES))
