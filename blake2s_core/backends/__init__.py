"""Compression backend selection.

The state machine offers every batch of blocks to the selected backend
first. A backend either compresses the whole batch and returns ``True``, or
declines without side effects and returns ``False``, in which case the
generic implementation in :mod:`blake2s_core.compress` runs instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final, Optional, Protocol

from ..config import Blake2sConfig
from ..errors import ParameterError, SelfTestError
from .vectorized import VectorizedBackend

if TYPE_CHECKING:
    from ..state import Blake2sState

_LOGGER: Final = logging.getLogger(__name__)


class CompressBackend(Protocol):
    name: str

    def try_compress(
        self, state: Blake2sState, blocks: bytes | bytearray | memoryview, nblocks: int, inc: int
    ) -> bool: ...


class GenericBackend:
    """Backend that always declines.

    Pinning a state to it forces the generic implementation regardless of
    what :func:`init_backends` selected.
    """

    name = "generic"

    def try_compress(
        self, state: Blake2sState, blocks: bytes | bytearray | memoryview, nblocks: int, inc: int
    ) -> bool:
        return False


_selected: Optional[CompressBackend] = None
_initialized = False


def init_backends(config: Blake2sConfig | None = None) -> Optional[CompressBackend]:
    """Detect and cache the accelerated backend.

    Safe to call more than once; each call re-runs detection with the given
    configuration.

    Args:
        config: Settings to use. Defaults to :meth:`Blake2sConfig.from_environment`.

    Returns:
        The selected backend, or ``None`` when only the generic path is used.

    Raises:
        ParameterError: If ``config`` is invalid.
        SelfTestError: If self-testing is enabled and a backend fails it.
    """

    global _selected, _initialized

    config = config or Blake2sConfig.from_environment()
    errors = config.validate()
    if errors:
        raise ParameterError("; ".join(errors))

    backend: Optional[CompressBackend] = None
    if not config.simd:
        _LOGGER.debug("vectorized backend disabled by configuration")
    else:
        candidate = VectorizedBackend(min_blocks=config.simd_min_blocks)
        if candidate.available():
            backend = candidate
        else:
            _LOGGER.debug("vectorized backend not available on this platform")

    if config.selftest:
        from ..selftest import blake2s_selftest

        for checked in (GenericBackend(), backend):
            if checked is None:
                continue
            if not blake2s_selftest(checked):
                _LOGGER.error("BLAKE2s self-test failed for backend %s", checked.name)
                raise SelfTestError(f"self-test failed for backend {checked.name}")

    _selected = backend
    _initialized = True
    _LOGGER.debug("BLAKE2s compression backend: %s", backend.name if backend else "generic")
    return backend


def active_backend() -> Optional[CompressBackend]:
    """Return the cached backend, running detection on first use."""

    if not _initialized:
        init_backends()
    return _selected


__all__ = [
    "CompressBackend",
    "GenericBackend",
    "VectorizedBackend",
    "active_backend",
    "init_backends",
]
