"""Runtime configuration for :mod:`blake2s_core`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import os

from .errors import ParameterError

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(env_var: str) -> Optional[bool]:
    value = os.getenv(env_var)
    if value is None:
        return None
    return value.strip().lower() in _TRUTHY


@dataclass
class Blake2sConfig:
    """Backend selection settings.

    Attributes:
        simd: Allow the vectorized compression backend.
        simd_min_blocks: Smallest batch the vectorized backend accepts.
            Smaller batches are left to the generic implementation.
        selftest: Run the known-answer self-test when backends are
            initialized.
    """

    simd: bool = True
    simd_min_blocks: int = 2
    selftest: bool = False

    @classmethod
    def from_environment(cls) -> Blake2sConfig:
        """
        Build a configuration from environment variables.

        ``BLAKE2S_NOSIMD`` disables the vectorized backend,
        ``BLAKE2S_SIMD_MIN_BLOCKS`` sets its batch threshold and
        ``BLAKE2S_SELFTEST`` enables the self-test.

        Returns:
            Configuration with environment overrides applied to the defaults.

        Raises:
            ParameterError: If ``BLAKE2S_SIMD_MIN_BLOCKS`` is not an integer.
        """
        config = cls()

        nosimd = _env_flag("BLAKE2S_NOSIMD")
        if nosimd is not None:
            config.simd = not nosimd

        min_blocks = os.getenv("BLAKE2S_SIMD_MIN_BLOCKS")
        if min_blocks is not None:
            try:
                config.simd_min_blocks = int(min_blocks)
            except ValueError as e:
                raise ParameterError(
                    f"BLAKE2S_SIMD_MIN_BLOCKS must be an integer, got {min_blocks!r}"
                ) from e

        selftest = _env_flag("BLAKE2S_SELFTEST")
        if selftest is not None:
            config.selftest = selftest

        return config

    def validate(self) -> List[str]:
        """
        Validate the configuration.

        Returns:
            List of validation errors. Empty if valid.
        """
        errors = []
        if self.simd_min_blocks < 1:
            errors.append("simd_min_blocks must be at least 1")
        return errors
