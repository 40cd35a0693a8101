"""Shared exceptions for :mod:`blake2s_core`.

The hash itself has no runtime failure modes. Everything raised here is a
caller mistake (bad lengths, misuse of a finished state) or a failed check.
"""

from __future__ import annotations


class Blake2sError(Exception):
    """Base error for BLAKE2s operations."""


class ParameterError(Blake2sError, ValueError):
    """Raised when a length or parameter-block field is out of range."""


class StateError(Blake2sError):
    """Raised when a hash state is used before init or after finalization."""


class VerificationError(Blake2sError):
    """Raised when an authentication tag does not match."""


class SelfTestError(Blake2sError):
    """Raised when a backend fails the known-answer self-test."""
