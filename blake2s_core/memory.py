"""Buffer wiping helpers.

CPython gives no guarantee that older copies of a buffer are gone from the
heap, so this is best effort: it overwrites the buffers we own in place.
"""

from __future__ import annotations


def wipe(buf: bytearray | memoryview) -> None:
    """Overwrite ``buf`` with zero bytes without reallocating it."""

    buf[:] = bytes(len(buf))


def wipe_words(words: list[int]) -> None:
    """Zero a list of integer words in place."""

    for i in range(len(words)):
        words[i] = 0
