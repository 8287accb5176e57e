"""Split a recording's timeline into bounded transcription windows."""

from __future__ import annotations

import math

from vidscribe.errors import InvalidInput
from vidscribe.transcription.models import Chunk

# Trailing windows shorter than this only come from floating-point error.
_SLIVER = 1e-9


def _check_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidInput(f"{name} must be positive, got {value!r}")


def plan_chunks(total_duration: float, window_length: float) -> list[Chunk]:
    """Return contiguous windows of at most ``window_length`` covering the timeline.

    Each chunk starts where the previous one ends and the last one ends exactly
    at ``total_duration``.
    """
    _check_positive("total_duration", total_duration)
    _check_positive("window_length", window_length)

    count = math.ceil(total_duration / window_length)
    while count > 1 and total_duration - (count - 1) * window_length <= _SLIVER:
        count -= 1

    chunks: list[Chunk] = []
    start = 0.0
    for i in range(count):
        if i == count - 1:
            length = total_duration - start
        else:
            length = min(window_length, total_duration - start)
        chunks.append(Chunk(index=i, start=start, length=length))
        start += length
    return chunks
