"""Data models for cue tracks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union


@dataclass(frozen=True)
class Cue:
    start: float
    end: float
    text: str
    settings: str = ""

    def shifted(self, offset: float) -> Cue:
        return replace(self, start=max(0.0, self.start + offset), end=max(0.0, self.end + offset))


@dataclass(frozen=True)
class RawBlock:
    """A cue block whose timing line could not be parsed, kept verbatim."""

    lines: tuple[str, ...]


CueEntry = Union[Cue, RawBlock]
