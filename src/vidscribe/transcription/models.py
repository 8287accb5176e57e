"""Data models for chunked transcription."""

from __future__ import annotations

from dataclasses import dataclass, field

from vidscribe.captions.models import CueEntry
from vidscribe.captions.vtt import write_vtt


@dataclass(frozen=True)
class Chunk:
    index: int
    start: float
    length: float

    @property
    def end(self) -> float:
        return self.start + self.length


@dataclass(frozen=True)
class TranscriptionResponse:
    """What a transcriber returns for one chunk: plain text and a WebVTT track."""

    text: str
    vtt: str = ""


@dataclass(frozen=True)
class ChunkResult:
    chunk: Chunk
    text: str | None = None
    cues: tuple[CueEntry, ...] | None = None
    failed: bool = False
    error: str | None = None


@dataclass
class AssembledTranscript:
    text: str
    cues: list[CueEntry] = field(default_factory=list)
    dropped_chunks: int = 0
    total_chunks: int = 0

    @property
    def vtt(self) -> str:
        return write_vtt(self.cues)

    @property
    def is_partial(self) -> bool:
        return self.dropped_chunks > 0
