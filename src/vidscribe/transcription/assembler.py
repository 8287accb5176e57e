"""Merge per-chunk transcription results into one transcript and cue track."""

from __future__ import annotations

from collections.abc import Iterable

from vidscribe.captions.models import CueEntry
from vidscribe.captions.vtt import shift_cues
from vidscribe.transcription.models import AssembledTranscript, ChunkResult


def assemble(results: Iterable[ChunkResult]) -> AssembledTranscript:
    """Combine chunk results in chunk order, whatever order they arrived in.

    Failed chunks are dropped. A chunk's text is skipped when the exact same
    trimmed text was already added by an earlier chunk; the service sometimes
    repeats a sentence at a window boundary. Cues are moved from chunk-local
    time onto the global timeline by the chunk's start offset.
    """
    results = list(results)
    ok = sorted((r for r in results if not r.failed), key=lambda r: r.chunk.index)

    seen: set[str] = set()
    texts: list[str] = []
    cues: list[CueEntry] = []
    for result in ok:
        text = (result.text or "").strip()
        if text and text not in seen:
            seen.add(text)
            texts.append(text)
        if result.cues:
            cues.extend(shift_cues(result.cues, result.chunk.start))

    return AssembledTranscript(
        text=" ".join(texts),
        cues=cues,
        dropped_chunks=len(results) - len(ok),
        total_chunks=len(results),
    )
