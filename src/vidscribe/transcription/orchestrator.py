"""Fan chunk transcription out over a bounded worker pool and join the results."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from vidscribe.captions.vtt import parse_vtt
from vidscribe.errors import ChunkFailure, InvalidInput, TotalFailure
from vidscribe.transcription.base import Transcriber
from vidscribe.transcription.models import Chunk, ChunkResult, TranscriptionResponse

logger = logging.getLogger(__name__)

AudioExtractor = Callable[[Chunk], bytes]
ProgressCallback = Callable[[int], None]


def _check_response(response: object) -> TranscriptionResponse:
    if not isinstance(response, TranscriptionResponse):
        raise ChunkFailure(f"Unexpected transcriber response: {type(response).__name__}")
    if not isinstance(response.text, str) or not isinstance(response.vtt, str):
        raise ChunkFailure("Transcriber response is missing text or cue track")
    return response


def _transcribe_chunk(chunk: Chunk, extract_audio: AudioExtractor, transcriber: Transcriber) -> ChunkResult:
    logger.debug("Chunk %d: %.2fs-%.2fs dispatched", chunk.index, chunk.start, chunk.end)
    try:
        audio = extract_audio(chunk)
        response = _check_response(transcriber.transcribe(audio))
        cues = tuple(parse_vtt(response.vtt))
    except Exception as e:
        logger.warning(
            "Chunk %d (%.2fs-%.2fs) failed: %s", chunk.index, chunk.start, chunk.end, e,
        )
        return ChunkResult(chunk=chunk, failed=True, error=str(e) or type(e).__name__)
    logger.debug("Chunk %d: settled with %d cue blocks", chunk.index, len(cues))
    return ChunkResult(chunk=chunk, text=response.text, cues=cues)


def run_chunks(
    chunks: Sequence[Chunk],
    extract_audio: AudioExtractor,
    transcriber: Transcriber,
    concurrency: int = 1,
    on_progress: ProgressCallback | None = None,
) -> list[ChunkResult]:
    """Transcribe every chunk with at most ``concurrency`` requests in flight.

    Returns only after all chunks have settled, one result per chunk in chunk
    order regardless of completion order. A failing chunk is recorded as
    failed; the run raises ``TotalFailure`` only if all of them fail.
    """
    if not chunks:
        raise InvalidInput("No chunks to transcribe")

    total = len(chunks)
    slots: list[ChunkResult | None] = [None] * total
    settled = 0
    reported = 0

    with ThreadPoolExecutor(max_workers=max(1, concurrency)) as pool:
        futures = {
            pool.submit(_transcribe_chunk, chunk, extract_audio, transcriber): slot
            for slot, chunk in enumerate(chunks)
        }
        for future in as_completed(futures):
            slots[futures[future]] = future.result()
            settled += 1
            percent = settled * 100 // total
            if on_progress is not None and percent > reported:
                reported = percent
                on_progress(percent)

    results = [r for r in slots if r is not None]
    results.sort(key=lambda r: r.chunk.index)

    failures = [r for r in results if r.failed]
    if len(failures) == total:
        raise TotalFailure([f"chunk {r.chunk.index}: {r.error}" for r in failures])
    if failures:
        logger.warning("%d of %d chunks failed and were dropped", len(failures), total)
    return results
