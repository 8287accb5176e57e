"""Exceptions raised by the transcription pipeline."""

from __future__ import annotations


class VidscribeError(Exception):
    """Base class for vidscribe errors."""


class InvalidInput(VidscribeError):
    """Bad duration or window arguments; the pipeline does not start."""


class MalformedTimestamp(VidscribeError):
    """A cue timestamp could not be parsed."""


class ChunkFailure(VidscribeError):
    """A single chunk could not be transcribed."""


class TotalFailure(VidscribeError):
    """Every chunk of a run failed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"All {len(errors)} chunks failed to transcribe")


class AudioExtractionError(VidscribeError):
    """ffmpeg/ffprobe failed on the source media."""


class TranscriptionError(VidscribeError):
    """The transcription service returned an error."""
