"""Abstract base class for transcribers."""

from __future__ import annotations

import abc

from vidscribe.transcription.models import TranscriptionResponse


class Transcriber(abc.ABC):
    """Base class for remote transcription backends."""

    @abc.abstractmethod
    def transcribe(self, audio: bytes) -> TranscriptionResponse:
        """Transcribe one chunk of 16 kHz mono WAV audio."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Check if the backend is configured and reachable."""
