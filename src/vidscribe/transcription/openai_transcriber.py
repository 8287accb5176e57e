"""OpenAI-compatible API transcription (OpenAI, LocalAI, faster-whisper-server, etc.)."""

from __future__ import annotations

import openai

from vidscribe.captions.models import Cue
from vidscribe.captions.vtt import write_vtt
from vidscribe.config import TranscriptionConfig
from vidscribe.transcription.base import Transcriber
from vidscribe.transcription.models import TranscriptionResponse


def _field(obj, name: str, default=None):
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class OpenAITranscriber(Transcriber):
    """Transcribes chunks with the ``audio/transcriptions`` endpoint."""

    def __init__(self, config: TranscriptionConfig) -> None:
        self._config = config
        base_url = config.host
        if not base_url.endswith("/v1"):
            base_url = base_url.rstrip("/") + "/v1"
        # Local servers accept any key
        self._client = openai.OpenAI(
            base_url=base_url,
            api_key=config.api_key or "not-needed",
            timeout=config.timeout,
            max_retries=0,
        )

    def is_available(self) -> bool:
        try:
            self._client.models.list()
            return True
        except Exception:
            return False

    def transcribe(self, audio: bytes) -> TranscriptionResponse:
        kwargs = {}
        if self._config.language:
            kwargs["language"] = self._config.language
        response = self._client.audio.transcriptions.create(
            model=self._config.model,
            file=("chunk.wav", audio, "audio/wav"),
            response_format="verbose_json",
            timestamp_granularities=["segment"],
            **kwargs,
        )

        cues = []
        for seg in _field(response, "segments") or []:
            start = float(_field(seg, "start", 0.0))
            end = max(start, float(_field(seg, "end", start)))
            cues.append(Cue(start=start, end=end, text=str(_field(seg, "text", "")).strip()))

        return TranscriptionResponse(text=_field(response, "text", "") or "", vtt=write_vtt(cues))
