"""Cloudflare Workers AI Whisper transcription."""

from __future__ import annotations

import httpx

from vidscribe.config import TranscriptionConfig
from vidscribe.errors import TranscriptionError
from vidscribe.transcription.base import Transcriber
from vidscribe.transcription.models import TranscriptionResponse

DEFAULT_MODEL = "@cf/openai/whisper"


class CloudflareTranscriber(Transcriber):
    """Sends raw WAV bytes to the Workers AI ``run`` endpoint."""

    def __init__(self, config: TranscriptionConfig) -> None:
        self._config = config
        model = config.model if config.model.startswith("@cf/") else DEFAULT_MODEL
        self._path = f"/accounts/{config.cloudflare_account_id}/ai/run/{model}"
        self._client = httpx.Client(
            base_url=config.cloudflare_host.rstrip("/"),
            headers={"Authorization": f"Bearer {config.cloudflare_api_token}"},
            timeout=config.timeout,
        )

    def is_available(self) -> bool:
        return bool(self._config.cloudflare_account_id and self._config.cloudflare_api_token)

    def transcribe(self, audio: bytes) -> TranscriptionResponse:
        response = self._client.post(
            self._path,
            content=audio,
            headers={"Content-Type": "application/octet-stream"},
        )
        if response.is_error:
            raise TranscriptionError(
                f"Cloudflare API returned HTTP {response.status_code}: {response.text[:500]}"
            )

        data = response.json()
        if not data.get("success"):
            errors = data.get("errors") or []
            message = errors[0].get("message", "Unknown error") if errors else "Unknown error"
            raise TranscriptionError(f"Cloudflare API error: {message}")

        result = data.get("result") or {}
        return TranscriptionResponse(text=result.get("text", ""), vtt=result.get("vtt") or "")
