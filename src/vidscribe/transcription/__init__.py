from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidscribe.config import Config
    from vidscribe.transcription.base import Transcriber


def create_transcriber(config: Config) -> Transcriber:
    """Create the appropriate transcriber based on config."""
    if config.transcription.backend == "cloudflare":
        from vidscribe.transcription.cloudflare_transcriber import CloudflareTranscriber

        return CloudflareTranscriber(config.transcription)
    else:
        from vidscribe.transcription.openai_transcriber import OpenAITranscriber

        return OpenAITranscriber(config.transcription)
