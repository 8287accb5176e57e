"""OpenAI-compatible API chapter generation (OpenAI, LM Studio, llama.cpp server, etc.)."""

from __future__ import annotations

import openai

from vidscribe.chapters.base import ChapterGenerator
from vidscribe.chapters.prompts import CHAPTERS_PROMPT, CHAPTERS_SYSTEM, clean_response
from vidscribe.config import ChaptersConfig


class OpenAIChapterGenerator(ChapterGenerator):
    """Generates chapter lists using an OpenAI-compatible API."""

    def __init__(self, config: ChaptersConfig) -> None:
        self._config = config
        base_url = config.host
        if not base_url.endswith("/v1"):
            base_url = base_url.rstrip("/") + "/v1"
        # Local servers accept any key
        self._client = openai.OpenAI(base_url=base_url, api_key=config.api_key or "not-needed")

    def is_available(self) -> bool:
        try:
            self._client.models.list()
            return True
        except Exception:
            return False

    def generate(self, transcript_text: str, vtt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._config.model,
            messages=[
                {"role": "system", "content": CHAPTERS_SYSTEM},
                {"role": "user", "content": CHAPTERS_PROMPT.format(transcript=transcript_text, vtt=vtt)},
            ],
            temperature=0.7,
            max_tokens=500,
        )
        return clean_response(response.choices[0].message.content or "")
