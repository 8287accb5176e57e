"""Ollama-based chapter generation."""

from __future__ import annotations

import ollama

from vidscribe.chapters.base import ChapterGenerator
from vidscribe.chapters.prompts import CHAPTERS_PROMPT, CHAPTERS_SYSTEM, clean_response
from vidscribe.config import ChaptersConfig


class OllamaChapterGenerator(ChapterGenerator):
    """Generates chapter lists using a local Ollama model."""

    def __init__(self, config: ChaptersConfig) -> None:
        self._config = config
        self._client = ollama.Client(host=config.host)

    def is_available(self) -> bool:
        try:
            self._client.list()
            return True
        except Exception:
            return False

    def generate(self, transcript_text: str, vtt: str) -> str:
        response = self._client.chat(
            model=self._config.model,
            messages=[
                {"role": "system", "content": CHAPTERS_SYSTEM},
                {"role": "user", "content": CHAPTERS_PROMPT.format(transcript=transcript_text, vtt=vtt)},
            ],
        )
        return clean_response(response["message"]["content"])
