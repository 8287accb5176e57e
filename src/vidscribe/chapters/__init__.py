from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidscribe.chapters.base import ChapterGenerator
    from vidscribe.config import Config


def create_chapter_generator(config: Config) -> ChapterGenerator:
    """Create the appropriate chapter generator based on config."""
    if config.chapters.backend == "ollama":
        from vidscribe.chapters.ollama_generator import OllamaChapterGenerator

        return OllamaChapterGenerator(config.chapters)
    else:
        from vidscribe.chapters.openai_generator import OpenAIChapterGenerator

        return OpenAIChapterGenerator(config.chapters)
