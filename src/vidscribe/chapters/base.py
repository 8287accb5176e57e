"""Abstract base class for chapter generators."""

from __future__ import annotations

import abc


class ChapterGenerator(abc.ABC):
    """Base class for chapter-list generation backends."""

    @abc.abstractmethod
    def generate(self, transcript_text: str, vtt: str) -> str:
        """Return a chapter list, one ``MM:SS - Title`` line per chapter."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Check if the generation backend is reachable."""
