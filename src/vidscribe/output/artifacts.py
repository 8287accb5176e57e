"""Render an assembled transcript into downloadable files."""

from __future__ import annotations

from collections.abc import Iterable

from vidscribe.captions.transcode import to_numbered_captions, to_styled_script
from vidscribe.transcription.models import AssembledTranscript

ARTIFACT_FILES = {
    "txt": "transcript.txt",
    "vtt": "captions.vtt",
    "ass": "captions.ass",
    "srt": "captions.srt",
}


def _render(assembled: AssembledTranscript, fmt: str, title: str) -> str:
    if fmt == "txt":
        return assembled.text + "\n" if assembled.text else ""
    if fmt == "vtt":
        return assembled.vtt
    if fmt == "ass":
        return to_styled_script(assembled.cues, title=title)
    return to_numbered_captions(assembled.cues)


def render_artifacts(
    assembled: AssembledTranscript,
    formats: Iterable[str],
    title: str = "vidscribe",
) -> dict[str, str]:
    """Return a mapping of file name to file content for each requested format."""
    files: dict[str, str] = {}
    for fmt in formats:
        if fmt not in ARTIFACT_FILES:
            raise ValueError(f"Unknown output format: {fmt!r}")
        files[ARTIFACT_FILES[fmt]] = _render(assembled, fmt, title)
    return files
