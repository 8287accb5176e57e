"""Prompt templates and response parsing for chapter generation."""

from __future__ import annotations

import re
from typing import NamedTuple

from vidscribe.captions.timestamps import parse_timestamp
from vidscribe.errors import MalformedTimestamp

_THINK_RE = re.compile(r"<think>[\s\S]*?</think>\s*", re.IGNORECASE)
_ORPHAN_THINK_CLOSE_RE = re.compile(r"^[\s\S]*?</think>\s*", re.IGNORECASE)
_CHAPTER_RE = re.compile(r"^\s*(?:[-*•]\s*)?((?:\d+:)?\d{1,2}:\d{2})\s*[-–—]\s*(.+?)\s*$")


def clean_response(text: str) -> str:
    """Strip reasoning/thinking tags from LLM responses."""
    text = _THINK_RE.sub("", text).strip()
    if "</think>" in text.lower():
        text = _ORPHAN_THINK_CLOSE_RE.sub("", text).strip()
    return text


CHAPTERS_SYSTEM = (
    "You are a professional video editor and content strategist. Your task is to generate "
    "YouTube-style chapters from video transcripts with timestamps."
)

CHAPTERS_PROMPT = """I will give you a full transcript of a video in VTT format (with timestamps). Based on this \
transcript, your task is to:

1. Analyze the content and identify natural topic breaks.
2. Generate a list of YouTube-style chapters that summarize the main sections of the video.
3. Format each chapter with a timestamp and a short, engaging title (max 6-8 words).
4. Ensure chapter titles are clear, concise, and help viewers understand what each section is about.

Only return the chapter list in this format:

00:00 - [Title of Section 1]
02:15 - [Title of Section 2]
05:42 - [Title of Section 3]
...

Make sure:
- Chapters are spaced roughly every 2-5 minutes (unless a topic shift demands otherwise)
- Titles reflect what the speaker is saying, not just generic phrases like "Discussion"
- If no content is worth splitting, return just 2-3 chapters max
- Use the timestamps from the VTT to ensure accurate chapter timing

Plain transcript:
{transcript}

Transcript in VTT format:
{vtt}"""


class Chapter(NamedTuple):
    start: float
    title: str


def parse_chapters(text: str) -> list[Chapter]:
    """Read ``MM:SS - Title`` lines from a chapter list, skipping anything else."""
    chapters = []
    for line in text.splitlines():
        m = _CHAPTER_RE.match(line)
        if not m:
            continue
        try:
            start = parse_timestamp(m.group(1))
        except MalformedTimestamp:
            continue
        chapters.append(Chapter(start=start, title=m.group(2).strip("[] ")))
    return chapters


def format_chapters(chapters: list[Chapter]) -> str:
    """Render chapters as ``MM:SS - Title`` lines (``H:MM:SS`` past the hour)."""
    lines = []
    for chapter in chapters:
        m, s = divmod(int(chapter.start), 60)
        h, m = divmod(m, 60)
        stamp = f"{h}:{m:02d}:{s:02d}" if h else f"{m:02d}:{s:02d}"
        lines.append(f"{stamp} - {chapter.title}")
    return "\n".join(lines) + "\n" if lines else ""
