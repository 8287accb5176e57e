"""WebVTT cue track reading, writing and time shifting."""

from __future__ import annotations

from collections.abc import Iterable

from vidscribe.captions.models import Cue, CueEntry, RawBlock
from vidscribe.captions.timestamps import format_timestamp, parse_timestamp
from vidscribe.errors import MalformedTimestamp

HEADER = "WEBVTT"
ARROW = "-->"


def _parse_timing(line: str) -> tuple[float, float, str]:
    """Split a timing line into (start, end, settings)."""
    left, _, right = line.partition(ARROW)
    parts = right.split(None, 1)
    if not parts:
        raise MalformedTimestamp(f"Missing end timestamp in {line!r}")
    start = parse_timestamp(left)
    end = parse_timestamp(parts[0])
    if end < start:
        raise MalformedTimestamp(f"Cue ends before it starts: {line!r}")
    settings = parts[1].strip() if len(parts) > 1 else ""
    return start, end, settings


def _close_block(timing: str, text_lines: list[str]) -> CueEntry:
    try:
        start, end, settings = _parse_timing(timing)
    except MalformedTimestamp:
        return RawBlock(lines=(timing, *text_lines))
    return Cue(start=start, end=end, text="\n".join(text_lines), settings=settings)


def parse_vtt(document: str) -> list[CueEntry]:
    """Parse a WebVTT document into cue entries.

    Lines outside a cue block (the header, cue identifiers, NOTE comments) are
    ignored. A block whose timing line does not parse comes back as a
    ``RawBlock`` instead of raising.
    """
    entries: list[CueEntry] = []
    timing: str | None = None
    text_lines: list[str] = []

    for line in document.lstrip("\ufeff").splitlines():
        if ARROW in line:
            if timing is not None:
                entries.append(_close_block(timing, text_lines))
            timing, text_lines = line, []
        elif not line.strip():
            if timing is not None:
                entries.append(_close_block(timing, text_lines))
            timing, text_lines = None, []
        elif timing is not None:
            text_lines.append(line)

    if timing is not None:
        entries.append(_close_block(timing, text_lines))
    return entries


def format_timing(cue: Cue) -> str:
    line = f"{format_timestamp(cue.start)} {ARROW} {format_timestamp(cue.end)}"
    if cue.settings:
        line += f" {cue.settings}"
    return line


def write_vtt(entries: Iterable[CueEntry]) -> str:
    """Serialize cue entries as a WebVTT document."""
    lines = [HEADER, ""]
    for entry in entries:
        if isinstance(entry, RawBlock):
            lines.extend(entry.lines)
        else:
            lines.append(format_timing(entry))
            if entry.text:
                lines.extend(entry.text.split("\n"))
        lines.append("")
    return "\n".join(lines)


def shift_cues(entries: Iterable[CueEntry], offset: float) -> list[CueEntry]:
    """Move every parsed cue by ``offset`` seconds; raw blocks are unchanged."""
    return [e.shifted(offset) if isinstance(e, Cue) else e for e in entries]


def shift_vtt(document: str, offset: float) -> str:
    """Shift all cue timestamps in a WebVTT document by ``offset`` seconds."""
    return write_vtt(shift_cues(parse_vtt(document), offset))


def cues_only(entries: Iterable[CueEntry]) -> list[Cue]:
    return [e for e in entries if isinstance(e, Cue)]
