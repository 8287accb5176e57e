"""Convert cue tracks into ASS subtitle scripts and SRT captions."""

from __future__ import annotations

import re
from collections.abc import Iterable

from vidscribe.captions.models import CueEntry
from vidscribe.captions.timestamps import format_timestamp
from vidscribe.captions.vtt import cues_only

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, "
    "BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, "
    "BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding"
)

# Assigned to cues in rotation: cue n gets STYLES[n % 3].
STYLES: tuple[tuple[str, str], ...] = (
    ("Default", "Arial,48,&H00FFFFFF,&H000000FF,&H00000000,&H80000000,0,0,0,0,100,100,0,0,1,2,1,2,40,40,60,1"),
    ("Alternate", "Arial,48,&H0000FFFF,&H000000FF,&H00000000,&H80000000,0,0,0,0,100,100,0,0,1,2,1,2,40,40,60,1"),
    ("Accent", "Arial,50,&H00FFC800,&H000000FF,&H00202020,&H80000000,-1,0,0,0,100,100,0,0,1,3,1,2,40,40,60,1"),
)

EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"

EMPHASIS_WORDS = ("important", "key", "main", "critical", "essential")
EMPHASIS_MIN_LENGTH = 20

_EMPHASIS_RE = re.compile(r"\b(" + "|".join(EMPHASIS_WORDS) + r")\b", re.IGNORECASE)


def _ass_time(seconds: float) -> str:
    return format_timestamp(seconds, 2, hour_width=1)


def _srt_time(seconds: float) -> str:
    return format_timestamp(seconds, 3, separator=",")


def _ass_text(text: str) -> str:
    if len(text) > EMPHASIS_MIN_LENGTH:
        text = _EMPHASIS_RE.sub(r"{\\b1}\1{\\b0}", text)
    return text.replace("\n", "\\N")


def _script_header(title: str) -> list[str]:
    lines = [
        "[Script Info]",
        f"Title: {title}",
        "ScriptType: v4.00+",
        "WrapStyle: 0",
        "PlayResX: 1920",
        "PlayResY: 1080",
        "ScaledBorderAndShadow: yes",
        "",
        "[V4+ Styles]",
        STYLE_FORMAT,
    ]
    lines.extend(f"Style: {name},{spec}" for name, spec in STYLES)
    lines.extend(["", "[Events]", EVENT_FORMAT])
    return lines


def to_styled_script(entries: Iterable[CueEntry], *, title: str = "vidscribe") -> str:
    """Render cues as an Advanced SubStation Alpha (.ass) script.

    Unparsed raw blocks are skipped. Styles rotate over the cue position.
    """
    lines = _script_header(title)
    for position, cue in enumerate(cues_only(entries)):
        style = STYLES[position % len(STYLES)][0]
        lines.append(
            f"Dialogue: 0,{_ass_time(cue.start)},{_ass_time(cue.end)},{style},,0,0,0,,{_ass_text(cue.text)}"
        )
    return "\n".join(lines) + "\n"


def to_numbered_captions(entries: Iterable[CueEntry]) -> str:
    """Render cues as SubRip (.srt) captions."""
    blocks = [
        f"{number}\n{_srt_time(cue.start)} --> {_srt_time(cue.end)}\n{cue.text}\n"
        for number, cue in enumerate(cues_only(entries), start=1)
    ]
    return "\n".join(blocks)
