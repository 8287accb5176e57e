"""FFmpeg/FFprobe wrappers: media duration and per-chunk audio extraction."""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

from vidscribe.errors import AudioExtractionError
from vidscribe.transcription.models import Chunk

SAMPLE_RATE = 16000


def ffmpeg_available() -> bool:
    return shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None


def probe_duration(path: Path | str) -> float:
    """Return the duration of a media file in seconds."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Media file not found: {path}")

    result = subprocess.run(
        ["ffprobe", "-v", "quiet", "-print_format", "json", "-show_format", str(path)],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise AudioExtractionError(f"ffprobe failed on {path}: {result.stderr.strip()[:500]}")

    try:
        return float(json.loads(result.stdout)["format"]["duration"])
    except (ValueError, KeyError, TypeError) as e:
        raise AudioExtractionError(f"Could not read duration of {path}") from e


class FFmpegAudioExtractor:
    """Extracts one chunk of a media file as 16 kHz mono 16-bit WAV bytes."""

    def __init__(self, source: Path | str, sample_rate: int = SAMPLE_RATE) -> None:
        self._source = Path(source)
        self._sample_rate = sample_rate

    def __call__(self, chunk: Chunk) -> bytes:
        cmd = [
            "ffmpeg", "-hide_banner", "-loglevel", "error",
            "-ss", f"{chunk.start:.3f}",
            "-t", f"{chunk.length:.3f}",
            "-i", str(self._source),
            "-vn",
            "-ac", "1",
            "-ar", str(self._sample_rate),
            "-c:a", "pcm_s16le",
            "-f", "wav",
            "pipe:1",
        ]
        result = subprocess.run(cmd, capture_output=True)
        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise AudioExtractionError(f"ffmpeg failed for chunk {chunk.index}: {stderr[:500]}")
        return result.stdout
