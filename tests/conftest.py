"""Shared fixtures for vidscribe tests."""

from __future__ import annotations

import math
import shutil
import struct
import wave
from pathlib import Path

import pytest

from vidscribe.captions.models import Cue
from vidscribe.transcription.models import Chunk, ChunkResult


@pytest.fixture
def sample_vtt() -> str:
    """A small chunk-local cue track with a header, an identifier and a two-line cue."""
    return (
        "WEBVTT\n"
        "\n"
        "1\n"
        "00:00:00.000 --> 00:00:01.500\n"
        "Hello world.\n"
        "\n"
        "2\n"
        "00:00:01.500 --> 00:00:03.000\n"
        "How are you?\n"
        "Fine, thanks.\n"
    )


@pytest.fixture
def sample_cues() -> list[Cue]:
    return [
        Cue(start=0.0, end=1.5, text="Hello world."),
        Cue(start=1.5, end=3.0, text="How are you?\nFine, thanks."),
        Cue(start=3.0, end=4.25, text="This is the key point."),
    ]


@pytest.fixture
def make_result():
    """Build a successful ChunkResult for a chunk with the given local cues."""

    def _make(index: int, start: float, length: float, text: str, cues=()) -> ChunkResult:
        return ChunkResult(
            chunk=Chunk(index=index, start=start, length=length),
            text=text,
            cues=tuple(cues),
        )

    return _make


@pytest.fixture
def tmp_config_file(tmp_path):
    """Write a minimal TOML config to a temp directory and return its path."""
    config_toml = tmp_path / "config.toml"
    config_toml.write_text(
        '[chunking]\nwindow_seconds = 60\n\n[transcription]\nbackend = "cloudflare"\n\n'
        '[output]\ndir = "/tmp/test-captions"\nformats = ["srt"]\n'
    )
    return config_toml


@pytest.fixture
def synthetic_wav(tmp_path) -> Path:
    """Generate a 2.5s 440Hz sine wave WAV file (16-bit PCM, 16kHz mono)."""
    sample_rate = 16000
    duration = 2.5
    frequency = 440.0
    n_samples = int(sample_rate * duration)

    samples = []
    for i in range(n_samples):
        t = i / sample_rate
        value = int(32767 * 0.5 * math.sin(2 * math.pi * frequency * t))
        samples.append(struct.pack("<h", value))

    path = tmp_path / "tone.wav"
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(b"".join(samples))
    return path


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-skip tests that need tools missing from this machine."""
    has_ffmpeg = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None

    for item in items:
        if "ffmpeg" in item.keywords and not has_ffmpeg:
            item.add_marker(pytest.mark.skip(reason="ffmpeg not installed"))
