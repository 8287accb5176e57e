"""Pipeline orchestration: probe -> plan -> transcribe chunks -> assemble -> output."""

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

import click

from vidscribe.audio.ffmpeg import FFmpegAudioExtractor, ffmpeg_available, probe_duration
from vidscribe.captions.transcode import to_numbered_captions, to_styled_script
from vidscribe.captions.vtt import cues_only, parse_vtt, shift_vtt
from vidscribe.chapters import create_chapter_generator
from vidscribe.chapters.prompts import format_chapters, parse_chapters
from vidscribe.config import Config
from vidscribe.errors import AudioExtractionError, InvalidInput, TotalFailure
from vidscribe.output.artifacts import render_artifacts
from vidscribe.progress import NullProgress, PipelineProgress, Spinner
from vidscribe.transcription import create_transcriber
from vidscribe.transcription.assembler import assemble
from vidscribe.transcription.models import AssembledTranscript, Chunk
from vidscribe.transcription.orchestrator import run_chunks
from vidscribe.transcription.planner import plan_chunks

logger = logging.getLogger(__name__)


def _slugify(text: str, max_length: int = 50) -> str:
    """Convert text to a filesystem-safe slug."""
    slug = text.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug[:max_length].rstrip("-")


def _get_output_dir(config: Config, media_path: Path) -> Path:
    """Create and return a timestamped output directory named after the media file."""
    base = config.output.resolved_dir
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M")
    slug = _slugify(media_path.stem)
    out_dir = base / (f"{timestamp}_{slug}" if slug else timestamp)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def _create_progress(chunks: int, chapters: bool):
    if sys.stderr.isatty():
        return PipelineProgress(chunks=chunks, chapters=chapters)
    return NullProgress()


def _generate_chapters(config: Config, assembled: AssembledTranscript, progress) -> str | None:
    """Ask the chapter backend for a chapter list. Returns None on failure."""
    generator = create_chapter_generator(config)
    if not generator.is_available():
        click.echo(
            f"\nWarning: {config.chapters.backend} is not reachable at {config.chapters.host}. "
            "Skipping chapters.",
            err=True,
        )
        return None

    progress.begin("chapters")
    try:
        chapters = generator.generate(assembled.text, assembled.vtt)
    except Exception:
        logger.warning("Could not generate chapters", exc_info=True)
        progress.fail("chapters")
        return None
    progress.complete("chapters")
    return chapters


def plan_media(config: Config, media_path: Path) -> list[Chunk]:
    """Probe the media duration and split it into transcription windows."""
    duration = probe_duration(media_path)
    chunks = plan_chunks(duration, config.chunking.window_seconds)
    logger.info("Planned %d chunks for %.2fs of media", len(chunks), duration)
    return chunks


def transcribe_media(
    config: Config, media_path: Path, chunks: list[Chunk], progress=None,
) -> AssembledTranscript:
    """Transcribe the planned chunks of a media file and assemble the results.

    Raises ``TotalFailure`` when no chunk could be transcribed.
    """
    progress = progress or NullProgress()
    transcriber = create_transcriber(config)
    extractor = FFmpegAudioExtractor(media_path)

    progress.begin("transcribing")
    try:
        results = run_chunks(
            chunks,
            extractor,
            transcriber,
            concurrency=config.chunking.concurrency,
            on_progress=progress.percent_callback("transcribing"),
        )
    except TotalFailure:
        progress.fail("transcribing")
        raise
    progress.complete("transcribing")

    progress.begin("assembling")
    assembled = assemble(results)
    progress.complete("assembling")
    return assembled


def run_transcribe(config: Config, media_file: str) -> None:
    """Transcribe a video or audio file and write the caption artifacts."""
    media_path = Path(media_file)

    if not ffmpeg_available():
        click.echo("Error: ffmpeg and ffprobe are required. Install ffmpeg and try again.", err=True)
        raise SystemExit(1)

    try:
        chunks = plan_media(config, media_path)
    except (InvalidInput, AudioExtractionError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    chapters = None
    with _create_progress(len(chunks), config.chapters.enabled) as progress:
        try:
            assembled = transcribe_media(config, media_path, chunks, progress=progress)
        except TotalFailure as e:
            click.echo(f"\nError: {e}.", err=True)
            for err in e.errors:
                click.echo(f"  {err}", err=True)
            raise SystemExit(1) from None

        if config.chapters.enabled:
            chapters = _generate_chapters(config, assembled, progress)

    if assembled.is_partial:
        click.echo(
            f"\nWarning: {assembled.dropped_chunks} of {assembled.total_chunks} chunks failed; "
            "the transcript and captions are incomplete.",
            err=True,
        )

    out_dir = _get_output_dir(config, media_path)
    files = render_artifacts(assembled, config.output.formats, title=media_path.stem)
    if chapters:
        parsed = parse_chapters(chapters)
        files["chapters.txt"] = format_chapters(parsed) if parsed else chapters.rstrip() + "\n"

    for name, content in files.items():
        path = out_dir / name
        path.write_text(content, encoding="utf-8")
        click.echo(f"Saved {path}")


def _read_vtt(vtt_file: str) -> str:
    return Path(vtt_file).read_text(encoding="utf-8-sig")


def run_convert(vtt_file: str, target: str, output: str | None = None) -> None:
    """Convert a WebVTT file to ASS or SRT."""
    entries = parse_vtt(_read_vtt(vtt_file))
    source = Path(vtt_file)
    if target == "ass":
        content = to_styled_script(entries, title=source.stem)
    else:
        content = to_numbered_captions(entries)

    out_path = Path(output) if output else source.with_suffix(f".{target}")
    out_path.write_text(content, encoding="utf-8")
    click.echo(f"Saved {out_path}")


def run_shift(vtt_file: str, offset: float, output: str | None = None) -> None:
    """Shift every cue in a WebVTT file by ``offset`` seconds."""
    content = shift_vtt(_read_vtt(vtt_file), offset)
    if output:
        Path(output).write_text(content, encoding="utf-8")
        click.echo(f"Saved {output}")
    else:
        click.echo(content, nl=False)


def run_chapters(config: Config, vtt_file: str, transcript_file: str | None = None) -> None:
    """Generate a chapter list for an existing WebVTT file."""
    vtt = _read_vtt(vtt_file)
    if transcript_file:
        transcript = Path(transcript_file).read_text(encoding="utf-8").strip()
    else:
        transcript = " ".join(
            cue.text.replace("\n", " ") for cue in cues_only(parse_vtt(vtt))
        )

    generator = create_chapter_generator(config)
    if not generator.is_available():
        click.echo(
            f"Error: {config.chapters.backend} is not reachable at {config.chapters.host}.",
            err=True,
        )
        raise SystemExit(1)

    with Spinner(f"Generating chapters with {config.chapters.model}"):
        chapters = generator.generate(transcript, vtt)

    click.echo(f"\n{chapters}")
