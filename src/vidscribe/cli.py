"""CLI entry point for vidscribe."""

from __future__ import annotations

import logging
import math
import os
import subprocess

import click

from vidscribe.config import Config, ensure_config_file
from vidscribe.output.artifacts import ARTIFACT_FILES

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _finite_offset(ctx: click.Context, param: click.Parameter, value: float) -> float:
    if not math.isfinite(value):
        raise click.BadParameter("must be a finite number of seconds")
    return value


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log chunk dispatch and failures to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Chunked transcription and subtitle generation for long videos."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["config"] = Config.load()


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--window", type=float, default=None, help="Chunk length in seconds.")
@click.option("--concurrency", type=click.IntRange(min=1), default=None, help="Requests in flight at once.")
@click.option("--backend", type=click.Choice(["openai", "cloudflare"]), default=None, help="Transcription backend.")
@click.option("--model", default=None, help="Transcription model name.")
@click.option("--language", default=None, help="Language code (e.g. en, de). Default: auto-detect.")
@click.option(
    "--format",
    "formats",
    type=click.Choice(list(ARTIFACT_FILES)),
    multiple=True,
    help="Output format; repeat for several. Default: all.",
)
@click.option("--chapters/--no-chapters", default=None, help="Also generate a chapter list.")
@click.option("--output-dir", default=None, help="Base output directory.")
@click.pass_context
def transcribe(
    ctx: click.Context,
    file: str,
    window: float | None,
    concurrency: int | None,
    backend: str | None,
    model: str | None,
    language: str | None,
    formats: tuple[str, ...],
    chapters: bool | None,
    output_dir: str | None,
) -> None:
    """Transcribe a video or audio file into captions."""
    config = ctx.obj["config"]

    # Apply CLI overrides
    if window is not None:
        config.chunking.window_seconds = window
    if concurrency is not None:
        config.chunking.concurrency = concurrency
    if backend:
        config.transcription.backend = backend
    if model:
        config.transcription.model = model
    if language:
        config.transcription.language = language
    if formats:
        config.output.formats = list(formats)
    if chapters is not None:
        config.chapters.enabled = chapters
    if output_dir:
        config.output.dir = output_dir

    from vidscribe.pipeline import run_transcribe
    run_transcribe(config, file)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--to", "target", type=click.Choice(["ass", "srt"]), required=True, help="Target subtitle format.")
@click.option("--output", "-o", default=None, help="Output path. Default: next to the input.")
def convert(file: str, target: str, output: str | None) -> None:
    """Convert a WebVTT file to ASS or SRT subtitles."""
    from vidscribe.pipeline import run_convert
    run_convert(file, target, output)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("offset", type=float, callback=_finite_offset)
@click.option("--output", "-o", default=None, help="Output path. Default: print to stdout.")
def shift(file: str, offset: float, output: str | None) -> None:
    """Shift all cues in a WebVTT file by OFFSET seconds."""
    from vidscribe.pipeline import run_shift
    run_shift(file, offset, output)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--transcript", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Plain-text transcript to send along with the captions.")
@click.option("--model", default=None, help="Chapter model name.")
@click.pass_context
def chapters(ctx: click.Context, file: str, transcript: str | None, model: str | None) -> None:
    """Generate YouTube-style chapters from a WebVTT file."""
    config = ctx.obj["config"]
    if model:
        config.chapters.model = model

    from vidscribe.pipeline import run_chapters
    run_chapters(config, file, transcript)


@cli.command("config")
def config_cmd() -> None:
    """Open the configuration file in your editor."""
    path = ensure_config_file()
    editor = os.environ.get("EDITOR", "nano")
    click.echo(f"Opening {path} with {editor}...")
    subprocess.run([editor, str(path)])
