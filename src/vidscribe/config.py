"""Configuration management with TOML loading and defaults."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR = Path("~/.config/vidscribe").expanduser()
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG_TOML = """\
[chunking]
window_seconds = 120      # longest audio window sent in one transcription request
concurrency = 3           # transcription requests in flight at once (1 = sequential)

[transcription]
backend = "openai"        # "openai" (or any OpenAI-compatible server) or "cloudflare"
model = "whisper-1"       # cloudflare: "@cf/openai/whisper"
host = "https://api.openai.com"
api_key = ""              # or set OPENAI_API_KEY
language = ""             # empty = auto-detect
timeout = 120             # seconds per request
# cloudflare_host = "https://api.cloudflare.com/client/v4"
# cloudflare_account_id = ""   # or set CLOUDFLARE_ACCOUNT_ID
# cloudflare_api_token = ""    # or set CLOUDFLARE_API_TOKEN

[chapters]
enabled = false
backend = "openai"        # "openai" or "ollama"
model = "gpt-4o-mini"
host = "https://api.openai.com"  # ollama: http://localhost:11434
api_key = ""

[output]
dir = "~/vidscribe"       # base output directory
formats = ["txt", "vtt", "ass", "srt"]
"""


@dataclass
class ChunkingConfig:
    window_seconds: float = 120.0
    concurrency: int = 3


@dataclass
class TranscriptionConfig:
    backend: str = "openai"
    model: str = "whisper-1"
    host: str = "https://api.openai.com"
    api_key: str = ""
    language: str = ""
    timeout: float = 120.0
    cloudflare_host: str = "https://api.cloudflare.com/client/v4"
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""


@dataclass
class ChaptersConfig:
    enabled: bool = False
    backend: str = "openai"
    model: str = "gpt-4o-mini"
    host: str = "https://api.openai.com"
    api_key: str = ""


@dataclass
class OutputConfig:
    dir: str = "~/vidscribe"
    formats: list[str] = field(default_factory=lambda: ["txt", "vtt", "ass", "srt"])

    @property
    def resolved_dir(self) -> Path:
        return Path(self.dir).expanduser()


@dataclass
class Config:
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)
    chapters: ChaptersConfig = field(default_factory=ChaptersConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls) -> Config:
        """Load config from TOML file, falling back to defaults."""
        config = cls()

        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
            config = _merge_toml(config, data)

        # Env var overrides
        if api_key := os.environ.get("OPENAI_API_KEY"):
            if not config.transcription.api_key:
                config.transcription.api_key = api_key
            if not config.chapters.api_key:
                config.chapters.api_key = api_key
        if account_id := os.environ.get("CLOUDFLARE_ACCOUNT_ID"):
            config.transcription.cloudflare_account_id = account_id
        if api_token := os.environ.get("CLOUDFLARE_API_TOKEN"):
            config.transcription.cloudflare_api_token = api_token
        if ollama_host := os.environ.get("OLLAMA_HOST"):
            if config.chapters.backend == "ollama":
                config.chapters.host = ollama_host

        return config


def _merge_section(target, values: dict) -> None:
    for k, v in values.items():
        if hasattr(target, k):
            setattr(target, k, v)


def _merge_toml(config: Config, data: dict) -> Config:
    """Merge TOML data into config dataclass."""
    if "chunking" in data:
        _merge_section(config.chunking, data["chunking"])
    if "transcription" in data:
        _merge_section(config.transcription, data["transcription"])
    if "chapters" in data:
        _merge_section(config.chapters, data["chapters"])
    if "output" in data:
        _merge_section(config.output, data["output"])
    return config


def ensure_config_file() -> Path:
    """Create default config file if it doesn't exist. Returns the path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not CONFIG_PATH.exists():
        CONFIG_PATH.write_text(DEFAULT_CONFIG_TOML)
    return CONFIG_PATH
