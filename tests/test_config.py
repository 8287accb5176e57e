"""Tests for configuration loading."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from unittest import mock

from vidscribe.config import DEFAULT_CONFIG_TOML, Config, OutputConfig, _merge_toml, ensure_config_file


def _load_without_file(env: dict[str, str]) -> Config:
    with mock.patch.dict(os.environ, env, clear=True):
        with mock.patch("vidscribe.config.CONFIG_PATH") as mock_path:
            mock_path.exists.return_value = False
            return Config.load()


class TestDefaults:
    def test_default_chunking(self):
        cfg = Config()
        assert cfg.chunking.window_seconds == 120.0
        assert cfg.chunking.concurrency == 3

    def test_default_transcription_backend(self):
        cfg = Config()
        assert cfg.transcription.backend == "openai"
        assert cfg.transcription.model == "whisper-1"

    def test_default_chapters_disabled(self):
        cfg = Config()
        assert cfg.chapters.enabled is False

    def test_default_output_formats(self):
        cfg = Config()
        assert cfg.output.formats == ["txt", "vtt", "ass", "srt"]

    def test_formats_not_shared_between_instances(self):
        a, b = OutputConfig(), OutputConfig()
        a.formats.append("extra")
        assert b.formats == ["txt", "vtt", "ass", "srt"]

    def test_default_toml_matches_dataclasses(self):
        data = tomllib.loads(DEFAULT_CONFIG_TOML)
        merged = _merge_toml(Config(), data)
        assert merged == Config()


class TestMergeToml:
    def test_full_override(self):
        cfg = Config()
        data = {
            "chunking": {"window_seconds": 30, "concurrency": 8},
            "transcription": {"backend": "cloudflare", "language": "de"},
        }
        merged = _merge_toml(cfg, data)
        assert merged.chunking.window_seconds == 30
        assert merged.chunking.concurrency == 8
        assert merged.transcription.backend == "cloudflare"
        assert merged.transcription.language == "de"

    def test_partial_toml_keeps_defaults(self):
        cfg = Config()
        merged = _merge_toml(cfg, {"chapters": {"enabled": True}})
        assert merged.chapters.enabled is True
        # Other sections unchanged
        assert merged.chunking.window_seconds == 120.0
        assert merged.transcription.backend == "openai"

    def test_unknown_keys_ignored(self):
        cfg = Config()
        merged = _merge_toml(cfg, {"chunking": {"nonexistent_key": 42}})
        assert not hasattr(merged.chunking, "nonexistent_key")

    def test_load_reads_file(self, tmp_config_file):
        with mock.patch.dict(os.environ, {}, clear=True):
            with mock.patch("vidscribe.config.CONFIG_PATH", tmp_config_file):
                cfg = Config.load()
        assert cfg.chunking.window_seconds == 60
        assert cfg.transcription.backend == "cloudflare"
        assert cfg.output.formats == ["srt"]
        assert cfg.output.resolved_dir == Path("/tmp/test-captions")


class TestEnvOverrides:
    def test_openai_key_fills_both_sections(self):
        cfg = _load_without_file({"OPENAI_API_KEY": "sk-test"})
        assert cfg.transcription.api_key == "sk-test"
        assert cfg.chapters.api_key == "sk-test"

    def test_openai_key_does_not_replace_configured_key(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text('[transcription]\napi_key = "from-file"\n')
        with mock.patch.dict(os.environ, {"OPENAI_API_KEY": "sk-env"}, clear=True):
            with mock.patch("vidscribe.config.CONFIG_PATH", config_path):
                cfg = Config.load()
        assert cfg.transcription.api_key == "from-file"
        assert cfg.chapters.api_key == "sk-env"

    def test_cloudflare_credentials_from_env(self):
        cfg = _load_without_file({"CLOUDFLARE_ACCOUNT_ID": "acc123", "CLOUDFLARE_API_TOKEN": "tok"})
        assert cfg.transcription.cloudflare_account_id == "acc123"
        assert cfg.transcription.cloudflare_api_token == "tok"

    def test_ollama_host_ignored_for_openai_backend(self):
        cfg = _load_without_file({"OLLAMA_HOST": "http://remote:11434"})
        assert cfg.chapters.host == "https://api.openai.com"

    def test_ollama_host_applies_to_ollama_backend(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text('[chapters]\nbackend = "ollama"\nhost = "http://localhost:11434"\n')
        with mock.patch.dict(os.environ, {"OLLAMA_HOST": "http://remote:11434"}, clear=True):
            with mock.patch("vidscribe.config.CONFIG_PATH", config_path):
                cfg = Config.load()
        assert cfg.chapters.host == "http://remote:11434"


class TestEnsureConfigFile:
    def test_creates_file_when_missing(self, tmp_path):
        config_dir = tmp_path / "vidscribe"
        config_path = config_dir / "config.toml"
        with mock.patch("vidscribe.config.CONFIG_DIR", config_dir), \
             mock.patch("vidscribe.config.CONFIG_PATH", config_path):
            result = ensure_config_file()
        assert result.exists()
        assert "[chunking]" in result.read_text()

    def test_does_not_overwrite_existing(self, tmp_path):
        config_dir = tmp_path / "vidscribe"
        config_dir.mkdir()
        config_path = config_dir / "config.toml"
        config_path.write_text("# custom config\n")
        with mock.patch("vidscribe.config.CONFIG_DIR", config_dir), \
             mock.patch("vidscribe.config.CONFIG_PATH", config_path):
            ensure_config_file()
        assert config_path.read_text() == "# custom config\n"


class TestResolvedDir:
    def test_expands_tilde(self):
        cfg = OutputConfig(dir="~/vidscribe")
        resolved = cfg.resolved_dir
        assert "~" not in str(resolved)
        assert str(resolved).endswith("vidscribe")

    def test_absolute_path_unchanged(self):
        cfg = OutputConfig(dir="/tmp/captions")
        assert cfg.resolved_dir == Path("/tmp/captions")
