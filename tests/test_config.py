"""Unit tests for Config and OllamaConfig (appgen.config).

Tests cover:
- OllamaConfig defaults, validation, enabled flag
- Config defaults, save/load round trip, from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from appgen.config import Config, OllamaConfig


# ---------------------------------------------------------------------------
# OllamaConfig
# ---------------------------------------------------------------------------


class TestOllamaConfig:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = OllamaConfig()
        assert cfg.url is None
        assert cfg.model == "llama3.1:8b"
        assert cfg.timeout == 30
        assert cfg.temperature == 0.3
        assert cfg.max_tokens == 300

    @pytest.mark.unit
    def test_disabled_without_url(self):
        assert OllamaConfig().enabled is False
        assert OllamaConfig(url="   ").enabled is False

    @pytest.mark.unit
    def test_enabled_with_url(self):
        assert OllamaConfig(url="http://localhost:11434").enabled is True

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            OllamaConfig(timeout=0)

    @pytest.mark.unit
    def test_temperature_range(self):
        with pytest.raises(ValidationError):
            OllamaConfig(temperature=2.5)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = Config()
        assert cfg.store_dir == Path("./.appgen")
        assert cfg.ollama.enabled is False

    @pytest.mark.unit
    def test_save_defaults_to_store_dir(self, tmp_path: Path):
        cfg = Config(store_dir=tmp_path / "store")
        written = cfg.save()
        assert written == tmp_path / "store" / "config.json"
        data = json.loads(written.read_text(encoding="utf-8"))
        assert data["ollama"]["model"] == "llama3.1:8b"

    @pytest.mark.unit
    def test_save_load_round_trip(self, tmp_path: Path):
        cfg = Config(
            ollama=OllamaConfig(url="http://gpu-box:11434", model="mistral", max_tokens=500),
            store_dir=tmp_path,
        )
        path = cfg.save(tmp_path / "custom.json")
        loaded = Config.load(path)
        assert loaded.ollama.url == "http://gpu-box:11434"
        assert loaded.ollama.model == "mistral"
        assert loaded.ollama.max_tokens == 500
        assert loaded.store_dir == tmp_path

    @pytest.mark.unit
    def test_from_env_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Config.from_env()
        assert cfg.ollama.url is None
        assert cfg.store_dir == Path("./.appgen")

    @pytest.mark.unit
    def test_from_env_overrides(self):
        env = {
            "APPGEN_OLLAMA_URL": "http://ollama:11434",
            "APPGEN_OLLAMA_MODEL": "qwen2.5:7b",
            "APPGEN_OLLAMA_TIMEOUT": "12",
            "APPGEN_TEMPERATURE": "0.7",
            "APPGEN_MAX_TOKENS": "128",
            "APPGEN_STORE_DIR": "/tmp/appgen-projects",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = Config.from_env()
        assert cfg.ollama.url == "http://ollama:11434"
        assert cfg.ollama.model == "qwen2.5:7b"
        assert cfg.ollama.timeout == 12
        assert cfg.ollama.temperature == 0.7
        assert cfg.ollama.max_tokens == 128
        assert cfg.store_dir == Path("/tmp/appgen-projects")

    @pytest.mark.unit
    def test_from_env_invalid_number(self):
        with patch.dict(os.environ, {"APPGEN_OLLAMA_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError):
                Config.from_env()
