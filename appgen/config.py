"""appgen configuration.

Centralised, typed configuration for the generator. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class OllamaConfig(BaseModel):
    """Configuration for the optional text-completion server.

    Leaving ``url`` unset is a valid configuration: the classifier then runs
    on local keyword scoring only.
    """

    url: str | None = Field(default=None, description="Base URL of an Ollama-compatible server")
    model: str = Field(default="llama3.1:8b")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=300, ge=1, description="Upper bound on generated tokens")

    @property
    def enabled(self) -> bool:
        """``True`` when a completion server has been configured."""
        return bool(self.url and self.url.strip())


class Config(BaseModel):
    """Global appgen configuration.

    Instances are typically created once by the CLI entry point (or by
    ``AppGenerator.from_config``) and then passed through the rest of the
    system. Nothing reads the environment after construction.
    """

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    store_dir: Path = Field(default=Path("./.appgen"))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<store_dir>/config.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.store_dir / "config.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            APPGEN_OLLAMA_URL, APPGEN_OLLAMA_MODEL, APPGEN_OLLAMA_TIMEOUT,
            APPGEN_TEMPERATURE, APPGEN_MAX_TOKENS, APPGEN_STORE_DIR.
        """
        ollama_kwargs: dict[str, Any] = {}
        if os.environ.get("APPGEN_OLLAMA_URL"):
            ollama_kwargs["url"] = os.environ["APPGEN_OLLAMA_URL"]
        if os.environ.get("APPGEN_OLLAMA_MODEL"):
            ollama_kwargs["model"] = os.environ["APPGEN_OLLAMA_MODEL"]
        if os.environ.get("APPGEN_OLLAMA_TIMEOUT"):
            ollama_kwargs["timeout"] = int(os.environ["APPGEN_OLLAMA_TIMEOUT"])
        if os.environ.get("APPGEN_TEMPERATURE"):
            ollama_kwargs["temperature"] = float(os.environ["APPGEN_TEMPERATURE"])
        if os.environ.get("APPGEN_MAX_TOKENS"):
            ollama_kwargs["max_tokens"] = int(os.environ["APPGEN_MAX_TOKENS"])

        return cls(
            ollama=OllamaConfig(**ollama_kwargs),
            store_dir=Path(os.environ.get("APPGEN_STORE_DIR", "./.appgen")),
        )
