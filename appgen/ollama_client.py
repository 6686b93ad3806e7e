"""Async client for an Ollama-compatible text-completion API.

Wraps ``/api/generate`` and ``/api/tags`` with timeout handling and a
structured response. The client never raises for transport problems; every
failure is folded into ``OllamaResponse(success=False, error=...)`` so the
classifier can fall back to local keyword scoring.

Typical usage::

    client = OllamaClient("http://localhost:11434", model="llama3.1:8b")
    resp = await client.generate("Build me a pizza app", system=PROMPT)
    if resp.success:
        print(resp.text)
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field

from appgen.config import OllamaConfig


class OllamaResponse(BaseModel):
    """Outcome of one completion call; failures carry ``error`` instead of raising."""

    text: str = Field(default="", description="Completion text, empty on failure")
    model: str = Field(default="", description="Model tag that answered (or was asked)")
    duration_ms: float = Field(default=0.0, description="total_duration reported by the server")
    success: bool = Field(default=True)
    error: str | None = Field(default=None, description="Human-readable failure reason")

    @classmethod
    def failed(cls, model: str, error: str) -> "OllamaResponse":
        return cls(model=model, success=False, error=error)


class OllamaClient:
    """Async client for the Ollama REST API.

    A fresh ``httpx.AsyncClient`` is opened per request, so instances hold no
    connections between calls and can be shared freely.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        timeout: int = 30,
        temperature: float = 0.3,
        max_tokens: int = 300,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: OllamaConfig) -> "OllamaClient | None":
        """Build a client from configuration, or ``None`` when no URL is set."""
        if not config.enabled:
            return None
        return cls(
            base_url=config.url or "",
            model=config.model,
            timeout=config.timeout,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        limits = httpx.Timeout(self.timeout, connect=min(self.timeout, 10))
        return httpx.AsyncClient(base_url=self.base_url, timeout=limits)

    @staticmethod
    def _extract_text(data: dict) -> str:
        return data.get("response", "")

    @staticmethod
    def _extract_duration_ms(data: dict) -> float:
        # total_duration is reported in nanoseconds
        return data.get("total_duration", 0) / 1_000_000.0

    def _payload(self, prompt: str, system: str, model: str) -> dict:
        body: dict = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature, "num_predict": self.max_tokens},
        }
        if system:
            body["system"] = system
        return body

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate(
        self, prompt: str, system: str = "", model: str | None = None
    ) -> OllamaResponse:
        """Run one non-streaming completion.

        Args:
            prompt: Text sent as the user prompt.
            system: Instruction sent as the system prompt; omitted when empty.
            model: Model tag overriding the client default.

        Returns:
            The completion, or a failed ``OllamaResponse`` naming the cause.
        """
        model = model or self.model
        payload = self._payload(prompt, system, model)

        try:
            async with self._client() as client:
                response = await client.post("/api/generate", json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.ConnectError:
            return OllamaResponse.failed(
                model, f"Cannot connect to completion server at {self.base_url}."
            )
        except httpx.TimeoutException:
            return OllamaResponse.failed(
                model, f"Completion request timed out after {self.timeout}s."
            )
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            return OllamaResponse.failed(
                model, f"Completion server returned HTTP {status}: {exc.response.text[:500]}"
            )
        except Exception as exc:  # noqa: BLE001
            return OllamaResponse.failed(model, f"Unexpected error during completion: {exc}")

        return OllamaResponse(
            text=self._extract_text(body),
            model=body.get("model", model),
            duration_ms=self._extract_duration_ms(body),
        )

    async def is_available(self) -> bool:
        """Return ``True`` if the server answers ``GET /api/tags`` with 200."""
        try:
            async with self._client() as client:
                tags = await client.get("/api/tags")
        except Exception:  # noqa: BLE001
            return False
        return tags.status_code == 200
