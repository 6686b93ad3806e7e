"""Unit tests for OllamaClient (appgen.ollama_client).

Tests cover:
- OllamaResponse defaults
- OllamaClient.__init__ and from_config
- OllamaClient.generate (success, payload, connect error, timeout, HTTP error, unexpected error)
- OllamaClient.is_available
- Static helpers: _extract_text, _extract_duration_ms
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from appgen.config import OllamaConfig
from appgen.ollama_client import OllamaClient, OllamaResponse


def _mock_async_client(**methods) -> AsyncMock:
    mock_client = AsyncMock()
    for name, value in methods.items():
        setattr(mock_client, name, value)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


# ---------------------------------------------------------------------------
# OllamaResponse
# ---------------------------------------------------------------------------


class TestOllamaResponse:
    @pytest.mark.unit
    def test_defaults(self):
        resp = OllamaResponse()
        assert resp.text == ""
        assert resp.model == ""
        assert resp.duration_ms == 0.0
        assert resp.success is True
        assert resp.error is None

    @pytest.mark.unit
    def test_error_response(self):
        resp = OllamaResponse(success=False, error="Connection refused")
        assert resp.success is False
        assert resp.error == "Connection refused"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestOllamaClientInit:
    @pytest.mark.unit
    def test_defaults(self):
        client = OllamaClient()
        assert client.base_url == "http://localhost:11434"
        assert client.model == "llama3.1:8b"
        assert client.timeout == 30
        assert client.temperature == 0.3
        assert client.max_tokens == 300

    @pytest.mark.unit
    def test_trailing_slash_stripped(self):
        client = OllamaClient(base_url="http://host:1234/")
        assert client.base_url == "http://host:1234"

    @pytest.mark.unit
    def test_from_config_without_url(self):
        assert OllamaClient.from_config(OllamaConfig()) is None

    @pytest.mark.unit
    def test_from_config_with_url(self):
        cfg = OllamaConfig(url="http://gpu:11434/", model="mistral", timeout=5, max_tokens=64)
        client = OllamaClient.from_config(cfg)
        assert client is not None
        assert client.base_url == "http://gpu:11434"
        assert client.model == "mistral"
        assert client.timeout == 5
        assert client.max_tokens == 64


# ---------------------------------------------------------------------------
# Static helpers
# ---------------------------------------------------------------------------


class TestStaticHelpers:
    @pytest.mark.unit
    def test_extract_text(self):
        assert OllamaClient._extract_text({"response": "Hello"}) == "Hello"

    @pytest.mark.unit
    def test_extract_text_missing(self):
        assert OllamaClient._extract_text({}) == ""

    @pytest.mark.unit
    def test_extract_duration_ms(self):
        result = OllamaClient._extract_duration_ms({"total_duration": 1_500_000_000})
        assert abs(result - 1500.0) < 0.1

    @pytest.mark.unit
    def test_extract_duration_ms_missing(self):
        assert OllamaClient._extract_duration_ms({}) == 0.0


# ---------------------------------------------------------------------------
# OllamaClient.generate
# ---------------------------------------------------------------------------


class TestOllamaGenerate:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_generate(self):
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "response": '{"template": "fitness"}',
            "model": "llama3.1:8b",
            "total_duration": 2_000_000_000,
        }
        mock_response.raise_for_status = MagicMock()
        mock_client = _mock_async_client(post=AsyncMock(return_value=mock_response))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient().generate("A gym app")

        assert result.success is True
        assert result.text == '{"template": "fitness"}'
        assert result.model == "llama3.1:8b"
        assert result.duration_ms > 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_payload_carries_sampling_options(self):
        mock_response = MagicMock()
        mock_response.json.return_value = {"response": "ok", "model": "m"}
        mock_response.raise_for_status = MagicMock()
        mock_client = _mock_async_client(post=AsyncMock(return_value=mock_response))

        with patch("httpx.AsyncClient", return_value=mock_client):
            client = OllamaClient(temperature=0.3, max_tokens=300)
            await client.generate("Build it", system="Classify apps")

        url = mock_client.post.call_args[0][0]
        payload = mock_client.post.call_args[1]["json"]
        assert url == "/api/generate"
        assert payload["stream"] is False
        assert payload["system"] == "Classify apps"
        assert payload["options"] == {"temperature": 0.3, "num_predict": 300}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_system_key_when_empty(self):
        mock_response = MagicMock()
        mock_response.json.return_value = {"response": "ok"}
        mock_response.raise_for_status = MagicMock()
        mock_client = _mock_async_client(post=AsyncMock(return_value=mock_response))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient().generate("Build it", model="other")

        payload = mock_client.post.call_args[1]["json"]
        assert "system" not in payload
        assert payload["model"] == "other"
        assert result.model == "other"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_connect_error(self):
        mock_client = _mock_async_client(
            post=AsyncMock(side_effect=httpx.ConnectError("Connection refused"))
        )
        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient().generate("test prompt")

        assert result.success is False
        assert "Cannot connect" in result.error

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_timeout(self):
        mock_client = _mock_async_client(
            post=AsyncMock(side_effect=httpx.TimeoutException("timed out"))
        )
        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient(timeout=7).generate("test prompt")

        assert result.success is False
        assert "timed out after 7s" in result.error

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_http_error(self):
        mock_resp = MagicMock()
        mock_resp.status_code = 500
        mock_resp.text = "Internal Server Error"
        mock_client = _mock_async_client(
            post=AsyncMock(
                side_effect=httpx.HTTPStatusError(
                    "Server Error", request=MagicMock(), response=mock_resp
                )
            )
        )
        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient().generate("test prompt")

        assert result.success is False
        assert "HTTP 500" in result.error

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_unexpected_error(self):
        mock_client = _mock_async_client(post=AsyncMock(side_effect=RuntimeError("weird")))
        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await OllamaClient().generate("test prompt")

        assert result.success is False
        assert "Unexpected error" in result.error


# ---------------------------------------------------------------------------
# OllamaClient.is_available
# ---------------------------------------------------------------------------


class TestOllamaIsAvailable:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_available(self):
        mock_resp = MagicMock()
        mock_resp.status_code = 200
        mock_client = _mock_async_client(get=AsyncMock(return_value=mock_resp))

        with patch("httpx.AsyncClient", return_value=mock_client):
            assert await OllamaClient().is_available() is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unavailable_on_error(self):
        mock_client = _mock_async_client(
            get=AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        with patch("httpx.AsyncClient", return_value=mock_client):
            assert await OllamaClient().is_available() is False
