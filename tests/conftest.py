"""Shared pytest fixtures for the appgen test suite.

Provides reusable fixtures for:
- Customization records and freshly rendered apps per category
- A temporary project store
- Mocked completion-server responses
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from appgen.catalog import TemplateCatalog
from appgen.parser.models import CustomizationRecord, GeneratedApp, TemplateCategory
from appgen.store import ProjectStore
from appgen.utils import app_identifier


# ---------------------------------------------------------------------------
# Apps
# ---------------------------------------------------------------------------


def build_app(
    category: TemplateCategory = TemplateCategory.RESTAURANT,
    customizations: CustomizationRecord | None = None,
) -> GeneratedApp:
    """Render a catalog entry into a ``GeneratedApp`` the way the generator does."""
    record = customizations or CustomizationRecord()
    bundle = TemplateCatalog().build(category, record)
    return GeneratedApp(
        template_category=category,
        template_name=bundle.name,
        app_name=app_identifier(record.business_name),
        features=bundle.features,
        files=bundle.files,
        customizations=record,
    )


@pytest.fixture
def pizza_customizations() -> CustomizationRecord:
    """Luigi's in green, as extracted from a typical new-app request."""
    return CustomizationRecord(
        business_name="Luigi's",
        primary_color="#34C759",
        secondary_color="#019426",
        background_color="#F2F2F7",
    )


@pytest.fixture
def restaurant_app(pizza_customizations: CustomizationRecord) -> GeneratedApp:
    """A freshly rendered restaurant app with the default five-item menu."""
    return build_app(TemplateCategory.RESTAURANT, pizza_customizations)


@pytest.fixture
def app_factory() -> Callable[..., GeneratedApp]:
    """Factory rendering an app for any category and record."""
    return build_app


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture
def store(tmp_path: Path) -> ProjectStore:
    """Project store rooted in a temporary directory (auto-cleanup)."""
    return ProjectStore(tmp_path / "store")


# ---------------------------------------------------------------------------
# Mock completion server
# ---------------------------------------------------------------------------


def _make_generate_response(text: str, model: str = "llama3.1:8b") -> dict[str, Any]:
    return {
        "model": model,
        "response": text,
        "done": True,
        "total_duration": 1_234_567_890,
    }


@pytest.fixture
def mock_ollama() -> Callable[[Any], Any]:
    """Factory patching httpx.AsyncClient to answer ``/api/generate``.

    Usage:
        def test_something(mock_ollama):
            with mock_ollama({"template": "fitness"}) as client_cls:
                ...
                client_cls.return_value.post.assert_awaited_once()

    Dict payloads are JSON-encoded into the ``response`` text; strings are
    returned verbatim.
    """

    def factory(reply: Any) -> Any:
        text = reply if isinstance(reply, str) else json.dumps(reply)

        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = _make_generate_response(text)
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.post = AsyncMock(return_value=mock_response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        return patch("httpx.AsyncClient", return_value=mock_client)

    return factory
