"""Intent classification for new-app requests.

Maps a free-text request onto one of the five template categories. When a
completion client is configured the model is asked first; its reply is
parsed defensively and anything unusable drops through to local weighted
keyword scoring, which never fails.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from appgen.ollama_client import OllamaClient
from appgen.utils import console, print_warning

from .extractor import extract_customizations
from .models import Classification, CustomizationRecord, HEX_COLOR_PATTERN, TemplateCategory


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CLASSIFIER_SYSTEM_PROMPT = """You are an AI assistant that classifies app ideas and extracts customization details.

Choose the closest template from this list even if the user uses synonyms or vague language:
 - restaurant
 - business
 - ecommerce
 - fitness
 - directory

Return ONLY a JSON object in this format:
{
  "template": "template_name",
  "customizations": {
    "businessName": "name or default",
    "primaryColor": "#hexcode",
    "secondaryColor": "#hexcode",
    "backgroundColor": "#hexcode",
    "features": ["feature1", "feature2"]
  }
}

Use sensible defaults if details are missing."""

# Iteration order doubles as the tie-break order.
CATEGORY_KEYWORDS: dict[TemplateCategory, list[str]] = {
    TemplateCategory.RESTAURANT: [
        "restaurant", "food", "menu", "order", "pizza", "cafe", "dine", "bar", "delivery",
    ],
    TemplateCategory.BUSINESS: [
        "business", "service", "company", "clinic", "office", "professional",
        "consult", "corporate",
    ],
    TemplateCategory.ECOMMERCE: [
        "shop", "store", "buy", "sell", "product", "ecommerce", "cart", "checkout", "payment",
    ],
    TemplateCategory.FITNESS: [
        "fitness", "gym", "workout", "health", "wellness", "exercise", "training", "yoga",
    ],
    TemplateCategory.DIRECTORY: [
        "directory", "listing", "search", "find", "browse", "marketplace", "catalog",
    ],
}

_HEX_COLOR = re.compile(HEX_COLOR_PATTERN)
_MODEL_COLOR_FIELDS = {
    "primaryColor": "primary_color",
    "secondaryColor": "secondary_color",
    "backgroundColor": "background_color",
}


# ---------------------------------------------------------------------------
# Local classification
# ---------------------------------------------------------------------------

def score_categories(text: str) -> dict[TemplateCategory, int]:
    """Count how many of each category's stems occur in *text*."""
    lower = text.lower()
    return {
        category: sum(1 for stem in stems if stem in lower)
        for category, stems in CATEGORY_KEYWORDS.items()
    }


def classify_by_keywords(text: str) -> Classification:
    """Classify *text* by keyword stems alone.

    The strictly highest score wins; ties and all-zero scores keep the
    default category. Customizations always come from the extractor.
    """
    best = TemplateCategory.default()
    best_score = 0
    for category, score in score_categories(text).items():
        if score > best_score:
            best = category
            best_score = score
    return Classification(
        template_category=best,
        customizations=extract_customizations(text),
        source="keywords",
    )


# ---------------------------------------------------------------------------
# Model response parsing
# ---------------------------------------------------------------------------

def _extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """Parse the span from the first ``{`` to the last ``}`` of *text*."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _merge_model_customizations(raw: Any, fallback: CustomizationRecord) -> CustomizationRecord:
    """Take each valid field from the model output, the rest from *fallback*."""
    if not isinstance(raw, dict):
        return fallback

    updates: dict[str, str] = {}
    name = raw.get("businessName")
    if isinstance(name, str) and name.strip():
        updates["business_name"] = name.strip()
    for key, field_name in _MODEL_COLOR_FIELDS.items():
        value = raw.get(key)
        if isinstance(value, str) and _HEX_COLOR.match(value.strip()):
            updates[field_name] = value.strip()
    return fallback.model_copy(update=updates)


def parse_model_response(text: str, request: str) -> Optional[Classification]:
    """Turn a completion reply into a ``Classification``.

    Returns ``None`` when the reply holds no JSON object or names no known
    template; the caller then classifies locally.
    """
    data = _extract_json_object(text)
    if data is None:
        return None
    category = TemplateCategory.parse(data.get("template"))
    if category is None:
        return None
    return Classification(
        template_category=category,
        customizations=_merge_model_customizations(
            data.get("customizations"), extract_customizations(request)
        ),
        source="model",
    )


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

class IntentClassifier:
    """Classifies new-app requests, preferring the completion model.

    Args:
        client: Optional completion client. ``None`` is a valid, permanent
            configuration meaning "local scoring only".
    """

    def __init__(self, client: OllamaClient | None = None) -> None:
        self.client = client

    async def classify(self, text: str) -> Classification:
        """Return the category and customizations for *text*. Never raises."""
        if self.client is None:
            return classify_by_keywords(text)

        try:
            response = await self.client.generate(text, system=CLASSIFIER_SYSTEM_PROMPT)
        except Exception as exc:  # noqa: BLE001
            print_warning(f"Completion call failed, using keyword classification: {exc}")
            return classify_by_keywords(text)

        if not response.success:
            print_warning(
                f"Completion unavailable, using keyword classification: {response.error}"
            )
            return classify_by_keywords(text)

        parsed = parse_model_response(response.text, text)
        if parsed is None:
            print_warning("Could not parse completion output, using keyword classification.")
            return classify_by_keywords(text)

        console.print(
            f"  [dim]Model classified request as {parsed.template_category.value}[/dim]"
        )
        return parsed
