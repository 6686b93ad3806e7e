"""Customization extraction from free-text app requests.

Pulls a business name and a theme color out of requests such as
*"Build a pizza ordering app called Luigi's in green"*. Uses plain regex
and substring matching -- no AI calls.
"""

from __future__ import annotations

import math
import re

from .models import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BUSINESS_NAME,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    CustomizationRecord,
)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Tried in order; the first pattern that matches supplies the name.
_NAME_PATTERNS = [
    re.compile(r"(?:called|named)\s+([^,.\n!?]+)", re.IGNORECASE),
    re.compile(r"(?:for|app for)\s+([^,.\n!?]+)", re.IGNORECASE),
    re.compile(
        r"(?:building|build|create|make).*?(?:for|called)\s+([^,.\n!?]+)",
        re.IGNORECASE,
    ),
]
_NAME_SUFFIX_PATTERN = re.compile(r"\s+(app|application|mobile app)$", re.IGNORECASE)

# Table order matters: when several names occur, the last entry here wins.
COLOR_PALETTE: dict[str, str] = {
    "red": "#FF3B30",
    "blue": "#007AFF",
    "green": "#34C759",
    "purple": "#AF52DE",
    "orange": "#FF9500",
    "pink": "#FF2D92",
    "yellow": "#FFCC00",
    "teal": "#5AC8FA",
    "indigo": "#5856D6",
}

SECONDARY_DARKEN_PERCENT = 20


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _round_half_up(value: float) -> int:
    # halves round toward +inf, unlike round()
    return math.floor(value + 0.5)


def darken_color(hex_color: str, percent: int = SECONDARY_DARKEN_PERCENT) -> str:
    """Shift every RGB channel of *hex_color* down by ``2.55 * percent``.

    Channels are clamped to ``0..255`` and the result is an uppercase
    ``#RRGGBB`` string. A negative *percent* lightens instead.

    Examples::

        darken_color("#007AFF") -> "#0047CC"
        darken_color("#FF3B30") -> "#CC0800"
    """
    value = int(hex_color.lstrip("#"), 16)
    amount = _round_half_up(2.55 * percent)
    channels = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    shifted = [min(255, max(0, channel - amount)) for channel in channels]
    return "#" + "".join(f"{channel:02X}" for channel in shifted)


def extract_business_name(text: str) -> str | None:
    """Return the business name named in *text*, or ``None``."""
    for pattern in _NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            name = _NAME_SUFFIX_PATTERN.sub("", match.group(1).strip())
            return name.strip() or None
    return None


def extract_color(text: str) -> str | None:
    """Return the hex of the palette color mentioned in *text*, or ``None``.

    Every palette entry is checked and the last hit in table order is kept,
    so ``"red and blue"`` and ``"blue and red"`` both yield blue.
    """
    lower = text.lower()
    found: str | None = None
    for color_name, hex_value in COLOR_PALETTE.items():
        if color_name in lower:
            found = hex_value
    return found


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_customizations(text: str) -> CustomizationRecord:
    """Turn a free-text request into a complete ``CustomizationRecord``.

    Unspecified fields keep their defaults. When a palette color is named it
    becomes the primary color and the secondary color is derived from it by
    darkening, independent of the default secondary.
    """
    business_name = extract_business_name(text) or DEFAULT_BUSINESS_NAME
    primary = DEFAULT_PRIMARY_COLOR
    secondary = DEFAULT_SECONDARY_COLOR

    color = extract_color(text)
    if color is not None:
        primary = color
        secondary = darken_color(color)

    return CustomizationRecord(
        business_name=business_name,
        primary_color=primary,
        secondary_color=secondary,
        background_color=DEFAULT_BACKGROUND_COLOR,
    )
