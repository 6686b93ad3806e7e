"""Modification engine -- applies a free-text edit to an existing generated app.

Requests are matched against a fixed, priority-ordered list of strategies:

1. Recolor        -- "change" + ("color" | "theme")
2. Add menu item  -- restaurant apps only, "add"/"include" + "menu"/"item"
3. Add screen     -- "add"/"include" + "screen"/"page" (recognised, no edit)
4. Rename         -- "change" + ("text" | "title" | "name")
5. Catch-all      -- nothing understood, app returned unchanged

The first strategy that both triggers and completes wins. A strategy that
triggers but cannot complete (no price in the request, no menu array in the
file) hands over to the next one. Each call is pure: inputs are never
mutated and nothing is retained between calls.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from appgen.catalog import MENU_FILE
from appgen.parser.extractor import extract_customizations
from appgen.parser.models import GeneratedApp, ModificationResult, TemplateCategory
from appgen.utils import escape_js_string, escape_json_string

from .edits import append_menu_item, format_js_number, replace_in_files, replace_literals


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ADD_SCREEN_SUMMARY = "Added new screen functionality"
NO_CHANGES_SUMMARY = (
    "No specific changes were made. Try being more specific about what you want to change."
)

_MENU_ITEM_PATTERN = re.compile(
    r"add\s+(.+?)\s+(?:for|at|priced at)?\s*\$?(\d+(?:\.\d{2})?)", re.IGNORECASE
)
_RENAME_PATTERN = re.compile(
    r"change\s+(?:the\s+)?(.+?)\s+to\s+[\"']?(.+?)[\"']?$", re.IGNORECASE
)


def _mentions(text: str, *words: str) -> bool:
    return any(word in text for word in words)


def _name_replacements(path: str, old: str, new: str) -> dict[str, str]:
    """Spellings of a business name to rewrite in the file at *path*.

    JSON manifests only hold the name inside string literals. JS sources hold
    it both as JSX text and inside single-quoted strings; when the two
    spellings of the old name coincide, the escaped replacement wins so the
    source stays valid.
    """
    if path.endswith(".json"):
        return {escape_json_string(old): escape_json_string(new)}
    return {old: new, escape_js_string(old): escape_js_string(new)}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

Strategy = Callable[[str, str, GeneratedApp], Optional[ModificationResult]]


class ModificationEngine:
    """Dispatches modification requests to the first matching strategy."""

    def __init__(self) -> None:
        self._strategies: list[Strategy] = [
            self._recolor,
            self._add_menu_item,
            self._add_screen,
            self._rename,
        ]

    def modify(self, request: str, existing: GeneratedApp) -> ModificationResult:
        """Apply *request* to *existing* and return the new files and record.

        Never raises for requests it cannot satisfy; those produce the
        catch-all result with the original files.
        """
        lowered = request.lower()
        for strategy in self._strategies:
            result = strategy(request, lowered, existing)
            if result is not None:
                return result
        return ModificationResult(
            files=dict(existing.files),
            customizations=existing.customizations,
            summary=NO_CHANGES_SUMMARY,
        )

    # -- Strategies --------------------------------------------------------

    def _recolor(
        self, request: str, lowered: str, existing: GeneratedApp
    ) -> Optional[ModificationResult]:
        if "change" not in lowered or not _mentions(lowered, "color", "theme"):
            return None

        candidate = extract_customizations(request)
        new_colors = candidate.color_fields()

        # Earlier fields claim a shared old value first.
        replacements: dict[str, str] = {}
        for field_name, old_value in existing.customizations.color_fields().items():
            if old_value:
                replacements.setdefault(old_value, new_colors[field_name])

        merged = existing.customizations.model_copy(update=new_colors)
        return ModificationResult(
            files=replace_in_files(existing.files, replacements),
            customizations=merged,
            summary=(
                f"Changed colors to: Primary {merged.primary_color}, "
                f"Secondary {merged.secondary_color}"
            ),
        )

    def _add_menu_item(
        self, request: str, lowered: str, existing: GeneratedApp
    ) -> Optional[ModificationResult]:
        if existing.template_category is not TemplateCategory.RESTAURANT:
            return None
        if not _mentions(lowered, "add", "include") or not _mentions(lowered, "menu", "item"):
            return None
        menu_source = existing.files.get(MENU_FILE)
        if menu_source is None:
            return None

        match = _MENU_ITEM_PATTERN.search(request)
        if match is None:
            return None
        name = match.group(1).strip()
        price = float(match.group(2))

        appended = append_menu_item(menu_source, name, price)
        if appended is None:
            return None

        files = dict(existing.files)
        files[MENU_FILE] = appended[0]
        return ModificationResult(
            files=files,
            customizations=existing.customizations,
            summary=f'Added "{name}" to the menu for ${format_js_number(price)}',
        )

    def _add_screen(
        self, request: str, lowered: str, existing: GeneratedApp
    ) -> Optional[ModificationResult]:
        # Intent is acknowledged but screens are not generated yet.
        if not _mentions(lowered, "add", "include") or not _mentions(lowered, "screen", "page"):
            return None
        return ModificationResult(
            files=dict(existing.files),
            customizations=existing.customizations,
            summary=ADD_SCREEN_SUMMARY,
        )

    def _rename(
        self, request: str, lowered: str, existing: GeneratedApp
    ) -> Optional[ModificationResult]:
        if "change" not in lowered or not _mentions(lowered, "text", "title", "name"):
            return None

        match = _RENAME_PATTERN.search(request.strip())
        if match is None:
            return None
        subject = match.group(1).lower()
        new_name = match.group(2)
        old_name = existing.customizations.business_name
        if not _mentions(subject, "name", "title") or not old_name:
            return None

        files = {
            path: replace_literals(content, _name_replacements(path, old_name, new_name))
            for path, content in existing.files.items()
        }
        return ModificationResult(
            files=files,
            customizations=existing.customizations.model_copy(
                update={"business_name": new_name}
            ),
            summary=f'Changed business name to "{new_name}"',
        )
