"""Textual edit primitives used by the modification engine.

Generated sources are edited in place rather than re-rendered, so manual
edits made in the code editor survive as long as the tokens being replaced
are still present verbatim. Everything here is a pure function over strings.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from appgen.utils import escape_js_string


_MENU_ARRAY_PATTERN = re.compile(r"(const\s+menuItems\s*=\s*\[)([\s\S]*?)(\];)")
_ID_PATTERN = re.compile(r"\bid:\s*\d+")


# ---------------------------------------------------------------------------
# Literal substitution
# ---------------------------------------------------------------------------


def replace_literals(content: str, replacements: Mapping[str, str]) -> str:
    """Replace every occurrence of each key in *replacements* in one pass.

    Matching is exact and case-sensitive. Because all keys are matched
    simultaneously, a value written for one key is never picked up again as
    another key (``{A: B, B: C}`` turns ``"A B"`` into ``"B C"``). Longer
    keys win when keys overlap.
    """
    active = {old: new for old, new in replacements.items() if old and old != new}
    if not active:
        return content
    pattern = re.compile(
        "|".join(re.escape(old) for old in sorted(active, key=len, reverse=True))
    )
    return pattern.sub(lambda match: active[match.group(0)], content)


def replace_in_files(files: Mapping[str, str], replacements: Mapping[str, str]) -> dict[str, str]:
    """Apply ``replace_literals`` to every file, returning a new mapping."""
    return {path: replace_literals(content, replacements) for path, content in files.items()}


# ---------------------------------------------------------------------------
# Menu array editing
# ---------------------------------------------------------------------------


def format_js_number(value: float) -> str:
    """Render *value* the way JavaScript prints a number (``5.0`` -> ``5``)."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def build_menu_entry(item_id: int, name: str, price: float) -> str:
    """Return one menu entry object literal (without indentation)."""
    return (
        f"{{ id: {item_id}, name: '{escape_js_string(name)}', "
        f"price: {format_js_number(price)}, "
        f"description: 'Delicious {escape_js_string(name.lower())}' }},"
    )


def append_menu_item(source: str, name: str, price: float) -> Optional[tuple[str, int]]:
    """Append a new entry to the ``menuItems`` array literal in *source*.

    The next id is the number of ``id: <n>`` occurrences already inside the
    array plus one. Existing entries are kept verbatim; only a missing
    trailing comma after the last entry is added.

    Returns:
        ``(new_source, new_id)``, or ``None`` when no array is found.
    """
    match = _MENU_ARRAY_PATTERN.search(source)
    if match is None:
        return None

    opening, body, closing = match.groups()
    new_id = len(_ID_PATTERN.findall(body)) + 1

    kept = body.rstrip()
    if kept.strip() and not kept.endswith(","):
        kept += ","
    new_body = f"{kept}\n  {build_menu_entry(new_id, name, price)}\n"

    updated = source[: match.start()] + opening + new_body + closing + source[match.end():]
    return updated, new_id
