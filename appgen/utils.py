"""Shared utility functions for appgen.

Provides the Rich console used for all user-facing output, coloured
message helpers, a summary table printer, JSON file I/O and a couple of
name helpers shared by the catalog and the orchestrator.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def app_identifier(business_name: str) -> str:
    """Derive the app identifier from a business name.

    All whitespace is removed and ``App`` appended::

        app_identifier("Luigi's Pizza") -> "Luigi'sPizzaApp"
    """
    return re.sub(r"\s+", "", business_name) + "App"


def escape_js_string(value: str) -> str:
    """Escape *value* for use inside a single-quoted JavaScript string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def escape_json_string(value: str) -> str:
    """Escape *value* for use inside a double-quoted JSON string.

    Non-ASCII characters are kept as they are, so a name without quotes,
    backslashes or control characters escapes to itself.
    """
    return json.dumps(value, ensure_ascii=False)[1:-1]


def slugify(text: str) -> str:
    """Convert arbitrary text to a lowercase, hyphen-separated slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return slug.strip("-")


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    file_path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: Mapping[str, object], title: str = "Summary") -> None:
    """Print *data* as a two-column table; long values such as file lists wrap."""
    table = Table(title=title, title_justify="left", header_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))
    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
