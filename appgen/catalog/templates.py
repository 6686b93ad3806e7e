"""Jinja2 template rendering for the starter-app catalog.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``appgen/catalog/templates/`` directory and renders them with a
customization context. Rendering happens in memory: a category directory is
turned into a ``{relative path: content}`` mapping, which is the shape the
rest of appgen works with.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from appgen.utils import app_identifier, escape_js_string, escape_json_string, slugify


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates into in-memory file sets.

    Templates live under ``<template_dir>/<category>/`` and keep the relative
    path of the file they produce, plus a ``.j2`` suffix
    (``restaurant/screens/MenuScreen.js.j2`` -> ``screens/MenuScreen.js``).
    Autoescaping is off: output is JavaScript/JSON source, not HTML.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["app_identifier"] = app_identifier
        self.env.filters["slugify"] = slugify
        self.env.filters["js_string"] = escape_js_string
        self.env.filters["json_string"] = escape_json_string

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template (path relative to the template root)."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Directory rendering -----------------------------------------------

    def render_tree(self, template_prefix: str, context: dict[str, Any]) -> dict[str, str]:
        """Render every ``*.j2`` file under *template_prefix*.

        Returns:
            Mapping of output path (relative to the prefix, ``.j2`` stripped,
            ``/``-separated) to rendered content. Empty when the prefix does
            not exist.
        """
        files: dict[str, str] = {}
        for template_key in self.list_templates(template_prefix):
            rel = template_key[len(template_prefix) + 1:]
            output_name = rel[: -len(_TEMPLATE_SUFFIX)] if rel.endswith(_TEMPLATE_SUFFIX) else rel
            files[output_name] = self.render(template_key, context)
        return files

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root and always use ``/``.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{_TEMPLATE_SUFFIX}")
        )
