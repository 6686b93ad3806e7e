"""appgen modification engine -- incremental edits to generated apps.

Usage::

    from appgen.modifier import ModificationEngine

    result = ModificationEngine().modify("change the color to green", app)
    print(result.summary)
"""

from appgen.modifier.engine import (
    ADD_SCREEN_SUMMARY,
    NO_CHANGES_SUMMARY,
    ModificationEngine,
)
from appgen.modifier.edits import append_menu_item, replace_in_files, replace_literals

__all__ = [
    "ADD_SCREEN_SUMMARY",
    "NO_CHANGES_SUMMARY",
    "ModificationEngine",
    "append_menu_item",
    "replace_in_files",
    "replace_literals",
]
