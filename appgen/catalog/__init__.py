"""appgen template catalog -- the fixed library of React Native starter apps.

Quick usage::

    from appgen.catalog import TemplateCatalog
    from appgen.parser import CustomizationRecord

    bundle = TemplateCatalog().build("fitness", CustomizationRecord(business_name="Iron Temple"))
    print(bundle.name, sorted(bundle.files))
"""

from appgen.catalog.catalog import (
    CATALOG,
    ENTRY_POINT,
    MANIFEST,
    MENU_FILE,
    CatalogBundle,
    CatalogEntry,
    TemplateCatalog,
)
from appgen.catalog.templates import TemplateRenderer

__all__ = [
    "CATALOG",
    "ENTRY_POINT",
    "MANIFEST",
    "MENU_FILE",
    "CatalogBundle",
    "CatalogEntry",
    "TemplateCatalog",
    "TemplateRenderer",
]
