"""appgen request parser.

Turns free-text app requests into a template category and a customization
record, and defines the models shared with the catalog and the modification
engine.

Usage::

    from appgen.parser import IntentClassifier, extract_customizations

    record = extract_customizations("A green cafe app called Bean There")
    result = await IntentClassifier().classify("A green cafe app called Bean There")
    print(result.template_category, result.customizations)
"""

from appgen.parser.models import (
    Classification,
    CustomizationRecord,
    GeneratedApp,
    ModificationResult,
    TemplateCategory,
)
from appgen.parser.extractor import darken_color, extract_customizations
from appgen.parser.classifier import IntentClassifier, classify_by_keywords

__all__ = [
    "Classification",
    "CustomizationRecord",
    "GeneratedApp",
    "IntentClassifier",
    "ModificationResult",
    "TemplateCategory",
    "classify_by_keywords",
    "darken_color",
    "extract_customizations",
]
