"""Pydantic v2 models shared by the classifier, catalog and modification engine.

External JSON uses camelCase keys (``businessName``, ``primaryColor``,
``templateCategory``) while Python code uses snake_case attributes. Both
spellings are accepted on input; dump with ``by_alias=True`` for the wire
shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

DEFAULT_BUSINESS_NAME = "My Business"
DEFAULT_PRIMARY_COLOR = "#007AFF"
DEFAULT_SECONDARY_COLOR = "#FF3B30"
DEFAULT_BACKGROUND_COLOR = "#F2F2F7"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateCategory(str, Enum):
    """The five starter-app archetypes the catalog can produce."""
    RESTAURANT = "restaurant"
    BUSINESS = "business"
    ECOMMERCE = "ecommerce"
    FITNESS = "fitness"
    DIRECTORY = "directory"

    @classmethod
    def default(cls) -> "TemplateCategory":
        return cls.RESTAURANT

    @classmethod
    def parse(cls, value: object) -> Optional["TemplateCategory"]:
        """Return the member named by *value*, or ``None`` if there is none."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def coerce(cls, value: object) -> "TemplateCategory":
        """Like ``parse`` but unknown values resolve to the default category."""
        return cls.parse(value) or cls.default()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Customization
# ---------------------------------------------------------------------------

class CustomizationRecord(_CamelModel):
    """Identity and theme colors applied to a template's source files."""
    business_name: str = Field(
        default=DEFAULT_BUSINESS_NAME,
        description="Human-readable identity substituted verbatim into sources",
    )
    primary_color: str = Field(default=DEFAULT_PRIMARY_COLOR, pattern=HEX_COLOR_PATTERN)
    secondary_color: str = Field(default=DEFAULT_SECONDARY_COLOR, pattern=HEX_COLOR_PATTERN)
    background_color: str = Field(default=DEFAULT_BACKGROUND_COLOR, pattern=HEX_COLOR_PATTERN)

    def color_fields(self) -> dict[str, str]:
        """Return the three color fields in substitution priority order."""
        return {
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "background_color": self.background_color,
        }


# ---------------------------------------------------------------------------
# Generated application state
# ---------------------------------------------------------------------------

class GeneratedApp(_CamelModel):
    """A complete generated app: every file plus the record that shaped it."""
    template_category: TemplateCategory = Field(default=TemplateCategory.RESTAURANT)
    template_name: str = Field(default="", description="Catalog display name")
    app_name: str = Field(default="", description="Whitespace-free identifier ending in 'App'")
    features: list[str] = Field(
        default_factory=list, description="Capability labels in display order"
    )
    files: dict[str, str] = Field(
        ..., min_length=1, description="Relative path -> full file content"
    )
    customizations: CustomizationRecord = Field(default_factory=CustomizationRecord)
    summary: Optional[str] = Field(
        default=None, description="What the last modification changed"
    )
    is_modification: bool = Field(default=False)


class ModificationResult(_CamelModel):
    """Outcome of one modification request."""
    files: dict[str, str] = Field(..., min_length=1)
    customizations: CustomizationRecord
    summary: str = Field(..., min_length=1)


class Classification(_CamelModel):
    """Category and customizations inferred from a new-app request."""
    template_category: TemplateCategory
    customizations: CustomizationRecord
    source: Literal["model", "keywords"] = Field(
        default="keywords", description="Which classification path produced this"
    )
