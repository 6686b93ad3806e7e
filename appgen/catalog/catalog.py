"""The fixed library of starter apps.

Every ``TemplateCategory`` has exactly one ``CatalogEntry`` describing its
display name, feature labels, navigator package and the seed data rendered
into its list screens. ``TemplateCatalog.build`` renders the shared
``common/`` templates plus the category's own directory into a complete
file set.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from appgen.parser.models import CustomizationRecord, TemplateCategory

from .templates import TemplateRenderer


ENTRY_POINT = "App.js"
MANIFEST = "package.json"
MENU_FILE = "screens/MenuScreen.js"

_COMMON_PREFIX = "common"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class CatalogEntry(BaseModel):
    """Static description of one starter app."""

    name: str = Field(..., description="Display name, e.g. 'Restaurant App'")
    features: list[str] = Field(default_factory=list)
    navigator: str = Field(default="stack", description="@react-navigation package suffix")
    seed_data: dict[str, Any] = Field(
        default_factory=dict, description="Extra template context (menu items, products...)"
    )


class CatalogBundle(BaseModel):
    """A freshly rendered starter app."""

    name: str
    features: list[str]
    files: dict[str, str]


# ---------------------------------------------------------------------------
# Catalog content
# ---------------------------------------------------------------------------

CATALOG: dict[TemplateCategory, CatalogEntry] = {
    TemplateCategory.RESTAURANT: CatalogEntry(
        name="Restaurant App",
        features=["Menu Display", "Ordering System", "User Authentication", "Cart Management"],
        navigator="stack",
        seed_data={
            "menu_items": [
                {"name": "Margherita Pizza", "price": 12.99,
                 "description": "Fresh tomatoes, mozzarella, basil"},
                {"name": "Caesar Salad", "price": 8.99,
                 "description": "Romaine lettuce, parmesan, croutons"},
                {"name": "Pasta Carbonara", "price": 14.99,
                 "description": "Egg, bacon, parmesan, black pepper"},
                {"name": "Chicken Wings", "price": 11.99,
                 "description": "Buffalo or BBQ sauce, celery sticks"},
                {"name": "Fish Tacos", "price": 13.99,
                 "description": "Grilled fish, cabbage slaw, lime"},
            ],
        },
    ),
    TemplateCategory.BUSINESS: CatalogEntry(
        name="Business/Service App",
        features=["About Us", "Services", "Contact", "Booking"],
        navigator="bottom-tabs",
        seed_data={
            "services": [
                {"name": "Initial Consultation", "duration": "30 min"},
                {"name": "Standard Appointment", "duration": "60 min"},
                {"name": "Follow-up Session", "duration": "45 min"},
            ],
        },
    ),
    TemplateCategory.ECOMMERCE: CatalogEntry(
        name="E-commerce App",
        features=["Product Catalog", "Shopping Cart", "Checkout"],
        navigator="bottom-tabs",
        seed_data={
            "products": [
                {"name": "Basic Tee", "price": 9.99},
                {"name": "Premium Hoodie", "price": 39.99},
                {"name": "Running Shoes", "price": 59.99},
                {"name": "Sports Cap", "price": 14.99},
                {"name": "Water Bottle", "price": 7.99},
            ],
        },
    ),
    TemplateCategory.FITNESS: CatalogEntry(
        name="Fitness App",
        features=["Workout Plans", "Progress Tracking"],
        navigator="bottom-tabs",
        seed_data={
            "workouts": [
                "Full Body Blast", "Cardio Burn", "Core Strength", "Stretch & Flex", "HIIT Express",
            ],
            "progress": [
                {"label": "Workouts Completed", "value": "12"},
                {"label": "Calories Burned", "value": "3500"},
                {"label": "Miles Run", "value": "27"},
            ],
        },
    ),
    TemplateCategory.DIRECTORY: CatalogEntry(
        name="Directory App",
        features=["Listings", "Search"],
        navigator="stack",
        seed_data={
            "listings": [
                "Acme Corp.", "Best Services", "Quick Fixers", "Happy Helpers", "Super Supplies",
            ],
        },
    ),
}

_missing = set(TemplateCategory) - set(CATALOG)
if _missing:
    raise RuntimeError(f"Catalog has no entry for: {sorted(c.value for c in _missing)}")


# ---------------------------------------------------------------------------
# TemplateCatalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Renders starter apps for a category and customization record."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def entry(self, category: TemplateCategory | str) -> CatalogEntry:
        """Return the entry for *category*; unknown names get the default."""
        return CATALOG[TemplateCategory.coerce(category)]

    def build(
        self,
        category: TemplateCategory | str,
        customizations: CustomizationRecord,
    ) -> CatalogBundle:
        """Render a complete starter app. Has no failure mode for valid records."""
        category = TemplateCategory.coerce(category)
        entry = CATALOG[category]
        context = self._build_context(entry, customizations)

        files = self.renderer.render_tree(_COMMON_PREFIX, context)
        files.update(self.renderer.render_tree(category.value, context))
        return CatalogBundle(name=entry.name, features=list(entry.features), files=files)

    @staticmethod
    def _build_context(entry: CatalogEntry, customizations: CustomizationRecord) -> dict[str, Any]:
        return {
            "business_name": customizations.business_name,
            "primary_color": customizations.primary_color,
            "secondary_color": customizations.secondary_color,
            "background_color": customizations.background_color,
            "navigator": entry.navigator,
            **entry.seed_data,
        }
