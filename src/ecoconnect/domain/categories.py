"""Waste categories and material label normalization."""

from enum import StrEnum


class Category(StrEnum):
    """Closed set of waste-material classes."""

    PLASTIC = "plastic"
    METAL = "metal"
    EWASTE = "ewaste"
    FABRIC = "fabric"
    GLASS = "glass"
    PAPER = "paper"
    ORGANIC = "organic"
    HAZARDOUS = "hazardous"
    OTHER = "other"


# Evaluated top to bottom; the first category with a matching keyword wins.
_CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.PLASTIC, ("plastic", "polymer", "polythene", "pet", "hdpe", "pvc")),
    (
        Category.METAL,
        ("metal", "aluminum", "aluminium", "steel", "iron", "copper", "brass", "tin"),
    ),
    (
        Category.EWASTE,
        (
            "electronic",
            "e-waste",
            "ewaste",
            "circuit",
            "battery",
            "phone",
            "computer",
            "laptop",
            "device",
        ),
    ),
    (
        Category.FABRIC,
        (
            "fabric",
            "cloth",
            "textile",
            "cotton",
            "polyester",
            "clothes",
            "clothing",
            "garment",
        ),
    ),
    (Category.GLASS, ("glass", "bottle", "jar")),
    (Category.PAPER, ("paper", "cardboard", "carton", "newspaper")),
    (Category.ORGANIC, ("organic", "food", "compost", "biodegradable", "waste")),
    (Category.HAZARDOUS, ("hazardous", "chemical", "toxic", "paint", "oil", "battery")),
)


def categorize(material_label: str | None) -> Category:
    """Map a free-form material label to a waste category."""
    label = (material_label or "").lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in label for keyword in keywords):
            return category
    return Category.OTHER


def coerce_category(value: str | Category) -> Category:
    """Return the matching category, falling back to OTHER for unknown values."""
    try:
        return Category(value)
    except ValueError:
        return Category.OTHER
