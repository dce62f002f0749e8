"""
Ingredient string parsing and normalization utilities.

This module provides pure helper functions for turning raw recipe ingredient
strings (e.g. "2 cups flour, sifted") into a name and a free-text quantity, and
for building the merge key used by the grocery list aggregator. All functions
are stateless and have no side effects (no I/O, no network calls).

# NOTE: Merging is a literal match on the normalized name. There is no stemming
    ("egg" and "eggs" stay separate) and no unit conversion ("1 cup" and
    "240 ml" are kept as two quantities).
"""

import re
from typing import Optional

from .models import ParsedIngredient

FRACTION_CHARS = "¼½¾⅓⅔⅛⅜⅝⅞"

# Measurement units recognized directly after the amount
UNITS = [
    "cup", "cups",
    "tablespoon", "tablespoons", "tbsp",
    "teaspoon", "teaspoons", "tsp",
    "pound", "pounds", "lb", "lbs",
    "ounce", "ounces", "oz",
    "gram", "grams", "g",
    "kilogram", "kilograms", "kg",
    "ml", "milliliter", "milliliters",
    "liter", "liters", "l",
    "piece", "pieces",
    "slice", "slices",
    "clove", "cloves",
    "can", "cans",
    "package", "packages", "pkg",
]

# Longest units first so "tablespoons" wins over "tablespoon"
_UNIT_ALTERNATION = "|".join(sorted((re.escape(u) for u in UNITS), key=len, reverse=True))

_AMOUNT = rf"[\d{FRACTION_CHARS}](?:[\d./\s{FRACTION_CHARS}-]*[\d{FRACTION_CHARS}])?"

_INGREDIENT_PATTERN = re.compile(
    rf"^(?P<amount>{_AMOUNT})\s*(?P<unit>(?:{_UNIT_ALTERNATION})\b\.?)?\s*(?P<name>.+)$",
    re.IGNORECASE,
)


def strip_preparation(text: str) -> str:
    """
    Drop preparation notes from an ingredient string.

    Everything after the first comma or opening parenthesis is removed:
    "1 onion, finely chopped" -> "1 onion", "2 eggs (beaten)" -> "2 eggs".
    """
    cleaned = text.split(",")[0]
    cleaned = cleaned.split("(")[0]
    return cleaned.strip()


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def parse_ingredient(text: str) -> ParsedIngredient:
    """
    Parse an ingredient string into a name and a free-text quantity.

    Args:
        text: Raw ingredient string from a recipe (e.g. "2 cups flour, sifted")

    Returns:
        ParsedIngredient with the original text, the capitalized name and the
        quantity including its unit ("" when the string has no leading amount).

    Examples:
        >>> parse_ingredient("2 cups flour").name
        'Flour'
        >>> parse_ingredient("2 cups flour").quantity
        '2 cups'
        >>> parse_ingredient("Salt to taste").quantity
        ''
    """
    cleaned = strip_preparation(text)

    match = _INGREDIENT_PATTERN.match(cleaned)
    if match:
        quantity = match.group("amount").strip()
        unit = match.group("unit")
        if unit:
            quantity = f"{quantity} {unit.rstrip('.')}"
        name = match.group("name").strip()
        # "2 cups of flour" -> "flour"
        if name.lower().startswith("of "):
            name = name[3:].strip()
        return ParsedIngredient(original=text, name=_capitalize(name), quantity=quantity)

    return ParsedIngredient(original=text, name=_capitalize(cleaned), quantity="")


def normalize_name(name: Optional[str]) -> str:
    """
    Build the merge key for an ingredient name.

    Lower-cases, trims and collapses internal whitespace, so "  Olive   Oil " and
    "olive oil" share a key.
    """
    if not name:
        return ""
    return " ".join(name.lower().split())


def merge_quantities(existing: str, new: Optional[str]) -> str:
    """
    Combine two free-text quantities.

    Distinct quantities are concatenated with ", "; an empty quantity or one that
    is already listed is not repeated.

    Examples:
        >>> merge_quantities("2 cups", "1 cup")
        '2 cups, 1 cup'
        >>> merge_quantities("2 cups", "2 cups")
        '2 cups'
        >>> merge_quantities("", "1")
        '1'
    """
    parts = [p for p in existing.split(", ") if p] if existing else []
    new = (new or "").strip()
    if new and new not in parts:
        parts.append(new)
    return ", ".join(parts)
