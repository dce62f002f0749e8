"""
Keyword based ingredient categorization for grocery lists.

Each ingredient is assigned to exactly one display category by matching its name
against keyword lists. Categories are checked in CATEGORY_ORDER, so the first match
wins. Phrases that contain a keyword of another category live in PRIORITY_KEYWORDS,
which is checked before the regular table ("black pepper" is spices although
"pepper" alone is produce).

Unmatched ingredients fall into DEFAULT_CATEGORY.
"""

from typing import Dict, List

DEFAULT_CATEGORY = "other"

# Fixed display order of categories in the aggregated grocery list
CATEGORY_ORDER = ["produce", "protein", "dairy", "grains", "spices", DEFAULT_CATEGORY]

# Keywords matched before the regular table (phrases that contain a keyword of another category)
PRIORITY_KEYWORDS: Dict[str, List[str]] = {
    "spices": ["black pepper", "white pepper", "cayenne pepper", "pepper flakes", "chili powder", "ground ginger"],
    "produce": ["bell pepper", "chili pepper", "green onion", "spring onion", "sweet potato", "butternut squash"],
}

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "produce": [
        "tomato", "lettuce", "onion", "garlic", "carrot", "celery", "potato",
        "pepper", "cucumber", "spinach", "broccoli", "cauliflower", "cabbage",
        "mushroom", "zucchini", "eggplant", "asparagus", "avocado", "lemon",
        "lime", "apple", "banana", "orange", "berry", "strawberry", "blueberry",
        "cilantro", "parsley", "basil", "thyme", "rosemary",
    ],
    "protein": [
        "chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp", "egg",
        "tofu", "tempeh", "lentil", "bean", "chickpea", "turkey", "lamb",
        "bacon", "sausage",
    ],
    "dairy": [
        "milk", "cheese", "yogurt", "butter", "cream", "mozzarella",
        "parmesan", "cheddar", "feta", "ricotta",
    ],
    "grains": [
        "rice", "pasta", "bread", "flour", "oat", "quinoa", "couscous",
        "barley", "tortilla", "noodle",
    ],
    "spices": [
        "salt", "paprika", "cumin", "oregano", "cinnamon", "chili", "curry",
        "turmeric", "ginger", "coriander", "nutmeg",
    ],
}

CATEGORY_EMOJIS: Dict[str, str] = {
    "produce": "🥬",
    "protein": "🥩",
    "dairy": "🥛",
    "grains": "🌾",
    "spices": "🧂",
    DEFAULT_CATEGORY: "📦",
}


def categorize_ingredient(name: str) -> str:
    """
    Assign an ingredient name to a grocery category.

    Args:
        name: Ingredient name (case-insensitive)

    Returns:
        Category name: "produce", "protein", "dairy", "grains", "spices" or "other"

    Examples:
        >>> categorize_ingredient("Cherry tomatoes")
        'produce'
        >>> categorize_ingredient("Black pepper")
        'spices'
        >>> categorize_ingredient("Olive oil")
        'other'
    """
    lower_name = (name or "").lower()

    for table in (PRIORITY_KEYWORDS, CATEGORY_KEYWORDS):
        for category in CATEGORY_ORDER:
            if any(keyword in lower_name for keyword in table.get(category, [])):
                return category

    return DEFAULT_CATEGORY


def category_emoji(category: str) -> str:
    """Emoji shown next to a category heading; unknown categories use the 'other' emoji."""
    return CATEGORY_EMOJIS.get(category, CATEGORY_EMOJIS[DEFAULT_CATEGORY])
