from .models import Ingredient, Recipe
from .textformat import (
    SECTION_INGREDIENTS,
    SECTION_INSTRUCTIONS,
    SECTION_MARKERS,
    SECTION_RECIPE,
    ReadState,
    check_recipe,
    parse_recipes,
    serialize_recipes,
)

__all__ = [
    "Ingredient",
    "ReadState",
    "Recipe",
    "SECTION_INGREDIENTS",
    "SECTION_INSTRUCTIONS",
    "SECTION_MARKERS",
    "SECTION_RECIPE",
    "check_recipe",
    "parse_recipes",
    "serialize_recipes",
]
