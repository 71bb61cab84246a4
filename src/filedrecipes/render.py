from __future__ import annotations

from typing import Iterable

from .domain import Recipe


PANEL_WIDTH = 46
RULE_WIDTH = 42


def format_panel(title: str, width: int = PANEL_WIDTH) -> list[str]:
    inner = max(width - 2, len(title) + 2)
    border = "+" + "-" * inner + "+"
    return [border, "|" + title.center(inner) + "|", border]


def format_rule(title: str, width: int = RULE_WIDTH) -> str:
    text = title.strip() + " "
    return f" - {text.ljust(width, '-')}"


def format_recipe(recipe: Recipe, width: int = PANEL_WIDTH) -> list[str]:
    rule_width = max(width - 4, 1)
    lines = format_panel(recipe.name, width)
    lines.extend(["", format_rule("Ingredients", rule_width), ""])
    lines.extend(str(ingredient) for ingredient in recipe.ingredients)
    lines.extend(["", format_rule("Instructions", rule_width), ""])
    lines.extend(recipe.instructions)
    return lines


def format_recipe_index(recipes: Iterable[Recipe]) -> list[str]:
    """Numbered recipe names, starting at 1."""
    return [f"{number:>3}. {recipe.name}" for number, recipe in enumerate(recipes, start=1)]
