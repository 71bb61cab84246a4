from __future__ import annotations

from typing import Any, Iterable

import yaml

from .domain import Ingredient, Recipe
from .errors import ValidationError


def recipe_from_yaml(text: str, source: str) -> Recipe:
    """Build a recipe from a YAML mapping.

    Expected shape::

        name: Tea
        ingredients:
          - {amount: 1, measure: cup, name: water}
        instructions:
          - Boil water.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValidationError(f"{source}: invalid YAML") from exc

    if not isinstance(data, dict):
        raise ValidationError(f"{source}: recipe document must be a mapping")

    name = data.get("name")
    if name is None or not str(name).strip():
        raise ValidationError(f"{source}: missing required key 'name'")

    ingredients = [_ingredient(item, source, idx) for idx, item in enumerate(_list(data, "ingredients", source), 1)]
    instructions = [_instruction(item, source, idx) for idx, item in enumerate(_list(data, "instructions", source), 1)]
    return Recipe(str(name), ingredients, instructions)


def recipe_to_dict(recipe: Recipe) -> dict[str, Any]:
    return {
        "name": recipe.name,
        "ingredients": [
            {"amount": ing.amount, "measure": ing.measure, "name": ing.name}
            for ing in recipe.ingredients
        ],
        "instructions": list(recipe.instructions),
    }


def recipes_to_yaml(recipes: Iterable[Recipe]) -> str:
    return yaml.safe_dump(
        [recipe_to_dict(recipe) for recipe in recipes],
        sort_keys=False,
        allow_unicode=True,
    )


def _list(data: dict[str, Any], key: str, source: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{source}: {key!r} must be a list")
    return value


def _ingredient(item: Any, source: str, idx: int) -> Ingredient:
    if not isinstance(item, dict):
        raise ValidationError(f"{source}: ingredient {idx} must be a mapping")
    if item.get("name") is None:
        raise ValidationError(f"{source}: ingredient {idx} is missing 'name'")
    return Ingredient(
        amount=_text(item.get("amount")),
        measure=_text(item.get("measure")),
        name=_text(item["name"]),
    )


def _instruction(item: Any, source: str, idx: int) -> str:
    if isinstance(item, (dict, list)) or item is None:
        raise ValidationError(f"{source}: instruction {idx} must be text")
    return str(item)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
