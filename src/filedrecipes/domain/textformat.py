from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

from ..errors import FileFormatError, ValidationError
from .models import Ingredient, Recipe


SECTION_RECIPE = "[Recept]"
SECTION_INGREDIENTS = "[Ingredienser]"
SECTION_INSTRUCTIONS = "[Instruktioner]"
SECTION_MARKERS = (SECTION_RECIPE, SECTION_INGREDIENTS, SECTION_INSTRUCTIONS)

INGREDIENT_SEPARATOR = ";"
INGREDIENT_FIELDS = 3


class ReadState(Enum):
    INDEFINITE = "indefinite"
    NEW_RECIPE = "new-recipe"
    INGREDIENT = "ingredient"
    INSTRUCTION = "instruction"


SECTION_TRANSITIONS: dict[str, ReadState] = {
    SECTION_RECIPE: ReadState.NEW_RECIPE,
    SECTION_INGREDIENTS: ReadState.INGREDIENT,
    SECTION_INSTRUCTIONS: ReadState.INSTRUCTION,
}


def parse_recipes(lines: Iterable[str], source: str = "<recipes>") -> list[Recipe]:
    """Parse the sectioned recipe text format into recipes, in file order.

    A section marker switches the read state and the next non-blank line is
    taken as that section's first payload line without being checked against
    the markers again.
    """
    recipes: list[Recipe] = []
    state = ReadState.INDEFINITE
    numbered = _numbered_lines(lines)

    for line_number, line in numbered:
        if not line:
            continue
        next_state = SECTION_TRANSITIONS.get(line)
        if next_state is not None:
            state = next_state
            payload = _next_payload(numbered)
            if payload is None:
                raise FileFormatError(
                    f"{source}: line {line_number}: section {line} is not followed by any content"
                )
            line_number, line = payload
        _LINE_HANDLERS[state](recipes, line, source, line_number)

    return recipes


def serialize_recipes(recipes: Iterable[Recipe]) -> str:
    lines: list[str] = []
    for recipe in recipes:
        lines.append(SECTION_RECIPE)
        lines.append(recipe.name)
        # An empty section would make its marker swallow the next marker on reload.
        if recipe.ingredients:
            lines.append(SECTION_INGREDIENTS)
            lines.extend(format_ingredient(ingredient) for ingredient in recipe.ingredients)
        if recipe.instructions:
            lines.append(SECTION_INSTRUCTIONS)
            lines.extend(recipe.instructions)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_ingredient(ingredient: Ingredient) -> str:
    return INGREDIENT_SEPARATOR.join((ingredient.amount, ingredient.measure, ingredient.name))


def parse_ingredient(text: str, source: str, line_number: int) -> Ingredient:
    parts = text.split(INGREDIENT_SEPARATOR)
    if len(parts) != INGREDIENT_FIELDS:
        raise FileFormatError(
            f"{source}: line {line_number}: ingredient must have {INGREDIENT_FIELDS} "
            f"';'-separated parts, found {len(parts)}: {text!r}"
        )
    amount, measure, name = parts
    return Ingredient(amount=amount, measure=measure, name=name)


def check_recipe(recipe: Recipe) -> None:
    """Reject recipes whose content cannot be written as distinct format lines."""
    if not recipe.name.strip():
        raise ValidationError("recipe name must not be blank")
    if _breaks_line(recipe.name) or recipe.name in SECTION_MARKERS:
        raise ValidationError(f"invalid recipe name: {recipe.name!r}")

    for ingredient in recipe.ingredients:
        for value in (ingredient.amount, ingredient.measure, ingredient.name):
            if INGREDIENT_SEPARATOR in value or _breaks_line(value):
                raise ValidationError(
                    f"{recipe.name}: ingredient field must not contain ';' or line breaks: {value!r}"
                )

    for instruction in recipe.instructions:
        if not instruction.strip():
            raise ValidationError(f"{recipe.name}: instructions must not be blank")
        if _breaks_line(instruction) or instruction in SECTION_MARKERS:
            raise ValidationError(f"{recipe.name}: invalid instruction: {instruction!r}")


def _numbered_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if line_number == 1:
            line = line.removeprefix("\ufeff")
        yield line_number, line


def _next_payload(numbered: Iterator[tuple[int, str]]) -> Optional[tuple[int, str]]:
    for line_number, line in numbered:
        if line:
            return line_number, line
    return None


def _breaks_line(text: str) -> bool:
    return "\n" in text or "\r" in text


def _read_indefinite(recipes: list[Recipe], line: str, source: str, line_number: int) -> None:
    raise FileFormatError(f"{source}: line {line_number}: content before any section marker: {line!r}")


def _read_new_recipe(recipes: list[Recipe], line: str, source: str, line_number: int) -> None:
    recipes.append(Recipe(line))


def _read_ingredient(recipes: list[Recipe], line: str, source: str, line_number: int) -> None:
    current = _current_recipe(recipes, source, line_number)
    current.add_ingredient(parse_ingredient(line, source, line_number))


def _read_instruction(recipes: list[Recipe], line: str, source: str, line_number: int) -> None:
    _current_recipe(recipes, source, line_number).add_instruction(line)


def _current_recipe(recipes: list[Recipe], source: str, line_number: int) -> Recipe:
    if not recipes:
        raise FileFormatError(f"{source}: line {line_number}: section content before any {SECTION_RECIPE}")
    return recipes[-1]


_LINE_HANDLERS: dict[ReadState, Callable[[list[Recipe], str, str, int], None]] = {
    ReadState.INDEFINITE: _read_indefinite,
    ReadState.NEW_RECIPE: _read_new_recipe,
    ReadState.INGREDIENT: _read_ingredient,
    ReadState.INSTRUCTION: _read_instruction,
}
