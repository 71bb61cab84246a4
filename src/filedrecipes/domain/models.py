from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable


@dataclass(frozen=True)
class Ingredient:
    amount: str
    measure: str
    name: str

    def __str__(self) -> str:
        return " ".join(part for part in (self.amount, self.measure, self.name) if part)


@total_ordering
class Recipe:
    """A named recipe.

    Recipes compare, hash and order by name alone, so a clone handed out by
    the repository still identifies the stored entry it was copied from.
    """

    def __init__(
        self,
        name: str,
        ingredients: Iterable[Ingredient] = (),
        instructions: Iterable[str] = (),
    ) -> None:
        self._name = name
        self.ingredients: list[Ingredient] = list(ingredients)
        self.instructions: list[str] = list(instructions)

    @property
    def name(self) -> str:
        return self._name

    def add_ingredient(self, ingredient: Ingredient) -> None:
        self.ingredients.append(ingredient)

    def add_instruction(self, instruction: str) -> None:
        self.instructions.append(instruction)

    def clone(self) -> Recipe:
        return Recipe(self._name, self.ingredients, self.instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self._name < other._name

    def __repr__(self) -> str:
        return (
            f"Recipe(name={self._name!r}, ingredients={self.ingredients!r}, "
            f"instructions={self.instructions!r})"
        )
