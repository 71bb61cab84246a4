from __future__ import annotations

import bisect
import os
from pathlib import Path
import stat
import tempfile
from typing import Callable, Union

from .domain import Recipe, check_recipe, parse_recipes, serialize_recipes
from .errors import (
    DuplicateRecipeError,
    FileFormatError,
    RecipeIndexError,
    RecipeNotFoundError,
    StorageError,
)


ChangedHandler = Callable[[], None]


class RecipeRepository:
    """Recipes held in memory and persisted to one sectioned text file.

    Every accessor hands out clones; the stored recipes are never exposed.
    Subscribers registered with ``on_changed`` are called after ``load`` and
    after every successful mutation.
    """

    def __init__(self, path: Union[str, os.PathLike[str]], *, encoding: str = "utf-8") -> None:
        self._path = _resolve_path(path)
        self._encoding = encoding
        self._recipes: list[Recipe] = []
        self._handlers: list[ChangedHandler] = []
        self._modified = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_modified(self) -> bool:
        return self._modified

    def __len__(self) -> int:
        return len(self._recipes)

    def get_all(self) -> list[Recipe]:
        return [recipe.clone() for recipe in self._recipes]

    def get_at(self, index: int) -> Recipe:
        return self._recipes[self._check_index(index)].clone()

    def delete(self, recipe: Recipe) -> None:
        position = self._position_of(recipe)
        del self._recipes[position]
        self._mark_changed()

    def delete_at(self, index: int) -> None:
        self.delete(self._recipes[self._check_index(index)])

    def add(self, recipe: Recipe) -> None:
        check_recipe(recipe)
        if recipe in self._recipes:
            raise DuplicateRecipeError(f"A recipe named {recipe.name!r} already exists")
        stored = recipe.clone()
        position = bisect.bisect_right([r.name for r in self._recipes], stored.name)
        self._recipes.insert(position, stored)
        self._mark_changed()

    def update(self, index: int, recipe: Recipe) -> None:
        position = self._check_index(index)
        check_recipe(recipe)
        # Entries already sharing a name may still be edited in place.
        renamed = recipe.name != self._recipes[position].name
        if renamed and recipe in self._recipes:
            raise DuplicateRecipeError(f"A recipe named {recipe.name!r} already exists")
        self._recipes[position] = recipe.clone()
        self._recipes.sort(key=_by_name)
        self._mark_changed()

    def on_changed(self, handler: ChangedHandler) -> ChangedHandler:
        self._handlers.append(handler)
        return handler

    def remove_changed_handler(self, handler: ChangedHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def load(self) -> None:
        source = str(self._path)
        try:
            with self._path.open("r", encoding=self._encoding, newline=None) as fh:
                recipes = parse_recipes(fh, source)
        except UnicodeDecodeError as exc:
            raise FileFormatError(f"{source}: not valid {self._encoding} text") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read recipes: {source}") from exc

        recipes.sort(key=_by_name)
        self._recipes = recipes
        self._modified = False
        self._notify_changed()

    def save(self) -> None:
        """Write every recipe to the file, replacing it only once fully written."""
        try:
            content = serialize_recipes(self._recipes).encode(self._encoding)
        except UnicodeEncodeError as exc:
            raise StorageError(
                f"Failed to write recipes: {self._path}: content cannot be encoded as {self._encoding}"
            ) from exc
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_name, _file_mode(self._path))
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write recipes: {self._path}") from exc
        self._modified = False

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._recipes):
            raise RecipeIndexError(f"Recipe index {index} out of range for {len(self._recipes)} recipes")
        return index

    def _position_of(self, recipe: Recipe) -> int:
        for position, stored in enumerate(self._recipes):
            if stored is recipe:
                return position
        for position, stored in enumerate(self._recipes):
            if stored == recipe:
                return position
        raise RecipeNotFoundError(f"No recipe named {recipe.name!r}")

    def _mark_changed(self) -> None:
        self._modified = True
        self._notify_changed()

    def _notify_changed(self) -> None:
        for handler in tuple(self._handlers):
            handler()


def _by_name(recipe: Recipe) -> str:
    return recipe.name


def _resolve_path(path: Union[str, os.PathLike[str]]) -> Path:
    text = os.fspath(path)
    if not text.strip() or "\x00" in text:
        raise StorageError(f"Invalid recipe file path: {text!r}")
    try:
        return Path(text).expanduser().resolve()
    except (OSError, RuntimeError) as exc:
        raise StorageError(f"Invalid recipe file path: {text!r}") from exc


def _file_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o644
