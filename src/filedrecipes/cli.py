from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from collections.abc import Callable

from .config import EffectiveConfig, config_to_toml, resolve_config
from .domain import Recipe
from .documents import recipe_from_yaml, recipe_to_dict, recipes_to_yaml
from .errors import (
    ConfigError,
    FileFormatError,
    FiledRecipesError,
    RecipeIndexError,
    RecipeNotFoundError,
    StorageError,
    ValidationError,
)
from .render import format_recipe, format_recipe_index
from .repository import RecipeRepository


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.tui or not args.command:
        return _run_guarded(_cmd_tui, args)

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "list": _cmd_list,
        "show": _cmd_show,
        "delete": _cmd_delete,
        "add": _cmd_add,
        "edit": _cmd_edit,
        "export": _cmd_export,
        "config": _cmd_config,
    }

    handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover
    return _run_guarded(handler, args)


def _run_guarded(handler: Callable[[argparse.Namespace], int], args: argparse.Namespace) -> int:
    try:
        return handler(args)
    except FiledRecipesError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    # Suppressed defaults let options given before the subcommand survive subparser parsing.
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    common.add_argument("--file", dest="recipes_file", help="Recipe text file")
    common.add_argument("--encoding")
    common.add_argument("--profile")
    common.add_argument("--tui-header-icon")
    common.add_argument("--tui-layout")
    common.add_argument("--verbose", action="store_true")

    parser = argparse.ArgumentParser(prog="filedrecipes", parents=[common])
    parser.add_argument("--tui", action="store_true", help="Launch interactive TUI")
    sub = parser.add_subparsers(dest="command")

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--json", action="store_true")

    show = sub.add_parser("show", parents=[common])
    target = show.add_mutually_exclusive_group(required=True)
    target.add_argument("index", nargs="?", type=int)
    target.add_argument("--all", action="store_true")

    delete = sub.add_parser("delete", parents=[common])
    delete.add_argument("index", type=int)

    add = sub.add_parser("add", parents=[common])
    add.add_argument("document", help="YAML recipe document")

    edit = sub.add_parser("edit", parents=[common])
    edit.add_argument("index", type=int)
    edit.add_argument("document", help="YAML recipe document")

    export = sub.add_parser("export", parents=[common])
    export.add_argument("--output")

    sub.add_parser("config", parents=[common])

    return parser


def _cmd_list(args: argparse.Namespace) -> int:
    repo = _open_repository(args)
    recipes = repo.get_all()
    if args.json:
        print(json.dumps([recipe_to_dict(recipe) for recipe in recipes], indent=2, ensure_ascii=False))
    else:
        for line in format_recipe_index(recipes):
            print(line)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    repo = _open_repository(args)
    if args.all:
        recipes = repo.get_all()
    else:
        recipes = [repo.get_at(_position(args.index))]
    for number, recipe in enumerate(recipes):
        if number:
            print()
        for line in format_recipe(recipe):
            print(line)
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    repo = _open_repository(args)
    recipe = repo.get_at(_position(args.index))
    repo.delete(recipe)
    repo.save()
    _note(args, f"Deleted {recipe.name!r} from {repo.path}")
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    repo = _open_repository(args, allow_missing=True)
    recipe = _read_document(args.document)
    repo.add(recipe)
    repo.save()
    _note(args, f"Added {recipe.name!r} to {repo.path}")
    return 0


def _cmd_edit(args: argparse.Namespace) -> int:
    repo = _open_repository(args)
    recipe = _read_document(args.document)
    repo.update(_position(args.index), recipe)
    repo.save()
    _note(args, f"Updated recipe {args.index} as {recipe.name!r} in {repo.path}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    repo = _open_repository(args)
    text = recipes_to_yaml(repo.get_all())
    if not args.output:
        sys.stdout.write(text)
        return 0
    try:
        Path(args.output).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Failed to write export: {args.output}") from exc
    _note(args, f"Exported {len(repo)} recipes to {args.output}")
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    print(config_to_toml(_resolve_cfg(args)))
    return 0


def _cmd_tui(args: argparse.Namespace) -> int:
    from .tui import run_tui

    cfg = _resolve_cfg(args)
    return run_tui(cfg)


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    return resolve_config(_cli_args_dict(args))


def _open_repository(args: argparse.Namespace, allow_missing: bool = False) -> RecipeRepository:
    cfg = _resolve_cfg(args)
    repo = RecipeRepository(cfg.recipes_file, encoding=cfg.encoding)
    if allow_missing and not repo.path.exists():
        _note(args, f"{repo.path} does not exist yet; starting empty")
        return repo
    repo.load()
    _note(args, f"Loaded {len(repo)} recipes from {repo.path}")
    return repo


def _read_document(path: str) -> Recipe:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Failed to read recipe document: {path}") from exc
    return recipe_from_yaml(text, path)


def _position(number: int) -> int:
    # Recipes are numbered from 1 on the command line.
    return number - 1


def _note(args: argparse.Namespace, message: str) -> None:
    if getattr(args, "verbose", False):
        print(message, file=sys.stderr)


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: FiledRecipesError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, StorageError):
        return 3
    if isinstance(exc, (FileFormatError, ValidationError)):
        return 4
    if isinstance(exc, (RecipeNotFoundError, RecipeIndexError)):
        return 5
    return 1
