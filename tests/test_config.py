from __future__ import annotations

from pathlib import Path
import pytest

from filedrecipes.config import (
    config_to_toml,
    load_global_config,
    load_profile,
    merge_config,
    resolve_config,
)
from filedrecipes.errors import ConfigError
from tests.utils import write_global_config, write_profile


def test_load_global_config_missing(temp_home: Path) -> None:
    assert load_global_config() == {}


def test_load_global_config_invalid(temp_home: Path) -> None:
    write_global_config(temp_home, "bad = ")
    with pytest.raises(ConfigError):
        load_global_config()


def test_load_profile_missing(temp_home: Path) -> None:
    with pytest.raises(ConfigError):
        load_profile("missing")


def test_profile_missing_recipes_file_key(temp_home: Path) -> None:
    write_profile(temp_home, "bad", "encoding = 'utf-8'\n")
    with pytest.raises(ConfigError):
        load_profile("bad")


def test_merge_config() -> None:
    base = {"a": 1, "tui": {"layout": "wide"}}
    profile = {"tui": {"layout": "compact"}}
    cli = {"tui": {"header_icon": "x"}}
    merged = merge_config(cli, profile, base)
    assert merged["tui"] == {"layout": "compact", "header_icon": "x"}
    assert merged["a"] == 1


def test_resolve_config_defaults(temp_home: Path) -> None:
    cfg = resolve_config({})
    assert cfg.recipes_file == "recipes.txt"
    assert cfg.encoding == "utf-8"
    assert cfg.tui.layout == "auto"
    assert cfg.profile is None


def test_resolve_config_precedence(temp_home: Path) -> None:
    write_global_config(
        temp_home,
        """
recipes_file = "/global/recipes.txt"
encoding = "latin-1"

[tui]
layout = "wide"
header_icon = "*"
""",
    )
    write_profile(temp_home, "family", "recipes_file = '/family/recipes.txt'\n[tui]\nlayout = 'compact'\n")

    cfg = resolve_config({"profile": "family", "tui_header_icon": "#"})
    assert cfg.recipes_file == "/family/recipes.txt"
    assert cfg.encoding == "latin-1"
    assert cfg.tui.layout == "compact"
    assert cfg.tui.header_icon == "#"
    assert cfg.profile == "family"

    cfg = resolve_config({"profile": "family", "recipes_file": "/cli.txt", "tui_layout": "WIDE"})
    assert cfg.recipes_file == "/cli.txt"
    assert cfg.tui.layout == "wide"


def test_resolve_config_default_profile(temp_home: Path) -> None:
    write_global_config(temp_home, "default_profile = 'work'\n")
    write_profile(temp_home, "work", "recipes_file = '/work.txt'\n")
    assert resolve_config({}).recipes_file == "/work.txt"


def test_resolve_config_unknown_encoding(temp_home: Path) -> None:
    with pytest.raises(ConfigError):
        resolve_config({"encoding": "klingon-8"})


def test_resolve_config_tui_not_table(temp_home: Path) -> None:
    write_global_config(temp_home, "tui = 'wide'\n")
    with pytest.raises(ConfigError):
        resolve_config({})


def test_config_to_toml(temp_home: Path) -> None:
    write_profile(temp_home, "family", "recipes_file = '/family/recipes.txt'\n")
    text = config_to_toml(resolve_config({"profile": "family"}))
    assert "recipes_file = '/family/recipes.txt'" in text
    assert "default_profile = 'family'" in text
    assert "[tui]" in text
