from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any, Optional

from .errors import ConfigError


DEFAULT_RECIPES_FILE = "recipes.txt"
DEFAULT_ENCODING = "utf-8"
DEFAULT_HEADER_ICON = "🍲"


@dataclass(frozen=True)
class TuiConfig:
    header_icon: str = DEFAULT_HEADER_ICON
    layout: str = "auto"


@dataclass(frozen=True)
class EffectiveConfig:
    recipes_file: str
    encoding: str
    tui: TuiConfig
    profile: Optional[str] = None


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/filedrecipes"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_profile(profile: str) -> dict[str, Any]:
    path = _config_root() / "profiles.d" / f"{profile}.toml"
    if not path.exists():
        raise ConfigError(f"Unknown profile {profile!r}: {path} does not exist")
    data = _load_toml(path)
    if not data.get("recipes_file"):
        raise ConfigError(f"Profile {profile!r} missing 'recipes_file' key")
    return data


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], profile: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, profile)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    profile = cli_args.get("profile") or global_cfg.get("default_profile")
    profile_cfg = load_profile(str(profile)) if profile else {}

    merged = merge_config(_cli_to_dict(cli_args), profile_cfg, global_cfg)

    recipes_file = str(merged.get("recipes_file") or DEFAULT_RECIPES_FILE)
    encoding = str(merged.get("encoding") or DEFAULT_ENCODING)
    _check_encoding(encoding)
    tui_cfg = merged.get("tui", {})
    if not isinstance(tui_cfg, dict):
        raise ConfigError("'tui' must be a table")

    return EffectiveConfig(
        recipes_file=recipes_file,
        encoding=encoding,
        tui=TuiConfig(
            header_icon=str(tui_cfg.get("header_icon", DEFAULT_HEADER_ICON)),
            layout=_normalize_tui_layout(tui_cfg.get("layout", "auto")),
        ),
        profile=None if not profile else str(profile),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("recipes_file", "encoding"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]

    tui: dict[str, Any] = {}
    for key in ("header_icon", "layout"):
        value = cli_args.get(f"tui_{key}")
        if value is not None:
            tui[key] = value
    if tui:
        out["tui"] = tui
    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"recipes_file = {cfg.recipes_file!r}",
        f"encoding = {cfg.encoding!r}",
    ]
    if cfg.profile:
        lines.append(f"default_profile = {cfg.profile!r}")
    lines.append("")
    lines.append("[tui]")
    lines.append(f"header_icon = {cfg.tui.header_icon!r}")
    lines.append(f"layout = {cfg.tui.layout!r}")
    return "\n".join(lines) + "\n"


def _check_encoding(encoding: str) -> None:
    try:
        "".encode(encoding)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding: {encoding!r}") from exc


def _normalize_tui_layout(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"auto", "compact", "wide"}:
        return text
    return "auto"
