from __future__ import annotations

from ..config import EffectiveConfig
from .app import FiledRecipesApp


def run_tui(cfg: EffectiveConfig) -> int:
    app = FiledRecipesApp(cfg)
    app.run()
    return 0


__all__ = ["run_tui", "FiledRecipesApp"]
