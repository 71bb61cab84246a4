from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SAMPLE_RECIPES = """[Recept]
Tea
[Ingredienser]
1;cup;water
1;bag;black tea
[Instruktioner]
Boil water.
Steep the tea for 3 minutes.

[Recept]
Pancakes
[Ingredienser]
3;dl;flour
6;dl;milk
3;;eggs
[Instruktioner]
Whisk everything together.
Fry thin pancakes in butter.
"""


@pytest.fixture()
def recipes_file(tmp_path: Path) -> Path:
    path = tmp_path / "recipes.txt"
    path.write_text(SAMPLE_RECIPES, encoding="utf-8")
    return path


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
