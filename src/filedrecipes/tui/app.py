from __future__ import annotations

from typing import Callable, Optional

from ..config import EffectiveConfig
from ..errors import FiledRecipesError
from ..render import format_recipe
from ..repository import RecipeRepository
from .layout import LAYOUT_CLASSES, resolve_layout_mode, status_line
from .textual import App, ComposeResult, Footer, Header, Horizontal, Label, ListItem, ListView, Static
from .theme import APP_CSS


class FiledRecipesApp(App):
    TITLE = "filedrecipes"
    CSS = APP_CSS
    BINDINGS = [
        ("d", "delete_recipe", "Delete"),
        ("s", "save", "Save"),
        ("r", "reload", "Reload"),
        ("q", "quit_app", "Quit"),
    ]

    def __init__(self, cfg: EffectiveConfig, repository: Optional[RecipeRepository] = None) -> None:
        super().__init__()
        self.cfg = cfg
        self.repository = repository or RecipeRepository(cfg.recipes_file, encoding=cfg.encoding)
        self._quit_armed = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            yield ListView(id="recipe-list")
            yield Static("", id="recipe-detail", markup=False)
        yield Static("", id="status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"{self.cfg.tui.header_icon} filedrecipes"
        self.repository.on_changed(self._on_recipes_changed)
        self._refresh_layout_mode()
        if self.repository.path.exists():
            self._attempt(self.repository.load)
        else:
            self.notify(f"{self.repository.path} does not exist yet", severity="warning")
            self._update_status()

    def on_unmount(self) -> None:
        self.repository.remove_changed_handler(self._on_recipes_changed)

    def on_resize(self, event) -> None:
        self._refresh_layout_mode()

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        self._show_selected()

    def action_delete_recipe(self) -> None:
        index = self._selected_index()
        if index is None:
            return
        self._attempt(lambda: self.repository.delete_at(index))

    def action_save(self) -> None:
        if self._attempt(self.repository.save):
            self.notify(f"Saved {len(self.repository)} recipes")
        self._update_status()

    def action_reload(self) -> None:
        self._attempt(self.repository.load)

    def action_quit_app(self) -> None:
        if self.repository.is_modified and not self._quit_armed:
            self._quit_armed = True
            self.notify("Unsaved changes: press s to save or q again to discard", severity="warning")
            return
        self.exit()

    def _on_recipes_changed(self) -> None:
        self._quit_armed = False
        list_view = self.query_one("#recipe-list", ListView)
        previous = list_view.index
        list_view.clear()
        recipes = self.repository.get_all()
        list_view.extend(ListItem(Label(recipe.name, markup=False)) for recipe in recipes)
        self.call_after_refresh(self._restore_selection, previous)
        self._update_status()

    def _restore_selection(self, previous: Optional[int]) -> None:
        list_view = self.query_one("#recipe-list", ListView)
        count = len(self.repository)
        list_view.index = min(previous or 0, count - 1) if count else None
        self._show_selected()

    def _show_selected(self) -> None:
        detail = self.query_one("#recipe-detail", Static)
        index = self._selected_index()
        if index is None:
            detail.update("")
            return
        detail.update("\n".join(format_recipe(self.repository.get_at(index))))

    def _selected_index(self) -> Optional[int]:
        index = self.query_one("#recipe-list", ListView).index
        if index is None or not 0 <= index < len(self.repository):
            return None
        return index

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(
            status_line(self.repository.path, len(self.repository), self.repository.is_modified)
        )

    def _attempt(self, operation: Callable[[], None]) -> bool:
        try:
            operation()
        except FiledRecipesError as exc:
            self.notify(str(exc), severity="error")
            return False
        return True

    def _refresh_layout_mode(self) -> None:
        size = getattr(self, "size", None)
        width = int(getattr(size, "width", 0) or 0)
        mode = resolve_layout_mode(width, self.cfg.tui.layout)
        for class_name in LAYOUT_CLASSES:
            self.set_class(class_name == f"layout-{mode}", class_name)
