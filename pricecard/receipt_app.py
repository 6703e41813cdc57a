"""Main Textual app class."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from pricecard.bootstrap import ExpiringFlag, Mode, SyncController
from pricecard.config import COPIED_FLASH_SECONDS
from pricecard.config_store import ConfigStore, SetKind, SetName, SetPercent, SetPrice
from pricecard.models import AppData, ItemKind
from pricecard.pricing import calculate
from pricecard.prompt_modal import ConfirmModal, TextPromptModal
from pricecard.receipt import format_number, format_receipt, should_show_receipt
from pricecard.rendering import (
    format_category_title,
    format_item_row,
    format_modifier_row,
    format_share_link,
    format_total,
)
from pricecard.selection import SelectionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CursorRow:
    """One selectable line of the menu pane."""

    kind: str
    target_id: str
    cat_id: str = ""


CATEGORY_ROW = "category"
ITEM_ROW = "item"
MODIFIER_ROW = "modifier"


class PriceCardApp(App):
    """Edit a priced menu, or pick from it and copy a quote."""

    TITLE = "Price Card"

    CSS = """
    Screen {
        layout: vertical;
    }

    #menu-pane {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    #menu-list {
        height: 1fr;
    }

    #footer-pane {
        height: auto;
        max-height: 14;
        border: round $secondary;
        padding: 0 1;
    }

    #status-bar {
        color: $text-muted;
    }
    """

    cursor_index = reactive(0)

    BINDINGS = [
        Binding("tab", "toggle_mode", "Edit/View", priority=True),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("up", "move_cursor(-1)", "Previous"),
        ("enter", "activate", "Select/Rename"),
        ("space", "activate", "Select"),
        ("plus,right", "adjust(1)", "More"),
        ("minus,left", "adjust(-1)", "Less"),
        ("c", "copy", "Copy"),
        ("a", "add_item", "Add item"),
        ("n", "add_category", "Add category"),
        ("m", "add_modifier", "Add modifier"),
        ("p", "edit_number", "Price/percent"),
        ("t", "toggle_kind", "Toggle/counter"),
        ("d", "delete", "Delete"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, controller: SyncController, force_edit: bool = False) -> None:
        super().__init__()
        self.controller = controller
        self.force_edit = force_edit
        self.ui_mode = Mode.EDIT
        self.share_url = ""
        self.config_store = ConfigStore(on_change=self._on_config_change)
        self.selection = SelectionStore()
        self.copied = ExpiringFlag(COPIED_FLASH_SECONDS)
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="menu-pane"):
            yield Static(id="menu-list")
        with Vertical(id="footer-pane"):
            yield Static(id="footer")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        boot = self.controller.bootstrap()
        self.ui_mode = Mode.EDIT if self.force_edit else boot.mode
        self.share_url = boot.share_url
        self.system_status = f"Loaded from {boot.source}"
        self.config_store.load(boot.data)
        self.cursor_index = 0
        self._refresh_all()

    @property
    def data(self) -> AppData:
        return self.config_store.data

    @property
    def editing(self) -> bool:
        return self.ui_mode is Mode.EDIT

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def _on_config_change(self, data: AppData) -> None:
        share_url = self.controller.sync(data, self.ui_mode)
        if share_url is not None:
            self.share_url = share_url
        self._refresh_all()

    # --- Rows ---

    def _rows(self) -> list[CursorRow]:
        rows: list[CursorRow] = []
        for category in self.data.categories:
            if self.editing:
                rows.append(CursorRow(CATEGORY_ROW, category.id, category.id))
            rows.extend(CursorRow(ITEM_ROW, item.id, category.id) for item in category.items)
        rows.extend(CursorRow(MODIFIER_ROW, mod.id) for mod in self.data.modifiers)
        return rows

    def _current_row(self) -> CursorRow | None:
        rows = self._rows()
        if not rows:
            return None
        if self.cursor_index >= len(rows):
            self.cursor_index = len(rows) - 1
        return rows[self.cursor_index]

    def _find_item(self, row: CursorRow):
        category = self.data.find_category(row.cat_id)
        if category is None:
            return None
        for item in category.items:
            if item.id == row.target_id:
                return item
        return None

    def _find_modifier(self, mod_id: str):
        for modifier in self.data.modifiers:
            if modifier.id == mod_id:
                return modifier
        return None

    def _move_cursor_to(self, row: CursorRow) -> None:
        rows = self._rows()
        if row in rows:
            self.cursor_index = rows.index(row)

    # --- Shared actions ---

    def action_toggle_mode(self) -> None:
        if self._modal_open():
            return
        self.ui_mode = Mode.VIEW if self.editing else Mode.EDIT
        self.cursor_index = 0
        logger.debug("toggle_mode mode=%s", self.ui_mode.value)
        if self.editing:
            share_url = self.controller.sync(self.data, self.ui_mode)
            if share_url is not None:
                self.share_url = share_url
        self._refresh_all()

    def action_move_cursor(self, delta: int) -> None:
        if self._modal_open():
            return
        rows = self._rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_menu()

    def action_activate(self) -> None:
        if self._modal_open():
            return
        row = self._current_row()
        if row is None:
            return
        if self.editing:
            self._prompt_rename(row)
            return

        if row.kind == ITEM_ROW:
            item = self._find_item(row)
            if item is not None:
                self.selection.set_quantity(item.id, item.kind, 1)
        elif row.kind == MODIFIER_ROW:
            self.selection.toggle_modifier(row.target_id)
        self._refresh_all()

    def action_adjust(self, delta: int) -> None:
        if self._modal_open() or self.editing:
            return
        row = self._current_row()
        if row is None or row.kind != ITEM_ROW:
            return
        item = self._find_item(row)
        if item is None or item.kind is not ItemKind.COUNTER:
            return
        self.selection.set_quantity(item.id, item.kind, delta)
        self._refresh_all()

    def action_copy(self) -> None:
        if self._modal_open():
            return
        if self.editing:
            if not self.controller.environment_safe:
                self.system_status = "Sharing needs a deployed page address"
                self._refresh_footer()
                return
            if not self.share_url:
                self.system_status = "Share link unavailable"
                self._refresh_footer()
                return
            self._copy_text(self.share_url)
            return

        quote = calculate(self.data, self.selection.cart, self.selection.active_modifiers)
        if not should_show_receipt(quote, self.selection.active_modifiers):
            return
        self._copy_text(format_receipt(self.data, self.selection.cart, self.selection.active_modifiers))

    def _copy_text(self, text: str) -> None:
        self.copy_to_clipboard(text)
        self.copied.set()
        self.set_timer(COPIED_FLASH_SECONDS, self._refresh_footer)
        self._refresh_footer()

    # --- Edit actions ---

    def action_add_category(self) -> None:
        if self._modal_open() or not self.editing:
            return
        self.config_store.add_category()
        added = self.data.categories[-1]
        self._move_cursor_to(CursorRow(CATEGORY_ROW, added.id, added.id))
        self._refresh_menu()

    def action_add_item(self) -> None:
        if self._modal_open() or not self.editing:
            return
        row = self._current_row()
        if row is None or row.kind == MODIFIER_ROW:
            return
        self.config_store.add_item(row.cat_id)
        category = self.data.find_category(row.cat_id)
        if category is not None and category.items:
            self._move_cursor_to(CursorRow(ITEM_ROW, category.items[-1].id, category.id))
            self._refresh_menu()

    def action_add_modifier(self) -> None:
        if self._modal_open() or not self.editing:
            return
        self.config_store.add_modifier()
        self._move_cursor_to(CursorRow(MODIFIER_ROW, self.data.modifiers[-1].id))
        self._refresh_menu()

    def action_toggle_kind(self) -> None:
        if self._modal_open() or not self.editing:
            return
        row = self._current_row()
        if row is None or row.kind != ITEM_ROW:
            return
        item = self._find_item(row)
        if item is None:
            return
        new_kind = ItemKind.COUNTER if item.kind is ItemKind.TOGGLE else ItemKind.TOGGLE
        self.config_store.update_item(row.cat_id, item.id, SetKind(new_kind))

    def action_edit_number(self) -> None:
        if self._modal_open() or not self.editing:
            return
        row = self._current_row()
        if row is None:
            return

        if row.kind == ITEM_ROW:
            item = self._find_item(row)
            if item is None:
                return

            def set_price(value: str | None) -> None:
                if value is not None:
                    self.config_store.update_item(row.cat_id, row.target_id, SetPrice(value))

            self.push_screen(TextPromptModal("Price", format_number(item.price), numeric=True), set_price)
        elif row.kind == MODIFIER_ROW:
            modifier = self._find_modifier(row.target_id)
            if modifier is None:
                return

            def set_percent(value: str | None) -> None:
                if value is not None:
                    self.config_store.update_modifier(row.target_id, SetPercent(value))

            self.push_screen(TextPromptModal("Percent", format_number(modifier.percent), numeric=True), set_percent)

    def action_delete(self) -> None:
        if self._modal_open() or not self.editing:
            return
        row = self._current_row()
        if row is None:
            return

        if row.kind == CATEGORY_ROW:
            category = self.data.find_category(row.cat_id)
            if category is None:
                return

            def confirmed(answer: bool | None) -> None:
                if answer:
                    self.config_store.remove_category(row.cat_id)
                    logger.info("remove_category id=%s", row.cat_id)

            self.push_screen(ConfirmModal(f"Delete '{category.title}' and all its items?"), confirmed)
        elif row.kind == ITEM_ROW:
            self.config_store.remove_item(row.cat_id, row.target_id)
        else:
            self.config_store.remove_modifier(row.target_id)

    def _prompt_rename(self, row: CursorRow) -> None:
        if row.kind == CATEGORY_ROW:
            category = self.data.find_category(row.cat_id)
            if category is None:
                return

            def rename(value: str | None) -> None:
                if value is not None:
                    self.config_store.rename_category(row.cat_id, value)

            self.push_screen(TextPromptModal("Category title", category.title), rename)
        elif row.kind == ITEM_ROW:
            item = self._find_item(row)
            if item is None:
                return

            def rename_item(value: str | None) -> None:
                if value is not None:
                    self.config_store.update_item(row.cat_id, row.target_id, SetName(value))

            self.push_screen(TextPromptModal("Item name", item.name), rename_item)
        else:
            modifier = self._find_modifier(row.target_id)
            if modifier is None:
                return

            def rename_modifier(value: str | None) -> None:
                if value is not None:
                    self.config_store.update_modifier(row.target_id, SetName(value))

            self.push_screen(TextPromptModal("Modifier name", modifier.name), rename_modifier)

    # --- Rendering ---

    def _refresh_all(self) -> None:
        self.sub_title = "Menu editor" if self.editing else "Quote"
        self._refresh_menu()
        self._refresh_footer()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 12
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _menu_lines(self) -> list[Text]:
        """Render every line of the menu pane, marking the cursor row."""
        rows = self._rows()
        current = rows[self.cursor_index] if 0 <= self.cursor_index < len(rows) else None
        lines: list[Text] = []

        def pointer(row: CursorRow) -> str:
            return "➤ " if row == current else "  "

        for category in self.data.categories:
            header = CursorRow(CATEGORY_ROW, category.id, category.id)
            lines.append(format_category_title(category, pointer(header) if self.editing else ""))
            for item in category.items:
                row = CursorRow(ITEM_ROW, item.id, category.id)
                lines.append(format_item_row(item, self.selection.quantity(item.id), pointer(row), self.editing))

        if self.data.modifiers:
            lines.append(Text("Discounts & fees", style="bold underline"))
        for modifier in self.data.modifiers:
            row = CursorRow(MODIFIER_ROW, modifier.id)
            active = modifier.id in self.selection.active_modifiers
            lines.append(format_modifier_row(modifier, active, pointer(row), self.editing))
        return lines

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return

        lines = self._menu_lines()
        if not lines:
            menu_widget.update("(empty menu)")
            return

        selected_line = next((idx for idx, line in enumerate(lines) if line.plain.startswith("➤")), None)
        start, end = self._window_bounds(len(lines), self._visible_rows(menu_widget), selected_line)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            text.append_text(lines[idx])
        if end < len(lines):
            text.append("\n⋮", style="dim")
        menu_widget.update(text)

    def _refresh_footer(self) -> None:
        try:
            footer = self.query_one("#footer", Static)
            status_bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return

        copied = self.copied.active
        if self.editing:
            footer.update(format_share_link(self.share_url, self.controller.environment_safe, copied))
            status_bar.update(self.system_status or "Tab: preview as customer")
            return

        cart = self.selection.cart
        active = self.selection.active_modifiers
        quote = calculate(self.data, cart, active)
        text = format_total(quote)
        text.append("\n\n")
        if should_show_receipt(quote, active):
            text.append(format_receipt(self.data, cart, active))
        else:
            text.append("Nothing selected yet...", style="italic dim")
        footer.update(text)
        status_bar.update("Copied!" if copied else "C: copy quote  Tab: back to editor")
