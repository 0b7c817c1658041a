"""Interactive full-screen table browser built on prompt_toolkit."""

from __future__ import annotations

from typing import Any

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import TextArea
from rich.console import Console, Group

from tdv_app.api import ListingService
from tdv_table.api import TabularDataView
from tdv_ui.tui.core import theme
from tdv_ui.tui.system.components.table_layout import build_footer, build_rich_table

HINT = (
    "←/→ page  +/- size  tab column  s sort  space select  "
    "a all  enter expand  / search  q quit"
)


class BrowserState:
    """Cursor state and gesture translation for the browser.

    Holds only the row and column cursors; every table change goes through
    the view's interaction methods so the listing stays the source of truth.
    """

    def __init__(self, listing: ListingService, view: TabularDataView[Any]) -> None:
        self.listing = listing
        self.view = view
        self.row_cursor = 0
        self.column_cursor = 0

    @property
    def column_ids(self) -> list[str]:
        return [col.id for col in self.view.columns]

    @property
    def current_column(self) -> str | None:
        ids = self.column_ids
        if not ids:
            return None
        return ids[self.column_cursor % len(ids)]

    @property
    def current_row(self) -> Any | None:
        rows = self.view.data
        if not rows:
            return None
        self.row_cursor = max(0, min(self.row_cursor, len(rows) - 1))
        return rows[self.row_cursor]

    def move_row(self, delta: int) -> None:
        rows = self.view.data
        if not rows:
            self.row_cursor = 0
            return
        self.row_cursor = max(0, min(self.row_cursor + delta, len(rows) - 1))

    def move_column(self, delta: int) -> None:
        ids = self.column_ids
        if ids:
            self.column_cursor = (self.column_cursor + delta) % len(ids)

    def sort_current_column(self) -> None:
        column = self.current_column
        if column is not None:
            self.view.click_header(column)
            self.row_cursor = 0

    def change_page(self, delta: int) -> None:
        if delta > 0:
            self.view.next_page()
        else:
            self.view.previous_page()
        self.row_cursor = 0

    def step_page_size(self, delta: int) -> None:
        sizes = list(self.view.page_sizes)
        current = self.view.paging_data.page_size
        idx = sizes.index(current) if current in sizes else 0
        target = max(0, min(idx + delta, len(sizes) - 1))
        if sizes and sizes[target] != current:
            self.view.change_page_size(sizes[target])
            self.row_cursor = 0

    def toggle_current_row(self) -> None:
        row = self.current_row
        if row is not None:
            self.view.toggle_row(row)

    def toggle_all(self) -> None:
        self.view.toggle_all()

    def expand_current_row(self) -> None:
        row = self.current_row
        if row is not None:
            self.view.toggle_expanded(row)

    def search(self, query: str) -> None:
        self.listing.search(self.view, query)
        self.row_cursor = 0


class TableBrowser:
    """Full-screen browser drawing the table snapshot through Rich."""

    def __init__(
        self,
        listing: ListingService,
        view: TabularDataView[Any],
        *,
        title: str = "",
    ) -> None:
        self.state = BrowserState(listing, view)
        self.title = title
        self.rich = Console(force_terminal=True, color_system="truecolor")

        self.search = TextArea(height=1, prompt="Search: ", multiline=False, style="class:search")
        self.table_control = FormattedTextControl(self._table_ansi, focusable=True)
        self.kb = self._bindings()

        root_container = HSplit(
            [
                Window(height=1, content=FormattedTextControl(self._header)),
                self.search,
                Window(height=1, char="-", style="class:separator"),
                Window(self.table_control),
                Window(height=1, content=FormattedTextControl(self._hint)),
            ]
        )
        self.app: Application[None] = Application(
            layout=Layout(root_container, focused_element=self.table_control),
            key_bindings=self.kb,
            style=Style.from_dict(dict(theme.prompt_toolkit_browser_style())),
            full_screen=True,
        )
        self.search.buffer.on_text_changed += lambda _: self._on_query_changed()

    def _header(self) -> list[tuple[str, str]]:
        selected = len(self.state.listing.selected_rows)
        return [("class:header", f"  {self.title}  ({selected} selected)")]

    def _hint(self) -> list[tuple[str, str]]:
        return [("class:hint", HINT)]

    def _table_ansi(self) -> ANSI:
        render = self.state.view.render()
        table = build_rich_table(
            render,
            console=self.rich,
            cursor_row=self.state.row_cursor,
            cursor_column=self.state.current_column,
        )
        parts: list[Any] = [table]
        if render.footer is not None:
            parts.append(build_footer(render.footer))
        with self.rich.capture() as cap:
            self.rich.print(Group(*parts))
        return ANSI(cap.get())

    def _on_query_changed(self) -> None:
        self.state.search(self.search.text)
        self.app.invalidate()

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()
        state = self.state

        table_focused = Condition(lambda: self.app.layout.has_focus(self.table_control))

        @kb.add("down")
        def _(event: Any) -> None:
            state.move_row(1)

        @kb.add("up")
        def _(event: Any) -> None:
            state.move_row(-1)

        @kb.add("right", filter=table_focused)
        def _(event: Any) -> None:
            state.change_page(1)

        @kb.add("left", filter=table_focused)
        def _(event: Any) -> None:
            state.change_page(-1)

        @kb.add("tab")
        def _(event: Any) -> None:
            state.move_column(1)

        @kb.add("s-tab")
        def _(event: Any) -> None:
            state.move_column(-1)

        @kb.add("+", filter=table_focused)
        def _(event: Any) -> None:
            state.step_page_size(1)

        @kb.add("-", filter=table_focused)
        def _(event: Any) -> None:
            state.step_page_size(-1)

        @kb.add("s", filter=table_focused)
        def _(event: Any) -> None:
            state.sort_current_column()

        @kb.add("space", filter=table_focused)
        def _(event: Any) -> None:
            state.toggle_current_row()

        @kb.add("a", filter=table_focused)
        def _(event: Any) -> None:
            state.toggle_all()

        @kb.add("enter")
        def _(event: Any) -> None:
            if table_focused():
                state.expand_current_row()
            else:
                event.app.layout.focus(self.table_control)

        @kb.add("/", filter=table_focused)
        def _(event: Any) -> None:
            event.app.layout.focus(self.search)

        @kb.add("escape")
        def _(event: Any) -> None:
            event.app.layout.focus(self.table_control)

        @kb.add("q", filter=table_focused)
        @kb.add("c-c")
        def _(event: Any) -> None:
            event.app.exit()

        return kb

    def run(self) -> None:
        self.app.run()

