from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer

from tdv_app.api import ListingService, export_rows_csv, load_rows
from tdv_common.errors import TDVError
from tdv_table.api import OnSortParam, SortOrder, TabularDataView, page_count
from tdv_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)


def _parse_order(order: Optional[str]) -> SortOrder:
    if order is None:
        return SortOrder.ASC
    try:
        return SortOrder(order.lower())
    except ValueError:
        raise typer.BadParameter("order must be 'asc' or 'desc'") from None


def _build_listing(ctx: UIContext, data_file: Path, config: Optional[Path]) -> ListingService:
    cfg = ctx.config_service.load_config(config)
    rows = load_rows(data_file)
    return ListingService(rows, cfg)


def _apply_query(
    listing: ListingService,
    *,
    query: Optional[str],
    sort: Optional[str],
    order: Optional[str],
) -> None:
    if query:
        listing.handle_search_change(query)
    if sort:
        listing.handle_sort(OnSortParam(key=sort, order=_parse_order(order)))


def _fail(ctx: UIContext, exc: TDVError) -> typer.Exit:
    logger.debug("Command failed: %s", exc.to_dict())
    ctx.ui.present.error(str(exc))
    return typer.Exit(1)


def _rows_matching(view: TabularDataView[Any], ids: List[str]) -> list[Any]:
    wanted = set(ids)
    return [row for row in view.data if str(view.row_id(row)) in wanted]


def register_table_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register show/browse/export on the given Typer app."""

    @app.command("show")
    def show(
        data_file: Path = typer.Argument(..., help="JSON, YAML or CSV file with records."),
        config: Optional[Path] = typer.Option(
            None, "--config", "-c", help="Table config file (YAML or JSON)."
        ),
        page: int = typer.Option(1, "--page", "-p", min=1, help="Page to display."),
        page_size: Optional[int] = typer.Option(
            None, "--page-size", "-n", min=1, help="Rows per page."
        ),
        sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Column key to sort by."),
        order: Optional[str] = typer.Option(None, "--order", "-o", help="asc or desc."),
        query: Optional[str] = typer.Option(None, "--query", "-q", help="Search query."),
        select: Optional[List[str]] = typer.Option(
            None, "--select", help="Row id to mark selected (repeatable)."
        ),
        select_all: bool = typer.Option(False, "--select-all", help="Select every row on the page."),
        expand: Optional[List[str]] = typer.Option(
            None, "--expand", "-e", help="Row id to expand (repeatable)."
        ),
    ) -> None:
        """Render one page of a data file."""
        try:
            listing = _build_listing(ctx, data_file, config)
        except TDVError as exc:
            raise _fail(ctx, exc) from exc
        _apply_query(listing, query=query, sort=sort, order=order)
        if page_size is not None:
            listing.handle_select_change(page_size)
        count = page_count(listing.page().total, listing.state.page_size)
        if count and page > count:
            ctx.ui.present.warning(f"Page {page} is past the last page; showing page {count}")
            page = count
        listing.handle_pagination_change(page)

        view = listing.build_view()
        if select_all:
            view.toggle_all(True)
        for row in _rows_matching(view, select or []):
            view.toggle_row(row, True)
        for row in _rows_matching(view, expand or []):
            view.toggle_expanded(row)

        ctx.ui.tables.show(view.render(), title=listing.config.title)
        if listing.selected_rows:
            ctx.ui.present.info(f"{len(listing.selected_rows)} row(s) selected")

    @app.command("browse")
    def browse(
        data_file: Path = typer.Argument(..., help="JSON, YAML or CSV file with records."),
        config: Optional[Path] = typer.Option(
            None, "--config", "-c", help="Table config file (YAML or JSON)."
        ),
    ) -> None:
        """Browse a data file interactively."""
        if ctx.headless:
            ctx.ui.present.error("`tdv browse` needs an interactive terminal; use `tdv show`.")
            raise typer.Exit(1)
        try:
            listing = _build_listing(ctx, data_file, config)
        except TDVError as exc:
            raise _fail(ctx, exc) from exc

        from tdv_ui.tui.screens.browser_screen import TableBrowser

        view = listing.build_view()
        TableBrowser(listing, view, title=listing.config.title).run()
        if listing.selected_rows:
            ids = ", ".join(str(listing.row_id(row)) for row in listing.selected_rows)
            ctx.ui.present.info(f"Selected: {ids}")

    @app.command("export")
    def export(
        data_file: Path = typer.Argument(..., help="JSON, YAML or CSV file with records."),
        out: Path = typer.Option(..., "--out", help="Destination CSV file."),
        config: Optional[Path] = typer.Option(
            None, "--config", "-c", help="Table config file (YAML or JSON)."
        ),
        sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Column key to sort by."),
        order: Optional[str] = typer.Option(None, "--order", "-o", help="asc or desc."),
        query: Optional[str] = typer.Option(None, "--query", "-q", help="Search query."),
    ) -> None:
        """Export every matching row (all pages) to CSV."""
        try:
            listing = _build_listing(ctx, data_file, config)
            _apply_query(listing, query=query, sort=sort, order=order)
            count = export_rows_csv(listing.filtered(), listing.columns, out)
        except TDVError as exc:
            raise _fail(ctx, exc) from exc
        ctx.ui.present.success(f"Exported {count} row(s) to {out}")
