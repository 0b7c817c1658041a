"""
Command-line interface for tabular-data-view.

Renders paginated, sortable, selectable tables from JSON, YAML or CSV files.
"""

from __future__ import annotations

import typer

from tdv_ui.cli.commands.table import register_table_commands
from tdv_ui.wiring.dependencies import UIContext, configure_logging

ctx_store = UIContext()

app = typer.Typer(help="Browse tabular records page by page.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Record output instead of drawing it (useful in CI).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(debug=debug, force=True)
    ctx_store.headless = headless
    ctx_store.debug = debug

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_table_commands(app, ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
