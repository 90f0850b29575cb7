"""Lookup command - documentation of the function defined at a position."""

import click
from rich.markup import escape

from nixdoc.formatter import render
from nixdoc.indexer.core import display_path
from nixdoc.indexer.exceptions import FileReadError
from nixdoc.lookup import PositionLookup
from nixdoc.pipeline.ui import print_error
from nixdoc.search import scan_bindings
from nixdoc.utils.error_handler import handle_exceptions
from nixdoc.utils.exit_codes import ExitCodes


@click.command()
@handle_exceptions
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("line", type=click.IntRange(min=1))
@click.argument("column", type=click.IntRange(min=1), required=False)
@click.option("--raw", is_flag=True, help="Print only the function's position (file:line:column)")
@click.pass_context
def lookup(ctx, file, line, column, raw):
    """Show the documentation of the function defined at FILE:LINE.

    The position is that of the function's first parameter, as reported by
    the Nix evaluator for lambda values. Without COLUMN the first function
    starting on LINE is used.

    \b
    EXAMPLES:
      nixdoc lookup lib/lists.nix 120
      nixdoc lookup lib/lists.nix 120 11
      nixdoc lookup --raw lib/lists.nix 120

    --raw reports the position of any function binding on the line,
    documented or not."""
    shown = display_path(file)
    where = f"{shown}:{line}" + (f":{column}" if column else "")

    try:
        if raw:
            positions = [
                binding.position for binding in scan_bindings(file, shown)
                if binding.position.line == line
                and (column is None or binding.position.column == column)
            ]
            entry = None
        else:
            key = (shown, line) if column is None else (shown, line, column)
            entry = PositionLookup.for_file(file).lookup(key)
    except FileReadError as e:
        print_error(escape(f"{e.path}: {e}"))
        ctx.exit(ExitCodes.NOT_FOUND)

    if raw:
        if not positions:
            print_error(escape(f"no function defined at {where}"))
            ctx.exit(ExitCodes.NOT_FOUND)
        click.echo(str(positions[0]))
        return

    if entry is None:
        print_error(escape(f"no documented function at {where}"))
        ctx.exit(ExitCodes.NOT_FOUND)

    click.echo(render(entry))
