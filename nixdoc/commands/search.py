"""Search command - find documented Nix functions by pattern."""

import os
import re
import sys

import click
from rich.markup import escape
from rich.text import Text

from nixdoc.config_runtime import get_config_value, load_runtime_config
from nixdoc.formatter import indented, location_line, render_report, separator
from nixdoc.indexer.exceptions import PatternCompileError, RootAccessError
from nixdoc.models import SearchResult
from nixdoc.pipeline.ui import console, err_console, forced_color_console, print_error, print_warning
from nixdoc.search import compile_pattern, search_text
from nixdoc.utils.error_handler import handle_exceptions
from nixdoc.utils.exit_codes import ExitCodes


def _print_colored(result: SearchResult, indent: int, width: int) -> None:
    """Print the report with the signature highlighted."""
    out = console if console.is_terminal else forced_color_console()
    for index, entry in enumerate(result):
        if index:
            out.print(Text(separator(width), style="dim"))
        out.print(Text(indented(entry.dedented_text, indent)))
        out.print(Text(entry.signature_snippet, style="signature"))
        out.print(Text(location_line(entry), style="location"))


def _summary(result: SearchResult) -> str:
    """One-line match summary, with walk statistics that are non-zero."""
    walk = result.walk_stats
    details = [
        f"{result.files_scanned} scanned",
        f"{walk.get('directories', 0)} directories",
    ]
    for key, label in (('skipped_dirs', "skipped"), ('revisited_dirs', "revisited"),
                       ('unreadable_dirs', "unreadable")):
        if walk.get(key):
            details.append(f"{walk[key]} {label}")
    return (
        f"[info]{len(result)}[/info] matches in [info]{result.files_matched}[/info] files "
        f"([dim]{', '.join(details)}[/dim])"
    )


def _print_report(result: SearchResult, indent: int, width: int, color: bool) -> None:
    if not result.entries:
        return
    if color:
        _print_colored(result, indent, width)
    else:
        click.echo(render_report(result.entries, indent, width))


@click.command()
@handle_exceptions
@click.argument("pattern")
@click.argument("directory", default=".", type=click.Path())
@click.option("-i", "--ignore-case", is_flag=True, help="Case-insensitive matching")
@click.option("--names-only", is_flag=True, help="Match function names only, not documentation text")
@click.option("--workers", type=int, default=None, help="Worker threads (default from config: 4)")
@click.option("--color/--no-color", default=None, help="Highlight signatures (default: when stdout is a terminal)")
@click.option("--stats", is_flag=True, help="Print a match summary to stderr")
@click.pass_context
def search(ctx, pattern, directory, ignore_case, names_only, workers, color, stats):
    """Search documentation of Nix functions under DIRECTORY.

    PATTERN is a regular expression matched anywhere in each documented
    function's name or documentation. DIRECTORY defaults to the current
    directory; every .nix file below it is scanned.

    \b
    A function is documented when a comment sits directly above its
    definition, with no blank line in between:
      # Adds two numbers.
      add = a: b: a + b;

    \b
    EXAMPLES:
      nixdoc search add ~/nixpkgs/lib
      nixdoc search -i 'attr(set|s)' .
      nixdoc search --names-only '^map'

    \b
    EXIT CODES:
      0  search completed (also with zero matches)
      2  invalid PATTERN
      3  DIRECTORY missing or unreadable"""
    try:
        compiled = compile_pattern(pattern, re.IGNORECASE if ignore_case else 0)
    except PatternCompileError as e:
        print_error(escape(f"invalid pattern {e.pattern!r}: {e.reason}"))
        ctx.exit(ExitCodes.PATTERN_ERROR)

    config = load_runtime_config(directory)
    try:
        result = search_text(compiled, directory, config=config, workers=workers, names_only=names_only)
    except RootAccessError as e:
        print_error(escape(f"{e.path}: {e}"))
        ctx.exit(ExitCodes.ROOT_UNREADABLE)

    if color is None:
        color = console.is_terminal
    indent = get_config_value(config, "report", "doc_indent")
    width = get_config_value(config, "report", "separator_width")

    try:
        _print_report(result, indent, width, color)
        sys.stdout.flush()
    except BrokenPipeError:
        # Reader went away; silence the interpreter's own flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        ctx.exit(ExitCodes.SUCCESS)

    for warning in result.warnings:
        print_warning(escape(str(warning)))

    if stats:
        err_console.print(_summary(result))
