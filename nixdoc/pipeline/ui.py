"""Central UI handler for nixdoc.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from nixdoc.pipeline.ui import console, err_console, print_warning

    console.print("[signature]add = a: b: ...[/signature]")
    print_warning("Could not read lib/broken.nix")
"""

from rich.console import Console
from rich.theme import Theme

NIXDOC_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "signature": "bold white",
    "location": "dim",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Report output - import this, don't create your own
console = Console(
    theme=NIXDOC_THEME,
    soft_wrap=True,
    highlight=False,
)

# Diagnostics (warnings, summaries) never share stdout with the report
err_console = Console(
    theme=NIXDOC_THEME,
    stderr=True,
    soft_wrap=True,
    highlight=False,
)


def print_error(msg: str) -> None:
    """Print an error message in red to stderr."""
    err_console.print(f"[error]ERROR:[/error] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message in yellow to stderr."""
    err_console.print(f"[warning]WARNING:[/warning] {msg}")


def forced_color_console() -> Console:
    """Stdout console that styles output even when it is piped (--color)."""
    return Console(
        theme=NIXDOC_THEME,
        force_terminal=True,
        soft_wrap=True,
        highlight=False,
    )
