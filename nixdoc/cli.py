"""nixdoc CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click
from rich.table import Table

from nixdoc import __version__
from nixdoc.pipeline.ui import console


class VerboseGroup(click.Group):
    """Help system that lists registered commands by category."""

    def format_commands(self, ctx, formatter):
        """Override to suppress default command listing (we use categorized format in format_help)."""
        pass

    COMMAND_CATEGORIES = {
        "SEARCH": {
            "title": "SEARCH",
            "description": "Find documented functions across a source tree",
            "commands": ["search"],
            "command_meta": {
                "search": {
                    "use_when": "Looking for a function by name or by what it does",
                },
            },
        },
        "INTROSPECTION": {
            "title": "INTROSPECTION",
            "description": "Documentation for a single known definition",
            "commands": ["lookup"],
            "command_meta": {
                "lookup": {
                    "use_when": "You have a file:line from the evaluator or an editor",
                },
            },
        },
    }

    def format_help(self, ctx, formatter):
        """Generate Rich-styled categorized help."""
        super().format_help(ctx, formatter)

        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not name.startswith("_") and not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]", characters="-")

        for category_data in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category_data['title']}[/bold cyan]")
            console.print(f"[dim]{category_data['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="cmd", width=12)
            table.add_column("Description", style="white")
            table.add_column("Hint", style="dim", width=40)

            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                cmd = registered[cmd_name]

                first_line = (cmd.help or "").split("\n")[0].strip()
                period_idx = first_line.find(".")
                short_help = first_line[:period_idx] if period_idx > 0 else first_line

                cmd_meta = category_data.get("command_meta", {}).get(cmd_name, {})
                hint = f"USE: {cmd_meta['use_when']}" if "use_when" in cmd_meta else ""

                table.add_row(cmd_name, short_help, hint)

            console.print(table)

        console.print()
        console.rule(characters="-")
        console.print("For detailed options: [cmd]nixdoc <command> --help[/cmd]")


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="nixdoc")
@click.help_option("-h", "--help")
def cli():
    """nixdoc - search documentation of Nix functions

    \b
    QUICK START:
      nixdoc search map ~/nixpkgs/lib    # Functions mentioning "map"
      nixdoc lookup lib/lists.nix 120    # Docs of the function on that line

    \b
    For detailed options: nixdoc <command> --help"""
    pass


from nixdoc.commands.lookup import lookup
from nixdoc.commands.search import search

cli.add_command(search)
cli.add_command(lookup)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
