from typing import List

from rich.console import Console as RichConsole
from rich.table import Table

from input_console.console.console import Console


def describe(console: Console, name: str) -> str:
    handler = console.commands.get(name)
    doc = (handler.__doc__ or "").strip() if handler else ""
    return doc.splitlines()[0] if doc else "No description available"


def render_help(console: Console, width: int = 80) -> str:
    """Render the registered commands as a table with ANSI styling."""
    table = Table(title="Available Commands", title_justify="left", box=None)
    table.add_column("Command", style="bold green", no_wrap=True)
    table.add_column("Description", style="dim")
    for name in sorted(console.commands.names()):
        table.add_row(name, describe(console, name))

    rich_console = RichConsole(
        width=width, force_terminal=True, color_system="standard"
    )
    with rich_console.capture() as capture:
        rich_console.print(table)
    return capture.get()


def register_builtin_commands(console: Console) -> None:
    """Register the commands every interactive session gets."""

    def cmd_help(args: List[str]) -> None:
        """Show the available commands."""
        console.write("%s", render_help(console))

    def cmd_echo(args: List[str]) -> None:
        """Print the arguments back."""
        console.write("%s", " ".join(args))

    console.register_command("help", cmd_help)
    console.register_command("echo", cmd_echo)
