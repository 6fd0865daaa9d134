"""CLI for the pocketcalc calculator.

Usage:
    python -m pocketcalc keys                 # Show supported keys
    python -m pocketcalc press 5 + 3 =        # Press keys, print the display
    python -m pocketcalc press "9/0=" --trace # Show state after every key
    python -m pocketcalc repl                 # Interactive keypad
"""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from pocketcalc.display import Display, DisplayOptions, render_display, render_trace
from pocketcalc.keypad import KEY_TABLE, Keypad, tokenize

app = typer.Typer(
    name="pocketcalc",
    help="Four-function pocket calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("q", "quit", "exit")


def _display_options(grouping: Optional[bool]) -> DisplayOptions:
    """Environment settings, with an explicit --grouping/--no-grouping winning."""
    options = DisplayOptions.from_env()
    if grouping is not None:
        options.group_digits = grouping
    return options


@app.command("keys")
def cmd_keys() -> None:
    """Show the supported keys."""
    table = Table(title="Keys", show_header=True, header_style="bold")
    table.add_column("Key", style="green", min_width=8)
    table.add_column("Action", min_width=10)
    table.add_column("Description", min_width=30)

    for label, action, description in KEY_TABLE:
        table.add_row(label, action.value, description)

    console.print()
    console.print(table)
    console.print()


@app.command("press")
def cmd_press(
    keys: List[str] = typer.Argument(help="Keys to press, e.g. 5 + 3 = or '12.5*2='"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the state after every key"),
    grouping: Optional[bool] = typer.Option(None, "--grouping/--no-grouping", help="Group digits in thousands"),
) -> None:
    """Press a sequence of keys and print the resulting display."""
    options = _display_options(grouping)
    try:
        labels = [label for chunk in keys for label in tokenize(chunk)]
        keypad = Keypad()
        steps = keypad.press_all(labels)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if trace:
        render_trace(steps, console, options)

    typer.echo(Display.from_engine(keypad.engine, options).line)


@app.command("repl")
def cmd_repl(
    grouping: Optional[bool] = typer.Option(None, "--grouping/--no-grouping", help="Group digits in thousands"),
) -> None:
    """Interactive keypad: type keys, see the display after each line."""
    options = _display_options(grouping)
    keypad = Keypad()
    console.print("[dim]Type keys (e.g. 5+3=), 'q' to quit.[/dim]")
    render_display(Display.from_engine(keypad.engine, options), console)

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        try:
            keypad.press_all(tokenize(line))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            continue
        render_display(Display.from_engine(keypad.engine, options), console)


if __name__ == "__main__":
    app()
