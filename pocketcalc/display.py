"""Display formatting and Rich rendering for pocketcalc.

Turns engine state into the two-line readout of a pocket calculator — the
pending "previous operand + operator" line above the operand being entered —
with thousands grouping on the integer part. Also renders a step trace table
for the CLI.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pocketcalc.models import DECIMAL_SEPARATOR, ERROR, CalculatorState

if TYPE_CHECKING:
    from pocketcalc.engine import CalculatorEngine
    from pocketcalc.keypad import TraceStep

_INTEGER_RE = re.compile(r"^-?\d+$")
_FALSY = ("0", "false", "no", "off")


@dataclass
class DisplayOptions:
    """How operands are formatted for display."""

    group_digits: bool = True
    separator: str = ","

    @classmethod
    def from_env(cls) -> DisplayOptions:
        """Read POCKETCALC_GROUPING / POCKETCALC_SEPARATOR, falling back to defaults."""
        grouping = os.environ.get("POCKETCALC_GROUPING", "1").strip().lower()
        separator = os.environ.get("POCKETCALC_SEPARATOR", ",")
        return cls(group_digits=grouping not in _FALSY, separator=separator)


def format_number(text: str, group_digits: bool = True, separator: str = ",") -> str:
    """Format an operand for display.

    The integer part is grouped in thousands; the fractional part is kept
    exactly as typed so trailing zeros and a trailing separator stay visible
    while the user is still typing.

    Examples:
        "1234567.50" → "1,234,567.50", "12." → "12.", ".5" → ".5"
    """
    if text == ERROR:
        return ERROR
    integer_part, dot, fraction = text.partition(DECIMAL_SEPARATOR)

    if _INTEGER_RE.match(integer_part):
        value = int(integer_part)
        integer_display = f"{value:,}".replace(",", separator) if group_digits else str(value)
        if integer_part.startswith("-") and value == 0:
            integer_display = "-" + integer_display
    elif integer_part in ("", "-"):
        integer_display = ""
    else:
        # Exponent forms (1e+21) and inf are shown as computed
        return text

    return f"{integer_display}{dot}{fraction}"


@dataclass
class Display:
    """The two text lines shown to the user."""

    previous: str
    current: str
    awaiting_operand: bool = False

    @property
    def line(self) -> str:
        """Both lines joined, the way display_text() lays them out."""
        if not self.previous:
            return self.current
        if self.awaiting_operand:
            return self.previous
        return f"{self.previous} {self.current}"

    @classmethod
    def from_state(cls, state: CalculatorState, options: Optional[DisplayOptions] = None) -> Display:
        opts = options or DisplayOptions()

        def fmt(text: str) -> str:
            return format_number(text, opts.group_digits, opts.separator)

        current = fmt(state.current_operand or "0")
        previous = ""
        if state.pending_operator is not None:
            previous = f"{fmt(state.previous_operand)} {state.pending_operator.symbol}"
        awaiting = state.pending_operator is not None and state.current_operand == ""
        return cls(previous=previous, current=current, awaiting_operand=awaiting)

    @classmethod
    def from_engine(cls, engine: CalculatorEngine, options: Optional[DisplayOptions] = None) -> Display:
        return cls.from_state(engine.state, options)


def render_display(display: Display, console: Console) -> None:
    """Render the display as a right-aligned panel."""
    body = Text(justify="right")
    body.append(display.previous or " ", style="dim")
    body.append("\n")
    style = "bold red" if display.current == ERROR else "bold"
    body.append(display.current, style=style)
    console.print(Panel(body, width=32))


def render_trace(steps: list[TraceStep], console: Console, options: Optional[DisplayOptions] = None) -> None:
    """Render a Rich table with one row per key press."""
    opts = options or DisplayOptions()
    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="green")
    table.add_column("Action")
    table.add_column("Previous", justify="right")
    table.add_column("Op", justify="center")
    table.add_column("Current", justify="right")
    table.add_column("Display", justify="right", style="bold")

    for i, step in enumerate(steps, start=1):
        state = step.state
        op = state.pending_operator.symbol if state.pending_operator else ""
        current = format_number(state.current_operand, opts.group_digits, opts.separator)
        if state.current_operand == ERROR:
            current = f"[red]{current}[/red]"
        table.add_row(
            str(i),
            step.key.label,
            step.key.action.value,
            format_number(state.previous_operand, opts.group_digits, opts.separator) or "--",
            op or "--",
            current or "--",
            Display.from_state(state, opts).line,
        )

    console.print()
    console.print(table)
    console.print()
