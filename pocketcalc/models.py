"""Data models for the pocketcalc engine.

Operator enum, CalculatorState and the Error sentinel — the typed structures
that flow through engine → display → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Display value after a division by zero. Blocks arithmetic until cleared.
ERROR = "Error"

DECIMAL_SEPARATOR = "."

# Keys that extend the operand being typed
DIGIT_TOKENS = frozenset("0123456789" + DECIMAL_SEPARATOR)


class Operator(str, Enum):
    """The four arithmetic operators."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def parse(cls, symbol: Union[str, Operator]) -> Operator:
        """Resolve a symbol (or button glyph) to an Operator.

        Raises:
            ValueError: if the symbol is not one of the four operators.
        """
        if isinstance(symbol, Operator):
            return symbol
        symbol = _GLYPH_ALIASES.get(symbol, symbol)
        return cls(symbol)

    def apply(self, left: float, right: float) -> float:
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUBTRACT:
            return left - right
        if self is Operator.MULTIPLY:
            return left * right
        return left / right


# Glyphs printed on physical/HTML calculator buttons
_GLYPH_ALIASES = {
    "×": "*",
    "x": "*",
    "X": "*",
    "÷": "/",
    "−": "-",
}


@dataclass
class CalculatorState:
    """Operands held as text, plus the operator awaiting its second operand."""

    current_operand: str = ""
    previous_operand: str = ""
    pending_operator: Optional[Operator] = None

    @property
    def is_error(self) -> bool:
        return self.current_operand == ERROR

    def clear(self) -> None:
        self.current_operand = ""
        self.previous_operand = ""
        self.pending_operator = None

