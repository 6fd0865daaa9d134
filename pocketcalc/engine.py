"""Calculator engine — operand entry, operator chaining and evaluation.

Pure state transitions, no I/O. The presentation layer calls one of the four
operations per key press and then reads display_text() (or the individual
fields) to refresh whatever it renders to.

Evaluation is immediate and left-to-right: choosing a second operator while
one is pending resolves the first, so "5 + 3 * 2 =" is (5 + 3) * 2.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from pocketcalc.models import DECIMAL_SEPARATOR, DIGIT_TOKENS, ERROR, CalculatorState, Operator


def _parse_operand(text: str) -> Optional[float]:
    """Parse an operand, returning None unless it is a finite number."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def canonical_number(value: float) -> str:
    """Shortest text form of a result: '8' rather than '8.0', '0.5', '1e-07' → '1e-7'."""
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        sign = "-" if exponent.startswith("-") else "+"
        text = f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"
    return text


class CalculatorEngine:
    """Owns a CalculatorState and exposes the legal transitions on it."""

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self.state = state or CalculatorState()

    @property
    def current_operand(self) -> str:
        return self.state.current_operand

    @property
    def previous_operand(self) -> str:
        return self.state.previous_operand

    @property
    def pending_operator(self) -> Optional[Operator]:
        return self.state.pending_operator

    def enter_digit(self, token: str) -> None:
        """Append a digit or the decimal separator to the current operand.

        A second separator is ignored. Entering a digit while the display shows
        Error clears the error and starts a fresh operand.

        Raises:
            ValueError: if token is not 0-9 or '.'.
        """
        if token not in DIGIT_TOKENS:
            raise ValueError(f"Not a digit: {token!r}")
        if self.state.is_error:
            self.state.clear()
        if token == DECIMAL_SEPARATOR and DECIMAL_SEPARATOR in self.state.current_operand:
            return
        self.state.current_operand += token

    def choose_operator(self, op: Union[str, Operator]) -> None:
        """Capture the current operand and set the pending operator.

        Resolves an already pending operation first (chaining). Ignored when
        nothing has been entered or the display shows Error.

        Raises:
            ValueError: if op is not a known operator symbol.
        """
        operator = Operator.parse(op)
        state = self.state
        if state.current_operand == "" or state.is_error:
            return
        if state.previous_operand != "":
            self.evaluate()
            if state.is_error:
                return
        state.pending_operator = operator
        state.previous_operand = state.current_operand
        state.current_operand = ""

    def evaluate(self) -> None:
        """Apply the pending operator to the two operands.

        Missing or unparsable operands abandon the evaluation silently.
        Division by zero leaves Error in the current operand.
        """
        state = self.state
        operator = state.pending_operator
        if operator is None:
            return
        prev = _parse_operand(state.previous_operand)
        current = _parse_operand(state.current_operand)
        if prev is None or current is None:
            return

        if operator is Operator.DIVIDE and current == 0:
            state.clear()
            state.current_operand = ERROR
            return

        result = operator.apply(prev, current)
        state.current_operand = canonical_number(result)
        state.previous_operand = ""
        state.pending_operator = None

    def reset(self) -> None:
        self.state.clear()

    def display_text(self) -> str:
        """Single-line text for the display.

        The current operand (or 0 when nothing is entered); while an operator is
        pending, prefixed with the previous operand and the operator symbol.
        """
        state = self.state
        if state.pending_operator is None:
            return state.current_operand or "0"
        head = f"{state.previous_operand} {state.pending_operator.symbol}"
        if state.current_operand:
            return f"{head} {state.current_operand}"
        return head
