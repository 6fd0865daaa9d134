"""Keypad — maps raw key labels onto engine operations.

Each key press carries a logical action (digit, operator, equals, clear) and
an optional payload. Keypad.press() dispatches one key to the engine and
returns the refreshed display text, the same press-then-refresh cycle a button
click listener performs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

from pocketcalc.engine import CalculatorEngine
from pocketcalc.models import DIGIT_TOKENS, CalculatorState, Operator


class Action(str, Enum):
    """Logical input actions."""

    DIGIT = "digit"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"


@dataclass
class KeyPress:
    """A classified key: the label pressed, its action and payload."""

    label: str
    action: Action
    payload: str = ""


@dataclass
class TraceStep:
    """Engine state and display text right after one key press."""

    key: KeyPress
    state: CalculatorState
    display: str


# (label, action, description) rows for the `keys` command
KEY_TABLE: list[tuple[str, Action, str]] = [
    ("0-9", Action.DIGIT, "Append a digit"),
    (".", Action.DIGIT, "Decimal separator (once per operand)"),
    ("+", Action.OPERATOR, "Add"),
    ("-", Action.OPERATOR, "Subtract"),
    ("* × x", Action.OPERATOR, "Multiply"),
    ("/ ÷", Action.OPERATOR, "Divide"),
    ("=", Action.EQUALS, "Evaluate the pending operation"),
    ("C AC", Action.CLEAR, "Clear everything"),
]

_CLEAR_LABELS = ("c", "ac")
_TOKEN_RE = re.compile(r"\s*(AC|[0-9.+\-*/×÷x−=C])", re.IGNORECASE)


def classify_key(label: str) -> KeyPress:
    """Classify a key label.

    Raises:
        ValueError: if the label is not a calculator key.
    """
    if label in DIGIT_TOKENS:
        return KeyPress(label=label, action=Action.DIGIT, payload=label)
    if label == "=":
        return KeyPress(label=label, action=Action.EQUALS)
    if label.lower() in _CLEAR_LABELS:
        return KeyPress(label=label, action=Action.CLEAR)
    try:
        operator = Operator.parse(label)
    except ValueError:
        raise ValueError(f"Unknown key: {label!r}") from None
    return KeyPress(label=label, action=Action.OPERATOR, payload=operator.value)


def tokenize(text: str) -> list[str]:
    """Split free text such as '12.5 + 3 =' into key labels.

    Raises:
        ValueError: on a character that is not a calculator key.
    """
    labels: list[str] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            bad = text[pos:].lstrip()[:1]
            raise ValueError(f"Unknown key: {bad!r}")
        labels.append(match.group(1))
        pos = match.end()
    return labels


class Keypad:
    """Input adapter bound to one engine."""

    def __init__(self, engine: Optional[CalculatorEngine] = None) -> None:
        self.engine = engine or CalculatorEngine()

    def dispatch(self, key: KeyPress) -> None:
        if key.action is Action.DIGIT:
            self.engine.enter_digit(key.payload)
        elif key.action is Action.OPERATOR:
            self.engine.choose_operator(key.payload)
        elif key.action is Action.EQUALS:
            self.engine.evaluate()
        else:
            self.engine.reset()

    def press(self, label: str) -> str:
        """Press one key and return the display text."""
        self.dispatch(classify_key(label))
        return self.engine.display_text()

    def press_all(self, labels: Iterable[str]) -> list[TraceStep]:
        """Press keys in order, recording the state after each one.

        All labels are classified before any is pressed, so an unknown key
        leaves the engine untouched.
        """
        keys = [classify_key(label) for label in labels]
        steps = []
        for key in keys:
            self.dispatch(key)
            steps.append(TraceStep(
                key=key,
                state=replace(self.engine.state),
                display=self.engine.display_text(),
            ))
        return steps
