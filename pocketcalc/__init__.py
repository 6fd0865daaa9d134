"""pocketcalc — four-function pocket calculator.

A small state-transition engine (digit entry, operator choice, left-to-right
chained evaluation, division-by-zero Error state) with a keypad adapter and a
Rich terminal display.

Usage:
    python -m pocketcalc keys             # Show supported keys
    python -m pocketcalc press 5 + 3 =    # Prints 8
    python -m pocketcalc repl             # Interactive keypad
"""

from pocketcalc.engine import CalculatorEngine
from pocketcalc.models import ERROR, CalculatorState, Operator

__all__ = ["CalculatorEngine", "CalculatorState", "ERROR", "Operator"]
