"""Tests for key classification, tokenizing and dispatch."""

import pytest

from pocketcalc.engine import CalculatorEngine
from pocketcalc.keypad import Action, Keypad, classify_key, tokenize
from pocketcalc.models import DIGIT_TOKENS, ERROR


@pytest.fixture
def keypad():
    return Keypad()


# --- classify_key ---

@pytest.mark.parametrize("label, action, payload", [
    ("7", Action.DIGIT, "7"),
    (".", Action.DIGIT, "."),
    ("+", Action.OPERATOR, "+"),
    ("×", Action.OPERATOR, "*"),
    ("÷", Action.OPERATOR, "/"),
    ("=", Action.EQUALS, ""),
    ("C", Action.CLEAR, ""),
    ("ac", Action.CLEAR, ""),
])
def test_classify_key(label, action, payload):
    key = classify_key(label)
    assert key.action is action
    assert key.payload == payload
    assert key.label == label


@pytest.mark.parametrize("label", ["%", "sqrt", "", "12"])
def test_classify_unknown_key(label):
    with pytest.raises(ValueError, match="Unknown key"):
        classify_key(label)


# --- tokenize ---

def test_tokenize_compact():
    assert tokenize("12.5+3=") == ["1", "2", ".", "5", "+", "3", "="]


def test_tokenize_whitespace_and_clear():
    assert tokenize("  5 * 2  AC 7 ") == ["5", "*", "2", "AC", "7"]


def test_tokenize_empty():
    assert tokenize("   ") == []


def test_tokenize_unknown_character():
    with pytest.raises(ValueError, match="'%'"):
        tokenize("5 % 2")


# --- Keypad ---

def test_press_returns_display(keypad):
    assert keypad.press("5") == "5"
    assert keypad.press("+") == "5 +"
    assert keypad.press("3") == "5 + 3"
    assert keypad.press("=") == "8"


def test_press_clear(keypad):
    for label in tokenize("9/0="):
        keypad.press(label)
    assert keypad.engine.display_text() == ERROR
    assert keypad.press("C") == "0"


def test_press_all_records_steps(keypad):
    steps = keypad.press_all(tokenize("5+3*2="))
    assert [s.display for s in steps] == ["5", "5 +", "5 + 3", "8 *", "8 * 2", "16"]
    assert steps[1].state.pending_operator.symbol == "+"
    # Steps hold snapshots, not the live state
    assert steps[0].state.current_operand == "5"
    assert steps[-1].key.action is Action.EQUALS


def test_press_all_rejects_before_pressing():
    engine = CalculatorEngine()
    keypad = Keypad(engine)
    with pytest.raises(ValueError):
        keypad.press_all(["5", "+", "?"])
    assert engine.display_text() == "0"


@pytest.mark.parametrize("token", sorted(DIGIT_TOKENS))
def test_every_digit_key_reaches_the_engine(token):
    key = classify_key(token)
    assert key.action is Action.DIGIT
    engine = CalculatorEngine()
    Keypad(engine).dispatch(key)
    assert engine.current_operand == token
