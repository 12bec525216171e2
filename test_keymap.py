"""
Tests for keyboard bindings
"""
import pytest

from calculator import Calculator
from keymap import BACKSPACE, CLEAR, EVALUATE, PRESS, dispatch_key, recognized_keys, resolve_key


@pytest.fixture
def calc(scheduler):
    return Calculator(scheduler=scheduler)


@pytest.mark.parametrize("key", list("0123456789.+-*/()%"))
def test_token_keys_press(key):
    assert resolve_key(key) == (PRESS, key)


@pytest.mark.parametrize("key,action", [
    ("Enter", EVALUATE),
    ("=", EVALUATE),
    ("Backspace", BACKSPACE),
    ("Escape", CLEAR),
])
def test_action_keys(key, action):
    assert resolve_key(key) == (action, None)


@pytest.mark.parametrize("key", ["a", "Shift", "Tab", " ", "", None, "F5", "^"])
def test_other_keys_are_ignored(key):
    assert resolve_key(key) is None


def test_dispatch_typed_expression(calc):
    for key in ["1", "+", "2", "*", "3"]:
        assert dispatch_key(calc, key) is True
    assert dispatch_key(calc, "Enter") is True
    assert calc.current_expression == "7"


def test_dispatch_equals_key(calc):
    dispatch_key(calc, "9")
    dispatch_key(calc, "=")
    assert calc.current_expression == "9"
    assert calc.last_evaluated


def test_dispatch_backspace_and_escape(calc):
    for key in "123":
        dispatch_key(calc, key)
    dispatch_key(calc, "Backspace")
    assert calc.current_expression == "12"
    dispatch_key(calc, "Escape")
    assert calc.current_expression == ""


def test_dispatch_ignored_key_leaves_state(calc):
    dispatch_key(calc, "4")
    assert dispatch_key(calc, "x") is False
    assert calc.current_expression == "4"


def test_recognized_keys():
    keys = {binding["key"]: binding["action"] for binding in recognized_keys()}
    assert keys["7"] == PRESS
    assert keys["%"] == PRESS
    assert keys["Enter"] == EVALUATE
    assert keys["Escape"] == CLEAR
    assert "a" not in keys
    assert len(keys) == 22
