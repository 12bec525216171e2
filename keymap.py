"""
Keyboard bindings for the calculator
Maps browser key names to calculator actions
"""
import config

PRESS = "press"
EVALUATE = "evaluate"
BACKSPACE = "backspace"
CLEAR = "clear"

KEY_ACTIONS = {
    "Enter": EVALUATE,
    "=": EVALUATE,
    "Backspace": BACKSPACE,
    "Escape": CLEAR,
}


def resolve_key(key):
    """Return (action, token) for a key, or None if the key is not bound"""
    if not isinstance(key, str) or not key:
        return None
    if key in KEY_ACTIONS:
        return KEY_ACTIONS[key], None
    if len(key) == 1 and key in config.DISPLAY_TOKENS:
        return PRESS, key
    return None


def dispatch_key(calculator, key):
    """Run the action bound to key on the calculator.

    Returns True when the key was handled, so the caller can suppress the
    key's default browser behaviour.
    """
    binding = resolve_key(key)
    if binding is None:
        return False

    action, token = binding
    if action == PRESS:
        calculator.press(token)
    elif action == EVALUATE:
        calculator.evaluate()
    elif action == BACKSPACE:
        calculator.backspace()
    elif action == CLEAR:
        calculator.clear()
    return True


def recognized_keys():
    """All bound keys with their actions, tokens first"""
    bindings = [{"key": token, "action": PRESS} for token in config.DISPLAY_TOKENS]
    bindings.extend({"key": key, "action": action} for key, action in KEY_ACTIONS.items())
    return bindings
