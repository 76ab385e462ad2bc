"""
Keyboard and keypad mapping for the calculator front end.

Translates Tk key events (keysym / char) and on-screen button labels into
the engine's abstract actions. Kept free of tkinter so it can be tested
without a display.
"""
from typing import Optional

from backend.engine import Action

# On-screen keypad, row by row. Empty string = spacer.
KEYPAD = [
    ["AC", "⌫", "%", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "−"],
    ["1", "2", "3", "+"],
    ["±", "0", ".", "="],
]

# Tk keysyms that carry no usable `char` (or whose char is ambiguous)
_KEYSYMS = {
    "Return": Action("equals"),
    "KP_Enter": Action("equals"),
    "Escape": Action("clear"),
    "BackSpace": Action("backspace"),
    "KP_Add": Action("op", "+"),
    "KP_Subtract": Action("op", "-"),
    "KP_Multiply": Action("op", "*"),
    "KP_Divide": Action("op", "/"),
    "KP_Decimal": Action("decimal"),
}

_CHARS = {
    ".": Action("decimal"),
    "+": Action("op", "+"),
    "-": Action("op", "-"),
    "*": Action("op", "*"),
    "x": Action("op", "*"),
    "X": Action("op", "*"),
    "/": Action("op", "/"),
    "%": Action("percent"),
    "=": Action("equals"),
}

_LABELS = {
    "AC": Action("clear"),
    "⌫": Action("backspace"),
    "±": Action("sign"),
    "%": Action("percent"),
    "÷": Action("op", "/"),
    "×": Action("op", "*"),
    "−": Action("op", "-"),
    "+": Action("op", "+"),
    "=": Action("equals"),
    ".": Action("decimal"),
}


def action_for_key(keysym: str, char: str = "") -> Optional[Action]:
    """
    Map one key press to an Action, or None when the key means nothing to
    the calculator. Keysyms win over chars so numeric-keypad keys behave
    the same regardless of NumLock text.
    """
    if keysym in _KEYSYMS:
        return _KEYSYMS[keysym]
    if keysym.startswith("KP_") and keysym[3:].isdigit() and len(keysym) == 4:
        return Action("digit", int(keysym[3]))
    if len(char) == 1 and char in "0123456789":
        return Action("digit", int(char))
    return _CHARS.get(char)


def action_for_label(label: str) -> Optional[Action]:
    """Map an on-screen keypad label to an Action."""
    if len(label) == 1 and label.isdigit():
        return Action("digit", int(label))
    return _LABELS.get(label)
