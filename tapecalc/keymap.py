"""Translate key presses and typed tokens into calculator events.

translate_key() covers the keyboard: digits, ``+ - * /``, ``.``,
Enter/``=`` and Escape/``c``/``C``. translate_token() adds the named
commands that have no single key (memory, square root, history, ...).
"""

from __future__ import annotations

import re
from typing import Optional

from tapecalc.models import Event, EventKind, MemoryOp, Operator, UnaryOp

_OPERATOR_KEYS = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
}

_TOKENS: dict[str, Event] = {
    "×": Event(EventKind.OPERATOR, Operator.MULTIPLY),
    "x": Event(EventKind.OPERATOR, Operator.MULTIPLY),
    "÷": Event(EventKind.OPERATOR, Operator.DIVIDE),
    "%": Event(EventKind.UNARY, UnaryOp.PERCENTAGE),
    "sqrt": Event(EventKind.UNARY, UnaryOp.SQUARE_ROOT),
    "√": Event(EventKind.UNARY, UnaryOp.SQUARE_ROOT),
    "sqr": Event(EventKind.UNARY, UnaryOp.SQUARE),
    "²": Event(EventKind.UNARY, UnaryOp.SQUARE),
    "mc": Event(EventKind.MEMORY, MemoryOp.CLEAR),
    "mr": Event(EventKind.MEMORY, MemoryOp.RECALL),
    "m+": Event(EventKind.MEMORY, MemoryOp.ADD),
    "m-": Event(EventKind.MEMORY, MemoryOp.SUBTRACT),
    "hc": Event(EventKind.CLEAR_HISTORY),
}

# @N recalls the Nth history entry, counting from the most recent
_RECALL_RE = re.compile(r"^@(\d+)$")

# (keys, action) rows for `tapecalc keys`
KEY_BINDINGS: list[tuple[str, str]] = [
    ("0-9", "Enter digit"),
    (".", "Decimal point"),
    ("+ - * /", "Add, subtract, multiply, divide"),
    ("× x ÷", "Multiply / divide aliases"),
    ("Enter =", "Equals"),
    ("Escape c C", "Clear"),
    ("%", "Percentage"),
    ("sqrt √", "Square root"),
    ("sqr ²", "Square"),
    ("mc mr m+ m-", "Memory clear, recall, add, subtract"),
    ("@N", "Recall history entry N (1 = most recent)"),
    ("hc", "Clear history"),
]


def translate_key(key: str) -> Optional[Event]:
    """Map a single key press to an event; None for keys we ignore."""
    if len(key) == 1 and "0" <= key <= "9":
        return Event(EventKind.DIGIT, key)
    if key in _OPERATOR_KEYS:
        return Event(EventKind.OPERATOR, _OPERATOR_KEYS[key])
    if key == ".":
        return Event(EventKind.DECIMAL)
    if key in ("Enter", "="):
        return Event(EventKind.EQUALS)
    if key in ("Escape", "c", "C"):
        return Event(EventKind.CLEAR)
    return None


def translate_token(token: str) -> Optional[Event]:
    """Map a whole typed word to an event; None if it is not a command."""
    event = _TOKENS.get(token.lower())
    if event:
        return event
    match = _RECALL_RE.match(token)
    if match:
        return Event(EventKind.RECALL_HISTORY, int(match.group(1)))
    if len(token) > 1:
        # Named keys such as "Enter" or "Escape"
        return translate_key(token)
    return None


def tokenize(text: str) -> tuple[list[Event], list[str]]:
    """Split a typed line into events.

    Whitespace-separated words that are commands become one event each;
    any other word is read one character at a time as key presses.

    Returns (events, rejected) where rejected lists the characters and
    words nothing could be made of.
    """
    events: list[Event] = []
    rejected: list[str] = []

    for word in text.split():
        event = translate_token(word)
        if event:
            events.append(event)
            continue
        for ch in word:
            event = translate_key(ch) or _TOKENS.get(ch)
            if event:
                events.append(event)
            else:
                rejected.append(ch)

    return events, rejected
