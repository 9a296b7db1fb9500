"""Data models for the tapecalc calculator.

Operator/UnaryOp/MemoryOp enums, HistoryItem, CalculatorState, Event and
Outcome — all the typed structures that flow through keymap → session →
engine → display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from tapecalc.errors import CalculatorError


class Operator(str, Enum):
    """Binary operators."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return _OPERATOR_SYMBOLS[self]


_OPERATOR_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


class UnaryOp(str, Enum):
    """Advanced operations applied to the current value only."""

    PERCENTAGE = "percentage"
    SQUARE_ROOT = "square-root"
    SQUARE = "square"


class MemoryOp(str, Enum):
    """Memory register commands."""

    CLEAR = "memory-clear"
    RECALL = "memory-recall"
    ADD = "memory-add"
    SUBTRACT = "memory-subtract"


class EventKind(str, Enum):
    """Input event categories accepted by a session."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    UNARY = "unary"
    MEMORY = "memory"
    RECALL_HISTORY = "recall-history"
    CLEAR_HISTORY = "clear-history"


@dataclass(frozen=True)
class HistoryItem:
    """A finished calculation, as shown in the history panel."""

    calculation: str
    result: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "calculation": self.calculation,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class CalculatorState:
    """Everything the engine owns.

    Values are kept as display text and only parsed when an operation needs
    a number, so "0." or "3.10" survive until the next evaluation.
    """

    current_value: str = "0"
    previous_value: str = ""
    operation: Optional[Operator] = None
    memory: float = 0.0
    waiting_for_new_value: bool = False
    history: list[HistoryItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_value": self.current_value,
            "previous_value": self.previous_value,
            "operation": self.operation.value if self.operation else None,
            "memory": self.memory,
            "waiting_for_new_value": self.waiting_for_new_value,
            "history": [item.to_dict() for item in self.history],
        }


EventValue = Union[str, int, Operator, UnaryOp, MemoryOp, None]


@dataclass(frozen=True)
class Event:
    """One input event (a button press or a translated key)."""

    kind: EventKind
    value: EventValue = None


@dataclass
class Outcome:
    """What a transition asks the presentation layer to do.

    The engine never raises user errors across its boundary; a failed
    transition leaves the state alone and reports the error here.
    """

    history_item: Optional[HistoryItem] = None
    error: Optional[CalculatorError] = None
    # New display trail; None leaves the current trail alone
    trail: Optional[str] = None
    reset_trail: bool = False
    clear_error: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None
