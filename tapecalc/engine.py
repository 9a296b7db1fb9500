"""The calculator state machine.

One CalculatorEngine owns one CalculatorState and exposes a transition per
input category. Every transition mutates the owned state in place and
returns an Outcome; user errors (division by zero, square root of a
negative) come back in the Outcome with the state left untouched.

Evaluation is strictly left to right: pressing an operator while another is
pending and a second operand has been typed folds the pending operation
first, so ``4 + 3 * 2`` is ``(4 + 3) * 2``.
"""

from __future__ import annotations

import math
from typing import Optional

from tapecalc.errors import CalculatorError, DivideByZeroError, InvalidInputError
from tapecalc.formatting import format_number, parse_value
from tapecalc.models import CalculatorState, HistoryItem, MemoryOp, Operator, Outcome, UnaryOp

DEFAULT_HISTORY_LIMIT = 50

_DIGITS = frozenset("0123456789")


class CalculatorEngine:
    """Sequential (chained) calculator with a memory register and history."""

    def __init__(
        self,
        state: Optional[CalculatorState] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be >= 1")
        self.state = state or CalculatorState()
        self.history_limit = history_limit

    # -- Arithmetic ---------------------------------------------------------

    @staticmethod
    def apply(a: float, b: float, op: Optional[Operator]) -> float:
        """Apply a binary operator.

        Raises:
            DivideByZeroError: dividing by exactly zero.
        """
        if op == Operator.ADD:
            return a + b
        if op == Operator.SUBTRACT:
            return a - b
        if op == Operator.MULTIPLY:
            return a * b
        if op == Operator.DIVIDE:
            if b == 0:
                raise DivideByZeroError()
            return a / b
        return b

    def _apply_pending(self) -> str:
        s = self.state
        result = self.apply(parse_value(s.previous_value), parse_value(s.current_value), s.operation)
        return format_number(result)

    def _record(self, calculation: str, result: str) -> HistoryItem:
        """Prepend a history entry, dropping the oldest past the limit."""
        item = HistoryItem(calculation=calculation, result=result)
        history = self.state.history
        history.insert(0, item)
        del history[self.history_limit:]
        return item

    # -- Entry --------------------------------------------------------------

    def enter_digit(self, digit: str) -> Outcome:
        if digit not in _DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        s = self.state
        if s.waiting_for_new_value:
            s.current_value = digit
            s.waiting_for_new_value = False
        elif s.current_value == "0":
            s.current_value = digit
        else:
            s.current_value += digit
        return Outcome()

    def enter_decimal(self) -> Outcome:
        s = self.state
        if s.waiting_for_new_value:
            s.current_value = "0."
            s.waiting_for_new_value = False
        elif "." not in s.current_value:
            s.current_value += "."
        return Outcome()

    # -- Binary operations --------------------------------------------------

    def select_operator(self, op: Operator) -> Outcome:
        """Set the pending operator, folding the previous one if needed.

        Switching operators before typing a new operand only replaces the
        pending operator.
        """
        s = self.state
        if s.operation is not None and not s.waiting_for_new_value and s.previous_value != "":
            try:
                result = self._apply_pending()
            except CalculatorError as e:
                return Outcome(error=e)
            s.current_value = result
            s.previous_value = result
        else:
            s.previous_value = s.current_value

        s.operation = op
        s.waiting_for_new_value = True
        return Outcome(trail=f"{s.current_value} {op.symbol}")

    def evaluate(self) -> Outcome:
        """Resolve the pending operation (the equals key)."""
        s = self.state
        if s.operation is None or s.previous_value == "":
            return Outcome()

        try:
            result = self._apply_pending()
        except CalculatorError as e:
            return Outcome(error=e)

        item = self._record(f"{s.previous_value} {s.operation.symbol} {s.current_value}", result)
        s.current_value = result
        s.previous_value = ""
        s.operation = None
        s.waiting_for_new_value = True
        return Outcome(history_item=item, reset_trail=True, clear_error=True)

    def clear(self) -> Outcome:
        """Reset the entry state. Memory and history survive."""
        s = self.state
        s.current_value = "0"
        s.previous_value = ""
        s.operation = None
        s.waiting_for_new_value = False
        return Outcome(reset_trail=True, clear_error=True)

    # -- Unary operations ---------------------------------------------------

    def apply_unary(self, kind: UnaryOp) -> Outcome:
        """Apply an advanced operation to the current value.

        A pending binary operation stays pending.
        """
        current = parse_value(self.state.current_value)
        shown = format_number(current)

        if kind == UnaryOp.PERCENTAGE:
            result = current / 100
            calculation = f"{shown}%"
        elif kind == UnaryOp.SQUARE_ROOT:
            if current < 0:
                return Outcome(error=InvalidInputError())
            result = math.sqrt(current)
            calculation = f"√{shown}"
        elif kind == UnaryOp.SQUARE:
            result = current * current
            calculation = f"{shown}²"
        else:
            return Outcome()

        text = format_number(result)
        item = self._record(calculation, text)
        self.state.current_value = text
        self.state.waiting_for_new_value = True
        return Outcome(history_item=item, clear_error=True)

    # -- Memory -------------------------------------------------------------

    def apply_memory(self, kind: MemoryOp) -> Outcome:
        s = self.state
        if kind == MemoryOp.CLEAR:
            s.memory = 0.0
        elif kind == MemoryOp.RECALL:
            s.current_value = format_number(s.memory)
            s.waiting_for_new_value = True
        elif kind == MemoryOp.ADD:
            s.memory += parse_value(s.current_value)
        elif kind == MemoryOp.SUBTRACT:
            s.memory -= parse_value(s.current_value)
        return Outcome()

    # -- History ------------------------------------------------------------

    def recall_history_entry(self, item: HistoryItem) -> Outcome:
        self.state.current_value = item.result
        self.state.waiting_for_new_value = True
        return Outcome()

    def clear_history(self) -> Outcome:
        self.state.history.clear()
        return Outcome()
