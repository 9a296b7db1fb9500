"""Tapecalc session — the presentation side of the calculator.

A Session owns one CalculatorEngine and is the only thing that calls into
it. Per event:
1. Route the event to the matching engine transition
2. Apply the Outcome: update the display trail, post or dismiss the
   transient error notice
3. Optionally print a trace line

Events are handled one at a time, in the order they are dispatched.
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console

from tapecalc.config import Settings
from tapecalc.engine import CalculatorEngine
from tapecalc.keymap import tokenize, translate_key
from tapecalc.models import CalculatorState, Event, EventKind, HistoryItem, Outcome
from tapecalc.notices import NoticeBoard


class Session:
    """One interactive calculator session."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        clock: Optional[Callable[[], float]] = None,
        trace: bool = False,
    ) -> None:
        self.settings = settings or Settings()
        self.console = console or Console(stderr=True)
        self.engine = CalculatorEngine(history_limit=self.settings.history_limit)
        self.notices = NoticeBoard(timeout_s=self.settings.notice_seconds, clock=clock)
        self.trace = trace
        self._trail = ""

    # -- Read-only views ----------------------------------------------------

    @property
    def state(self) -> CalculatorState:
        return self.engine.state

    @property
    def display_value(self) -> str:
        return self.engine.state.current_value

    @property
    def trail(self) -> str:
        return self._trail

    @property
    def error(self) -> Optional[str]:
        return self.notices.current()

    @property
    def history(self) -> list[HistoryItem]:
        return list(self.engine.state.history)

    @property
    def memory(self) -> float:
        return self.engine.state.memory

    @property
    def memory_indicator(self) -> bool:
        return self.engine.state.memory != 0

    # -- Input --------------------------------------------------------------

    def dispatch(self, event: Event) -> Outcome:
        """Run one event through the engine and apply its outcome."""
        outcome = self._route(event)

        if outcome.reset_trail:
            self._trail = ""
        if outcome.trail is not None:
            self._trail = outcome.trail
        if outcome.clear_error:
            self.notices.dismiss()
        if outcome.error is not None:
            self.notices.post(outcome.error.message)
            self.console.print(f"[yellow]{outcome.error.message}[/yellow]")

        if self.trace:
            label = event.kind.value if event.value is None else f"{event.kind.value} {_value_text(event.value)}"
            self.console.print(f"  [dim]{label:24s} → {self.display_value}[/dim]")
        return outcome

    def _route(self, event: Event) -> Outcome:
        engine = self.engine
        kind = event.kind
        if kind == EventKind.DIGIT:
            return engine.enter_digit(event.value)
        if kind == EventKind.DECIMAL:
            return engine.enter_decimal()
        if kind == EventKind.OPERATOR:
            return engine.select_operator(event.value)
        if kind == EventKind.EQUALS:
            return engine.evaluate()
        if kind == EventKind.CLEAR:
            return engine.clear()
        if kind == EventKind.UNARY:
            return engine.apply_unary(event.value)
        if kind == EventKind.MEMORY:
            return engine.apply_memory(event.value)
        if kind == EventKind.RECALL_HISTORY:
            return self.select_history_entry(event.value)
        if kind == EventKind.CLEAR_HISTORY:
            return engine.clear_history()
        raise ValueError(f"Unhandled event kind: {kind}")

    def select_history_entry(self, position: int) -> Outcome:
        """Recall the history entry at a 1-based position (1 = most recent).

        Positions outside the history are ignored.
        """
        history = self.engine.state.history
        if not 1 <= position <= len(history):
            return Outcome()
        return self.engine.recall_history_entry(history[position - 1])

    def press(self, key: str) -> Optional[Outcome]:
        """Handle a single key press; unmapped keys are ignored."""
        event = translate_key(key)
        if event is None:
            return None
        return self.dispatch(event)

    def feed(self, text: str) -> list[str]:
        """Dispatch every event in a typed line.

        Returns the characters or words that were not understood.
        """
        events, rejected = tokenize(text)
        for event in events:
            self.dispatch(event)
        return rejected


def _value_text(value) -> str:
    return getattr(value, "value", str(value))
