"""Tests for the presentation-side session: trail, notices, history selection."""

import io

import pytest
from rich.console import Console

from tapecalc.config import Settings
from tapecalc.models import Event, EventKind, Operator
from tapecalc.session import Session


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def buffer():
    return io.StringIO()


@pytest.fixture
def session(clock, buffer):
    console = Console(file=buffer, force_terminal=False, width=100)
    return Session(settings=Settings(), console=console, clock=clock)


# --- Display trail ---

def test_trail_follows_operator(session):
    session.feed("12 +")
    assert session.trail == "12 +"
    session.feed("3 *")
    assert session.trail == "15 ×"


def test_trail_survives_digits_and_resets_on_equals(session):
    session.feed("4 /")
    session.feed("2")
    assert session.trail == "4 ÷"
    session.feed("=")
    assert session.trail == ""
    assert session.display_value == "2"


def test_clear_drops_trail(session):
    session.feed("4 + c")
    assert session.trail == ""
    assert session.display_value == "0"


# --- Errors ---

def test_divide_by_zero_raises_one_notice(session, buffer):
    session.feed("8 / 0 =")
    assert session.error == "Cannot divide by zero"
    assert buffer.getvalue().count("Cannot divide by zero") == 1
    assert session.display_value == "0"
    assert session.state.previous_value == "8"
    assert session.state.operation == Operator.DIVIDE
    assert session.trail == "8 ÷"


def test_notice_expires_after_window(session, clock):
    session.feed("8 / 0 =")
    clock.now = 2.5
    assert session.error is not None
    clock.now = 3.0
    assert session.error is None


def test_success_clears_notice(session):
    session.feed("8 / 0 =")
    session.feed("4 =")
    assert session.error is None
    assert session.display_value == "2"


def test_square_root_of_negative(session):
    session.feed("4 m- mr sqrt")
    assert session.error == "Invalid input"
    assert session.display_value == "-4"


def test_clear_dismisses_notice(session):
    session.feed("1 / 0 =")
    session.press("Escape")
    assert session.error is None


# --- Memory indicator ---

def test_memory_indicator(session):
    assert not session.memory_indicator
    session.feed("5 m+")
    assert session.memory_indicator
    assert session.memory == 5
    session.feed("mc")
    assert not session.memory_indicator


# --- History selection ---

def test_select_history_entry(session):
    session.feed("2 + 2 =")
    session.feed("3 sqr")
    assert [item.result for item in session.history] == ["9", "4"]

    session.feed("c @2")
    assert session.display_value == "4"
    assert session.state.waiting_for_new_value


def test_out_of_range_history_selection_is_ignored(session):
    session.feed("7 @1 @0")
    assert session.display_value == "7"


def test_clear_history_event(session):
    session.feed("3 sqr")
    session.dispatch(Event(EventKind.CLEAR_HISTORY))
    assert session.history == []
    assert session.display_value == "9"


# --- Key presses ---

def test_press_matches_keyboard(session):
    for key in ["5", "+", "3", "*", "2", "Enter"]:
        session.press(key)
    assert session.display_value == "16"


def test_press_ignores_unknown_keys(session):
    assert session.press("Tab") is None
    assert session.display_value == "0"


def test_feed_returns_rejects(session):
    assert session.feed("1 ? 2") == ["?"]
    assert session.display_value == "12"


def test_trace_output(clock, buffer):
    console = Console(file=buffer, force_terminal=False, width=100)
    session = Session(console=console, clock=clock, trace=True)
    session.feed("7 +")
    text = buffer.getvalue()
    assert "digit 7" in text
    assert "operator +" in text


def test_history_limit_from_settings(clock, buffer):
    console = Console(file=buffer, force_terminal=False, width=100)
    session = Session(settings=Settings(history_limit=3), console=console, clock=clock)
    for _ in range(5):
        session.feed("2 sqr")
    assert len(session.history) == 3
