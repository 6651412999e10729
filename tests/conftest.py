"""Shared pytest fixtures for the intent board tests.

UI tests drive the real app with `App.run_test()` inside the test body so
Textual's context variables are set while the test runs.
"""

from datetime import datetime, timedelta

import pytest
from textual.widgets import Button

from intentboard.app import IntentBoardApp
from intentboard.config import Config
from intentboard.controls import Control
from intentboard.modal import IntentModal

GREETING = {"title": "Greeting", "expressions": ["hi", "hello"], "answer": "Hello!"}


class FakeClock:
    """Deterministic replacement for `datetime.now`."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 2, 6, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeTimer:
    """Stand-in for a Textual timer that records whether it was stopped."""

    def __init__(self, callback) -> None:
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


def click(control: Control) -> None:
    """Deliver a press to a control's handlers, as an accepted click would.

    Controls that are disabled, directly or through an ancestor, ignore the
    click, as Textual does for mouse input.
    """
    if control.is_disabled:
        return
    control.listeners.notify(Button.Pressed(control))


def fill_fields(modal: IntentModal, **values: str) -> None:
    """Type values into the modal's fields by name."""
    for field in modal.fields:
        if field.name in values:
            field.value = values[field.name]


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def make_app(clock: FakeClock):
    """Provide a factory for intent board apps wired to the fake clock.

    Returns:
        Callable: Factory accepting an optional Config.

    Example:
        async def test_something(make_app):
            app = make_app()
            async with app.run_test() as pilot:
                system = pilot.app.system
    """

    def _create_app(config: Config | None = None) -> IntentBoardApp:
        return IntentBoardApp(config or Config(refresh_interval=60.0), clock=clock)

    return _create_app
