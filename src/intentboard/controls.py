"""Widgets that let the core register handlers on individual host elements.

Textual delivers `Button.Pressed` and `TextArea.Changed` to the widget that
sent them before bubbling. These subclasses fan the message out to handlers
registered with `add_listener`, so a component can attach and detach its
handlers on a specific element instead of inspecting every message that
bubbles up to the app.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from textual.message import Message
from textual.widgets import Button, TextArea


MessageType = TypeVar("MessageType", bound=Message)
Handler = Callable[[MessageType], None]


class Listeners(Generic[MessageType]):
    """Ordered set of handlers attached to one element."""

    def __init__(self) -> None:
        self._handlers: list[Handler[MessageType]] = []

    def add(self, handler: Handler[MessageType]) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def remove(self, handler: Handler[MessageType]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def notify(self, message: MessageType) -> None:
        # Copy so a handler may detach itself (or others) while running.
        for handler in list(self._handlers):
            handler(message)

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class Control(Button):
    """A button whose presses are delivered to registered handlers."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listeners: Listeners[Button.Pressed] = Listeners()

    def add_listener(self, handler: Handler[Button.Pressed]) -> None:
        self.listeners.add(handler)

    def remove_listener(self, handler: Handler[Button.Pressed]) -> None:
        self.listeners.remove(handler)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button is self:
            self.listeners.notify(event)


class Field(TextArea):
    """A named form field whose edits are delivered to registered handlers.

    The widget `name` is the key the field's value is reported under.
    """

    DEFAULT_CSS = """
    Field {
        height: auto;
        min-height: 3;
        max-height: 8;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listeners: Listeners[TextArea.Changed] = Listeners()

    @property
    def value(self) -> str:
        """Current raw text of the field."""
        return self.text

    @value.setter
    def value(self, value: str) -> None:
        self.load_text(value)

    def add_listener(self, handler: Handler[TextArea.Changed]) -> None:
        self.listeners.add(handler)

    def remove_listener(self, handler: Handler[TextArea.Changed]) -> None:
        self.listeners.remove(handler)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area is self:
            self.listeners.notify(event)
