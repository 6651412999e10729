"""Textual application hosting the intent board."""

from __future__ import annotations

import logging
from datetime import datetime

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Footer, Header, Label

from intentboard.config import Config
from intentboard.controls import Control, Field
from intentboard.system import Clock, IntentSystem

logger = logging.getLogger(__name__)


class IntentBoardApp(App[None]):
    """Card list of intents with a shared view/create/edit modal."""

    TITLE = "Intents"

    CSS = """
    Screen {
        layers: base modal;
    }
    #intents {
        padding: 1 2;
    }
    #new-intent {
        width: 100%;
    }
    #intent-modal {
        display: none;
        layer: modal;
        width: 70;
        height: auto;
        offset: 5 2;
        padding: 1 2;
        border: thick $accent;
        background: $surface;
    }
    #intent-modal.-open {
        display: block;
    }
    #intent-modal-form {
        height: auto;
    }
    #modal-actions {
        height: auto;
        align-horizontal: right;
    }
    #modal-close {
        dock: right;
        min-width: 5;
    }
    #modal-create, #modal-edit {
        display: none;
    }
    #intent-modal.-create-mode #modal-create,
    #intent-modal.-edit-mode #modal-edit {
        display: block;
    }
    """

    BINDINGS = [
        Binding("n", "new_intent", "New intent"),
        Binding("escape", "close_modal", "Close", show=False, priority=True),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: Config | None = None,
        clock: Clock = datetime.now,
    ) -> None:
        super().__init__()
        self.config = config or Config()
        self.clock = clock
        self.system: IntentSystem | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="intents"):
            yield Control("+ New intent", id="new-intent", classes="js-anchor")
        with Vertical(id="intent-modal"):
            yield Control("X", id="modal-close")
            with Vertical(id="intent-modal-form"):
                yield Label("Title")
                yield Field(name="title", id="field-title")
                yield Label("Expressions (one per line)")
                yield Field(name="expressions", id="field-expressions")
                yield Label("Answer")
                yield Field(name="answer", id="field-answer")
            with Horizontal(id="modal-actions"):
                yield Control("Cancel", id="modal-cancel")
                yield Control("Create", variant="success", id="modal-create")
                yield Control("Save", variant="success", id="modal-edit")
        yield Footer()

    def on_mount(self) -> None:
        self.system = IntentSystem(
            self,
            selector=self.config.root_selector,
            clock=self.clock,
            refresh_interval=self.config.refresh_interval,
        )
        logger.debug("Intent system ready on %s", self.config.root_selector)

    def action_new_intent(self) -> None:
        """Press the new intent button unless the modal is in use."""
        if self.system is None or self.system.modal.is_open:
            return
        self.system.new_intent_button.press()

    def check_action(
        self, action: str, parameters: tuple[object, ...]
    ) -> bool | None:
        """Enable the escape binding only while the modal is open."""
        if action == "close_modal":
            return self.system is not None and self.system.modal.is_open
        return True

    def action_close_modal(self) -> None:
        self.system.modal.close()
