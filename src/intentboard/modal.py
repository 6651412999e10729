"""The shared intent modal: dialog mode state machine and field validity."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from textual.containers import Vertical
from textual.widgets import Button, TextArea

from intentboard.controls import Control, Field
from intentboard.helpers import list_to_string, locate

if TYPE_CHECKING:
    from textual.dom import DOMNode
    from textual.widget import Widget

logger = logging.getLogger(__name__)

MODAL_SELECTOR = "#intent-modal"
FORM_SELECTOR = "#intent-modal-form"
ACTION_SELECTORS = {
    "create": "#modal-create",
    "edit": "#modal-edit",
    "cancel": "#modal-cancel",
    "close": "#modal-close",
}

OPEN_CLASS = "-open"
BODY_OPEN_CLASS = "-modal-open"
SUBMIT_CLASS = "-submit"

SubmitHandler = Callable[[Button.Pressed], None]


class ModalMode(Enum):
    """Display mode of the intent modal."""

    CLOSED = "closed"
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"

    @property
    def action(self) -> str | None:
        """Identifier of the action control that submits in this mode."""
        if self in (ModalMode.CREATE, ModalMode.EDIT):
            return self.value
        return None

    @property
    def css_class(self) -> str:
        return f"-{self.value}-mode"


class IntentModal:
    """Single dialog used to view, create, and edit intents.

    The modal knows nothing about intents; it works on whatever named fields
    the host form contains. Opening in a mode with an action (create, edit)
    binds that action's control as the submit target, and the optional
    submit handler passed to `open` stays attached until `close`.

    Attributes:
        mode: Current display mode.
        submittable: True when every field holds a non-empty value.
        submit: Control currently bound as submit target, if any.
        backdrop: Widget disabled while the modal is open, so nothing
            behind the dialog can be focused, clicked, or pressed.
    """

    def __init__(self, root: DOMNode) -> None:
        """Locate the modal's host elements and wire its events.

        Args:
            root: Node the host markup lives under (usually the app).

        Raises:
            SetupError: If the dialog, its form, or one of its action
                controls is missing.
        """
        self.mode = ModalMode.CLOSED
        self.submittable = False
        self.submit: Control | None = None
        self._submit_handler: SubmitHandler | None = None
        self.backdrop: Widget | None = None

        self.root = root
        self.dialog = locate(root, MODAL_SELECTOR, Vertical, what="intent modal")
        self.form = locate(
            self.dialog, FORM_SELECTOR, Vertical, what="intent modal form"
        )
        self.actions: dict[str, Control] = {
            name: locate(
                self.dialog, selector, Control, what=f"intent modal {name} button"
            )
            for name, selector in ACTION_SELECTORS.items()
        }
        self.fields: list[Field] = list(self.form.query(Field))

        self.wire_events()

    @property
    def is_open(self) -> bool:
        return self.mode is not ModalMode.CLOSED

    def wire_events(self) -> None:
        """Attach the close and validity handlers."""
        self.actions["close"].add_listener(self._on_close_pressed)
        self.actions["cancel"].add_listener(self._on_close_pressed)
        for field in self.fields:
            field.add_listener(self._on_field_changed)

    def teardown_events(self) -> None:
        """Detach every handler attached by `wire_events` and `open`."""
        self.actions["close"].remove_listener(self._on_close_pressed)
        self.actions["cancel"].remove_listener(self._on_close_pressed)
        for field in self.fields:
            field.remove_listener(self._on_field_changed)
        self._unbind_submit()

    def open(self, mode: ModalMode, on_submit: SubmitHandler | None = None) -> bool:
        """Open the modal in the given mode.

        Must be called while the modal is closed; a second `open` without a
        `close` in between is ignored.

        Args:
            mode: One of VIEW, CREATE, or EDIT.
            on_submit: Handler attached to the mode's action control until
                the modal is closed.

        Returns:
            True if the modal opened, False if it was already open. Callers
            must not touch the form when this is False.
        """
        if mode is ModalMode.CLOSED:
            raise ValueError("Cannot open the modal in closed mode")

        if self.is_open:
            logger.warning(
                "Modal already open in %s mode; ignoring open(%s)",
                self.mode.value,
                mode.value,
            )
            return False

        self.screen.add_class(BODY_OPEN_CLASS)
        self.dialog.add_class(OPEN_CLASS, mode.css_class)
        if self.backdrop is not None:
            self.backdrop.disabled = True

        if mode.action is not None:
            self.submit = self.actions[mode.action]
            self.submit.add_class(SUBMIT_CLASS)
            self.submit.disabled = not self.submittable
            if on_submit is not None:
                self._submit_handler = on_submit
                self.submit.add_listener(on_submit)

        self.mode = mode
        logger.debug("Modal opened in %s mode", mode.value)
        return True

    def close(self) -> None:
        """Close the modal and reset the form.

        Safe to call when already closed.
        """
        self.screen.remove_class(BODY_OPEN_CLASS)
        self.dialog.remove_class(OPEN_CLASS, self.mode.css_class)
        if self.backdrop is not None:
            self.backdrop.disabled = False
        self._unbind_submit()

        for field in self.fields:
            field.value = ""
        self.enable()
        self.submittable = False

        if self.is_open:
            logger.debug("Modal closed from %s mode", self.mode.value)
        self.mode = ModalMode.CLOSED

    @property
    def screen(self) -> DOMNode:
        """The node marked while the modal is open."""
        return self.dialog.screen

    @property
    def data(self) -> dict[str, str]:
        """Snapshot of every field's raw value, keyed by field name."""
        return {field.name: field.value for field in self.fields if field.name}

    def fill(self, data: Mapping[str, Any] | Any) -> None:
        """Write values into the fields whose name appears in `data`.

        List values are joined with line feeds. Fields without a matching
        key are left untouched.

        Args:
            data: Mapping of field name to value, or an object with `to_dict`.
        """
        if not isinstance(data, Mapping):
            data = data.to_dict()

        for field in self.fields:
            if field.name not in data:
                continue
            value = data[field.name]
            if isinstance(value, (list, tuple)):
                value = list_to_string(value)
            field.value = "" if value is None else str(value)

        self.check_submittable()

    def disable(self) -> None:
        """Put every field in read-only mode."""
        for field in self.fields:
            field.read_only = True

    def enable(self) -> None:
        """Remove read-only mode from every field."""
        for field in self.fields:
            field.read_only = False

    def check_submittable(self) -> bool:
        """Recompute `submittable` and mirror it on the submit control."""
        submittable = all(field.value != "" for field in self.fields)

        if self.submit is not None:
            self.submit.disabled = not submittable

        self.submittable = submittable
        return submittable

    def _unbind_submit(self) -> None:
        if self.submit is None:
            return

        self.submit.remove_class(SUBMIT_CLASS)
        if self._submit_handler is not None:
            self.submit.remove_listener(self._submit_handler)
        self.submit = None
        self._submit_handler = None

    def _on_close_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.close()

    def _on_field_changed(self, event: TextArea.Changed) -> None:
        self.check_submittable()
