"""Intent records and the cards that present them."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from textual.containers import Horizontal, Vertical
from textual.content import Content
from textual.widgets import Button, Static

from intentboard.controls import Control
from intentboard.errors import SetupError
from intentboard.helpers import string_to_list, time_since
from intentboard.modal import ModalMode

if TYPE_CHECKING:
    from textual.timer import Timer

    from intentboard.system import IntentSystem

logger = logging.getLogger(__name__)

DELETE_FLAG_CLASS = "-delete-flag"


@dataclass
class IntentBody:
    """The editable content of an intent.

    Attributes:
        title: Short name of the intent.
        expressions: Trigger phrases, in order.
        answer: Response given when the intent matches.
    """

    title: str = ""
    expressions: list[str] = field(default_factory=list)
    answer: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "expressions": list(self.expressions),
            "answer": self.answer,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IntentBody":
        """Create a body from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "expressions" in values:
            expressions = values["expressions"]
            if isinstance(expressions, str):
                values["expressions"] = string_to_list(expressions)
            else:
                values["expressions"] = list(expressions or [])
        return cls(**values)

    @classmethod
    def from_form(cls, data: Mapping[str, str]) -> "IntentBody":
        """Create a body from a modal form snapshot.

        The expressions field holds one expression per line.

        Args:
            data: Raw field values keyed by field name.

        Returns:
            IntentBody with expressions parsed into a list.
        """
        values = dict(data)
        values["expressions"] = string_to_list(values.get("expressions"))
        return cls.from_dict(values)


class DeletionState(Enum):
    """Progress of the two-step delete confirmation."""

    IDLE = "idle"
    PENDING = "pending"


class IntentCard(Vertical):
    """Card presenting one intent in the list."""

    DEFAULT_CSS = """
    IntentCard {
        height: auto;
        border: round $primary;
        padding: 0 1;
        margin-bottom: 1;
    }
    IntentCard .card-warning {
        display: none;
        height: auto;
    }
    IntentCard.-delete-flag {
        border: round $error;
    }
    IntentCard.-delete-flag .card-warning {
        display: block;
    }
    IntentCard .card-meta, IntentCard .card-warning-actions {
        height: auto;
    }
    IntentCard .card-updated-label, IntentCard .card-updated {
        width: auto;
        margin-right: 1;
    }
    """


@dataclass
class CardElements:
    """References to the card and the sub-elements an intent manipulates."""

    card: IntentCard
    title: Control | None = None
    updated: Static | None = None
    edit: Control | None = None
    delete: Control | None = None
    confirm: Control | None = None
    cancel: Control | None = None


class Intent:
    """One intent: its body, its card, and its delete confirmation.

    Editing and viewing go through the system's shared modal. The card's
    "last updated" label refreshes itself on a timer for as long as the
    intent lives; `destroy` stops it.

    Attributes:
        ID: Identifier assigned by the owning system, never reused.
        body: Current content.
        last_updated: When the body was created or last edited.
        deletion: Delete confirmation state.
    """

    REQUIRED_ELEMENTS: tuple[tuple[str, str], ...] = (
        ("title", "card title"),
        ("updated", "last updated label"),
        ("edit", "edit icon"),
        ("delete", "delete icon"),
        ("confirm", "confirm deletion button"),
        ("cancel", "cancel deletion button"),
    )

    def __init__(
        self,
        body: IntentBody | Mapping[str, Any] | None,
        system: IntentSystem | None,
    ) -> None:
        """Create an intent and start refreshing its card.

        Args:
            body: Intent content; a mapping is converted with `from_dict`.
            system: The system that owns this intent.

        Raises:
            SetupError: If `system` is missing or the card lacks a required
                sub-element.
        """
        if system is None:
            raise SetupError("Missing intent system.")

        if body is None:
            body = IntentBody()
        elif not isinstance(body, IntentBody):
            body = IntentBody.from_dict(body)

        self.system = system
        self.modal = system.modal
        self.ID = system.next_id()
        self.body = body
        self.last_updated: datetime = system.clock()
        self.deletion = DeletionState.IDLE

        self.dom = self.build_card()
        for attribute, description in self.REQUIRED_ELEMENTS:
            if getattr(self.dom, attribute) is None:
                raise SetupError(f"Missing {description} element.")

        self.wire_events()
        self._refresh_timer: Timer | None = system.schedule_refresh(
            self.update_last_update
        )

    def __repr__(self) -> str:
        return f"Intent(ID={self.ID!r}, title={self.title!r})"

    @property
    def title(self) -> str:
        return self.body.title

    @property
    def expressions(self) -> list[str]:
        return self.body.expressions

    @property
    def answer(self) -> str:
        return self.body.answer

    @property
    def confirmation_shown(self) -> bool:
        return self.deletion is DeletionState.PENDING

    @property
    def refresh_timer(self) -> Timer | None:
        """The running refresh timer, or None once destroyed."""
        return self._refresh_timer

    def time_since_update(self) -> str:
        """Return a coarse label for the time elapsed since the last update.

        See `helpers.time_since` for the bucket rule.
        """
        elapsed = self.system.clock() - self.last_updated
        return time_since(math.floor(elapsed.total_seconds()))

    def build_card(self) -> CardElements:
        """Build the card widgets for this intent.

        Returns:
            References to the card and its interactive sub-elements.
        """
        title = Control(Content(self.title), classes="card-title")
        updated = Static("seconds ago", classes="card-updated")
        edit = Control("Edit", classes="card-edit")
        delete = Control("Delete", variant="error", classes="card-delete")
        confirm = Control("Yes I am", variant="error", classes="card-confirm")
        cancel = Control("No I'm not", variant="primary", classes="card-cancel")

        card = IntentCard(
            title,
            Horizontal(
                Static("Last Updated", classes="card-updated-label"),
                updated,
                edit,
                delete,
                classes="card-meta",
            ),
            Vertical(
                Static(
                    "You are about to delete this intent. Are you sure?",
                    classes="card-warning-title",
                ),
                Horizontal(confirm, cancel, classes="card-warning-actions"),
                classes="card-warning",
            ),
        )

        return CardElements(
            card=card,
            title=title,
            updated=updated,
            edit=edit,
            delete=delete,
            confirm=confirm,
            cancel=cancel,
        )

    def wire_events(self) -> None:
        """Attach the card's handlers."""
        self.dom.title.add_listener(self.on_show)
        self.dom.edit.add_listener(self.on_edit)
        self.dom.delete.add_listener(self.on_delete)
        self.dom.cancel.add_listener(self.on_cancel_deletion)
        self.dom.confirm.add_listener(self.on_confirm_deletion)

    def teardown_events(self) -> None:
        """Detach every handler attached by `wire_events`."""
        self.dom.title.remove_listener(self.on_show)
        self.dom.edit.remove_listener(self.on_edit)
        self.dom.delete.remove_listener(self.on_delete)
        self.dom.cancel.remove_listener(self.on_cancel_deletion)
        self.dom.confirm.remove_listener(self.on_confirm_deletion)

    def destroy(self) -> None:
        """Release the intent's handlers and stop its refresh timer."""
        self.teardown_events()
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
            self._refresh_timer = None

    def update(self, body: IntentBody) -> None:
        """Replace the body wholesale and mark the intent as updated now."""
        self.body = body
        self.last_updated = self.system.clock()
        self.update_title()
        self.update_last_update()

    def update_title(self) -> None:
        self.dom.title.label = Content(self.title)

    def update_last_update(self) -> None:
        self.dom.updated.update(f"{self.time_since_update()} ago")

    def on_show(self, event: Button.Pressed) -> None:
        """Open the modal read-only on this intent."""
        event.stop()
        if not self.modal.open(ModalMode.VIEW):
            return
        self.modal.disable()
        self.modal.fill(self.body)

    def on_edit(self, event: Button.Pressed) -> None:
        """Open the modal for editing, pre-filled with this intent."""
        event.stop()
        if not self.modal.open(ModalMode.EDIT, self.on_edit_submitted):
            return
        self.modal.fill(self.body)

    def on_edit_submitted(self, event: Button.Pressed) -> None:
        event.stop()

        if not self.modal.submittable:
            return

        self.update(IntentBody.from_form(self.modal.data))
        logger.info("Edited intent %s: %s", self.ID, self.title)

        self.modal.close()

    def on_delete(self, event: Button.Pressed) -> None:
        """Flag the card and ask for confirmation."""
        event.stop()
        self.dom.card.add_class(DELETE_FLAG_CLASS)
        self.deletion = DeletionState.PENDING
        logger.debug("Deletion of intent %s awaiting confirmation", self.ID)

    def on_cancel_deletion(self, event: Button.Pressed) -> None:
        event.stop()
        self.dom.card.remove_class(DELETE_FLAG_CLASS)
        self.deletion = DeletionState.IDLE
        logger.debug("Deletion of intent %s cancelled", self.ID)

    def on_confirm_deletion(self, event: Button.Pressed) -> None:
        """Remove the intent, but only while confirmation is pending."""
        event.stop()

        if self.deletion is not DeletionState.PENDING:
            logger.debug("Ignoring stale deletion confirm for intent %s", self.ID)
            return

        self.system.remove(self.ID)
