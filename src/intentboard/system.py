"""The intent system: owns every intent and mediates creation and removal."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from textual.widget import Widget
from textual.widgets import Button

from intentboard.config import DEFAULT_REFRESH_INTERVAL, DEFAULT_ROOT_SELECTOR
from intentboard.controls import Control
from intentboard.errors import InsertionError
from intentboard.helpers import locate
from intentboard.intent import Intent, IntentBody
from intentboard.modal import IntentModal, ModalMode

if TYPE_CHECKING:
    from textual.await_remove import AwaitRemove
    from textual.dom import DOMNode
    from textual.timer import Timer
    from textual.widget import AwaitMount

logger = logging.getLogger(__name__)

ANCHOR_SELECTOR = ".js-anchor"
NEW_INTENT_SELECTOR = "#new-intent"

Clock = Callable[[], datetime]


class IntentSystem:
    """Registry of the intents shown in one container.

    New cards are always inserted just before the container's anchor
    element, so the visual order follows creation order.

    Attributes:
        intents: Intents keyed by ID.
        modal: The modal shared by every intent of this system.
        clock: Returns the current time; injectable for tests.
        refresh_interval: Seconds between "last updated" refreshes.
    """

    def __init__(
        self,
        root: DOMNode,
        selector: str = DEFAULT_ROOT_SELECTOR,
        clock: Clock = datetime.now,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        """Locate the host elements and wire the new intent trigger.

        Args:
            root: Node the host markup lives under (usually the app).
            selector: Selector of the container holding the cards.
            clock: Callable returning the current time.
            refresh_interval: Seconds between card age refreshes.

        Raises:
            SetupError: If the container, its anchor, the new intent
                button, or any modal element is missing.
        """
        self.intents: dict[int, Intent] = {}
        self.root = root
        self.clock = clock
        self.refresh_interval = refresh_interval
        self._ids = itertools.count()

        self.modal = IntentModal(root)
        self.container = locate(root, selector, Widget, what="intent container")
        self.anchor = locate(
            self.container, ANCHOR_SELECTOR, Widget, what="intent list anchor"
        )
        self.new_intent_button = locate(
            root, NEW_INTENT_SELECTOR, Control, what="new intent card button"
        )

        self.modal.backdrop = self.container
        self.wire_events()

    def __len__(self) -> int:
        return len(self.intents)

    def __contains__(self, intent_id: object) -> bool:
        return intent_id in self.intents

    def __iter__(self) -> Iterator[Intent]:
        return iter(list(self.intents.values()))

    def get(self, intent_id: int) -> Intent | None:
        return self.intents.get(intent_id)

    def next_id(self) -> int:
        """Return the next intent ID. IDs are never reused."""
        return next(self._ids)

    def schedule_refresh(self, callback: Callable[[], None]) -> Timer:
        """Run `callback` every `refresh_interval` seconds until stopped."""
        return self.root.set_interval(self.refresh_interval, callback)

    def wire_events(self) -> None:
        self.new_intent_button.add_listener(self.on_new_intent)

    def teardown_events(self) -> None:
        self.new_intent_button.remove_listener(self.on_new_intent)
        self.modal.teardown_events()

    def add(self, intent: Intent) -> AwaitMount:
        """Register an intent and insert its card before the anchor.

        Args:
            intent: Intent with an assigned ID.

        Returns:
            Awaitable that completes once the card is mounted.

        Raises:
            InsertionError: If the object has no ID.
        """
        if getattr(intent, "ID", None) is None:
            raise InsertionError("Insertion failed.")

        self.intents[intent.ID] = intent
        return self.container.mount(intent.dom.card, before=self.anchor)

    def create(self, body: IntentBody | Mapping[str, Any]) -> Intent:
        """Build an intent from `body` and add it."""
        intent = Intent(body, self)
        self.add(intent)
        logger.info("Created intent %s: %s", intent.ID, intent.title)
        return intent

    def remove(self, intent_id: int) -> AwaitRemove:
        """Remove an intent and its card.

        Args:
            intent_id: ID of a registered intent.

        Returns:
            Awaitable that completes once the card is removed.

        Raises:
            KeyError: If no intent has this ID.
        """
        intent = self.intents.pop(intent_id)
        intent.destroy()
        logger.info("Deleted intent %s: %s", intent.ID, intent.title)
        return intent.dom.card.remove()

    def clear(self) -> None:
        """Remove every intent."""
        for intent_id in list(self.intents):
            self.remove(intent_id)

    def on_new_intent(self, event: Button.Pressed) -> None:
        """Open the modal in create mode."""
        event.stop()
        self.modal.open(ModalMode.CREATE, self.on_create_submitted)

    def on_create_submitted(self, event: Button.Pressed) -> None:
        event.stop()

        if not self.modal.submittable:
            return

        self.create(IntentBody.from_form(self.modal.data))
        self.modal.close()
