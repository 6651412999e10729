"""Small helpers shared by the modal, intents, and the intent system."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeVar

from textual.css.query import NoMatches

from intentboard.errors import SetupError

if TYPE_CHECKING:
    from textual.dom import DOMNode
    from textual.widget import Widget

WidgetType = TypeVar("WidgetType", bound="Widget")

# Unit buckets for time_since, largest first.
_TIME_UNITS: tuple[tuple[int, str], ...] = (
    (31_536_000, "years"),
    (2_592_000, "months"),
    (86_400, "days"),
    (3_600, "hours"),
    (60, "minutes"),
)


def string_to_list(text: str | None) -> list[str]:
    """Split multi-line text into a list of lines.

    Carriage-return/line-feed pairs are normalised to a single line feed
    before splitting.

    Args:
        text: Text to split. None or an empty string yields an empty list.

    Returns:
        The lines of the text, in order.
    """
    if not text:
        return []

    return text.replace("\r\n", "\n").split("\n")


def list_to_string(items: Sequence[str]) -> str:
    """Join a sequence of strings with line feeds."""
    return "\n".join(items) if items else ""


def time_since(seconds: int) -> str:
    """Return a coarse label for an elapsed number of seconds.

    A unit is used only when more than one whole unit has elapsed, so
    exactly one minute still reads "seconds" and exactly one hour reads
    "60 minutes".

    Args:
        seconds: Whole seconds elapsed.

    Returns:
        A label such as "3 days" or "seconds".
    """
    for unit_seconds, label in _TIME_UNITS:
        interval = seconds // unit_seconds
        if interval > 1:
            return f"{interval} {label}"

    return "seconds"


def locate(
    root: DOMNode,
    selector: str,
    expect_type: type[WidgetType] | None = None,
    *,
    what: str,
) -> WidgetType:
    """Find a required host element below `root`.

    Args:
        root: Node to search from.
        selector: CSS selector of the element.
        expect_type: Optional widget class the element must be an instance of.
        what: Human description used in the error message.

    Returns:
        The matching widget.

    Raises:
        SetupError: If no matching element exists.
    """
    try:
        if expect_type is None:
            return root.query_one(selector)  # type: ignore[return-value]
        return root.query_one(selector, expect_type)
    except NoMatches:
        raise SetupError(f"Missing {what}.") from None
