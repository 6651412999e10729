"""Exceptions raised by the intent board core."""


class IntentBoardError(RuntimeError):
    """Base class for intent board errors."""


class SetupError(IntentBoardError):
    """Raised when a required host element or collaborator is missing.

    The core assumes a fixed host markup, so this is always fatal for the
    component being constructed.
    """

    pass


class InsertionError(IntentBoardError):
    """Raised when an object without an assigned ID is added to a system."""

    pass
