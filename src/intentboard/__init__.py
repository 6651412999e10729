"""Intentboard: manage intents as cards with a shared view/create/edit modal."""

from intentboard.config import Config
from intentboard.errors import InsertionError, IntentBoardError, SetupError
from intentboard.intent import DeletionState, Intent, IntentBody
from intentboard.modal import IntentModal, ModalMode
from intentboard.system import IntentSystem

__all__ = [
    "Config",
    "DeletionState",
    "InsertionError",
    "Intent",
    "IntentBoardError",
    "IntentBody",
    "IntentModal",
    "IntentSystem",
    "ModalMode",
    "SetupError",
]
