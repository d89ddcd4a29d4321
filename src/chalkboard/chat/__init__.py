"""Conversation module.

Turn model, persisted state access and the orchestrator that drives a
conversation with the model.
"""

from .errors import FailureKind, classify_failure
from .models import (
    ChatSnapshot,
    ChatStatus,
    DisplayMode,
    Speaker,
    SubmitResult,
    Turn,
)
from .orchestrator import ConversationOrchestrator
from .persistence import DARK_MODE_KEY, HISTORY_KEY, ChatPersistence

__all__ = [
    "ChatPersistence",
    "ChatSnapshot",
    "ChatStatus",
    "ConversationOrchestrator",
    "DARK_MODE_KEY",
    "DisplayMode",
    "FailureKind",
    "HISTORY_KEY",
    "Speaker",
    "SubmitResult",
    "Turn",
    "classify_failure",
]
