"""
Chalkboard: chat with a supportive or harsh AI teacher persona.

Each module hides one design decision: persona data and prompt layout,
the model provider, the storage backend, the conversation lifecycle and
the terminal presentation.
"""

__version__ = "0.1.0"

from .chat import (
    ChatPersistence,
    ChatSnapshot,
    ConversationOrchestrator,
    DisplayMode,
    Speaker,
    SubmitResult,
    Turn,
)
from .persona import PersonaConfig, build_prompt, load_persona

__all__ = [
    "ChatPersistence",
    "ChatSnapshot",
    "ConversationOrchestrator",
    "DisplayMode",
    "PersonaConfig",
    "Speaker",
    "SubmitResult",
    "Turn",
    "build_prompt",
    "load_persona",
]
