"""Terminal UI module for chalkboard.

Provides a Textual-based TUI for chatting with a persona.

Module structure (each module hides a design decision):
- models.py: View models (what a frame shows)
- formatting.py: Pure mapping from orchestrator state to view models
- widgets.py: Custom widgets (messages, welcome panel, input, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Per-persona light and dark palettes
- screens.py: Modal dialogs (confirmation screens)
- app.py: Application wiring (user interaction flow)
"""

from .app import ChalkboardApp, run_chat_tui
from .config import LogLevel
from .formatting import format_time, render_conversation
from .models import ConversationView, MessageView, WelcomeView
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

__all__ = [
    "ChalkboardApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConversationView",
    "DebugPanel",
    "LogLevel",
    "MessageView",
    "WelcomeView",
    "format_time",
    "render_conversation",
    "run_chat_tui",
]
