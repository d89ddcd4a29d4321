"""State-to-presentation mapping for the TUI.

Pure functions; no widgets are touched here.
"""

from datetime import datetime

from ..chat import ChatSnapshot, Turn
from ..persona import PersonaConfig
from .config import MESSAGE_TIME_FORMAT, USER_LABEL
from .models import ConversationView, MessageView, WelcomeView


def format_time(moment: datetime) -> str:
    """Format a timestamp like "9:05 AM"."""
    return moment.strftime(MESSAGE_TIME_FORMAT).lstrip("0")


def render_turn(turn: Turn, persona: PersonaConfig) -> MessageView:
    return MessageView(
        speaker=turn.speaker.value,
        label=USER_LABEL if turn.is_user else persona.name,
        text=turn.text,
        time_label=format_time(turn.created_at),
    )


def render_conversation(snapshot: ChatSnapshot, persona: PersonaConfig) -> ConversationView:
    """Map orchestrator state to a view.

    An empty conversation yields the welcome panel instead of messages.
    The typing indicator is shown exactly while a response is awaited.

    Args:
        snapshot: Current orchestrator state
        persona: Persona supplying labels and welcome text

    Returns:
        ConversationView ready for the chat panel
    """
    welcome = None
    if not snapshot.conversation:
        welcome = WelcomeView(
            title=persona.ui.welcome_title,
            body=persona.ui.welcome_body,
            quote=persona.ui.welcome_quote,
        )

    return ConversationView(
        messages=[render_turn(turn, persona) for turn in snapshot.conversation],
        welcome=welcome,
        show_typing=snapshot.awaiting_response,
        error_notice=snapshot.error_message,
        dark=snapshot.display_mode.is_dark,
    )
