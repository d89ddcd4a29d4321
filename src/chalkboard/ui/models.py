"""View models for the TUI.

Hides the shape of what widgets display; built from a ChatSnapshot by
``formatting.render_conversation``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MessageView:
    """One rendered turn."""

    speaker: str  # "user" or "assistant"
    label: str
    text: str
    time_label: str

    @property
    def is_user(self) -> bool:
        return self.speaker == "user"


@dataclass(frozen=True)
class WelcomeView:
    title: str
    body: str
    quote: str


@dataclass(frozen=True)
class ConversationView:
    """Everything the chat panel needs to draw one frame."""

    messages: list[MessageView] = field(default_factory=list)
    welcome: WelcomeView | None = None
    show_typing: bool = False
    error_notice: str | None = None
    dark: bool = False

    @property
    def show_welcome(self) -> bool:
        return self.welcome is not None
