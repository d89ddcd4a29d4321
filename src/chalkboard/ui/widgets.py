"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering
- Welcome panel, typing indicator and error notice
- Log rendering and level filtering
"""

from collections import deque
from datetime import datetime
from itertools import cycle

from rich.markup import escape
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, RichLog, Static

from .config import (
    COMPONENT_STYLES,
    INPUT_HISTORY_MAX_SIZE,
    LEVEL_STYLES,
    LOG_TIMESTAMP_FORMAT,
    TYPING_FRAMES,
    TYPING_INTERVAL,
    LogLevel,
)
from .models import ConversationView, MessageView, WelcomeView


class MessageBubble(Vertical):
    """A single chat turn with a header line and the message text."""

    def __init__(self, message: MessageView, *args, **kwargs) -> None:
        css_class = "user-message" if message.is_user else "assistant-message"
        super().__init__(*args, classes=f"chat-message {css_class}", **kwargs)
        self.message = message

    def compose(self):
        yield Static(
            f"{self.message.label} · {self.message.time_label}",
            classes="message-header",
            markup=False,
        )
        yield Static(self.message.text, classes="message-content", markup=False)


class WelcomePanel(Vertical):
    """Shown in place of the message list while the conversation is empty."""

    def __init__(self, welcome: WelcomeView, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.welcome = welcome

    def compose(self):
        yield Static(self.welcome.title, classes="welcome-title", markup=False)
        yield Static(self.welcome.body, classes="welcome-body", markup=False)
        yield Static(f'"{self.welcome.quote}"', classes="welcome-quote", markup=False)


class TypingIndicator(Static):
    """Animated dots shown while a reply is awaited."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(TYPING_FRAMES[0], *args, **kwargs)
        self._frames = cycle(TYPING_FRAMES)

    def on_mount(self) -> None:
        self.set_interval(TYPING_INTERVAL, self._advance)

    def _advance(self) -> None:
        self.update(next(self._frames))


class ErrorNotice(Static):
    """Transient error shown below the message list."""

    def __init__(self, text: str, *args, **kwargs) -> None:
        super().__init__(f"! {text}", *args, markup=False, **kwargs)
        self.text = text


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat panel. Redrawn from a ConversationView on every change."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._view: ConversationView | None = None

    @property
    def view(self) -> ConversationView | None:
        return self._view

    def show(self, view: ConversationView) -> None:
        """Replace the panel contents with the given view."""
        self._view = view
        widgets: list[Widget] = []
        if view.welcome is not None:
            widgets.append(WelcomePanel(view.welcome))
        widgets.extend(MessageBubble(message) for message in view.messages)
        if view.show_typing:
            widgets.append(TypingIndicator())
        if view.error_notice:
            widgets.append(ErrorNotice(view.error_notice))

        self.remove_children()
        self.mount_all(widgets)

        count = len(view.messages)
        self.border_subtitle = f"{count} messages" if count else "Conversation history"
        self.call_after_refresh(self.scroll_end, animate=False)


class InputHistory:
    """Bounded recall list for the input bar, newest entry last.

    ``older`` and ``newer`` move a cursor through past entries. Stepping
    newer past the latest entry returns to an empty field.
    """

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._entries: deque[str] = deque(maxlen=max_size)
        self._cursor: int | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: str) -> None:
        if not self._entries or self._entries[-1] != entry:
            self._entries.append(entry)
        self._cursor = None

    def older(self) -> str | None:
        """Step back one entry; None if there is nothing to recall."""
        if not self._entries:
            return None
        self._cursor = len(self._entries) - 1 if self._cursor is None else max(self._cursor - 1, 0)
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step forward one entry; "" when leaving the newest, None if not recalling."""
        if self._cursor is None:
            return None
        if self._cursor >= len(self._entries) - 1:
            self._cursor = None
            return ""
        self._cursor += 1
        return self._entries[self._cursor]


class ChatInputBar(Horizontal):
    """Single-line input with a Send button and Up/Down recall."""

    class Submitted(Message):
        """Posted with the raw text when the user sends a message."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, placeholder: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._placeholder = placeholder
        self.input_history = InputHistory()

    def compose(self):
        yield Input(placeholder=self._placeholder, id="chat-input")
        yield Button("Send", id="send-btn", variant="primary")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._send()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._send()

    def on_key(self, event) -> None:
        step = {"up": self.input_history.older, "down": self.input_history.newer}.get(event.key)
        if step is None:
            return
        event.prevent_default()
        event.stop()
        recalled = step()
        if recalled is not None:
            field = self.query_one("#chat-input", Input)
            field.value = recalled
            field.cursor_position = len(recalled)

    def _send(self) -> None:
        field = self.query_one("#chat-input", Input)
        value = field.value
        # Whitespace-only input stays in the field and is not sent
        if not value.strip():
            return
        self.input_history.add(value)
        field.value = ""
        self.post_message(self.Submitted(value))

    def set_busy(self, busy: bool) -> None:
        """Disable input and Send while a reply is awaited."""
        self.query_one("#chat-input", Input).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        self.query_one("#chat-input", Input).focus()


class DebugPanel(RichLog):
    """Timestamped trace of orchestrator, model and storage events.

    Hidden until shown with ``--log-level`` or toggled with Ctrl+D. Entries
    below ``log_level`` are dropped, not buffered.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, auto_scroll=True, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {self._log_level.name}" if self.display else "Hidden"

    def on_mount(self) -> None:
        self.display = False

    def log_entry(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Append one entry if ``level`` meets the panel threshold."""
        if level < self._log_level:
            return
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_style = LEVEL_STYLES.get(level, "white")
        component_style = COMPONENT_STYLES.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_style}]{level.name:<7}[/] "
            f"[{component_style}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display
