"""Main Textual TUI application.

Wires the conversation orchestrator to the widgets. The app owns no
conversation state: every redraw is driven by an orchestrator snapshot.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..chat import ChatPersistence, ChatSnapshot, ConversationOrchestrator
from ..llm import LLMProvider
from ..persona import PersonaConfig
from ..storage import KeyValueStore
from .config import LogLevel
from .formatting import render_conversation
from .screens import ConfirmationScreen
from .styles import APP_CSS
from .themes import persona_themes, theme_name
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class ChalkboardApp(App):
    """Textual chat client for a persona-driven tutor."""

    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+t", "toggle_display_mode", "Light/Dark", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
        Binding("escape", "dismiss_error", "Dismiss", show=False),
    ]

    def __init__(
        self,
        persona: PersonaConfig,
        llm: LLMProvider,
        store: KeyValueStore,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._persona = persona
        self._llm = llm
        self._store = store
        self._log_level = log_level
        self._orchestrator = ConversationOrchestrator(
            persona=persona,
            llm=llm,
            persistence=ChatPersistence(store),
            confirm=self._confirm,
        )

    @property
    def orchestrator(self) -> ConversationOrchestrator:
        return self._orchestrator

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(self._persona.ui.motto, id="motto", markup=False)
        yield ChatHistoryWidget(id="chat-history")
        yield ChatInputBar(id="chat-input-bar", placeholder=self._persona.ui.input_placeholder)
        yield DebugPanel(id="debug-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Register themes, connect storage and restore the conversation."""
        for theme in persona_themes(self._persona):
            self.register_theme(theme)

        self.title = self._persona.name
        self.sub_title = f"{self._persona.ui.tagline} | {self._llm.model} | {self._store.backend_type}"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry("TUI", f"Log panel enabled at {log_panel.log_level.name}", LogLevel.INFO)

        self._orchestrator.set_debug_callback(self._route_debug)
        self._orchestrator.add_listener(self._on_state_change)

        await self._store.connect()
        await self._orchestrator.start()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(component, message, LogLevel.from_string(level))

    def _on_state_change(self, snapshot: ChatSnapshot) -> None:
        self.theme = theme_name(self._persona, snapshot.display_mode)
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.show(render_conversation(snapshot, self._persona))

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_busy(snapshot.awaiting_response)
        if not snapshot.awaiting_response:
            input_bar.focus_input()

    async def _confirm(self, prompt: str) -> bool:
        """Confirmation collaborator backed by a modal screen."""
        return bool(await self.push_screen_wait(ConfirmationScreen(prompt)))

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._submit(event.value)

    @work(group="submit")
    async def _submit(self, user_text: str) -> None:
        """Run one turn as a background async worker."""
        result = await self._orchestrator.submit(user_text)
        if result.error_message:
            self.notify("Reply failed", severity="error", timeout=3)

    @work(group="clear")
    async def _clear_chat(self) -> None:
        if await self._orchestrator.clear():
            self.notify("Chat cleared", timeout=2)

    def action_clear_chat(self) -> None:
        """Ask for confirmation, then clear the conversation."""
        if self._orchestrator.awaiting_response:
            self.notify("Wait for the reply first", severity="warning", timeout=2)
            return
        self._clear_chat()

    async def action_toggle_display_mode(self) -> None:
        """Switch between light and dark mode."""
        mode = await self._orchestrator.toggle_display_mode()
        self.notify(f"{mode.value.capitalize()} mode", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_dismiss_error(self) -> None:
        self._orchestrator.dismiss_error()


async def run_chat_tui(
    persona: PersonaConfig,
    llm: LLMProvider,
    store: KeyValueStore,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        persona: Persona variant to chat with
        llm: LLM provider instance
        store: Key-value store for history and display mode
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChalkboardApp(persona=persona, llm=llm, store=store, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await store.disconnect()
        await llm.close()
