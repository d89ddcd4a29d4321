"""Conversation orchestration.

Owns the submit/respond/persist lifecycle of a single conversation.
Collaborators are injected:
- persona: static configuration driving the prompt and fallback text
- llm: the external model call
- persistence: typed access to the key-value store
- confirm: async yes/no prompt used before clearing history
"""

from collections.abc import Awaitable, Callable
from typing import Any

from ..llm import LLMProvider
from ..persona import PersonaConfig, build_prompt
from .errors import classify_failure
from .models import (
    ChatSnapshot,
    ChatStatus,
    DisplayMode,
    Speaker,
    SubmitResult,
    Turn,
)
from .persistence import ChatPersistence

ConfirmCallback = Callable[[str], Awaitable[bool]]
StateListener = Callable[[ChatSnapshot], None]


class ConversationOrchestrator:
    """Drives one conversation through ``idle -> awaiting-response -> idle``.

    Only one model call is outstanding at a time; a submit that arrives
    while awaiting a response is ignored.
    """

    def __init__(
        self,
        persona: PersonaConfig,
        llm: LLMProvider,
        persistence: ChatPersistence,
        confirm: ConfirmCallback,
    ) -> None:
        self._persona = persona
        self._llm = llm
        self._persistence = persistence
        self._confirm = confirm
        self._conversation: list[Turn] = []
        self._error_message: str | None = None
        self._status = ChatStatus.IDLE
        self._display_mode = DisplayMode.LIGHT
        self._listeners: list[StateListener] = []
        self._debug_callback: Any = None

    @property
    def persona(self) -> PersonaConfig:
        return self._persona

    @property
    def conversation(self) -> tuple[Turn, ...]:
        return tuple(self._conversation)

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def status(self) -> ChatStatus:
        return self._status

    @property
    def awaiting_response(self) -> bool:
        return self._status is ChatStatus.AWAITING_RESPONSE

    @property
    def display_mode(self) -> DisplayMode:
        return self._display_mode

    def snapshot(self) -> ChatSnapshot:
        """Return an immutable view of the current state."""
        return ChatSnapshot(
            conversation=self.conversation,
            error_message=self._error_message,
            awaiting_response=self.awaiting_response,
            display_mode=self._display_mode,
        )

    def add_listener(self, listener: StateListener) -> None:
        """Register a callable invoked with a snapshot after every state change."""
        self._listeners.append(listener)

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    async def start(self) -> ChatSnapshot:
        """Restore conversation and display mode from persistence."""
        self._conversation = await self._persistence.load_conversation()
        self._display_mode = await self._persistence.load_display_mode()
        self._debug(
            "info",
            "Chat",
            f"Restored {len(self._conversation)} turn(s), {self._display_mode.value} mode",
        )
        self._notify()
        return self.snapshot()

    async def _persist(self, what: str, operation: Awaitable[None]) -> None:
        # In-memory state stays authoritative when the store fails
        try:
            await operation
        except Exception as e:
            self._debug("error", "Storage", f"Failed to {what}: {type(e).__name__}: {e}")

    async def _append(self, turn: Turn) -> None:
        self._conversation.append(turn)
        self._notify()
        await self._save_history()

    async def _save_history(self) -> None:
        await self._persist("save history", self._persistence.save_conversation(self._conversation))

    def _usage_note(self) -> str:
        response = self._llm.last_response
        if response is None or response.usage is None:
            return ""
        usage = response.usage
        return (
            f" ({usage.prompt_tokens} prompt + {usage.completion_tokens} completion tokens,"
            f" finish: {response.finish_reason or 'unknown'})"
        )

    def _result(self) -> SubmitResult:
        return SubmitResult(conversation=self.conversation, error_message=self._error_message)

    async def submit(self, user_text: str) -> SubmitResult:
        """Handle one user message.

        The user turn is appended and published before the model is called.
        On success the reply is appended verbatim; on failure no assistant
        turn is added and the persona's fallback message is set instead.

        Args:
            user_text: Raw user input; whitespace-only input is ignored

        Returns:
            SubmitResult with the conversation and current error value
        """
        if not user_text.strip():
            return self._result()
        if self.awaiting_response:
            self._debug("warning", "Chat", "Submit ignored while awaiting a response")
            return self._result()

        # Status must flip before the first await
        self._error_message = None
        self._status = ChatStatus.AWAITING_RESPONSE
        self._conversation.append(Turn(text=user_text, speaker=Speaker.USER))
        self._notify()
        self._debug("info", "LLM", f"Requesting reply from {self._llm.model}")

        try:
            await self._save_history()
            reply = await self._llm.generate(build_prompt(self._persona, user_text))
        except Exception as e:
            kind = classify_failure(e)
            self._debug("error", "LLM", f"{kind.value}: {type(e).__name__}: {e}")
            self._error_message = self._persona.ui.error_message
        else:
            self._debug("debug", "LLM", f"Received {len(reply)} characters{self._usage_note()}")
            await self._append(Turn(text=reply, speaker=Speaker.ASSISTANT))
            self._error_message = None
        finally:
            self._status = ChatStatus.IDLE
            self._notify()

        return self._result()

    def dismiss_error(self) -> None:
        """Drop the transient error value."""
        if self._error_message is not None:
            self._error_message = None
            self._notify()

    async def clear(self) -> bool:
        """Clear the conversation after user confirmation.

        Returns:
            True if the conversation was cleared, False if declined or a
            reply is still awaited
        """
        if self.awaiting_response:
            self._debug("warning", "Chat", "Clear refused while awaiting a response")
            return False
        if not await self._confirm(self._persona.ui.clear_confirmation):
            self._debug("debug", "Chat", "Clear declined")
            return False
        if self.awaiting_response:
            self._debug("warning", "Chat", "Clear refused while awaiting a response")
            return False

        self._conversation = []
        self._error_message = None
        await self._persist("clear history", self._persistence.clear_conversation())
        self._debug("info", "Chat", "Conversation cleared")
        self._notify()
        return True

    async def toggle_display_mode(self) -> DisplayMode:
        """Flip between light and dark mode and persist the choice."""
        self._display_mode = self._display_mode.toggled()
        await self._persist("save display mode", self._persistence.save_display_mode(self._display_mode))
        self._debug("debug", "Chat", f"Display mode: {self._display_mode.value}")
        self._notify()
        return self._display_mode
