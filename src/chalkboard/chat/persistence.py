"""Typed access to persisted chat state.

Hides the keys and the serialization format used for the conversation
history and the display mode. Unreadable values are treated as absent.
"""

import json

from pydantic import TypeAdapter, ValidationError

from ..storage import KeyValueStore
from .models import DisplayMode, Turn

HISTORY_KEY = "chat_history"
DARK_MODE_KEY = "dark_mode"

_TURNS = TypeAdapter(list[Turn])


class ChatPersistence:
    """Reads and writes conversation history and display mode."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def load_conversation(self) -> list[Turn]:
        """Load the saved turns, or an empty list if absent or malformed."""
        raw = await self._store.get(HISTORY_KEY)
        if raw is None:
            return []
        try:
            return _TURNS.validate_json(raw)
        except ValidationError:
            return []

    async def save_conversation(self, turns: list[Turn] | tuple[Turn, ...]) -> None:
        """Overwrite the saved turns with the full list."""
        await self._store.set(HISTORY_KEY, _TURNS.dump_json(list(turns)).decode("utf-8"))

    async def clear_conversation(self) -> None:
        await self._store.delete(HISTORY_KEY)

    async def load_display_mode(self) -> DisplayMode:
        """Load the display mode, defaulting to light."""
        raw = await self._store.get(DARK_MODE_KEY)
        if raw is None:
            return DisplayMode.LIGHT
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            return DisplayMode.LIGHT
        return DisplayMode.DARK if value is True else DisplayMode.LIGHT

    async def save_display_mode(self, mode: DisplayMode) -> None:
        await self._store.set(DARK_MODE_KEY, json.dumps(mode.is_dark))
