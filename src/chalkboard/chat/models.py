"""Data models for the conversation.

These models define turns, display mode and the state snapshot handed to
renderers, independent of storage and presentation.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Speaker(str, Enum):
    """Who produced a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class DisplayMode(str, Enum):
    """Light/dark presentation preference."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "DisplayMode":
        return DisplayMode.LIGHT if self is DisplayMode.DARK else DisplayMode.DARK

    @property
    def is_dark(self) -> bool:
        return self is DisplayMode.DARK


class Turn(BaseModel):
    """One utterance in the conversation.

    ``created_at`` is for display only; list position is the order.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    speaker: Speaker
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.speaker is Speaker.USER


class ChatStatus(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class ChatSnapshot(BaseModel):
    """Immutable view of the orchestrator state for renderers."""

    model_config = ConfigDict(frozen=True)

    conversation: tuple[Turn, ...] = ()
    error_message: str | None = None
    awaiting_response: bool = False
    display_mode: DisplayMode = DisplayMode.LIGHT


class SubmitResult(BaseModel):
    """Outcome of a single submit call."""

    model_config = ConfigDict(frozen=True)

    conversation: tuple[Turn, ...]
    error_message: str | None = None
