from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """One message of a provider request."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class TokenUsage(BaseModel):
    """Token counts reported by the provider, zero where not reported."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """A provider reply normalized across backends."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Generated text; empty if the provider returned none")
    model: str = Field(description="Model that produced the reply")
    finish_reason: str | None = Field(
        default=None,
        description="Provider stop reason, e.g. STOP, SAFETY or length"
    )
    usage: TokenUsage | None = None
