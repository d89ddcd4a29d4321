from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class EmptyResponseError(RuntimeError):
    """Raised when a provider returns no usable text.

    ``finish_reason`` carries the provider's stop reason when one was
    reported, which is how safety blocks show up.
    """

    def __init__(self, model: str, finish_reason: str | None = None):
        detail = f" (finish reason: {finish_reason})" if finish_reason else ""
        super().__init__(f"{model} returned an empty response{detail}")
        self.model = model
        self.finish_reason = finish_reason


class LLMProvider(ABC):
    """Abstract model backend.

    Hidden design decisions:
    - Which SDK is called and how its client is authenticated
    - How roles and generation options map onto the wire format
    - Where text, stop reason and token counts live in the reply

    The conversation only needs ``generate``: one fully composed prompt in,
    the reply text out. Nothing is retried here; SDK errors propagate.
    ``last_response`` keeps the latest reply for its stop reason and usage.

        async with provider:
            text = await provider.generate(prompt)
    """

    last_response: LLMResponse | None = None

    @property
    @abstractmethod
    def model(self) -> str:
        """Model name requests are sent to."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send messages and return the normalized reply.

        Args:
            messages: Request messages in order
            temperature: Sampling temperature; None keeps the model default
            max_tokens: Output token cap; None keeps the model default

        Returns:
            LLMResponse, whose content may be empty
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client."""

    async def generate(self, prompt: str, **options: Any) -> str:
        """Send a single prompt as one user message and return the text.

        Args:
            prompt: Complete prompt text
            **options: Generation options forwarded to chat_completion

        Returns:
            The reply text, unmodified

        Raises:
            EmptyResponseError: If the reply carried no text
        """
        response = await self.chat_completion([ChatMessage(role="user", content=prompt)], **options)
        self.last_response = response
        if not response.content:
            raise EmptyResponseError(response.model, response.finish_reason)
        return response.content

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await self.close()
        except RuntimeError as e:
            # httpx can report a closed loop during interpreter shutdown
            if "Event loop is closed" not in str(e):
                raise
