from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, TokenUsage

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAIProvider(LLMProvider):
    """Chat Completions provider.

    Works against any OpenAI-compatible server through ``base_url``.
    Options left as None are omitted from the request so the server
    defaults apply.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        params: dict[str, Any] = {
            "model": self._model,
            "messages": [msg.model_dump() for msg in messages],
        }
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        completion = await self._client.chat.completions.create(**params)

        choice = completion.choices[0] if completion.choices else None
        usage = None
        if completion.usage:
            usage = TokenUsage(
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
                total_tokens=completion.usage.total_tokens,
            )
        return LLMResponse(
            content=(choice.message.content if choice else None) or "",
            model=completion.model,
            finish_reason=choice.finish_reason if choice else None,
            usage=usage,
        )

    async def close(self) -> None:
        await self._client.close()
