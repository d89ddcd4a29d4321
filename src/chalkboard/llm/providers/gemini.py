"""Gemini backend on the google-genai SDK.

Reference: https://github.com/googleapis/python-genai

Gemini answers a blocked or filtered prompt with no candidate text. That
comes back as an empty ``LLMResponse.content`` with the stop or block reason
in ``finish_reason``.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, TokenUsage

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Gemini calls the assistant side "model"
_WIRE_ROLES = {"user": "user", "assistant": "model"}


def _reason(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "value", None) or str(value)


class GeminiProvider(LLMProvider):
    """Google Gemini provider.

    Hidden design decisions:
    - SDK client construction
    - Roles map onto Gemini turn roles
    - Text is joined from the first candidate's text parts
    """

    def __init__(self, api_key: str, model: str = DEFAULT_GEMINI_MODEL, **client_kwargs: Any):
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    @staticmethod
    def _to_contents(messages: list[ChatMessage]) -> list[types.Content]:
        return [
            types.Content(role=_WIRE_ROLES[msg.role], parts=[types.Part(text=msg.content)])
            for msg in messages
        ]

    @staticmethod
    def _candidate_text(response: Any) -> str:
        if not response.candidates:
            return ""
        content = response.candidates[0].content
        if not content or not content.parts:
            return ""
        return "".join(part.text for part in content.parts if getattr(part, "text", None))

    @staticmethod
    def _finish_reason(response: Any) -> str | None:
        if response.candidates:
            return _reason(response.candidates[0].finish_reason)
        feedback = getattr(response, "prompt_feedback", None)
        return _reason(feedback.block_reason) if feedback else None

    @staticmethod
    def _usage(response: Any) -> TokenUsage | None:
        meta = response.usage_metadata
        if not meta:
            return None
        return TokenUsage(
            prompt_tokens=meta.prompt_token_count or 0,
            completion_tokens=meta.candidates_token_count or 0,
            total_tokens=meta.total_token_count or 0,
        )

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        contents = self._to_contents(messages)
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=contents,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )
        return LLMResponse(
            content=self._candidate_text(response),
            model=self._model,
            finish_reason=self._finish_reason(response),
            usage=self._usage(response),
        )

    async def close(self) -> None:
        # The SDK owns its HTTP session; nothing to release here
        pass
