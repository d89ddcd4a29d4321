"""Model providers.

Hides which SDK produces a reply. The conversation calls
``LLMProvider.generate`` and never sees provider types.
"""

from .base import EmptyResponseError, LLMProvider
from .factory import SUPPORTED_PROVIDERS, create_llm_provider
from .models import ChatMessage, LLMResponse, TokenUsage
from .providers import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
    GeminiProvider,
    OpenAIProvider,
)

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "SUPPORTED_PROVIDERS",
    "ChatMessage",
    "EmptyResponseError",
    "GeminiProvider",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
]
