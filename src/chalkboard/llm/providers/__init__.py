from .gemini import DEFAULT_GEMINI_MODEL, GeminiProvider
from .openai import DEFAULT_OPENAI_MODEL, OpenAIProvider

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "GeminiProvider",
    "OpenAIProvider",
]
