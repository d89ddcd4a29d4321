from typing import Any

from .base import LLMProvider
from .providers import GeminiProvider, OpenAIProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
}

SUPPORTED_PROVIDERS = tuple(_PROVIDERS)


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create a provider by name.

    Args:
        provider: 'gemini' or 'openai' (case-insensitive)
        **config: Constructor arguments; ``api_key`` is required, ``model``
            is optional, and OpenAI also accepts ``base_url``

    Raises:
        ValueError: If the provider name is unknown
        TypeError: If ``api_key`` is missing or empty

    Examples:
        >>> provider = create_llm_provider("gemini", api_key="...")
        >>> provider.model
        'gemini-2.5-flash'
    """
    provider_class = _PROVIDERS.get(provider.lower())
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    if not config.get("api_key"):
        raise TypeError(f"{provider_class.__name__} requires 'api_key' in config")
    return provider_class(**config)
