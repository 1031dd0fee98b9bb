"""AI provider adapters."""

from .base import ProviderAdapter, ProviderRequest
from .gemini import GeminiProvider
from .openrouter import OpenRouterProvider


def default_adapters(**kwargs) -> dict[str, ProviderAdapter]:
    """One adapter per built-in provider, keyed by provider id."""
    adapters: list[ProviderAdapter] = [GeminiProvider(**kwargs), OpenRouterProvider(**kwargs)]
    return {adapter.provider_id: adapter for adapter in adapters}


__all__ = [
    "ProviderAdapter",
    "ProviderRequest",
    "GeminiProvider",
    "OpenRouterProvider",
    "default_adapters",
]
