from __future__ import annotations

from typing import Any

from ..config import (
    OPENROUTER_BASE_URL,
    OPENROUTER_MAX_TOKENS,
    OPENROUTER_MODEL,
    OPENROUTER_REFERER,
    OPENROUTER_TEMPERATURE,
    OPENROUTER_TITLE,
    PROVIDER_OPENROUTER,
)
from .base import ProviderAdapter, ProviderRequest, dig


class OpenRouterProvider(ProviderAdapter):
    provider_id = PROVIDER_OPENROUTER
    display_name = "OpenRouter"

    def __init__(
        self,
        model: str = OPENROUTER_MODEL,
        base_url: str = OPENROUTER_BASE_URL,
        max_tokens: int = OPENROUTER_MAX_TOKENS,
        temperature: float = OPENROUTER_TEMPERATURE,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.temperature = temperature

    def build_request(self, prompt: str, api_key: str) -> ProviderRequest:
        return ProviderRequest(
            url=f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "HTTP-Referer": OPENROUTER_REFERER,
                "X-Title": OPENROUTER_TITLE,
            },
            payload={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
            },
        )

    def extract_text(self, data: Any) -> str | None:
        text = dig(data, "choices", 0, "message", "content")
        return text if isinstance(text, str) else None
