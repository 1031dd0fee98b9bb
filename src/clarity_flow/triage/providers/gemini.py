from __future__ import annotations

from typing import Any

from ..config import GEMINI_BASE_URL, GEMINI_MODEL, PROVIDER_GEMINI
from .base import ProviderAdapter, ProviderRequest, dig


class GeminiProvider(ProviderAdapter):
    provider_id = PROVIDER_GEMINI
    display_name = "Gemini"

    def __init__(self, model: str = GEMINI_MODEL, base_url: str = GEMINI_BASE_URL, **kwargs: Any):
        super().__init__(**kwargs)
        self.model = model
        self.base_url = base_url.rstrip("/")

    def build_request(self, prompt: str, api_key: str) -> ProviderRequest:
        return ProviderRequest(
            url=f"{self.base_url}/models/{self.model}:generateContent",
            headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
            payload={"contents": [{"parts": [{"text": prompt}]}]},
        )

    def extract_text(self, data: Any) -> str | None:
        text = dig(data, "candidates", 0, "content", "parts", 0, "text")
        return text if isinstance(text, str) else None
