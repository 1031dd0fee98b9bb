from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..config import DEFAULT_HTTP_TIMEOUT
from ..credentials import validate_key_format
from ..exceptions import (
    InvalidAPIKeyError,
    InvalidProviderResponseError,
    NoAPIKeyError,
    ProviderHTTPError,
    ProviderTransportError,
)
from ..logging_utils import get_logger, mask_secret

logger = get_logger(__name__)
# httpx logs full request lines at INFO
get_logger("httpx")


@dataclass
class ProviderRequest:
    url: str
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


class ProviderAdapter(ABC):
    """One HTTP call to an AI backend, returning the model's raw text."""

    provider_id: str = ""
    display_name: str = ""

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self._client = client

    @abstractmethod
    def build_request(self, prompt: str, api_key: str) -> ProviderRequest:
        """Provider-specific URL, auth and body."""
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str | None:
        """Pull the text payload out of the response envelope, or None."""
        raise NotImplementedError

    async def call(self, prompt: str, api_key: str | None) -> str:
        """
        Send the prompt and return the model's text.

        Raises:
            NoAPIKeyError: no credential
            InvalidAPIKeyError: credential fails format validation
            ProviderTransportError: connection or timeout failure
            ProviderHTTPError: non-success status
            InvalidProviderResponseError: no text payload in the envelope
        """
        if not api_key:
            raise NoAPIKeyError(
                f"{self.display_name} API key not found", provider_id=self.provider_id
            )
        if not validate_key_format(self.provider_id, api_key):
            raise InvalidAPIKeyError(
                f"Invalid {self.display_name} API key format", provider_id=self.provider_id
            )

        request = self.build_request(prompt, api_key)
        logger.debug(
            f"Calling {self.display_name} with key {mask_secret(api_key)} "
            f"(timeout={self.timeout}s)"
        )
        logger.trace(f"{self.display_name} prompt: {prompt}")

        try:
            if self._client is not None:
                response = await self._post(self._client, request)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, request)
        except httpx.TransportError as e:
            raise ProviderTransportError(
                f"{self.display_name} request failed: {e!r}", provider_id=self.provider_id
            ) from e

        if not response.is_success:
            raise ProviderHTTPError(
                f"{self.display_name} API error: {response.status_code} "
                f"{response.reason_phrase} - {response.text}",
                provider_id=self.provider_id,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidProviderResponseError(
                f"{self.display_name} returned a non-JSON body", provider_id=self.provider_id
            ) from e

        logger.trace(f"{self.display_name} response data: {data}")

        text = self.extract_text(data)
        if not text:
            raise InvalidProviderResponseError(
                f"Invalid response from {self.display_name} API",
                provider_id=self.provider_id,
            )
        return text

    async def _post(
        self, client: httpx.AsyncClient, request: ProviderRequest
    ) -> httpx.Response:
        return await client.post(
            request.url,
            params=request.params or None,
            headers=request.headers,
            json=request.payload,
            timeout=self.timeout,
        )


def dig(data: Any, *path: str | int) -> Any:
    """Follow a key/index path through nested JSON, returning None on any miss."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[step] if isinstance(step, int) else current.get(step)
        if current is None:
            return None
    return current
