"""Shared fixtures for triage tests."""

from collections.abc import Sequence
from dataclasses import replace

import pytest

from clarity_flow.triage.credentials import CredentialResolver
from clarity_flow.triage.interfaces import ProviderConfigStore
from clarity_flow.triage.models import ProviderCredential

VALID_GEMINI_KEY = "AIzaSy" + "A" * 33
VALID_OPENROUTER_KEY = "sk-or-v1-" + "b" * 40


class FakeConfigStore(ProviderConfigStore):
    """In-memory provider-config store that counts saves."""

    def __init__(self, configs: Sequence[ProviderCredential] = ()) -> None:
        self.configs = list(configs)
        self.save_count = 0

    async def load_provider_configs(self) -> list[ProviderCredential]:
        return [replace(config) for config in self.configs]

    async def save_provider_configs(self, configs: Sequence[ProviderCredential]) -> None:
        self.configs = [replace(config) for config in configs]
        self.save_count += 1


class FakeAdapter:
    """Provider adapter returning a canned response and recording calls."""

    def __init__(self, provider_id: str, response: str = "", error: Exception | None = None):
        self.provider_id = provider_id
        self.response = response
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def call(self, prompt: str, api_key: str | None) -> str:
        self.calls.append((prompt, api_key))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def gemini_credential() -> ProviderCredential:
    return ProviderCredential(provider_id="gemini", api_key=VALID_GEMINI_KEY, enabled=True)


@pytest.fixture
def openrouter_credential() -> ProviderCredential:
    return ProviderCredential(
        provider_id="openrouter", api_key=VALID_OPENROUTER_KEY, enabled=True
    )


@pytest.fixture
def fake_store(gemini_credential: ProviderCredential) -> FakeConfigStore:
    return FakeConfigStore([gemini_credential])


@pytest.fixture
def resolver(fake_store: FakeConfigStore) -> CredentialResolver:
    return CredentialResolver(fake_store, default_keys={})
