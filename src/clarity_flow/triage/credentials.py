"""Credential resolution and validation for AI providers."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime

from .config import (
    GEMINI_KEY_LENGTH,
    GEMINI_KEY_PREFIX,
    OPENROUTER_KEY_MIN_LENGTH,
    OPENROUTER_KEY_PREFIX,
    PROVIDER_GEMINI,
    PROVIDER_OPENROUTER,
    get_default_api_keys,
)
from .exceptions import ConfigStoreError
from .interfaces import ProviderConfigStore
from .logging_utils import get_logger, mask_secret
from .models import ProviderCredential

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyFormatRule:
    """Provider-specific API key format."""

    prefix: str
    min_length: int
    max_length: int | None = None

    def matches(self, api_key: str) -> bool:
        if not api_key.startswith(self.prefix):
            return False
        if len(api_key) < self.min_length:
            return False
        return self.max_length is None or len(api_key) <= self.max_length


KEY_FORMAT_RULES: dict[str, KeyFormatRule] = {
    PROVIDER_GEMINI: KeyFormatRule(
        prefix=GEMINI_KEY_PREFIX,
        min_length=GEMINI_KEY_LENGTH,
        max_length=GEMINI_KEY_LENGTH,
    ),
    PROVIDER_OPENROUTER: KeyFormatRule(
        prefix=OPENROUTER_KEY_PREFIX,
        min_length=OPENROUTER_KEY_MIN_LENGTH,
    ),
}


def validate_key_format(provider_id: str, api_key: str | None) -> bool:
    """
    Check an API key against the provider's format rule.

    Args:
        provider_id: Provider identifier
        api_key: Key to check

    Returns:
        True if the key is non-blank and matches; unknown providers never match
    """
    if not api_key or not api_key.strip():
        return False
    rule = KEY_FORMAT_RULES.get(provider_id)
    if rule is None:
        return False
    return rule.matches(api_key)


class CredentialResolver:
    """
    Resolves per-provider API keys from the config store.

    Persisted records take precedence; build-time environment defaults are
    used when a provider has no usable record.
    """

    def __init__(
        self,
        store: ProviderConfigStore,
        default_keys: Mapping[str, str] | None = None,
    ) -> None:
        """
        Initialize Credential Resolver.

        Args:
            store: Persisted provider-config store
            default_keys: Build-time default keys; read from the environment when None
        """
        self._store = store
        self._default_keys = (
            dict(default_keys) if default_keys is not None else get_default_api_keys()
        )

    @property
    def provider_ids(self) -> list[str]:
        """Providers with a known key format."""
        return list(KEY_FORMAT_RULES)

    async def _load(self) -> list[ProviderCredential]:
        try:
            return await self._store.load_provider_configs()
        except ConfigStoreError as e:
            logger.error(f"Could not load provider configs: {e}")
            return []

    async def _find(self, provider_id: str) -> ProviderCredential | None:
        for config in await self._load():
            if config.provider_id == provider_id:
                return config
        return None

    async def get_key(self, provider_id: str) -> str | None:
        """
        Get a usable API key for a provider.

        Args:
            provider_id: Provider identifier

        Returns:
            The API key, or None when the stored key fails format validation
            or no key is available at all
        """
        config = await self._find(provider_id)

        if config is not None and config.enabled and config.api_key.strip():
            if not validate_key_format(provider_id, config.api_key):
                logger.warning(
                    f"Invalid {provider_id} API key format: {mask_secret(config.api_key)}"
                )
                return None
            logger.debug(f"Using configured API key for {provider_id}")
            return config.api_key

        default_key = self._default_keys.get(provider_id)
        if default_key:
            logger.debug(f"Using environment API key for {provider_id}")
            return default_key

        logger.debug(f"No API key found for {provider_id}")
        return None

    async def has_credential(self, provider_id: str) -> bool:
        """
        Check that some key exists for a provider, without format validation.

        Args:
            provider_id: Provider identifier

        Returns:
            True if an enabled non-empty record or an environment default exists
        """
        config = await self._find(provider_id)
        if config is not None and config.enabled and config.api_key.strip():
            return True
        return bool(self._default_keys.get(provider_id))

    async def has_any_credential(self) -> bool:
        """Check whether at least one known provider has a key."""
        for provider_id in self.provider_ids:
            if await self.has_credential(provider_id):
                return True
        return False

    async def clean_invalid_keys(self) -> int:
        """
        Disable and clear stored keys that fail format validation.

        Safe to run unconditionally at startup: it is idempotent, writes back
        only when something changed, and logs store failures instead of raising.

        Returns:
            Number of records cleaned
        """
        try:
            configs = await self._store.load_provider_configs()
        except ConfigStoreError as e:
            logger.error(f"Error cleaning API keys: {e}")
            return 0

        cleaned_count = 0
        cleaned: list[ProviderCredential] = []
        for config in configs:
            if (
                config.api_key
                and config.provider_id in KEY_FORMAT_RULES
                and not validate_key_format(config.provider_id, config.api_key)
            ):
                logger.info(
                    f"Cleaning invalid {config.provider_id} API key: "
                    f"{mask_secret(config.api_key)}"
                )
                cleaned.append(
                    replace(
                        config,
                        api_key="",
                        enabled=False,
                        last_updated=datetime.now(),
                    )
                )
                cleaned_count += 1
            else:
                cleaned.append(config)

        if cleaned_count == 0:
            logger.debug("No invalid API keys found")
            return 0

        try:
            await self._store.save_provider_configs(cleaned)
        except ConfigStoreError as e:
            logger.error(f"Error saving cleaned API keys: {e}")
            return 0

        logger.info(f"Cleaned {cleaned_count} invalid API key(s) from storage")
        return cleaned_count

    async def update_key(self, provider_id: str, api_key: str) -> None:
        """
        Store a new key for a provider; the record is enabled iff the key is non-blank.

        Args:
            provider_id: Provider identifier
            api_key: New API key

        Raises:
            ConfigStoreError: If the store cannot be read or written
        """
        await self._update(
            provider_id,
            api_key=api_key.strip(),
            enabled=bool(api_key.strip()),
        )

    async def set_enabled(self, provider_id: str, enabled: bool) -> None:
        """
        Toggle a provider record.

        Args:
            provider_id: Provider identifier
            enabled: New enabled state

        Raises:
            ConfigStoreError: If the store cannot be read or written
        """
        await self._update(provider_id, enabled=enabled)

    async def _update(self, provider_id: str, **changes: object) -> None:
        configs = await self._store.load_provider_configs()
        now = datetime.now()

        updated = []
        found = False
        for config in configs:
            if config.provider_id == provider_id:
                config = replace(config, last_updated=now, **changes)
                found = True
            updated.append(config)

        if not found:
            updated.append(
                replace(
                    ProviderCredential(provider_id=provider_id),
                    last_updated=now,
                    **changes,
                )
            )

        await self._store.save_provider_configs(updated)
        logger.info(f"Updated {provider_id} provider config")
