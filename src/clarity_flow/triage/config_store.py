"""Provider-config store using SQLite."""

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime

import aiosqlite

from clarity_flow.triage.config import (
    PROVIDER_GEMINI,
    PROVIDER_OPENROUTER,
    SCHEMA_VERSION,
)
from clarity_flow.triage.exceptions import ConfigStoreError
from clarity_flow.triage.interfaces import ProviderConfigStore
from clarity_flow.triage.logging_utils import get_logger
from clarity_flow.triage.models import ProviderCredential

logger = get_logger(__name__)

PROVIDER_DESCRIPTIONS = {
    PROVIDER_GEMINI: "Google Gemini AI for task analysis and productivity",
    PROVIDER_OPENROUTER: "OpenRouter API for access to multiple AI models",
}


def default_provider_configs() -> list[ProviderCredential]:
    """Empty, disabled records for every known provider."""
    return [
        ProviderCredential(provider_id=provider_id, description=description)
        for provider_id, description in PROVIDER_DESCRIPTIONS.items()
    ]


class ProviderConfigDatabase(ProviderConfigStore):
    """SQLite database for provider credential records."""

    def __init__(self, db_path: str, wal_mode: bool = True) -> None:
        """
        Initialize database connection settings.

        Args:
            db_path: Path to SQLite database file (use ":memory:" for in-memory)
            wal_mode: Enable WAL mode for concurrent access
        """
        self.db_path = db_path
        self.wal_mode = wal_mode
        self._connection: aiosqlite.Connection | None = None
        # Serializes reads and replace-all writes on the shared connection
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Open the connection and create the schema if needed."""
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(self.db_path)
            except Exception as e:
                raise ConfigStoreError(f"Failed to open config store: {e}") from e
            self._connection.row_factory = aiosqlite.Row

            # WAL is not supported for :memory:
            if self.wal_mode and self.db_path != ":memory:":
                await self._connection.execute("PRAGMA journal_mode=WAL")

        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database schema with tables."""
        async with self._get_connection() as conn:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            result = await cursor.fetchone()
            current_version = result[0] if result and result[0] is not None else 0

            if current_version < SCHEMA_VERSION:
                await self._apply_migrations(conn, current_version)

            await conn.commit()

    async def _apply_migrations(
        self, conn: aiosqlite.Connection, from_version: int
    ) -> None:
        """
        Apply database migrations.

        Args:
            conn: Database connection
            from_version: Current schema version
        """
        if from_version < 1:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS provider_configs (
                    provider_id TEXT PRIMARY KEY,
                    api_key TEXT NOT NULL DEFAULT '',
                    enabled INTEGER NOT NULL DEFAULT 0,
                    description TEXT NOT NULL DEFAULT '',
                    last_updated TIMESTAMP
                )
                """
            )

            await conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )

    @asynccontextmanager
    async def _get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Get database connection context manager.

        Raises:
            ConfigStoreError: If connection is not initialized
        """
        if self._connection is None:
            raise ConfigStoreError("Config store not initialized")
        yield self._connection

    async def get_schema_version(self) -> int:
        """Get current schema version."""
        async with self._get_connection() as conn:
            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            result = await cursor.fetchone()
            return result[0] if result and result[0] is not None else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def load_provider_configs(self) -> list[ProviderCredential]:
        """
        Load all provider credential records.

        Returns:
            Stored records ordered by provider id, or one empty disabled
            record per known provider when nothing has been stored yet

        Raises:
            ConfigStoreError: If the store is not initialized or the read fails
        """
        async with self._lock, self._get_connection() as conn:
            try:
                cursor = await conn.execute(
                    "SELECT * FROM provider_configs ORDER BY provider_id"
                )
                rows = await cursor.fetchall()
            except aiosqlite.Error as e:
                raise ConfigStoreError(f"Failed to load provider configs: {e}") from e

        if not rows:
            return default_provider_configs()
        return [self._row_to_credential(row) for row in rows]

    async def save_provider_configs(self, configs: Sequence[ProviderCredential]) -> None:
        """
        Replace all stored records with the given list.

        Writes are serialized with loads, so readers never observe the table
        between the delete and the insert, and concurrent saves resolve as
        last writer wins.

        Args:
            configs: Records to persist

        Raises:
            ConfigStoreError: If the store is not initialized or the write fails
        """
        now = datetime.now()
        async with self._lock, self._get_connection() as conn:
            try:
                await conn.execute("DELETE FROM provider_configs")
                await conn.executemany(
                    """
                    INSERT INTO provider_configs (
                        provider_id, api_key, enabled, description, last_updated
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            config.provider_id,
                            config.api_key,
                            int(config.enabled),
                            config.description,
                            (config.last_updated or now).isoformat(),
                        )
                        for config in configs
                    ],
                )
                await conn.commit()
            except aiosqlite.Error as e:
                await conn.rollback()
                raise ConfigStoreError(f"Failed to save provider configs: {e}") from e

        logger.debug(f"Saved {len(configs)} provider configs")

    def _row_to_credential(self, row: aiosqlite.Row) -> ProviderCredential:
        """
        Convert database row to ProviderCredential.

        Args:
            row: Database row

        Returns:
            ProviderCredential object
        """
        return ProviderCredential(
            provider_id=row["provider_id"],
            api_key=row["api_key"],
            enabled=bool(row["enabled"]),
            description=row["description"],
            last_updated=(
                datetime.fromisoformat(row["last_updated"])
                if row["last_updated"]
                else None
            ),
        )
