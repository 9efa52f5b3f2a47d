"""
PostgreSQL Client Wrapper

Centralized PostgreSQL access over an asyncpg connection pool.
Provides configuration integration and a consistent database access pattern.

Usage:
    from core.postgres_client import get_postgres_client

    # Get client instance
    db = get_postgres_client("inventory_service")

    # Scoped connection (transactions)
    async with db.acquire() as conn:
        async with conn.transaction():
            ...
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import asyncpg

from core.config import InfraConfig, get_settings

logger = logging.getLogger(__name__)


class PostgresClientWrapper:
    """
    PostgreSQL client wrapper around an asyncpg pool.

    - Pool is created lazily on first use
    - Connections are always returned to the pool
    - Environment/config fallbacks for connection settings
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[InfraConfig] = None,
        dsn: Optional[str] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            config: Infrastructure configuration (defaults to global settings)
            dsn: Explicit connection string, overrides config
        """
        self.service_name = service_name
        self.config = config or get_settings().infrastructure
        self.dsn = dsn or self.config.postgres_dsn

        self._pool: Optional[asyncpg.Pool] = None
        self._pool_lock = asyncio.Lock()

        logger.info(
            f"PostgreSQL client initialized for {service_name}: "
            f"{self.config.postgres_host}:{self.config.postgres_port}/{self.config.postgres_db}"
        )

    async def get_pool(self) -> asyncpg.Pool:
        """Get (or lazily create) the connection pool"""
        if self._pool is None:
            async with self._pool_lock:
                if self._pool is None:
                    self._pool = await asyncpg.create_pool(
                        dsn=self.dsn,
                        min_size=self.config.postgres_pool_min_size,
                        max_size=self.config.postgres_pool_max_size,
                        command_timeout=self.config.postgres_command_timeout,
                        server_settings={"application_name": self.service_name},
                    )
                    logger.info(f"PostgreSQL pool created for {self.service_name}")
        return self._pool

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection, released on every exit path"""
        pool = await self.get_pool()
        async with pool.acquire() as conn:
            yield conn

    async def close(self):
        """Close the pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info(f"PostgreSQL pool closed for {self.service_name}")


# Singleton instances per service
_postgres_clients: Dict[str, PostgresClientWrapper] = {}


def get_postgres_client(
    service_name: str,
    config: Optional[InfraConfig] = None,
    dsn: Optional[str] = None,
) -> PostgresClientWrapper:
    """
    Get or create PostgreSQL client for a service.

    Args:
        service_name: Service name
        config: Optional infrastructure config override
        dsn: Optional DSN override

    Returns:
        PostgresClientWrapper instance
    """
    if service_name not in _postgres_clients:
        _postgres_clients[service_name] = PostgresClientWrapper(
            service_name=service_name,
            config=config,
            dsn=dsn,
        )

    return _postgres_clients[service_name]
