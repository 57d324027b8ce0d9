"""Neo4j connection and session management."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession

from ..config import Config
from ..errors import ConnectionError, NOT_CONNECTED_MESSAGE, classify_connection_failure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionStatus:
    connected: bool
    uri: Optional[str] = None


def _driver_options(config: Config) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "connection_timeout": config.neo4j_connection_timeout,
        "max_connection_lifetime": config.neo4j_max_connection_lifetime,
        "max_connection_pool_size": config.neo4j_max_connection_pool_size,
    }
    # "+s" / "+ssc" schemes already pin encryption; the driver rejects both.
    if "+" not in (config.neo4j_uri.scheme or ""):
        options["encrypted"] = config.neo4j_encrypted
    return options


def _create_driver(config: Config) -> AsyncDriver:
    if not config.neo4j_password:
        logger.error("NEO4J_PASSWORD not set in environment variables or .env file")
        raise ValueError("NEO4J_PASSWORD must be set in environment variables or .env file")

    return AsyncGraphDatabase.driver(
        str(config.neo4j_uri),
        auth=(config.neo4j_username, config.neo4j_password),
        **_driver_options(config),
    )


class Neo4jClient:
    """Async Neo4j client with connection pooling.

    Hands out one fresh session per ``acquire_session`` call; the caller owns
    the session and must close it.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """Initialize Neo4j client with configuration."""
        self.config = config or Config()
        self._driver: Optional[AsyncDriver] = None
        self._connect_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._driver is not None

    async def connect(self) -> None:
        """Establish connection to Neo4j database."""
        async with self._connect_lock:
            if self._driver is not None:
                logger.debug("Already connected to %s", self.config.neo4j_uri)
                return

            logger.info("Connecting to Neo4j at %s", self.config.neo4j_uri)
            driver = _create_driver(self.config)

            # Driver creation is lazy and doesn't actually connect.
            try:
                await driver.verify_connectivity()
            except Exception as e:
                logger.error(f"Failed to connect to Neo4j: {e}")
                await self._close_driver(driver)
                raise classify_connection_failure(e) from e

            self._driver = driver

    async def close(self) -> None:
        """Close the Neo4j driver connection."""
        driver, self._driver = self._driver, None
        if driver is not None:
            logger.info("Closing Neo4j connection to %s", self.config.neo4j_uri)
            await self._close_driver(driver)

    disconnect = close

    @staticmethod
    async def _close_driver(driver: AsyncDriver) -> None:
        try:
            await driver.close()
        except Exception as e:
            logger.warning("Error closing Neo4j driver: %s", e, exc_info=True)

    def connection_status(self) -> ConnectionStatus:
        if self._driver is None:
            return ConnectionStatus(connected=False)
        return ConnectionStatus(connected=True, uri=str(self.config.neo4j_uri))

    async def acquire_session(self, **kwargs: Any) -> AsyncSession:
        """Open a new session, connecting first when auto-connect is enabled."""
        if self._driver is None:
            if not self.config.neo4j_auto_connect:
                raise ConnectionError(NOT_CONNECTED_MESSAGE)
            await self.connect()

        assert self._driver is not None  # for type checkers
        if self.config.neo4j_database:
            kwargs.setdefault("database", self.config.neo4j_database)
        return self._driver.session(**kwargs)

    async def test_connection(self, config: Optional[Config] = None) -> bool:
        """Verify that a server is reachable with the given (or current) settings.

        Uses a temporary driver and leaves the persistent connection untouched.
        Raises ``ConnectionError`` with a displayable message on failure.
        """
        config = config or self.config
        logger.info("Testing connection to %s", config.neo4j_uri)
        driver = _create_driver(config)
        try:
            await driver.verify_connectivity()
        except Exception as e:
            logger.error("Neo4j connection test failed: %s", e, exc_info=True)
            raise classify_connection_failure(e) from e
        finally:
            await self._close_driver(driver)

        logger.info("Connection test successful")
        return True

    async def __aenter__(self) -> "Neo4jClient":
        """Context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
