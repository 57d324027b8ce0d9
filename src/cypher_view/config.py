"""Configuration management for the query executor and Neo4j connection.

Loads configuration from environment variables and an optional .env file
in the working directory.

Example .env:

    NEO4J_URI=bolt://localhost:7687
    NEO4J_USERNAME=neo4j
    NEO4J_PASSWORD=your_password_here
    NEO4J_DATABASE=neo4j
    LARGE_INTEGER_MODE=string
    LOG_LEVEL=INFO
"""

from typing import Literal, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment / .env file.

    We use explicit aliases so the mapping to env vars is obvious and
    easy to consume from scripts.
    """

    # Neo4j configuration
    neo4j_uri: AnyUrl = Field(
        "bolt://localhost:7687",
        alias="NEO4J_URI",
        description="Neo4j connection URI, e.g. bolt://localhost:7687",
    )
    neo4j_username: str = Field(
        "neo4j",
        alias="NEO4J_USERNAME",
        description="Neo4j username",
    )
    neo4j_password: str = Field(
        "",
        alias="NEO4J_PASSWORD",
        description="Neo4j password",
    )
    neo4j_database: Optional[str] = Field(
        None,
        alias="NEO4J_DATABASE",
        description="Neo4j database name; the server default database when unset",
    )
    neo4j_encrypted: bool = Field(
        False,
        alias="NEO4J_ENCRYPTED",
        description="Encrypt the bolt connection",
    )
    neo4j_connection_timeout: float = Field(
        30.0,
        alias="NEO4J_CONNECTION_TIMEOUT",
        description="Seconds to wait for a TCP connection to be established",
    )
    neo4j_max_connection_lifetime: int = Field(
        3600,
        alias="NEO4J_MAX_CONNECTION_LIFETIME",
        description="Maximum lifetime of a Neo4j connection in seconds",
    )
    neo4j_max_connection_pool_size: int = Field(
        50,
        alias="NEO4J_MAX_CONNECTION_POOL_SIZE",
        description="Maximum number of connections in the Neo4j pool",
    )
    neo4j_auto_connect: bool = Field(
        True,
        alias="NEO4J_AUTO_CONNECT",
        description="Connect on demand when a session is requested before connect()",
    )

    # Result normalization
    large_integer_mode: Literal["string", "native"] = Field(
        "string",
        alias="LARGE_INTEGER_MODE",
        description=(
            'How integers outside the JavaScript safe range are returned: '
            '"string" (decimal text) or "native" (Python int)'
        ),
    )

    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Log level for server / CLI (e.g. DEBUG, INFO, WARN, ERROR)",
    )

    # Pydantic v2 settings for env loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,  # we use explicit aliases, so keep env lookup strict
        extra="ignore",
        populate_by_name=False,
    )
