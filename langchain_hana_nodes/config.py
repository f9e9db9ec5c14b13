"""
Configuration for the SAP HANA vector store nodes.

Settings come from explicit arguments first and fall back to environment
variables, which may be provided through a local .env file.
"""

import os
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class NodeSettings(BaseModel):
    """
    Runtime settings shared by all vector store nodes.

    These settings can be configured via environment variables:
    - HANA_NODES_ENV: "development" enables method call logging by default
    - HANA_NODES_LOG_METHOD_CALLS: Log every proxied vector store call
    - HANA_NODES_EMBEDDING_BATCH_SIZE: Default insert batch size (default: 200)
    - HANA_NODES_TOP_K: Default number of search results (default: 4)
    """
    environment: str = "production"
    log_method_calls: bool = False
    default_embedding_batch_size: int = Field(default=200, ge=1)
    default_top_k: int = Field(default=4, ge=1)

    def __init__(self, **data):
        """Initialize with values from environment variables if not provided."""
        if "environment" not in data:
            data["environment"] = os.getenv("HANA_NODES_ENV", "production")
        if "log_method_calls" not in data:
            data["log_method_calls"] = _env_flag(
                "HANA_NODES_LOG_METHOD_CALLS",
                "true" if data["environment"] == "development" else "false",
            )
        if "default_embedding_batch_size" not in data:
            data["default_embedding_batch_size"] = int(os.getenv("HANA_NODES_EMBEDDING_BATCH_SIZE", "200"))
        if "default_top_k" not in data:
            data["default_top_k"] = int(os.getenv("HANA_NODES_TOP_K", "4"))
        super().__init__(**data)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


class HanaCredentials(BaseModel):
    """
    SAP HANA Cloud credentials with environment fallback.

    These settings can be configured via environment variables:
    - HANA_HOST: SAP HANA Cloud host address
    - HANA_PORT: SAP HANA port (default: 30015)
    - HANA_USER: Database username
    - HANA_PASSWORD: Database password
    - HANA_SCHEMA: Default schema (optional)
    """
    host: str = ""
    port: int = 30015
    username: str = ""
    password: str = ""
    database: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    encrypt: bool = True
    ssl_validate_certificate: bool = False
    connect_timeout: int = 30000
    autocommit: bool = True

    model_config = {"populate_by_name": True}

    def __init__(self, **data):
        """Initialize with values from environment variables if not provided."""
        if not data.get("host"):
            data["host"] = os.getenv("HANA_HOST", "")
        if not data.get("port"):
            data["port"] = int(os.getenv("HANA_PORT", "30015"))
        if not data.get("username"):
            data["username"] = os.getenv("HANA_USER", "")
        if not data.get("password"):
            data["password"] = os.getenv("HANA_PASSWORD", "")
        if "schema" not in data and "schema_name" not in data and os.getenv("HANA_SCHEMA"):
            data["schema"] = os.getenv("HANA_SCHEMA")
        super().__init__(**data)

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"Invalid SAP HANA port: {value}")
        return value

    @classmethod
    def from_mapping(cls, values: Dict[str, Any]) -> "HanaCredentials":
        """
        Build credentials from the host's credential record.

        The record stores connection flags in a nested ``options`` mapping.
        """
        data = {key: value for key, value in values.items() if key != "options"}
        options = values.get("options") or {}
        if "encrypt" in options:
            data["encrypt"] = options["encrypt"]
        if "sslValidateCertificate" in options:
            data["ssl_validate_certificate"] = options["sslValidateCertificate"]
        if "connectTimeout" in options:
            data["connect_timeout"] = options["connectTimeout"]
        if "autocommit" in options:
            data["autocommit"] = options["autocommit"]
        return cls(**data)

    def get_connection_params(self) -> Dict[str, Any]:
        """
        Get database connection parameters as a dictionary.

        Returns:
            Dict[str, Any]: Connection parameters for hdbcli.
        """
        params = {
            "address": self.host,
            "port": self.port,
            "user": self.username,
            "password": self.password,
            "encrypt": self.encrypt,
            "sslValidateCertificate": self.ssl_validate_certificate,
            "connectTimeout": self.connect_timeout,
            "autocommit": self.autocommit,
        }
        if self.database:
            params["databaseName"] = self.database
        return params

    def is_configured(self) -> bool:
        """Check that host, username and password are present."""
        return bool(self.host and self.username and self.password)


@lru_cache()
def get_settings() -> NodeSettings:
    """Get the cached node settings."""
    settings = NodeSettings()
    logger.debug(f"Loaded node settings for environment '{settings.environment}'")
    return settings
