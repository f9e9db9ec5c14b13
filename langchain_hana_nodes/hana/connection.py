"""
Connection utilities for SAP HANA Cloud.

Connections are opened per operation with a bounded number of retries, the
schema is switched on request, and tables can be cleared before inserting.
"""

import logging
import time

from hdbcli import dbapi

from langchain_hana_nodes.config import HanaCredentials
from langchain_hana_nodes.error_utils import create_backend_error
from langchain_hana_nodes.exceptions import ConfigurationError, StoreConnectionError

logger = logging.getLogger(__name__)


def connect_to_hana(
    credentials: HanaCredentials,
    reconnect_attempts: int = 3,
    reconnect_delay: float = 1,
) -> dbapi.Connection:
    """
    Create a connection to SAP HANA Cloud.

    Args:
        credentials: Host, user and connection flags
        reconnect_attempts: Number of connection attempts before giving up
        reconnect_delay: Delay in seconds between attempts

    Returns:
        An open hdbcli connection

    Raises:
        ConfigurationError: If host, username or password are missing
        StoreConnectionError: If all connection attempts fail
    """
    if not credentials.is_configured():
        raise ConfigurationError(
            "SAP HANA credentials are incomplete",
            {"required": ["host", "username", "password"]},
        )

    connection_params = credentials.get_connection_params()
    logger.info(f"Connecting to SAP HANA at {credentials.host}:{credentials.port}")

    attempt = 0
    last_exception = None

    while attempt < reconnect_attempts:
        try:
            connection = dbapi.connect(**connection_params)
            logger.info("Connected successfully to SAP HANA Cloud")
            return connection

        except dbapi.Error as e:
            last_exception = e
            attempt += 1

            error_msg = f"Connection attempt {attempt}/{reconnect_attempts} failed: {e}"
            if attempt < reconnect_attempts:
                logger.warning(f"{error_msg}, retrying in {reconnect_delay} seconds...")
                time.sleep(reconnect_delay)
            else:
                logger.error(f"{error_msg}, no more retry attempts.")

    error = create_backend_error(last_exception, "connection", "SAP HANA connection failed")
    if not isinstance(error, StoreConnectionError):
        error = StoreConnectionError(error.message, error.details)
    raise error from last_exception


def set_schema(connection: dbapi.Connection, schema: str) -> None:
    """Switch the session schema. A failure is logged and the default schema kept."""
    cursor = connection.cursor()
    try:
        cursor.execute(f'SET SCHEMA "{schema}"')
        logger.debug(f"Using schema {schema}")
    except dbapi.Error as e:
        logger.warning(f"Could not set schema {schema}: {e}")
    finally:
        cursor.close()


def clear_table(connection: dbapi.Connection, full_table_name: str) -> None:
    """
    Delete all rows of a table.

    A missing table is not an error, the table is created on insert. Other
    failures are logged and the insert continues.
    """
    cursor = connection.cursor()
    try:
        cursor.execute(f"DELETE FROM {full_table_name}")
        logger.info(f"Cleared table {full_table_name}")
    except dbapi.Error as e:
        if "not found" in str(e).lower():
            logger.debug(f"Table {full_table_name} does not exist yet, nothing to clear")
        else:
            logger.warning(f"Could not clear table {full_table_name}: {e}")
    finally:
        cursor.close()
