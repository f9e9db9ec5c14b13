"""
Error interpretation for SAP HANA vector store operations.

Backend failures are matched against known SAP HANA error messages so the
BackendError raised to the workflow carries a short explanation and a
suggested fix for the operation that failed.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from langchain_hana_nodes.exceptions import BackendError, StoreConnectionError

ERROR_PATTERNS = {
    "connection_failed": re.compile(r"(connection to the server has been lost|cannot connect to .+|network error|connection refused|connection failed)", re.IGNORECASE),
    "timeout": re.compile(r"(connection timed out|timeout expired|operation timed out)", re.IGNORECASE),
    "auth_error": re.compile(r"(invalid username or password|authentication failed|not authorized)", re.IGNORECASE),
    "insufficient_privileges": re.compile(r"(insufficient privilege|permission denied)", re.IGNORECASE),
    "table_not_found": re.compile(r"(table .+ not found|invalid table name)", re.IGNORECASE),
    "column_not_found": re.compile(r"(column .+ not found|invalid column name)", re.IGNORECASE),
    "invalid_vector_dimension": re.compile(r"(invalid vector dimension|vector length mismatch|vector size mismatch)", re.IGNORECASE),
    "schema_error": re.compile(r"(invalid schema name|schema .+ not found)", re.IGNORECASE),
}

ERROR_SUGGESTIONS = {
    "connection_failed": "Check the host, port and network access to the SAP HANA Cloud instance",
    "timeout": "Increase the connect timeout or check the instance load",
    "auth_error": "Verify the username and password of the SAP HANA credentials",
    "insufficient_privileges": "Grant the database user access to the vector table",
    "table_not_found": "Verify the table name, or insert documents first so the table is created",
    "column_not_found": "Check the configured content, metadata and vector column names",
    "invalid_vector_dimension": "Use the same embedding model for inserting and querying",
    "schema_error": "Verify the schema name in the credentials or node options",
}

OPERATION_DESCRIPTIONS = {
    "connection": "Connecting to SAP HANA Cloud",
    "populate": "Adding documents to the vector table",
    "similarity_search": "Performing vector similarity search",
    "clear_table": "Clearing the vector table",
    "update": "Updating a document by ID",
}


def identify_error_type(error_message: str) -> str:
    """
    Identify the type of error based on the error message pattern.

    Args:
        error_message: The error message string to analyze

    Returns:
        str: The identified error type or "unknown_error" if no pattern matches
    """
    for error_type, pattern in ERROR_PATTERNS.items():
        if pattern.search(error_message):
            return error_type

    return "unknown_error"


def get_error_suggestions(error_type: str, operation_type: str) -> Dict[str, Any]:
    """
    Get a description of the operation and a suggestion for the error type.

    Args:
        error_type: The type of error identified
        operation_type: The backend operation being performed

    Returns:
        Dict with error_type, operation and suggestion
    """
    return {
        "error_type": error_type,
        "operation": OPERATION_DESCRIPTIONS.get(operation_type, f"Performing {operation_type}"),
        "suggestion": ERROR_SUGGESTIONS.get(
            error_type, "Consult SAP HANA Cloud documentation for more information"
        ),
    }


def create_backend_error(
    error: Exception,
    operation_type: str,
    message: str,
    item_index: Optional[int] = None,
) -> BackendError:
    """
    Build a BackendError with context-aware details for a backend failure.

    Connection and authentication failures become StoreConnectionError.

    Args:
        error: The original exception
        operation_type: The backend operation being performed
        message: Leading message, the original error text is appended
        item_index: Index of the item being processed

    Returns:
        The error to raise (chain it with ``from error``)
    """
    error_message = str(error)
    error_type = identify_error_type(error_message)
    details = get_error_suggestions(error_type, operation_type)

    error_class = BackendError
    if error_type in ("connection_failed", "timeout", "auth_error"):
        error_class = StoreConnectionError

    return error_class(f"{message}: {error_message}", details, item_index=item_index)
