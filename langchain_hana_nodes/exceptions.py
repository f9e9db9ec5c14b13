"""
Exceptions for the SAP HANA vector store workflow nodes.

Every error raised by a node operation derives from NodeOperationError so the
host can present it as a node-level failure carrying the operation name and
the index of the item that was being processed.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class NodeOperationError(Exception):
    """Base exception for all vector store node errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        item_index: Optional[int] = None,
    ):
        """
        Initialize exception with message and optional context.

        Args:
            message: Error message
            details: Additional error details
            operation: Operation mode that failed (e.g. "insert")
            item_index: Index of the input item being processed
        """
        self.message = message
        self.details = details or {}
        self.operation = operation
        self.item_index = item_index
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation of the error."""
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.item_index is not None:
            context.append(f"item={self.item_index}")

        text = self.message
        if context:
            text = f"{text} [{', '.join(context)}]"
        if self.details:
            text = f"{text} - Details: {self.details}"
        return text


class ConfigurationError(NodeOperationError):
    """Raised when a mode or capability is not available for this node."""
    pass


class ValidationError(NodeOperationError):
    """Raised for invalid input, e.g. a missing parameter or wrong document count."""
    pass


class BackendError(NodeOperationError):
    """Raised when the vector store backend fails."""
    pass


class StoreConnectionError(BackendError):
    """Raised when a connection to the vector store cannot be established."""
    pass


@contextmanager
def operation_error_context(operation: str, item_index: Optional[int] = None) -> Iterator[None]:
    """
    Attach operation context to errors raised inside the block.

    Node errors are annotated in place and re-raised. Any other exception is
    wrapped in a BackendError chained to the original.

    Args:
        operation: Name of the running operation
        item_index: Index of the item being processed, if any
    """
    try:
        yield
    except NodeOperationError as e:
        if e.operation is None:
            e.operation = operation
        if e.item_index is None:
            e.item_index = item_index
        raise
    except Exception as e:
        raise BackendError(
            f"{operation} operation failed: {e}",
            {"error_type": type(e).__name__},
            operation=operation,
            item_index=item_index,
        ) from e
