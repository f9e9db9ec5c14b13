"""
Helper functions shared by the vector store node operations.
"""

import logging
import re
from typing import Any, Dict, List, Optional, TypeVar

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.exceptions import ValidationError
from langchain_hana_nodes.types import NodeInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOOL_NAME_INVALID_CHARS = re.compile(r"[\s.?!=+#@&*()\[\]{}:;,<>/\\'\"^%$_]+")


def log_ai_event(
    context: ExecutionContext,
    event_name: str,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Report an AI event to the host for tracking and analytics.

    Event reporting never interrupts the operation that emits it.
    """
    try:
        context.log_ai_event(event_name, payload)
    except Exception as e:
        logger.warning(f"Failed to log AI event '{event_name}': {e}")


def get_metadata_filters_values(context: ExecutionContext, item_index: int) -> Dict[str, Any]:
    """
    Build a metadata filter from the node's "Metadata Filter" option.

    Args:
        context: Execution context of the node
        item_index: Index of the item the filter is built for

    Returns:
        Mapping of metadata name to value, empty if nothing usable is set
    """
    try:
        metadata = context.get_node_parameter("options.metadata", item_index, {})
        if not isinstance(metadata, dict):
            return {}

        values = metadata.get("metadataValues")
        if not isinstance(values, list):
            return {}

        filters: Dict[str, Any] = {}
        for entry in values:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            if name and entry.get("value") is not None:
                filters[name] = entry["value"]
        return filters
    except Exception as e:
        logger.warning(f"Failed to process metadata filters: {e}")
        return {}


def get_node_parameter_safe(
    context: ExecutionContext,
    parameter_name: str,
    item_index: int,
    default_value: T,
) -> T:
    """Resolve a parameter, falling back to the default on any failure."""
    try:
        return context.get_node_parameter(parameter_name, item_index, default_value)
    except Exception as e:
        logger.warning(f"Failed to get parameter {parameter_name}: {e}")
        return default_value


def validate_required_parameters(
    context: ExecutionContext,
    item_index: int,
    required_params: List[str],
) -> None:
    """
    Check that all required parameters have a non-empty value.

    Raises:
        ValidationError: Listing every missing parameter
    """
    missing = []
    for param in required_params:
        value = get_node_parameter_safe(context, param, item_index, None)
        if value is None or value == "":
            missing.append(param)

    if missing:
        raise ValidationError(
            f"Missing required parameters: {', '.join(missing)}",
            {"missing": missing},
            item_index=item_index,
        )


def format_error_message(error: Any, context: Optional[str] = None) -> str:
    base_message = f"{context}: " if context else ""

    if isinstance(error, Exception):
        return f"{base_message}{error}"
    if isinstance(error, str):
        return f"{base_message}{error}"
    return f"{base_message}Unknown error occurred"


def node_name_to_tool_name(node: NodeInfo) -> str:
    """Derive a tool name from the node's display name."""
    return TOOL_NAME_INVALID_CHARS.sub("_", node.name)
