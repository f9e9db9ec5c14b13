"""
Execution context handed to a node by the workflow host.

The context gives a node access to its parameters, input items, connected
sub-nodes (embeddings, document loaders, rerankers), credentials and the
cancellation signal of the running workflow. It also collects the AI events
and tool traces a node reports back to the host.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from langchain_hana_nodes.exceptions import ConfigurationError, ValidationError
from langchain_hana_nodes.types import ExecutionRecord, NodeConnectionType, NodeInfo

logger = logging.getLogger(__name__)

_MISSING = object()

ParameterValue = Union[Any, Callable[[int], Any]]


class ExecutionContext:
    """
    Per-invocation state of one node execution.

    Parameter values may be callables taking the item index, which stands in
    for expressions the host evaluates per item.
    """

    def __init__(
        self,
        node: NodeInfo,
        parameters: Optional[Dict[str, ParameterValue]] = None,
        input_items: Optional[Sequence[ExecutionRecord]] = None,
        connections: Optional[Dict[NodeConnectionType, List[Any]]] = None,
        credentials: Optional[Dict[str, Dict[str, Any]]] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.node = node
        self.parameters = parameters or {}
        self.input_items = list(input_items or [])
        self.connections = connections or {}
        self.credentials = credentials or {}
        self.cancel_event = cancel_event or threading.Event()

        # Scratch space shared by the handlers and adapter of this execution
        self.state: Dict[str, Any] = {}
        self.ai_events: List[Tuple[str, Dict[str, Any]]] = []
        self.input_traces: List[Tuple[NodeConnectionType, Any]] = []
        self.output_traces: List[Tuple[NodeConnectionType, int, Any]] = []

    def get_node(self) -> NodeInfo:
        return self.node

    def get_input_data(self, input_index: int = 0) -> List[ExecutionRecord]:
        return self.input_items

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = _MISSING,
        extract_value: bool = False,
    ) -> Any:
        """
        Resolve a parameter for an item.

        Args:
            name: Parameter name, dotted for nested values ("options.metadata")
            item_index: Index of the item the value is resolved for
            default: Value returned when the parameter is not set
            extract_value: Unwrap resource locator values ({"value": ...})

        Raises:
            ValidationError: If the parameter is not set and has no default
        """
        value: Any = self.parameters
        for part in name.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                value = _MISSING
                break

        if value is _MISSING:
            if default is _MISSING:
                raise ValidationError(f"Missing required parameter '{name}'", item_index=item_index)
            return default

        if callable(value):
            value = value(item_index)
        if extract_value and isinstance(value, dict) and "value" in value:
            value = value["value"]
        return value

    def get_input_connection_data(self, connection_type: NodeConnectionType, index: int = 0) -> Any:
        connected = self.connections.get(connection_type) or []
        if index >= len(connected):
            raise ConfigurationError(f"No node connected to the '{connection_type.value}' input")
        return connected[index]

    def get_credentials(self, name: str) -> Dict[str, Any]:
        if name not in self.credentials:
            raise ConfigurationError(f"Credentials '{name}' are not configured for this node")
        return self.credentials[name]

    def is_cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def log_ai_event(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> None:
        self.ai_events.append((event_name, payload or {}))
        logger.debug(f"[AI Event] {event_name} {payload or {}}")

    def add_input_data(self, connection_type: NodeConnectionType, data: Any) -> int:
        """Record input of a traced sub-node call and return its index token."""
        self.input_traces.append((connection_type, data))
        return len(self.input_traces) - 1

    def add_output_data(self, connection_type: NodeConnectionType, index: int, data: Any) -> None:
        """Record the output belonging to a previously traced input."""
        self.output_traces.append((connection_type, index, data))
