"""
Factory for vector store workflow nodes.

``create_vector_store_node`` turns a backend adapter into a node type that
supports loading, inserting, updating and retrieving documents. Execution
style modes (load, insert, update) run through ``execute``; modes that
supply an object to AI nodes (retrieve, retrieve-as-tool) run through
``supply_data``.
"""

import logging
from typing import Any, Callable, Dict, Type

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.exceptions import ConfigurationError, operation_error_context
from langchain_hana_nodes.types import NodeConnectionType, NodeOutput, OperationMode, SupplyData
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.description import build_node_description
from langchain_hana_nodes.vectorstore_node.operations import (
    handle_insert_operation,
    handle_load_operation,
    handle_retrieve_as_tool_operation,
    handle_retrieve_operation,
    handle_update_operation,
)

logger = logging.getLogger(__name__)


def _execute_load(context, adapter, embeddings):
    results = []
    for item_index in range(len(context.get_input_data())):
        with operation_error_context(OperationMode.LOAD.value, item_index):
            results.extend(handle_load_operation(context, adapter, embeddings, item_index))
    return results


EXECUTE_HANDLERS: Dict[OperationMode, Callable[..., Any]] = {
    OperationMode.LOAD: _execute_load,
    OperationMode.INSERT: handle_insert_operation,
    OperationMode.UPDATE: handle_update_operation,
}

SUPPLY_DATA_HANDLERS: Dict[OperationMode, Callable[..., SupplyData]] = {
    OperationMode.RETRIEVE: handle_retrieve_operation,
    OperationMode.RETRIEVE_AS_TOOL: handle_retrieve_as_tool_operation,
}


def get_operation_mode(context: ExecutionContext) -> OperationMode:
    mode = context.get_node_parameter("mode", 0, OperationMode.RETRIEVE.value)
    try:
        return OperationMode(mode)
    except ValueError:
        raise ConfigurationError(f"Unknown operation mode '{mode}'") from None


class VectorStoreNode:
    """
    Node type operating on the vector store of ``adapter``.

    Use ``create_vector_store_node`` to build a subclass bound to an adapter.
    """

    adapter: VectorStoreAdapter

    def __init__(self):
        self.description = build_node_description(self.adapter)
        self.methods = self.adapter.methods

    def execute(self, context: ExecutionContext) -> NodeOutput:
        """
        Run the node in regular workflow mode.

        Supports the "load", "insert" and "update" operation modes.
        """
        mode = get_operation_mode(context)
        handler = EXECUTE_HANDLERS.get(mode)
        if handler is None:
            raise ConfigurationError(
                'Only the "load", "update" and "insert" operation modes are supported with execute',
                operation=mode.value,
            )

        embeddings = context.get_input_connection_data(NodeConnectionType.AI_EMBEDDING, 0)
        logger.info(f"Executing {self.adapter.meta.display_name} in '{mode.value}' mode")

        with operation_error_context(mode.value):
            result_data = handler(context, self.adapter, embeddings)
        return [result_data]

    def supply_data(self, context: ExecutionContext, item_index: int = 0) -> SupplyData:
        """
        Supply data to AI nodes.

        Supports the "retrieve" and "retrieve-as-tool" operation modes.
        """
        mode = get_operation_mode(context)
        handler = SUPPLY_DATA_HANDLERS.get(mode)
        if handler is None:
            raise ConfigurationError(
                'Only the "retrieve" and "retrieve-as-tool" operation modes are supported to supply data',
                operation=mode.value,
            )

        embeddings = context.get_input_connection_data(NodeConnectionType.AI_EMBEDDING, 0)

        with operation_error_context(mode.value, item_index):
            return handler(context, self.adapter, embeddings, item_index)


def create_vector_store_node(adapter: VectorStoreAdapter) -> Type[VectorStoreNode]:
    """Build a node type bound to a backend adapter."""
    return type(
        f"{type(adapter).__name__}Node",
        (VectorStoreNode,),
        {"adapter": adapter, "__doc__": adapter.meta.description},
    )
