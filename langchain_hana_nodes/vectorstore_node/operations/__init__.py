from langchain_hana_nodes.vectorstore_node.operations.insert import handle_insert_operation
from langchain_hana_nodes.vectorstore_node.operations.load import handle_load_operation
from langchain_hana_nodes.vectorstore_node.operations.retrieve import handle_retrieve_operation
from langchain_hana_nodes.vectorstore_node.operations.retrieve_as_tool import handle_retrieve_as_tool_operation
from langchain_hana_nodes.vectorstore_node.operations.update import handle_update_operation

__all__ = [
    "handle_insert_operation",
    "handle_load_operation",
    "handle_retrieve_operation",
    "handle_retrieve_as_tool_operation",
    "handle_update_operation",
]
