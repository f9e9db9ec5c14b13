from typing import Dict, List, Optional

from langchain_hana_nodes.types import NodeConnectionType, OperationMode

NODE_VERSIONS = [1, 1.1, 1.2, 1.3]

# Version from which inserted documents are embedded in batches after all items are read
BATCHED_INSERT_VERSION = 1.1
# Version from which the tool name is derived from the node name
NODE_NAME_TOOL_VERSION = 1.3

DEFAULT_EMBEDDING_BATCH_SIZE = 200
DEFAULT_TOP_K = 4

DEFAULT_OPERATION_MODES = [
    OperationMode.LOAD,
    OperationMode.INSERT,
    OperationMode.RETRIEVE,
    OperationMode.RETRIEVE_AS_TOOL,
]

OPERATION_MODE_DESCRIPTIONS: List[Dict[str, Optional[str]]] = [
    {
        "name": "Get Many",
        "value": OperationMode.LOAD.value,
        "description": "Get many ranked documents from vector store for query",
        "action": "Get ranked documents from vector store",
    },
    {
        "name": "Insert Documents",
        "value": OperationMode.INSERT.value,
        "description": "Insert documents into vector store",
        "action": "Add documents to vector store",
    },
    {
        "name": "Retrieve Documents (As Vector Store for Chain/Tool)",
        "value": OperationMode.RETRIEVE.value,
        "description": "Retrieve documents from vector store to be used as vector store with AI nodes",
        "action": "Retrieve documents for Chain/Tool as Vector Store",
        "output_connection_type": NodeConnectionType.AI_VECTOR_STORE.value,
    },
    {
        "name": "Retrieve Documents (As Tool for AI Agent)",
        "value": OperationMode.RETRIEVE_AS_TOOL.value,
        "description": "Retrieve documents from vector store to be used as tool with AI nodes",
        "action": "Retrieve documents for AI Agent as Tool",
        "output_connection_type": NodeConnectionType.AI_TOOL.value,
    },
    {
        "name": "Update Documents",
        "value": OperationMode.UPDATE.value,
        "description": "Update documents in vector store by ID",
        "action": "Update vector store documents",
    },
]
