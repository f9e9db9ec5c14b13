"""Generic vector store node built from a backend adapter."""

from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter, VectorStoreNodeMeta
from langchain_hana_nodes.vectorstore_node.factory import VectorStoreNode, create_vector_store_node

__all__ = [
    "VectorStoreAdapter",
    "VectorStoreNode",
    "VectorStoreNodeMeta",
    "create_vector_store_node",
]
