"""
SAP HANA Cloud Vector Store Nodes for LangChain Workflows

This package exposes an SAP HANA Cloud vector store as a workflow node that
can load, insert and retrieve documents, or act as a search tool for AI agents.

Features:
- Generic vector store node built from a small backend adapter
- JSON workflow items turned into LangChain documents
- Batched document insertion with cancellation support
- Optional reranking of search results
- Call logging and tool tracing for downstream AI nodes
- SAP HANA Cloud backend based on langchain-hana and hdbcli
"""

from importlib import metadata

from langchain_hana_nodes.config import HanaCredentials, NodeSettings, get_settings
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.exceptions import (
    BackendError,
    ConfigurationError,
    NodeOperationError,
    StoreConnectionError,
    ValidationError,
)
from langchain_hana_nodes.hana import SapHanaVectorStore, SapHanaVectorStoreAdapter
from langchain_hana_nodes.loaders import JsonDocumentLoader
from langchain_hana_nodes.types import (
    ExecutionRecord,
    NodeConnectionType,
    NodeInfo,
    OperationMode,
    SupplyData,
)
from langchain_hana_nodes.vectorstore_node import (
    VectorStoreAdapter,
    VectorStoreNode,
    VectorStoreNodeMeta,
    create_vector_store_node,
)

try:
    __version__ = metadata.version("langchain-hana-nodes")
except metadata.PackageNotFoundError:
    # Case where package metadata is not available
    __version__ = "0.1.0"
del metadata  # optional, avoids polluting the results of dir(__package__)

__all__ = [
    # Nodes
    "SapHanaVectorStore",
    "SapHanaVectorStoreAdapter",
    "VectorStoreAdapter",
    "VectorStoreNode",
    "VectorStoreNodeMeta",
    "create_vector_store_node",

    # Host integration
    "ExecutionContext",
    "ExecutionRecord",
    "NodeConnectionType",
    "NodeInfo",
    "OperationMode",
    "SupplyData",
    "JsonDocumentLoader",

    # Configuration
    "HanaCredentials",
    "NodeSettings",
    "get_settings",

    # Errors
    "NodeOperationError",
    "ConfigurationError",
    "ValidationError",
    "BackendError",
    "StoreConnectionError",
]
