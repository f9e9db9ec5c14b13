"""
Backend adapter interface for vector store nodes.

A backend plugs into the generic node by implementing three lifecycle calls:
acquire a store handle, populate the store with documents, and release a
handle again. Everything else (modes, batching, logging, error handling) is
provided by the node built from the adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.types import OperationMode
from langchain_hana_nodes.vectorstore_node.constants import DEFAULT_OPERATION_MODES


@dataclass
class VectorStoreNodeMeta:
    """Static description of a vector store node type."""

    display_name: str
    name: str
    description: str
    docs_url: str
    icon: str = ""
    icon_color: Optional[str] = None
    credentials: List[Dict[str, Any]] = field(default_factory=list)
    operation_modes: List[OperationMode] = field(default_factory=lambda: list(DEFAULT_OPERATION_MODES))
    categories: Optional[List[str]] = None
    subcategories: Optional[Dict[str, List[str]]] = None


class VectorStoreAdapter(ABC):
    """
    Lifecycle callbacks of a concrete vector store backend.

    Subclasses set ``meta`` and the field lists and implement
    ``acquire_store`` and ``populate_store``.
    """

    meta: VectorStoreNodeMeta
    shared_fields: List[Dict[str, Any]] = []
    insert_fields: List[Dict[str, Any]] = []
    load_fields: List[Dict[str, Any]] = []
    retrieve_fields: List[Dict[str, Any]] = []
    update_fields: List[Dict[str, Any]] = []
    methods: Optional[Dict[str, Any]] = None

    @abstractmethod
    def acquire_store(
        self,
        context: ExecutionContext,
        filter: Optional[Dict[str, Any]],
        embeddings: Embeddings,
        item_index: int,
    ) -> Any:
        """
        Open a store handle.

        The handle must provide ``similarity_search_vector_with_score`` and,
        for backends supporting update, ``add_documents``.
        """

    @abstractmethod
    def populate_store(
        self,
        context: ExecutionContext,
        embeddings: Embeddings,
        documents: List[Document],
        item_index: int,
    ) -> None:
        """Embed and store documents. Not idempotent."""

    def release_store(self, store: Any) -> None:
        """Release a store handle. Must accept None and already released handles."""
