"""
In-memory collaborators for exercising the vector store node without a database.
"""

import dataclasses
from typing import Any, Dict, List, Optional, Sequence, Tuple

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.types import ExecutionRecord, NodeConnectionType, NodeInfo, OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter, VectorStoreNodeMeta


class FakeEmbeddings(Embeddings):
    """Embeds text as [length, 1.0] and records every query."""

    def __init__(self):
        self.queries: List[str] = []

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [[float(len(text)), 1.0] for text in texts]

    def embed_query(self, text: str) -> List[float]:
        self.queries.append(text)
        return [float(len(text)), 1.0]


class FakeStore:
    """Vector store returning canned search results."""

    def __init__(self, results: Optional[List[Tuple[Document, float]]] = None):
        self.results = results or []
        self.searches: List[Tuple[List[float], int, Any]] = []
        self.added: List[Tuple[List[Document], Optional[List[str]]]] = []

    def similarity_search_vector_with_score(self, query, k, filter=None):
        self.searches.append((query, k, filter))
        return list(self.results[:k])

    def add_documents(self, documents, ids=None):
        self.added.append((list(documents), ids))
        return ids


class FakeAdapter(VectorStoreAdapter):
    """Adapter handing out one FakeStore and recording the lifecycle calls."""

    meta = VectorStoreNodeMeta(
        display_name="Fake Vector Store",
        name="vectorStoreFake",
        description="In-memory vector store",
        docs_url="https://example.com/docs/fake-vector-store",
        operation_modes=list(OperationMode),
    )

    def __init__(self, store: Optional[FakeStore] = None, operation_modes: Optional[List[OperationMode]] = None):
        self.store = store or FakeStore()
        self.acquired: List[Tuple[Any, int]] = []
        self.released: List[Any] = []
        self.populated: List[Tuple[List[Document], int]] = []
        if operation_modes is not None:
            self.meta = dataclasses.replace(FakeAdapter.meta, operation_modes=operation_modes)

    def acquire_store(self, context, filter, embeddings, item_index):
        self.acquired.append((filter, item_index))
        return self.store

    def populate_store(self, context, embeddings, documents, item_index):
        self.populated.append((list(documents), item_index))

    def release_store(self, store):
        self.released.append(store)


class FakeReranker:
    """Reranker assigning fixed scores in input order and sorting by them."""

    def __init__(self, scores: Sequence[float]):
        self.scores = list(scores)
        self.calls: List[Tuple[List[Document], str]] = []

    def compress_documents(self, documents, query):
        self.calls.append((list(documents), query))
        reranked = [
            Document(page_content=doc.page_content, metadata={**doc.metadata, "relevance_score": score})
            for doc, score in zip(documents, self.scores)
        ]
        return sorted(reranked, key=lambda doc: doc.metadata["relevance_score"], reverse=True)


def make_items(*payloads: Dict[str, Any]) -> List[ExecutionRecord]:
    return [ExecutionRecord(json=payload) for payload in payloads]


def make_context(
    parameters: Optional[Dict[str, Any]] = None,
    items: Optional[Sequence[ExecutionRecord]] = None,
    connections: Optional[Dict[NodeConnectionType, List[Any]]] = None,
    credentials: Optional[Dict[str, Dict[str, Any]]] = None,
    version: float = 1.3,
    name: str = "Vector Store",
) -> ExecutionContext:
    return ExecutionContext(
        node=NodeInfo(name=name, type_version=version),
        parameters=parameters,
        input_items=items,
        connections=connections,
        credentials=credentials,
    )
