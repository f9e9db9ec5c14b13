"""
Store lifecycle and reranking shared by the operation handlers.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.exceptions import ValidationError
from langchain_hana_nodes.types import NodeConnectionType
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter

logger = logging.getLogger(__name__)

RELEVANCE_SCORE_KEY = "relevance_score"

ScoredDocument = Tuple[Document, float]


def release_store_safely(adapter: VectorStoreAdapter, store: Any) -> None:
    """Release a store handle. A failing release is logged, never raised."""
    try:
        adapter.release_store(store)
    except Exception as e:
        logger.warning(f"Failed to release vector store {type(store).__name__}: {e}")


@contextmanager
def acquired_store(
    adapter: VectorStoreAdapter,
    context: ExecutionContext,
    filter: Optional[Dict[str, Any]],
    embeddings: Embeddings,
    item_index: int,
) -> Iterator[Any]:
    """Acquire a store handle for the block and release it exactly once on exit."""
    store = adapter.acquire_store(context, filter, embeddings, item_index)
    try:
        yield store
    finally:
        release_store_safely(adapter, store)


def get_top_k(context: ExecutionContext, item_index: int, default: int) -> int:
    top_k = context.get_node_parameter("topK", item_index, default)
    if not isinstance(top_k, (int, float)) or isinstance(top_k, bool) or top_k < 1:
        raise ValidationError(f"Limit must be a positive number, got {top_k!r}", item_index=item_index)
    return int(top_k)


def rerank_documents(
    context: ExecutionContext,
    documents: List[ScoredDocument],
    query: str,
) -> List[ScoredDocument]:
    """
    Rescore search results with the connected reranker.

    The reranker's relevance score replaces the similarity score and is
    removed from the returned document's metadata.
    """
    if not documents:
        return documents

    reranker = context.get_input_connection_data(NodeConnectionType.AI_RERANKER, 0)
    reranked = reranker.compress_documents([doc for doc, _ in documents], query)

    results = []
    for doc in reranked:
        metadata = dict(doc.metadata or {})
        score = metadata.pop(RELEVANCE_SCORE_KEY, None)
        results.append((Document(page_content=doc.page_content, metadata=metadata, id=doc.id), score))
    return results
