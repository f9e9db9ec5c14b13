import logging
from typing import List

from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.config import get_settings
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.helpers import get_metadata_filters_values, log_ai_event
from langchain_hana_nodes.types import ExecutionRecord
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.operations.common import (
    acquired_store,
    get_top_k,
    rerank_documents,
)

logger = logging.getLogger(__name__)


def handle_load_operation(
    context: ExecutionContext,
    adapter: VectorStoreAdapter,
    embeddings: Embeddings,
    item_index: int,
) -> List[ExecutionRecord]:
    """
    Search the vector store with the prompt of one item.

    Returns one record per matched document, in the order returned by the
    store (or the reranker), each holding the document and its score.
    """
    filter = get_metadata_filters_values(context, item_index)

    # The filter is applied at search time, not when the store is opened
    with acquired_store(adapter, context, None, embeddings, item_index) as vector_store:
        prompt = context.get_node_parameter("prompt", item_index)
        top_k = get_top_k(context, item_index, get_settings().default_top_k)
        use_reranker = context.get_node_parameter("useReranker", item_index, False)
        include_document_metadata = context.get_node_parameter("includeDocumentMetadata", item_index, True)

        embedded_prompt = embeddings.embed_query(prompt)
        docs = vector_store.similarity_search_vector_with_score(embedded_prompt, top_k, filter)

        if use_reranker and docs:
            docs = rerank_documents(context, docs, prompt)

        results = []
        for doc, score in docs:
            document = {"pageContent": str(doc.page_content)}
            if include_document_metadata and doc.metadata:
                document["metadata"] = doc.metadata

            results.append(
                ExecutionRecord(
                    json={"document": document, "score": float(score) if score is not None else None},
                    paired_item=item_index,
                )
            )

        logger.debug(f"Load for item {item_index} matched {len(results)} document(s)")
        log_ai_event(context, "ai-vector-store-searched", {"query": prompt})
        return results
