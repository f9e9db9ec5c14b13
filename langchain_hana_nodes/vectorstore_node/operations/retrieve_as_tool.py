import json
import logging
from typing import Any, Dict, List

from langchain_core.embeddings import Embeddings
from langchain_core.tools import Tool

from langchain_hana_nodes.config import get_settings
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.helpers import get_metadata_filters_values, node_name_to_tool_name
from langchain_hana_nodes.log_wrapper import create_tool_logger
from langchain_hana_nodes.types import SupplyData
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.constants import NODE_NAME_TOOL_VERSION
from langchain_hana_nodes.vectorstore_node.operations.common import (
    acquired_store,
    get_top_k,
    rerank_documents,
)

logger = logging.getLogger(__name__)


def handle_retrieve_as_tool_operation(
    context: ExecutionContext,
    adapter: VectorStoreAdapter,
    embeddings: Embeddings,
    item_index: int,
) -> SupplyData:
    """
    Supply a tool that searches the vector store for an AI agent.

    Every tool call opens its own store handle and releases it before
    returning the matched documents as JSON text blocks.
    """
    tool_description = context.get_node_parameter("toolDescription", item_index)
    node = context.get_node()

    if node.type_version < NODE_NAME_TOOL_VERSION:
        tool_name = context.get_node_parameter("toolName", item_index)
    else:
        tool_name = node_name_to_tool_name(node)

    top_k = get_top_k(context, item_index, get_settings().default_top_k)
    use_reranker = context.get_node_parameter("useReranker", item_index, False)
    include_document_metadata = context.get_node_parameter("includeDocumentMetadata", item_index, True)
    filter = get_metadata_filters_values(context, item_index)

    def search(input: str) -> List[Dict[str, Any]]:
        with acquired_store(adapter, context, filter, embeddings, item_index) as vector_store:
            embedded_prompt = embeddings.embed_query(input)
            documents = vector_store.similarity_search_vector_with_score(embedded_prompt, top_k, filter)

            if use_reranker and documents:
                documents = rerank_documents(context, documents, input)

        logger.debug(f"Tool '{tool_name}' matched {len(documents)} document(s)")

        blocks = []
        for doc, _ in documents:
            if include_document_metadata:
                payload = {"pageContent": doc.page_content, "metadata": doc.metadata}
            else:
                payload = {"pageContent": doc.page_content}
            blocks.append({"type": "text", "text": json.dumps(payload, default=str)})
        return blocks

    vector_store_tool = Tool(name=tool_name, description=tool_description, func=search)

    return SupplyData(response=create_tool_logger(vector_store_tool, context))
