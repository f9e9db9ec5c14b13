from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.helpers import get_metadata_filters_values
from langchain_hana_nodes.log_wrapper import create_vector_store_logger
from langchain_hana_nodes.types import NodeConnectionType, SupplyData
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.operations.common import release_store_safely


def handle_retrieve_operation(
    context: ExecutionContext,
    adapter: VectorStoreAdapter,
    embeddings: Embeddings,
    item_index: int,
) -> SupplyData:
    """
    Supply the vector store itself to a downstream AI node.

    The store stays open until the host calls ``close_function`` in its
    cleanup phase.
    """
    filter = get_metadata_filters_values(context, item_index)
    use_reranker = context.get_node_parameter("useReranker", item_index, False)

    # The store binds the filter, downstream consumers do not pass one
    vector_store = adapter.acquire_store(context, filter, embeddings, item_index)

    try:
        if use_reranker:
            reranker = context.get_input_connection_data(NodeConnectionType.AI_RERANKER, 0)
            response = {
                "reranker": reranker,
                "vector_store": create_vector_store_logger(vector_store, context),
            }
        else:
            response = create_vector_store_logger(vector_store, context)
    except Exception:
        release_store_safely(adapter, vector_store)
        raise

    released = False

    def close_function() -> None:
        nonlocal released
        if not released:
            released = True
            release_store_safely(adapter, vector_store)

    return SupplyData(response=response, close_function=close_function)
