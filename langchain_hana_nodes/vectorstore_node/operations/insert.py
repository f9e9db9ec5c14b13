import logging
from typing import List

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.config import get_settings
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.documents import batch_process_documents, process_document
from langchain_hana_nodes.exceptions import ValidationError, operation_error_context
from langchain_hana_nodes.helpers import log_ai_event
from langchain_hana_nodes.log_wrapper import with_performance_logging
from langchain_hana_nodes.types import ExecutionRecord, NodeConnectionType, OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.constants import BATCHED_INSERT_VERSION

logger = logging.getLogger(__name__)


def _get_embedding_batch_size(context: ExecutionContext) -> int:
    batch_size = context.get_node_parameter(
        "embeddingBatchSize", 0, get_settings().default_embedding_batch_size
    )
    if batch_size is None:
        batch_size = get_settings().default_embedding_batch_size
    if not isinstance(batch_size, (int, float)) or isinstance(batch_size, bool) or batch_size < 1:
        raise ValidationError(f"Embedding batch size must be at least 1, got {batch_size!r}")
    return int(batch_size)


def handle_insert_operation(
    context: ExecutionContext,
    adapter: VectorStoreAdapter,
    embeddings: Embeddings,
) -> List[ExecutionRecord]:
    """
    Insert the documents of all input items into the vector store.

    Version 1 populates the store once per item. Later versions collect the
    documents of all items first and populate the store in batches of
    ``embeddingBatchSize``. Cancellation is checked before each item; a
    cancelled run stops early and returns what was processed so far.
    """
    node_version = context.get_node().type_version
    items = context.get_input_data()
    document_input = context.get_input_connection_data(NodeConnectionType.AI_DOCUMENT, 0)
    populate = with_performance_logging(adapter.populate_store, context, "populate vector store")

    result_data: List[ExecutionRecord] = []
    documents_for_embedding: List[Document] = []

    for item_index, item in enumerate(items):
        if context.is_cancelled():
            logger.info(f"Insert cancelled before item {item_index} of {len(items)}")
            break

        with operation_error_context(OperationMode.INSERT.value, item_index):
            processed = process_document(document_input, item, item_index)

            result_data.extend(processed.serialized)
            documents_for_embedding.extend(processed.documents)

            if node_version < BATCHED_INSERT_VERSION:
                populate(context, embeddings, processed.documents, item_index)

        log_ai_event(context, "ai-vector-store-populated")

    if node_version >= BATCHED_INSERT_VERSION:
        batch_size = _get_embedding_batch_size(context)
        with operation_error_context(OperationMode.INSERT.value, 0):
            batches = batch_process_documents(
                documents_for_embedding,
                batch_size,
                lambda batch: populate(context, embeddings, batch, 0),
            )
        logger.info(f"Inserted {len(documents_for_embedding)} document(s) in {batches} batch(es)")

    return result_data
