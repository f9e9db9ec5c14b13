import logging
from typing import List

from langchain_core.embeddings import Embeddings

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.documents import process_document
from langchain_hana_nodes.exceptions import ConfigurationError, ValidationError, operation_error_context
from langchain_hana_nodes.helpers import log_ai_event
from langchain_hana_nodes.loaders import JsonDocumentLoader
from langchain_hana_nodes.types import ExecutionRecord, OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.operations.common import acquired_store
from langchain_hana_nodes.vectorstore_node.utils import is_update_supported

logger = logging.getLogger(__name__)


def handle_update_operation(
    context: ExecutionContext,
    adapter: VectorStoreAdapter,
    embeddings: Embeddings,
) -> List[ExecutionRecord]:
    """
    Replace documents by ID, one document per input item.

    Raises:
        ConfigurationError: If the backend does not support updates
        ValidationError: If an item does not yield exactly one document
    """
    if not is_update_supported(adapter):
        raise ConfigurationError(
            "Update operation is not implemented for this Vector Store",
            operation=OperationMode.UPDATE.value,
        )

    items = context.get_input_data()
    loader = JsonDocumentLoader(context)
    result_data: List[ExecutionRecord] = []

    for item_index, item in enumerate(items):
        with operation_error_context(OperationMode.UPDATE.value, item_index):
            document_id = context.get_node_parameter("id", item_index, "", extract_value=True)

            with acquired_store(adapter, context, None, embeddings, item_index) as vector_store:
                processed = process_document(loader, item, item_index)

                if len(processed.documents) != 1:
                    raise ValidationError(
                        "Single document per item expected",
                        {"documents": len(processed.documents)},
                    )

                result_data.extend(processed.serialized)
                vector_store.add_documents(processed.documents, ids=[document_id])

                logger.debug(f"Updated document '{document_id}' from item {item_index}")
                log_ai_event(context, "ai-vector-store-updated")

    return result_data
