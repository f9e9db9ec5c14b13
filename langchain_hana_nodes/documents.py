"""
Document processing for vector store operations.

Turns the document input of a node (a document loader, or a plain list of
documents) into LangChain documents plus the workflow records that report
them back to the host.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence, Union

from langchain_core.documents import Document

from langchain_hana_nodes.types import ExecutionRecord

logger = logging.getLogger(__name__)

DocumentInput = Union[Sequence[Document], Any]


@dataclass
class ProcessedDocuments:
    """Documents produced from workflow items and their serialized records."""

    documents: List[Document] = field(default_factory=list)
    serialized: List[ExecutionRecord] = field(default_factory=list)


def _serialize(document: Document, item_index: Optional[int] = None) -> ExecutionRecord:
    return ExecutionRecord(
        json={
            "metadata": document.metadata or {},
            "pageContent": document.page_content or "",
        },
        paired_item=item_index,
    )


def process_documents(document_input: DocumentInput, input_items: Sequence[ExecutionRecord]) -> ProcessedDocuments:
    """
    Process all workflow items into documents.

    Args:
        document_input: A list of documents, used as-is, or a loader with a
            ``process_all(items)`` method
        input_items: The workflow items to process

    Returns:
        ProcessedDocuments without item back-references
    """
    if isinstance(document_input, (list, tuple)):
        documents = list(document_input)
    elif callable(getattr(document_input, "process_all", None)):
        documents = document_input.process_all(input_items)
    else:
        logger.warning(f"Unsupported document input {type(document_input).__name__}, no documents processed")
        documents = []

    return ProcessedDocuments(
        documents=documents,
        serialized=[_serialize(document) for document in documents],
    )


def process_document(
    document_input: DocumentInput,
    input_item: ExecutionRecord,
    item_index: int,
) -> ProcessedDocuments:
    """
    Process a single workflow item into documents.

    Args:
        document_input: A list of documents, used as-is, or a loader with a
            ``process_item(item, index)`` method
        input_item: The workflow item to process
        item_index: Index of the item, kept on every serialized record

    Returns:
        ProcessedDocuments whose records point back to ``item_index``
    """
    if isinstance(document_input, (list, tuple)):
        documents = list(document_input)
    elif callable(getattr(document_input, "process_item", None)):
        documents = document_input.process_item(input_item, item_index)
    else:
        logger.warning(f"Unsupported document input {type(document_input).__name__}, no documents processed")
        documents = []

    return ProcessedDocuments(
        documents=documents,
        serialized=[_serialize(document, item_index) for document in documents],
    )


def validate_document(doc: Any) -> bool:
    """Check that an object is a document with string content and dict metadata."""
    return (
        isinstance(doc, Document)
        and isinstance(doc.page_content, str)
        and (doc.metadata is None or isinstance(doc.metadata, dict))
    )


def normalize_document(doc: Document) -> Document:
    """Return a trimmed copy of a document stamped with its processing time."""
    return Document(
        page_content=(doc.page_content or "").strip(),
        metadata={
            **(doc.metadata or {}),
            "processedAt": datetime.now(timezone.utc).isoformat(),
        },
    )


def batch_process_documents(
    documents: Sequence[Document],
    batch_size: int = 100,
    processor: Optional[Callable[[List[Document]], None]] = None,
) -> int:
    """
    Hand documents to a processor in fixed-size batches.

    Returns:
        Number of batches processed
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be at least 1, got {batch_size}")
    if processor is None:
        raise ValueError("A batch processor is required")

    batches = 0
    for start in range(0, len(documents), batch_size):
        processor(list(documents[start:start + batch_size]))
        batches += 1
    return batches


def filter_documents(
    documents: Sequence[Document],
    min_length: int = 0,
    max_length: Optional[int] = None,
    required_fields: Optional[Sequence[str]] = None,
) -> List[Document]:
    """Keep documents within the content length bounds that carry all required metadata fields."""
    required_fields = required_fields or []
    result = []
    for doc in documents:
        length = len(doc.page_content)
        if length < min_length or (max_length is not None and length > max_length):
            continue
        if any(name not in (doc.metadata or {}) for name in required_fields):
            continue
        result.append(doc)
    return result
