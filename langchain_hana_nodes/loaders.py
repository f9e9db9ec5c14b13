"""
Document loader for structured workflow items.

JsonDocumentLoader turns the JSON payload of workflow items into LangChain
documents: the text is taken from a well-known content field, or assembled
from all string values of the item, and the remaining fields become metadata.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.documents import Document

from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.types import ExecutionRecord

logger = logging.getLogger(__name__)

# Content field names in priority order
CONTENT_FIELDS = [
    "content",
    "text",
    "body",
    "description",
    "message",
    "pageContent",
    "data",
    "value",
]

# Fields never copied into metadata
EXCLUDED_METADATA_FIELDS = {
    "content",
    "text",
    "body",
    "description",
    "message",
    "pageContent",
}

MAX_STRING_DEPTH = 3
MAX_METADATA_VALUE_LENGTH = 1000
METADATA_SOURCE = "workflow"


class JsonDocumentLoader:
    """Converts workflow item JSON into LangChain documents."""

    def __init__(self, context: Optional[ExecutionContext] = None):
        self.context = context

    def process_item(self, item: ExecutionRecord, item_index: int) -> List[Document]:
        """
        Process a single workflow item into documents.

        A failing item is logged and yields no documents.
        """
        try:
            json_data = item.json
            content_field = self._find_content_field(json_data)
            content = self._extract_content(json_data, content_field)
            if not content:
                return []

            metadata = self._extract_metadata(json_data, item_index, content_field)
            return [Document(page_content=content, metadata=metadata)]
        except Exception as e:
            logger.warning(f"Failed to process item {item_index}: {e}")
            return []

    def process_all(self, items: Sequence[ExecutionRecord]) -> List[Document]:
        documents: List[Document] = []
        for item_index, item in enumerate(items):
            documents.extend(self.process_item(item, item_index))
        return documents

    def load(self) -> List[Document]:
        """Load documents from the input items of the current execution."""
        if self.context is None:
            raise ValueError("JsonDocumentLoader.load() requires an execution context")
        return self.process_all(self.context.get_input_data())

    @classmethod
    def from_workflow_data(
        cls,
        context: ExecutionContext,
        items: Optional[Sequence[ExecutionRecord]] = None,
    ) -> List[Document]:
        loader = cls(context)
        if items is not None:
            return loader.process_all(items)
        return loader.load()

    def _find_content_field(self, json_data: Any) -> Optional[str]:
        if not isinstance(json_data, dict):
            return None

        for field_name in CONTENT_FIELDS:
            value = json_data.get(field_name)
            if value and isinstance(value, str):
                return field_name
        return None

    def _extract_content(self, json_data: Any, content_field: Optional[str]) -> str:
        if not isinstance(json_data, dict):
            return str(json_data) if json_data else ""

        if content_field is not None:
            return json_data[content_field]

        # No content field, fall back to every string in the item
        values: List[str] = []
        self._extract_string_values(json_data, values)
        return " ".join(values).strip()

    def _extract_string_values(self, obj: Any, values: List[str], depth: int = 0) -> None:
        if depth > MAX_STRING_DEPTH:
            return

        if isinstance(obj, str):
            if obj.strip():
                values.append(obj.strip())
        elif isinstance(obj, dict):
            for value in obj.values():
                self._extract_string_values(value, values, depth + 1)
        elif isinstance(obj, list):
            for value in obj:
                self._extract_string_values(value, values, depth + 1)

    def _extract_metadata(
        self,
        json_data: Any,
        item_index: int,
        content_field: Optional[str] = None,
    ) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "source": METADATA_SOURCE,
            "itemIndex": item_index,
        }
        if not isinstance(json_data, dict):
            return metadata

        for key, value in json_data.items():
            if key in EXCLUDED_METADATA_FIELDS or key == content_field:
                continue
            if value is None or isinstance(value, (str, int, float, bool)):
                metadata[key] = value
            elif isinstance(value, (dict, list)):
                stringified = json.dumps(value, default=str)
                if len(stringified) < MAX_METADATA_VALUE_LENGTH:
                    metadata[key] = stringified

        return metadata
