"""Shared types for the vector store workflow nodes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class OperationMode(str, Enum):
    """Operation modes a vector store node can run in."""

    LOAD = "load"
    INSERT = "insert"
    UPDATE = "update"
    RETRIEVE = "retrieve"
    RETRIEVE_AS_TOOL = "retrieve-as-tool"


class NodeConnectionType(str, Enum):
    """Connection types between workflow nodes."""

    MAIN = "main"
    AI_EMBEDDING = "ai_embedding"
    AI_DOCUMENT = "ai_document"
    AI_RERANKER = "ai_reranker"
    AI_TOOL = "ai_tool"
    AI_VECTOR_STORE = "ai_vectorStore"
    AI_RETRIEVER = "ai_retriever"


@dataclass
class NodeInfo:
    """Identity of the node being executed."""

    name: str
    type_version: float = 1.3
    type: str = ""


@dataclass
class ExecutionRecord:
    """One item flowing between workflow nodes."""

    json: Dict[str, Any] = field(default_factory=dict)
    paired_item: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render the record in the host's wire format."""
        record: Dict[str, Any] = {"json": self.json}
        if self.paired_item is not None:
            record["pairedItem"] = {"item": self.paired_item}
        return record


@dataclass
class SupplyData:
    """Object handed to downstream AI nodes, with an optional cleanup hook."""

    response: Any
    close_function: Optional[Callable[[], None]] = None


NodeOutput = List[List[ExecutionRecord]]
