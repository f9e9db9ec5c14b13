"""Parameter definitions reused by several node types."""

from typing import Any, Dict, List

from langchain_hana_nodes.types import NodeConnectionType

CONNECTION_HINTS = {
    NodeConnectionType.AI_RETRIEVER: "Retriever",
    NodeConnectionType.AI_VECTOR_STORE: "Vector Store",
    NodeConnectionType.AI_TOOL: "AI Agent",
}

metadata_filter_field: Dict[str, Any] = {
    "display_name": "Metadata Filter",
    "name": "metadata",
    "type": "fixedCollection",
    "description": "Metadata to filter the document by",
    "type_options": {"multiple_values": True},
    "default": {},
    "placeholder": "Add filter field",
    "options": [
        {
            "name": "metadataValues",
            "display_name": "Fields to Set",
            "values": [
                {"display_name": "Name", "name": "name", "type": "string", "default": "", "required": True},
                {"display_name": "Value", "name": "value", "type": "string", "default": ""},
            ],
        }
    ],
}


def get_connection_hint_notice_field(connection_types: List[NodeConnectionType]) -> Dict[str, Any]:
    """Notice telling the user which node the output should be connected to."""
    names = [CONNECTION_HINTS.get(connection_type, connection_type.value) for connection_type in connection_types]
    return {
        "display_name": f"This node must be connected to a {' or '.join(names)} node",
        "name": "notice",
        "type": "notice",
        "default": "",
    }
