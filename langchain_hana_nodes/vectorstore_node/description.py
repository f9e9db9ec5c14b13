"""
Declared interface of a vector store node.

The inputs, outputs and parameters of the node depend on the selected
operation mode and on the node version. The operation handlers rely on the
parameters declared here being present for their mode.
"""

from typing import Any, Dict, List, Optional, Union

from langchain_hana_nodes.shared_fields import get_connection_hint_notice_field
from langchain_hana_nodes.types import NodeConnectionType, OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.constants import (
    BATCHED_INSERT_VERSION,
    DEFAULT_EMBEDDING_BATCH_SIZE,
    DEFAULT_TOP_K,
    NODE_VERSIONS,
)
from langchain_hana_nodes.vectorstore_node.utils import (
    get_operation_mode_options,
    transform_description_for_operation_mode,
)

RERANKER_MODES = {OperationMode.LOAD, OperationMode.RETRIEVE, OperationMode.RETRIEVE_AS_TOOL}
MAIN_INPUT_MODES = {OperationMode.INSERT, OperationMode.LOAD, OperationMode.UPDATE}


def build_node_inputs(mode: Union[str, OperationMode], use_reranker: bool = False) -> List[Dict[str, Any]]:
    """Input connections of the node for a mode."""
    mode = OperationMode(mode)
    inputs: List[Dict[str, Any]] = [
        {"display_name": "Embedding", "type": NodeConnectionType.AI_EMBEDDING, "required": True, "max_connections": 1}
    ]

    if mode in RERANKER_MODES and use_reranker:
        inputs.append(
            {"display_name": "Reranker", "type": NodeConnectionType.AI_RERANKER, "required": True, "max_connections": 1}
        )

    if mode == OperationMode.RETRIEVE_AS_TOOL:
        return inputs

    if mode in MAIN_INPUT_MODES:
        inputs.append({"display_name": "", "type": NodeConnectionType.MAIN})

    if mode == OperationMode.INSERT:
        inputs.append(
            {"display_name": "Document", "type": NodeConnectionType.AI_DOCUMENT, "required": True, "max_connections": 1}
        )
    return inputs


def build_node_outputs(mode: Optional[Union[str, OperationMode]] = None) -> List[Dict[str, Any]]:
    """Output connections of the node for a mode (default "retrieve")."""
    mode = OperationMode(mode or OperationMode.RETRIEVE)
    if mode == OperationMode.RETRIEVE_AS_TOOL:
        return [{"display_name": "Tool", "type": NodeConnectionType.AI_TOOL}]
    if mode == OperationMode.RETRIEVE:
        return [{"display_name": "Vector Store", "type": NodeConnectionType.AI_VECTOR_STORE}]
    return [{"display_name": "", "type": NodeConnectionType.MAIN}]


def _show(modes: List[OperationMode], **conditions: Any) -> Dict[str, Any]:
    show: Dict[str, Any] = {"mode": [mode.value for mode in modes]}
    if "version" in conditions:
        show["@version"] = conditions["version"]
    return {"show": show}


def build_node_properties(adapter: VectorStoreAdapter) -> List[Dict[str, Any]]:
    """All parameters of the node, each with the modes it is shown for."""
    meta = adapter.meta
    return [
        {
            "display_name": "Operation Mode",
            "name": "mode",
            "type": "options",
            "no_data_expression": True,
            "default": OperationMode.RETRIEVE.value,
            "options": get_operation_mode_options(adapter),
        },
        {
            **get_connection_hint_notice_field([NodeConnectionType.AI_RETRIEVER]),
            "display_options": _show([OperationMode.RETRIEVE]),
        },
        {
            "display_name": "Name",
            "name": "toolName",
            "type": "string",
            "default": "",
            "required": True,
            "description": "Name of the vector store",
            "placeholder": "e.g. company_knowledge_base",
            "validate_type": "string-alphanumeric",
            "display_options": _show(
                [OperationMode.RETRIEVE_AS_TOOL],
                version=[{"_cnd": {"lte": 1.2}}],
            ),
        },
        {
            "display_name": "Description",
            "name": "toolDescription",
            "type": "string",
            "default": "",
            "required": True,
            "type_options": {"rows": 2},
            "description": (
                "Explain to the LLM what this tool does, a good, specific description would "
                "allow LLMs to produce expected results much more often"
            ),
            "placeholder": f"e.g. {meta.description}",
            "display_options": _show([OperationMode.RETRIEVE_AS_TOOL]),
        },
        *adapter.shared_fields,
        {
            "display_name": "Embedding Batch Size",
            "name": "embeddingBatchSize",
            "type": "number",
            "default": DEFAULT_EMBEDDING_BATCH_SIZE,
            "description": "Number of documents to embed in a single batch",
            "display_options": _show(
                [OperationMode.INSERT],
                version=[{"_cnd": {"gte": BATCHED_INSERT_VERSION}}],
            ),
        },
        *transform_description_for_operation_mode(adapter.insert_fields, OperationMode.INSERT.value),
        {
            "display_name": "Prompt",
            "name": "prompt",
            "type": "string",
            "default": "",
            "required": True,
            "description": (
                "Search prompt to retrieve matching documents from the vector store "
                "using similarity-based ranking"
            ),
            "display_options": _show([OperationMode.LOAD]),
        },
        {
            "display_name": "Limit",
            "name": "topK",
            "type": "number",
            "default": DEFAULT_TOP_K,
            "description": "Number of top results to fetch from vector store",
            "display_options": _show([OperationMode.LOAD, OperationMode.RETRIEVE_AS_TOOL]),
        },
        {
            "display_name": "Include Metadata",
            "name": "includeDocumentMetadata",
            "type": "boolean",
            "default": True,
            "description": "Whether or not to include document metadata",
            "display_options": _show([OperationMode.LOAD, OperationMode.RETRIEVE_AS_TOOL]),
        },
        {
            "display_name": "Rerank Results",
            "name": "useReranker",
            "type": "boolean",
            "default": False,
            "description": "Whether or not to rerank results",
            "display_options": _show([OperationMode.LOAD, OperationMode.RETRIEVE, OperationMode.RETRIEVE_AS_TOOL]),
        },
        {
            "display_name": "ID",
            "name": "id",
            "type": "string",
            "default": "",
            "required": True,
            "description": "ID of an embedding entry",
            "display_options": _show([OperationMode.UPDATE]),
        },
        *transform_description_for_operation_mode(
            adapter.load_fields, [OperationMode.LOAD.value, OperationMode.RETRIEVE_AS_TOOL.value]
        ),
        *transform_description_for_operation_mode(adapter.retrieve_fields, OperationMode.RETRIEVE.value),
        *transform_description_for_operation_mode(adapter.update_fields, OperationMode.UPDATE.value),
    ]


def build_node_description(adapter: VectorStoreAdapter) -> Dict[str, Any]:
    """Full node type description for the host."""
    meta = adapter.meta
    return {
        "display_name": meta.display_name,
        "name": meta.name,
        "description": meta.description,
        "icon": meta.icon,
        "icon_color": meta.icon_color,
        "group": ["transform"],
        # 1.1 embeds inserted documents in batches, 1.3 drops `toolName`
        "version": list(NODE_VERSIONS),
        "defaults": {"name": meta.display_name},
        "codex": {
            "categories": meta.categories or ["AI"],
            "subcategories": meta.subcategories or {
                "AI": ["Vector Stores", "Tools", "Root Nodes"],
                "Vector Stores": ["Other Vector Stores"],
                "Tools": ["Other Tools"],
            },
            "resources": {"primary_documentation": [{"url": meta.docs_url}]},
        },
        "credentials": meta.credentials,
        "inputs": build_node_inputs,
        "outputs": build_node_outputs,
        "properties": build_node_properties(adapter),
    }
