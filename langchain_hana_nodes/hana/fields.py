"""Parameters of the SAP HANA vector store node."""

from typing import Any, Dict, List

from langchain_hana_nodes.shared_fields import metadata_filter_field

DEFAULT_TABLE_NAME = "n8n_vectors"
DEFAULT_CONTENT_COLUMN = "VEC_TEXT"
DEFAULT_METADATA_COLUMN = "VEC_META"
DEFAULT_VECTOR_COLUMN = "VEC_VECTOR"

shared_fields: List[Dict[str, Any]] = [
    {
        "display_name": "Table Name",
        "name": "tableName",
        "type": "string",
        "default": DEFAULT_TABLE_NAME,
        "description": "The table name to store the vectors in. If table does not exist, it will be created.",
        "required": True,
    },
]

column_names_field: Dict[str, Any] = {
    "display_name": "Column Names",
    "name": "columnNames",
    "type": "fixedCollection",
    "description": "The names of the columns in the SAP HANA table",
    "default": {
        "values": {
            "contentColumnName": DEFAULT_CONTENT_COLUMN,
            "metadataColumnName": DEFAULT_METADATA_COLUMN,
            "vectorColumnName": DEFAULT_VECTOR_COLUMN,
        },
    },
    "placeholder": "Set Column Names",
    "options": [
        {
            "name": "values",
            "display_name": "Column Name Settings",
            "values": [
                {
                    "display_name": "Content Column Name",
                    "name": "contentColumnName",
                    "type": "string",
                    "default": DEFAULT_CONTENT_COLUMN,
                    "required": True,
                    "description": "Column name for storing document content",
                },
                {
                    "display_name": "Metadata Column Name",
                    "name": "metadataColumnName",
                    "type": "string",
                    "default": DEFAULT_METADATA_COLUMN,
                    "required": True,
                    "description": "Column name for storing document metadata (JSON)",
                },
                {
                    "display_name": "Vector Column Name",
                    "name": "vectorColumnName",
                    "type": "string",
                    "default": DEFAULT_VECTOR_COLUMN,
                    "required": True,
                    "description": "Column name for storing vector embeddings",
                },
            ],
        }
    ],
}

distance_strategy_field: Dict[str, Any] = {
    "display_name": "Distance Strategy",
    "name": "distanceStrategy",
    "type": "options",
    "default": "cosine",
    "description": "The method to calculate the distance between two vectors",
    "options": [
        {"name": "Cosine Similarity", "value": "cosine"},
        {"name": "Euclidean Distance", "value": "euclidean"},
    ],
}

schema_field: Dict[str, Any] = {
    "display_name": "Schema Name",
    "name": "schemaName",
    "type": "string",
    "default": "",
    "description": "Database schema name (optional, uses default schema if not specified)",
    "placeholder": "e.g. VECTOR_SCHEMA",
}

insert_fields: List[Dict[str, Any]] = [
    {
        "display_name": "Options",
        "name": "options",
        "type": "collection",
        "placeholder": "Add Option",
        "default": {},
        "options": [
            column_names_field,
            schema_field,
            {
                "display_name": "Clear Table",
                "name": "clearTable",
                "type": "boolean",
                "default": False,
                "description": "Whether to clear the table before inserting new data",
            },
        ],
    },
]

retrieve_fields: List[Dict[str, Any]] = [
    {
        "display_name": "Options",
        "name": "options",
        "type": "collection",
        "placeholder": "Add Option",
        "default": {},
        "options": [distance_strategy_field, column_names_field, schema_field, metadata_filter_field],
    },
]
