"""
SAP HANA Cloud vector store node.

Documents are stored with ``langchain_hana.HanaDB`` in a table with a content,
metadata and vector column. Every store handle owns its own hdbcli
connection, which is closed when the handle is released.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from hdbcli import dbapi
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_hana import HanaDB
from langchain_hana.utils import DistanceStrategy

from langchain_hana_nodes.config import HanaCredentials
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.error_utils import create_backend_error
from langchain_hana_nodes.exceptions import NodeOperationError, ValidationError
from langchain_hana_nodes.hana.connection import clear_table, connect_to_hana, set_schema
from langchain_hana_nodes.hana import fields
from langchain_hana_nodes.hana.fields import (
    DEFAULT_CONTENT_COLUMN,
    DEFAULT_METADATA_COLUMN,
    DEFAULT_TABLE_NAME,
    DEFAULT_VECTOR_COLUMN,
)
from langchain_hana_nodes.types import OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter, VectorStoreNodeMeta
from langchain_hana_nodes.vectorstore_node.factory import create_vector_store_node

logger = logging.getLogger(__name__)

CREDENTIALS_NAME = "sapHanaApi"

# Suffix of HDI container runtime schemas, their tables are addressed unqualified
RUNTIME_SCHEMA_SUFFIX = "_RT"

# context.state key holding the tables already cleared in this execution
CLEARED_TABLES_KEY = "hana_cleared_tables"

DISTANCE_STRATEGIES = {
    "cosine": DistanceStrategy.COSINE,
    "euclidean": DistanceStrategy.EUCLIDEAN_DISTANCE,
}


def get_full_table_name(schema: Optional[str], table_name: Optional[str]) -> str:
    """
    Quoted table name, qualified with the schema unless it is a runtime schema.

    Raises:
        ValidationError: If the table name is empty
    """
    if not table_name or not table_name.strip():
        raise ValidationError("Table name is required")

    clean_table = table_name.strip()
    if schema and schema.strip():
        clean_schema = schema.strip()
        if clean_schema.endswith(RUNTIME_SCHEMA_SUFFIX):
            return f'"{clean_table}"'
        return f'"{clean_schema}"."{clean_table}"'
    return f'"{clean_table}"'


def get_store_args(options: Dict[str, Any]) -> Dict[str, Any]:
    """HanaDB keyword arguments for the node options."""
    column_names = (options.get("columnNames") or {}).get("values") or {}
    return {
        "distance_strategy": DISTANCE_STRATEGIES.get(options.get("distanceStrategy"), DistanceStrategy.COSINE),
        "content_column": column_names.get("contentColumnName") or DEFAULT_CONTENT_COLUMN,
        "metadata_column": column_names.get("metadataColumnName") or DEFAULT_METADATA_COLUMN,
        "vector_column": column_names.get("vectorColumnName") or DEFAULT_VECTOR_COLUMN,
    }


class ExtendedHanaDB(HanaDB):
    """
    HanaDB that owns its connection and closes it on release.

    A filter bound at construction is merged into every similarity search,
    so consumers of a supplied store only see the documents the node's
    metadata filter selects. Keys given on a search win over bound ones.
    """

    def __init__(
        self,
        connection: dbapi.Connection,
        embedding: Embeddings,
        bound_filter: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ):
        super().__init__(connection=connection, embedding=embedding, **kwargs)
        self._connection = connection
        self._bound_filter = dict(bound_filter or {})

    def merge_filter(self, filter: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        merged = {**self._bound_filter, **(filter or {})}
        return merged or None

    def similarity_search_with_score_and_vector_by_vector(
        self,
        embedding: List[float],
        k: int = 4,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[Document, float, List[float]]]:
        return super().similarity_search_with_score_and_vector_by_vector(
            embedding=embedding, k=k, filter=self.merge_filter(filter)
        )

    def similarity_search_vector_with_score(
        self,
        query: List[float],
        k: int = 4,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[Document, float]]:
        """Search by embedding and return documents with their scores."""
        results = self.similarity_search_with_score_and_vector_by_vector(
            embedding=query, k=k, filter=filter or None
        )
        return [(doc, score) for doc, score, _ in results]

    def close(self) -> None:
        """Close the connection. Later calls do nothing."""
        if self._connection is not None:
            connection, self._connection = self._connection, None
            connection.close()


class SapHanaVectorStoreAdapter(VectorStoreAdapter):
    """Lifecycle of SAP HANA Cloud store handles."""

    meta = VectorStoreNodeMeta(
        display_name="SAP HANA Vector Store",
        name="vectorStoreSAPHana",
        description="Work with your data in SAP HANA Vector Store using LangChain",
        docs_url="https://docs.n8n.io/integrations/builtin/cluster-nodes/root-nodes/n8n-nodes-langchain.vectorstoresaphana/",
        icon="file:sap-hana.svg",
        credentials=[{"name": CREDENTIALS_NAME, "required": True}],
        operation_modes=[
            OperationMode.LOAD,
            OperationMode.INSERT,
            OperationMode.RETRIEVE,
            OperationMode.RETRIEVE_AS_TOOL,
        ],
        categories=["AI", "Database"],
        subcategories={
            "AI": ["Vector Stores", "Tools"],
            "Database": ["Vector Database"],
            "Vector Stores": ["Database Vector Stores", "Enterprise Vector Stores"],
            "Tools": ["Database Tools", "AI Tools"],
        },
    )
    shared_fields = fields.shared_fields
    insert_fields = fields.insert_fields
    load_fields = fields.retrieve_fields
    retrieve_fields = fields.retrieve_fields

    def _read_settings(
        self, context: ExecutionContext, item_index: int
    ) -> Tuple[str, Dict[str, Any], HanaCredentials]:
        table_name = context.get_node_parameter("tableName", item_index, DEFAULT_TABLE_NAME, extract_value=True)
        if not table_name:
            raise ValidationError("Table name is required")
        options = context.get_node_parameter("options", item_index, {}) or {}
        credentials = HanaCredentials.from_mapping(context.get_credentials(CREDENTIALS_NAME))
        return table_name, options, credentials

    def acquire_store(
        self,
        context: ExecutionContext,
        filter: Optional[Dict[str, Any]],
        embeddings: Embeddings,
        item_index: int,
    ) -> ExtendedHanaDB:
        connection = None
        try:
            table_name, options, credentials = self._read_settings(context, item_index)
            connection = connect_to_hana(credentials)

            schema = options.get("schemaName") or credentials.schema_name
            if schema:
                set_schema(connection, schema)

            store = ExtendedHanaDB(
                connection,
                embeddings,
                bound_filter=filter,
                table_name=table_name,
                **get_store_args(options),
            )
            logger.debug(f"Opened SAP HANA vector store on table {table_name}")
            return store

        except NodeOperationError as e:
            if e.item_index is None:
                e.item_index = item_index
            raise
        except Exception as e:
            if connection is not None:
                connection.close()
            raise create_backend_error(
                e, "connection", "Failed to initialize SAP HANA vector store", item_index
            ) from e

    def populate_store(
        self,
        context: ExecutionContext,
        embeddings: Embeddings,
        documents: List[Document],
        item_index: int,
    ) -> None:
        connection = None
        try:
            table_name, options, credentials = self._read_settings(context, item_index)
            connection = connect_to_hana(credentials)

            schema = options.get("schemaName") or credentials.schema_name
            if schema:
                set_schema(connection, schema)

            if options.get("clearTable"):
                full_table_name = get_full_table_name(schema, table_name)
                cleared_tables = context.state.setdefault(CLEARED_TABLES_KEY, set())
                if full_table_name not in cleared_tables:
                    clear_table(connection, full_table_name)
                    cleared_tables.add(full_table_name)

            HanaDB.from_documents(
                documents,
                embeddings,
                connection=connection,
                table_name=table_name,
                **get_store_args(options),
            )
            logger.info(f"Stored {len(documents)} document(s) in SAP HANA table {table_name}")

        except NodeOperationError as e:
            if e.item_index is None:
                e.item_index = item_index
            raise
        except Exception as e:
            raise create_backend_error(
                e, "populate", "SAP HANA vector store population failed", item_index
            ) from e
        finally:
            if connection is not None:
                try:
                    connection.close()
                except Exception as e:
                    logger.warning(f"Failed to disconnect SAP HANA client: {e}")

    def release_store(self, store: Any) -> None:
        if store is not None and callable(getattr(store, "close", None)):
            store.close()


class SapHanaVectorStore(create_vector_store_node(SapHanaVectorStoreAdapter())):
    """SAP HANA Cloud vector store node."""
