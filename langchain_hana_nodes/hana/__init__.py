"""SAP HANA Cloud backend for the vector store node."""

from langchain_hana_nodes.hana.connection import clear_table, connect_to_hana, set_schema
from langchain_hana_nodes.hana.vectorstore import (
    ExtendedHanaDB,
    SapHanaVectorStore,
    SapHanaVectorStoreAdapter,
    get_full_table_name,
)

__all__ = [
    "ExtendedHanaDB",
    "SapHanaVectorStore",
    "SapHanaVectorStoreAdapter",
    "clear_table",
    "connect_to_hana",
    "get_full_table_name",
    "set_schema",
]
