"""
Tests for the "update" operation: replacing documents by ID.
"""

import unittest
from unittest.mock import patch

from langchain_core.documents import Document

from langchain_hana_nodes.documents import ProcessedDocuments
from langchain_hana_nodes.exceptions import ConfigurationError, ValidationError
from langchain_hana_nodes.types import ExecutionRecord, OperationMode
from langchain_hana_nodes.vectorstore_node.operations import handle_update_operation

from tests.unit_tests.fakes import FakeAdapter, FakeEmbeddings, FakeStore, make_context, make_items


class TestUpdateOperation(unittest.TestCase):
    """Tests for handle_update_operation."""

    def setUp(self):
        self.store = FakeStore()
        self.adapter = FakeAdapter(self.store)
        self.embeddings = FakeEmbeddings()

    def test_document_replaced_by_id(self):
        context = make_context(
            parameters={"id": {"__rl": True, "mode": "id", "value": "doc-42"}},
            items=make_items({"content": "updated text", "rev": 2}),
        )

        results = handle_update_operation(context, self.adapter, self.embeddings)

        documents, ids = self.store.added[0]
        self.assertEqual(ids, ["doc-42"])
        self.assertEqual(documents[0].page_content, "updated text")
        self.assertEqual(results[0].paired_item, 0)
        self.assertEqual(results[0].json["metadata"]["rev"], 2)
        self.assertIn(("ai-vector-store-updated", {}), context.ai_events)

    def test_one_store_per_item(self):
        context = make_context(
            parameters={"id": lambda item_index: f"doc-{item_index}"},
            items=make_items({"content": "a"}, {"content": "b"}),
        )

        handle_update_operation(context, self.adapter, self.embeddings)

        self.assertEqual([ids for _, ids in self.store.added], [["doc-0"], ["doc-1"]])
        self.assertEqual(len(self.adapter.acquired), 2)
        self.assertEqual(len(self.adapter.released), 2)

    def test_several_documents_rejected(self):
        docs = [Document(page_content="a"), Document(page_content="b")]
        processed = ProcessedDocuments(documents=docs, serialized=[ExecutionRecord(json={}) for _ in docs])
        context = make_context(parameters={"id": "doc-1"}, items=make_items({"content": "a"}))

        with patch(
            "langchain_hana_nodes.vectorstore_node.operations.update.process_document",
            return_value=processed,
        ):
            with self.assertRaises(ValidationError) as ctx:
                handle_update_operation(context, self.adapter, self.embeddings)

        self.assertEqual(str(ctx.exception.message), "Single document per item expected")
        self.assertEqual(ctx.exception.details, {"documents": 2})
        self.assertEqual(ctx.exception.item_index, 0)
        self.assertEqual(self.store.added, [])
        self.assertEqual(len(self.adapter.released), 1)

    def test_item_without_document_rejected(self):
        context = make_context(parameters={"id": "doc-1"}, items=make_items({"count": 3}))

        with self.assertRaises(ValidationError):
            handle_update_operation(context, self.adapter, self.embeddings)

        self.assertEqual(self.store.added, [])

    def test_update_not_supported(self):
        adapter = FakeAdapter(operation_modes=[OperationMode.LOAD, OperationMode.INSERT])
        context = make_context(parameters={"id": "doc-1"}, items=make_items({"content": "a"}))

        with self.assertRaises(ConfigurationError) as ctx:
            handle_update_operation(context, adapter, self.embeddings)

        self.assertIn("not implemented", str(ctx.exception))
        self.assertEqual(adapter.acquired, [])


if __name__ == "__main__":
    unittest.main()
