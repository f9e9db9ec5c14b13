"""
Tests for the "load" operation: searching the store with an item's prompt.
"""

import unittest

from langchain_core.documents import Document

from langchain_hana_nodes.exceptions import ConfigurationError, ValidationError
from langchain_hana_nodes.types import NodeConnectionType
from langchain_hana_nodes.vectorstore_node.operations import handle_load_operation

from tests.unit_tests.fakes import (
    FakeAdapter,
    FakeEmbeddings,
    FakeReranker,
    FakeStore,
    make_context,
    make_items,
)

SEARCH_RESULTS = [
    (Document(page_content="Revenue grew 10%", metadata={"source": "q1"}), 0.91),
    (Document(page_content="Costs were flat", metadata={}), 0.75),
    (Document(page_content="Hiring slowed", metadata={"source": "q3"}), 0.5),
]


class TestLoadOperation(unittest.TestCase):
    """Tests for handle_load_operation."""

    def setUp(self):
        self.store = FakeStore(SEARCH_RESULTS)
        self.adapter = FakeAdapter(self.store)
        self.embeddings = FakeEmbeddings()

    def _context(self, **parameters):
        params = {"prompt": "revenue", "topK": 2}
        params.update(parameters)
        return make_context(parameters=params, items=make_items({"id": 1}))

    def test_results_in_store_order_with_scores(self):
        context = self._context()
        results = handle_load_operation(context, self.adapter, self.embeddings, 0)

        self.assertEqual(len(results), 2)
        self.assertEqual(
            results[0].json,
            {"document": {"pageContent": "Revenue grew 10%", "metadata": {"source": "q1"}}, "score": 0.91},
        )
        self.assertEqual(results[1].json, {"document": {"pageContent": "Costs were flat"}, "score": 0.75})
        self.assertEqual([r.paired_item for r in results], [0, 0])

    def test_prompt_is_embedded_and_searched(self):
        handle_load_operation(self._context(), self.adapter, self.embeddings, 0)

        self.assertEqual(self.embeddings.queries, ["revenue"])
        self.assertEqual(self.store.searches, [([7.0, 1.0], 2, {})])

    def test_filter_applied_at_search_time(self):
        context = self._context(options={"metadata": {"metadataValues": [{"name": "source", "value": "q1"}]}})
        handle_load_operation(context, self.adapter, self.embeddings, 0)

        self.assertEqual(self.adapter.acquired, [(None, 0)])
        self.assertEqual(self.store.searches[0][2], {"source": "q1"})

    def test_store_released_once(self):
        handle_load_operation(self._context(), self.adapter, self.embeddings, 0)

        self.assertEqual(self.adapter.released, [self.store])

    def test_metadata_excluded(self):
        results = handle_load_operation(
            self._context(includeDocumentMetadata=False), self.adapter, self.embeddings, 0
        )

        self.assertNotIn("metadata", results[0].json["document"])

    def test_search_event(self):
        context = self._context()
        handle_load_operation(context, self.adapter, self.embeddings, 0)

        self.assertIn(("ai-vector-store-searched", {"query": "revenue"}), context.ai_events)

    def test_reranked_results(self):
        reranker = FakeReranker([0.2, 0.8])
        context = make_context(
            parameters={"prompt": "revenue", "topK": 2, "useReranker": True},
            items=make_items({"id": 1}),
            connections={NodeConnectionType.AI_RERANKER: [reranker]},
        )

        results = handle_load_operation(context, self.adapter, self.embeddings, 0)

        self.assertEqual([r.json["document"]["pageContent"] for r in results], ["Costs were flat", "Revenue grew 10%"])
        self.assertEqual([r.json["score"] for r in results], [0.8, 0.2])
        self.assertNotIn("relevance_score", results[1].json["document"]["metadata"])
        self.assertEqual(reranker.calls[0][1], "revenue")

    def test_reranker_missing(self):
        with self.assertRaises(ConfigurationError):
            handle_load_operation(self._context(useReranker=True), self.adapter, self.embeddings, 0)

        self.assertEqual(len(self.adapter.released), 1)

    def test_empty_results_skip_reranker(self):
        adapter = FakeAdapter(FakeStore([]))
        results = handle_load_operation(self._context(useReranker=True), adapter, self.embeddings, 0)

        self.assertEqual(results, [])

    def test_invalid_limit(self):
        with self.assertRaises(ValidationError):
            handle_load_operation(self._context(topK=0), self.adapter, self.embeddings, 0)

        self.assertEqual(len(self.adapter.released), 1)

    def test_missing_prompt(self):
        context = make_context(parameters={"topK": 2}, items=make_items({"id": 1}))

        with self.assertRaises(ValidationError):
            handle_load_operation(context, self.adapter, self.embeddings, 0)


if __name__ == "__main__":
    unittest.main()
