"""
Tests for the logging proxy around vector stores and tools.
"""

import asyncio
import unittest

from langchain_core.tools import BaseTool, Tool
from langchain_core.vectorstores import InMemoryVectorStore, VectorStore, VectorStoreRetriever

from langchain_hana_nodes.log_wrapper import (
    LoggingProxy,
    create_tool_logger,
    create_vector_store_logger,
    log_wrapper,
    with_performance_logging,
)
from langchain_hana_nodes.types import NodeConnectionType

from tests.unit_tests.fakes import FakeEmbeddings, make_context


class Target:
    """Object with sync, async and failing methods."""

    label = "target"

    def __init__(self):
        self.calls = []

    def search(self, query, k=4):
        self.calls.append((query, k))
        return [query] * k

    def fail(self):
        raise KeyError("missing")

    async def search_async(self, query):
        return query.upper()

    async def fail_async(self):
        raise RuntimeError("async failure")


class TestLoggingProxy(unittest.TestCase):
    """Tests for transparent forwarding."""

    def setUp(self):
        self.context = make_context(name="Docs Store")
        self.target = Target()
        self.proxy = log_wrapper(self.target, self.context)

    def test_attributes_pass_through(self):
        self.assertEqual(self.proxy.label, "target")
        self.assertIs(self.proxy.calls, self.target.calls)

    def test_method_results_and_arguments_pass_through(self):
        self.assertEqual(self.proxy.search("q", k=2), ["q", "q"])
        self.assertEqual(self.target.calls, [("q", 2)])

    def test_errors_are_reraised_unchanged(self):
        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="ERROR") as logs:
            with self.assertRaises(KeyError):
                self.proxy.fail()

        self.assertIn("[Vector Store] Docs Store Error in fail", logs.output[0])

    def test_async_results_pass_through(self):
        self.assertEqual(asyncio.run(self.proxy.search_async("q")), "Q")

    def test_async_errors_are_reraised(self):
        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="ERROR"):
            with self.assertRaises(RuntimeError):
                asyncio.run(self.proxy.fail_async())

    def test_attribute_writes_reach_target(self):
        self.proxy.label = "changed"

        self.assertEqual(self.target.label, "changed")

    def test_wrapped_target(self):
        self.assertIsInstance(self.proxy, LoggingProxy)
        self.assertIs(self.proxy.__wrapped__, self.target)

    def test_reports_target_type(self):
        self.assertIsInstance(self.proxy, Target)
        self.assertIs(self.proxy.__class__, Target)

    def test_wrapped_vector_store_accepted_by_retriever(self):
        proxy = create_vector_store_logger(InMemoryVectorStore(FakeEmbeddings()), self.context)

        retriever = VectorStoreRetriever(vectorstore=proxy)

        self.assertIsInstance(proxy, VectorStore)
        self.assertIs(retriever.vectorstore, proxy)

    def test_method_call_logging(self):
        proxy = log_wrapper(self.target, self.context, log_method_calls=True)

        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="DEBUG") as logs:
            proxy.search("q", k=1)

        self.assertIn("Calling method: search", logs.output[0])

    def test_errors_not_logged_when_disabled(self):
        proxy = log_wrapper(self.target, self.context, log_errors=False)

        with self.assertRaises(KeyError):
            proxy.fail()

    def test_vector_store_logger(self):
        proxy = create_vector_store_logger(self.target, self.context)

        self.assertIs(proxy.__wrapped__, self.target)
        self.assertEqual(proxy.search("q", 1), ["q"])


class TestToolTracing(unittest.TestCase):
    """Tests for tracing tool invocations on the context."""

    def setUp(self):
        self.context = make_context(name="Knowledge Base")

    def test_invoke_is_traced(self):
        tool = Tool(name="knowledge_base", description="Search", func=lambda query: f"answer to {query}")
        proxy = create_tool_logger(tool, self.context)

        response = proxy.invoke("revenue")

        self.assertEqual(response, "answer to revenue")
        self.assertEqual(self.context.input_traces, [(NodeConnectionType.AI_TOOL, [{"json": {"query": "revenue"}}])])
        self.assertEqual(
            self.context.output_traces,
            [(NodeConnectionType.AI_TOOL, 0, [{"json": {"response": "answer to revenue"}}])],
        )
        self.assertEqual(self.context.ai_events[0][0], "ai-tool-called")
        self.assertEqual(self.context.ai_events[0][1]["tool"], "knowledge_base")

    def test_failed_invoke_is_traced_and_reraised(self):
        def failing(query):
            raise ValueError("search failed")

        proxy = create_tool_logger(Tool(name="kb", description="Search", func=failing), self.context)

        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="ERROR"):
            with self.assertRaises(ValueError):
                proxy.invoke("q")

        self.assertEqual(
            self.context.output_traces,
            [(NodeConnectionType.AI_TOOL, 0, [{"json": {"error": "search failed", "tool": "kb"}}])],
        )
        self.assertEqual(self.context.ai_events, [])

    def test_tool_attributes_pass_through(self):
        proxy = create_tool_logger(Tool(name="kb", description="Search docs", func=str), self.context)

        self.assertEqual(proxy.name, "kb")
        self.assertEqual(proxy.description, "Search docs")
        self.assertIsInstance(proxy, BaseTool)

    def test_ainvoke_is_traced(self):
        tool = Tool(name="knowledge_base", description="Search", func=lambda query: f"answer to {query}")
        proxy = create_tool_logger(tool, self.context)

        response = asyncio.run(proxy.ainvoke("costs"))

        self.assertEqual(response, "answer to costs")
        self.assertEqual(self.context.input_traces, [(NodeConnectionType.AI_TOOL, [{"json": {"query": "costs"}}])])
        self.assertEqual(
            self.context.output_traces,
            [(NodeConnectionType.AI_TOOL, 0, [{"json": {"response": "answer to costs"}}])],
        )
        self.assertEqual([event[0] for event in self.context.ai_events], ["ai-tool-called"])

    def test_failed_ainvoke_is_traced_and_reraised(self):
        def failing(query):
            raise ValueError("search failed")

        proxy = create_tool_logger(Tool(name="kb", description="Search", func=failing), self.context)

        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="ERROR") as logs:
            with self.assertRaises(ValueError):
                asyncio.run(proxy.ainvoke("q"))

        self.assertIn("Error in ainvoke", logs.output[0])
        self.assertEqual(
            self.context.output_traces,
            [(NodeConnectionType.AI_TOOL, 0, [{"json": {"error": "search failed", "tool": "kb"}}])],
        )
        self.assertEqual(self.context.ai_events, [])


class TestPerformanceLogging(unittest.TestCase):
    """Tests for duration logging."""

    def test_duration_is_logged(self):
        context = make_context(name="Store")
        wrapped = with_performance_logging(lambda x: x * 2, context, "populate vector store")

        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="INFO") as logs:
            self.assertEqual(wrapped(21), 42)

        self.assertIn("[Performance] Store - populate vector store", logs.output[0])

    def test_failure_is_logged_and_reraised(self):
        def failing():
            raise RuntimeError("populate failed")

        wrapped = with_performance_logging(failing, make_context(), "populate vector store")

        with self.assertLogs("langchain_hana_nodes.log_wrapper", level="INFO") as logs:
            with self.assertRaises(RuntimeError):
                wrapped()

        self.assertIn("(failed)", logs.output[0])


if __name__ == "__main__":
    unittest.main()
