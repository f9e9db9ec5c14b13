"""
Logging wrapper for vector stores and tools handed to AI nodes.

LoggingProxy forwards every attribute of the wrapped object. Method calls go
through a thin shim that logs them and their failures, and LangChain tool
invocations are additionally traced on the execution context so the host
can show the tool's input and output. Return values, arguments and raised
errors are never changed.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Generic, Optional, TypeVar

from langchain_core.tools import BaseTool

from langchain_hana_nodes.config import get_settings
from langchain_hana_nodes.context import ExecutionContext
from langchain_hana_nodes.helpers import log_ai_event
from langchain_hana_nodes.types import NodeConnectionType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoggingProxy(Generic[T]):
    """
    Transparent wrapper adding logging to every method of ``target``.

    Args:
        target: The object to wrap
        context: Execution context of the node that owns the object
        log_method_calls: Log each method call at debug level
        log_errors: Log errors raised by wrapped methods before re-raising
        prefix: Prefix of the log lines
    """

    def __init__(
        self,
        target: T,
        context: ExecutionContext,
        log_method_calls: bool = False,
        log_errors: bool = True,
        prefix: str = "[Vector Store]",
    ):
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_log_method_calls", log_method_calls)
        object.__setattr__(self, "_log_errors", log_errors)
        object.__setattr__(self, "_log_prefix", f"{prefix} {context.get_node().name}")
        object.__setattr__(self, "_is_tool", isinstance(target, BaseTool))

    @property
    def __wrapped__(self) -> T:
        return self._target

    # isinstance() checks of LangChain consumers see the wrapped type
    @property
    def __class__(self) -> type:
        return type(self._target)

    def __getattr__(self, name: str) -> Any:
        value = getattr(self._target, name)
        if not inspect.isroutine(value):
            return value

        if self._is_tool and name == "invoke":
            return self._traced_tool_invoke(value)
        if self._is_tool and name == "ainvoke":
            return self._traced_tool_ainvoke(value)
        return self._logged_method(name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._target, name, value)

    def __repr__(self) -> str:
        return f"LoggingProxy({self._target!r})"

    def _log_error(self, method_name: str, error: BaseException) -> None:
        if self._log_errors:
            logger.error(f"{self._log_prefix} Error in {method_name}: {error}")

    def _logged_method(self, method_name: str, method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(*args, **kwargs):
            if self._log_method_calls:
                logger.debug(f"{self._log_prefix} Calling method: {method_name}")

            try:
                result = method(*args, **kwargs)
            except Exception as e:
                self._log_error(method_name, e)
                raise

            if inspect.isawaitable(result):
                return self._logged_awaitable(method_name, result)
            return result

        return wrapper

    async def _logged_awaitable(self, method_name: str, awaitable: Any) -> Any:
        try:
            return await awaitable
        except Exception as e:
            self._log_error(method_name, e)
            raise

    def _trace_tool_input(self, input: Any) -> int:
        return self._context.add_input_data(NodeConnectionType.AI_TOOL, [{"json": {"query": input}}])

    def _trace_tool_response(self, index: int, input: Any, response: Any) -> None:
        tool_name = self._target.name
        log_ai_event(self._context, "ai-tool-called", {"tool": tool_name, "query": input, "response": response})
        self._context.add_output_data(NodeConnectionType.AI_TOOL, index, [{"json": {"response": response}}])

    def _trace_tool_error(self, method_name: str, index: int, error: Exception) -> None:
        self._context.add_output_data(
            NodeConnectionType.AI_TOOL,
            index,
            [{"json": {"error": str(error), "tool": self._target.name}}],
        )
        self._log_error(method_name, error)

    def _traced_tool_invoke(self, invoke: Callable) -> Callable:
        @functools.wraps(invoke)
        def traced_invoke(input: Any, *args, **kwargs):
            index = self._trace_tool_input(input)
            try:
                response = invoke(input, *args, **kwargs)
            except Exception as e:
                self._trace_tool_error("invoke", index, e)
                raise

            self._trace_tool_response(index, input, response)
            return response

        return traced_invoke

    def _traced_tool_ainvoke(self, ainvoke: Callable) -> Callable:
        @functools.wraps(ainvoke)
        async def traced_ainvoke(input: Any, *args, **kwargs):
            index = self._trace_tool_input(input)
            try:
                response = await ainvoke(input, *args, **kwargs)
            except Exception as e:
                self._trace_tool_error("ainvoke", index, e)
                raise

            self._trace_tool_response(index, input, response)
            return response

        return traced_ainvoke


def log_wrapper(
    target: T,
    context: ExecutionContext,
    log_method_calls: bool = False,
    log_errors: bool = True,
    prefix: str = "[Vector Store]",
) -> T:
    """Wrap an object with logging for monitoring and debugging."""
    return LoggingProxy(
        target,
        context,
        log_method_calls=log_method_calls,
        log_errors=log_errors,
        prefix=prefix,
    )  # type: ignore[return-value]


def create_vector_store_logger(vector_store: T, context: ExecutionContext) -> T:
    return log_wrapper(
        vector_store,
        context,
        log_method_calls=get_settings().log_method_calls,
        prefix="[Vector Store]",
    )


def create_tool_logger(tool: T, context: ExecutionContext) -> T:
    return log_wrapper(
        tool,
        context,
        log_method_calls=get_settings().log_method_calls,
        prefix="[AI Tool]",
    )


def with_performance_logging(
    fn: Callable[..., Any],
    context: ExecutionContext,
    operation_name: str,
) -> Callable[..., Any]:
    """Wrap a function so its duration is logged, also when it fails."""
    node_name = context.get_node().name

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = fn(*args, **kwargs)
        except Exception:
            duration = (time.perf_counter() - start_time) * 1000
            logger.info(f"[Performance] {node_name} - {operation_name} (failed): {duration:.0f}ms")
            raise

        duration = (time.perf_counter() - start_time) * 1000
        logger.info(f"[Performance] {node_name} - {operation_name}: {duration:.0f}ms")
        return result

    return wrapper
