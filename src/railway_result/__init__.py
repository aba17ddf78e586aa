"""
Railway-Oriented Programming (ROP) Result for Python.

Explicit, composable error handling for synchronous and asynchronous
steps — no exceptions in business logic.

    from railway_result import Result, fail, succeed

    def get_number() -> Result[int, str]:
        return succeed(42)

    def get_string(number: int) -> Result[str, str]:
        return succeed("Forty-two")

    message = (
        get_number()
        .bind_combine(get_string, lambda num, words: f"{num} {words}")
        .collapse()
    )  # "42 Forty-two"
"""

from railway_result.result import Result, Success, Failure, succeed, fail
from railway_result.deferred import DeferredResult, lift, from_result
from railway_result.query import query, query_async
from railway_result.failure import ErrorCode, FailureDescription
from railway_result.result_failures import ResultFailures
from railway_result.execution import (
    ExecutionContext,
    AsyncExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
    ComposableExecutionContext,
    with_context,
)
from railway_result.assertions import ResultAssertions
from railway_result.config import RailwaySettings
from railway_result.logging_setup import configure_structlog, configure_from_settings

__all__ = [
    "Result",
    "Success",
    "Failure",
    "succeed",
    "fail",
    "DeferredResult",
    "lift",
    "from_result",
    "query",
    "query_async",
    "ErrorCode",
    "FailureDescription",
    "ResultFailures",
    "ExecutionContext",
    "AsyncExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ComposableExecutionContext",
    "with_context",
    "ResultAssertions",
    "RailwaySettings",
    "configure_structlog",
    "configure_from_settings",
]

__version__ = "1.0.0"
