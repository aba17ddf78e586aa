"""
Execution contexts — separate WHAT (pure logic) from HOW it is run.

Pure functions describe WHAT should happen and return Result[T, E]. An
execution context wraps the evaluation of such a chain with an ambient
concern (logging, timing, a unit of work) without the steps knowing:

    def pipeline(cmd: CreateOrder) -> Result[Order, FailureDescription]:
        return (
            succeed(cmd)
            .bind(validate)
            .bind(price)
        )

    result = pipeline(cmd).within(LoggingExecutionContext(operation="CreateOrder"))

    # Or as a decorator
    @with_context(LoggingExecutionContext(operation="CreateOrder"))
    def handle(cmd: CreateOrder) -> Result[Order, FailureDescription]:
        return pipeline(cmd)

Contexts never turn exceptions into failures: an exception raised while the
chain runs is logged (where the context logs) and re-raised.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Awaitable, Callable, ParamSpec, Protocol, TypeVar, runtime_checkable

import structlog

from railway_result.config import RailwaySettings
from railway_result.result import Result

T = TypeVar("T")
E = TypeVar("E")
P = ParamSpec("P")

log = structlog.get_logger("railway_result.execution")


# ──────────────────────── Protocols (Interfaces) ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Anything with execute(computation) is an execution context — structural
    typing, no inheritance needed.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        """Execute a Result-returning computation within this context."""
        ...


@runtime_checkable
class AsyncExecutionContext(Protocol):
    """Execution context for chains built from DeferredResult."""

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        """Await a deferred computation within this context."""
        ...


# ──────────────────────── NoOp (Testing) ────────────────────────


class NoOpExecutionContext:
    """
    Passthrough execution context — runs the computation as-is.

    Use for unit tests and for code paths that need a context argument
    but no behaviour around it.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        return computation()

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        return await computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Execution context that logs start, completion, duration and final track.

    Wraps another context (decorator pattern), so it composes with any
    other behaviour:

        ctx = LoggingExecutionContext(unit_of_work, operation="CreateOrder")

    Events: execution.started, execution.completed (state=SUCCESS|FAILURE),
    execution.raised (logged with the exception, which is then re-raised).
    execute_async() delegates to the inner context's execute_async() and
    raises TypeError when the inner context only has execute().
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: int = logging.INFO,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = log_level

    @classmethod
    def from_settings(
        cls,
        settings: RailwaySettings,
        operation: str = "unknown",
        inner: ExecutionContext | None = None,
    ) -> LoggingExecutionContext:
        """Build a context logging at settings.execution_log_level."""
        return cls(inner=inner, operation=operation, log_level=settings.execution_level())

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        log.log(self._log_level, "execution.started", operation=self._operation)
        start = time.monotonic()
        try:
            result = self._inner.execute(computation)
        except Exception:
            self._log_raised(start)
            raise
        self._log_completed(start, result)
        return result

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        inner = _require_async(self._inner)
        log.log(self._log_level, "execution.started", operation=self._operation)
        start = time.monotonic()
        try:
            result = await inner.execute_async(computation)
        except Exception:
            self._log_raised(start)
            raise
        self._log_completed(start, result)
        return result

    def _log_completed(self, start: float, result: Result[Any, Any]) -> None:
        log.log(
            self._log_level,
            "execution.completed",
            operation=self._operation,
            elapsed_seconds=round(time.monotonic() - start, 3),
            state="SUCCESS" if result.is_success() else "FAILURE",
        )

    def _log_raised(self, start: float) -> None:
        log.exception(
            "execution.raised",
            operation=self._operation,
            elapsed_seconds=round(time.monotonic() - start, 3),
        )


# ──────────────────────── Composable ────────────────────────


class ComposableExecutionContext:
    """
    Compose multiple execution contexts into a single one.

    The first context is the outermost:

        composed = ComposableExecutionContext(
            LoggingExecutionContext(operation="CreateOrder"),
            UnitOfWorkContext(session),
        )
        # Logging wraps UnitOfWork wraps computation

    execute_async() nests the same way and needs every context to provide
    execute_async().
    """

    def __init__(self, *contexts: ExecutionContext) -> None:
        if not contexts:
            raise ValueError("At least one execution context is required")
        self._contexts = list(contexts)

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        # Build the onion: innermost context wraps the computation first
        wrapped = computation
        for ctx in reversed(self._contexts):
            wrapped = functools.partial(ctx.execute, wrapped)
        return wrapped()

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        # Same onion; every layer must be able to await
        wrapped = computation
        for ctx in reversed(self._contexts):
            wrapped = functools.partial(_require_async(ctx).execute_async, wrapped)
        return await wrapped()


def _require_async(ctx: Any) -> AsyncExecutionContext:
    if not isinstance(ctx, AsyncExecutionContext):
        raise TypeError(
            f"{type(ctx).__name__} has no execute_async() and cannot run a DeferredResult chain"
        )
    return ctx


# ──────────────────────── Decorator Helper ────────────────────────


def with_context(
    ctx: ExecutionContext,
) -> Callable[[Callable[P, Result[T, E]]], Callable[P, Result[T, E]]]:
    """
    Decorator running a Result-returning function inside an execution context.

        @with_context(ctx)
        def handle(cmd: CreateOrder) -> Result[Order, FailureDescription]:
            return succeed(cmd).bind(validate).bind(price)

    Equivalent to:
        def handle(cmd):
            return pipeline(cmd).within(ctx)
    """

    def decorator(fn: Callable[P, Result[T, E]]) -> Callable[P, Result[T, E]]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
            return ctx.execute(lambda: fn(*args, **kwargs))

        return wrapper

    return decorator
