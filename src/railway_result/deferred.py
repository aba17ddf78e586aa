"""
Asynchronous bridge — the Result combinators lifted over awaitables.

A DeferredResult wraps anything that can be awaited and yields a Result:
a coroutine, an asyncio.Task or Future, an anyio/trio awaitable. Only the
`await` protocol is used, so no event loop is assumed here.

Chains may mix synchronous and asynchronous steps freely:

    message = await (
        lift(fetch_number())                                  # Awaitable[int]
        .bind_combine(get_string, lambda num, s: (num, s))    # sync selector
        .bind_combine(lambda p: save(*p), lambda _, m: m)     # async selector
        .map_error(str)
    )

Ordering: each combinator awaits its receiver to completion before running
its own callback, so step N+1 never starts before step N has finished and a
failure stops everything after it, exactly as in the synchronous chain.
Cancellation or errors raised by the awaitable itself are not Result states;
they propagate to whoever awaits the chain.
"""

from __future__ import annotations

import inspect
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    TypeVar,
)

from railway_result.result import Failure, Result, Success

if TYPE_CHECKING:
    from railway_result.execution import AsyncExecutionContext

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
R = TypeVar("R")


class DeferredResult(Generic[T, E]):
    """
    An awaitable that will yield Result[T, E].

    Combinators return new DeferredResults without awaiting anything; the
    work happens when the outermost one is awaited. The outcome is memoized,
    so awaiting the same DeferredResult again returns the same Result
    without touching the source a second time.

    The source itself runs once, under the first await. An unresolved
    DeferredResult shared by two tasks awaited together (for example two
    children of one parent under asyncio.gather) is not supported: the
    second await raises RuntimeError. Await the shared parent first, then
    build the children from it.
    """

    __slots__ = ("_source", "_outcome")

    def __init__(self, source: Awaitable[Result[T, E]]) -> None:
        self._source: Awaitable[Result[T, E]] | None = source
        self._outcome: Result[T, E] | None = None

    @classmethod
    def completed(cls, result: Result[T, E]) -> DeferredResult[T, E]:
        """A DeferredResult whose outcome is already known; awaiting it never suspends."""
        deferred = cls.__new__(cls)
        deferred._source = None
        deferred._outcome = _require_result(result, "completed()")
        return deferred

    def __await__(self) -> Generator[Any, None, Result[T, E]]:
        return self._resolve().__await__()

    def __repr__(self) -> str:
        if self._outcome is None:
            return "DeferredResult(<pending>)"
        return f"DeferredResult({self._outcome!r})"

    async def _resolve(self) -> Result[T, E]:
        if self._outcome is None:
            source, self._source = self._source, None
            if source is None:
                raise RuntimeError("DeferredResult source was already consumed by another await")
            self._outcome = _require_result(await source, "awaited source")
        return self._outcome

    async def _then(self, step: Callable[[Result[T, E]], Result[U, F]]) -> Result[U, F]:
        return step(await self)

    # ──────────────────────── Transformations ────────────────────────

    def map_ok(self, mapper: Callable[[T], U]) -> DeferredResult[U, E]:
        """Await, then Result.map_ok. The mapper itself must not suspend."""
        return DeferredResult(self._then(lambda r: r.map_ok(mapper)))

    def map_error(self, mapper: Callable[[E], F]) -> DeferredResult[T, F]:
        """Await, then Result.map_error."""
        return DeferredResult(self._then(lambda r: r.map_error(mapper)))

    def bind_combine(
        self,
        selector: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]],
        combine: Callable[[T, U], R],
    ) -> DeferredResult[R, E]:
        """
        Await, then chain the next step.

        The selector may return a Result or an awaitable of one; either way
        it is only called after the receiver has completed successfully.
        """
        return DeferredResult(_bind_combine(self, selector, combine))

    def bind(
        self,
        selector: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]],
    ) -> DeferredResult[U, E]:
        """bind_combine keeping only the new value."""
        return self.bind_combine(selector, lambda _, out: out)

    # ──────────────────────── Side Effects ────────────────────────

    def inspect(self, action: Callable[[T], Any]) -> DeferredResult[T, E]:
        """Await, run the action on success, yield the same Result."""
        return DeferredResult(self._then(lambda r: r.inspect(action)))

    def inspect_error(self, action: Callable[[E], Any]) -> DeferredResult[T, E]:
        """Await, run the action on failure, yield the same Result."""
        return DeferredResult(self._then(lambda r: r.inspect_error(action)))

    # ──────────────────────── Terminal Operations ────────────────────────

    async def reduce(self, on_ok: Callable[[T], R], on_error: Callable[[E], R]) -> R:
        return (await self).reduce(on_ok, on_error)

    async def inspect_either(
        self,
        on_ok: Callable[[T], Any],
        on_error: Callable[[E], Any],
    ) -> None:
        (await self).inspect_either(on_ok, on_error)

    async def collapse(self) -> Any:
        return (await self).collapse()

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: AsyncExecutionContext) -> DeferredResult[T, E]:
        """
        Run the chain inside an execution context exposing execute_async().

            await deferred.within(LoggingExecutionContext(operation="Sync"))
        """
        return DeferredResult(execution_context.execute_async(lambda: self))


async def _bind_combine(
    source: DeferredResult[T, E],
    selector: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]],
    combine: Callable[[T, U], R],
) -> Result[R, E]:
    outcome = await source
    match outcome:
        case Success(v):
            step = await settle(selector(v))
            return step.map_ok(lambda out: combine(v, out))
        case Failure(err):
            return Failure(err)
    raise TypeError("unreachable")  # pragma: no cover


async def settle(
    step: Result[T, E] | Awaitable[Result[T, E]],
    origin: str = "selector",
) -> Result[T, E]:
    """Await the step if it is awaitable and check that it produced a Result."""
    if inspect.isawaitable(step):
        step = await step
    return _require_result(step, origin)


def _require_result(value: Any, origin: str) -> Result[Any, Any]:
    if not isinstance(value, Result):
        raise TypeError(f"Expected a Result from {origin}, got {type(value).__name__}")
    return value


async def _succeed_after(source: Awaitable[T]) -> Result[T, Any]:
    return Success(await source)


def lift(source: Awaitable[T]) -> DeferredResult[T, Any]:
    """
    Wrap an awaitable plain value as an always-succeeding DeferredResult.

    Used to splice a non-Result asynchronous step into a chain:

        await lift(client.get_user(uid)).bind(validate_user)
    """
    return DeferredResult(_succeed_after(source))


def from_result(result: Result[T, E]) -> DeferredResult[T, E]:
    """An already-completed DeferredResult holding the given Result."""
    return DeferredResult.completed(result)
